"""
Unit tests for the reqline service layer.
"""

import httpx
import pytest

from reqline.core.service import extract_reqline, process_reqline
from reqline.exceptions import ReqlineNetworkError, ReqlineValidationError


class TestExtractReqline:
    """Test payload validation."""

    def test_valid_payload(self):
        assert extract_reqline({"reqline": "HTTP GET | URL https://a.example"}) == "HTTP GET | URL https://a.example"

    @pytest.mark.parametrize("payload", [
        {},
        {"reqline": ""},
        {"reqline": None},
        {"reqline": 12},
        {"statement": "HTTP GET | URL https://a.example"},
        "HTTP GET | URL https://a.example",
        None,
    ])
    def test_invalid_payload(self, payload):
        with pytest.raises(ReqlineValidationError) as exc_info:
            extract_reqline(payload)

        assert exc_info.value.message == "Missing or invalid reqline parameter"
        assert exc_info.value.code == "MISSING_REQLINE_PARAMETER"


class TestProcessReqline:
    """Test parse-then-execute with exceptions."""

    @pytest.mark.asyncio
    async def test_success(self, make_executor):
        executor = make_executor(lambda request: httpx.Response(200, json={"ok": True}))

        result = await process_reqline(
            {"reqline": 'HTTP GET | URL https://api.example.com | QUERY {"a": 1}'},
            executor,
        )

        assert result["request"]["full_url"] == "https://api.example.com?a=1"
        assert result["response"]["http_status"] == 200
        assert result["response"]["response_data"] == {"ok": True}

    @pytest.mark.asyncio
    async def test_parse_error_raises_validation_error(self, make_executor):
        calls = []
        executor = make_executor(lambda request: calls.append(request) or httpx.Response(200))

        with pytest.raises(ReqlineValidationError) as exc_info:
            await process_reqline({"reqline": "HTTP get | URL https://api.example.com"}, executor)

        assert exc_info.value.message == "HTTP method must be uppercase"
        assert exc_info.value.code == "HTTP_METHOD_MUST_BE_UPPERCASE"
        assert calls == []

    @pytest.mark.asyncio
    async def test_network_error_raises(self, make_executor):
        def handler(request):
            raise httpx.ConnectError("refused", request=request)

        with pytest.raises(ReqlineNetworkError) as exc_info:
            await process_reqline(
                {"reqline": "HTTP GET | URL https://api.example.com"},
                make_executor(handler),
            )

        assert exc_info.value.message == "No response received from server"
        assert exc_info.value.code == "NO_RESPONSE_RECEIVED"

    @pytest.mark.asyncio
    async def test_upstream_error_status_is_not_raised(self, make_executor):
        executor = make_executor(lambda request: httpx.Response(500, text="boom"))

        result = await process_reqline({"reqline": "HTTP GET | URL https://api.example.com"}, executor)

        assert result["response"]["http_status"] == 500
        assert result["response"]["response_data"] == "boom"

    @pytest.mark.asyncio
    async def test_missing_reqline(self):
        with pytest.raises(ReqlineValidationError):
            await process_reqline({})
