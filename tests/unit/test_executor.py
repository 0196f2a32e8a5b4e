"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
Reqline, a product of Garudex Labs

Unit tests for the request executor.

Tests the RequestExecutor functionality:
- Final URL and request construction
- Upstream statuses surfaced as data
- Transport failures mapped to network errors
"""

import asyncio
import json
import time

import httpx
import pytest

from reqline.config.settings import ExecutorConfig
from reqline.core.executor import RequestExecutor, decode_response_data
from reqline.core.messages import NetworkErrorCode
from reqline.core.models import ExecutionResult, HttpMethod, NetworkError, RequestDescriptor
from reqline.core.parser import parse_reqline


def get_descriptor(**overrides) -> RequestDescriptor:
    fields = {"method": HttpMethod.GET, "url": "https://api.example.com"}
    fields.update(overrides)
    return RequestDescriptor(**fields)


class TestRequestExecutorConfiguration:
    """Test executor settings."""

    def test_default_timeout_is_ten_seconds(self):
        executor = RequestExecutor()
        assert executor.config.request_timeout_ms == 10_000
        assert executor.timeout_seconds == 10.0

    def test_client_uses_configured_timeout(self):
        executor = RequestExecutor(ExecutorConfig(request_timeout_ms=2500))
        client = executor._client()
        assert client.timeout.read == 2.5
        assert client.timeout.connect == 2.5


class TestRequestExecutorSuccess:
    """Test requests that receive a response."""

    @pytest.mark.asyncio
    async def test_get_with_query(self, make_executor, echo_handler):
        """Test the query section is merged into the final URL."""
        executor = make_executor(echo_handler)

        result = await executor.execute(get_descriptor(query={"a": 1}))

        assert isinstance(result, ExecutionResult)
        assert result.full_url == "https://api.example.com?a=1"
        assert result.http_status == 200
        assert result.response_data["method"] == "GET"

    @pytest.mark.asyncio
    async def test_timing_metadata(self, make_executor, echo_handler):
        executor = make_executor(echo_handler)

        result = await executor.execute(get_descriptor())

        assert isinstance(result.request_start_timestamp, int)
        assert isinstance(result.request_stop_timestamp, int)
        assert result.request_stop_timestamp >= result.request_start_timestamp
        assert result.duration == result.request_stop_timestamp - result.request_start_timestamp

    @pytest.mark.asyncio
    async def test_post_sends_json_body(self, make_executor):
        captured = {}

        def handler(request: httpx.Request) -> httpx.Response:
            captured["method"] = request.method
            captured["content_type"] = request.headers.get("content-type")
            captured["body"] = json.loads(request.content)
            return httpx.Response(201, json={"id": 7})

        executor = make_executor(handler)
        result = await executor.execute(
            get_descriptor(method=HttpMethod.POST, body={"name": "ada"})
        )

        assert captured == {
            "method": "POST",
            "content_type": "application/json",
            "body": {"name": "ada"},
        }
        assert result.http_status == 201
        assert result.response_data == {"id": 7}
        assert result.body == {"name": "ada"}

    @pytest.mark.asyncio
    async def test_get_never_sends_body(self, make_executor):
        captured = {}

        def handler(request: httpx.Request) -> httpx.Response:
            captured["content"] = request.content
            return httpx.Response(200)

        executor = make_executor(handler)
        await executor.execute(get_descriptor(body={"ignored": True}))

        assert captured["content"] == b""

    @pytest.mark.asyncio
    async def test_post_with_empty_body_sends_nothing(self, make_executor):
        captured = {}

        def handler(request: httpx.Request) -> httpx.Response:
            captured["content"] = request.content
            return httpx.Response(204)

        executor = make_executor(handler)
        result = await executor.execute(get_descriptor(method=HttpMethod.POST))

        assert captured["content"] == b""
        assert result.http_status == 204
        assert result.response_data == ""

    @pytest.mark.asyncio
    async def test_headers_forwarded(self, make_executor):
        captured = {}

        def handler(request: httpx.Request) -> httpx.Response:
            captured.update(request.headers)
            return httpx.Response(200)

        executor = make_executor(handler)
        result = await executor.execute(
            get_descriptor(headers={"Authorization": "Bearer t", "X-Retries": 3})
        )

        assert captured["authorization"] == "Bearer t"
        assert captured["x-retries"] == "3"
        # The echo keeps the values as parsed.
        assert result.headers == {"Authorization": "Bearer t", "X-Retries": 3}

    @pytest.mark.asyncio
    async def test_not_found_is_data(self, make_executor):
        """Test a 404 from the target is a result, not an error."""
        executor = make_executor(lambda request: httpx.Response(404, json={"error": "missing"}))

        result = await executor.execute(get_descriptor())

        assert isinstance(result, ExecutionResult)
        assert result.http_status == 404
        assert result.response_data == {"error": "missing"}

    @pytest.mark.asyncio
    async def test_server_error_with_text_body(self, make_executor):
        executor = make_executor(lambda request: httpx.Response(503, text="unavailable"))

        result = await executor.execute(get_descriptor())

        assert result.http_status == 503
        assert result.response_data == "unavailable"

    @pytest.mark.asyncio
    async def test_result_to_dict(self, make_executor):
        executor = make_executor(lambda request: httpx.Response(200, json=[1, 2]))

        result = (await executor.execute(get_descriptor(query={"q": "x"}))).to_dict()

        assert result["request"] == {
            "query": {"q": "x"},
            "body": {},
            "headers": {},
            "full_url": "https://api.example.com?q=x",
        }
        assert result["response"]["http_status"] == 200
        assert result["response"]["response_data"] == [1, 2]
        assert set(result["response"]) == {
            "http_status",
            "duration",
            "request_start_timestamp",
            "request_stop_timestamp",
            "response_data",
        }


class TestRequestExecutorFailures:
    """Test requests that receive no response."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("exc_class", [
        httpx.ConnectError,
        httpx.ConnectTimeout,
        httpx.ReadTimeout,
        httpx.RemoteProtocolError,
    ])
    async def test_no_response_received(self, make_executor, exc_class):
        def handler(request: httpx.Request) -> httpx.Response:
            raise exc_class("no response", request=request)

        executor = make_executor(handler)
        result = await executor.execute(get_descriptor())

        assert isinstance(result, NetworkError)
        assert result.code == NetworkErrorCode.NO_RESPONSE_RECEIVED
        assert result.to_dict() == {"error": True, "message": "No response received from server"}

    @pytest.mark.asyncio
    async def test_unsupported_protocol_is_setup_error(self, make_executor):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.UnsupportedProtocol("bad scheme", request=request)

        executor = make_executor(handler)
        result = await executor.execute(get_descriptor())

        assert isinstance(result, NetworkError)
        assert result.code == NetworkErrorCode.REQUEST_SETUP_ERROR
        assert result.message == "Request setup error"

    @pytest.mark.asyncio
    async def test_unencodable_header_is_setup_error(self, make_executor, echo_handler):
        """Test a request that cannot be built never reaches the transport."""
        calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            return echo_handler(request)

        executor = make_executor(handler)
        result = await executor.execute(get_descriptor(headers={"X-Name": "café"}))

        assert isinstance(result, NetworkError)
        assert result.code == NetworkErrorCode.REQUEST_SETUP_ERROR
        assert calls == []

    @pytest.mark.asyncio
    async def test_malformed_url_with_query_is_setup_error(self, make_executor, echo_handler):
        """Test a URL that cannot be split is reported instead of raised."""
        descriptor = parse_reqline('HTTP GET | URL http://[::1 | QUERY {"a": 1}')
        assert isinstance(descriptor, RequestDescriptor)

        executor = make_executor(echo_handler)
        result = await executor.execute(descriptor)

        assert isinstance(result, NetworkError)
        assert result.code == NetworkErrorCode.REQUEST_SETUP_ERROR
        assert result.message == "Request setup error"


class TestRequestExecutorDeadline:
    """Test the timeout bounds the whole call, not each transport step."""

    @pytest.mark.asyncio
    async def test_slow_body_stream_times_out(self, make_executor):
        """Test a target that keeps trickling bytes is cut off at the deadline."""
        async def trickle():
            for _ in range(10):
                await asyncio.sleep(0.2)
                yield b"x"

        async def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, content=trickle())

        executor = make_executor(handler, request_timeout_ms=300)
        started = time.monotonic()
        result = await executor.execute(get_descriptor())

        assert isinstance(result, NetworkError)
        assert result.code == NetworkErrorCode.NO_RESPONSE_RECEIVED
        assert time.monotonic() - started < 1.5

    @pytest.mark.asyncio
    async def test_slow_target_times_out(self, make_executor):
        async def handler(request: httpx.Request) -> httpx.Response:
            await asyncio.sleep(2)
            return httpx.Response(200, json={})

        executor = make_executor(handler, request_timeout_ms=100)
        started = time.monotonic()
        result = await executor.execute(get_descriptor())

        assert isinstance(result, NetworkError)
        assert result.to_dict() == {"error": True, "message": "No response received from server"}
        assert time.monotonic() - started < 1.5

    @pytest.mark.asyncio
    async def test_response_inside_deadline_succeeds(self, make_executor):
        async def handler(request: httpx.Request) -> httpx.Response:
            await asyncio.sleep(0.01)
            return httpx.Response(200, json={"ok": True})

        executor = make_executor(handler, request_timeout_ms=2000)
        result = await executor.execute(get_descriptor())

        assert isinstance(result, ExecutionResult)
        assert result.response_data == {"ok": True}


class TestDecodeResponseData:
    """Test response payload decoding."""

    def test_json(self):
        assert decode_response_data(httpx.Response(200, json={"a": 1})) == {"a": 1}

    def test_text(self):
        assert decode_response_data(httpx.Response(200, text="<html></html>")) == "<html></html>"

    def test_empty(self):
        assert decode_response_data(httpx.Response(200)) == ""
