"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
Reqline, a product of Garudex Labs

Request executor for reqline.

Issues the HTTP request described by a RequestDescriptor and records what was
sent and what came back:
- Any response, including 4xx and 5xx, is an ExecutionResult
- No response at all (refused, DNS failure, timeout) is NO_RESPONSE_RECEIVED
- The timeout bounds the whole call, including reading the response body
- A request that could not be built or issued is REQUEST_SETUP_ERROR

Exactly one outbound call is made per invocation, with no retries.
"""

import asyncio
import time
from typing import Any, Dict, Optional, Union

import httpx

from reqline.config.settings import ExecutorConfig
from reqline.core.messages import NetworkErrorCode
from reqline.core.models import ExecutionResult, HttpMethod, NetworkError, RequestDescriptor
from reqline.core.urls import build_full_url, stringify_value
from reqline.logging_config import get_logger, log_outbound_request

logger = get_logger(__name__)


ExecuteResult = Union[ExecutionResult, NetworkError]

# Raised while issuing a request that never left the client.
_SETUP_FAILURES = (httpx.UnsupportedProtocol, httpx.LocalProtocolError)


def _now_ms() -> int:
    return int(time.time() * 1000)


class RequestExecutor:
    """
    Executes parsed reqline statements over HTTP.

    A fresh client is opened for every call, so executors hold no state
    between invocations and may be shared across concurrent API calls.
    """

    def __init__(
        self,
        config: Optional[ExecutorConfig] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize request executor.

        Args:
            config: Executor settings (timeout, redirect handling)
            transport: Optional httpx transport, used in place of the network
        """
        self.config = config or ExecutorConfig()
        self.transport = transport

    @property
    def timeout_seconds(self) -> float:
        return self.config.request_timeout_ms / 1000

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            timeout=httpx.Timeout(self.timeout_seconds),
            follow_redirects=self.config.follow_redirects,
            transport=self.transport,
        )

    async def execute(self, descriptor: RequestDescriptor) -> ExecuteResult:
        """
        Issue the described request.

        Args:
            descriptor: Parsed reqline statement

        Returns:
            ExecutionResult when the target responded, NetworkError otherwise
        """
        start = _now_ms()
        full_url = descriptor.url

        async with self._client() as client:
            try:
                full_url = build_full_url(descriptor.url, descriptor.query)
                request = client.build_request(
                    method=descriptor.method.value,
                    url=full_url,
                    headers=_header_values(descriptor.headers),
                    json=_request_body(descriptor),
                )
            except (httpx.InvalidURL, TypeError, ValueError) as e:
                return self._failure(descriptor, full_url, start, NetworkErrorCode.REQUEST_SETUP_ERROR, e)

            try:
                response = await asyncio.wait_for(client.send(request), self.timeout_seconds)
            except _SETUP_FAILURES as e:
                return self._failure(descriptor, full_url, start, NetworkErrorCode.REQUEST_SETUP_ERROR, e)
            except asyncio.TimeoutError:
                error = httpx.TimeoutException(f"No response within {self.config.request_timeout_ms}ms")
                return self._failure(descriptor, full_url, start, NetworkErrorCode.NO_RESPONSE_RECEIVED, error)
            except httpx.RequestError as e:
                return self._failure(descriptor, full_url, start, NetworkErrorCode.NO_RESPONSE_RECEIVED, e)

        stop = _now_ms()
        duration = stop - start
        log_outbound_request(
            logger,
            method=descriptor.method.value,
            url=full_url,
            duration_ms=duration,
            http_status=response.status_code,
        )

        return ExecutionResult(
            query=descriptor.query,
            body=descriptor.body,
            headers=descriptor.headers,
            full_url=full_url,
            http_status=response.status_code,
            duration=duration,
            request_start_timestamp=start,
            request_stop_timestamp=stop,
            response_data=decode_response_data(response),
        )

    def _failure(
        self,
        descriptor: RequestDescriptor,
        full_url: str,
        start: int,
        code: NetworkErrorCode,
        error: Exception,
    ) -> NetworkError:
        log_outbound_request(
            logger,
            method=descriptor.method.value,
            url=full_url,
            duration_ms=_now_ms() - start,
            error_code=code.name,
            reason=f"{type(error).__name__}: {error}",
        )
        return NetworkError.from_code(code, details=str(error))


def _header_values(headers: Dict[str, Any]) -> Dict[str, str]:
    return {str(key): stringify_value(value) for key, value in headers.items()}


def _request_body(descriptor: RequestDescriptor) -> Optional[Dict[str, Any]]:
    if descriptor.method is HttpMethod.POST and descriptor.body:
        return descriptor.body
    return None


def decode_response_data(response: httpx.Response) -> Any:
    """
    Return the response payload, decoded from JSON when possible.

    Non-JSON payloads are returned as text; an empty body is an empty string.
    """
    if not response.content:
        return ""
    try:
        return response.json()
    except ValueError:
        return response.text
