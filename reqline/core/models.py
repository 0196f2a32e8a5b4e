"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
Reqline, a product of Garudex Labs

Data model for the reqline pipeline.

Descriptors come out of the parser, results and network errors out of the
executor. All of them are owned by a single invocation and serialize to the
JSON shapes returned by the API.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional

from reqline.core.messages import NetworkErrorCode, ParseErrorCode


class HttpMethod(str, Enum):
    """HTTP methods a reqline statement may use."""
    GET = "GET"
    POST = "POST"


@dataclass(frozen=True)
class RequestDescriptor:
    """
    Validated representation of a reqline statement.

    Attributes:
        method: HTTP method
        url: Absolute http:// or https:// URL without the QUERY section applied
        headers: Header section, empty when absent
        query: Query section, empty when absent
        body: Body section, empty when absent (only sent with POST)
    """
    method: HttpMethod
    url: str
    headers: Dict[str, Any] = field(default_factory=dict)
    query: Dict[str, Any] = field(default_factory=dict)
    body: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "method": self.method.value,
            "url": self.url,
            "headers": self.headers,
            "query": self.query,
            "body": self.body,
        }


@dataclass(frozen=True)
class ParseError:
    """
    Tagged parser failure.

    Attributes:
        code: Catalog code of the violated rule
        message: Human-readable message for the code
    """
    code: ParseErrorCode
    message: str

    @classmethod
    def from_code(cls, code: ParseErrorCode, **params: Any) -> "ParseError":
        message = code.value.format(**params) if params else code.value
        return cls(code=code, message=message)

    def to_dict(self) -> Dict[str, Any]:
        return {"error": True, "message": self.message}


@dataclass(frozen=True)
class NetworkError:
    """
    Executor failure where no response was obtained from the target.

    Attributes:
        code: NO_RESPONSE_RECEIVED or REQUEST_SETUP_ERROR
        message: Human-readable message for the code
        details: Underlying transport error, for logs only
    """
    code: NetworkErrorCode
    message: str
    details: Optional[str] = None

    @classmethod
    def from_code(cls, code: NetworkErrorCode, details: Optional[str] = None) -> "NetworkError":
        return cls(code=code, message=code.value, details=details)

    def to_dict(self) -> Dict[str, Any]:
        return {"error": True, "message": self.message}


@dataclass(frozen=True)
class ExecutionResult:
    """
    Record of a request that received a response, whatever its status.

    Timestamps are milliseconds since the Unix epoch; duration is their
    difference in milliseconds.
    """
    query: Dict[str, Any]
    body: Dict[str, Any]
    headers: Dict[str, Any]
    full_url: str
    http_status: int
    duration: int
    request_start_timestamp: int
    request_stop_timestamp: int
    response_data: Any = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "request": {
                "query": self.query,
                "body": self.body,
                "headers": self.headers,
                "full_url": self.full_url,
            },
            "response": {
                "http_status": self.http_status,
                "duration": self.duration,
                "request_start_timestamp": self.request_start_timestamp,
                "request_stop_timestamp": self.request_stop_timestamp,
                "response_data": self.response_data,
            },
        }
