"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
Reqline, a product of Garudex Labs

Core reqline pipeline: statement parsing, URL construction and request
execution.
"""

from reqline.core.messages import NetworkErrorCode, ParseErrorCode
from reqline.core.models import (
    ExecutionResult,
    HttpMethod,
    NetworkError,
    ParseError,
    RequestDescriptor,
)
from reqline.core.parser import parse_reqline, validate_pipe_spacing
from reqline.core.urls import build_full_url
from reqline.core.executor import RequestExecutor
from reqline.core.service import process_reqline

__all__ = [
    "NetworkErrorCode",
    "ParseErrorCode",
    "ExecutionResult",
    "HttpMethod",
    "NetworkError",
    "ParseError",
    "RequestDescriptor",
    "parse_reqline",
    "validate_pipe_spacing",
    "build_full_url",
    "RequestExecutor",
    "process_reqline",
]
