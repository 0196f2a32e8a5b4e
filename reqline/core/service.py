"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
Reqline, a product of Garudex Labs

Reqline service: parse then execute, raising on failure.

The parser and executor return their failures as values. This module is the
exception-raising calling style on top of them, for callers that prefer to
let failures propagate to a shared error handler.
"""

from typing import Any, Dict, Mapping, Optional

from reqline.core.executor import RequestExecutor
from reqline.core.messages import ParseErrorCode
from reqline.core.models import NetworkError, ParseError
from reqline.core.parser import parse_reqline
from reqline.exceptions import ReqlineNetworkError, ReqlineValidationError
from reqline.logging_config import get_logger

logger = get_logger(__name__)


def extract_reqline(payload: Any) -> str:
    """
    Pull the statement out of an inbound payload.

    Raises:
        ReqlineValidationError: If the payload has no non-empty string ``reqline``
    """
    reqline = payload.get("reqline") if isinstance(payload, Mapping) else None
    if not isinstance(reqline, str) or not reqline:
        code = ParseErrorCode.MISSING_REQLINE_PARAMETER
        raise ReqlineValidationError(code.value, code=code.name)
    return reqline


async def process_reqline(
    payload: Any,
    executor: Optional[RequestExecutor] = None,
) -> Dict[str, Any]:
    """
    Parse and execute the reqline statement in a payload.

    Args:
        payload: Mapping with a ``reqline`` string
        executor: Executor to issue the request with (default settings if None)

    Returns:
        Serialized ExecutionResult

    Raises:
        ReqlineValidationError: If the payload or statement is invalid
        ReqlineNetworkError: If the target produced no response
    """
    executor = executor or RequestExecutor()
    reqline = payload.get("reqline") if isinstance(payload, Mapping) else None

    try:
        reqline = extract_reqline(payload)
        logger.info("reqline_request_started", reqline=reqline)

        parsed = parse_reqline(reqline)
        if isinstance(parsed, ParseError):
            raise ReqlineValidationError(parsed.message, code=parsed.code.name)

        result = await executor.execute(parsed)
        if isinstance(result, NetworkError):
            raise ReqlineNetworkError(result.message, code=result.code.name)

        logger.info(
            "reqline_request_completed",
            method=parsed.method.value,
            url=parsed.url,
            duration=result.duration,
        )
        return result.to_dict()

    except (ReqlineValidationError, ReqlineNetworkError) as e:
        logger.warning("reqline_request_failed", error=e.message, code=e.code, reqline=reqline)
        raise
