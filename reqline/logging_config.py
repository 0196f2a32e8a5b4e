"""
Logging configuration for Reqline.

Reqline logs through structlog on top of the standard logging module. Events
render as one JSON object per line by default, or as plain key=value text for
local use. Every event emitted while an API call is in flight carries that
call's request ID, so a parse, the outbound request and any error can be
joined in the logs.
"""

import logging
import sys
import uuid
from contextvars import ContextVar
from pathlib import Path
from typing import Any, Dict, Optional, Union

import structlog
from structlog.types import EventDict, Processor

LOGGER_PREFIX = "reqline"

# ID of the API call being served, echoed back in the X-Request-ID header.
request_id_var: ContextVar[Optional[str]] = ContextVar("request_id", default=None)


def add_request_id(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    """structlog processor that stamps the current request ID onto an event."""
    request_id = request_id_var.get()
    if request_id:
        event_dict["request_id"] = request_id
    return event_dict


def set_request_id(request_id: Optional[str] = None) -> str:
    """
    Bind a request ID to the current context.

    Args:
        request_id: ID supplied by the caller; a UUID4 is generated when empty

    Returns:
        The request ID now in effect
    """
    request_id = request_id or str(uuid.uuid4())
    request_id_var.set(request_id)
    return request_id


def clear_request_id() -> None:
    request_id_var.set(None)


def get_request_id() -> Optional[str]:
    return request_id_var.get()


def _build_handler(log_file: Optional[Union[str, Path]]) -> logging.Handler:
    if log_file is None:
        return logging.StreamHandler(sys.stderr)

    path = Path(log_file)
    path.parent.mkdir(parents=True, exist_ok=True)
    return logging.FileHandler(path)


def _renderer(json_format: bool) -> Processor:
    if json_format:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=False)


def setup_logging(
    level: str = "INFO",
    log_file: Optional[Union[str, Path]] = None,
    json_format: bool = True,
) -> None:
    """
    Configure structured logging for Reqline.

    Replaces any handlers already on the root logger, so calling this twice
    does not duplicate output.

    Args:
        level: Log level name; unknown names fall back to INFO
        log_file: File to append to. Logs go to stderr when None.
        json_format: Render JSON lines when True, key=value text otherwise
    """
    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        numeric_level = logging.INFO

    handler = _build_handler(log_file)
    handler.setLevel(numeric_level)
    handler.setFormatter(logging.Formatter("%(message)s"))

    root_logger = logging.getLogger()
    root_logger.handlers = [handler]
    root_logger.setLevel(numeric_level)

    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="iso"),
            add_request_id,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            _renderer(json_format),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )


def setup_logging_from_config(logging_config: Any) -> None:
    """
    Configure logging from a LoggingConfig section.

    Args:
        logging_config: Object with ``level``, ``file`` and ``format`` attributes
    """
    setup_logging(
        level=logging_config.level,
        log_file=logging_config.file or None,
        json_format=logging_config.format == "json",
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """
    Get a structured logger under the ``reqline`` namespace.

    Args:
        name: Module name, usually ``__name__``
    """
    if name != LOGGER_PREFIX and not name.startswith(LOGGER_PREFIX + "."):
        name = f"{LOGGER_PREFIX}.{name}"
    return structlog.get_logger(name)


def _present(**fields: Any) -> Dict[str, Any]:
    return {key: value for key, value in fields.items() if value is not None}


def log_reqline_parse(
    logger: structlog.stdlib.BoundLogger,
    success: bool,
    method: Optional[str] = None,
    url: Optional[str] = None,
    error_code: Optional[str] = None,
    **kwargs: Any,
) -> None:
    """
    Log the outcome of parsing a statement.

    Successful parses are logged at DEBUG; rejected statements at INFO, since
    they are caller mistakes rather than service faults.

    Args:
        logger: Logger instance
        success: Whether the statement produced a descriptor
        method: HTTP method of the descriptor
        url: Base URL of the descriptor
        error_code: Catalog code of the rejection
        **kwargs: Additional context to log
    """
    fields = _present(method=method, url=url, error_code=error_code)
    fields.update(kwargs)

    log = logger.debug if success else logger.info
    log("reqline_parse", event_type="reqline_parse", success=success, **fields)


def log_outbound_request(
    logger: structlog.stdlib.BoundLogger,
    method: str,
    url: str,
    duration_ms: int,
    http_status: Optional[int] = None,
    error_code: Optional[str] = None,
    **kwargs: Any,
) -> None:
    """
    Log the HTTP call issued for a statement.

    A call that received any response is logged at INFO whatever its status;
    a call that received none is logged at WARNING with its error code.

    Args:
        logger: Logger instance
        method: HTTP method
        url: Final URL including the query string
        duration_ms: Wall-clock duration in milliseconds
        http_status: Status of the response, if one arrived
        error_code: Network error code, if none arrived
        **kwargs: Additional context to log
    """
    fields = _present(http_status=http_status, error_code=error_code)
    fields.update(kwargs)

    log = logger.info if error_code is None else logger.warning
    log(
        "outbound_request",
        event_type="outbound_request",
        method=method,
        url=url,
        duration_ms=duration_ms,
        **fields,
    )
