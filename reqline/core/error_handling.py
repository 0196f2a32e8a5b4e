"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
Reqline, a product of Garudex Labs

Error handling at the reqline API boundary.

Every failure that reaches a handler is classified, logged once with its
context, counted, and turned into the ``{"error": true, "message": ...}``
body returned to the caller. Pipeline errors keep their catalog message.
Anything else is reported as a generic internal error, with the exception
text and traceback attached only when the service runs in development mode.
"""

import traceback
from collections import Counter
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional, Tuple, Type

from reqline.core.messages import INTERNAL_SERVER_ERROR
from reqline.exceptions import (
    ConfigurationError,
    PipelineError,
    ReqlineNetworkError,
    ReqlineValidationError,
)
from reqline.logging_config import get_logger

logger = get_logger(__name__)


class ErrorSeverity(Enum):
    LOW = "low"  # Caller sent something unusable
    MEDIUM = "medium"  # Target could not be reached
    HIGH = "high"  # Fault inside reqline
    CRITICAL = "critical"  # Service cannot run as configured


class ErrorCategory(Enum):
    VALIDATION = "validation"
    NETWORK = "network"
    CONFIGURATION = "configuration"
    UNKNOWN = "unknown"


# Checked in order; the first matching type wins.
_CATEGORY_BY_TYPE: Tuple[Tuple[Type[Exception], ErrorCategory], ...] = (
    (ReqlineValidationError, ErrorCategory.VALIDATION),
    (ReqlineNetworkError, ErrorCategory.NETWORK),
    (ConfigurationError, ErrorCategory.CONFIGURATION),
)

_SEVERITY_BY_CATEGORY: Dict[ErrorCategory, ErrorSeverity] = {
    ErrorCategory.VALIDATION: ErrorSeverity.LOW,
    ErrorCategory.NETWORK: ErrorSeverity.MEDIUM,
    ErrorCategory.CONFIGURATION: ErrorSeverity.CRITICAL,
    ErrorCategory.UNKNOWN: ErrorSeverity.HIGH,
}

_TRACED_SEVERITIES = (ErrorSeverity.HIGH, ErrorSeverity.CRITICAL)


def format_stack(error: BaseException) -> str:
    return "".join(traceback.format_exception(type(error), error, error.__traceback__))


@dataclass
class ErrorContext:
    """
    A classified failure, as logged and as turned into a response.

    Attributes:
        error: The exception that occurred
        category: What kind of failure it is
        severity: How serious it is
        operation: Route or function that failed
        request_id: ID of the API call, when known
        metadata: Extra fields for the log event
        timestamp: When the failure was handled
        stack_trace: Formatted traceback, captured from ``error`` when not given
    """
    error: Exception
    category: ErrorCategory
    severity: ErrorSeverity
    operation: str
    request_id: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    stack_trace: Optional[str] = None

    def __post_init__(self):
        if self.stack_trace is None:
            self.stack_trace = format_stack(self.error)

    @property
    def is_internal(self) -> bool:
        """True when the failure is reqline's own rather than the caller's or the target's."""
        return self.severity in _TRACED_SEVERITIES

    def to_dict(self) -> Dict[str, Any]:
        """Fields for the structured log event. Tracebacks only for internal faults."""
        return {
            "error_type": type(self.error).__name__,
            "error_message": str(self.error),
            "category": self.category.value,
            "severity": self.severity.value,
            "operation": self.operation,
            "request_id": self.request_id,
            "metadata": self.metadata,
            "timestamp": self.timestamp.isoformat(),
            "stack_trace": self.stack_trace if self.is_internal else None,
        }


@dataclass
class ErrorResponse:
    """
    Body of a failed API call.

    ``details``, ``stack`` and ``request_id`` are only serialized on request,
    which the API does in development mode. The request ID is always sent
    in the X-Request-ID header.
    """
    message: str
    details: Optional[str] = None
    stack: Optional[str] = None
    request_id: Optional[str] = None

    def to_dict(self, include_details: bool = False) -> Dict[str, Any]:
        body: Dict[str, Any] = {"error": True, "message": self.message}
        if include_details:
            extra = {"request_id": self.request_id, "details": self.details, "stack": self.stack}
            body.update({key: value for key, value in extra.items() if value})
        return body


class ErrorHandler:
    """
    Classifies, logs and counts failures for one service.

    Args:
        service_name: Value of the ``service`` field on every logged error
    """

    def __init__(self, service_name: str = "reqline-parser"):
        self.service_name = service_name
        self._counts: Counter = Counter()

    def handle_error(
        self,
        error: Exception,
        operation: str,
        category: Optional[ErrorCategory] = None,
        request_id: Optional[str] = None,
        metadata: Optional[Dict[str, Any]] = None,
        severity: Optional[ErrorSeverity] = None
    ) -> ErrorContext:
        """
        Record a failure.

        Args:
            error: The exception that occurred
            operation: Route or function that failed
            category: Overrides the category derived from the exception type
            request_id: ID of the API call
            metadata: Extra fields for the log event
            severity: Overrides the severity derived from the category

        Returns:
            ErrorContext for building the response
        """
        category = category or classify(error)
        context = ErrorContext(
            error=error,
            category=category,
            severity=severity or _SEVERITY_BY_CATEGORY[category],
            operation=operation,
            request_id=request_id,
            metadata=metadata or {},
        )

        self._log(context)
        self._counts[context.category] += 1
        return context

    def _log(self, context: ErrorContext) -> None:
        fields = context.to_dict()
        fields["service"] = self.service_name
        summary = f"{context.operation}: {context.error}"

        if context.severity == ErrorSeverity.CRITICAL:
            logger.critical(f"Service misconfigured in {summary}", **fields)
        elif context.severity == ErrorSeverity.HIGH:
            logger.error(f"Unhandled error in {summary}", **fields)
        elif context.severity == ErrorSeverity.MEDIUM:
            logger.warning(f"Target unreachable in {summary}", **fields)
        else:
            logger.info(f"Rejected input in {summary}", **fields)

    def create_error_response(self, context: ErrorContext) -> ErrorResponse:
        """
        Build the response body for a handled failure.

        Pipeline errors carry their own catalog message. Everything else is
        collapsed to a generic message, with the real error kept in
        ``details`` and ``stack``.
        """
        if isinstance(context.error, PipelineError):
            message = context.error.message
        else:
            message = INTERNAL_SERVER_ERROR

        return ErrorResponse(
            message=message,
            details=str(context.error),
            stack=context.stack_trace,
            request_id=context.request_id,
        )

    def get_stats(self) -> Dict[str, Any]:
        return {
            "total_errors": sum(self._counts.values()),
            "errors_by_category": {
                category.value: count for category, count in self._counts.items()
            },
        }


def classify(error: Exception) -> ErrorCategory:
    """Derive the category of a failure from its exception type."""
    for error_type, category in _CATEGORY_BY_TYPE:
        if isinstance(error, error_type):
            return category
    return ErrorCategory.UNKNOWN


_error_handler: Optional[ErrorHandler] = None


def get_error_handler(service_name: str = "reqline-parser") -> ErrorHandler:
    """
    Return the process-wide error handler, creating it on first use.

    Args:
        service_name: Used only when the handler is first created
    """
    global _error_handler
    if _error_handler is None:
        _error_handler = ErrorHandler(service_name)
    return _error_handler
