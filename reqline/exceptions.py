"""
Exception hierarchy for Reqline.

All custom exceptions inherit from ReqlineError base class.
"""

from typing import Optional


class ReqlineError(Exception):
    """Base exception for all Reqline errors."""
    pass


# Pipeline Errors
class PipelineError(ReqlineError):
    """
    Base exception for failures raised by the reqline pipeline.

    Carries the catalog code alongside the human-readable message so that
    boundary layers can map failures without parsing message text.
    """

    def __init__(self, message: str, code: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.code = code


class ReqlineValidationError(PipelineError):
    """Raised when a reqline payload or statement fails validation."""
    pass


class ReqlineNetworkError(PipelineError):
    """Raised when the described request produced no usable response."""
    pass


# Configuration Errors
class ConfigurationError(ReqlineError):
    """Base exception for configuration-related errors."""
    pass


class InvalidConfigurationError(ConfigurationError):
    """Raised when configuration is invalid or malformed."""
    pass
