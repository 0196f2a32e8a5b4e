"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
Reqline, a product of Garudex Labs

Pydantic models for API requests/responses.
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class ReqlineRequest(BaseModel):
    """Request model for executing a reqline statement."""
    model_config = ConfigDict(extra="allow")

    # Left untyped so a non-string value reaches the route's own check.
    reqline: Optional[Any] = Field(None, description="Reqline statement to parse and execute")


class ErrorBody(BaseModel):
    """Response model for any failed request."""
    error: bool = Field(True, description="Always true")
    message: str = Field(..., description="Human-readable error message")


class HealthCheckResponse(BaseModel):
    """Response model for health check."""
    status: str = Field(..., description="Health status")
    message: str = Field(..., description="Human-readable status message")
    timestamp: int = Field(..., description="Milliseconds since the Unix epoch")
    service: str = Field(..., description="Service name")
    version: str = Field(..., description="Service version")


class RequestEcho(BaseModel):
    """The request that was sent to the target."""
    query: Dict[str, Any]
    body: Dict[str, Any]
    headers: Dict[str, Any]
    full_url: str


class ResponseRecord(BaseModel):
    """The response received from the target."""
    http_status: int
    duration: int
    request_start_timestamp: int
    request_stop_timestamp: int
    response_data: Any = None


class ExecutionResponse(BaseModel):
    """Response model for an executed reqline statement."""
    request: RequestEcho
    response: ResponseRecord
