"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
Reqline, a product of Garudex Labs

HTTP API for Reqline.

Exposes the reqline pipeline over HTTP:
- POST /       parse and execute, with its own status mapping
- POST /parse  parse and execute through the service layer
- GET /health  liveness check

Parse and payload errors are 400. Network errors are 400 on ``/`` and 502 on
``/parse``. Unexpected faults are 500 with internals hidden outside
development mode.
"""

from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from reqline._version import __version__
from reqline.api.health_endpoints import HealthEndpoints, create_fastapi_health_endpoint
from reqline.api.middleware import BodySizeLimitMiddleware
from reqline.api.models import ErrorBody, ExecutionResponse, ReqlineRequest
from reqline.config.settings import ReqlineConfig, get_default_config
from reqline.core.error_handling import ErrorCategory, get_error_handler
from reqline.core.executor import RequestExecutor
from reqline.core.messages import (
    ENDPOINT_NOT_FOUND,
    ParseErrorCode,
)
from reqline.core.models import NetworkError, ParseError
from reqline.core.parser import parse_reqline
from reqline.core.service import process_reqline
from reqline.exceptions import ReqlineNetworkError, ReqlineValidationError
from reqline.logging_config import clear_request_id, get_logger, get_request_id, set_request_id

logger = get_logger(__name__)

SERVICE_NAME = "reqline-parser"


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": True, "message": message})


def create_app(
    config: Optional[ReqlineConfig] = None,
    executor: Optional[RequestExecutor] = None,
) -> FastAPI:
    """
    Build the reqline FastAPI application.

    Args:
        config: Service configuration (defaults if None)
        executor: Request executor (built from config.executor if None)

    Returns:
        Configured FastAPI application
    """
    config = config or get_default_config()
    executor = executor or RequestExecutor(config.executor)
    error_handler = get_error_handler(SERVICE_NAME)
    include_details = config.server.is_development

    app = FastAPI(
        title="Reqline",
        description="Parse and execute single-line HTTP request statements",
        version=__version__,
    )
    app.state.config = config
    app.state.executor = executor

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.server.cors_allow_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(BodySizeLimitMiddleware, max_bytes=config.server.max_request_size_bytes)

    def internal_error_response(request: Request, exc: Exception) -> JSONResponse:
        context = error_handler.handle_error(
            exc,
            operation=request.url.path,
            category=ErrorCategory.UNKNOWN,
            request_id=get_request_id(),
            metadata={"method": request.method},
        )
        body = error_handler.create_error_response(context).to_dict(include_details=include_details)
        return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=body)

    def pipeline_error_response(request: Request, exc: Exception, status_code: int) -> JSONResponse:
        context = error_handler.handle_error(exc, operation=request.url.path, request_id=get_request_id())
        body = error_handler.create_error_response(context).to_dict()
        return JSONResponse(status_code=status_code, content=body)

    @app.middleware("http")
    async def bind_request_id(request: Request, call_next):
        request_id = set_request_id(request.headers.get("X-Request-ID"))
        try:
            response = await call_next(request)
        except Exception as e:
            # Unhandled errors would otherwise be answered outside this
            # middleware, without the X-Request-ID header.
            response = internal_error_response(request, e)
        finally:
            clear_request_id()
        response.headers["X-Request-ID"] = request_id
        return response

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        if exc.status_code in (status.HTTP_404_NOT_FOUND, status.HTTP_405_METHOD_NOT_ALLOWED):
            return _error(status.HTTP_404_NOT_FOUND, ENDPOINT_NOT_FOUND)
        return _error(exc.status_code, str(exc.detail))

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        # A body that is not a JSON object cannot carry a reqline.
        return _error(status.HTTP_400_BAD_REQUEST, ParseErrorCode.MISSING_REQLINE_PARAMETER.value)

    @app.exception_handler(ReqlineValidationError)
    async def validation_error_handler(request: Request, exc: ReqlineValidationError):
        return pipeline_error_response(request, exc, status.HTTP_400_BAD_REQUEST)

    @app.exception_handler(ReqlineNetworkError)
    async def network_error_handler(request: Request, exc: ReqlineNetworkError):
        return pipeline_error_response(request, exc, status.HTTP_502_BAD_GATEWAY)

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        return internal_error_response(request, exc)

    create_fastapi_health_endpoint(app, HealthEndpoints(SERVICE_NAME, __version__))

    @app.post(
        "/",
        response_model=ExecutionResponse,
        responses={400: {"model": ErrorBody}, 500: {"model": ErrorBody}},
    )
    async def execute_reqline(payload: ReqlineRequest, request: Request):
        """
        Parse and execute a reqline statement.

        Failures are mapped here rather than by the shared error handlers:
        400 for payload, parse and network errors, 500 for anything else.
        """
        try:
            reqline = payload.reqline
            if not isinstance(reqline, str) or not reqline:
                return _error(status.HTTP_400_BAD_REQUEST, ParseErrorCode.MISSING_REQLINE_PARAMETER.value)

            parsed = parse_reqline(reqline)
            if isinstance(parsed, ParseError):
                return _error(status.HTTP_400_BAD_REQUEST, parsed.message)

            result = await executor.execute(parsed)
            if isinstance(result, NetworkError):
                return _error(status.HTTP_400_BAD_REQUEST, result.message)

            return result.to_dict()
        except Exception as e:
            return internal_error_response(request, e)

    @app.post(
        "/parse",
        response_model=ExecutionResponse,
        responses={400: {"model": ErrorBody}, 502: {"model": ErrorBody}},
    )
    async def parse_endpoint(payload: ReqlineRequest):
        """Parse and execute a reqline statement through the service layer."""
        return await process_reqline(payload.model_dump(), executor)

    logger.info(
        f"Initialized reqline API: environment={config.server.environment}, "
        f"timeout={config.executor.request_timeout_ms}ms"
    )

    return app


def run_server(config: Optional[ReqlineConfig] = None) -> None:
    """
    Run the reqline API with uvicorn.

    Args:
        config: Service configuration (defaults if None)
    """
    import uvicorn

    config = config or get_default_config()
    app = create_app(config)

    logger.info(f"Starting reqline API on {config.server.host}:{config.server.port}")
    uvicorn.run(
        app,
        host=config.server.host,
        port=config.server.port,
        log_level=config.logging.level.lower(),
    )
