"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
Reqline, a product of Garudex Labs

ASGI middleware for the reqline API.
"""

from fastapi import HTTPException, status
from fastapi.responses import JSONResponse
from starlette.datastructures import Headers
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from reqline.core.messages import REQUEST_BODY_TOO_LARGE
from reqline.logging_config import get_logger

logger = get_logger(__name__)


class BodySizeLimitMiddleware:
    """
    Reject request bodies larger than ``max_bytes``.

    A declared Content-Length over the limit is refused before the app runs.
    Bodies without one (chunked uploads) are counted as they are received,
    and reading past the limit raises a 413 HTTPException inside the app so
    the usual exception handlers format it.
    """

    def __init__(self, app: ASGIApp, *, max_bytes: int) -> None:
        self.app = app
        self.max_bytes = max_bytes

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope.get("type") != "http":
            await self.app(scope, receive, send)
            return

        content_length = Headers(scope=scope).get("content-length")
        if content_length and content_length.isdigit() and int(content_length) > self.max_bytes:
            logger.warning("request_body_rejected", declared_bytes=int(content_length))
            response = JSONResponse(
                status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
                content={"error": True, "message": REQUEST_BODY_TOO_LARGE},
            )
            await response(scope, receive, send)
            return

        received = 0

        async def limited_receive() -> Message:
            nonlocal received
            message = await receive()
            if message.get("type") == "http.request":
                received += len(message.get("body") or b"")
                if received > self.max_bytes:
                    logger.warning("request_body_rejected", received_bytes=received)
                    raise HTTPException(
                        status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
                        detail=REQUEST_BODY_TOO_LARGE,
                    )
            return message

        await self.app(scope, limited_receive, send)
