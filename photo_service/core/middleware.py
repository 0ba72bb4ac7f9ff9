"""
Request body size guard.
"""
import logging

from fastapi import HTTPException, status
from fastapi.responses import JSONResponse

from photo_service.core.config import settings
from photo_service.core.exceptions import error_body

logger = logging.getLogger(__name__)


class BodySizeLimitMiddleware:
    """
    Reject request bodies larger than MAX_UPLOAD_SIZE_MB before they are parsed.

    A declared Content-Length over the limit is answered with 413 straight
    away. Bodies without one are counted while they are received.
    """

    def __init__(self, app):
        self.app = app

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        max_bytes = settings.max_upload_size_bytes
        detail = f"Request body exceeds the {settings.MAX_UPLOAD_SIZE_MB} MB limit"

        content_length = None
        for name, value in scope.get("headers", []):
            if name == b"content-length":
                content_length = value
                break

        if content_length is not None and content_length.isdigit() and int(content_length) > max_bytes:
            logger.warning(f"Rejected {scope['method']} {scope['path']}: Content-Length {int(content_length)} > {max_bytes}")
            response = JSONResponse(
                status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
                content=error_body(detail),
            )
            await response(scope, receive, send)
            return

        received = 0

        async def limited_receive():
            nonlocal received
            message = await receive()
            if message["type"] == "http.request":
                received += len(message.get("body", b""))
                if received > max_bytes:
                    logger.warning(f"Rejected {scope['method']} {scope['path']}: body over {max_bytes} bytes")
                    raise HTTPException(
                        status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
                        detail=detail
                    )
            return message

        await self.app(scope, limited_receive, send)
