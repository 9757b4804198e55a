"""Request body size ceiling for upload endpoints."""

from fastapi import status
from starlette.exceptions import HTTPException
from starlette.requests import Request
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from src.api.middleware.error_handler import build_error_response
from src.commons.telemetry.logger import get_logger

logger = get_logger(__name__)


class BodyTooLargeError(HTTPException):
    """Raised mid-stream once a body passes the limit."""

    def __init__(self, max_bytes: int) -> None:
        self.max_bytes = max_bytes
        super().__init__(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            detail=f"Request body exceeds {max_bytes} bytes",
        )


class BodySizeLimitMiddleware:
    """Rejects request bodies larger than ``max_bytes`` with a 413.

    A declared ``Content-Length`` over the limit is refused before any byte
    is read. Bodies without a usable length are counted as they stream in
    and cut off as soon as the running total passes the limit, so a client
    can never make the server buffer more than the ceiling.
    """

    def __init__(self, app: ASGIApp, max_bytes: int) -> None:
        self.app = app
        self.max_bytes = max_bytes

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        declared = _content_length(scope)
        if declared is not None and declared > self.max_bytes:
            await self._reject(scope, receive, send)
            return

        received = 0

        async def limited_receive() -> Message:
            nonlocal received
            message = await receive()
            if message["type"] == "http.request":
                received += len(message.get("body", b""))
                if received > self.max_bytes:
                    raise BodyTooLargeError(self.max_bytes)
            return message

        await self.app(scope, limited_receive, send)

    async def _reject(self, scope: Scope, receive: Receive, send: Send) -> None:
        request = Request(scope, receive)
        logger.warning(
            "Request body exceeds limit",
            extra={"path": request.url.path, "max_bytes": self.max_bytes},
        )
        response = build_error_response(
            request=request,
            code="PAYLOAD_TOO_LARGE",
            message=f"Request body exceeds {self.max_bytes} bytes",
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            details={"max_bytes": self.max_bytes},
        )
        await response(scope, receive, send)


def _content_length(scope: Scope) -> int | None:
    for name, value in scope.get("headers", []):
        if name == b"content-length":
            try:
                return int(value)
            except ValueError:
                return None
    return None
