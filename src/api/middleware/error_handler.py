"""Error handling middleware and exception handlers."""

from typing import Any

from fastapi import Request, status
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import RequestResponseEndpoint
from starlette.responses import Response

from src.commons.telemetry.logger import get_logger
from src.domain.exceptions import (
    AuthException,
    DomainException,
    MalformedLocationException,
    MediaProcessingException,
    NotVideoOwnerException,
    PayloadTooLargeException,
    StagingException,
    StorageException,
    UnauthenticatedException,
    ValidationException,
    VideoNotFoundException,
)

logger = get_logger(__name__)

GENERIC_SERVER_MESSAGE = "An unexpected error occurred"
GENERIC_STORAGE_MESSAGE = "Video storage is unavailable"


def build_error_response(
    request: Request,
    code: str,
    message: str,
    status_code: int,
    details: dict[str, Any] | None = None,
) -> JSONResponse:
    """Build standardized error response.

    Args:
        request: HTTP request.
        code: Error code.
        message: Error message.
        status_code: HTTP status code.
        details: Additional details.

    Returns:
        JSON error response.
    """
    request_id = getattr(request.state, "request_id", "unknown")

    return JSONResponse(
        status_code=status_code,
        content={
            "error": {
                "code": code,
                "message": message,
                "details": details or {},
                "request_id": request_id,
            }
        },
    )


def _handle_exception(  # noqa: PLR0911
    request: Request,
    exc: Exception,
) -> JSONResponse:
    """Handle exception and return appropriate error response.

    Client faults echo their message. Server faults log the cause and
    return a generic message so tool output and storage internals never
    reach the client.

    Args:
        request: HTTP request.
        exc: Exception to handle.

    Returns:
        JSON error response.
    """
    if isinstance(exc, PayloadTooLargeException):
        logger.warning(f"Payload too large: {exc}")
        return build_error_response(
            request=request,
            code="PAYLOAD_TOO_LARGE",
            message=str(exc),
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            details={"max_bytes": exc.limit_bytes},
        )

    if isinstance(exc, ValidationException):
        logger.warning(f"Validation error: {exc}")
        return build_error_response(
            request=request,
            code="VALIDATION_ERROR",
            message=str(exc),
            status_code=status.HTTP_400_BAD_REQUEST,
            details={"field": exc.field} if exc.field else None,
        )

    if isinstance(exc, UnauthenticatedException):
        logger.warning(f"Unauthenticated: {exc}")
        return build_error_response(
            request=request,
            code="UNAUTHENTICATED",
            message="Missing or invalid credentials",
            status_code=status.HTTP_401_UNAUTHORIZED,
        )

    if isinstance(exc, NotVideoOwnerException):
        logger.warning(f"Forbidden: {exc}")
        return build_error_response(
            request=request,
            code="NOT_VIDEO_OWNER",
            message="You are not the owner of this video",
            status_code=status.HTTP_403_FORBIDDEN,
            details={"video_id": exc.video_id},
        )

    if isinstance(exc, AuthException):
        logger.warning(f"Auth error: {exc}")
        return build_error_response(
            request=request,
            code="FORBIDDEN",
            message="Access denied",
            status_code=status.HTTP_403_FORBIDDEN,
        )

    if isinstance(exc, VideoNotFoundException):
        logger.warning(f"Video not found: {exc}")
        return build_error_response(
            request=request,
            code="VIDEO_NOT_FOUND",
            message=str(exc),
            status_code=status.HTTP_404_NOT_FOUND,
            details={"video_id": exc.video_id},
        )

    if isinstance(exc, MediaProcessingException):
        logger.error(
            f"Media processing failed at {exc.stage}: {exc.reason}",
            extra={
                "stage": exc.stage,
                "exit_code": exc.exit_code,
                "diagnostics": exc.diagnostics,
            },
        )
        return build_error_response(
            request=request,
            code="PROCESSING_ERROR",
            message="Could not process video",
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    if isinstance(exc, StagingException):
        logger.error(f"Staging failed: {exc.reason}")
        return build_error_response(
            request=request,
            code="INTERNAL_ERROR",
            message=GENERIC_SERVER_MESSAGE,
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    if isinstance(exc, StorageException):
        logger.error(
            f"Storage error: {exc.reason}",
            extra={"bucket": exc.bucket, "key": exc.key},
        )
        return build_error_response(
            request=request,
            code="STORAGE_ERROR",
            message=GENERIC_STORAGE_MESSAGE,
            status_code=status.HTTP_502_BAD_GATEWAY,
        )

    if isinstance(exc, MalformedLocationException):
        logger.error(f"Corrupt video location: {exc}")
        return build_error_response(
            request=request,
            code="INTERNAL_ERROR",
            message=GENERIC_SERVER_MESSAGE,
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    if isinstance(exc, DomainException):
        logger.warning(f"Domain error: {exc}")
        return build_error_response(
            request=request,
            code="DOMAIN_ERROR",
            message=str(exc),
            status_code=status.HTTP_400_BAD_REQUEST,
        )

    # Catch-all for unexpected errors
    logger.exception(f"Unexpected error: {exc}")
    return build_error_response(
        request=request,
        code="INTERNAL_ERROR",
        message=GENERIC_SERVER_MESSAGE,
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )


async def error_handler_middleware(
    request: Request,
    call_next: RequestResponseEndpoint,
) -> Response:
    """Middleware to catch and format all exceptions.

    Args:
        request: HTTP request.
        call_next: Next handler in chain.

    Returns:
        HTTP response.
    """
    try:
        return await call_next(request)
    except Exception as exc:
        return _handle_exception(request, exc)


async def http_exception_handler(
    request: Request,
    exc: StarletteHTTPException,
) -> JSONResponse:
    """Render framework HTTP errors (404 routes, 405, 413) in the API's error shape.

    Args:
        request: HTTP request.
        exc: HTTP exception raised by routing or middleware.

    Returns:
        JSON error response.
    """
    code = _HTTP_ERROR_CODES.get(exc.status_code, "HTTP_ERROR")
    if exc.status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
        logger.error(f"HTTP error {exc.status_code}: {exc.detail}")
    else:
        logger.warning(f"HTTP error {exc.status_code}: {exc.detail}")
    return build_error_response(
        request=request,
        code=code,
        message=str(exc.detail),
        status_code=exc.status_code,
    )


_HTTP_ERROR_CODES = {
    status.HTTP_401_UNAUTHORIZED: "UNAUTHENTICATED",
    status.HTTP_404_NOT_FOUND: "NOT_FOUND",
    status.HTTP_405_METHOD_NOT_ALLOWED: "METHOD_NOT_ALLOWED",
    status.HTTP_413_REQUEST_ENTITY_TOO_LARGE: "PAYLOAD_TOO_LARGE",
}
