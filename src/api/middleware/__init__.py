"""API middleware components."""

from src.api.middleware.body_limit import BodySizeLimitMiddleware
from src.api.middleware.error_handler import (
    error_handler_middleware,
    http_exception_handler,
)
from src.api.middleware.logging import LoggingMiddleware

__all__ = [
    "BodySizeLimitMiddleware",
    "LoggingMiddleware",
    "error_handler_middleware",
    "http_exception_handler",
]
