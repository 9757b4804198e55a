"""API route handlers."""

from src.api.openapi.routes import health, videos

__all__ = [
    "health",
    "videos",
]
