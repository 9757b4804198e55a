"""FastAPI application factory and lifespan management."""

import logging
import sys
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.api.dependencies import get_settings, init_services, shutdown_services
from src.api.middleware.body_limit import BodySizeLimitMiddleware
from src.api.middleware.error_handler import (
    error_handler_middleware,
    http_exception_handler,
)
from src.api.middleware.logging import LoggingMiddleware
from src.api.openapi.routes import health, videos
from src.commons.settings.models import Settings
from src.commons.telemetry import configure_logging
from src.commons.telemetry.logger import JsonFormatter, TextFormatter


def _get_formatter(log_format: str) -> logging.Formatter:
    """Get the appropriate formatter based on format type."""
    if log_format == "json":
        return JsonFormatter()
    return TextFormatter()


def _setup_logging() -> None:
    """Configure logging for the application.

    This must be called at module level to ensure our formatters
    are applied before uvicorn starts.
    """
    settings = get_settings()
    log_level = settings.telemetry.log_level or settings.app.log_level

    configure_logging(
        level=log_level,
        format_type=settings.telemetry.log_format,
        logger_name="src",
    )

    # Also configure root logger as fallback
    logging.getLogger().setLevel(getattr(logging, log_level.upper()))


def _configure_uvicorn_logging() -> None:
    """Configure uvicorn loggers to use our format.

    Called during lifespan when uvicorn handlers are available.
    """
    settings = get_settings()
    level = getattr(logging, (settings.telemetry.log_level or settings.app.log_level).upper())
    formatter = _get_formatter(settings.telemetry.log_format)

    for logger_name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
        logger = logging.getLogger(logger_name)
        logger.setLevel(level)
        for handler in logger.handlers:
            handler.setFormatter(formatter)
            handler.setLevel(level)
        if not logger.handlers:
            handler = logging.StreamHandler(sys.stdout)
            handler.setFormatter(formatter)
            handler.setLevel(level)
            logger.addHandler(handler)
            logger.propagate = False


# Configure logging at module import time
_setup_logging()


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncGenerator[None, None]:
    """Manage application lifespan - startup and shutdown.

    Initializes infrastructure, ensures the video bucket exists, and
    closes every client on exit.
    """
    _configure_uvicorn_logging()

    await init_services(get_settings())

    yield

    await shutdown_services()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application instance.
    """
    settings = get_settings()

    app = FastAPI(
        title=settings.app.name,
        version=settings.app.version,
        description="Tubely media service - video upload, processing and playback URLs",
        docs_url="/docs" if settings.server.docs_enabled else None,
        redoc_url="/redoc" if settings.server.docs_enabled else None,
        openapi_url="/openapi.json" if settings.server.docs_enabled else None,
        lifespan=lifespan,
    )

    _configure_middleware(app, settings)
    _register_routes(app, settings)

    return app


def _configure_middleware(app: FastAPI, settings: Settings) -> None:
    """Configure application middleware.

    Starlette runs the last-added middleware outermost, so the order here
    is innermost first: the body limit sees raw bytes, logging wraps it
    with a request ID, and the error handler wraps everything.
    """
    app.add_middleware(
        BodySizeLimitMiddleware,
        max_bytes=settings.media.max_upload_bytes,
    )

    app.add_middleware(LoggingMiddleware)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.server.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.middleware("http")(error_handler_middleware)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)


def _register_routes(app: FastAPI, settings: Settings) -> None:
    """Register API routes."""
    # Health routes (no prefix for standard health checks)
    app.include_router(health.router, tags=["Health"])

    app.include_router(videos.router, prefix=settings.server.api_prefix, tags=["Videos"])


# Create default app instance
app = create_app()
