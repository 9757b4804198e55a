"""FastAPI dependency injection for services and settings."""

from functools import lru_cache
from typing import Annotated
from uuid import UUID

from fastapi import Depends, Header

from src.application.services.presign import PresignService
from src.application.services.records import VideoRecordStore
from src.application.services.upload import VideoUploadService
from src.application.services.videos import VideoService
from src.commons.settings.loader import get_settings as _load_settings
from src.commons.settings.models import Settings
from src.commons.telemetry import get_logger, set_log_context
from src.infrastructure.factory import (
    InfrastructureFactory,
    get_factory,
    reset_factory,
)

logger = get_logger(__name__)


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings.

    Returns:
        Application settings loaded from config files and environment.
    """
    return _load_settings()


def get_infrastructure_factory(
    settings: Annotated[Settings, Depends(get_settings)],
) -> InfrastructureFactory:
    """Get infrastructure factory with all providers."""
    return get_factory(settings)


def get_record_store(
    factory: Annotated[InfrastructureFactory, Depends(get_infrastructure_factory)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> VideoRecordStore:
    """Get the video record store."""
    return VideoRecordStore(
        document_db=factory.get_document_db(),
        collection=settings.document_db.collections.videos,
    )


def get_presign_service(
    factory: Annotated[InfrastructureFactory, Depends(get_infrastructure_factory)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> PresignService:
    """Get the presign service."""
    return PresignService(
        blob_storage=factory.get_blob_storage(),
        default_ttl_seconds=settings.blob_storage.presigned_url_expiry_seconds,
    )


def get_video_service(
    records: Annotated[VideoRecordStore, Depends(get_record_store)],
    presign: Annotated[PresignService, Depends(get_presign_service)],
) -> VideoService:
    """Get the video record service."""
    return VideoService(record_store=records, presign_service=presign)


def get_upload_service(
    factory: Annotated[InfrastructureFactory, Depends(get_infrastructure_factory)],
    settings: Annotated[Settings, Depends(get_settings)],
    records: Annotated[VideoRecordStore, Depends(get_record_store)],
    presign: Annotated[PresignService, Depends(get_presign_service)],
) -> VideoUploadService:
    """Get the upload pipeline with all dependencies.

    Args:
        factory: Infrastructure factory.
        settings: Application settings.
        records: Video record store.
        presign: Presign service.

    Returns:
        Configured upload service.
    """
    return VideoUploadService(
        staging_store=factory.get_staging_store(),
        media_processor=factory.get_media_processor(),
        blob_storage=factory.get_blob_storage(),
        record_store=records,
        presign_service=presign,
        bucket=settings.blob_storage.bucket,
        allowed_media_types=list(settings.media.allowed_video_types),
    )


async def get_current_user_id(
    factory: Annotated[InfrastructureFactory, Depends(get_infrastructure_factory)],
    authorization: Annotated[str | None, Header()] = None,
) -> UUID:
    """Authenticate the caller from the ``Authorization`` header.

    Raises:
        UnauthenticatedException: Missing, malformed or invalid token.
    """
    user_id = factory.get_authenticator().authenticate(authorization)
    set_log_context(user_id=str(user_id))
    return user_id


# Type aliases for cleaner route signatures
SettingsDep = Annotated[Settings, Depends(get_settings)]
FactoryDep = Annotated[InfrastructureFactory, Depends(get_infrastructure_factory)]
VideoServiceDep = Annotated[VideoService, Depends(get_video_service)]
UploadServiceDep = Annotated[VideoUploadService, Depends(get_upload_service)]
CurrentUserDep = Annotated[UUID, Depends(get_current_user_id)]


async def init_services(settings: Settings) -> None:
    """Initialize infrastructure on startup and make sure the bucket exists.

    Args:
        settings: Application settings.
    """
    factory = get_factory(settings)

    # Pre-initialize critical services to fail fast
    blob = factory.get_blob_storage()
    factory.get_document_db()
    factory.get_authenticator()

    bucket = settings.blob_storage.bucket
    if await blob.create_bucket(bucket):
        logger.info("Created bucket", extra={"bucket": bucket})


async def shutdown_services() -> None:
    """Shutdown all infrastructure services."""
    try:
        factory = get_factory()
        await factory.close_all()
    except ValueError:
        pass  # Factory not initialized
    finally:
        reset_factory()
        get_settings.cache_clear()
