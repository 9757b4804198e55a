"""Infrastructure factory for creating service instances from configuration."""

from pathlib import Path
from typing import Any, cast

from src.commons.infrastructure.blob import BlobStorageBase, MinioBlobStorage
from src.commons.infrastructure.documentdb import DocumentDBBase, MongoDBDocumentDB
from src.commons.settings.models import Settings
from src.commons.telemetry import get_logger
from src.infrastructure.auth import JWTAuthenticator
from src.infrastructure.process import CommandRunnerBase, SubprocessCommandRunner
from src.infrastructure.staging import LocalStagingStore
from src.infrastructure.video import FFmpegMediaProcessor, MediaProcessorBase

logger = get_logger(__name__)


class InfrastructureFactory:
    """Factory for creating infrastructure service instances.

    Each provider is built once and shared across requests; all of them are
    safe for concurrent use.
    """

    def __init__(self, settings: Settings) -> None:
        """Initialize factory with settings.

        Args:
            settings: Application settings.
        """
        self._settings = settings
        self._instances: dict[str, Any] = {}

    @property
    def settings(self) -> Settings:
        """Settings this factory was built from."""
        return self._settings

    def get_blob_storage(self) -> BlobStorageBase:
        """Get object storage instance."""
        if "blob_storage" not in self._instances:
            blob_settings = self._settings.blob_storage
            self._instances["blob_storage"] = MinioBlobStorage(
                endpoint=blob_settings.endpoint,
                access_key=blob_settings.access_key,
                secret_key=blob_settings.secret_key,
                secure=blob_settings.use_ssl,
                region=blob_settings.region,
            )
        return cast("BlobStorageBase", self._instances["blob_storage"])

    def get_document_db(self) -> DocumentDBBase:
        """Get document database instance."""
        if "document_db" not in self._instances:
            doc_settings = self._settings.document_db
            if doc_settings.username and doc_settings.password:
                connection_string = (
                    f"mongodb://{doc_settings.username}:{doc_settings.password}"
                    f"@{doc_settings.host}:{doc_settings.port}"
                    f"/?authSource={doc_settings.auth_source}"
                )
            else:
                connection_string = f"mongodb://{doc_settings.host}:{doc_settings.port}"
            self._instances["document_db"] = MongoDBDocumentDB(
                connection_string=connection_string,
                database_name=doc_settings.database,
            )
        return cast("DocumentDBBase", self._instances["document_db"])

    def get_command_runner(self) -> CommandRunnerBase:
        """Get the external command runner."""
        if "command_runner" not in self._instances:
            self._instances["command_runner"] = SubprocessCommandRunner()
        return cast("CommandRunnerBase", self._instances["command_runner"])

    def get_media_processor(self) -> MediaProcessorBase:
        """Get the remux/probe processor."""
        if "media_processor" not in self._instances:
            media = self._settings.media
            self._instances["media_processor"] = FFmpegMediaProcessor(
                runner=self.get_command_runner(),
                ffmpeg_path=media.ffmpeg_path,
                ffprobe_path=media.ffprobe_path,
                processed_suffix=media.processed_suffix,
            )
        return cast("MediaProcessorBase", self._instances["media_processor"])

    def get_staging_store(self) -> LocalStagingStore:
        """Get the local staging store."""
        if "staging_store" not in self._instances:
            media = self._settings.media
            self._instances["staging_store"] = LocalStagingStore(
                root_dir=Path(media.staging_dir) if media.staging_dir else None,
                buffer_size=media.copy_buffer_bytes,
                max_bytes=media.max_upload_bytes,
            )
        return cast("LocalStagingStore", self._instances["staging_store"])

    def get_authenticator(self) -> JWTAuthenticator:
        """Get the bearer token authenticator.

        Raises:
            ValueError: If no signing secret is configured.
        """
        if "authenticator" not in self._instances:
            auth = self._settings.auth
            if not auth.jwt_secret:
                raise ValueError("auth.jwt_secret must be configured")
            self._instances["authenticator"] = JWTAuthenticator(
                secret=auth.jwt_secret,
                algorithm=auth.jwt_algorithm,
                issuer=auth.issuer,
            )
        return cast("JWTAuthenticator", self._instances["authenticator"])

    async def close_all(self) -> None:
        """Close all service connections."""
        for name, instance in self._instances.items():
            close = getattr(instance, "close", None)
            if close is None:
                continue
            try:
                result = close()
                if hasattr(result, "__await__"):
                    await result
            except Exception:
                logger.warning(f"Error closing {name}", exc_info=True)

        self._instances.clear()


class _FactoryHolder:
    """Holder for the factory singleton to avoid global statements."""

    instance: InfrastructureFactory | None = None


def get_factory(settings: Settings | None = None) -> InfrastructureFactory:
    """Get or create the infrastructure factory singleton.

    Args:
        settings: Settings to use. Required on first call.

    Returns:
        Infrastructure factory instance.

    Raises:
        ValueError: If settings not provided on first call.
    """
    if _FactoryHolder.instance is None:
        if settings is None:
            raise ValueError("Settings required to initialize factory")
        _FactoryHolder.instance = InfrastructureFactory(settings)

    return _FactoryHolder.instance


def reset_factory() -> None:
    """Reset the factory singleton (for testing)."""
    _FactoryHolder.instance = None
