"""Unit tests for infrastructure factory."""

from pathlib import Path
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from src.infrastructure.auth import JWTAuthenticator
from src.infrastructure.factory import (
    InfrastructureFactory,
    get_factory,
    reset_factory,
)
from src.infrastructure.process import SubprocessCommandRunner
from src.infrastructure.staging import LocalStagingStore
from src.infrastructure.video import FFmpegMediaProcessor


@pytest.fixture(autouse=True)
def reset_factory_before_each():
    """Reset factory singleton before each test."""
    reset_factory()
    yield
    reset_factory()


@pytest.fixture
def mock_settings():
    """Create mock settings."""
    settings = MagicMock()

    # Blob storage settings
    settings.blob_storage.endpoint = "localhost:9000"
    settings.blob_storage.access_key = "minioadmin"
    settings.blob_storage.secret_key = "minioadmin"
    settings.blob_storage.use_ssl = False
    settings.blob_storage.region = "us-east-1"

    # Document DB settings
    settings.document_db.host = "localhost"
    settings.document_db.port = 27017
    settings.document_db.username = ""
    settings.document_db.password = ""
    settings.document_db.database = "test_db"
    settings.document_db.auth_source = "admin"

    # Media settings
    settings.media.ffmpeg_path = "/opt/ffmpeg"
    settings.media.ffprobe_path = "/opt/ffprobe"
    settings.media.processed_suffix = ".processing"
    settings.media.staging_dir = None
    settings.media.copy_buffer_bytes = 65536

    # Auth settings
    settings.auth.jwt_secret = "test-secret"
    settings.auth.jwt_algorithm = "HS256"
    settings.auth.issuer = None

    return settings


class TestInfrastructureFactory:
    """Tests for InfrastructureFactory."""

    def test_factory_init(self, mock_settings):
        """Test factory initialization."""
        factory = InfrastructureFactory(mock_settings)
        assert factory.settings is mock_settings
        assert factory._instances == {}

    @patch("src.infrastructure.factory.MinioBlobStorage")
    def test_get_blob_storage(self, mock_minio_class, mock_settings):
        """Test getting blob storage."""
        mock_instance = MagicMock()
        mock_minio_class.return_value = mock_instance

        factory = InfrastructureFactory(mock_settings)
        blob = factory.get_blob_storage()

        assert blob is mock_instance
        assert factory.get_blob_storage() is blob
        mock_minio_class.assert_called_once_with(
            endpoint="localhost:9000",
            access_key="minioadmin",
            secret_key="minioadmin",
            secure=False,
            region="us-east-1",
        )

    @patch("src.infrastructure.factory.MongoDBDocumentDB")
    def test_get_document_db_without_auth(self, mock_mongo_class, mock_settings):
        """Test getting document database without authentication."""
        mock_instance = MagicMock()
        mock_mongo_class.return_value = mock_instance

        factory = InfrastructureFactory(mock_settings)
        doc_db = factory.get_document_db()

        assert doc_db is mock_instance
        mock_mongo_class.assert_called_once_with(
            connection_string="mongodb://localhost:27017",
            database_name="test_db",
        )

    @patch("src.infrastructure.factory.MongoDBDocumentDB")
    def test_get_document_db_with_auth(self, mock_mongo_class, mock_settings):
        """Test getting document database with authentication."""
        mock_settings.document_db.username = "user"
        mock_settings.document_db.password = "pass"

        factory = InfrastructureFactory(mock_settings)
        factory.get_document_db()

        connection_string = mock_mongo_class.call_args.kwargs["connection_string"]
        assert "user:pass@localhost:27017" in connection_string
        assert connection_string.endswith("authSource=admin")

    def test_get_command_runner(self, mock_settings):
        """Test the runner is a shared subprocess runner."""
        factory = InfrastructureFactory(mock_settings)
        runner = factory.get_command_runner()

        assert isinstance(runner, SubprocessCommandRunner)
        assert factory.get_command_runner() is runner

    def test_get_media_processor(self, mock_settings):
        """Test the processor uses configured tool paths and the shared runner."""
        factory = InfrastructureFactory(mock_settings)
        processor = factory.get_media_processor()

        assert isinstance(processor, FFmpegMediaProcessor)
        assert processor._ffmpeg == "/opt/ffmpeg"
        assert processor._ffprobe == "/opt/ffprobe"
        assert processor._runner is factory.get_command_runner()
        assert factory.get_media_processor() is processor

    def test_get_staging_store_default_root(self, mock_settings):
        factory = InfrastructureFactory(mock_settings)
        store = factory.get_staging_store()

        assert isinstance(store, LocalStagingStore)
        assert store._root is None
        assert store._buffer_size == 65536

    def test_get_staging_store_configured_root(self, mock_settings, tmp_path):
        mock_settings.media.staging_dir = str(tmp_path)

        store = InfrastructureFactory(mock_settings).get_staging_store()

        assert store._root == Path(tmp_path)

    def test_get_authenticator(self, mock_settings):
        factory = InfrastructureFactory(mock_settings)
        auth = factory.get_authenticator()

        assert isinstance(auth, JWTAuthenticator)
        assert factory.get_authenticator() is auth

    def test_get_authenticator_requires_secret(self, mock_settings):
        mock_settings.auth.jwt_secret = ""

        with pytest.raises(ValueError, match="jwt_secret"):
            InfrastructureFactory(mock_settings).get_authenticator()

    async def test_close_all(self, mock_settings):
        """Test closing all services, sync and async."""
        factory = InfrastructureFactory(mock_settings)

        sync_service = MagicMock()
        async_service = MagicMock()
        async_service.close = AsyncMock()
        factory._instances["sync"] = sync_service
        factory._instances["async"] = async_service

        await factory.close_all()

        sync_service.close.assert_called_once()
        async_service.close.assert_awaited_once()
        assert factory._instances == {}

    async def test_close_all_survives_failing_close(self, mock_settings):
        factory = InfrastructureFactory(mock_settings)
        broken = MagicMock()
        broken.close.side_effect = RuntimeError("boom")
        factory._instances["broken"] = broken

        await factory.close_all()

        assert factory._instances == {}


class TestFactorySingleton:
    """Tests for factory singleton functions."""

    def test_get_factory_requires_settings_first_call(self):
        """Test that settings are required on first call."""
        with pytest.raises(ValueError, match="Settings required"):
            get_factory()

    def test_get_factory_returns_same_instance(self, mock_settings):
        """Test that same instance is returned."""
        factory1 = get_factory(mock_settings)
        factory2 = get_factory()  # No settings needed now

        assert factory1 is factory2

    def test_reset_factory(self, mock_settings):
        """Test factory reset."""
        factory1 = get_factory(mock_settings)
        reset_factory()

        with pytest.raises(ValueError):
            get_factory()

        factory2 = get_factory(mock_settings)
        assert factory1 is not factory2
