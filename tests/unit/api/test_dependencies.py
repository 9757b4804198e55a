"""Unit tests for service startup wiring."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from src.api.dependencies import init_services
from src.commons.infrastructure.blob.base import BlobStorageBase
from src.commons.settings.models import AuthSettings, BlobStorageSettings, Settings


@pytest.fixture
def settings():
    return Settings(
        blob_storage=BlobStorageSettings(bucket="startup-videos"),
        auth=AuthSettings(jwt_secret="test-secret"),
    )


@pytest.fixture
def factory(blob_storage):
    factory = MagicMock()
    factory.get_blob_storage.return_value = blob_storage
    return factory


class TestInitServices:
    """Tests for init_services."""

    async def test_creates_missing_bucket(self, settings, factory, blob_storage):
        with patch("src.api.dependencies.get_factory", return_value=factory):
            await init_services(settings)

        assert blob_storage.buckets == {"startup-videos"}
        factory.get_document_db.assert_called_once()
        factory.get_authenticator.assert_called_once()

    async def test_existing_bucket_is_left_alone(self, settings, factory):
        blob = AsyncMock(spec=BlobStorageBase)
        blob.create_bucket.return_value = False
        factory.get_blob_storage.return_value = blob

        with patch("src.api.dependencies.get_factory", return_value=factory):
            await init_services(settings)

        blob.create_bucket.assert_awaited_once_with("startup-videos")
