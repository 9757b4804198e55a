"""Unit tests for the MinIO object storage provider."""

import io
from datetime import timedelta
from unittest.mock import MagicMock, patch

import pytest
from minio.error import MinioException

from src.domain.exceptions import StorageException


class TestMinioBlobStorage:
    """Tests for MinioBlobStorage."""

    @pytest.fixture
    def mock_minio(self):
        """Patch the MinIO SDK client."""
        with patch(
            "src.commons.infrastructure.blob.minio_provider.Minio"
        ) as mock_client_class:
            client = MagicMock()
            mock_client_class.return_value = client
            yield {"client_class": mock_client_class, "client": client}

    @pytest.fixture
    def storage(self, mock_minio):
        from src.commons.infrastructure.blob.minio_provider import MinioBlobStorage

        return MinioBlobStorage(
            endpoint="localhost:9000",
            access_key="minioadmin",
            secret_key="minioadmin",
            secure=False,
            region="us-east-1",
        )

    def test_client_configuration(self, storage, mock_minio):
        """Test the SDK client is built from the constructor arguments."""
        mock_minio["client_class"].assert_called_once_with(
            endpoint="localhost:9000",
            access_key="minioadmin",
            secret_key="minioadmin",
            secure=False,
            region="us-east-1",
        )

    async def test_upload_stream_with_length_and_content_type(self, storage, mock_minio):
        """Test a file object is uploaded whole with its measured length."""
        mock_minio["client"].put_object.return_value = MagicMock(etag="abc")
        data = io.BytesIO(b"video-bytes")
        data.seek(3)

        meta = await storage.upload("videos", "landscape/k.mp4", data, "video/mp4")

        kwargs = mock_minio["client"].put_object.call_args.kwargs
        assert kwargs["bucket_name"] == "videos"
        assert kwargs["object_name"] == "landscape/k.mp4"
        assert kwargs["length"] == len(b"video-bytes")
        assert kwargs["content_type"] == "video/mp4"
        assert kwargs["data"].tell() == 0
        assert meta.size_bytes == 11
        assert meta.etag == "abc"

    async def test_upload_bytes(self, storage, mock_minio):
        """Test raw bytes are wrapped in a stream."""
        mock_minio["client"].put_object.return_value = MagicMock(etag="e")

        meta = await storage.upload("videos", "k", b"1234")

        assert mock_minio["client"].put_object.call_args.kwargs["length"] == 4
        assert meta.content_type == "application/octet-stream"

    async def test_upload_failure_raises_storage_error(self, storage, mock_minio):
        """Test SDK errors become StorageException with bucket and key."""
        mock_minio["client"].put_object.side_effect = MinioException("Access denied")

        with pytest.raises(StorageException) as exc_info:
            await storage.upload("videos", "k.mp4", b"x", "video/mp4")

        assert exc_info.value.bucket == "videos"
        assert exc_info.value.key == "k.mp4"

    async def test_upload_connection_error(self, storage, mock_minio):
        mock_minio["client"].put_object.side_effect = ConnectionRefusedError("refused")

        with pytest.raises(StorageException, match="refused"):
            await storage.upload("videos", "k.mp4", b"x")

    async def test_presigned_get_url(self, storage, mock_minio):
        """Test GET URLs are signed with the requested expiry."""
        mock_minio["client"].presigned_get_object.return_value = "https://signed"

        url = await storage.generate_presigned_url("videos", "k.mp4", expiry_seconds=120)

        assert url == "https://signed"
        mock_minio["client"].presigned_get_object.assert_called_once_with(
            "videos", "k.mp4", timedelta(seconds=120)
        )
        mock_minio["client"].presigned_put_object.assert_not_called()

    async def test_presign_failure(self, storage, mock_minio):
        mock_minio["client"].presigned_get_object.side_effect = ValueError("bad expiry")

        with pytest.raises(StorageException, match="presign failed"):
            await storage.generate_presigned_url("videos", "k.mp4")

    async def test_create_bucket_when_missing(self, storage, mock_minio):
        mock_minio["client"].bucket_exists.return_value = False

        assert await storage.create_bucket("videos") is True
        mock_minio["client"].make_bucket.assert_called_once_with("videos")

    async def test_create_bucket_when_present(self, storage, mock_minio):
        mock_minio["client"].bucket_exists.return_value = True

        assert await storage.create_bucket("videos") is False
        mock_minio["client"].make_bucket.assert_not_called()

    async def test_delete(self, storage, mock_minio):
        await storage.delete("videos", "k.mp4")
        mock_minio["client"].remove_object.assert_called_once_with("videos", "k.mp4")

    async def test_health_check(self, storage, mock_minio):
        mock_minio["client"].list_buckets.return_value = []

        status = await storage.health_check()

        assert status.healthy is True

    async def test_health_check_failure(self, storage, mock_minio):
        mock_minio["client"].list_buckets.side_effect = OSError("unreachable")

        status = await storage.health_check()

        assert status.healthy is False
        assert "unreachable" in status.message
