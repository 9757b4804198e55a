"""MinIO SDK implementation of object storage."""

import asyncio
import io
import time
from datetime import timedelta
from typing import BinaryIO

from minio import Minio
from minio.error import MinioException

from src.commons.infrastructure.blob.base import (
    BlobMetadata,
    BlobStorageBase,
    HealthStatus,
)
from src.commons.telemetry import get_logger
from src.domain.exceptions import StorageException

logger = get_logger(__name__)


class MinioBlobStorage(BlobStorageBase):
    """MinIO implementation of object storage.

    Works with both MinIO (local development) and AWS S3 (production). The
    SDK client is thread safe, so one instance serves all requests; blocking
    SDK calls run in the default executor.
    """

    def __init__(
        self,
        endpoint: str,
        access_key: str,
        secret_key: str,
        secure: bool = False,
        region: str | None = None,
    ) -> None:
        """Initialize MinIO client.

        Args:
            endpoint: MinIO/S3 endpoint (e.g., "localhost:9000").
            access_key: Access key ID.
            secret_key: Secret access key.
            secure: Use HTTPS connection.
            region: Bucket region. Setting it lets URLs be presigned without
                a region lookup round trip.
        """
        self._client = Minio(
            endpoint=endpoint,
            access_key=access_key,
            secret_key=secret_key,
            secure=secure,
            region=region,
        )
        self._endpoint = endpoint

    async def upload(
        self,
        bucket: str,
        path: str,
        data: BinaryIO | bytes,
        content_type: str = "application/octet-stream",
        metadata: dict[str, str] | None = None,
    ) -> BlobMetadata:
        """Upload a whole stream as one object."""
        loop = asyncio.get_running_loop()

        if isinstance(data, bytes):
            stream: BinaryIO = io.BytesIO(data)
            length = len(data)
        else:
            data.seek(0, io.SEEK_END)
            length = data.tell()
            data.seek(0)
            stream = data

        def _upload() -> BlobMetadata:
            result = self._client.put_object(
                bucket_name=bucket,
                object_name=path,
                data=stream,
                length=length,
                content_type=content_type,
                metadata=metadata,  # type: ignore[arg-type]
            )
            return BlobMetadata(
                bucket=bucket,
                path=path,
                size_bytes=length,
                content_type=content_type,
                etag=result.etag or "",
            )

        try:
            uploaded = await loop.run_in_executor(None, _upload)
        except (MinioException, OSError) as e:
            raise StorageException(bucket, path, str(e)) from e

        logger.debug(
            "Uploaded object",
            extra={"bucket": bucket, "key": path, "size_bytes": length},
        )
        return uploaded

    async def generate_presigned_url(
        self,
        bucket: str,
        path: str,
        expiry_seconds: int = 3600,
    ) -> str:
        """Generate a time-bounded signed GET URL."""
        loop = asyncio.get_running_loop()
        expires = timedelta(seconds=expiry_seconds)

        def _presign() -> str:
            return str(self._client.presigned_get_object(bucket, path, expires))

        try:
            return await loop.run_in_executor(None, _presign)
        except (MinioException, OSError, ValueError) as e:
            raise StorageException(bucket, path, f"presign failed: {e}") from e

    async def delete(self, bucket: str, path: str) -> None:
        """Delete an object."""
        loop = asyncio.get_running_loop()
        try:
            await loop.run_in_executor(None, self._client.remove_object, bucket, path)
        except (MinioException, OSError) as e:
            raise StorageException(bucket, path, str(e)) from e

    async def create_bucket(self, bucket: str) -> bool:
        """Create a bucket if it does not exist yet."""
        loop = asyncio.get_running_loop()

        def _create() -> bool:
            if self._client.bucket_exists(bucket):
                return False
            self._client.make_bucket(bucket)
            return True

        try:
            return await loop.run_in_executor(None, _create)
        except (MinioException, OSError) as e:
            raise StorageException(bucket, "", str(e)) from e

    async def health_check(self) -> HealthStatus:
        """Check service health."""
        start = time.perf_counter()
        loop = asyncio.get_running_loop()
        try:
            await loop.run_in_executor(None, self._client.list_buckets)
        except (MinioException, OSError) as e:
            return HealthStatus(
                healthy=False,
                latency_ms=(time.perf_counter() - start) * 1000,
                message=f"MinIO health check failed: {e}",
                details={"endpoint": self._endpoint, "error": str(e)},
            )
        return HealthStatus(
            healthy=True,
            latency_ms=(time.perf_counter() - start) * 1000,
            message="MinIO is healthy",
            details={"endpoint": self._endpoint},
        )
