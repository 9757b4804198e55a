"""Abstract base class for object storage operations."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import BinaryIO


@dataclass
class BlobMetadata:
    """Metadata for a stored object."""

    bucket: str
    path: str
    size_bytes: int
    content_type: str
    etag: str


@dataclass
class HealthStatus:
    """Health check result."""

    healthy: bool
    latency_ms: float
    message: str | None = None
    details: dict[str, str] | None = None


class BlobStorageBase(ABC):
    """Abstract base class for object storage.

    Every method makes exactly one attempt. Transport and service errors are
    raised as ``StorageException``.

    Implementations should handle:
    - MinIO (local development)
    - AWS S3
    """

    @abstractmethod
    async def upload(
        self,
        bucket: str,
        path: str,
        data: BinaryIO | bytes,
        content_type: str = "application/octet-stream",
        metadata: dict[str, str] | None = None,
    ) -> BlobMetadata:
        """Upload a whole stream as one object.

        Args:
            bucket: Target bucket name.
            path: Object key within the bucket.
            data: Seekable file-like object or bytes to upload.
            content_type: MIME type stored with the object.
            metadata: Optional key-value metadata.

        Returns:
            Metadata of the uploaded object.

        Raises:
            StorageException: If the store rejects the upload.
        """

    @abstractmethod
    async def generate_presigned_url(
        self,
        bucket: str,
        path: str,
        expiry_seconds: int = 3600,
    ) -> str:
        """Generate a time-bounded signed GET URL.

        Args:
            bucket: Bucket name.
            path: Object key within the bucket.
            expiry_seconds: URL validity duration.

        Returns:
            Presigned URL string.
        """

    @abstractmethod
    async def delete(self, bucket: str, path: str) -> None:
        """Delete an object. Deleting a missing object is not an error."""

    @abstractmethod
    async def create_bucket(self, bucket: str) -> bool:
        """Create a bucket.

        Returns:
            True if created, False if it already existed.
        """

    @abstractmethod
    async def health_check(self) -> HealthStatus:
        """Check service health.

        Returns:
            Health status with latency info.
        """
