"""Object storage abstractions and implementations."""

from src.commons.infrastructure.blob.base import (
    BlobMetadata,
    BlobStorageBase,
    HealthStatus,
)
from src.commons.infrastructure.blob.minio_provider import MinioBlobStorage

__all__ = [
    # Base classes
    "BlobMetadata",
    "BlobStorageBase",
    "HealthStatus",
    # Implementations
    "MinioBlobStorage",
]
