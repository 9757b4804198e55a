"""Abstract base class for document database operations."""

from abc import ABC, abstractmethod
from typing import Any

from src.commons.infrastructure.blob.base import HealthStatus


class DocumentDBBase(ABC):
    """Abstract base class for document database operations.

    Documents are plain dicts keyed by a string ``id``. Implementations must
    be safe to share between concurrent requests.

    Implementations should handle:
    - MongoDB
    """

    @abstractmethod
    async def insert(
        self,
        collection: str,
        document: dict[str, Any],
    ) -> str:
        """Insert a document.

        Args:
            collection: Collection name.
            document: Document to insert. Its ``id`` becomes the primary key.

        Returns:
            The document ID.
        """

    @abstractmethod
    async def find_by_id(
        self,
        collection: str,
        document_id: str,
    ) -> dict[str, Any] | None:
        """Find a document by ID.

        Returns:
            The document with its ``id`` field, or None if not found.
        """

    @abstractmethod
    async def find(
        self,
        collection: str,
        filters: dict[str, Any],
        skip: int = 0,
        limit: int = 100,
        sort: list[tuple[str, int]] | None = None,
    ) -> list[dict[str, Any]]:
        """Find documents matching filters.

        Args:
            collection: Collection name.
            filters: Equality filters.
            skip: Number of documents to skip.
            limit: Maximum number of documents.
            sort: Optional list of (field, direction) pairs.

        Returns:
            Matching documents.
        """

    @abstractmethod
    async def update(
        self,
        collection: str,
        document_id: str,
        updates: dict[str, Any],
    ) -> bool:
        """Set fields on a document.

        Returns:
            True if a document matched, False otherwise.
        """

    @abstractmethod
    async def health_check(self) -> HealthStatus:
        """Check service health."""

    async def close(self) -> None:  # noqa: B027
        """Release client resources."""
