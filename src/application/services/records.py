"""Video record persistence on top of the document database."""

from typing import Any
from uuid import UUID

from src.commons.infrastructure.documentdb.base import DocumentDBBase
from src.commons.telemetry import get_logger
from src.domain.exceptions import VideoNotFoundException
from src.domain.models.video import VideoRecord


def _to_document(record: VideoRecord) -> dict[str, Any]:
    doc = record.model_dump(mode="json")
    doc["id"] = str(record.id)
    return doc


def _from_document(doc: dict[str, Any]) -> VideoRecord:
    return VideoRecord.model_validate(doc)


class VideoRecordStore:
    """Reads and writes VideoRecords.

    Only the record store touches the ``videos`` collection; the pipeline
    never issues raw queries.
    """

    def __init__(self, document_db: DocumentDBBase, collection: str = "videos") -> None:
        """Initialize the record store.

        Args:
            document_db: Document database provider.
            collection: Collection holding video records.
        """
        self._db = document_db
        self._collection = collection
        self._logger = get_logger(__name__)

    async def create_record(self, record: VideoRecord) -> VideoRecord:
        """Insert a new record."""
        await self._db.insert(self._collection, _to_document(record))
        self._logger.info(
            "Created video record",
            extra={"video_id": str(record.id), "owner_id": str(record.owner_id)},
        )
        return record

    async def get_record(self, video_id: UUID) -> VideoRecord:
        """Load a record by ID.

        Raises:
            VideoNotFoundException: If no record has this ID.
        """
        doc = await self._db.find_by_id(self._collection, str(video_id))
        if doc is None:
            raise VideoNotFoundException(str(video_id))
        return _from_document(doc)

    async def update_record(self, record: VideoRecord) -> VideoRecord:
        """Persist all mutable fields of an existing record.

        Raises:
            VideoNotFoundException: If the record was deleted meanwhile.
        """
        doc = _to_document(record)
        matched = await self._db.update(self._collection, doc.pop("id"), doc)
        if not matched:
            raise VideoNotFoundException(str(record.id))
        return record

    async def list_for_owner(
        self,
        owner_id: UUID,
        skip: int = 0,
        limit: int = 100,
    ) -> list[VideoRecord]:
        """List an owner's records, newest first."""
        docs = await self._db.find(
            self._collection,
            {"owner_id": str(owner_id)},
            skip=skip,
            limit=limit,
            sort=[("created_at", -1)],
        )
        return [_from_document(doc) for doc in docs]
