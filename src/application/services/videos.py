"""Video record use cases: create, fetch and list."""

from uuid import UUID

from src.application.dtos.videos import CreateVideoRequest, VideoResponse
from src.application.services.presign import PresignService
from src.application.services.records import VideoRecordStore
from src.domain.exceptions import NotVideoOwnerException
from src.domain.models.video import VideoRecord


class VideoService:
    """Owner-scoped access to video records, always returning signed URLs."""

    def __init__(
        self,
        record_store: VideoRecordStore,
        presign_service: PresignService,
    ) -> None:
        self._records = record_store
        self._presign = presign_service

    async def create_video(
        self,
        user_id: UUID,
        request: CreateVideoRequest,
    ) -> VideoResponse:
        """Create a draft record owned by the caller."""
        record = VideoRecord(
            owner_id=user_id,
            title=request.title,
            description=request.description,
        )
        await self._records.create_record(record)
        return await self._presign.sign_record(record)

    async def get_video(self, video_id: UUID, user_id: UUID) -> VideoResponse:
        """Fetch one of the caller's videos.

        Raises:
            VideoNotFoundException: No record with this ID.
            NotVideoOwnerException: The caller does not own it.
        """
        record = await self._records.get_record(video_id)
        if not record.is_owned_by(user_id):
            raise NotVideoOwnerException(str(video_id), str(user_id))
        return await self._presign.sign_record(record)

    async def list_videos(
        self,
        user_id: UUID,
        skip: int = 0,
        limit: int = 100,
    ) -> list[VideoResponse]:
        """List the caller's videos, newest first."""
        records = await self._records.list_for_owner(user_id, skip=skip, limit=limit)
        return [await self._presign.sign_record(record) for record in records]
