"""Video record domain model."""

from datetime import UTC, datetime
from typing import Self
from uuid import UUID, uuid4

from pydantic import BaseModel, Field

from src.domain.value_objects.video_location import VideoLocation


class VideoRecord(BaseModel):
    """A user's video as persisted by the record store.

    ``video_location`` holds the encoded storage location (see
    ``VideoLocation``). It is None until the first successful upload and is
    overwritten by each later one. It is never a URL.
    """

    id: UUID = Field(
        default_factory=uuid4,
        description="Internal UUID for this video record",
    )
    owner_id: UUID = Field(description="ID of the user who created the video")
    title: str = Field(default="", max_length=200, description="Video title")
    description: str = Field(default="", description="Video description")
    video_location: str | None = Field(
        default=None,
        description="Encoded '<bucket>,<key>' of the uploaded video",
    )
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(UTC),
        description="When this record was created",
    )
    updated_at: datetime = Field(
        default_factory=lambda: datetime.now(UTC),
        description="Last update timestamp",
    )

    @property
    def has_video(self) -> bool:
        """Check if a video file has been uploaded."""
        return self.video_location is not None

    def is_owned_by(self, user_id: UUID) -> bool:
        """Check if the given user owns this record."""
        return self.owner_id == user_id

    def with_location(self, location: VideoLocation) -> Self:
        """Create a new instance pointing at a freshly uploaded object.

        Args:
            location: Where the processed video was stored.

        Returns:
            A new VideoRecord with the encoded location and a fresh timestamp.
        """
        return self.model_copy(
            update={
                "video_location": location.encode(),
                "updated_at": datetime.now(UTC),
            }
        )
