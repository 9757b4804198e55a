"""DTOs for video record and upload operations."""

from datetime import datetime
from enum import Enum
from uuid import UUID

from pydantic import BaseModel, Field

from src.domain.value_objects.video_geometry import AspectClass


class UploadStep(str, Enum):
    """Individual steps in the upload pipeline."""

    VALIDATING = "validating"
    AUTHORIZING = "authorizing"
    STAGING = "staging"
    PROCESSING = "processing"
    UPLOADING = "uploading"
    PERSISTING = "persisting"
    SIGNING = "signing"


class CreateVideoRequest(BaseModel):
    """Request to create a draft video record."""

    title: str = Field(min_length=1, max_length=200, description="Video title")
    description: str = Field(default="", max_length=5000, description="Video description")


class VideoResponse(BaseModel):
    """A video record as returned to clients.

    ``video_url`` is a freshly signed, time-limited URL, never the stored
    location.
    """

    id: UUID = Field(description="Video UUID")
    owner_id: UUID = Field(description="Owner's user UUID")
    title: str = Field(description="Video title")
    description: str = Field(description="Video description")
    video_url: str | None = Field(
        default=None,
        description="Signed URL for playback, if a video has been uploaded",
    )
    created_at: datetime = Field(description="When the record was created")
    updated_at: datetime = Field(description="Last update timestamp")


class UploadVideoResponse(VideoResponse):
    """Response from a successful upload."""

    aspect_class: AspectClass = Field(description="Geometry bucket of the upload")
    width: int | None = Field(default=None, description="Probed width in pixels")
    height: int | None = Field(default=None, description="Probed height in pixels")
    geometry_known: bool = Field(
        description="False when the probe reported no usable video stream",
    )


class VideoListResponse(BaseModel):
    """Response for listing the caller's videos."""

    videos: list[VideoResponse] = Field(description="List of videos")
    count: int = Field(ge=0, description="Number of videos returned")
