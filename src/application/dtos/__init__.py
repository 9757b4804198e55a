"""Data transfer objects for API boundaries."""

from src.application.dtos.videos import (
    CreateVideoRequest,
    UploadStep,
    UploadVideoResponse,
    VideoListResponse,
    VideoResponse,
)

__all__ = [
    "CreateVideoRequest",
    "UploadStep",
    "UploadVideoResponse",
    "VideoListResponse",
    "VideoResponse",
]
