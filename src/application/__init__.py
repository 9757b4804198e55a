"""Application layer - use cases and orchestration.

This layer contains:
- Services: upload pipeline, presigning and record use cases
- DTOs: Data transfer objects for API boundaries
"""

from src.application.dtos import (
    CreateVideoRequest,
    UploadStep,
    UploadVideoResponse,
    VideoListResponse,
    VideoResponse,
)
from src.application.services import (
    PresignService,
    VideoRecordStore,
    VideoService,
    VideoUploadService,
)

__all__ = [
    # DTOs
    "CreateVideoRequest",
    "UploadStep",
    "UploadVideoResponse",
    "VideoListResponse",
    "VideoResponse",
    # Services
    "PresignService",
    "VideoRecordStore",
    "VideoService",
    "VideoUploadService",
]
