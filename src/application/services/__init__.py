"""Application services for video upload and playback."""

from src.application.services.presign import PresignService
from src.application.services.records import VideoRecordStore
from src.application.services.upload import VideoUploadService
from src.application.services.videos import VideoService

__all__ = [
    "PresignService",
    "VideoRecordStore",
    "VideoService",
    "VideoUploadService",
]
