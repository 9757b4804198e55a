"""Domain models."""

from src.domain.models.video import VideoRecord

__all__ = [
    "VideoRecord",
]
