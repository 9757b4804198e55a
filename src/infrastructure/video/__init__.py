"""Video processing services."""

from src.infrastructure.video.base import MediaProcessorBase, ProcessedVideo
from src.infrastructure.video.ffmpeg_processor import FFmpegMediaProcessor

__all__ = [
    # Base classes
    "MediaProcessorBase",
    "ProcessedVideo",
    # Implementations
    "FFmpegMediaProcessor",
]
