"""Abstract base class for streaming preparation of uploaded videos."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path

from src.domain.value_objects.video_geometry import AspectClass, VideoGeometry


@dataclass(frozen=True)
class ProcessedVideo:
    """A remuxed video ready for upload, with its probed geometry."""

    source_path: Path
    processed_path: Path
    geometry: VideoGeometry

    @property
    def aspect_class(self) -> AspectClass:
        """Aspect bucket of the processed video."""
        return self.geometry.classify()

    @property
    def width(self) -> int | None:
        return self.geometry.width

    @property
    def height(self) -> int | None:
        return self.geometry.height


class MediaProcessorBase(ABC):
    """Prepares a staged video for progressive playback.

    Implementations should handle:
    - FFmpeg / FFprobe
    """

    @abstractmethod
    async def remux_for_fast_start(self, video_path: Path) -> Path:
        """Move playback metadata ahead of the media payload.

        The output is written next to the input, so it lives and dies with
        the staging area the input belongs to.

        Args:
            video_path: Staged input file.

        Returns:
            Path of the remuxed file.

        Raises:
            MediaProcessingException: If the remux tool fails.
        """

    @abstractmethod
    async def probe_geometry(self, video_path: Path) -> VideoGeometry:
        """Read the pixel dimensions of the primary video stream.

        Args:
            video_path: File to inspect.

        Returns:
            Geometry, possibly unknown if the file reports no streams.

        Raises:
            MediaProcessingException: If the probe tool fails or its output
                cannot be parsed.
        """

    async def process_for_streaming(self, video_path: Path) -> ProcessedVideo:
        """Remux, then probe the remuxed file.

        Args:
            video_path: Staged input file.

        Returns:
            The processed video with geometry and aspect class.
        """
        processed_path = await self.remux_for_fast_start(video_path)
        geometry = await self.probe_geometry(processed_path)
        return ProcessedVideo(
            source_path=video_path,
            processed_path=processed_path,
            geometry=geometry,
        )
