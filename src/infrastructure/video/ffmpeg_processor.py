"""FFmpeg implementation of streaming preparation."""

import json
import subprocess
from pathlib import Path
from typing import Any

from src.commons.telemetry import get_logger, timed
from src.domain.exceptions import MediaProcessingException
from src.domain.value_objects.video_geometry import VideoGeometry
from src.infrastructure.process.base import CommandResult, CommandRunnerBase
from src.infrastructure.video.base import MediaProcessorBase

logger = get_logger(__name__)


class FFmpegMediaProcessor(MediaProcessorBase):
    """FFmpeg-based fast-start remux and FFprobe-based geometry probe.

    Tools are invoked through an injected command runner, so tests can
    script their output without ffmpeg installed.
    """

    def __init__(
        self,
        runner: CommandRunnerBase,
        ffmpeg_path: str = "ffmpeg",
        ffprobe_path: str = "ffprobe",
        processed_suffix: str = ".processing",
    ) -> None:
        """Initialize the processor.

        Args:
            runner: Command runner used for every tool invocation.
            ffmpeg_path: Path to ffmpeg executable.
            ffprobe_path: Path to ffprobe executable.
            processed_suffix: Suffix appended to the input path for the remux
                output.
        """
        self._runner = runner
        self._ffmpeg = ffmpeg_path
        self._ffprobe = ffprobe_path
        self._suffix = processed_suffix

    def processed_path_for(self, video_path: Path) -> Path:
        """Deterministic sibling path the remux writes to."""
        return video_path.with_name(video_path.name + self._suffix)

    @timed
    async def remux_for_fast_start(self, video_path: Path) -> Path:
        """Copy streams into a new MP4 with the moov atom up front."""
        output_path = self.processed_path_for(video_path)
        args = [
            "-i",
            str(video_path),
            "-c",
            "copy",
            "-movflags",
            "faststart",
            "-f",
            "mp4",
            "-y",
            str(output_path),
        ]

        result = await self._invoke("remux", self._ffmpeg, args)
        if not result.succeeded:
            raise self._failure("remux", result)

        return output_path

    @timed
    async def probe_geometry(self, video_path: Path) -> VideoGeometry:
        """Ask ffprobe for stream metadata and read the first video stream."""
        args = [
            "-v",
            "error",
            "-print_format",
            "json",
            "-show_streams",
            str(video_path),
        ]

        result = await self._invoke("probe", self._ffprobe, args)
        if not result.succeeded:
            raise self._failure("probe", result)

        try:
            data = json.loads(result.stdout or b"{}")
        except json.JSONDecodeError as e:
            raise MediaProcessingException(
                stage="probe",
                reason="unparseable ffprobe output",
                diagnostics=result.stderr_text,
                exit_code=result.exit_code,
            ) from e

        if not isinstance(data, dict):
            raise MediaProcessingException(
                stage="probe",
                reason="unexpected ffprobe output",
                diagnostics=result.stderr_text,
                exit_code=result.exit_code,
            )

        streams = data.get("streams") or []
        if not isinstance(streams, list) or not all(isinstance(s, dict) for s in streams):
            raise MediaProcessingException(
                stage="probe",
                reason="unexpected ffprobe output",
                diagnostics=result.stderr_text,
                exit_code=result.exit_code,
            )

        return self._geometry_from_streams(video_path, streams)

    def _geometry_from_streams(
        self,
        video_path: Path,
        streams: list[dict[str, Any]],
    ) -> VideoGeometry:
        # Prefer the first stream tagged as video; fall back to the first one
        stream = next(
            (s for s in streams if s.get("codec_type") == "video"),
            streams[0] if streams else None,
        )
        if stream is None:
            logger.warning(
                "Probe reported no streams, geometry unknown",
                extra={"video_path": str(video_path)},
            )
            return VideoGeometry.unknown()

        try:
            width = int(stream.get("width") or 0)
            height = int(stream.get("height") or 0)
        except (TypeError, ValueError) as e:
            raise MediaProcessingException(
                stage="probe",
                reason=f"non-numeric dimensions in stream: {stream!r}",
            ) from e

        geometry = VideoGeometry(
            width=width if width > 0 else None,
            height=height if height > 0 else None,
        )
        if not geometry.known:
            logger.warning(
                "Probe reported no dimensions, geometry unknown",
                extra={"video_path": str(video_path), "stream_index": stream.get("index")},
            )
        return geometry

    async def _invoke(self, stage: str, command: str, args: list[str]) -> CommandResult:
        try:
            return await self._runner.run(command, args)
        except (OSError, subprocess.SubprocessError) as e:
            raise MediaProcessingException(
                stage=stage,
                reason=f"could not run {command}: {e}",
            ) from e

    def _failure(self, stage: str, result: CommandResult) -> MediaProcessingException:
        logger.error(
            f"{result.command} exited with status {result.exit_code}",
            extra={"stage": stage, "stderr": result.stderr_text},
        )
        return MediaProcessingException(
            stage=stage,
            reason=f"{result.command} exited with status {result.exit_code}",
            diagnostics=result.stderr_text,
            exit_code=result.exit_code,
        )
