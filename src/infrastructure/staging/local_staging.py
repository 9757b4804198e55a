"""Local filesystem staging for inbound uploads."""

import asyncio
import os
import shutil
import tempfile
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO

from src.commons.telemetry import get_logger
from src.domain.exceptions import PayloadTooLargeException, StagingException

logger = get_logger(__name__)

STAGING_PREFIX = "tubely-upload-"


@dataclass
class StagedFile:
    """An upload copied to local disk.

    ``handle`` is open for reading at offset 0. Anything written into
    ``directory`` (for example a remux output next to ``path``) is removed
    together with the staged file.
    """

    path: Path
    directory: Path
    handle: BinaryIO
    size_bytes: int


class LocalStagingStore:
    """Copies inbound streams to uniquely named local files.

    Each call to ``stage`` gets its own directory from ``tempfile.mkdtemp``,
    so concurrent uploads never collide and no locking is needed. The
    directory is deleted when the context exits, however it exits.
    """

    def __init__(
        self,
        root_dir: Path | None = None,
        buffer_size: int = 1 << 20,
        max_bytes: int | None = None,
    ) -> None:
        """Initialize the staging store.

        Args:
            root_dir: Parent directory for staging areas. Defaults to the
                system temp directory.
            buffer_size: Copy buffer size in bytes.
            max_bytes: Largest upload accepted. Unlimited when None.
        """
        self._root = root_dir
        self._buffer_size = buffer_size
        self._max_bytes = max_bytes

    @asynccontextmanager
    async def stage(
        self,
        source: BinaryIO,
        suffix: str = ".mp4",
    ) -> AsyncIterator[StagedFile]:
        """Copy ``source`` to a fresh local file for the duration of the block.

        Args:
            source: Readable binary stream. Read from its current position to
                EOF.
            suffix: Filename suffix for the staged file.

        Yields:
            The staged file, readable from offset 0.

        Raises:
            StagingException: If the directory or file cannot be created or
                the copy fails.
            PayloadTooLargeException: If the stream is longer than
                ``max_bytes``.
        """
        loop = asyncio.get_running_loop()
        directory = await loop.run_in_executor(None, self._make_directory)
        handle: BinaryIO | None = None
        try:
            path, handle, size = await loop.run_in_executor(
                None, self._copy_into, directory, source, suffix
            )
            logger.debug(
                "Staged upload",
                extra={"staged_path": str(path), "size_bytes": size},
            )
            yield StagedFile(path=path, directory=directory, handle=handle, size_bytes=size)
        finally:
            if handle is not None:
                handle.close()
            await loop.run_in_executor(None, self._remove_directory, directory)

    def _make_directory(self) -> Path:
        try:
            if self._root is not None:
                self._root.mkdir(parents=True, exist_ok=True)
            return Path(tempfile.mkdtemp(prefix=STAGING_PREFIX, dir=self._root))
        except OSError as e:
            raise StagingException(f"could not create staging directory: {e}") from e

    def _copy_into(
        self,
        directory: Path,
        source: BinaryIO,
        suffix: str,
    ) -> tuple[Path, BinaryIO, int]:
        try:
            fd, name = tempfile.mkstemp(suffix=suffix, dir=directory)
            handle: BinaryIO = os.fdopen(fd, "w+b")
        except OSError as e:
            raise StagingException(f"could not create staging file: {e}") from e

        try:
            size = self._copy_limited(source, handle)
            handle.flush()
            handle.seek(0)
        except OSError as e:
            handle.close()
            raise StagingException(f"could not copy upload: {e}") from e
        except PayloadTooLargeException:
            handle.close()
            raise

        return Path(name), handle, size

    def _copy_limited(self, source: BinaryIO, target: BinaryIO) -> int:
        size = 0
        while chunk := source.read(self._buffer_size):
            size += len(chunk)
            if self._max_bytes is not None and size > self._max_bytes:
                raise PayloadTooLargeException(self._max_bytes)
            target.write(chunk)
        return size

    @staticmethod
    def _remove_directory(directory: Path) -> None:
        try:
            shutil.rmtree(directory)
        except FileNotFoundError:
            pass
        except OSError:
            logger.exception(
                "Failed to remove staging directory",
                extra={"staging_dir": str(directory)},
            )
