"""Abstract base class for running external tools."""

from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass


@dataclass(frozen=True)
class CommandResult:
    """Captured outcome of one external tool invocation."""

    command: str
    args: tuple[str, ...]
    exit_code: int
    stdout: bytes
    stderr: bytes

    @property
    def succeeded(self) -> bool:
        """Whether the tool exited with status 0."""
        return self.exit_code == 0

    @property
    def stderr_text(self) -> str:
        """Diagnostics decoded for logging."""
        return self.stderr.decode("utf-8", errors="replace")


class CommandRunnerBase(ABC):
    """Runs an external command to completion and captures its output.

    A non-zero exit status is reported in the result, not raised. Callers
    decide what a failure means.

    Implementations should handle:
    - Local subprocesses
    - Scripted fakes for tests
    """

    @abstractmethod
    async def run(self, command: str, args: Sequence[str]) -> CommandResult:
        """Run a command with arguments.

        Args:
            command: Executable name or path.
            args: Arguments passed to the executable.

        Returns:
            Exit status with captured stdout and stderr.

        Raises:
            FileNotFoundError: If the executable cannot be found.
        """
