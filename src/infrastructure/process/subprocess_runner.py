"""Subprocess implementation of the command runner."""

import asyncio
import subprocess
from collections.abc import Sequence

from src.commons.telemetry import get_logger
from src.infrastructure.process.base import CommandResult, CommandRunnerBase

logger = get_logger(__name__)


class SubprocessCommandRunner(CommandRunnerBase):
    """Runs commands with ``subprocess.run`` in the default executor.

    The calling request waits for the tool to finish; there is no timeout
    unless one is configured.
    """

    def __init__(self, timeout_seconds: float | None = None) -> None:
        """Initialize the runner.

        Args:
            timeout_seconds: Optional hard limit per invocation.
        """
        self._timeout = timeout_seconds

    async def run(self, command: str, args: Sequence[str]) -> CommandResult:
        """Run a command and capture stdout and stderr."""
        argv = [command, *args]
        logger.debug("Running external command", extra={"argv": argv})

        loop = asyncio.get_running_loop()
        completed = await loop.run_in_executor(
            None,
            lambda: subprocess.run(
                argv,
                capture_output=True,
                check=False,
                timeout=self._timeout,
            ),
        )

        return CommandResult(
            command=command,
            args=tuple(args),
            exit_code=completed.returncode,
            stdout=completed.stdout,
            stderr=completed.stderr,
        )
