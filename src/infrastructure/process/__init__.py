"""External process invocation."""

from src.infrastructure.process.base import CommandResult, CommandRunnerBase
from src.infrastructure.process.subprocess_runner import SubprocessCommandRunner

__all__ = [
    # Base classes
    "CommandResult",
    "CommandRunnerBase",
    # Implementations
    "SubprocessCommandRunner",
]
