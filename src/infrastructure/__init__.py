"""Infrastructure layer - external service implementations."""

from src.infrastructure.auth import JWTAuthenticator, get_bearer_token
from src.infrastructure.factory import (
    InfrastructureFactory,
    get_factory,
    reset_factory,
)
from src.infrastructure.process import (
    CommandResult,
    CommandRunnerBase,
    SubprocessCommandRunner,
)
from src.infrastructure.staging import LocalStagingStore, StagedFile
from src.infrastructure.video import (
    FFmpegMediaProcessor,
    MediaProcessorBase,
    ProcessedVideo,
)

__all__ = [
    # Factory
    "InfrastructureFactory",
    "get_factory",
    "reset_factory",
    # Auth
    "JWTAuthenticator",
    "get_bearer_token",
    # Process
    "CommandResult",
    "CommandRunnerBase",
    "SubprocessCommandRunner",
    # Staging
    "LocalStagingStore",
    "StagedFile",
    # Video
    "FFmpegMediaProcessor",
    "MediaProcessorBase",
    "ProcessedVideo",
]
