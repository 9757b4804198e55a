"""Local staging of uploads."""

from src.infrastructure.staging.local_staging import LocalStagingStore, StagedFile

__all__ = [
    "LocalStagingStore",
    "StagedFile",
]
