"""Settings management module."""

from src.commons.settings.loader import (
    SettingsLoader,
    coerce_env_value,
    get_settings,
    merge_dicts,
    reset_settings,
)
from src.commons.settings.models import (
    AppSettings,
    AuthSettings,
    BlobStorageSettings,
    DocumentCollectionSettings,
    DocumentDBSettings,
    MediaSettings,
    ServerSettings,
    Settings,
    TelemetrySettings,
)

__all__ = [
    # Loader
    "SettingsLoader",
    "coerce_env_value",
    "get_settings",
    "merge_dicts",
    "reset_settings",
    # Main settings
    "Settings",
    "AppSettings",
    "ServerSettings",
    # Storage
    "BlobStorageSettings",
    "DocumentDBSettings",
    "DocumentCollectionSettings",
    # Security & media
    "AuthSettings",
    "MediaSettings",
    # Telemetry
    "TelemetrySettings",
]
