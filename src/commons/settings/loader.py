"""Settings loader with layered configuration support."""

import json
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from src.commons.settings.models import Settings

ENV_PREFIX = "TUBELY__"
ENVIRONMENT_VAR = f"{ENV_PREFIX}APP__ENVIRONMENT"


class SettingsLoader:
    """Builds a Settings value from config files and the environment.

    Later layers win:
    1. ``appsettings.json``
    2. ``appsettings.{environment}.json``
    3. ``TUBELY__``-prefixed environment variables
    """

    def __init__(
        self,
        config_dir: Path | None = None,
        environment: str | None = None,
    ) -> None:
        """Initialize the settings loader.

        Args:
            config_dir: Directory containing the JSON config files.
                Defaults to ``./config``.
            environment: Environment name (dev, staging, prod).
                Defaults to TUBELY__APP__ENVIRONMENT or 'dev'.
        """
        self.config_dir = config_dir or Path("config")
        self.environment = environment or os.getenv(ENVIRONMENT_VAR, "dev")

    def load(self) -> Settings:
        """Resolve all layers into an immutable Settings instance."""
        merged: dict[str, Any] = {}
        for layer in (
            self._read_json("appsettings.json"),
            self._read_json(f"appsettings.{self.environment}.json"),
            self._env_overrides(os.environ),
        ):
            merged = merge_dicts(merged, layer)
        return Settings(**merged)

    def _read_json(self, filename: str) -> dict[str, Any]:
        path = self.config_dir / filename
        if not path.exists():
            return {}
        with path.open(encoding="utf-8") as f:
            return dict(json.load(f))

    @staticmethod
    def _env_overrides(environ: Mapping[str, str]) -> dict[str, Any]:
        """Turn TUBELY__MEDIA__FFMPEG_PATH=x into {"media": {"ffmpeg_path": x}}."""
        result: dict[str, Any] = {}
        for name, raw in environ.items():
            if not name.startswith(ENV_PREFIX):
                continue
            *parents, leaf = name[len(ENV_PREFIX) :].lower().split("__")
            node = result
            for part in parents:
                node = node.setdefault(part, {})
            node[leaf] = coerce_env_value(raw)
        return result


def coerce_env_value(value: str) -> Any:
    """Coerce an environment string to bool, int, float, JSON or str."""
    lowered = value.lower()
    if lowered in ("true", "false"):
        return lowered == "true"

    for cast in (int, float):
        try:
            return cast(value)
        except ValueError:
            pass

    if value.startswith(("[", "{")):
        try:
            return json.loads(value)
        except json.JSONDecodeError:
            pass

    return value


def merge_dicts(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge ``override`` into a copy of ``base``."""
    result = dict(base)
    for key, value in override.items():
        current = result.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            result[key] = merge_dicts(current, value)
        else:
            result[key] = value
    return result


class _SettingsHolder:
    """Holder for the process-wide settings value."""

    instance: Settings | None = None


def get_settings(
    config_dir: Path | None = None,
    environment: str | None = None,
    *,
    reload: bool = False,
) -> Settings:
    """Get or create the process-wide settings instance.

    Args:
        config_dir: Optional config directory override.
        environment: Optional environment override.
        reload: Force a reload from files and environment.

    Returns:
        Settings instance.
    """
    if _SettingsHolder.instance is None or reload:
        loader = SettingsLoader(config_dir=config_dir, environment=environment)
        _SettingsHolder.instance = loader.load()
    return _SettingsHolder.instance


def reset_settings() -> None:
    """Reset the cached settings. Useful for testing."""
    _SettingsHolder.instance = None
