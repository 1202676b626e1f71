"""Configuration loading and validation."""

from __future__ import annotations

import copy
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from modorder.errors import ConfigError, ConfigNotFoundError

__all__ = ["Config", "DEFAULTS", "LoaderSettings"]

DEFAULTS: dict[str, Any] = {
    "loader": {
        "extensions": [".json"],
        "recursive": False,
        "max_depth": 8,
        "follow_symlinks": False,
    },
    "logging": {
        "level": "WARNING",
    },
}


class LoaderSettings(BaseModel):
    """Schema for the ``loader`` section."""

    model_config = ConfigDict(extra="forbid", strict=True)

    extensions: list[str]
    recursive: bool
    max_depth: int = Field(ge=1)
    follow_symlinks: bool


def _merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    merged = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


class Config:
    """Configuration accessor with dot-path key support.

    Values not present in ``data`` fall back to ``DEFAULTS``.

    Raises:
        ConfigError: If the ``loader`` section has unknown keys or wrongly typed values.
    """

    def __init__(self, data: dict[str, Any] | None = None) -> None:
        self._data: dict[str, Any] = _merge(copy.deepcopy(DEFAULTS), data or {})
        try:
            LoaderSettings.model_validate(self._data["loader"])
        except ValidationError as e:
            raise ConfigError(message=f"Invalid loader configuration: {e}", cause=e) from e

    @classmethod
    def from_yaml(cls, path: str | Path) -> Config:
        """Load configuration from a YAML mapping.

        Raises:
            ConfigNotFoundError: If the file does not exist.
            ConfigError: If the file is not valid YAML, not a mapping, or has
                invalid loader settings.
        """
        path = Path(path)
        if not path.exists():
            raise ConfigNotFoundError(config_path=str(path))

        try:
            parsed = yaml.safe_load(path.read_text(encoding="utf-8"))
        except yaml.YAMLError as e:
            raise ConfigError(message=f"Invalid YAML in config file: {path}", cause=e) from e

        if parsed is None:
            return cls()
        if not isinstance(parsed, dict):
            raise ConfigError(message=f"Config file must be a YAML mapping: {path}")
        return cls(parsed)

    def get(self, key: str, default: Any = None) -> Any:
        """Get a configuration value by dot-path key."""
        parts = key.split(".")
        current: Any = self._data
        for part in parts:
            if isinstance(current, dict) and part in current:
                current = current[part]
            else:
                return default
        return current
