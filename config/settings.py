"""Settings management utilities for Brain Dump configuration.

Updates:
  v0.2.1 - 2026-09-28 - Validate editor debounce window and log level choices.
  v0.2.0 - 2026-09-21 - Read `.env` values through python-dotenv alongside the process env.
  v0.1.0 - 2026-09-14 - Initial notes directory and preferences path settings.
"""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any, cast

from dotenv import dotenv_values
from pydantic import Field, ValidationError, field_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

logger = logging.getLogger("brain_dump.settings")

_DOTENV_FALLBACK_PATH = ".env"
_CONFIG_JSON_ENV = "BRAIN_DUMP_CONFIG_JSON"
_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}

DEFAULT_CONFIG_PATH = Path("config") / "config.json"
DEFAULT_EDIT_DEBOUNCE_SECONDS = 1.0
DEFAULT_LOG_LEVEL = "INFO"


def default_notes_dir() -> Path:
    """Return the default base directory holding the inbox and saved buckets."""
    return Path.home() / "Documents" / "BrainDump"


def default_preferences_path() -> Path:
    """Return the default location of the UI preferences file."""
    return Path.home() / ".config" / "brain_dump" / "preferences.json"


def _read_dotenv_values() -> dict[str, str]:
    """Load ``.env`` entries into a mapping without mutating ``os.environ``."""
    env_file_override = os.getenv("BRAIN_DUMP_ENV_FILE")
    if env_file_override is not None:
        candidate = env_file_override.strip()
        if not candidate:
            return {}
        path = Path(candidate).expanduser()
    else:
        path = Path(_DOTENV_FALLBACK_PATH).expanduser()
    if not path.is_file():
        return {}
    raw_values = dotenv_values(str(path))
    return {str(key): str(value) for key, value in raw_values.items() if value is not None}


class SettingsError(Exception):
    """Raised when Brain Dump configuration cannot be loaded or validated."""


class BrainDumpSettings(BaseSettings):
    """Application configuration sourced from environment variables or JSON files."""

    notes_dir: Path = Field(
        default_factory=default_notes_dir,
        description="Base directory containing the inbox/ and saved/ note buckets.",
    )
    preferences_path: Path = Field(
        default_factory=default_preferences_path,
        description="JSON file storing keyboard shortcuts and other UI preferences.",
    )
    edit_debounce_seconds: float = Field(
        default=DEFAULT_EDIT_DEBOUNCE_SECONDS,
        description="Idle time before buffered edits of a saved note are written to disk.",
    )
    log_level: str = Field(
        default=DEFAULT_LOG_LEVEL,
        description="Root log level used when no logging configuration file is present.",
    )

    model_config = cast(
        "SettingsConfigDict",
        {
            "env_prefix": "BRAIN_DUMP_",
            "case_sensitive": False,
            "populate_by_name": True,
        },
    )

    @field_validator("notes_dir", "preferences_path", mode="before")
    def _normalise_path(cls, value: Any) -> Path:
        """Expand user-relative paths and coerce values to Path instances."""
        if value is None or (isinstance(value, str) and not value.strip()):
            raise ValueError("a filesystem path is required")
        path = Path(str(value).strip()).expanduser()
        return path.resolve()

    @field_validator("edit_debounce_seconds")
    def _validate_debounce(cls, value: float) -> float:
        """Keep the debounce window positive and bounded to a minute."""
        if value <= 0:
            raise ValueError("edit_debounce_seconds must be greater than zero")
        if value > 60:
            raise ValueError("edit_debounce_seconds must not exceed 60 seconds")
        return value

    @field_validator("log_level", mode="before")
    def _normalise_log_level(cls, value: object | None) -> str:
        if value in (None, ""):
            return DEFAULT_LOG_LEVEL
        level = str(value).strip().upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of: {', '.join(sorted(_LOG_LEVELS))}")
        return level

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[
        PydanticBaseSettingsSource,
        PydanticBaseSettingsSource,
        PydanticBaseSettingsSource,
        PydanticBaseSettingsSource,
    ]:
        """Define configuration source precedence.

        Order (highest → lowest):
            1. Explicit keyword arguments (e.g. load_settings(notes_dir="...")).
            2. JSON configuration file.
            3. Environment variables, then ``.env`` entries.
            4. File secrets.
        """

        def env_with_aliases(_: BaseSettings | None = None) -> dict[str, Any]:
            data: dict[str, Any] = {}
            config_dict = cast("dict[str, Any]", cls.model_config)
            prefix = str(config_dict.get("env_prefix", ""))
            dotenv_entries = _read_dotenv_values()

            def _lookup(candidate: str) -> str | None:
                value = os.getenv(candidate)
                if value is None:
                    value = dotenv_entries.get(candidate)
                if value is None:
                    return None
                stripped_value = str(value).strip()
                return stripped_value or None

            mapping = {
                "notes_dir": ["NOTES_DIR", "notes_dir"],
                "preferences_path": ["PREFERENCES_PATH", "preferences_path"],
                "edit_debounce_seconds": ["EDIT_DEBOUNCE_SECONDS", "edit_debounce_seconds"],
                "log_level": ["LOG_LEVEL", "log_level"],
            }
            for field, keys in mapping.items():
                for key in keys:
                    val = _lookup(f"{prefix}{key}")
                    if val is not None:
                        data[field] = val
                        break
            return data

        return (
            init_settings,
            cls._json_config_settings_source(settings_cls),
            cast("PydanticBaseSettingsSource", env_with_aliases),
            file_secret_settings,
        )

    @classmethod
    def _json_config_settings_source(
        cls,
        _: type[BaseSettings],
    ) -> PydanticBaseSettingsSource:
        """Return settings extracted from an optional JSON config file."""

        def _loader(_: BaseSettings | None = None) -> dict[str, Any]:
            explicit_path = os.getenv(_CONFIG_JSON_ENV)
            if explicit_path:
                path = Path(explicit_path).expanduser()
                if not path.exists():
                    raise SettingsError(f"Configuration file not found: {path}")
            else:
                path = DEFAULT_CONFIG_PATH
                if not path.exists():
                    return {}
            try:
                raw_contents = path.read_text(encoding="utf-8")
            except OSError as exc:  # pragma: no cover - filesystem failure is env-specific
                raise SettingsError(f"Unable to read configuration file: {path}") from exc
            try:
                data = json.loads(raw_contents)
            except json.JSONDecodeError as exc:
                raise SettingsError(f"Invalid JSON in configuration file: {path}") from exc
            if not isinstance(data, dict):
                raise SettingsError(f"Configuration file {path} must contain a JSON object")
            mapping_data = cast("Mapping[object, Any]", data)
            data_dict = {str(key): value for key, value in mapping_data.items()}
            unknown = sorted(set(data_dict) - set(cls.model_fields))
            if unknown:
                logger.warning(
                    "Ignoring unknown key(s) %s in configuration file %s",
                    ", ".join(unknown),
                    path,
                )
            return {key: value for key, value in data_dict.items() if key in cls.model_fields}

        return cast("PydanticBaseSettingsSource", _loader)


def load_settings(**overrides: Any) -> BrainDumpSettings:
    """Return validated settings, raising SettingsError on failure."""
    try:
        return BrainDumpSettings(**overrides)
    except SettingsError:
        raise
    except ValidationError as exc:
        raise SettingsError("Invalid Brain Dump configuration") from exc

