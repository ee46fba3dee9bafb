"""Configuration helpers for Brain Dump.

Updates: v0.2.0 - 2026-09-21 - Export the preference store used for keyboard shortcuts.
Updates: v0.1.0 - 2026-09-14 - Expose settings loader and configuration error types.
"""

from .persistence import PreferenceStorageError, PreferenceStore
from .settings import (
    DEFAULT_CONFIG_PATH,
    DEFAULT_EDIT_DEBOUNCE_SECONDS,
    DEFAULT_LOG_LEVEL,
    BrainDumpSettings,
    SettingsError,
    load_settings,
)

__all__ = [
    "BrainDumpSettings",
    "DEFAULT_CONFIG_PATH",
    "DEFAULT_EDIT_DEBOUNCE_SECONDS",
    "DEFAULT_LOG_LEVEL",
    "PreferenceStorageError",
    "PreferenceStore",
    "SettingsError",
    "load_settings",
]
