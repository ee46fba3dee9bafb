"""Printable summaries for Brain Dump configuration.

Updates:
  v0.1.1 - 2026-09-28 - Include the editor debounce window.
  v0.1.0 - 2026-09-21 - Extract CLI settings summary rendering.
"""

from __future__ import annotations

from config import DEFAULT_CONFIG_PATH, BrainDumpSettings

from .utils import describe_path


def print_settings_summary(settings: BrainDumpSettings) -> None:
    """Emit a readable summary of configuration and path health checks."""
    notes_dir = getattr(settings, "notes_dir", None)
    preferences_path = getattr(settings, "preferences_path", None)
    debounce = getattr(settings, "edit_debounce_seconds", None)
    log_level = getattr(settings, "log_level", None)

    lines = [
        "Brain Dump configuration summary",
        "--------------------------------",
        f"Config file: {describe_path(DEFAULT_CONFIG_PATH, expect_directory=False)}",
        f"Notes directory: {describe_path(notes_dir, expect_directory=True)}",
        f"Preferences file: {describe_path(preferences_path, expect_directory=False)}",
        f"Edit debounce: {debounce:.2f}s" if debounce is not None else "Edit debounce: not set",
        f"Log level: {log_level or 'not set'}",
    ]
    print("\n".join(lines))
