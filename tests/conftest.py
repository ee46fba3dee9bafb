"""Pytest configuration for shared test fixtures and environment hooks.

Updates:
  v0.2.0 - 2026-09-28 - Isolate settings sources from the developer's environment.
  v0.1.0 - 2026-09-14 - Provide note and preference store fixtures.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from config.persistence import PreferenceStore
from core.keybind_store import KeybindStore
from core.note_store import NoteStore

_SETTINGS_ENV_VARS = (
    "BRAIN_DUMP_NOTES_DIR",
    "BRAIN_DUMP_PREFERENCES_PATH",
    "BRAIN_DUMP_EDIT_DEBOUNCE_SECONDS",
    "BRAIN_DUMP_LOG_LEVEL",
    "BRAIN_DUMP_CONFIG_JSON",
    "BRAIN_DUMP_ENV_FILE",
)


@pytest.fixture(autouse=True)
def _isolate_settings_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Keep real config files, `.env` entries and HOME out of every test."""
    for name in _SETTINGS_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("BRAIN_DUMP_ENV_FILE", "")
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    monkeypatch.chdir(tmp_path)


@pytest.fixture()
def note_store(tmp_path: Path) -> NoteStore:
    return NoteStore(tmp_path / "BrainDump")


@pytest.fixture()
def preferences(tmp_path: Path) -> PreferenceStore:
    return PreferenceStore(tmp_path / "prefs" / "preferences.json")


@pytest.fixture()
def keybind_store(preferences: PreferenceStore) -> KeybindStore:
    return KeybindStore(preferences)
