"""Factories for constructing Brain Dump services from validated settings.

Updates:
  v0.1.1 - 2026-09-28 - Carry the editor debounce window on the service bundle.
  v0.1.0 - 2026-09-21 - Build note and keybinding stores from settings.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from config.persistence import PreferenceStore

from .keybind_store import KeybindStore
from .note_store import NoteStore

if TYPE_CHECKING:  # pragma: no cover - typing only
    from config import BrainDumpSettings

factory_logger = logging.getLogger("brain_dump.factory")


@dataclass(slots=True)
class BrainDumpServices:
    """Stateful components shared by every front end for one process."""

    notes: NoteStore
    keybinds: KeybindStore
    preferences: PreferenceStore
    edit_debounce_seconds: float = 1.0


def build_services(
    settings: BrainDumpSettings,
    *,
    notes: NoteStore | None = None,
    preferences: PreferenceStore | None = None,
    keybinds: KeybindStore | None = None,
) -> BrainDumpServices:
    """Return the note and keybinding stores configured from *settings*."""
    resolved_preferences = preferences or PreferenceStore(settings.preferences_path)
    resolved_notes = notes or NoteStore(settings.notes_dir)
    resolved_keybinds = keybinds or KeybindStore(resolved_preferences)
    factory_logger.debug(
        "Initialised services (notes=%s, preferences=%s)",
        resolved_notes.base_dir,
        resolved_preferences.path,
    )
    return BrainDumpServices(
        notes=resolved_notes,
        keybinds=resolved_keybinds,
        preferences=resolved_preferences,
        edit_debounce_seconds=settings.edit_debounce_seconds,
    )


__all__ = ["BrainDumpServices", "build_services"]
