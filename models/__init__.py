"""Data models for Brain Dump.

Updates: v0.2.0 - 2026-09-21 - Export Keybind dataclasses.
Updates: v0.1.0 - 2026-09-14 - Export Note dataclass.
"""

from .keybind import DEFAULT_KEYBINDS, KeyEvent, Keybind, KeybindAction, Modifier
from .note import Note, NoteBucket

__all__ = [
    "DEFAULT_KEYBINDS",
    "KeyEvent",
    "Keybind",
    "KeybindAction",
    "Modifier",
    "Note",
    "NoteBucket",
]
