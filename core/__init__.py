"""Core service layer for Brain Dump.

Updates:
  v0.3.0 - 2026-09-28 - Export editing helpers and the review session.
  v0.2.0 - 2026-09-21 - Export build_services factory for shared bootstrap.
  v0.1.0 - 2026-09-14 - Surface NoteStore, KeybindStore and the exception hierarchy.
"""

from models.keybind import KeyEvent, Keybind, KeybindAction
from models.note import Note, NoteBucket

from .editor import (
    EditSession,
    MarkdownEdit,
    apply_markdown,
    apply_markdown_style,
    capture_note,
    normalise_capture,
)
from .exceptions import (
    BrainDumpError,
    KeybindConflictError,
    KeybindError,
    KeybindStorageError,
    KeybindValidationError,
    NoteError,
    NoteNotFoundError,
    NoteStorageError,
)
from .factory import BrainDumpServices, build_services
from .keybind_store import KEYBINDINGS_PREFERENCE_KEY, KeybindStore
from .note_store import NoteStore
from .review import ReviewSession

__all__ = [
    "BrainDumpError",
    "BrainDumpServices",
    "EditSession",
    "KEYBINDINGS_PREFERENCE_KEY",
    "KeyEvent",
    "Keybind",
    "KeybindAction",
    "KeybindConflictError",
    "KeybindError",
    "KeybindStorageError",
    "KeybindStore",
    "KeybindValidationError",
    "MarkdownEdit",
    "Note",
    "NoteBucket",
    "NoteError",
    "NoteNotFoundError",
    "NoteStorageError",
    "NoteStore",
    "ReviewSession",
    "apply_markdown",
    "apply_markdown_style",
    "build_services",
    "capture_note",
    "normalise_capture",
]
