"""Common exception classes for the core package.

All exceptions ultimately inherit from :class:`BrainDumpError`, allowing callers
to catch a single base class for any store failure while still distinguishing
"not found", storage and keybinding conflict outcomes when needed.

Updates:
  v0.3.0 - 2026-09-28 - Add keybinding validation errors for the shortcut recorder.
  v0.2.0 - 2026-09-21 - Add keybinding exception hierarchy.
  v0.1.0 - 2026-09-14 - Created module with note exception hierarchy.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from models.keybind import KeybindAction


class BrainDumpError(Exception):
    """Base exception for Brain Dump failures."""


# ---------------------------------------------------------------------------
# Note repository errors
# ---------------------------------------------------------------------------


class NoteError(BrainDumpError):
    """Base class for note repository failures."""


class NoteNotFoundError(NoteError):
    """Raised when a note's backing file cannot be located."""


class NoteStorageError(NoteError):
    """Raised when reading, writing or moving a note file fails."""


# ---------------------------------------------------------------------------
# Keybinding registry errors
# ---------------------------------------------------------------------------


class KeybindError(BrainDumpError):
    """Base class for keyboard shortcut registry failures."""


class KeybindConflictError(KeybindError):
    """Raised when a shortcut is already owned by another action."""

    def __init__(self, action: KeybindAction, conflicting_action: KeybindAction) -> None:
        self.action = action
        self.conflicting_action = conflicting_action
        super().__init__(
            f"Shortcut for {action.label} is already in use by {conflicting_action.label}"
        )


class KeybindValidationError(KeybindError):
    """Raised when a recorded shortcut is not acceptable (e.g. no modifier)."""


class KeybindStorageError(KeybindError):
    """Raised when the shortcut mapping cannot be persisted."""
