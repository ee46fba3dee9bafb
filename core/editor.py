"""Capture and editing helpers shared by note front ends.

Updates:
  v0.2.0 - 2026-09-28 - Add debounced edit sessions for saved notes.
  v0.1.0 - 2026-09-21 - Extract capture trimming and Markdown wrapping helpers.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING

from models.keybind import KeybindAction

if TYPE_CHECKING:
    from models.note import Note

    from .note_store import NoteStore

logger = logging.getLogger("brain_dump.editor")

MARKDOWN_STYLES: dict[KeybindAction, tuple[str, str]] = {
    KeybindAction.BOLD: ("**", "**"),
    KeybindAction.ITALIC: ("_", "_"),
}


def normalise_capture(text: str) -> str | None:
    """Return *text* stripped of surrounding whitespace, or None when blank."""
    trimmed = text.strip()
    return trimmed or None


def capture_note(store: NoteStore, text: str) -> Note | None:
    """Create an inbox note from *text* unless it is blank."""
    content = normalise_capture(text)
    if content is None:
        logger.debug("Ignoring blank capture")
        return None
    return store.create_note(content)


@dataclass(slots=True, frozen=True)
class MarkdownEdit:
    """Edited text plus the resulting ``(start, end)`` selection."""

    text: str
    selection: tuple[int, int]


def apply_markdown(
    text: str,
    selection: tuple[int, int],
    prefix: str,
    suffix: str,
) -> MarkdownEdit:
    """Wrap the selected span of *text* in *prefix* and *suffix*.

    With an empty selection the markers are inserted as a pair and the caret is
    placed between them, ready for typing.
    """
    start, end = sorted(selection)
    start = max(0, min(start, len(text)))
    end = max(0, min(end, len(text)))
    selected = text[start:end]
    wrapped = f"{prefix}{selected}{suffix}"
    new_text = text[:start] + wrapped + text[end:]
    if not selected and suffix:
        caret = start + len(prefix)
        return MarkdownEdit(new_text, (caret, caret))
    return MarkdownEdit(new_text, (start + len(prefix), start + len(prefix) + len(selected)))


def apply_markdown_style(
    action: KeybindAction,
    text: str,
    selection: tuple[int, int],
) -> MarkdownEdit | None:
    """Apply the Markdown style tied to *action*, or None for non-formatting actions."""
    markers = MARKDOWN_STYLES.get(action)
    if markers is None:
        return None
    prefix, suffix = markers
    return apply_markdown(text, selection, prefix, suffix)


class EditSession:
    """Buffer edits of one note and write them after a quiet period.

    ``poll`` is meant to be called from the host's event loop; ``flush`` forces
    any pending change to disk, e.g. when the editor closes.
    """

    def __init__(
        self,
        store: NoteStore,
        note: Note,
        *,
        debounce_seconds: float = 1.0,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._store = store
        self._note = note
        self._debounce = debounce_seconds
        self._clock = clock
        self._persisted = note.content
        self._text = note.content
        self._last_edit: float | None = None

    @property
    def note(self) -> Note:
        return self._note

    @property
    def text(self) -> str:
        return self._text

    @property
    def is_dirty(self) -> bool:
        return self._text != self._persisted

    def edit(self, text: str) -> None:
        """Record new editor contents and restart the debounce window."""
        self._text = text
        self._last_edit = self._clock()

    def poll(self) -> bool:
        """Write pending edits once the debounce window has elapsed."""
        if self._last_edit is None:
            return False
        if self._clock() - self._last_edit < self._debounce:
            return False
        return self.flush()

    def flush(self) -> bool:
        """Write pending edits now. Returns True when the file was rewritten."""
        self._last_edit = None
        if not self.is_dirty:
            return False
        self._note = self._store.update_note(self._note, self._text)
        self._persisted = self._text
        return True
