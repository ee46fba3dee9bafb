"""Inbox triage: keep or trash captured notes one at a time.

Updates:
  v0.1.1 - 2026-09-28 - Allow skipping a note without changing it.
  v0.1.0 - 2026-09-21 - Extract the review queue from the CLI command.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from .exceptions import NoteNotFoundError

if TYPE_CHECKING:
    from models.note import Note

    from .note_store import NoteStore

logger = logging.getLogger("brain_dump.review")

__all__ = ["ReviewSession"]


class ReviewSession:
    """Walk the inbox newest-first, promoting or deleting each note."""

    def __init__(self, store: NoteStore) -> None:
        self._store = store
        self._index = 0
        self.kept = 0
        self.discarded = 0
        self._store.refresh()

    @property
    def remaining(self) -> int:
        return max(len(self._store.inbox_notes) - self._index, 0)

    @property
    def is_complete(self) -> bool:
        return self.remaining == 0

    @property
    def current(self) -> Note | None:
        """Return the note under review, or None once the inbox is exhausted."""
        if self.is_complete:
            return None
        return self._store.inbox_notes[self._index]

    @property
    def progress_label(self) -> str:
        if self.is_complete:
            return "All caught up!"
        count = self.remaining
        return f"{count} note{'s' if count != 1 else ''} to review"

    def _require_current(self) -> Note:
        note = self.current
        if note is None:
            raise NoteNotFoundError("No notes left to review")
        return note

    def keep(self) -> Note:
        """Move the current note to saved and return it."""
        note = self._store.promote_note(self._require_current())
        self.kept += 1
        return note

    def discard(self) -> Note:
        """Delete the current note and return it."""
        note = self._require_current()
        self._store.remove_note(note)
        self.discarded += 1
        return note

    def skip(self) -> Note:
        """Leave the current note in the inbox and move on to the next one."""
        note = self._require_current()
        self._index += 1
        logger.debug("Skipped note %s", note.id)
        return note
