"""Note data model definitions.

Updates: v0.2.0 - 2026-09-21 - Derive note titles from the first content line.
Updates: v0.1.0 - 2026-09-14 - Introduce Note dataclass with filename-encoded timestamps.
"""
from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from pathlib import Path

NOTE_SUFFIX = ".md"
NOTE_TIMESTAMP_FORMAT = "%Y-%m-%d_%H%M%S"
NOTE_ID_SUFFIX_LENGTH = 6
UNTITLED_NOTE = "Untitled"


class NoteBucket(str, Enum):
    """Directory a note currently lives in."""
    INBOX = "inbox"
    SAVED = "saved"


def generate_note_id(now: datetime | None = None) -> str:
    """Return a fresh note id: local timestamp plus a short random suffix.

    Uniqueness relies on the one-second timestamp resolution combined with the
    random suffix; collisions are not checked.
    """
    stamp = (now or datetime.now()).strftime(NOTE_TIMESTAMP_FORMAT)
    suffix = uuid.uuid4().hex[:NOTE_ID_SUFFIX_LENGTH].lower()
    return f"{stamp}_{suffix}"


def parse_note_timestamp(note_id: str) -> datetime | None:
    """Return the creation time encoded in *note_id*, or None when malformed."""
    parts = note_id.split("_")
    if len(parts) < 2:
        return None
    try:
        return datetime.strptime(f"{parts[0]}_{parts[1]}", NOTE_TIMESTAMP_FORMAT)
    except ValueError:
        return None


@dataclass(slots=True, eq=False)
class Note:
    """Single Markdown note backed by ``<bucket>/<id>.md``.

    Identity is the id alone; ``created_at`` is never stored separately and is
    always recovered from the id's timestamp prefix.
    """
    id: str
    content: str
    created_at: datetime
    bucket: NoteBucket
    path: Path

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Note):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    @property
    def title(self) -> str:
        """Return the first line of the note, or a placeholder when it is blank."""
        first_line = self.content.splitlines()[0] if self.content else ""
        return first_line or UNTITLED_NOTE

    @property
    def filename(self) -> str:
        """Return the backing file name."""
        return f"{self.id}{NOTE_SUFFIX}"

    @classmethod
    def from_file(cls, path: Path, bucket: NoteBucket) -> Note | None:
        """Hydrate a note from *path*, returning None for unparseable entries.

        Raises OSError or UnicodeDecodeError when the file cannot be read.
        """
        note_id = path.stem
        created_at = parse_note_timestamp(note_id)
        if created_at is None:
            return None
        content = path.read_bytes().decode("utf-8")
        return cls(id=note_id, content=content, created_at=created_at, bucket=bucket, path=path)


__all__ = [
    "NOTE_SUFFIX",
    "NOTE_TIMESTAMP_FORMAT",
    "Note",
    "NoteBucket",
    "UNTITLED_NOTE",
    "generate_note_id",
    "parse_note_timestamp",
]
