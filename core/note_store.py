"""Directory-backed note repository with inbox and saved buckets.

Each note is one ``<id>.md`` file holding raw UTF-8 Markdown. The bucket a note
belongs to is the directory it lives in, and its creation time is recovered from
the id, so there is no index or metadata file: every listing re-scans the
directory and every mutation is followed by a full re-scan of both buckets.

Updates:
  v0.3.1 - 2026-10-17 - Preserve file permissions across atomic rewrites.
  v0.3.0 - 2026-09-28 - Refuse to overwrite saved notes when promoting a same-named file.
  v0.2.0 - 2026-09-21 - Replace note contents through a temporary file.
  v0.1.0 - 2026-09-14 - Initial flat-file note store.
"""

from __future__ import annotations

import logging
import os
import stat
import tempfile
from pathlib import Path

from models.note import NOTE_SUFFIX, Note, NoteBucket, generate_note_id

from .exceptions import NoteNotFoundError, NoteStorageError

logger = logging.getLogger("brain_dump.notes")

__all__ = ["NoteStore"]


def _target_mode(path: Path) -> int:
    """Return the permission bits *path* should end up with after a rewrite."""
    try:
        return stat.S_IMODE(path.stat().st_mode)
    except FileNotFoundError:
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask


def _write_atomic(path: Path, content: str) -> None:
    """Write *content* next to *path* and move it into place.

    Existing files keep their permission bits; new files follow the process umask.
    """
    mode = _target_mode(path)
    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.stem}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "wb") as handle:
            handle.write(content.encode("utf-8"))
        os.chmod(tmp_name, mode)
        os.replace(tmp_name, path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise


class NoteStore:
    """Create, list, edit, promote and delete notes stored as Markdown files."""

    def __init__(self, base_dir: Path) -> None:
        self._base_dir = Path(base_dir)
        self.inbox_notes: list[Note] = []
        self.saved_notes: list[Note] = []
        self._ensure_directories()
        self.refresh()

    @property
    def base_dir(self) -> Path:
        return self._base_dir

    @property
    def inbox_dir(self) -> Path:
        return self._base_dir / NoteBucket.INBOX.value

    @property
    def saved_dir(self) -> Path:
        return self._base_dir / NoteBucket.SAVED.value

    @property
    def inbox_count(self) -> int:
        """Return the number of notes waiting for review as of the last scan."""
        return len(self.inbox_notes)

    def bucket_dir(self, bucket: NoteBucket) -> Path:
        """Return the directory backing *bucket*."""
        return self._base_dir / NoteBucket(bucket).value

    def _ensure_directories(self) -> None:
        for bucket in NoteBucket:
            directory = self.bucket_dir(bucket)
            try:
                directory.mkdir(parents=True, exist_ok=True)
            except OSError as exc:
                logger.warning("Unable to create note directory %s: %s", directory, exc)

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def refresh(self) -> None:
        """Re-scan both buckets into the cached note lists."""
        self.inbox_notes = self.list_notes(NoteBucket.INBOX)
        self.saved_notes = self.list_notes(NoteBucket.SAVED)

    def list_notes(self, bucket: NoteBucket) -> list[Note]:
        """Return the notes in *bucket*, newest first.

        Files whose name does not carry a valid timestamp or whose contents are not
        readable UTF-8 are skipped rather than reported.
        """
        bucket = NoteBucket(bucket)
        directory = self.bucket_dir(bucket)
        try:
            entries = list(directory.iterdir())
        except OSError as exc:
            logger.warning("Unable to list %s notes in %s: %s", bucket.value, directory, exc)
            return []

        notes: list[Note] = []
        for path in entries:
            if path.suffix != NOTE_SUFFIX or not path.is_file():
                continue
            try:
                note = Note.from_file(path, bucket)
            except (OSError, UnicodeDecodeError) as exc:
                logger.warning("Skipping unreadable note %s: %s", path, exc)
                continue
            if note is None:
                logger.debug("Skipping %s: file name does not encode a timestamp", path)
                continue
            notes.append(note)
        notes.sort(key=lambda item: (item.created_at, item.id), reverse=True)
        return notes

    def find_note(self, note_id: str, bucket: NoteBucket | None = None) -> Note:
        """Return the note with *note_id*, searching one or both buckets."""
        self.refresh()
        buckets = [NoteBucket(bucket)] if bucket is not None else list(NoteBucket)
        for candidate_bucket in buckets:
            notes = self.inbox_notes if candidate_bucket is NoteBucket.INBOX else self.saved_notes
            for note in notes:
                if note.id == note_id:
                    return note
        raise NoteNotFoundError(f"Note {note_id} not found")

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def create_note(self, content: str) -> Note:
        """Write *content* as a new inbox note and return it."""
        note_id = generate_note_id()
        path = self.inbox_dir / f"{note_id}{NOTE_SUFFIX}"
        try:
            self.inbox_dir.mkdir(parents=True, exist_ok=True)
            _write_atomic(path, content)
        except OSError as exc:
            raise NoteStorageError(f"Failed to write note {note_id}") from exc
        logger.info("Captured note %s", note_id)
        self.refresh()
        return self._cached_note(note_id, NoteBucket.INBOX)

    def update_note(self, note: Note, content: str) -> Note:
        """Replace the contents of *note*'s backing file with *content*."""
        if not note.path.is_file():
            self.refresh()
            raise NoteNotFoundError(f"Note {note.id} not found at {note.path}")
        try:
            _write_atomic(note.path, content)
        except OSError as exc:
            raise NoteStorageError(f"Failed to update note {note.id}") from exc
        logger.debug("Updated note %s", note.id)
        self.refresh()
        return self._cached_note(note.id, note.bucket)

    def promote_note(self, note: Note) -> Note:
        """Move an inbox note into the saved bucket, keeping its file name."""
        if note.bucket is NoteBucket.SAVED:
            return note
        source = note.path
        destination = self.saved_dir / source.name
        if not source.is_file():
            self.refresh()
            raise NoteNotFoundError(f"Note {note.id} not found at {source}")
        if destination.exists():
            raise NoteStorageError(f"A saved note named {source.name} already exists")
        try:
            self.saved_dir.mkdir(parents=True, exist_ok=True)
            source.rename(destination)
        except OSError as exc:
            raise NoteStorageError(f"Failed to move note {note.id} to saved") from exc
        logger.info("Kept note %s", note.id)
        self.refresh()
        return self._cached_note(note.id, NoteBucket.SAVED)

    def remove_note(self, note: Note) -> bool:
        """Delete *note*'s backing file.

        Returns False when the file was already gone; removing twice is not an error.
        """
        try:
            note.path.unlink()
        except FileNotFoundError:
            logger.info("Note %s was already removed", note.id)
            self.refresh()
            return False
        except OSError as exc:
            raise NoteStorageError(f"Failed to delete note {note.id}") from exc
        logger.info("Deleted note %s from %s", note.id, note.bucket.value)
        self.refresh()
        return True

    def _cached_note(self, note_id: str, bucket: NoteBucket) -> Note:
        notes = self.inbox_notes if bucket is NoteBucket.INBOX else self.saved_notes
        for note in notes:
            if note.id == note_id:
                return note
        raise NoteNotFoundError(f"Note {note_id} is missing from {bucket.value} after writing it")
