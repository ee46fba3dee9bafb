"""Shared CLI utility functions for Brain Dump commands.

Updates:
  v0.1.2 - 2026-10-17 - Stream stdin line by line for debounced edits.
  v0.1.1 - 2026-09-28 - Read note text from stdin when no arguments are given.
  v0.1.0 - 2026-09-21 - Extract stdout logging, path and note formatting helpers.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import TYPE_CHECKING, Any, TextIO

if TYPE_CHECKING:  # pragma: no cover - typing helpers
    from collections.abc import Iterator, Sequence
    from logging import Logger

    from models.note import Note
else:  # pragma: no cover - runtime placeholders for type-only imports
    Iterator = Sequence = Logger = Note = Any

TITLE_WIDTH = 60


def print_and_log(logger: Logger, level: int, message: str) -> None:
    """Log *message* at *level* and mirror it to stdout."""
    logger.log(level, message)
    print(message)


def describe_path(path_value: object, *, expect_directory: bool) -> str:
    """Return a human-friendly description of *path_value* suitability."""
    try:
        path = Path(path_value) if path_value is not None else None  # type: ignore[arg-type]
    except TypeError:
        path = None
    if path is None:
        return "not set"

    resolved = path.expanduser()
    if resolved.exists():
        if expect_directory and not resolved.is_dir():
            return f"{resolved} (exists but is not a directory)"
        if not expect_directory and resolved.is_dir():
            return f"{resolved} (exists but is a directory)"
        return f"{resolved} (exists)"
    return f"{resolved} (missing - created on demand)"


def iter_text_chunks(words: Sequence[str] | None, stream: TextIO | None = None) -> Iterator[str]:
    """Yield joined *words*, or *stream* line by line when none were given.

    Nothing is yielded for an interactive terminal.
    """
    if words:
        yield " ".join(words)
        return
    source = stream if stream is not None else sys.stdin
    if source.isatty():
        return
    yield from source


def read_text_argument(words: Sequence[str] | None, stream: TextIO | None = None) -> str:
    """Join positional *words*, or read the whole of *stream* when none were given."""
    return "".join(iter_text_chunks(words, stream))


def truncate(text: str, width: int = TITLE_WIDTH) -> str:
    """Shorten *text* to *width* characters with an ellipsis."""
    if len(text) <= width:
        return text
    return text[: width - 1].rstrip() + "…"


def format_note_line(note: Note) -> str:
    """Return a single listing line: id, creation date and title."""
    created = note.created_at.strftime("%Y-%m-%d %H:%M")
    return f"{note.id}  {created}  {truncate(note.title)}"
