"""Helpers for persisting UI preferences without GUI dependencies.

Updates:
  v0.2.0 - 2026-09-28 - Write preferences through a temporary file and atomic replace.
  v0.1.1 - 2026-09-21 - Track the first-run tutorial flag alongside keyboard shortcuts.
  v0.1.0 - 2026-09-14 - Introduce JSON-backed preference store.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from collections.abc import Mapping
from pathlib import Path
from typing import Any, cast

logger = logging.getLogger("brain_dump.preferences")

TUTORIAL_SEEN_KEY = "has_seen_tutorial"


class PreferenceStorageError(Exception):
    """Raised when the preferences file cannot be written."""


class PreferenceStore:
    """Small key/value store persisted as a single JSON object.

    Every read goes back to disk so external edits are picked up on the next call;
    every write rewrites the whole document. The last writer wins.
    """

    def __init__(self, path: Path) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        """Return the backing JSON file location."""
        return self._path

    def load(self) -> dict[str, Any]:
        """Return the stored preferences, or an empty mapping when unreadable."""
        if not self._path.exists():
            return {}
        try:
            raw_contents = self._path.read_text(encoding="utf-8")
        except OSError as exc:
            logger.warning("Unable to read preferences file %s: %s", self._path, exc)
            return {}
        try:
            parsed = json.loads(raw_contents)
        except json.JSONDecodeError:
            logger.warning("Ignoring corrupt preferences file %s", self._path)
            return {}
        if not isinstance(parsed, Mapping):
            logger.warning("Preferences file %s does not contain a JSON object", self._path)
            return {}
        parsed_mapping = cast("Mapping[object, Any]", parsed)
        return {str(key): value for key, value in parsed_mapping.items()}

    def get(self, key: str, default: Any = None) -> Any:
        """Return the value stored under *key* or *default*."""
        return self.load().get(key, default)

    def set(self, key: str, value: Any) -> None:
        """Store *value* under *key*; ``None`` removes the key."""
        self.update({key: value})

    def update(self, updates: Mapping[str, Any]) -> None:
        """Apply *updates* and rewrite the preferences file."""
        data = self.load()
        for key, value in updates.items():
            if value is None:
                data.pop(key, None)
            else:
                data[key] = value
        self._write(data)

    @property
    def has_seen_tutorial(self) -> bool:
        """Return True once the first-run tutorial has been shown."""
        return bool(self.get(TUTORIAL_SEEN_KEY, False))

    def mark_tutorial_seen(self) -> None:
        """Record that the first-run tutorial has been shown."""
        self.set(TUTORIAL_SEEN_KEY, True)

    def _write(self, data: Mapping[str, Any]) -> None:
        payload = json.dumps(dict(data), indent=2, ensure_ascii=False)
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self._path.parent, prefix=f".{self._path.name}.", suffix=".tmp"
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as handle:
                    handle.write(payload)
                os.replace(tmp_name, self._path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as exc:
            raise PreferenceStorageError(
                f"Unable to write preferences file {self._path}"
            ) from exc
        logger.debug("Persisted %d preference key(s) to %s", len(data), self._path)


__all__ = ["PreferenceStorageError", "PreferenceStore", "TUTORIAL_SEEN_KEY"]
