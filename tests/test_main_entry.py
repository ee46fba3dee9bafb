"""Lightweight integration checks for main module.

Updates:
  v0.4.0 - 2026-10-17 - Cover shortcut write failures, blank edits and the edit debounce window.
  v0.3.0 - 2026-09-28 - Cover keybinding commands and the interactive review loop.
  v0.2.0 - 2026-09-24 - Cover first-run tutorial and inbox badge output.
  v0.1.0 - 2026-09-21 - Cover capture, list and settings error exit codes.
"""

from __future__ import annotations

import io
import json
import sys
from collections.abc import Iterator
from pathlib import Path

import pytest

import cli.commands as cli_commands
import main
from config.persistence import PreferenceStorageError, PreferenceStore
from core.editor import EditSession
from core.keybind_store import KEYBINDINGS_PREFERENCE_KEY
from core.note_store import NoteStore
from models.note import Note, NoteBucket


@pytest.fixture()
def app_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Path:
    notes_dir = tmp_path / "notes"
    monkeypatch.setenv("BRAIN_DUMP_NOTES_DIR", str(notes_dir))
    monkeypatch.setenv("BRAIN_DUMP_PREFERENCES_PATH", str(tmp_path / "prefs.json"))
    return notes_dir


def _answers(monkeypatch: pytest.MonkeyPatch, *replies: str) -> None:
    iterator: Iterator[str] = iter(replies)

    def _input(prompt: str = "") -> str:
        try:
            return next(iterator)
        except StopIteration:
            raise EOFError from None

    monkeypatch.setattr("builtins.input", _input)


def test_capture_then_list(app_env: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main.main(["capture", "Buy", "milk"]) == 0
    captured_id = capsys.readouterr().out.strip().removeprefix("Captured ")

    assert main.main(["list"]) == 0
    listing = capsys.readouterr().out
    assert captured_id in listing
    assert "Buy milk" in listing
    assert (app_env / "inbox" / f"{captured_id}.md").read_text(encoding="utf-8") == "Buy milk"


def test_capture_reads_stdin(
    app_env: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    monkeypatch.setattr(sys, "stdin", io.StringIO("  piped thought \n"))

    assert main.main(["capture"]) == 0

    notes = NoteStore(app_env).inbox_notes
    assert [note.content for note in notes] == ["piped thought"]


def test_blank_capture_is_rejected(app_env: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main.main(["capture", "   "]) == 1
    assert "Nothing to capture" in capsys.readouterr().out
    assert NoteStore(app_env).inbox_count == 0


def test_keep_show_and_delete(app_env: Path, capsys: pytest.CaptureFixture[str]) -> None:
    note = NoteStore(app_env).create_note("Idea")

    assert main.main(["keep", note.id]) == 0
    assert main.main(["keep", note.id]) == 1
    assert main.main(["show", note.id]) == 0
    assert "Idea" in capsys.readouterr().out
    assert NoteStore(app_env).saved_notes[0].id == note.id

    assert main.main(["list", "--bucket", NoteBucket.SAVED.value]) == 0
    assert note.id in capsys.readouterr().out

    assert main.main(["delete", note.id]) == 0
    assert main.main(["show", note.id]) == 1
    assert "not found" in capsys.readouterr().out


def test_edit_replaces_contents(app_env: Path, capsys: pytest.CaptureFixture[str]) -> None:
    note = NoteStore(app_env).create_note("Old")

    assert main.main(["edit", note.id, "New", "text"]) == 0
    assert note.path.read_text(encoding="utf-8") == "New text"


def test_trash_only_targets_inbox(app_env: Path, capsys: pytest.CaptureFixture[str]) -> None:
    store = NoteStore(app_env)
    saved = store.promote_note(store.create_note("Saved"))

    assert main.main(["trash", saved.id]) == 1
    assert saved.path.exists()


def test_empty_listings(app_env: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main.main(["list"]) == 0
    assert "All caught up" in capsys.readouterr().out
    assert main.main(["list", "--bucket", "saved"]) == 0
    assert "No saved notes yet" in capsys.readouterr().out


def test_review_loop(
    app_env: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    store = NoteStore(app_env)
    store.create_note("first")
    store.create_note("second")
    _answers(monkeypatch, "x", "k", "d")

    assert main.main(["review"]) == 0

    output = capsys.readouterr().out
    assert "Unrecognised choice." in output
    assert "All caught up!" in output
    assert "Kept 1, discarded 1." in output
    store.refresh()
    assert store.inbox_count == 0
    assert len(store.saved_notes) == 1


def test_review_stops_at_end_of_input(
    app_env: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    NoteStore(app_env).create_note("pending")
    _answers(monkeypatch)

    assert main.main(["review"]) == 0
    assert "Kept 0, discarded 0." in capsys.readouterr().out
    assert NoteStore(app_env).inbox_count == 1


def test_first_run_shows_tutorial_once(
    app_env: Path,
    tmp_path: Path,
    capsys: pytest.CaptureFixture[str],
) -> None:
    NoteStore(app_env).create_note("waiting")

    assert main.main([]) == 0
    first = capsys.readouterr().out
    assert "Welcome to Brain Dump" in first
    assert "Review Notes (1)" in first
    assert json.loads((tmp_path / "prefs.json").read_text(encoding="utf-8"))["has_seen_tutorial"]

    assert main.main([]) == 0
    second = capsys.readouterr().out
    assert "Welcome to Brain Dump" not in second
    assert "Saved Notes (0)" in second


def test_keybinds_set_conflict_and_reset(
    app_env: Path,
    tmp_path: Path,
    capsys: pytest.CaptureFixture[str],
) -> None:
    assert main.main(["keybinds", "set", "bold", "i", "--cmd"]) == 1
    assert "Already in use" in capsys.readouterr().out

    assert main.main(["keybinds", "set", "bold", "k", "--cmd", "--shift"]) == 0
    assert "Bold bound to Shift+⌘+K" in capsys.readouterr().out
    stored = json.loads((tmp_path / "prefs.json").read_text(encoding="utf-8"))
    assert stored[KEYBINDINGS_PREFERENCE_KEY]["bold"]["display_string"] == "Shift+⌘+K"

    assert main.main(["keybinds"]) == 0
    assert "Shift+⌘+K" in capsys.readouterr().out

    assert main.main(["keybinds", "reset", "bold"]) == 0
    assert "Bold reset to ⌘B" in capsys.readouterr().out
    assert main.main(["keybinds", "reset"]) == 0


def test_keybinds_set_rejects_bare_keys(app_env: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main.main(["keybinds", "set", "bold", "k"]) == 1
    assert "modifier" in capsys.readouterr().out
    assert main.main(["keybinds", "set", "bold", "hyper", "--cmd"]) == 1
    assert "Unknown key" in capsys.readouterr().out


def test_print_settings(app_env: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main.main(["--print-settings"]) == 0
    output = capsys.readouterr().out
    assert "Brain Dump configuration summary" in output
    assert str(app_env.resolve()) in output


def test_settings_error_exit_code(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("BRAIN_DUMP_CONFIG_JSON", str(tmp_path / "missing.json"))
    assert main.main(["list"]) == 2


def test_keybind_write_failure_is_storage_error(
    app_env: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    def _fail(self: PreferenceStore, data: object) -> None:
        raise PreferenceStorageError("disk full")

    monkeypatch.setattr(PreferenceStore, "_write", _fail)

    assert main.main(["keybinds", "set", "bold", "k", "--cmd"]) == 4
    assert "Unable to persist keyboard shortcuts" in capsys.readouterr().out
    assert main.main(["keybinds", "reset"]) == 4


def test_edit_rejects_whitespace_text(app_env: Path, capsys: pytest.CaptureFixture[str]) -> None:
    note = NoteStore(app_env).create_note("Keep this")

    assert main.main(["edit", note.id, "  ", "\t"]) == 1
    assert "Nothing to write" in capsys.readouterr().out
    assert note.path.read_text(encoding="utf-8") == "Keep this"


def test_edit_uses_configured_debounce(
    app_env: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    windows: list[float] = []

    class _RecordingSession(EditSession):
        def __init__(self, store: NoteStore, note: Note, *, debounce_seconds: float) -> None:
            windows.append(debounce_seconds)
            super().__init__(store, note, debounce_seconds=debounce_seconds)

    monkeypatch.setattr(cli_commands, "EditSession", _RecordingSession)
    monkeypatch.setenv("BRAIN_DUMP_EDIT_DEBOUNCE_SECONDS", "2.5")
    monkeypatch.setattr(sys, "stdin", io.StringIO("line one\nline two\n"))
    note = NoteStore(app_env).create_note("Old")

    assert main.main(["edit", note.id]) == 0

    assert windows == [2.5]
    assert note.path.read_text(encoding="utf-8") == "line one\nline two\n"
    assert f"Updated {note.id}" in capsys.readouterr().out


def test_edit_with_identical_text_reports_no_changes(
    app_env: Path,
    capsys: pytest.CaptureFixture[str],
) -> None:
    note = NoteStore(app_env).create_note("Same")

    assert main.main(["edit", note.id, "Same"]) == 0
    assert f"No changes to {note.id}" in capsys.readouterr().out
