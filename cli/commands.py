"""CLI command handlers for Brain Dump.

Updates:
  v0.3.1 - 2026-10-17 - Edit through debounced sessions; exit 4 on shortcut write failures.
  v0.3.0 - 2026-09-28 - Add keybinding list/set/reset handlers.
  v0.2.0 - 2026-09-24 - Add interactive review loop with skip support.
  v0.1.0 - 2026-09-21 - Capture, list, show, edit, delete, keep and trash handlers.
"""

from __future__ import annotations

import argparse
import logging
from collections.abc import Callable
from dataclasses import dataclass

from core import (
    BrainDumpServices,
    EditSession,
    KeybindConflictError,
    KeybindError,
    KeybindStorageError,
    NoteBucket,
    NoteNotFoundError,
    NoteStorageError,
    ReviewSession,
    capture_note,
)
from models.keybind import (
    KeyEvent,
    KeybindAction,
    Modifier,
    key_code_for_name,
)

from .utils import format_note_line, iter_text_chunks, print_and_log, read_text_argument

CommandHandler = Callable[[BrainDumpServices, argparse.Namespace, logging.Logger], int]

EXIT_OK = 0
EXIT_USER_ERROR = 1
EXIT_STORAGE_ERROR = 4

TUTORIAL_PAGES: tuple[tuple[str, str], ...] = (
    (
        "Welcome to Brain Dump",
        "A quick-capture tool.\nDump thoughts, review later, keep what matters.",
    ),
    ("Capture", "Run `brain-dump capture <text>` or pipe text in.\nNo organizing needed."),
    ("Review", "Run `brain-dump review`.\nPress k to keep, d to trash, s to skip."),
    ("Saved Notes", "Kept notes live in the saved bucket.\nYou're ready to go."),
)


@dataclass(frozen=True)
class CommandSpec:
    """Metadata for dispatching CLI command handlers."""

    handler: CommandHandler


def _storage_failure(logger: logging.Logger, exc: Exception) -> int:
    print_and_log(logger, logging.ERROR, f"Storage error: {exc}")
    return EXIT_STORAGE_ERROR


def run_capture(
    services: BrainDumpServices,
    args: argparse.Namespace,
    logger: logging.Logger,
) -> int:
    text = read_text_argument(getattr(args, "text", None))
    try:
        note = capture_note(services.notes, text)
    except NoteStorageError as exc:
        return _storage_failure(logger, exc)
    if note is None:
        print("Nothing to capture: note text is empty.")
        return EXIT_USER_ERROR
    print(f"Captured {note.id}")
    return EXIT_OK


def run_list(
    services: BrainDumpServices,
    args: argparse.Namespace,
    logger: logging.Logger,
) -> int:
    bucket = NoteBucket(getattr(args, "bucket", NoteBucket.INBOX.value))
    notes = services.notes.list_notes(bucket)
    if not notes:
        if bucket is NoteBucket.INBOX:
            print("All caught up! Your inbox is empty.")
        else:
            print("No saved notes yet. Notes you keep during review will appear here.")
        return EXIT_OK
    for note in notes:
        print(format_note_line(note))
    return EXIT_OK


def run_show(
    services: BrainDumpServices,
    args: argparse.Namespace,
    logger: logging.Logger,
) -> int:
    try:
        note = services.notes.find_note(args.note_id)
    except NoteNotFoundError as exc:
        print(str(exc))
        return EXIT_USER_ERROR
    print(f"# {note.id} ({note.bucket.value})")
    print(note.content)
    return EXIT_OK


def run_edit(
    services: BrainDumpServices,
    args: argparse.Namespace,
    logger: logging.Logger,
) -> int:
    try:
        note = services.notes.find_note(args.note_id)
    except NoteNotFoundError as exc:
        print(str(exc))
        return EXIT_USER_ERROR
    session = EditSession(
        services.notes,
        note,
        debounce_seconds=services.edit_debounce_seconds,
    )
    text = ""
    changed = False
    try:
        for chunk in iter_text_chunks(getattr(args, "text", None)):
            text += chunk
            if text.strip():
                session.edit(text)
                changed = session.poll() or changed
        if not text.strip():
            print("Nothing to write: new note text is empty.")
            return EXIT_USER_ERROR
        session.edit(text)
        changed = session.flush() or changed
    except NoteNotFoundError as exc:
        print(str(exc))
        return EXIT_USER_ERROR
    except NoteStorageError as exc:
        return _storage_failure(logger, exc)
    print(f"Updated {note.id}" if changed else f"No changes to {note.id}")
    return EXIT_OK


def run_delete(
    services: BrainDumpServices,
    args: argparse.Namespace,
    logger: logging.Logger,
) -> int:
    try:
        note = services.notes.find_note(args.note_id)
        services.notes.remove_note(note)
    except NoteNotFoundError as exc:
        print(str(exc))
        return EXIT_USER_ERROR
    except NoteStorageError as exc:
        return _storage_failure(logger, exc)
    print(f"Deleted {note.id}")
    return EXIT_OK


def run_keep(
    services: BrainDumpServices,
    args: argparse.Namespace,
    logger: logging.Logger,
) -> int:
    try:
        note = services.notes.find_note(args.note_id, NoteBucket.INBOX)
        services.notes.promote_note(note)
    except NoteNotFoundError as exc:
        print(str(exc))
        return EXIT_USER_ERROR
    except NoteStorageError as exc:
        return _storage_failure(logger, exc)
    print(f"Kept {note.id}")
    return EXIT_OK


def run_trash(
    services: BrainDumpServices,
    args: argparse.Namespace,
    logger: logging.Logger,
) -> int:
    try:
        note = services.notes.find_note(args.note_id, NoteBucket.INBOX)
        services.notes.remove_note(note)
    except NoteNotFoundError as exc:
        print(str(exc))
        return EXIT_USER_ERROR
    except NoteStorageError as exc:
        return _storage_failure(logger, exc)
    print(f"Trashed {note.id}")
    return EXIT_OK


def run_review(
    services: BrainDumpServices,
    args: argparse.Namespace,
    logger: logging.Logger,
) -> int:
    session = ReviewSession(services.notes)
    while not session.is_complete:
        note = session.current
        if note is None:  # pragma: no cover - guarded by is_complete
            break
        print(f"\n{session.progress_label}")
        print(f"--- {note.created_at:%Y-%m-%d %H:%M} ---")
        print(note.content)
        try:
            choice = input("[k]eep, [d]iscard, [s]kip, [q]uit: ").strip().lower()
        except EOFError:
            choice = "q"
        try:
            if choice in {"k", "keep"}:
                session.keep()
            elif choice in {"d", "discard", "t", "trash"}:
                session.discard()
            elif choice in {"s", "skip"}:
                session.skip()
            elif choice in {"q", "quit"}:
                break
            else:
                print("Unrecognised choice.")
        except NoteNotFoundError as exc:
            logger.warning("Review target vanished: %s", exc)
            services.notes.refresh()
        except NoteStorageError as exc:
            print_and_log(logger, logging.ERROR, f"Storage error: {exc}")
            session.skip()
    if session.is_complete:
        print(f"\n{session.progress_label}")
    print(f"Kept {session.kept}, discarded {session.discarded}.")
    return EXIT_OK


def run_tutorial(
    services: BrainDumpServices,
    args: argparse.Namespace,
    logger: logging.Logger,
) -> int:
    print_tutorial()
    services.preferences.mark_tutorial_seen()
    return EXIT_OK


def print_tutorial() -> None:
    """Print the getting-started pages."""
    for title, body in TUTORIAL_PAGES:
        print(f"== {title} ==")
        print(body)
        print()


def _print_keybinds(services: BrainDumpServices) -> None:
    width = max(len(action.label) for action in KeybindAction)
    for action, keybind in services.keybinds.bindings.items():
        print(f"{action.label:<{width}}  {keybind.display_string:<14}  ({action.value})")


def run_keybinds(
    services: BrainDumpServices,
    args: argparse.Namespace,
    logger: logging.Logger,
) -> int:
    sub_command = getattr(args, "keybind_command", None) or "list"
    if sub_command == "list":
        _print_keybinds(services)
        return EXIT_OK

    try:
        if sub_command == "reset":
            action_value = getattr(args, "action", None)
            if action_value:
                keybind = services.keybinds.reset_binding(KeybindAction(action_value))
                print(f"{KeybindAction(action_value).label} reset to {keybind.display_string}")
            else:
                services.keybinds.reset_to_defaults()
                print("All shortcuts reset to defaults.")
            return EXIT_OK

        action = KeybindAction(args.action)
        key_code = key_code_for_name(args.key)
        if key_code is None:
            print(f"Unknown key: {args.key}")
            return EXIT_USER_ERROR
        modifiers = Modifier(0)
        if args.ctrl:
            modifiers |= Modifier.CONTROL
        if args.shift:
            modifiers |= Modifier.SHIFT
        if args.option:
            modifiers |= Modifier.OPTION
        if args.cmd:
            modifiers |= Modifier.COMMAND
        event = KeyEvent(
            key_code=key_code,
            modifier_flags=int(modifiers),
            characters=args.key.lower(),
        )
        keybind = services.keybinds.record_binding(action, event)
    except KeybindConflictError as exc:
        print(f"Already in use: {exc}")
        return EXIT_USER_ERROR
    except KeybindStorageError as exc:
        return _storage_failure(logger, exc)
    except KeybindError as exc:
        print_and_log(logger, logging.ERROR, str(exc))
        return EXIT_USER_ERROR
    print(f"{action.label} bound to {keybind.display_string}")
    return EXIT_OK


def run_default(
    services: BrainDumpServices,
    args: argparse.Namespace,
    logger: logging.Logger,
) -> int:
    """Print the inbox badge, showing the tutorial on first run."""
    if not services.preferences.has_seen_tutorial:
        print_tutorial()
        services.preferences.mark_tutorial_seen()
    count = services.notes.inbox_count
    print(f"Review Notes ({count})" if count else "Review Notes")
    print(f"Saved Notes ({len(services.notes.saved_notes)})")
    return EXIT_OK


COMMAND_SPECS: dict[str | None, CommandSpec] = {
    None: CommandSpec(run_default),
    "capture": CommandSpec(run_capture),
    "list": CommandSpec(run_list),
    "show": CommandSpec(run_show),
    "edit": CommandSpec(run_edit),
    "delete": CommandSpec(run_delete),
    "keep": CommandSpec(run_keep),
    "trash": CommandSpec(run_trash),
    "review": CommandSpec(run_review),
    "tutorial": CommandSpec(run_tutorial),
    "keybinds": CommandSpec(run_keybinds),
}


__all__ = ["COMMAND_SPECS", "CommandSpec", "TUTORIAL_PAGES", "print_tutorial"]
