"""Argument parser for the Brain Dump CLI.

Updates:
  v0.2.0 - 2026-09-28 - Add keybinding subcommands.
  v0.1.0 - 2026-09-21 - Capture, list, review and note maintenance commands.
"""

from __future__ import annotations

import argparse
from pathlib import Path

from models.keybind import KeybindAction
from models.note import NoteBucket


def build_parser() -> argparse.ArgumentParser:
    """Return the configured top-level parser."""
    parser = argparse.ArgumentParser(
        prog="brain-dump",
        description="Capture quick notes, triage them later, keep what matters.",
    )
    parser.add_argument(
        "--logging-config",
        type=Path,
        default=None,
        help="Path to logging configuration file (INI format)",
    )
    parser.add_argument(
        "--print-settings",
        action="store_true",
        help="Print resolved settings and exit",
    )

    subparsers = parser.add_subparsers(dest="command")

    capture_parser = subparsers.add_parser(
        "capture",
        help="Capture a new note into the inbox (reads stdin when no text is given).",
    )
    capture_parser.add_argument("text", nargs="*", help="Note text")

    list_parser = subparsers.add_parser("list", help="List notes newest first.")
    list_parser.add_argument(
        "--bucket",
        choices=[bucket.value for bucket in NoteBucket],
        default=NoteBucket.INBOX.value,
        help="Bucket to list (default: inbox).",
    )

    show_parser = subparsers.add_parser("show", help="Print a note's contents.")
    show_parser.add_argument("note_id", help="Note identifier")

    edit_parser = subparsers.add_parser("edit", help="Replace a note's contents.")
    edit_parser.add_argument("note_id", help="Note identifier")
    edit_parser.add_argument(
        "text",
        nargs="*",
        help="New contents (reads stdin when omitted).",
    )

    delete_parser = subparsers.add_parser("delete", help="Delete a note from either bucket.")
    delete_parser.add_argument("note_id", help="Note identifier")

    keep_parser = subparsers.add_parser("keep", help="Move an inbox note to saved.")
    keep_parser.add_argument("note_id", help="Note identifier")

    trash_parser = subparsers.add_parser("trash", help="Delete an inbox note.")
    trash_parser.add_argument("note_id", help="Note identifier")

    subparsers.add_parser(
        "review",
        help="Triage inbox notes interactively (k keep, d discard, s skip, q quit).",
    )

    subparsers.add_parser("tutorial", help="Show the getting-started guide.")

    keybinds_parser = subparsers.add_parser("keybinds", help="Inspect or change shortcuts.")
    keybind_commands = keybinds_parser.add_subparsers(dest="keybind_command")
    keybind_commands.add_parser("list", help="List the current shortcuts.")

    set_parser = keybind_commands.add_parser("set", help="Bind a shortcut to an action.")
    set_parser.add_argument(
        "action",
        choices=[action.value for action in KeybindAction],
        help="Action to rebind.",
    )
    set_parser.add_argument("key", help="Key name, e.g. D, Enter, F5, Space.")
    set_parser.add_argument("--ctrl", action="store_true", help="Include the Control key.")
    set_parser.add_argument("--shift", action="store_true", help="Include the Shift key.")
    set_parser.add_argument("--option", action="store_true", help="Include the Option key.")
    set_parser.add_argument("--cmd", action="store_true", help="Include the Command key.")

    reset_parser = keybind_commands.add_parser(
        "reset",
        help="Restore default shortcuts (all actions when none is given).",
    )
    reset_parser.add_argument(
        "action",
        nargs="?",
        choices=[action.value for action in KeybindAction],
        default=None,
        help="Action to reset.",
    )
    return parser


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Return parsed CLI arguments for the Brain Dump launcher."""
    return build_parser().parse_args(argv)
