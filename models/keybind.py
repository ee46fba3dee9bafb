"""Keyboard shortcut data model definitions.

Updates: v0.2.0 - 2026-09-28 - Build display strings for recorded shortcuts.
Updates: v0.1.0 - 2026-09-14 - Introduce Keybind dataclass, action enum, and defaults.
"""
from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum, IntFlag
from types import MappingProxyType
from typing import Any

DEVICE_INDEPENDENT_FLAGS_MASK = 0xFFFF0000


class Modifier(IntFlag):
    """macOS device-independent modifier flag bits."""
    CAPS_LOCK = 1 << 16
    SHIFT = 1 << 17
    CONTROL = 1 << 18
    OPTION = 1 << 19
    COMMAND = 1 << 20
    NUMERIC_PAD = 1 << 21
    HELP = 1 << 22
    FUNCTION = 1 << 23


class KeyCode:
    """Virtual key codes for the ANSI keyboard layout."""
    A = 0x00
    S = 0x01
    D = 0x02
    F = 0x03
    H = 0x04
    G = 0x05
    Z = 0x06
    X = 0x07
    C = 0x08
    V = 0x09
    B = 0x0B
    Q = 0x0C
    W = 0x0D
    E = 0x0E
    R = 0x0F
    Y = 0x10
    T = 0x11
    ONE = 0x12
    TWO = 0x13
    THREE = 0x14
    FOUR = 0x15
    SIX = 0x16
    FIVE = 0x17
    EQUAL = 0x18
    NINE = 0x19
    SEVEN = 0x1A
    MINUS = 0x1B
    EIGHT = 0x1C
    ZERO = 0x1D
    RIGHT_BRACKET = 0x1E
    O = 0x1F
    U = 0x20
    LEFT_BRACKET = 0x21
    I = 0x22  # noqa: E741
    P = 0x23
    RETURN = 0x24
    L = 0x25
    J = 0x26
    QUOTE = 0x27
    K = 0x28
    SEMICOLON = 0x29
    BACKSLASH = 0x2A
    COMMA = 0x2B
    SLASH = 0x2C
    N = 0x2D
    M = 0x2E
    PERIOD = 0x2F
    TAB = 0x30
    SPACE = 0x31
    GRAVE = 0x32
    DELETE = 0x33
    ESCAPE = 0x35
    F5 = 0x60
    F6 = 0x61
    F7 = 0x62
    F3 = 0x63
    F8 = 0x64
    F9 = 0x65
    F11 = 0x67
    F10 = 0x6D
    F12 = 0x6F
    FORWARD_DELETE = 0x75
    F4 = 0x76
    F2 = 0x78
    F1 = 0x7A
    LEFT_ARROW = 0x7B
    RIGHT_ARROW = 0x7C
    DOWN_ARROW = 0x7D
    UP_ARROW = 0x7E


_NAMED_KEYS: dict[int, str] = {
    KeyCode.RETURN: "Enter",
    KeyCode.TAB: "Tab",
    KeyCode.SPACE: "Space",
    KeyCode.DELETE: "Delete",
    KeyCode.FORWARD_DELETE: "Fwd Delete",
    KeyCode.ESCAPE: "Esc",
    KeyCode.LEFT_ARROW: "←",
    KeyCode.RIGHT_ARROW: "→",
    KeyCode.UP_ARROW: "↑",
    KeyCode.DOWN_ARROW: "↓",
    KeyCode.F1: "F1",
    KeyCode.F2: "F2",
    KeyCode.F3: "F3",
    KeyCode.F4: "F4",
    KeyCode.F5: "F5",
    KeyCode.F6: "F6",
    KeyCode.F7: "F7",
    KeyCode.F8: "F8",
    KeyCode.F9: "F9",
    KeyCode.F10: "F10",
    KeyCode.F11: "F11",
    KeyCode.F12: "F12",
}

_CHARACTER_KEYS: dict[int, str] = {
    **{getattr(KeyCode, letter): letter for letter in "ABCDEFGHIJKLMNOPQRSTUVWXYZ"},
    KeyCode.ZERO: "0",
    KeyCode.ONE: "1",
    KeyCode.TWO: "2",
    KeyCode.THREE: "3",
    KeyCode.FOUR: "4",
    KeyCode.FIVE: "5",
    KeyCode.SIX: "6",
    KeyCode.SEVEN: "7",
    KeyCode.EIGHT: "8",
    KeyCode.NINE: "9",
    KeyCode.MINUS: "-",
    KeyCode.EQUAL: "=",
    KeyCode.LEFT_BRACKET: "[",
    KeyCode.RIGHT_BRACKET: "]",
    KeyCode.SEMICOLON: ";",
    KeyCode.QUOTE: "'",
    KeyCode.COMMA: ",",
    KeyCode.PERIOD: ".",
    KeyCode.SLASH: "/",
    KeyCode.BACKSLASH: "\\",
    KeyCode.GRAVE: "`",
}


def normalise_modifiers(flags: int) -> int:
    """Mask *flags* down to the device-independent modifier bits."""
    return int(flags) & DEVICE_INDEPENDENT_FLAGS_MASK


def key_name(key_code: int) -> str:
    """Return a printable name for *key_code*."""
    if key_code in _NAMED_KEYS:
        return _NAMED_KEYS[key_code]
    return _CHARACTER_KEYS.get(key_code, f"Key{key_code}")


def key_code_for_name(name: str) -> int | None:
    """Return the key code whose printable name matches *name* (case-insensitive)."""
    wanted = name.strip()
    if not wanted:
        return None
    aliases = {"return": KeyCode.RETURN, "esc": KeyCode.ESCAPE, "escape": KeyCode.ESCAPE}
    if wanted.lower() in aliases:
        return aliases[wanted.lower()]
    for table in (_NAMED_KEYS, _CHARACTER_KEYS):
        for code, label in table.items():
            if label.lower() == wanted.lower():
                return code
    return None


def build_display_string(key_code: int, modifier_flags: int) -> str:
    """Return a human-readable shortcut label such as ``Ctrl+Shift+D``."""
    flags = normalise_modifiers(modifier_flags)
    parts: list[str] = []
    if flags & Modifier.CONTROL:
        parts.append("Ctrl")
    if flags & Modifier.OPTION:
        parts.append("⌥")
    if flags & Modifier.SHIFT:
        parts.append("Shift")
    if flags & Modifier.COMMAND:
        parts.append("⌘")
    parts.append(key_name(key_code))
    return "+".join(parts)


class KeybindAction(str, Enum):
    """Closed set of actions that can be bound to a keyboard shortcut."""
    GLOBAL_CAPTURE = "global-capture"
    NEW_NOTE = "new-note"
    BOLD = "bold"
    ITALIC = "italic"
    SAVE_NOTE = "save-note"

    @property
    def label(self) -> str:
        return _ACTION_LABELS[self]

    @property
    def default_keybind(self) -> Keybind:
        return DEFAULT_KEYBINDS[self]


_ACTION_LABELS: dict[KeybindAction, str] = {
    KeybindAction.GLOBAL_CAPTURE: "Global Capture",
    KeybindAction.NEW_NOTE: "New Brain Dump",
    KeybindAction.BOLD: "Bold",
    KeybindAction.ITALIC: "Italic",
    KeybindAction.SAVE_NOTE: "Save Note",
}


@dataclass(slots=True, frozen=True)
class KeyEvent:
    """Key-down event delivered by the host input layer."""
    key_code: int
    modifier_flags: int = 0
    characters: str = ""

    @property
    def chord(self) -> tuple[int, int]:
        return (self.key_code, normalise_modifiers(self.modifier_flags))


@dataclass(slots=True, frozen=True)
class Keybind:
    """Key code plus modifier set bound to an action."""
    key_code: int
    modifier_flags: int
    characters: str
    display_string: str

    @property
    def chord(self) -> tuple[int, int]:
        """Return the ``(key_code, normalised modifiers)`` pair used for comparisons."""
        return (self.key_code, normalise_modifiers(self.modifier_flags))

    def to_record(self) -> dict[str, Any]:
        """Return a JSON-serialisable mapping."""
        return {
            "key_code": self.key_code,
            "modifier_flags": self.modifier_flags,
            "characters": self.characters,
            "display_string": self.display_string,
        }

    @classmethod
    def from_record(cls, data: Mapping[str, Any]) -> Keybind:
        """Hydrate a Keybind from a stored mapping, raising ValueError when malformed."""
        try:
            key_code = data["key_code"]
            modifier_flags = data["modifier_flags"]
        except KeyError as exc:
            raise ValueError(f"Keybind record is missing {exc.args[0]!r}") from exc
        for name, value in (("key_code", key_code), ("modifier_flags", modifier_flags)):
            if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                raise ValueError(f"Keybind {name} must be a non-negative integer")
        display = data.get("display_string")
        if not isinstance(display, str) or not display.strip():
            display = build_display_string(key_code, modifier_flags)
        return cls(
            key_code=key_code,
            modifier_flags=modifier_flags,
            characters=str(data.get("characters") or ""),
            display_string=display,
        )


DEFAULT_KEYBINDS: Mapping[KeybindAction, Keybind] = MappingProxyType(
    {
        KeybindAction.GLOBAL_CAPTURE: Keybind(
            key_code=KeyCode.D,
            modifier_flags=int(Modifier.CONTROL | Modifier.SHIFT),
            characters="d",
            display_string="Ctrl+Shift+D",
        ),
        KeybindAction.NEW_NOTE: Keybind(
            key_code=KeyCode.N,
            modifier_flags=int(Modifier.COMMAND | Modifier.SHIFT),
            characters="n",
            display_string="⌘Shift+N",
        ),
        KeybindAction.BOLD: Keybind(
            key_code=KeyCode.B,
            modifier_flags=int(Modifier.COMMAND),
            characters="b",
            display_string="⌘B",
        ),
        KeybindAction.ITALIC: Keybind(
            key_code=KeyCode.I,
            modifier_flags=int(Modifier.COMMAND),
            characters="i",
            display_string="⌘I",
        ),
        KeybindAction.SAVE_NOTE: Keybind(
            key_code=KeyCode.RETURN,
            modifier_flags=int(Modifier.COMMAND),
            characters="\r",
            display_string="⌘Enter",
        ),
    }
)


__all__ = [
    "DEFAULT_KEYBINDS",
    "DEVICE_INDEPENDENT_FLAGS_MASK",
    "KeyCode",
    "KeyEvent",
    "Keybind",
    "KeybindAction",
    "Modifier",
    "build_display_string",
    "key_code_for_name",
    "key_name",
    "normalise_modifiers",
]
