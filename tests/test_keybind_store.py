"""Keyboard shortcut registry tests.

Updates:
  v0.2.0 - 2026-09-28 - Cover the recorder entry point and malformed stored entries.
  v0.1.0 - 2026-09-14 - Cover defaults, conflicts, rebinding and persistence.
"""

from __future__ import annotations

import json

import pytest

from config.persistence import PreferenceStorageError, PreferenceStore
from core import (
    KeybindConflictError,
    KeybindStorageError,
    KeybindStore,
    KeybindValidationError,
)
from core.keybind_store import KEYBINDINGS_PREFERENCE_KEY
from models.keybind import (
    DEFAULT_KEYBINDS,
    KeyCode,
    KeyEvent,
    Keybind,
    KeybindAction,
    Modifier,
)

CMD = int(Modifier.COMMAND)
CMD_SHIFT = int(Modifier.COMMAND | Modifier.SHIFT)


def _keybind(key_code: int, flags: int, display: str) -> Keybind:
    return Keybind(key_code=key_code, modifier_flags=flags, characters="", display_string=display)


def test_defaults_when_nothing_stored(keybind_store: KeybindStore) -> None:
    assert keybind_store.bindings == dict(DEFAULT_KEYBINDS)
    assert keybind_store.binding_for(KeybindAction.BOLD).display_string == "⌘B"


def test_matches_default_shortcut(keybind_store: KeybindStore) -> None:
    event = KeyEvent(key_code=KeyCode.I, modifier_flags=CMD, characters="i")
    assert keybind_store.matches(event, KeybindAction.ITALIC)
    assert not keybind_store.matches(event, KeybindAction.BOLD)
    assert keybind_store.action_for(event) is KeybindAction.ITALIC


def test_extra_modifiers_do_not_match(keybind_store: KeybindStore) -> None:
    event = KeyEvent(key_code=KeyCode.B, modifier_flags=CMD_SHIFT)
    assert not keybind_store.matches(event, KeybindAction.BOLD)
    assert keybind_store.action_for(event) is None


def test_conflicting_rebind_leaves_both_unchanged(
    keybind_store: KeybindStore,
    preferences: PreferenceStore,
) -> None:
    with pytest.raises(KeybindConflictError) as excinfo:
        keybind_store.set_binding(KeybindAction.BOLD, _keybind(KeyCode.I, CMD, "⌘I"))

    assert excinfo.value.conflicting_action is KeybindAction.ITALIC
    assert "Italic" in str(excinfo.value)
    assert keybind_store.binding_for(KeybindAction.BOLD) == DEFAULT_KEYBINDS[KeybindAction.BOLD]
    assert (
        keybind_store.binding_for(KeybindAction.ITALIC) == DEFAULT_KEYBINDS[KeybindAction.ITALIC]
    )
    assert not preferences.path.exists()


def test_conflict_check_ignores_device_dependent_bits(keybind_store: KeybindStore) -> None:
    with pytest.raises(KeybindConflictError):
        keybind_store.set_binding(
            KeybindAction.NEW_NOTE,
            _keybind(KeyCode.B, CMD | 0x0008, "⌘B"),
        )


def test_rebinding_to_own_shortcut_is_allowed(keybind_store: KeybindStore) -> None:
    default = DEFAULT_KEYBINDS[KeybindAction.BOLD]
    assert keybind_store.set_binding(KeybindAction.BOLD, default) == default


def test_rebind_changes_matching_and_persists(
    keybind_store: KeybindStore,
    preferences: PreferenceStore,
) -> None:
    stored = keybind_store.set_binding(
        KeybindAction.BOLD,
        _keybind(KeyCode.K, CMD_SHIFT, "Shift+⌘+K"),
    )

    assert stored.display_string == "Shift+⌘+K"
    assert keybind_store.matches(KeyEvent(KeyCode.K, CMD_SHIFT), KeybindAction.BOLD)
    assert not keybind_store.matches(KeyEvent(KeyCode.B, CMD), KeybindAction.BOLD)

    payload = json.loads(preferences.path.read_text(encoding="utf-8"))
    assert payload[KEYBINDINGS_PREFERENCE_KEY]["bold"]["key_code"] == KeyCode.K

    reloaded = KeybindStore(preferences)
    assert reloaded.binding_for(KeybindAction.BOLD) == stored


def test_rebind_frees_previous_shortcut(keybind_store: KeybindStore) -> None:
    keybind_store.set_binding(KeybindAction.BOLD, _keybind(KeyCode.K, CMD, "⌘+K"))
    freed = keybind_store.set_binding(KeybindAction.ITALIC, _keybind(KeyCode.B, CMD, "⌘+B"))
    assert keybind_store.action_for(KeyEvent(KeyCode.B, CMD)) is KeybindAction.ITALIC
    assert freed.display_string == "⌘+B"


def test_reset_single_binding(keybind_store: KeybindStore) -> None:
    keybind_store.set_binding(KeybindAction.SAVE_NOTE, _keybind(KeyCode.S, CMD, "⌘+S"))

    restored = keybind_store.reset_binding(KeybindAction.SAVE_NOTE)

    assert restored == DEFAULT_KEYBINDS[KeybindAction.SAVE_NOTE]
    assert keybind_store.binding_for(KeybindAction.SAVE_NOTE).display_string == "⌘Enter"


def test_reset_to_defaults(keybind_store: KeybindStore, preferences: PreferenceStore) -> None:
    keybind_store.set_binding(KeybindAction.BOLD, _keybind(KeyCode.K, CMD, "⌘+K"))
    keybind_store.set_binding(KeybindAction.ITALIC, _keybind(KeyCode.J, CMD, "⌘+J"))

    keybind_store.reset_to_defaults()

    assert keybind_store.bindings == dict(DEFAULT_KEYBINDS)
    assert KeybindStore(preferences).bindings == dict(DEFAULT_KEYBINDS)


def test_malformed_stored_entries_are_ignored(preferences: PreferenceStore) -> None:
    preferences.set(
        KEYBINDINGS_PREFERENCE_KEY,
        {
            "bold": {"key_code": "k", "modifier_flags": CMD},
            "italic": {"key_code": KeyCode.J, "modifier_flags": CMD},
            "teleport": {"key_code": KeyCode.T, "modifier_flags": CMD},
            "save-note": "cmd+s",
        },
    )

    store = KeybindStore(preferences)

    assert store.binding_for(KeybindAction.BOLD) == DEFAULT_KEYBINDS[KeybindAction.BOLD]
    assert store.binding_for(KeybindAction.ITALIC).key_code == KeyCode.J
    assert store.binding_for(KeybindAction.ITALIC).display_string == "⌘+J"
    assert (
        store.binding_for(KeybindAction.SAVE_NOTE) == DEFAULT_KEYBINDS[KeybindAction.SAVE_NOTE]
    )


def test_non_object_stored_value_falls_back_to_defaults(preferences: PreferenceStore) -> None:
    preferences.set(KEYBINDINGS_PREFERENCE_KEY, ["not", "a", "mapping"])
    assert KeybindStore(preferences).bindings == dict(DEFAULT_KEYBINDS)


def test_record_binding_builds_display_string(keybind_store: KeybindStore) -> None:
    event = KeyEvent(
        key_code=KeyCode.SPACE,
        modifier_flags=int(Modifier.OPTION | Modifier.CONTROL) | 0x0001,
        characters=" ",
    )

    keybind = keybind_store.record_binding(KeybindAction.GLOBAL_CAPTURE, event)

    assert keybind.display_string == "Ctrl+⌥+Space"
    assert keybind.modifier_flags == int(Modifier.OPTION | Modifier.CONTROL)


def test_record_binding_requires_modifier(keybind_store: KeybindStore) -> None:
    with pytest.raises(KeybindValidationError):
        keybind_store.record_binding(KeybindAction.BOLD, KeyEvent(KeyCode.K, 0))
    assert keybind_store.binding_for(KeybindAction.BOLD) == DEFAULT_KEYBINDS[KeybindAction.BOLD]


def test_record_binding_escape_cancels(keybind_store: KeybindStore) -> None:
    with pytest.raises(KeybindValidationError, match="cancelled"):
        keybind_store.record_binding(KeybindAction.BOLD, KeyEvent(KeyCode.ESCAPE, 0))


def test_persist_failure_raises_storage_error(
    keybind_store: KeybindStore,
    preferences: PreferenceStore,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    def _fail(key: str, value: object) -> None:
        raise PreferenceStorageError("disk full")

    monkeypatch.setattr(preferences, "set", _fail)

    with pytest.raises(KeybindStorageError):
        keybind_store.reset_to_defaults()
