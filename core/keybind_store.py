"""Keyboard shortcut registry with conflict detection.

Bindings are persisted as one JSON object under a single preferences key; every
mutation rewrites the whole mapping. A shortcut can only be assigned when no other
action already owns the same key code and modifier set.

Updates:
  v0.2.0 - 2026-09-28 - Add recorder entry point that builds display strings from events.
  v0.1.1 - 2026-09-21 - Ignore malformed stored entries instead of discarding every override.
  v0.1.0 - 2026-09-14 - Initial registry backed by the preference store.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, cast

from config.persistence import PreferenceStorageError, PreferenceStore
from models.keybind import (
    DEFAULT_KEYBINDS,
    KeyCode,
    KeyEvent,
    Keybind,
    KeybindAction,
    build_display_string,
    normalise_modifiers,
)

from .exceptions import KeybindConflictError, KeybindStorageError, KeybindValidationError

logger = logging.getLogger("brain_dump.keybinds")

KEYBINDINGS_PREFERENCE_KEY = "custom_keybindings"

__all__ = ["KEYBINDINGS_PREFERENCE_KEY", "KeybindStore"]


class KeybindStore:
    """Resolve, match and rebind keyboard shortcuts for :class:`KeybindAction`."""

    def __init__(self, preferences: PreferenceStore) -> None:
        self._preferences = preferences
        self._bindings: dict[KeybindAction, Keybind] = self._load()

    def _load(self) -> dict[KeybindAction, Keybind]:
        bindings = dict(DEFAULT_KEYBINDS)
        stored = self._preferences.get(KEYBINDINGS_PREFERENCE_KEY)
        if stored is None:
            return bindings
        if not isinstance(stored, Mapping):
            logger.warning("Ignoring stored keybindings: expected a JSON object")
            return bindings
        for raw_action, raw_binding in cast("Mapping[object, Any]", stored).items():
            try:
                action = KeybindAction(str(raw_action))
            except ValueError:
                logger.warning("Ignoring keybinding for unknown action %r", raw_action)
                continue
            if not isinstance(raw_binding, Mapping):
                logger.warning("Ignoring malformed keybinding for %s", action.value)
                continue
            try:
                bindings[action] = Keybind.from_record(cast("Mapping[str, Any]", raw_binding))
            except ValueError as exc:
                logger.warning("Ignoring malformed keybinding for %s: %s", action.value, exc)
        return bindings

    @property
    def bindings(self) -> dict[KeybindAction, Keybind]:
        """Return a copy of the current action to shortcut mapping."""
        return {action: self.binding_for(action) for action in KeybindAction}

    def binding_for(self, action: KeybindAction) -> Keybind:
        """Return the shortcut bound to *action*, falling back to its default."""
        return self._bindings.get(action, DEFAULT_KEYBINDS[action])

    def matches(self, event: KeyEvent, action: KeybindAction) -> bool:
        """Return True when *event* is exactly the shortcut bound to *action*."""
        return event.chord == self.binding_for(action).chord

    def action_for(self, event: KeyEvent) -> KeybindAction | None:
        """Return the action whose shortcut *event* triggers, if any."""
        for action in KeybindAction:
            if self.matches(event, action):
                return action
        return None

    def find_conflict(self, keybind: Keybind, action: KeybindAction) -> KeybindAction | None:
        """Return another action already owning *keybind*'s chord."""
        for other in KeybindAction:
            if other is action:
                continue
            if self.binding_for(other).chord == keybind.chord:
                return other
        return None

    def set_binding(self, action: KeybindAction, keybind: Keybind) -> Keybind:
        """Bind *keybind* to *action* unless another action already owns the chord.

        Raises KeybindConflictError and leaves every binding untouched on conflict.
        """
        conflict = self.find_conflict(keybind, action)
        if conflict is not None:
            logger.info(
                "Rejected %s for %s: already used by %s",
                keybind.display_string,
                action.value,
                conflict.value,
            )
            raise KeybindConflictError(action, conflict)
        stored = Keybind(
            key_code=keybind.key_code,
            modifier_flags=normalise_modifiers(keybind.modifier_flags),
            characters=keybind.characters,
            display_string=keybind.display_string,
        )
        self._bindings[action] = stored
        self._persist()
        logger.info("Bound %s to %s", action.value, stored.display_string)
        return stored

    def record_binding(self, action: KeybindAction, event: KeyEvent) -> Keybind:
        """Bind the shortcut captured in *event* to *action*.

        Shortcuts must include at least one modifier key; a bare Escape is the
        recorder's cancel gesture and is rejected like any other bare key.
        """
        modifiers = normalise_modifiers(event.modifier_flags)
        if not modifiers:
            if event.key_code == KeyCode.ESCAPE:
                raise KeybindValidationError("Recording cancelled")
            raise KeybindValidationError("Shortcuts need at least one modifier key")
        keybind = Keybind(
            key_code=event.key_code,
            modifier_flags=modifiers,
            characters=event.characters,
            display_string=build_display_string(event.key_code, modifiers),
        )
        return self.set_binding(action, keybind)

    def reset_binding(self, action: KeybindAction) -> Keybind:
        """Restore the default shortcut for *action*."""
        default = DEFAULT_KEYBINDS[action]
        conflict = self.find_conflict(default, action)
        if conflict is not None:
            logger.warning(
                "Default shortcut %s for %s is also bound to %s",
                default.display_string,
                action.value,
                conflict.value,
            )
        self._bindings[action] = default
        self._persist()
        return self._bindings[action]

    def reset_to_defaults(self) -> None:
        """Restore every action to its default shortcut."""
        self._bindings = dict(DEFAULT_KEYBINDS)
        self._persist()

    def _persist(self) -> None:
        payload = {action.value: binding.to_record() for action, binding in self.bindings.items()}
        try:
            self._preferences.set(KEYBINDINGS_PREFERENCE_KEY, payload)
        except PreferenceStorageError as exc:
            raise KeybindStorageError("Unable to persist keyboard shortcuts") from exc
