from __future__ import annotations

"""Keyboard chord normalisation and command lookup.

Platform aliases are folded once, at the input boundary, into a canonical
chord: modifiers in the order ``mod``, ``alt``, ``shift`` followed by the
key. The dispatch table then only holds canonical chords.

Examples
--------
>>> normalize_chord("shift+right_cmd+v")
'mod+shift+V'
>>> normalize_chord("ctrl+Right")
'mod+right'
"""

from enum import Enum
import logging
from typing import Any, Dict, Iterable, Mapping, Optional

from pagebuilder_toolkit.core.exceptions import ConfigError

__all__ = ["EditorCommand", "KeyMap", "normalize_chord"]

logger = logging.getLogger(__name__)

_MODIFIER_ALIASES = {
    "ctrl": "mod",
    "control": "mod",
    "cmd": "mod",
    "right_cmd": "mod",
    "meta": "mod",
    "mod": "mod",
    "alt": "alt",
    "option": "alt",
    "shift": "shift",
}
_MODIFIER_ORDER = ("mod", "alt", "shift")
_KEY_ALIASES = {
    "delete": "del",
    "arrowup": "up",
    "arrowdown": "down",
    "arrowleft": "left",
    "arrowright": "right",
}


class EditorCommand(str, Enum):
    ADD_COLUMN = "add_column"
    CLONE = "clone"
    COPY = "copy"
    PASTE = "paste"
    PASTE_STYLES = "paste_styles"
    ALIGN_HORIZONTAL_INCREASE = "align_horizontal_increase"
    ALIGN_HORIZONTAL_DECREASE = "align_horizontal_decrease"
    ALIGN_VERTICAL_INCREASE = "align_vertical_increase"
    ALIGN_VERTICAL_DECREASE = "align_vertical_decrease"
    REMOVE = "remove"


def normalize_chord(key_name: str) -> str:
    """Return the canonical form of a chord such as ``"cmd+shift+V"``."""
    parts = [p.strip() for p in str(key_name).split("+") if p.strip()]
    if not parts:
        return ""
    *modifiers, key = parts

    canonical_mods = set()
    for mod in modifiers:
        alias = _MODIFIER_ALIASES.get(mod.lower())
        if alias is None:
            # Unknown modifier: keep it so the chord never matches by accident
            alias = mod.lower()
        canonical_mods.add(alias)

    key = _KEY_ALIASES.get(key.lower(), key)
    key = key.upper() if len(key) == 1 else key.lower()

    ordered = [m for m in _MODIFIER_ORDER if m in canonical_mods]
    ordered.extend(sorted(canonical_mods.difference(_MODIFIER_ORDER)))
    return "+".join([*ordered, key])


class KeyMap:
    """Finite mapping from canonical chord to :class:`EditorCommand`."""

    def __init__(self, bindings: Optional[Mapping[str, EditorCommand]] = None) -> None:
        self._bindings: Dict[str, EditorCommand] = {}
        for chord, command in (bindings or {}).items():
            self.bind(chord, command)

    @classmethod
    def from_config(cls, mapping: Mapping[str, Iterable[str]]) -> "KeyMap":
        """Build a key map from the ``keymap`` config section (command -> chords)."""
        keymap = cls()
        for command_name, chords in (mapping or {}).items():
            try:
                command = EditorCommand(command_name)
            except ValueError as exc:
                raise ConfigError(f"Unknown editor command '{command_name}' in keymap", cause=exc) from exc
            if isinstance(chords, str):
                chords = [chords]
            for chord in chords or ():
                keymap.bind(chord, command)
        return keymap

    @classmethod
    def default(cls) -> "KeyMap":
        from pagebuilder_toolkit.config import ConfigManager

        return cls.from_config(ConfigManager().get_keymap())

    def bind(self, chord: str, command: Any) -> None:
        canonical = normalize_chord(chord)
        command = EditorCommand(command)
        existing = self._bindings.get(canonical)
        if existing is not None and existing is not command:
            raise ConfigError(
                f"Chord '{canonical}' bound to both '{existing.value}' and '{command.value}'"
            )
        self._bindings[canonical] = command

    def resolve(self, key_name: str) -> Optional[EditorCommand]:
        """Return the command bound to *key_name*, or None if unrecognised."""
        return self._bindings.get(normalize_chord(key_name))

    def chords_for(self, command: EditorCommand) -> list[str]:
        return sorted(chord for chord, cmd in self._bindings.items() if cmd is command)

    def __len__(self) -> int:
        return len(self._bindings)
