"""Logical key events understood by the picker."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import FrozenSet, Optional


class KeyKind(Enum):
    CHAR = "char"
    BACKSPACE = "backspace"
    ENTER = "enter"
    ESC = "esc"
    UP = "up"
    DOWN = "down"
    OTHER = "other"


# Names accepted from scripts and from Textual's key names.
NAMED_KEYS = {
    "backspace": KeyKind.BACKSPACE,
    "enter": KeyKind.ENTER,
    "return": KeyKind.ENTER,
    "esc": KeyKind.ESC,
    "escape": KeyKind.ESC,
    "up": KeyKind.UP,
    "down": KeyKind.DOWN,
}

MODIFIERS = ("ctrl", "alt", "shift", "super")


@dataclass(frozen=True)
class Key:
    kind: KeyKind
    char: Optional[str] = None
    modifiers: FrozenSet[str] = field(default_factory=frozenset)

    @classmethod
    def of_char(cls, ch: str, *modifiers: str) -> "Key":
        return cls(KeyKind.CHAR, ch, frozenset(modifiers))

    @classmethod
    def named(cls, kind: KeyKind) -> "Key":
        return cls(kind)

    @property
    def text(self) -> Optional[str]:
        """The character to insert into a text buffer, or None if this key is not text."""
        if self.kind is not KeyKind.CHAR or not self.char:
            return None
        if self.modifiers & {"ctrl", "alt", "super"}:
            return None
        return self.char

    def __str__(self) -> str:
        if self.kind is KeyKind.CHAR:
            base = self.char or ""
        else:
            base = self.kind.value
        prefix = "".join(f"{m}+" for m in MODIFIERS if m in self.modifiers)
        return prefix + base


def parse_key(token: str) -> Key:
    """
    Parse a key token such as ``"j"``, ``"enter"`` or ``"ctrl+c"``.

    Raises:
        ValueError: If the token names no known key
    """
    if len(token) == 1:
        return Key.of_char(token)
    parts = token.split("+")
    mods = [p.lower() for p in parts[:-1]]
    base = parts[-1]
    if any(m not in MODIFIERS for m in mods) or not base:
        raise ValueError(f"Unknown key: {token!r}")
    if len(base) == 1:
        return Key(KeyKind.CHAR, base, frozenset(mods))
    kind = NAMED_KEYS.get(base.lower())
    if kind is None:
        raise ValueError(f"Unknown key: {token!r}")
    return Key(kind, None, frozenset(mods))


def from_textual(key: str, character: Optional[str]) -> Key:
    """Translate a Textual ``Key`` event (``event.key`` / ``event.character``)."""
    kind = NAMED_KEYS.get(key)
    if kind is not None:
        return Key.named(kind)
    mods = [p for p in key.split("+")[:-1] if p in MODIFIERS]
    if character and len(character) == 1 and character.isprintable():
        return Key(KeyKind.CHAR, character, frozenset(mods))
    return Key(KeyKind.OTHER)
