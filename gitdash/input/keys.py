"""Logical key identities and decoded key events."""

from __future__ import annotations

import enum
from dataclasses import dataclass

ENTER = "ENTER"
ESC = "ESC"
TAB = "TAB"
BACKSPACE = "BACKSPACE"
UP = "UP"
DOWN = "DOWN"
LEFT = "LEFT"
RIGHT = "RIGHT"
DELETE = "DELETE"
INSERT = "INSERT"

NAMED_KEYS: frozenset[str] = frozenset(
    {ENTER, ESC, TAB, BACKSPACE, UP, DOWN, LEFT, RIGHT, DELETE, INSERT}
    | {f"F{n}" for n in range(1, 13)}
)


class Mod(enum.Flag):
    """Modifier keys held while a key was pressed."""

    NONE = 0
    SHIFT = enum.auto()
    CONTROL = enum.auto()
    ALT = enum.auto()


def function_key_number(key: str) -> int | None:
    """Return ``n`` for ``F<n>`` key names, otherwise ``None``."""
    if len(key) < 2 or key[0] != "F" or not key[1:].isdigit():
        return None
    return int(key[1:])


@dataclass(frozen=True)
class KeyEvent:
    """One key press: a character or named key plus its modifier set."""

    key: str
    mods: Mod = Mod.NONE

    @classmethod
    def char(cls, ch: str) -> KeyEvent:
        """Build a character event, setting ``SHIFT`` for upper-case letters."""
        if ch.isalpha() and ch.isupper():
            return cls(ch, Mod.SHIFT)
        return cls(ch)

    @classmethod
    def ctrl(cls, ch: str) -> KeyEvent:
        return cls(ch.lower(), Mod.CONTROL)
