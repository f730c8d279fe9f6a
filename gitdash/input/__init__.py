"""Input-layer public API: key decoding, the binding table, and dispatch.

Low-level terminal decoding (``read_key``) is kept apart from the pure
binding search used by the runtime loop and tests.
"""

from .bindings import KEYBINDS, Binding
from .dispatch import Dispatch, Dispatcher, applicable, closes_menu_only, format_key, resolve
from .keys import BACKSPACE, DELETE, DOWN, ENTER, ESC, INSERT, LEFT, RIGHT, TAB, UP, KeyEvent, Mod
from .ops import EnterMenu, Menu, Op, Operation, Target, TargetOp, describe
from .reader import ESC_SEQUENCE_TIMEOUT_MS, read_key

__all__ = [
    "read_key",
    "ESC_SEQUENCE_TIMEOUT_MS",
    "KEYBINDS",
    "Binding",
    "Dispatch",
    "Dispatcher",
    "applicable",
    "closes_menu_only",
    "format_key",
    "resolve",
    "ENTER",
    "ESC",
    "TAB",
    "BACKSPACE",
    "UP",
    "DOWN",
    "LEFT",
    "RIGHT",
    "DELETE",
    "INSERT",
    "KeyEvent",
    "Mod",
    "EnterMenu",
    "Menu",
    "Op",
    "Operation",
    "Target",
    "TargetOp",
    "describe",
]
