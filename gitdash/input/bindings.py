"""Declarative keybinding table.

Each entry maps ``(menu, modifiers, key)`` to an operation. The table is an
ordered tuple and resolution is first-match, so entry order decides ties.
"""

from __future__ import annotations

from dataclasses import dataclass

from .keys import DOWN, ENTER, ESC, TAB, UP, Mod
from .ops import EnterMenu, Menu, Op, Operation, Target, TargetOp


@dataclass(frozen=True)
class Binding:
    """One key rule active in ``menu`` (or in every menu for ``Menu.ANY``)."""

    menu: Menu
    mods: Mod
    key: str
    op: Operation

    @classmethod
    def nomod(cls, menu: Menu, key: str, op: Operation) -> Binding:
        return cls(menu, Mod.NONE, key, op)

    @classmethod
    def ctrl(cls, menu: Menu, key: str, op: Operation) -> Binding:
        return cls(menu, Mod.CONTROL, key, op)

    @classmethod
    def shift(cls, menu: Menu, key: str, op: Operation) -> Binding:
        return cls(menu, Mod.SHIFT, key, op)


_nomod = Binding.nomod
_ctrl = Binding.ctrl
_shift = Binding.shift

KEYBINDS: tuple[Binding, ...] = (
    # Generic
    _nomod(Menu.ANY, "q", Op.QUIT),
    _nomod(Menu.ANY, ESC, Op.QUIT),
    _nomod(Menu.NONE, "g", Op.REFRESH),
    _nomod(Menu.NONE, TAB, Op.TOGGLE_SECTION),
    # Navigation
    _nomod(Menu.NONE, "k", Op.SELECT_PREVIOUS),
    _nomod(Menu.NONE, "p", Op.SELECT_PREVIOUS),
    _nomod(Menu.NONE, UP, Op.SELECT_PREVIOUS),
    _nomod(Menu.NONE, "j", Op.SELECT_NEXT),
    _nomod(Menu.NONE, "n", Op.SELECT_NEXT),
    _nomod(Menu.NONE, DOWN, Op.SELECT_NEXT),
    _ctrl(Menu.NONE, "u", Op.HALF_PAGE_UP),
    _ctrl(Menu.NONE, "d", Op.HALF_PAGE_DOWN),
    # Help
    _nomod(Menu.NONE, "h", EnterMenu(Menu.HELP)),
    # Branch
    _nomod(Menu.NONE, "b", EnterMenu(Menu.BRANCH)),
    _nomod(Menu.BRANCH, "b", Target(TargetOp.CHECKOUT)),
    _nomod(Menu.BRANCH, "c", Op.CHECKOUT_NEW_BRANCH),
    # Commit
    _nomod(Menu.NONE, "c", EnterMenu(Menu.COMMIT)),
    _nomod(Menu.COMMIT, "c", Op.COMMIT),
    _nomod(Menu.COMMIT, "a", Op.COMMIT_AMEND),
    _nomod(Menu.COMMIT, "f", Target(TargetOp.COMMIT_FIXUP)),
    # Fetch
    _nomod(Menu.NONE, "f", EnterMenu(Menu.FETCH)),
    _nomod(Menu.FETCH, "a", Op.FETCH_ALL),
    # Log
    _nomod(Menu.NONE, "l", EnterMenu(Menu.LOG)),
    _nomod(Menu.LOG, "l", Op.LOG_CURRENT),
    _nomod(Menu.LOG, "o", Target(TargetOp.LOG_OTHER)),
    # Pull
    _shift(Menu.NONE, "F", EnterMenu(Menu.PULL)),
    _nomod(Menu.PULL, "p", Op.PULL),
    # Push
    _shift(Menu.NONE, "P", EnterMenu(Menu.PUSH)),
    _nomod(Menu.PUSH, "p", Op.PUSH),
    # Rebase
    _nomod(Menu.NONE, "r", EnterMenu(Menu.REBASE)),
    _nomod(Menu.REBASE, "i", Target(TargetOp.REBASE_INTERACTIVE)),
    _nomod(Menu.REBASE, "a", Op.REBASE_ABORT),
    _nomod(Menu.REBASE, "c", Op.REBASE_CONTINUE),
    _nomod(Menu.REBASE, "f", Target(TargetOp.REBASE_AUTOSQUASH)),
    # Reset
    _nomod(Menu.NONE, "x", EnterMenu(Menu.RESET)),
    _nomod(Menu.RESET, "s", Target(TargetOp.RESET_SOFT)),
    _nomod(Menu.RESET, "m", Target(TargetOp.RESET_MIXED)),
    _nomod(Menu.RESET, "h", Target(TargetOp.RESET_HARD)),
    # Show refs
    _nomod(Menu.NONE, "y", Op.SHOW_REFS),
    # Discard
    _shift(Menu.NONE, "K", EnterMenu(Menu.DISCARD)),
    _nomod(Menu.DISCARD, "y", Target(TargetOp.DISCARD)),
    _nomod(Menu.DISCARD, "n", Op.CANCEL_MENU),
    # Target actions
    _nomod(Menu.NONE, ENTER, Target(TargetOp.SHOW)),
    _nomod(Menu.NONE, "s", Target(TargetOp.STAGE)),
    _nomod(Menu.NONE, "u", Target(TargetOp.UNSTAGE)),
)
