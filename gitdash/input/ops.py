"""Operation vocabulary produced by key dispatch.

Three shapes exist: plain ``Op`` leaves, ``EnterMenu`` which switches the
active menu, and ``Target`` which acts on whatever row is selected.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Union


class Menu(enum.Enum):
    """Modal menu contexts; ``ANY`` is the wildcard scope used only in bindings."""

    NONE = "none"
    ANY = "any"
    HELP = "help"
    BRANCH = "branch"
    COMMIT = "commit"
    DISCARD = "discard"
    FETCH = "fetch"
    LOG = "log"
    PULL = "pull"
    PUSH = "push"
    REBASE = "rebase"
    RESET = "reset"


class Op(enum.Enum):
    QUIT = "quit"
    CANCEL_MENU = "cancel_menu"
    REFRESH = "refresh"
    TOGGLE_SECTION = "toggle_section"
    SELECT_PREVIOUS = "select_previous"
    SELECT_NEXT = "select_next"
    HALF_PAGE_UP = "half_page_up"
    HALF_PAGE_DOWN = "half_page_down"
    SHOW_REFS = "show_refs"
    CHECKOUT_NEW_BRANCH = "checkout_new_branch"
    COMMIT = "commit"
    COMMIT_AMEND = "commit_amend"
    FETCH_ALL = "fetch_all"
    LOG_CURRENT = "log_current"
    PULL = "pull"
    PUSH = "push"
    REBASE_ABORT = "rebase_abort"
    REBASE_CONTINUE = "rebase_continue"


class TargetOp(enum.Enum):
    CHECKOUT = "checkout"
    COMMIT_FIXUP = "commit_fixup"
    DISCARD = "discard"
    LOG_OTHER = "log_other"
    REBASE_AUTOSQUASH = "rebase_autosquash"
    REBASE_INTERACTIVE = "rebase_interactive"
    RESET_SOFT = "reset_soft"
    RESET_MIXED = "reset_mixed"
    RESET_HARD = "reset_hard"
    SHOW = "show"
    STAGE = "stage"
    UNSTAGE = "unstage"


@dataclass(frozen=True)
class EnterMenu:
    menu: Menu


@dataclass(frozen=True)
class Target:
    kind: TargetOp


Operation = Union[Op, EnterMenu, Target]

_OP_LABELS: dict[Op, str] = {
    Op.QUIT: "Quit",
    Op.CANCEL_MENU: "Cancel",
    Op.REFRESH: "Refresh",
    Op.TOGGLE_SECTION: "Toggle section",
    Op.SELECT_PREVIOUS: "Select previous",
    Op.SELECT_NEXT: "Select next",
    Op.HALF_PAGE_UP: "Half page up",
    Op.HALF_PAGE_DOWN: "Half page down",
    Op.SHOW_REFS: "Show refs",
    Op.CHECKOUT_NEW_BRANCH: "Checkout new branch",
    Op.COMMIT: "Commit",
    Op.COMMIT_AMEND: "Commit amend",
    Op.FETCH_ALL: "Fetch all",
    Op.LOG_CURRENT: "Log current branch",
    Op.PULL: "Pull",
    Op.PUSH: "Push",
    Op.REBASE_ABORT: "Rebase abort",
    Op.REBASE_CONTINUE: "Rebase continue",
}

_TARGET_LABELS: dict[TargetOp, str] = {
    TargetOp.CHECKOUT: "Checkout",
    TargetOp.COMMIT_FIXUP: "Fixup onto commit",
    TargetOp.DISCARD: "Discard",
    TargetOp.LOG_OTHER: "Log other",
    TargetOp.REBASE_AUTOSQUASH: "Rebase autosquash",
    TargetOp.REBASE_INTERACTIVE: "Rebase interactively",
    TargetOp.RESET_SOFT: "Reset soft",
    TargetOp.RESET_MIXED: "Reset mixed",
    TargetOp.RESET_HARD: "Reset hard",
    TargetOp.SHOW: "Show",
    TargetOp.STAGE: "Stage",
    TargetOp.UNSTAGE: "Unstage",
}


def describe(op: Operation) -> str:
    """Return the human-readable label shown next to a key in menu hints."""
    if isinstance(op, EnterMenu):
        return op.menu.value.capitalize()
    if isinstance(op, Target):
        return _TARGET_LABELS[op.kind]
    return _OP_LABELS[op]
