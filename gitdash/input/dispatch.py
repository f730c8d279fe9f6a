"""Modal key dispatch over the keybinding table.

``resolve`` and ``applicable`` are pure searches over ``KEYBINDS``.
``Dispatcher`` owns the active menu and applies the one-shot menu rule:
entering a menu switches context, any other operation pops back to the root.
"""

from __future__ import annotations

from dataclasses import dataclass

from .bindings import KEYBINDS, Binding
from .keys import DELETE, DOWN, ENTER, ESC, INSERT, LEFT, RIGHT, TAB, UP, KeyEvent, Mod, function_key_number
from .ops import EnterMenu, Menu, Op, Operation

_NAMED_KEY_LABELS: dict[str, str] = {
    ENTER: "ret",
    LEFT: "←",
    RIGHT: "→",
    UP: "↑",
    DOWN: "↓",
    TAB: "tab",
    DELETE: "del",
    INSERT: "ins",
    ESC: "esc",
}
UNKNOWN_KEY_LABEL = "???"


def resolve(
    menu: Menu,
    event: KeyEvent,
    bindings: tuple[Binding, ...] = KEYBINDS,
) -> Operation | None:
    """Return the operation for ``event`` in ``menu``, or ``None`` when unbound.

    A binding matches when its scope is ``menu`` or the wildcard; the scan is
    one pass, so a wildcard entry earlier in the table wins over a later
    scoped entry for the same key.
    """
    for binding in bindings:
        if binding.mods != event.mods or binding.key != event.key:
            continue
        if binding.menu == menu or binding.menu == Menu.ANY:
            return binding.op
    return None


def applicable(menu: Menu, bindings: tuple[Binding, ...] = KEYBINDS) -> tuple[Binding, ...]:
    """Return bindings listed in the hint panel for ``menu``, in table order.

    Help shows the root menu's bindings. Wildcard bindings are never listed.
    """
    expected = Menu.NONE if menu == Menu.HELP else menu
    return tuple(binding for binding in bindings if binding.menu == expected)


def format_key(binding: Binding) -> str:
    """Render a binding's key chord as a short label such as ``C-u`` or ``F``."""
    prefix = "C-" if binding.mods & Mod.CONTROL else ""
    key = binding.key
    label = _NAMED_KEY_LABELS.get(key)
    if label is None:
        fn = function_key_number(key)
        if fn is not None:
            label = f"F{fn}"
        elif len(key) == 1:
            label = key.upper() if binding.mods & Mod.SHIFT else key
        else:
            label = UNKNOWN_KEY_LABEL
    return prefix + label


@dataclass(frozen=True)
class Dispatch:
    """A resolved operation together with the menu it fired from."""

    op: Operation
    origin: Menu


class Dispatcher:
    """Stateful wrapper holding the active menu between key presses."""

    def __init__(self, bindings: tuple[Binding, ...] = KEYBINDS) -> None:
        self.bindings = bindings
        self.menu = Menu.NONE

    def handle(self, event: KeyEvent) -> Dispatch | None:
        """Resolve ``event`` and advance the menu state.

        Returns ``None`` for unbound keys without touching the active menu.
        """
        origin = self.menu
        op = resolve(origin, event, self.bindings)
        if op is None:
            return None
        if isinstance(op, EnterMenu):
            self.menu = op.menu
        else:
            self.menu = Menu.NONE
        return Dispatch(op, origin)

    def applicable(self) -> tuple[Binding, ...]:
        return applicable(self.menu, self.bindings)

    def reset(self) -> None:
        self.menu = Menu.NONE


def closes_menu_only(dispatch: Dispatch) -> bool:
    """Whether a quit-shaped dispatch should close a menu instead of the view."""
    if dispatch.op == Op.CANCEL_MENU:
        return True
    return dispatch.op == Op.QUIT and dispatch.origin != Menu.NONE
