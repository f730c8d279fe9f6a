"""Menu hint panel built from the bindings live in the active menu."""

from __future__ import annotations

from ..ansi import display_width, pad_ansi_line
from ..input import Menu, applicable, describe, format_key
from ..ui_theme import UITheme, styled

CELL_GAP = 2


def menu_title(menu: Menu) -> str:
    return menu.value.capitalize()


def menu_cells(menu: Menu, theme: UITheme) -> list[str]:
    """Return one ``key label`` cell per applicable binding, in table order."""
    return [
        f"{styled(theme.menu_key, format_key(binding), theme)} {describe(binding.op)}"
        for binding in applicable(menu)
    ]


def menu_panel_lines(menu: Menu, theme: UITheme, width: int) -> list[str]:
    """Lay out the hint panel for ``menu`` in column-major order.

    Returns no lines for the root menu, which has no panel.
    """
    if menu == Menu.NONE:
        return []
    cells = menu_cells(menu, theme)
    lines = [styled(theme.menu_heading, menu_title(menu), theme)]
    if not cells:
        return lines

    cell_width = max(display_width(cell) for cell in cells) + CELL_GAP
    columns = max(1, width // cell_width)
    rows = (len(cells) + columns - 1) // columns
    for row in range(rows):
        parts: list[str] = []
        for col in range(columns):
            idx = col * rows + row
            if idx >= len(cells):
                break
            parts.append(pad_ansi_line(cells[idx], cell_width))
        lines.append("".join(parts).rstrip())
    return lines
