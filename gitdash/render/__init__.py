"""Frame composition for the dashboard.

Turns a screen's visible rows, the active menu, and the status message into
full-width ANSI lines, then writes the frame. Nothing here mutates state.
"""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass

from ..ansi import clip_ansi_line, display_width, pad_ansi_line
from ..input import Menu
from ..runtime.screen import Screen
from ..ui_theme import UITheme
from .menu import menu_panel_lines

COLLAPSED_MARKER = "…"


@dataclass
class RenderContext:
    screen: Screen
    menu: Menu
    theme: UITheme
    width: int
    height: int
    status_message: str = ""
    status_is_error: bool = False


def selected_with_ansi(text: str) -> str:
    """Apply selection styling without discarding existing ANSI colors."""
    # Keep reverse video active even when the text contains internal resets.
    return "\033[7m" + text.replace("\033[0m", "\033[0;7m") + "\033[0m"


def with_background(text: str, background: str) -> str:
    """Tint a full line with ``background``, re-applying it after resets."""
    if not background:
        return text
    return background + text.replace("\033[0m", "\033[0m" + background) + "\033[0m"


def build_status_line(left_text: str, width: int, right_text: str = "│ h Help") -> str:
    usable = max(1, width - 1)
    if usable <= len(right_text):
        return right_text[-usable:]
    left_limit = max(0, usable - len(right_text) - 1)
    left = left_text[:left_limit]
    gap = " " * (usable - len(left) - len(right_text))
    return f"{left}{gap}{right_text}"


def content_rows(height: int, menu: Menu, theme: UITheme, width: int) -> int:
    """Rows left for screen content after the menu panel and status line."""
    panel = menu_panel_lines(menu, theme, width)
    panel_rows = len(panel) + 1 if panel else 0
    return max(1, height - 1 - panel_rows)


def screen_lines(screen: Screen, theme: UITheme, width: int, rows: int) -> list[str]:
    """Render visible rows from the scroll offset, one output line per row line."""
    out: list[str] = []
    visible = screen.visible_rows()
    for index, item in visible[screen.scroll:]:
        display_lines = item.display.split("\n")
        if screen.is_collapsed(index):
            display_lines[-1] += COLLAPSED_MARKER
        for line_no, line in enumerate(display_lines):
            if len(out) >= rows:
                return out
            padded = pad_ansi_line(line, width)
            if index == screen.cursor and line_no == 0:
                padded = selected_with_ansi(padded)
            elif screen.is_selected_area(index):
                padded = with_background(padded, theme.selection_area)
            out.append(padded)
    while len(out) < rows:
        out.append(" " * width)
    return out


def build_frame_lines(context: RenderContext) -> list[str]:
    """Compose every line of one frame, top to bottom."""
    width = max(1, context.width)
    theme = context.theme
    panel = menu_panel_lines(context.menu, theme, width)
    rows = content_rows(context.height, context.menu, theme, width)

    lines = screen_lines(context.screen, theme, width, rows)
    if panel:
        divider = "─" * width
        lines.append(f"{theme.divider}{divider}{theme.reset}")
        lines.extend(pad_ansi_line(line, width) for line in panel)

    title = context.screen.title
    if context.status_message:
        left = f"{title} │ {context.status_message}"
    else:
        left = title
    status = build_status_line(left, width)
    if context.status_is_error and theme.status_error:
        lines.append(f"{theme.status_error}{status}{theme.reset}")
    else:
        lines.append(f"\033[7m{status}\033[0m")
    return lines


def render_frame(context: RenderContext) -> None:
    lines = build_frame_lines(context)
    out = ["\033[H"]
    for idx, line in enumerate(lines[: max(1, context.height)]):
        out.append(clip_ansi_line(line, context.width) if display_width(line) > context.width else line)
        if idx < len(lines) - 1 and idx < context.height - 1:
            out.append("\r\n")
    os.write(sys.stdout.fileno(), "".join(out).encode("utf-8", errors="replace"))


__all__ = [
    "RenderContext",
    "build_frame_lines",
    "build_status_line",
    "content_rows",
    "render_frame",
    "screen_lines",
    "selected_with_ansi",
]
