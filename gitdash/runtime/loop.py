"""Main interactive event loop for the dashboard.

Re-measures the terminal, renders when dirty, and feeds key events to the
dashboard until the last screen is closed.
"""

from __future__ import annotations

import logging
import shutil
from dataclasses import dataclass
from typing import TYPE_CHECKING

from ..input import read_key
from ..render import RenderContext, content_rows, render_frame
from .terminal import TerminalController

if TYPE_CHECKING:
    from .app import Dashboard

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RuntimeLoopTiming:
    """Timing constants controlling interactive loop behavior."""

    key_timeout_ms: int = 120


def run_main_loop(
    app: Dashboard,
    terminal: TerminalController,
    stdin_fd: int,
    timing: RuntimeLoopTiming,
) -> None:
    """Run the render/input loop inside raw mode until the app asks to quit."""
    last_size: tuple[int, int] | None = None
    with terminal.raw_mode():
        while True:
            term = shutil.get_terminal_size((80, 24))
            app.expire_status()

            size = (term.columns, term.lines)
            rows = content_rows(term.lines, app.menu, app.theme, term.columns)
            if size != last_size or rows != app.size:
                last_size = size
                app.resize(rows)
                app.state.dirty = True

            if app.state.dirty:
                render_frame(
                    RenderContext(
                        screen=app.screen,
                        menu=app.menu,
                        theme=app.theme,
                        width=term.columns,
                        height=term.lines,
                        status_message=app.state.status_message,
                        status_is_error=app.state.status_is_error,
                    )
                )
                app.state.dirty = False

            try:
                event = read_key(stdin_fd, timeout_ms=timing.key_timeout_ms)
            except KeyboardInterrupt:
                # Ignore SIGINT-style interrupts so terminal copy shortcuts do not exit the app.
                continue
            if event is None:
                continue
            logger.debug("key %r mods %s in menu %s", event.key, event.mods, app.menu.name)
            if app.handle_key(event):
                break
