"""Runtime composition layer for gitdash.

Builds the screen stack, wires dispatch to actions, and starts the loop.
This is the highest-level module where input, screens, and git meet.
"""

from __future__ import annotations

import logging
import os
import shutil
import sys
import time
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path

from ..actions import Action, ActionOps, leaf_action, target_action
from ..editor import launch_editor
from ..errors import QueryError, SetupError
from ..git.commands import CommandResult, GitCommands
from ..git.query import GitRepo
from ..input import Dispatcher, EnterMenu, KeyEvent, Menu, Op, Target, closes_menu_only
from ..items import ItemStyle
from ..render import content_rows
from ..screens import log as log_screen
from ..screens import refs as refs_screen
from ..screens import show as show_screen
from ..screens import status as status_screen
from ..ui_theme import UITheme, resolve_theme
from .config import DashboardConfig, load_dashboard_config
from .screen import Screen

logger = logging.getLogger(__name__)

STATUS_MESSAGE_SECONDS = 4.0


@dataclass
class AppState:
    screens: list[Screen] = field(default_factory=list)
    status_message: str = ""
    status_message_until: float = 0.0
    status_is_error: bool = False
    dirty: bool = True


def _noop() -> None:
    return None


class Dashboard:
    """Screen stack plus modal dispatch for one repository."""

    def __init__(
        self,
        repo: GitRepo,
        style: ItemStyle,
        config: DashboardConfig,
        size: int = 24,
        disable_tui_mode: Callable[[], None] = _noop,
        enable_tui_mode: Callable[[], None] = _noop,
        commands: GitCommands | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.repo = repo
        self.style = style
        self.config = config
        self.size = max(1, size)
        self.disable_tui_mode = disable_tui_mode
        self.enable_tui_mode = enable_tui_mode
        self.clock = clock
        self.state = AppState()
        self.dispatcher = Dispatcher()
        self.commands = commands or GitCommands(repo, disable_tui_mode, enable_tui_mode)
        self.action_ops = ActionOps(
            commands=self.commands,
            show_commit=self.show_commit,
            show_log=self.show_log,
            show_refs=self.show_refs,
            open_editor=self.open_editor,
        )

    @property
    def screen(self) -> Screen:
        return self.state.screens[-1]

    @property
    def menu(self) -> Menu:
        return self.dispatcher.menu

    @property
    def theme(self) -> UITheme:
        return self.style.theme

    # Status line

    def set_status(self, message: str, error: bool = False) -> None:
        self.state.status_message = message
        self.state.status_message_until = self.clock() + STATUS_MESSAGE_SECONDS
        self.state.status_is_error = error
        self.state.dirty = True

    def expire_status(self) -> None:
        if self.state.status_message and self.clock() >= self.state.status_message_until:
            self.state.status_message = ""
            self.state.status_message_until = 0.0
            self.state.status_is_error = False
            self.state.dirty = True

    # Screen stack

    def push_screen(self, factory: Callable[[int], Screen]) -> bool:
        """Create a screen and put it on top; query failures keep the stack."""
        try:
            screen = factory(self.size)
        except QueryError as exc:
            logger.warning("cannot open screen: %s", exc.status_text())
            self.set_status(exc.status_text(), error=True)
            return False
        self.state.screens.append(screen)
        self.state.dirty = True
        return True

    def open_status(self) -> bool:
        return self.push_screen(
            lambda size: status_screen.create(self.repo, self.style, size, self.config.recent_commits)
        )

    def show_commit(self, ref: str) -> None:
        self.push_screen(lambda size: show_screen.create(self.repo, self.style, size, ref))

    def show_log(self, ref: str | None) -> None:
        self.push_screen(lambda size: log_screen.create(self.repo, self.style, size, self.config.log_count, ref))

    def show_refs(self) -> None:
        self.push_screen(lambda size: refs_screen.create(self.repo, self.style, size))

    def close_screen(self) -> bool:
        """Pop the top screen; return ``True`` when the last one was closed."""
        if len(self.state.screens) <= 1:
            return True
        self.state.screens.pop()
        self.refresh_screen()
        return False

    def refresh_screen(self) -> None:
        try:
            self.screen.refresh()
        except QueryError as exc:
            logger.warning("refresh failed: %s", exc.status_text())
            self.set_status(exc.status_text(), error=True)
        self.state.dirty = True

    def resize(self, size: int) -> None:
        self.size = max(1, size)
        for screen in self.state.screens:
            screen.resize(self.size)

    # Actions

    def open_editor(self, path: str, line: int | None) -> CommandResult | None:
        error = launch_editor(self.repo.root / path, self.disable_tui_mode, self.enable_tui_mode, line)
        if error is not None:
            self.set_status(error, error=True)
        return None

    def run_action(self, action: Action) -> None:
        """Invoke an executor action and refresh the current screen afterwards.

        A ``QueryError`` raised while preparing the command is reported in the
        status line like a failed ``CommandResult``.
        """
        depth = len(self.state.screens)
        try:
            result = action()
        except QueryError as exc:
            logger.warning("command failed: %s", exc.status_text())
            self.set_status(exc.status_text(), error=True)
            result = None
        if isinstance(result, CommandResult):
            self.set_status(result.summary(), error=not result.ok)
        if len(self.state.screens) == depth:
            self.refresh_screen()
        self.state.dirty = True

    def execute(self, op: Op | Target) -> None:
        screen = self.screen
        if op == Op.REFRESH:
            self.refresh_screen()
        elif op == Op.TOGGLE_SECTION:
            screen.toggle_section()
        elif op == Op.SELECT_PREVIOUS:
            screen.select_previous()
        elif op == Op.SELECT_NEXT:
            screen.select_next()
        elif op == Op.HALF_PAGE_UP:
            screen.scroll_half_page_up()
        elif op == Op.HALF_PAGE_DOWN:
            screen.scroll_half_page_down()
        elif isinstance(op, Target):
            action = target_action(self.action_ops, op.kind, screen.resolve_target())
            if action is not None:
                self.run_action(action)
        else:
            action = leaf_action(self.action_ops, op)
            if action is not None:
                self.run_action(action)
        self.state.dirty = True

    def handle_key(self, event: KeyEvent) -> bool:
        """Dispatch one key event; return ``True`` when the app should exit."""
        dispatch = self.dispatcher.handle(event)
        if dispatch is None:
            return False
        self.state.dirty = True
        op = dispatch.op
        if isinstance(op, EnterMenu) or closes_menu_only(dispatch):
            return False
        if op == Op.QUIT:
            return self.close_screen()
        self.execute(op)
        return False


def _initial_content_rows(theme: UITheme) -> int:
    term = shutil.get_terminal_size((80, 24))
    return content_rows(term.lines, Menu.NONE, theme, term.columns)


def build_item_style(config: DashboardConfig, theme_name: str | None, syntax_style: str | None, no_color: bool) -> ItemStyle:
    """Merge CLI overrides over config values into the row style."""
    theme = resolve_theme(theme_name or config.theme, no_color=no_color)
    return ItemStyle(theme=theme, syntax_style=syntax_style or config.syntax_style, syntax=not no_color)


def run_dashboard(
    path: Path,
    theme_name: str | None = None,
    syntax_style: str | None = None,
    no_color: bool = False,
) -> None:
    """Open the status screen for the repository at ``path`` and run the UI.

    Raises ``SetupError`` when the terminal cannot be prepared and
    ``QueryError`` when ``path`` is not a readable repository.
    """
    from .loop import RuntimeLoopTiming, run_main_loop
    from .terminal import TerminalController

    repo = GitRepo.discover(path)
    config = load_dashboard_config()
    style = build_item_style(config, theme_name, syntax_style, no_color)

    stdin_fd = sys.stdin.fileno()
    stdout_fd = sys.stdout.fileno()
    if not os.isatty(stdin_fd) or not os.isatty(stdout_fd):
        raise SetupError("gitdash needs an interactive terminal")
    terminal = TerminalController(stdin_fd, stdout_fd)
    terminal.install_sigterm_handler()

    app = Dashboard(
        repo,
        style,
        config,
        size=_initial_content_rows(style.theme),
        disable_tui_mode=terminal.disable_tui_mode,
        enable_tui_mode=terminal.enable_tui_mode,
    )
    app.state.screens.append(
        status_screen.create(repo, style, app.size, config.recent_commits)
    )
    logger.info("dashboard started in %s", repo.root)
    run_main_loop(app, terminal, stdin_fd, RuntimeLoopTiming())
