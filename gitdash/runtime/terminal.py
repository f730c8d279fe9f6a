"""Terminal control helpers for the TUI session.

Owns raw-mode lifecycle, alternate-screen switching, and the SIGTERM hook
that puts the terminal back before the process exits.
"""

from __future__ import annotations

import contextlib
import os
import signal
import termios
import tty

from ..errors import SetupError

SIGTERM_EXIT_CODE = 128 + signal.SIGTERM


class TerminalController:
    """Manage terminal mode transitions for one interactive session."""

    def __init__(self, stdin_fd: int, stdout_fd: int) -> None:
        """Capture tty state and bind stdin/stdout file descriptors."""
        self.stdin_fd = stdin_fd
        self.stdout_fd = stdout_fd
        try:
            self._saved_tty_state = termios.tcgetattr(stdin_fd)
        except termios.error as exc:
            raise SetupError(f"stdin is not a terminal: {exc}") from exc
        self._tui_active = False

    @property
    def tui_active(self) -> bool:
        return self._tui_active

    def enable_tui_mode(self) -> None:
        """Enter raw alternate-screen mode with the cursor hidden."""
        if self._tui_active:
            return
        tty.setraw(self.stdin_fd, termios.TCSAFLUSH)
        self._tui_active = True
        # Enter alternate screen and hide cursor.
        os.write(self.stdout_fd, b"\x1b[?1049h\x1b[?25l")

    def disable_tui_mode(self) -> None:
        """Restore normal terminal state and the main screen buffer."""
        if not self._tui_active:
            return
        # Show cursor and restore the main screen buffer.
        os.write(self.stdout_fd, b"\x1b[?25h\x1b[?1049l")
        self._tui_active = False
        termios.tcsetattr(self.stdin_fd, termios.TCSAFLUSH, self._saved_tty_state)

    def install_sigterm_handler(self) -> None:
        """Restore the terminal and exit when SIGTERM arrives."""

        def _on_sigterm(signum: int, _frame: object) -> None:
            self.disable_tui_mode()
            os._exit(SIGTERM_EXIT_CODE)

        try:
            signal.signal(signal.SIGTERM, _on_sigterm)
        except (ValueError, OSError) as exc:
            raise SetupError(f"cannot install SIGTERM handler: {exc}") from exc

    @contextlib.contextmanager
    def raw_mode(self):
        """Context manager that brackets code with TUI enter/exit calls."""
        try:
            try:
                self.enable_tui_mode()
            except (termios.error, OSError) as exc:
                raise SetupError(f"cannot enter raw mode: {exc}") from exc
            yield
        finally:
            self.disable_tui_mode()
