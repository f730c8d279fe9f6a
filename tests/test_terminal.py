"""Tests for terminal mode switching and editor hand-off.

Verifies raw-mode lifecycle safety and expected escape-command payloads.
These guard the low-level terminal contract used by the runtime loop.
"""

from __future__ import annotations

import signal
import tempfile
import termios
import unittest
from pathlib import Path
from unittest import mock

from gitdash.editor import editor_command, launch_editor
from gitdash.errors import SetupError
from gitdash.runtime.terminal import SIGTERM_EXIT_CODE, TerminalController


class TerminalBehaviorTests(unittest.TestCase):
    def test_enable_and_disable_tui_mode_use_alternate_screen_sequences(self) -> None:
        saved_state = [1, 2, 3]

        with mock.patch("gitdash.runtime.terminal.termios.tcgetattr", return_value=saved_state), mock.patch(
            "gitdash.runtime.terminal.tty.setraw"
        ) as setraw_mock, mock.patch("gitdash.runtime.terminal.os.write") as write_mock, mock.patch(
            "gitdash.runtime.terminal.termios.tcsetattr"
        ) as setattr_mock:
            controller = TerminalController(stdin_fd=0, stdout_fd=1)
            controller.enable_tui_mode()
            controller.enable_tui_mode()
            self.assertTrue(controller.tui_active)
            controller.disable_tui_mode()
            controller.disable_tui_mode()

        setraw_mock.assert_called_once_with(0, termios.TCSAFLUSH)
        self.assertEqual(
            write_mock.call_args_list,
            [mock.call(1, b"\x1b[?1049h\x1b[?25l"), mock.call(1, b"\x1b[?25h\x1b[?1049l")],
        )
        setattr_mock.assert_called_once_with(0, termios.TCSAFLUSH, saved_state)
        self.assertFalse(controller.tui_active)

    def test_non_terminal_stdin_is_a_setup_error(self) -> None:
        with mock.patch("gitdash.runtime.terminal.termios.tcgetattr", side_effect=termios.error(25, "not a tty")):
            with self.assertRaises(SetupError):
                TerminalController(stdin_fd=0, stdout_fd=1)

    def test_raw_mode_restores_terminal_after_exception(self) -> None:
        with mock.patch("gitdash.runtime.terminal.termios.tcgetattr", return_value=[0]):
            controller = TerminalController(stdin_fd=0, stdout_fd=1)

        with mock.patch.object(controller, "enable_tui_mode") as enable_mock, mock.patch.object(
            controller, "disable_tui_mode"
        ) as disable_mock:
            with self.assertRaises(RuntimeError):
                with controller.raw_mode():
                    raise RuntimeError("boom")

        enable_mock.assert_called_once()
        disable_mock.assert_called_once()

    def test_raw_mode_wraps_setup_failures(self) -> None:
        with mock.patch("gitdash.runtime.terminal.termios.tcgetattr", return_value=[0]):
            controller = TerminalController(stdin_fd=0, stdout_fd=1)

        with mock.patch.object(controller, "enable_tui_mode", side_effect=termios.error(5, "io")):
            with self.assertRaises(SetupError):
                with controller.raw_mode():
                    self.fail("body must not run")

    def test_sigterm_handler_restores_terminal_then_exits(self) -> None:
        with mock.patch("gitdash.runtime.terminal.termios.tcgetattr", return_value=[0]):
            controller = TerminalController(stdin_fd=0, stdout_fd=1)

        with mock.patch("gitdash.runtime.terminal.signal.signal") as signal_mock:
            controller.install_sigterm_handler()
        signum, handler = signal_mock.call_args.args
        self.assertEqual(signum, signal.SIGTERM)

        with mock.patch.object(controller, "disable_tui_mode") as disable_mock, mock.patch(
            "gitdash.runtime.terminal.os._exit"
        ) as exit_mock:
            handler(signal.SIGTERM, None)
        disable_mock.assert_called_once()
        exit_mock.assert_called_once_with(SIGTERM_EXIT_CODE)
        self.assertEqual(SIGTERM_EXIT_CODE, 143)


class EditorLaunchTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.target = Path(self._tmp.name) / "a.py"
        self.target.write_text("x = 1\n", encoding="utf-8")

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def test_missing_editor_is_reported(self) -> None:
        with mock.patch.dict("gitdash.editor.os.environ", {"EDITOR": "  "}, clear=True):
            error = launch_editor(self.target, mock.Mock(), mock.Mock())
        self.assertEqual(error, "Cannot edit: neither $VISUAL nor $EDITOR is set.")

    def test_visual_wins_and_line_is_passed(self) -> None:
        env = {"VISUAL": "vim -u NONE", "EDITOR": "nano"}
        with mock.patch.dict("gitdash.editor.os.environ", env, clear=True):
            self.assertEqual(
                editor_command(self.target, line=7),
                ["vim", "-u", "NONE", "+7", str(self.target)],
            )
        with mock.patch.dict("gitdash.editor.os.environ", {"EDITOR": "nano"}, clear=True):
            self.assertEqual(editor_command(self.target, line=0), ["nano", str(self.target)])

    def test_editor_runs_outside_tui_mode(self) -> None:
        calls: list[str] = []
        with mock.patch.dict("gitdash.editor.os.environ", {"EDITOR": "nano"}, clear=True), mock.patch(
            "gitdash.editor.subprocess.run"
        ) as run_mock:
            run_mock.return_value.returncode = 0
            error = launch_editor(
                self.target,
                lambda: calls.append("off"),
                lambda: calls.append("on"),
                line=7,
            )
        self.assertIsNone(error)
        self.assertEqual(run_mock.call_args.args[0], ["nano", "+7", str(self.target)])
        self.assertEqual(calls, ["off", "on"])

    def test_deleted_file_is_not_opened(self) -> None:
        with mock.patch.dict("gitdash.editor.os.environ", {"EDITOR": "nano"}, clear=True), mock.patch(
            "gitdash.editor.subprocess.run"
        ) as run_mock:
            error = launch_editor(self.target.with_name("gone.py"), mock.Mock(), mock.Mock())
        self.assertEqual(error, "Cannot edit: gone.py is not in the work tree.")
        run_mock.assert_not_called()

    def test_editor_failure_status_is_reported(self) -> None:
        with mock.patch.dict("gitdash.editor.os.environ", {"EDITOR": "nano"}, clear=True), mock.patch(
            "gitdash.editor.subprocess.run"
        ) as run_mock:
            run_mock.return_value.returncode = 2
            error = launch_editor(self.target, mock.Mock(), mock.Mock())
        self.assertEqual(error, "Editor exited with status 2.")

    def test_launch_failure_restores_tui_mode(self) -> None:
        calls: list[str] = []
        with mock.patch.dict("gitdash.editor.os.environ", {"EDITOR": "missing-editor"}, clear=True), mock.patch(
            "gitdash.editor.subprocess.run", side_effect=FileNotFoundError("missing-editor")
        ):
            error = launch_editor(self.target, lambda: calls.append("off"), lambda: calls.append("on"))
        self.assertTrue(error.startswith("Failed to launch editor"))
        self.assertEqual(calls, ["off", "on"])


if __name__ == "__main__":
    unittest.main()
