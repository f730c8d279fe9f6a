"""Frame composition, menu panel, ANSI helpers, and hunk highlighting."""

from __future__ import annotations

import unittest
from unittest import mock

from gitdash.ansi import clip_ansi_line, display_width, pad_ansi_line, strip_ansi
from gitdash.highlight import highlight_hunk_lines, normalize_style, sanitize_terminal_text
from gitdash.input import Menu
from gitdash.items import Item
from gitdash.render import (
    COLLAPSED_MARKER,
    RenderContext,
    build_frame_lines,
    build_status_line,
    content_rows,
    render_frame,
)
from gitdash.render.menu import menu_cells, menu_panel_lines, menu_title
from gitdash.runtime.screen import Screen
from gitdash.ui_theme import DEFAULT_THEME, PLAIN_THEME


def _screen(size: int = 10) -> Screen:
    rows = [
        Item(display="Untracked files", id="untracked", section=True),
        Item(display="a.txt", id="a", depth=1),
        Item(display="b.txt", id="b", depth=1),
        Item(display="", unselectable=True),
        Item(display="Recent commits", id="recent", section=True),
        Item(display="abc first\nwrapped detail", id="abc", depth=1),
    ]
    return Screen.create(lambda: list(rows), size=size, title="status")


class AnsiHelperTests(unittest.TestCase):
    def test_width_ignores_escapes_and_counts_wide_chars(self) -> None:
        self.assertEqual(display_width("\033[31mab\033[0m"), 2)
        self.assertEqual(display_width("漢字"), 4)

    def test_clip_keeps_trailing_reset(self) -> None:
        clipped = clip_ansi_line("\033[31mabcdef\033[0m", 3)
        self.assertEqual(strip_ansi(clipped), "abc")
        self.assertTrue(clipped.endswith("\033[0m"))

    def test_pad_fills_width(self) -> None:
        self.assertEqual(pad_ansi_line("ab", 4), "ab  ")
        self.assertEqual(display_width(pad_ansi_line("漢字漢字", 5)), 5)


class MenuPanelTests(unittest.TestCase):
    def test_root_menu_has_no_panel(self) -> None:
        self.assertEqual(menu_panel_lines(Menu.NONE, PLAIN_THEME, 80), [])

    def test_branch_panel_lists_bindings(self) -> None:
        self.assertEqual(menu_title(Menu.BRANCH), "Branch")
        self.assertEqual(menu_cells(Menu.BRANCH, PLAIN_THEME), ["b Checkout", "c Checkout new branch"])
        lines = menu_panel_lines(Menu.BRANCH, PLAIN_THEME, 80)
        self.assertEqual(lines[0], "Branch")
        self.assertIn("b Checkout", lines[1])
        self.assertIn("c Checkout new branch", lines[1])

    def test_help_panel_wraps_into_columns(self) -> None:
        narrow = menu_panel_lines(Menu.HELP, PLAIN_THEME, 30)
        wide = menu_panel_lines(Menu.HELP, PLAIN_THEME, 200)
        self.assertGreater(len(narrow), len(wide))
        first_column = [strip_ansi(line).split("  ")[0] for line in narrow[1:]]
        self.assertEqual(first_column[0], "g Refresh")


class FrameTests(unittest.TestCase):
    def test_content_rows_leave_room_for_panel_and_status(self) -> None:
        self.assertEqual(content_rows(24, Menu.NONE, PLAIN_THEME, 80), 23)
        panel = len(menu_panel_lines(Menu.FETCH, PLAIN_THEME, 80))
        self.assertEqual(content_rows(24, Menu.FETCH, PLAIN_THEME, 80), 23 - panel - 1)

    def test_status_line_keeps_help_hint(self) -> None:
        line = build_status_line("status", 40)
        self.assertTrue(line.startswith("status"))
        self.assertTrue(line.endswith("h Help"))
        self.assertEqual(len(line), 39)

    def test_frame_marks_selection_collapse_and_multiline_rows(self) -> None:
        screen = _screen()
        screen.toggle_section()
        context = RenderContext(screen=screen, menu=Menu.NONE, theme=PLAIN_THEME, width=30, height=8)
        lines = build_frame_lines(context)
        self.assertEqual(len(lines), 8)
        self.assertTrue(lines[0].startswith("\033[7m"))
        self.assertIn("Untracked files" + COLLAPSED_MARKER, lines[0])
        plain = [strip_ansi(line).rstrip() for line in lines[:-1]]
        self.assertEqual(plain[:4], ["Untracked files" + COLLAPSED_MARKER, "", "Recent commits", "abc first"])
        self.assertEqual(plain[4], "wrapped detail")
        self.assertIn("status", strip_ansi(lines[-1]))

    def test_menu_panel_and_error_status_are_drawn(self) -> None:
        context = RenderContext(
            screen=_screen(),
            menu=Menu.PUSH,
            theme=DEFAULT_THEME,
            width=40,
            height=10,
            status_message="push failed",
            status_is_error=True,
        )
        lines = build_frame_lines(context)
        plain = [strip_ansi(line).rstrip() for line in lines]
        self.assertIn("Push", plain)
        self.assertTrue(any(line.startswith("p Push") for line in plain))
        self.assertTrue(lines[-1].startswith(DEFAULT_THEME.status_error))
        self.assertIn("status │ push failed", plain[-1])

    def test_render_frame_writes_to_stdout(self) -> None:
        context = RenderContext(screen=_screen(), menu=Menu.NONE, theme=PLAIN_THEME, width=20, height=4)
        with mock.patch("gitdash.render.sys.stdout"), mock.patch("gitdash.render.os.write") as write:
            render_frame(context)
        payload = write.call_args.args[1].decode("utf-8")
        self.assertTrue(payload.startswith("\033[H"))
        self.assertEqual(payload.count("\r\n"), 3)


class HighlightTests(unittest.TestCase):
    def test_sanitize_escapes_control_bytes(self) -> None:
        self.assertEqual(sanitize_terminal_text("a\x1b[2Jb\x07"), "a\\x1b[2Jb\\x07")
        self.assertEqual(sanitize_terminal_text("tab\tok"), "tab\tok")

    def test_unknown_style_falls_back(self) -> None:
        self.assertEqual(normalize_style("no-such-style"), "monokai")

    def test_hunk_lines_keep_markers_and_count(self) -> None:
        lines = [" import os", "-x = 1", "+x = 2", "\\ No newline at end of file"]
        out = highlight_hunk_lines("app.py", lines, DEFAULT_THEME, "monokai", True)
        self.assertEqual(len(out), 4)
        self.assertTrue(out[1].startswith(DEFAULT_THEME.diff_removed + "-"))
        self.assertTrue(out[2].startswith(DEFAULT_THEME.diff_added + "+"))
        self.assertEqual([strip_ansi(line).rstrip() for line in out[1:3]], ["-x = 1", "+x = 2"])

    def test_plain_hunk_lines_are_unstyled(self) -> None:
        out = highlight_hunk_lines("notes.txt", [" a", "+b"], PLAIN_THEME, syntax=False)
        self.assertEqual(out, [" a", "+b"])


if __name__ == "__main__":
    unittest.main()
