"""Config loading and theme resolution tests."""

from __future__ import annotations

import json
import tempfile
import unittest
from pathlib import Path

from gitdash.highlight import DEFAULT_SYNTAX_STYLE
from gitdash.runtime import config
from gitdash.runtime.app import build_item_style
from gitdash.screens.log import DEFAULT_LOG_COUNT
from gitdash.screens.status import DEFAULT_RECENT_COMMITS
from gitdash.ui_theme import DEFAULT_THEME, OCEAN_THEME, PLAIN_THEME, normalize_theme_name, resolve_theme


class LoadConfigTests(unittest.TestCase):
    def _write(self, tmp: str, text: str) -> Path:
        path = Path(tmp) / "config.json"
        path.write_text(text, encoding="utf-8")
        return path

    def test_missing_file_gives_defaults(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            loaded = config.load_dashboard_config(Path(tmp) / "missing.json")
        self.assertEqual(loaded, config.DashboardConfig())
        self.assertEqual(loaded.recent_commits, DEFAULT_RECENT_COMMITS)
        self.assertEqual(loaded.log_count, DEFAULT_LOG_COUNT)
        self.assertEqual(loaded.syntax_style, DEFAULT_SYNTAX_STYLE)

    def test_values_are_read(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = self._write(
                tmp,
                json.dumps({"theme": "ocean", "syntax_style": "monokai", "recent_commits": 3, "log_count": 50}),
            )
            loaded = config.load_dashboard_config(path)
        self.assertEqual(loaded, config.DashboardConfig("ocean", "monokai", 3, 50))

    def test_malformed_values_fall_back(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = self._write(tmp, json.dumps({"theme": 7, "syntax_style": "  ", "recent_commits": True, "log_count": -2}))
            loaded = config.load_dashboard_config(path)
        self.assertEqual(loaded, config.DashboardConfig())

    def test_invalid_json_and_non_object(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            self.assertEqual(config.load_config(self._write(tmp, "{not json")), {})
            self.assertEqual(config.load_config(self._write(tmp, "[1, 2]")), {})


class ThemeTests(unittest.TestCase):
    def test_theme_names_normalize(self) -> None:
        self.assertEqual(normalize_theme_name(" Ocean "), "ocean")
        self.assertEqual(normalize_theme_name("unknown"), "default")
        self.assertEqual(normalize_theme_name(None), "default")

    def test_no_color_wins(self) -> None:
        self.assertIs(resolve_theme("ocean", no_color=True), PLAIN_THEME)
        self.assertIs(resolve_theme("ocean"), OCEAN_THEME)

    def test_cli_overrides_config(self) -> None:
        loaded = config.DashboardConfig(theme="ocean", syntax_style="monokai")
        style = build_item_style(loaded, None, None, False)
        self.assertIs(style.theme, OCEAN_THEME)
        self.assertEqual(style.syntax_style, "monokai")

        overridden = build_item_style(loaded, "default", "friendly", False)
        self.assertIs(overridden.theme, DEFAULT_THEME)
        self.assertEqual(overridden.syntax_style, "friendly")

        plain = build_item_style(loaded, None, None, True)
        self.assertIs(plain.theme, PLAIN_THEME)
        self.assertFalse(plain.syntax)


if __name__ == "__main__":
    unittest.main()
