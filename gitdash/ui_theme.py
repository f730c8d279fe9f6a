"""UI theme definitions and selection helpers.

Themes are UI-only ANSI palettes (rows/menus/chrome). Syntax highlighting
style for hunk content remains a separate setting.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class UITheme:
    """Semantic ANSI palette used by row builders and renderers."""

    name: str
    reset: str
    reverse: str
    divider: str
    section_header: str
    file_header: str
    hunk_header: str
    diff_added: str
    diff_removed: str
    diff_context: str
    commit_hash: str
    branch: str
    remote: str
    tag: str
    selection_area: str
    menu_heading: str
    menu_key: str
    status_error: str


DEFAULT_THEME = UITheme(
    name="default",
    reset="\033[0m",
    reverse="\033[7m",
    divider="\033[2m",
    section_header="\033[1;38;5;177m",
    file_header="\033[38;5;179m",
    hunk_header="\033[38;5;111m",
    diff_added="\033[38;5;114m",
    diff_removed="\033[38;5;203m",
    diff_context="\033[38;5;250m",
    commit_hash="\033[38;5;244m",
    branch="\033[1;38;5;114m",
    remote="\033[1;38;5;174m",
    tag="\033[1;38;5;221m",
    selection_area="\033[48;5;236m",
    menu_heading="\033[1;38;5;81m",
    menu_key="\033[38;5;229m",
    status_error="\033[1;38;5;203m",
)

OCEAN_THEME = UITheme(
    name="ocean",
    reset="\033[0m",
    reverse="\033[7m",
    divider="\033[2;38;5;31m",
    section_header="\033[1;38;5;45m",
    file_header="\033[38;5;153m",
    hunk_header="\033[38;5;73m",
    diff_added="\033[38;5;84m",
    diff_removed="\033[38;5;209m",
    diff_context="\033[38;5;252m",
    commit_hash="\033[38;5;110m",
    branch="\033[1;38;5;117m",
    remote="\033[1;38;5;39m",
    tag="\033[1;38;5;215m",
    selection_area="\033[48;5;17m",
    menu_heading="\033[1;38;5;45m",
    menu_key="\033[38;5;153m",
    status_error="\033[1;38;5;209m",
)

PLAIN_THEME = UITheme(
    name="plain",
    reset="",
    # Selection must stay visible without color.
    reverse="\033[7m",
    divider="",
    section_header="",
    file_header="",
    hunk_header="",
    diff_added="",
    diff_removed="",
    diff_context="",
    commit_hash="",
    branch="",
    remote="",
    tag="",
    selection_area="",
    menu_heading="",
    menu_key="",
    status_error="",
)

_THEMES: dict[str, UITheme] = {
    DEFAULT_THEME.name: DEFAULT_THEME,
    OCEAN_THEME.name: OCEAN_THEME,
}


def available_theme_names() -> tuple[str, ...]:
    """Return selectable non-plain theme names."""
    return tuple(sorted(_THEMES.keys()))


def normalize_theme_name(name: str | None) -> str:
    """Return a valid theme name, falling back to default."""
    if not name:
        return DEFAULT_THEME.name
    candidate = str(name).strip().lower()
    if candidate in _THEMES:
        return candidate
    return DEFAULT_THEME.name


def resolve_theme(name: str | None, *, no_color: bool = False) -> UITheme:
    """Return concrete theme for requested name and color mode."""
    if no_color:
        return PLAIN_THEME
    return _THEMES[normalize_theme_name(name)]


def styled(style: str, text: str, theme: UITheme) -> str:
    """Wrap ``text`` in ``style`` and the theme reset, skipping empty styles."""
    if not style or not text:
        return text
    return f"{style}{text}{theme.reset}"


__all__ = [
    "UITheme",
    "DEFAULT_THEME",
    "OCEAN_THEME",
    "PLAIN_THEME",
    "available_theme_names",
    "normalize_theme_name",
    "resolve_theme",
    "styled",
]
