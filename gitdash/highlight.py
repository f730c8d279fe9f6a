"""Hunk content sanitization and syntax highlighting.

Diff bodies are colored with Pygments using a lexer picked from the file
name; the +/- marker column keeps the theme's added/removed colors.
"""

from __future__ import annotations

import re
from functools import lru_cache

from pygments import highlight as pygments_highlight
from pygments.formatters import Terminal256Formatter
from pygments.lexer import Lexer
from pygments.lexers import TextLexer, get_lexer_for_filename
from pygments.styles import get_style_by_name
from pygments.util import ClassNotFound

from .ui_theme import UITheme, styled

DEFAULT_SYNTAX_STYLE = "monokai"
_CONTROL_RE = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f-\x9f]")


def sanitize_terminal_text(source: str) -> str:
    """Escape terminal control bytes to avoid side effects (bell, cursor moves, etc.)."""
    if _CONTROL_RE.search(source) is None:
        return source

    out: list[str] = []
    for ch in source:
        code = ord(ch)
        if ch in {"\n", "\r", "\t"}:
            out.append(ch)
            continue
        # C0 controls + DEL + C1 controls.
        if code < 32 or code == 127 or 0x80 <= code <= 0x9F:
            out.append(f"\\x{code:02x}")
            continue
        out.append(ch)
    return "".join(out)


@lru_cache(maxsize=32)
def normalize_style(style: str) -> str:
    """Return ``style`` when Pygments knows it, otherwise the default style."""
    try:
        get_style_by_name(style)
    except ClassNotFound:
        return DEFAULT_SYNTAX_STYLE
    return style


@lru_cache(maxsize=32)
def _formatter_for_style(style: str) -> Terminal256Formatter:
    return Terminal256Formatter(style=normalize_style(style))


def _lexer_for_path(path: str, sample: str) -> Lexer:
    try:
        return get_lexer_for_filename(path, sample, stripnl=False, ensurenl=True)
    except ClassNotFound:
        return TextLexer(stripnl=False, ensurenl=True)


def highlight_code_lines(path: str, lines: list[str], style: str) -> list[str]:
    """Highlight ``lines`` as one block and split back into the same line count.

    Returns the input unchanged when the highlighter does not preserve the
    line structure.
    """
    if not lines:
        return []
    source = "\n".join(lines) + "\n"
    rendered = pygments_highlight(source, _lexer_for_path(path, source), _formatter_for_style(style))
    out = rendered.split("\n")
    if out and out[-1] == "":
        out.pop()
    if len(out) != len(lines):
        return list(lines)
    return out


def highlight_hunk_lines(
    path: str,
    lines: list[str],
    theme: UITheme,
    style: str = DEFAULT_SYNTAX_STYLE,
    syntax: bool = True,
) -> list[str]:
    """Color unified-diff body lines for display.

    The first column (``+``, ``-``, space, or ``\\``) is colored from the theme,
    the remainder from Pygments when ``syntax`` is enabled.
    """
    markers = [line[:1] for line in lines]
    bodies = [sanitize_terminal_text(line[1:]) for line in lines]
    if syntax:
        bodies = highlight_code_lines(path, bodies, style)

    out: list[str] = []
    for line, marker, body in zip(lines, markers, bodies):
        if marker == "+":
            out.append(styled(theme.diff_added, "+", theme) + body)
        elif marker == "-":
            out.append(styled(theme.diff_removed, "-", theme) + body)
        elif marker == "\\":
            out.append(styled(theme.divider, sanitize_terminal_text(line), theme))
        elif syntax:
            out.append(" " + body)
        else:
            out.append(" " + styled(theme.diff_context, body, theme))
    return out
