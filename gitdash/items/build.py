"""Row builders shared by screen generators.

Generators follow one construction protocol: rows are emitted depth-first,
a blank spacer precedes every top-level section except the first, section
headers carry ``section=True`` and the depth they open, and empty sections
are left out entirely.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from ..git.diff import Delta, Diff
from ..git.query import LogEntry
from ..highlight import DEFAULT_SYNTAX_STYLE, highlight_hunk_lines, sanitize_terminal_text
from ..ui_theme import DEFAULT_THEME, UITheme, styled
from .types import CommitTarget, DeltaTarget, DiffSource, HunkTarget, Item


@dataclass(frozen=True)
class ItemStyle:
    """Palette and syntax settings used when building row display text."""

    theme: UITheme = DEFAULT_THEME
    syntax_style: str = DEFAULT_SYNTAX_STYLE
    syntax: bool = True


@dataclass
class SectionBuilder:
    """Accumulates top-level sections and inserts spacers between them."""

    items: list[Item] = field(default_factory=list)

    def add(self, header: Item, children: Iterable[Item] = (), *, keep_empty: bool = False) -> None:
        body = list(children)
        if not body and not keep_empty:
            return
        if self.items:
            self.items.append(blank_line())
        self.items.append(header)
        self.items.extend(body)


def blank_line() -> Item:
    return Item(display="", depth=0, unselectable=True)


def section_header(item_id: str, title: str, style: ItemStyle, count: int | None = None, depth: int = 0) -> Item:
    display = styled(style.theme.section_header, title, style.theme)
    if count is not None:
        display += f" ({count})"
    return Item(id=item_id, display=display, depth=depth, section=True)


def _delta_label(delta: Delta) -> str:
    if delta.status == "renamed" and delta.old_path != delta.new_path:
        return f"{delta.old_path} -> {delta.new_path}"
    return delta.path


def diff_items(diff: Diff, depth: int, source: DiffSource, style: ItemStyle) -> list[Item]:
    """Build file, hunk, and hunk-line rows for ``diff`` starting at ``depth``."""
    theme = style.theme
    items: list[Item] = []
    for delta in diff.deltas:
        path = sanitize_terminal_text(delta.path)
        label = f"{delta.status:<11}{sanitize_terminal_text(_delta_label(delta))}"
        items.append(
            Item(
                id=f"{source.value}:{delta.path}",
                display=styled(theme.file_header, label, theme),
                depth=depth,
                section=True,
                target=DeltaTarget(path=delta.path, old_path=delta.old_path, source=source),
            )
        )
        for hunk in delta.hunks:
            items.append(
                Item(
                    id=f"{source.value}:{delta.path}:{hunk.header}",
                    display=styled(theme.hunk_header, sanitize_terminal_text(hunk.header), theme),
                    depth=depth + 1,
                    section=True,
                    target=HunkTarget(
                        path=delta.path,
                        patch=delta.hunk_patch(hunk),
                        new_start=hunk.new_start,
                        source=source,
                    ),
                )
            )
            for line in highlight_hunk_lines(path, hunk.lines, theme, style.syntax_style, style.syntax):
                items.append(Item(display=line, depth=depth + 2, unselectable=True))
    return items


def format_ref_label(ref: str, theme: UITheme) -> str:
    if ref.startswith("HEAD -> "):
        return styled(theme.branch, ref, theme)
    if ref.startswith("tag: "):
        return styled(theme.tag, ref, theme)
    if "/" in ref or ref == "HEAD":
        return styled(theme.remote, ref, theme)
    return styled(theme.branch, ref, theme)


def log_items(entries: list[LogEntry], depth: int, style: ItemStyle) -> list[Item]:
    """Build one selectable row per commit, targeting the commit hash."""
    theme = style.theme
    items: list[Item] = []
    for entry in entries:
        parts = [styled(theme.commit_hash, entry.short_hash, theme)]
        parts.extend(format_ref_label(sanitize_terminal_text(ref), theme) for ref in entry.refs)
        parts.append(sanitize_terminal_text(entry.subject))
        items.append(
            Item(
                id=entry.hash,
                display=" ".join(parts),
                depth=depth,
                target=CommitTarget(entry.hash),
            )
        )
    return items
