"""Show screen: commit summary followed by the commit's diff."""

from __future__ import annotations

from ..git.diff import Diff
from ..git.query import CommitSummary, GitRepo
from ..highlight import sanitize_terminal_text
from ..items import DiffSource, Item, ItemStyle, SectionBuilder, diff_items, section_header
from ..runtime.screen import Screen
from ..ui_theme import styled


def summary_items(summary: CommitSummary, style: ItemStyle) -> tuple[Item, list[Item]]:
    theme = style.theme
    header = Item(
        id="commit",
        display=styled(theme.section_header, "commit ", theme) + styled(theme.commit_hash, summary.hash, theme),
        depth=0,
        section=True,
    )
    detail = [
        Item(display=f"Author: {sanitize_terminal_text(summary.author)}", depth=1, unselectable=True),
        Item(display=f"Date:   {sanitize_terminal_text(summary.date)}", depth=1, unselectable=True),
        Item(display="", depth=1, unselectable=True),
    ]
    detail.extend(
        Item(display=sanitize_terminal_text(line), depth=1, unselectable=True)
        for line in summary.message.splitlines()
    )
    return header, detail


def diff_section(diff: Diff, style: ItemStyle) -> tuple[Item, list[Item]]:
    header = section_header("changes", "Changes", style, count=len(diff.deltas))
    return header, diff_items(diff, 1, DiffSource.COMMIT, style)


def show_items(repo: GitRepo, style: ItemStyle, ref: str) -> list[Item]:
    builder = SectionBuilder()
    header, detail = summary_items(repo.commit_summary(ref), style)
    builder.add(header, detail, keep_empty=True)
    builder.add(*diff_section(repo.show_diff(ref), style))
    return builder.items


def revisions_of(args: list[str]) -> list[str]:
    """Revision arguments of a ``git show`` command line, ``HEAD`` when none."""
    positional = []
    for arg in args:
        if arg == "--":
            break
        if not arg.startswith("-"):
            positional.append(arg)
    if not positional:
        return ["HEAD"]
    # ``REV:PATH`` names a blob, which has no commit summary.
    return [arg for arg in positional if ":" not in arg]


def passthrough_items(repo: GitRepo, style: ItemStyle, args: list[str]) -> list[Item]:
    """Rows for ``git show ARGS``: one summary per revision, then the diff."""
    builder = SectionBuilder()
    for ref in revisions_of(args):
        header, detail = summary_items(repo.commit_summary(ref), style)
        builder.add(header, detail, keep_empty=True)
    builder.add(*diff_section(repo.show_passthrough(args), style))
    return builder.items


def create(repo: GitRepo, style: ItemStyle, size: int, ref: str) -> Screen:
    return Screen.create(lambda: show_items(repo, style, ref), size=size, title=f"show {ref[:12]}")
