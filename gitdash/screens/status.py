"""Status screen: branch state, file lists, staged/unstaged diffs, recent log."""

from __future__ import annotations

from ..git.query import BranchStatus, GitRepo, StatusEntry
from ..highlight import sanitize_terminal_text
from ..items import (
    DiffSource,
    FileTarget,
    Item,
    ItemStyle,
    SectionBuilder,
    diff_items,
    log_items,
    section_header,
)
from ..runtime.screen import Screen
from ..ui_theme import styled

DEFAULT_RECENT_COMMITS = 10


def _plural(count: int) -> str:
    return "commit" if count == 1 else "commits"


def branch_status_items(status: BranchStatus, style: ItemStyle) -> list[Item]:
    """Return the branch header row and, when tracked, its upstream summary."""
    if status.branch is None:
        return [section_header("branch_status", "No branch", style)]

    items = [section_header("branch_status", f"On branch {status.branch}", style)]
    if status.upstream is None:
        return items

    upstream = status.upstream
    if status.upstream_gone:
        text = f"Your branch is based on '{upstream}', but the upstream is gone."
    elif status.ahead == 0 and status.behind == 0:
        text = f"Your branch is up to date with '{upstream}'."
    elif status.behind == 0:
        text = f"Your branch is ahead of '{upstream}' by {status.ahead} {_plural(status.ahead)}."
    elif status.ahead == 0:
        text = f"Your branch is behind '{upstream}' by {status.behind} {_plural(status.behind)}."
    else:
        text = (
            f"Your branch and '{upstream}' have diverged,\n"
            f"and have {status.ahead} and {status.behind} different commits each, respectively."
        )
    items.append(Item(display=text, depth=1, unselectable=True))
    return items


def file_items(entries: list[StatusEntry], style: ItemStyle) -> list[Item]:
    theme = style.theme
    return [
        Item(
            id=entry.path,
            display=styled(theme.file_header, sanitize_terminal_text(entry.path), theme),
            depth=1,
            target=FileTarget(entry.path, untracked=entry.is_untracked),
        )
        for entry in entries
    ]


def status_items(repo: GitRepo, style: ItemStyle, recent_commits: int = DEFAULT_RECENT_COMMITS) -> list[Item]:
    """Generate all status rows; any git failure raises ``QueryError``."""
    statuses = repo.statuses()
    untracked = [entry for entry in statuses if entry.is_untracked]
    unmerged = [entry for entry in statuses if entry.is_unmerged]
    builder = SectionBuilder()

    rebase = repo.rebase_status()
    merge = repo.merge_status() if rebase is None else None
    if rebase is not None:
        builder.add(
            Item(
                id="rebase_status",
                display=styled(style.theme.section_header, f"Rebasing {rebase.head_name} onto {rebase.onto}", style.theme),
            ),
            keep_empty=True,
        )
    elif merge is not None:
        builder.add(
            Item(
                id="merge_status",
                display=styled(style.theme.section_header, f"Merging {merge.head}", style.theme),
            ),
            keep_empty=True,
        )
    else:
        header, *detail = branch_status_items(repo.branch_status(), style)
        builder.add(header, detail, keep_empty=True)

    builder.add(section_header("untracked", "Untracked files", style), file_items(untracked, style))
    builder.add(section_header("unmerged", "Unmerged", style), file_items(unmerged, style))

    unstaged = repo.diff_unstaged()
    builder.add(
        section_header("unstaged", "Unstaged changes", style, count=len(unstaged.deltas)),
        diff_items(unstaged, 1, DiffSource.UNSTAGED, style),
    )
    staged = repo.diff_staged()
    builder.add(
        section_header("staged", "Staged changes", style, count=len(staged.deltas)),
        diff_items(staged, 1, DiffSource.STAGED, style),
    )
    builder.add(
        section_header("recent_commits", "Recent commits", style),
        log_items(repo.log(recent_commits), 1, style),
    )
    return builder.items


def create(repo: GitRepo, style: ItemStyle, size: int, recent_commits: int = DEFAULT_RECENT_COMMITS) -> Screen:
    return Screen.create(lambda: status_items(repo, style, recent_commits), size=size, title="status")
