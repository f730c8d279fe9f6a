"""Refs screen: local branches, remote-tracking branches per remote, tags."""

from __future__ import annotations

from ..git.query import GitRepo, RefEntry
from ..highlight import sanitize_terminal_text
from ..items import Item, ItemStyle, RefTarget, SectionBuilder, section_header
from ..ui_theme import UITheme, styled
from ..runtime.screen import Screen


def _ref_color(entry: RefEntry, theme: UITheme) -> str:
    if entry.kind == "remote":
        return theme.remote
    if entry.kind == "tag":
        return theme.tag
    return theme.branch


def ref_item(entry: RefEntry, style: ItemStyle) -> Item:
    theme = style.theme
    marker = "* " if entry.is_head else "  "
    display = (
        marker
        + styled(_ref_color(entry, theme), sanitize_terminal_text(entry.name), theme)
        + " "
        + styled(theme.commit_hash, entry.short_hash, theme)
        + " "
        + sanitize_terminal_text(entry.subject)
    )
    return Item(id=entry.refname, display=display, depth=1, target=RefTarget(entry.name))


def refs_items(repo: GitRepo, style: ItemStyle) -> list[Item]:
    entries = repo.refs()
    builder = SectionBuilder()
    builder.add(
        section_header("branches", "Branches", style),
        [ref_item(entry, style) for entry in entries if entry.kind == "branch"],
    )

    remotes: dict[str, list[RefEntry]] = {}
    for entry in entries:
        if entry.kind == "remote":
            remotes.setdefault(entry.name.split("/", 1)[0], []).append(entry)
    for remote, remote_entries in remotes.items():
        builder.add(
            section_header(f"remote:{remote}", f"Remote {remote}", style),
            [ref_item(entry, style) for entry in remote_entries],
        )

    builder.add(
        section_header("tags", "Tags", style),
        [ref_item(entry, style) for entry in entries if entry.kind == "tag"],
    )
    return builder.items


def create(repo: GitRepo, style: ItemStyle, size: int) -> Screen:
    return Screen.create(lambda: refs_items(repo, style), size=size, title="refs")
