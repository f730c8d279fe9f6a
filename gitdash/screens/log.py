"""Log screen: one row per commit reachable from a starting ref."""

from __future__ import annotations

from ..git.query import GitRepo
from ..items import Item, ItemStyle, log_items
from ..runtime.screen import Screen

DEFAULT_LOG_COUNT = 256


def log_screen_items(
    repo: GitRepo,
    style: ItemStyle,
    count: int = DEFAULT_LOG_COUNT,
    start_ref: str | None = None,
    extra_args: tuple[str, ...] = (),
) -> list[Item]:
    return log_items(repo.log(count, start_ref, extra_args), 0, style)


def create(
    repo: GitRepo,
    style: ItemStyle,
    size: int,
    count: int = DEFAULT_LOG_COUNT,
    start_ref: str | None = None,
) -> Screen:
    title = f"log {start_ref}" if start_ref else "log"
    return Screen.create(lambda: log_screen_items(repo, style, count, start_ref), size=size, title=title)
