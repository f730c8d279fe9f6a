"""Visibility and selection helpers over flat, depth-tagged item lists."""

from __future__ import annotations

from .types import Item


def hidden_flags(items: list[Item], collapsed: set[str]) -> list[bool]:
    """Return one flag per item telling whether a collapsed header hides it.

    A collapsed header hides every following row of greater depth up to the
    next row at the same or lesser depth. Headers that are themselves hidden
    do not open a new hidden region.
    """
    flags: list[bool] = []
    hide_above: int | None = None
    for item in items:
        if hide_above is not None and item.depth > hide_above:
            flags.append(True)
            continue
        hide_above = None
        flags.append(False)
        if item.section and item.id is not None and item.id in collapsed:
            hide_above = item.depth
    return flags


def navigable_indices(items: list[Item], hidden: list[bool]) -> list[int]:
    """Return indices of rows that can hold the cursor, in display order."""
    return [idx for idx, item in enumerate(items) if not item.unselectable and not hidden[idx]]


def find_id_index(items: list[Item], hidden: list[bool], item_id: str) -> int | None:
    """Return the first navigable index whose row carries ``item_id``."""
    for idx, item in enumerate(items):
        if item.id == item_id and not item.unselectable and not hidden[idx]:
            return idx
    return None


def subtree_end(items: list[Item], index: int) -> int:
    """Return the index just past the rows nested under ``items[index]``."""
    depth = items[index].depth
    end = index + 1
    while end < len(items) and items[end].depth > depth:
        end += 1
    return end
