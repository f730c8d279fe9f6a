"""Flat, depth-tagged row model shared by screens, generators, and renderers."""

from __future__ import annotations

from .build import ItemStyle, SectionBuilder, blank_line, diff_items, log_items, section_header
from .navigation import find_id_index, hidden_flags, navigable_indices, subtree_end
from .types import (
    CommitTarget,
    DeltaTarget,
    DiffSource,
    FileTarget,
    HunkTarget,
    Item,
    RefTarget,
    TargetData,
)

__all__ = [
    "Item",
    "TargetData",
    "FileTarget",
    "DeltaTarget",
    "HunkTarget",
    "CommitTarget",
    "RefTarget",
    "DiffSource",
    "ItemStyle",
    "SectionBuilder",
    "blank_line",
    "section_header",
    "diff_items",
    "log_items",
    "hidden_flags",
    "navigable_indices",
    "find_id_index",
    "subtree_end",
]
