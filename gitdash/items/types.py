"""Row and target-payload datatypes shared by screens and generators."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Union


class DiffSource(enum.Enum):
    """Where a diff row came from; decides whether stage or unstage applies."""

    UNSTAGED = "unstaged"
    STAGED = "staged"
    COMMIT = "commit"


@dataclass(frozen=True)
class FileTarget:
    """Untracked or unmerged path relative to the repository root."""

    path: str
    untracked: bool = True


@dataclass(frozen=True)
class DeltaTarget:
    """A whole file entry of a diff."""

    path: str
    old_path: str
    source: DiffSource


@dataclass(frozen=True)
class HunkTarget:
    """One hunk as a self-contained patch (file header plus hunk body)."""

    path: str
    patch: str
    new_start: int
    source: DiffSource


@dataclass(frozen=True)
class CommitTarget:
    ref: str


@dataclass(frozen=True)
class RefTarget:
    """A branch, remote-tracking branch, or tag by its short name."""

    name: str


TargetData = Union[FileTarget, DeltaTarget, HunkTarget, CommitTarget, RefTarget]


@dataclass(frozen=True)
class Item:
    """One displayable row.

    Hierarchy is expressed only through ``depth``; ``section`` rows are the
    collapsible headers and ``unselectable`` rows are skipped by navigation.
    """

    display: str = ""
    id: str | None = None
    depth: int = 0
    section: bool = False
    unselectable: bool = False
    target: TargetData | None = None
