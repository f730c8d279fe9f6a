"""Git collaborators: read-only queries, diff parsing, and mutating commands."""

from .commands import CommandResult, GitCommands
from .diff import Delta, Diff, Hunk, parse_diff
from .query import GitRepo

__all__ = [
    "CommandResult",
    "GitCommands",
    "Delta",
    "Diff",
    "Hunk",
    "parse_diff",
    "GitRepo",
]
