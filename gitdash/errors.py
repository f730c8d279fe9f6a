"""Exception types shared by the query, screen, and runtime layers."""

from __future__ import annotations


class GitDashError(Exception):
    """Base class for gitdash failures."""


class QueryError(GitDashError):
    """A repository query could not produce data for a screen.

    Non-fatal: the screen keeps its previous rows and the message is shown
    in the status line.
    """

    def __init__(self, message: str, args: tuple[str, ...] = (), stderr: str = "") -> None:
        super().__init__(message)
        self.git_args = args
        self.stderr = stderr

    def status_text(self) -> str:
        """Return a single-line summary suitable for the status bar."""
        detail = self.stderr.strip().splitlines()
        if detail:
            return f"{self} ({detail[-1]})"
        return str(self)


class SetupError(GitDashError):
    """Terminal or signal setup failed before the dashboard could start."""
