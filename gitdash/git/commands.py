"""Mutating git commands.

Each command runs ``git`` synchronously and returns a ``CommandResult``.
Commands that need the terminal (editor, prompts) leave TUI mode while they
run and restore it afterwards.
"""

from __future__ import annotations

import logging
import os
import subprocess
from collections.abc import Callable
from dataclasses import dataclass

from .query import GitRepo

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CommandResult:
    args: tuple[str, ...]
    returncode: int
    output: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0

    def summary(self) -> str:
        """Return the last non-empty output line, or a generic exit message."""
        for line in reversed(self.output.splitlines()):
            stripped = line.strip()
            if stripped:
                return stripped
        if self.ok:
            return f"git {self.args[0]} done" if self.args else "done"
        return f"git {' '.join(self.args[:1])} exited with {self.returncode}"


def _noop() -> None:
    return None


class GitCommands:
    """Command executor bound to one repository and the terminal mode hooks."""

    def __init__(
        self,
        repo: GitRepo,
        disable_tui_mode: Callable[[], None] = _noop,
        enable_tui_mode: Callable[[], None] = _noop,
        prompt: Callable[[str], str] = input,
    ) -> None:
        self.repo = repo
        self.disable_tui_mode = disable_tui_mode
        self.enable_tui_mode = enable_tui_mode
        self.prompt = prompt

    def _cmd(self, args: tuple[str, ...]) -> list[str]:
        return ["git", "-C", str(self.repo.root), *args]

    def run(self, *args: str, stdin: str | None = None, env: dict[str, str] | None = None) -> CommandResult:
        """Run a non-interactive git command capturing combined output."""
        logger.info("git %s", " ".join(args))
        merged_env = None if env is None else {**os.environ, **env}
        try:
            proc = subprocess.run(
                self._cmd(args),
                input=stdin,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                stdin=None if stdin is not None else subprocess.DEVNULL,
                text=True,
                encoding="utf-8",
                errors="replace",
                check=False,
                env=merged_env,
            )
        except OSError as exc:
            logger.warning("git %s could not start: %s", args[0], exc)
            return CommandResult(args, 127, f"Cannot run git: {exc}")
        result = CommandResult(args, proc.returncode, proc.stdout)
        if not result.ok:
            logger.warning("git %s failed (%d): %s", " ".join(args), proc.returncode, result.summary())
        return result

    def run_interactive(self, *args: str, env: dict[str, str] | None = None) -> CommandResult:
        """Run a git command attached to the real terminal (editors, pagers)."""
        logger.info("git %s (interactive)", " ".join(args))
        merged_env = None if env is None else {**os.environ, **env}
        self.disable_tui_mode()
        try:
            proc = subprocess.run(self._cmd(args), check=False, env=merged_env)
        except OSError as exc:
            return CommandResult(args, 127, f"Cannot run git: {exc}")
        finally:
            self.enable_tui_mode()
        return CommandResult(args, proc.returncode)

    # Staging

    def stage_file(self, path: str) -> CommandResult:
        return self.run("add", "--", path)

    def stage_patch(self, patch: str) -> CommandResult:
        return self.run("apply", "--cached", "-", stdin=patch)

    def unstage_file(self, path: str) -> CommandResult:
        if not self.repo.has_head():
            return self.run("rm", "--cached", "-q", "--", path)
        return self.run("restore", "--staged", "--", path)

    def unstage_patch(self, patch: str) -> CommandResult:
        return self.run("apply", "--cached", "--reverse", "-", stdin=patch)

    # Discarding

    def discard_untracked(self, path: str) -> CommandResult:
        return self.run("clean", "--force", "-d", "--", path)

    def discard_file(self, path: str, staged: bool) -> CommandResult:
        if staged:
            return self.run("restore", "--staged", "--worktree", "--source=HEAD", "--", path)
        return self.run("restore", "--worktree", "--", path)

    def discard_patch(self, patch: str, staged: bool) -> CommandResult:
        if staged:
            return self.run("apply", "--reverse", "--index", "-", stdin=patch)
        return self.run("apply", "--reverse", "-", stdin=patch)

    # Branches

    def checkout(self, ref: str) -> CommandResult:
        return self.run("checkout", ref)

    def checkout_new_branch(self) -> CommandResult:
        self.disable_tui_mode()
        try:
            name = self.prompt("Create and checkout branch: ").strip()
        except EOFError:
            name = ""
        finally:
            self.enable_tui_mode()
        if not name:
            return CommandResult(("checkout",), 1, "Branch name required")
        return self.run("checkout", "-b", name)

    # Commits

    def commit(self) -> CommandResult:
        return self.run_interactive("commit")

    def commit_amend(self) -> CommandResult:
        return self.run_interactive("commit", "--amend")

    def commit_fixup(self, ref: str) -> CommandResult:
        return self.run("commit", "--fixup", ref)

    # Remotes

    def fetch_all(self) -> CommandResult:
        return self.run("fetch", "--all")

    def pull(self) -> CommandResult:
        return self.run("pull")

    def push(self) -> CommandResult:
        return self.run("push")

    # Rebase

    def _rebase_base(self, ref: str) -> list[str]:
        parent = self.repo.git("rev-parse", "--verify", "--quiet", f"{ref}^", check=False).strip()
        return [parent] if parent else ["--root"]

    def rebase_interactive(self, ref: str) -> CommandResult:
        return self.run_interactive("rebase", "-i", "--autostash", *self._rebase_base(ref))

    def rebase_autosquash(self, ref: str) -> CommandResult:
        return self.run(
            "rebase",
            "-i",
            "--autosquash",
            "--autostash",
            "--keep-empty",
            *self._rebase_base(ref),
            env={"GIT_SEQUENCE_EDITOR": ":"},
        )

    def rebase_abort(self) -> CommandResult:
        return self.run("rebase", "--abort")

    def rebase_continue(self) -> CommandResult:
        return self.run_interactive("rebase", "--continue")

    # Reset

    def reset(self, mode: str, ref: str) -> CommandResult:
        return self.run("reset", f"--{mode}", ref)
