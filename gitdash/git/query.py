"""Repository queries backed by the ``git`` executable.

Every query runs ``git`` synchronously and either returns parsed data or
raises ``QueryError``. Nothing here mutates the repository.
"""

from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass
from pathlib import Path

from ..errors import QueryError
from .diff import Diff, parse_diff

logger = logging.getLogger(__name__)

GIT_TIMEOUT_SECONDS = 30.0
UNMERGED_CODES = frozenset({"DD", "AU", "UD", "UA", "DU", "AA", "UU"})
_FIELD_SEP = "\x1f"


@dataclass(frozen=True)
class StatusEntry:
    """One ``git status --porcelain`` record: two-letter code and path."""

    code: str
    path: str

    @property
    def is_untracked(self) -> bool:
        return self.code == "??"

    @property
    def is_unmerged(self) -> bool:
        return self.code in UNMERGED_CODES


@dataclass(frozen=True)
class BranchStatus:
    branch: str | None
    upstream: str | None = None
    ahead: int = 0
    behind: int = 0
    upstream_gone: bool = False


@dataclass(frozen=True)
class RebaseStatus:
    head_name: str
    onto: str


@dataclass(frozen=True)
class MergeStatus:
    head: str


@dataclass(frozen=True)
class LogEntry:
    hash: str
    short_hash: str
    refs: tuple[str, ...]
    subject: str


@dataclass(frozen=True)
class RefEntry:
    """A branch, remote-tracking branch, or tag."""

    refname: str
    short_hash: str
    is_head: bool
    subject: str

    @property
    def kind(self) -> str:
        if self.refname.startswith("refs/heads/"):
            return "branch"
        if self.refname.startswith("refs/remotes/"):
            return "remote"
        return "tag"

    @property
    def name(self) -> str:
        for prefix in ("refs/heads/", "refs/remotes/", "refs/tags/"):
            if self.refname.startswith(prefix):
                return self.refname[len(prefix):]
        return self.refname


@dataclass(frozen=True)
class CommitSummary:
    hash: str
    author: str
    date: str
    message: str


def iter_porcelain_records(output: str) -> list[StatusEntry]:
    """Parse ``git status --porcelain=v1 -z`` output into status entries."""
    records: list[StatusEntry] = []
    tokens = output.split("\0")
    index = 0
    while index < len(tokens):
        token = tokens[index]
        index += 1
        if not token:
            continue
        if len(token) < 4 or token[2] != " ":
            continue

        status = token[:2]
        records.append(StatusEntry(status, token[3:]))

        # For renamed/copied entries, porcelain -z appends an extra token
        # containing the source path; the first path token is the destination.
        if "R" in status or "C" in status:
            index += 1

    return records


def parse_log_records(output: str) -> list[LogEntry]:
    entries: list[LogEntry] = []
    for line in output.splitlines():
        fields = line.split(_FIELD_SEP)
        if len(fields) != 4:
            continue
        full, short, decoration, subject = fields
        refs = tuple(ref.strip() for ref in decoration.split(",") if ref.strip())
        entries.append(LogEntry(full, short, refs, subject))
    return entries


class GitRepo:
    """Handle on one work tree, used by screen generators and commands."""

    def __init__(self, root: Path, git_dir: Path) -> None:
        self.root = root
        self.git_dir = git_dir

    @classmethod
    def discover(cls, path: Path) -> GitRepo:
        """Locate the repository containing ``path``.

        Raises ``QueryError`` when ``path`` is not inside a work tree.
        """
        proc = _run(["git", "-C", str(path), "rev-parse", "--show-toplevel", "--git-dir"])
        if proc.returncode != 0:
            raise QueryError(f"Not a git repository: {path}", ("rev-parse",), proc.stderr)
        lines = [line.strip() for line in proc.stdout.splitlines() if line.strip()]
        if len(lines) < 2:
            raise QueryError(f"Not a git work tree: {path}", ("rev-parse",), proc.stderr)

        repo_root = Path(lines[0]).resolve()
        git_dir_raw = Path(lines[1])
        git_dir = git_dir_raw if git_dir_raw.is_absolute() else (Path(path) / git_dir_raw)
        return cls(repo_root, git_dir.resolve())

    def git(self, *args: str, check: bool = True) -> str:
        """Run ``git`` in the work tree and return stdout.

        Non-zero exit raises ``QueryError`` unless ``check`` is false.
        """
        cmd = ["git", "-C", str(self.root), "-c", "core.quotepath=false", *args]
        proc = _run(cmd)
        if check and proc.returncode != 0:
            logger.warning("git %s failed (%d): %s", " ".join(args), proc.returncode, proc.stderr.strip())
            raise QueryError(f"git {args[0]} failed", tuple(args), proc.stderr)
        return proc.stdout

    def has_head(self) -> bool:
        proc = _run(["git", "-C", str(self.root), "rev-parse", "--verify", "--quiet", "HEAD"])
        return proc.returncode == 0

    def statuses(self) -> list[StatusEntry]:
        output = self.git("status", "--porcelain=v1", "-z", "--untracked-files=all")
        return iter_porcelain_records(output)

    def diff_unstaged(self) -> Diff:
        return parse_diff(self.git("diff", "--no-color", "--no-ext-diff"))

    def diff_staged(self) -> Diff:
        return parse_diff(self.git("diff", "--no-color", "--no-ext-diff", "--cached"))

    def show_diff(self, ref: str) -> Diff:
        return parse_diff(self.git("show", "--no-color", "--no-ext-diff", "--format=", ref))

    def show_passthrough(self, args: list[str]) -> Diff:
        return parse_diff(self.git("show", "--no-color", "--no-ext-diff", *args))

    def commit_summary(self, ref: str) -> CommitSummary:
        output = self.git("show", "-s", "--no-color", f"--format=%H{_FIELD_SEP}%an <%ae>{_FIELD_SEP}%ad{_FIELD_SEP}%B", ref)
        fields = output.split(_FIELD_SEP, 3)
        if len(fields) != 4:
            raise QueryError(f"Cannot read commit {ref}", ("show",), output)
        return CommitSummary(fields[0], fields[1], fields[2], fields[3].rstrip("\n"))

    def log(self, count: int, start_ref: str | None = None, extra_args: tuple[str, ...] = ()) -> list[LogEntry]:
        if start_ref is None and not extra_args and not self.has_head():
            return []
        args = ["log", "--no-color", f"--format=%H{_FIELD_SEP}%h{_FIELD_SEP}%D{_FIELD_SEP}%s"]
        if count > 0:
            args.append(f"--max-count={count}")
        args.extend(extra_args)
        if start_ref is not None:
            args.append(start_ref)
        return parse_log_records(self.git(*args))

    def refs(self) -> list[RefEntry]:
        output = self.git(
            "for-each-ref",
            f"--format=%(refname){_FIELD_SEP}%(objectname:short){_FIELD_SEP}%(HEAD){_FIELD_SEP}%(contents:subject)",
            "refs/heads",
            "refs/remotes",
            "refs/tags",
        )
        entries: list[RefEntry] = []
        for line in output.splitlines():
            fields = line.split(_FIELD_SEP)
            if len(fields) != 4 or fields[0].endswith("/HEAD"):
                continue
            entries.append(RefEntry(fields[0], fields[1], fields[2] == "*", fields[3]))
        return entries

    def branch_status(self) -> BranchStatus:
        branch = self.git("symbolic-ref", "--quiet", "--short", "HEAD", check=False).strip()
        if not branch:
            return BranchStatus(branch=None)

        upstream = self.git(
            "rev-parse", "--abbrev-ref", "--symbolic-full-name", "@{upstream}", check=False
        ).strip()
        if not upstream:
            configured = self.git("config", "--get", f"branch.{branch}.merge", check=False).strip()
            if configured:
                remote = self.git("config", "--get", f"branch.{branch}.remote", check=False).strip()
                short = configured.removeprefix("refs/heads/")
                name = f"{remote}/{short}" if remote and remote != "." else short
                return BranchStatus(branch=branch, upstream=name, upstream_gone=True)
            return BranchStatus(branch=branch)

        if not self.has_head():
            return BranchStatus(branch=branch, upstream=upstream)
        counts = self.git("rev-list", "--left-right", "--count", "HEAD...@{upstream}").split()
        ahead, behind = (int(counts[0]), int(counts[1])) if len(counts) == 2 else (0, 0)
        return BranchStatus(branch=branch, upstream=upstream, ahead=ahead, behind=behind)

    def _short(self, rev: str) -> str:
        short = self.git("rev-parse", "--short", rev, check=False).strip()
        return short or rev[:7]

    def rebase_status(self) -> RebaseStatus | None:
        for dirname in ("rebase-merge", "rebase-apply"):
            state_dir = self.git_dir / dirname
            head_name_file = state_dir / "head-name"
            onto_file = state_dir / "onto"
            if not head_name_file.exists():
                continue
            head_name = head_name_file.read_text(encoding="utf-8").strip().removeprefix("refs/heads/")
            onto = onto_file.read_text(encoding="utf-8").strip() if onto_file.exists() else ""
            return RebaseStatus(head_name=head_name, onto=self._short(onto) if onto else "?")
        return None

    def merge_status(self) -> MergeStatus | None:
        merge_head = self.git_dir / "MERGE_HEAD"
        if not merge_head.exists():
            return None
        head = merge_head.read_text(encoding="utf-8").split()
        return MergeStatus(head=self._short(head[0]) if head else "?")


def _run(cmd: list[str]) -> subprocess.CompletedProcess[str]:
    logger.debug("run %s", cmd)
    try:
        return subprocess.run(
            cmd,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            text=True,
            encoding="utf-8",
            errors="replace",
            check=False,
            timeout=GIT_TIMEOUT_SECONDS,
        )
    except (OSError, subprocess.TimeoutExpired) as exc:
        raise QueryError(f"Cannot run git: {exc}", tuple(cmd[1:])) from exc
