"""Unified diff parsing.

Splits ``git diff`` / ``git show`` output into per-file deltas and hunks.
Each hunk can be re-emitted as a standalone patch for ``git apply``.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field

_HUNK_RE = re.compile(r"^@@ -(\d+)(?:,(\d+))? \+(\d+)(?:,(\d+))? @@")
_DIFF_GIT_RE = re.compile(r"^diff --git (\"?a/.*\"?) (\"?b/.*\"?)$")


@dataclass
class Hunk:
    header: str
    old_start: int
    old_count: int
    new_start: int
    new_count: int
    lines: list[str] = field(default_factory=list)

    def text(self) -> str:
        return "\n".join([self.header, *self.lines]) + "\n"


@dataclass
class Delta:
    """One file entry: the header lines before the first hunk plus its hunks."""

    old_path: str
    new_path: str
    status: str = "modified"
    header_lines: list[str] = field(default_factory=list)
    hunks: list[Hunk] = field(default_factory=list)

    @property
    def path(self) -> str:
        return self.new_path or self.old_path

    def file_header(self) -> str:
        return "\n".join(self.header_lines) + "\n"

    def hunk_patch(self, hunk: Hunk) -> str:
        """Return a patch containing only ``hunk``, applicable with ``git apply``."""
        return self.file_header() + hunk.text()


@dataclass
class Diff:
    deltas: list[Delta] = field(default_factory=list)


def _unquote(path: str) -> str:
    if len(path) >= 2 and path[0] == '"' and path[-1] == '"':
        path = path[1:-1].replace('\\"', '"').replace("\\\\", "\\")
    return path


def _strip_prefix(path: str, prefix: str) -> str:
    path = _unquote(path)
    if path.startswith(prefix):
        return path[len(prefix):]
    return path


def _apply_header_line(delta: Delta, line: str) -> None:
    if line.startswith("--- "):
        target = line[4:].rstrip("\t")
        if target != "/dev/null":
            delta.old_path = _strip_prefix(target, "a/")
    elif line.startswith("+++ "):
        target = line[4:].rstrip("\t")
        if target == "/dev/null":
            delta.new_path = delta.old_path
        else:
            delta.new_path = _strip_prefix(target, "b/")
    elif line.startswith("new file mode"):
        delta.status = "new file"
    elif line.startswith("deleted file mode"):
        delta.status = "deleted"
    elif line.startswith("rename from "):
        delta.status = "renamed"
        delta.old_path = line[len("rename from "):]
    elif line.startswith("rename to "):
        delta.new_path = line[len("rename to "):]
    elif line.startswith("copy from "):
        delta.status = "copied"
        delta.old_path = line[len("copy from "):]
    elif line.startswith("copy to "):
        delta.new_path = line[len("copy to "):]
    elif line.startswith("Binary files "):
        delta.status = "binary"


def parse_diff(output: str) -> Diff:
    """Parse unified diff text produced with ``--no-color --no-ext-diff``.

    Text before the first ``diff --git`` line (commit headers) is ignored.
    """
    diff = Diff()
    delta: Delta | None = None
    hunk: Hunk | None = None

    for line in output.split("\n"):
        if line.startswith("diff --git "):
            match = _DIFF_GIT_RE.match(line)
            if match is not None:
                old_path = _strip_prefix(match.group(1), "a/")
                new_path = _strip_prefix(match.group(2), "b/")
            else:
                old_path = new_path = line[len("diff --git "):]
            delta = Delta(old_path=old_path, new_path=new_path, header_lines=[line])
            diff.deltas.append(delta)
            hunk = None
            continue
        if line.startswith("diff "):
            # Combined diffs (``diff --cc``) of unmerged paths are not applicable
            # hunk by hunk; unmerged files are listed on their own instead.
            delta = None
            hunk = None
            continue
        if delta is None:
            continue

        match = _HUNK_RE.match(line)
        if match is not None:
            hunk = Hunk(
                header=line,
                old_start=int(match.group(1)),
                old_count=int(match.group(2) or "1"),
                new_start=int(match.group(3)),
                new_count=int(match.group(4) or "1"),
            )
            delta.hunks.append(hunk)
            continue

        if hunk is None:
            if not line:
                continue
            delta.header_lines.append(line)
            _apply_header_line(delta, line)
            continue

        if line[:1] in {"+", "-", " ", "\\"}:
            hunk.lines.append(line)
        elif line == "":
            # Trailing newline of the whole output, or a blank context line
            # emitted without its leading space by some diff drivers.
            continue
        else:
            hunk = None
    return diff
