"""Open a work-tree file in the user's editor, positioned at a hunk.

``$VISUAL`` is preferred over ``$EDITOR``, as git does for its own editor
lookups. The dashboard leaves the alternate screen for the editor's
lifetime; problems come back as status-line text.
"""

from __future__ import annotations

import logging
import os
import shlex
import subprocess
from pathlib import Path
from typing import Callable

logger = logging.getLogger(__name__)

EDITOR_VARIABLES = ("VISUAL", "EDITOR")


def editor_command(target: Path, line: int | None = None) -> list[str] | None:
    """Build ``EDITOR [+LINE] PATH``, or ``None`` when no editor is configured."""
    for name in EDITOR_VARIABLES:
        words = shlex.split(os.environ.get(name, ""))
        if words:
            break
    else:
        return None
    if line is not None and line > 0:
        words.append(f"+{line}")
    words.append(str(target))
    return words


def launch_editor(
    target: Path,
    disable_tui_mode: Callable[[], None],
    enable_tui_mode: Callable[[], None],
    line: int | None = None,
) -> str | None:
    cmd = editor_command(target, line)
    if cmd is None:
        return "Cannot edit: neither $VISUAL nor $EDITOR is set."
    if not target.exists():
        return f"Cannot edit: {target.name} is not in the work tree."

    logger.info("editing %s", cmd)
    disable_tui_mode()
    try:
        proc = subprocess.run(cmd, check=False)
    except OSError as exc:
        return f"Failed to launch editor: {exc}"
    finally:
        enable_tui_mode()
    if proc.returncode != 0:
        return f"Editor exited with status {proc.returncode}."
    return None
