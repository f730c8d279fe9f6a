"""Mapping from dispatched operations to executor calls.

Target operations only apply to certain payload kinds; an unsupported pair
maps to ``None`` and the key press is ignored. Actions return a
``CommandResult`` for git commands, or ``None`` when they opened a view.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from .git.commands import CommandResult, GitCommands
from .input.ops import Op, TargetOp
from .items import CommitTarget, DeltaTarget, DiffSource, FileTarget, HunkTarget, RefTarget, TargetData

Action = Callable[[], "CommandResult | None"]


@dataclass(frozen=True)
class ActionOps:
    """Executor and view-opening callbacks used by action bindings."""

    commands: GitCommands
    show_commit: Callable[[str], None]
    show_log: Callable[[str | None], None]
    show_refs: Callable[[], None]
    open_editor: Callable[[str, int | None], "CommandResult | None"]


def _ref_of(target: TargetData) -> str | None:
    if isinstance(target, CommitTarget):
        return target.ref
    if isinstance(target, RefTarget):
        return target.name
    return None


def _stage(ops: ActionOps, target: TargetData) -> Action | None:
    commands = ops.commands
    if isinstance(target, FileTarget):
        return lambda: commands.stage_file(target.path)
    if isinstance(target, DeltaTarget) and target.source == DiffSource.UNSTAGED:
        return lambda: commands.stage_file(target.path)
    if isinstance(target, HunkTarget) and target.source == DiffSource.UNSTAGED:
        return lambda: commands.stage_patch(target.patch)
    return None


def _unstage(ops: ActionOps, target: TargetData) -> Action | None:
    commands = ops.commands
    if isinstance(target, DeltaTarget) and target.source == DiffSource.STAGED:
        return lambda: commands.unstage_file(target.path)
    if isinstance(target, HunkTarget) and target.source == DiffSource.STAGED:
        return lambda: commands.unstage_patch(target.patch)
    return None


def _discard(ops: ActionOps, target: TargetData) -> Action | None:
    commands = ops.commands
    if isinstance(target, FileTarget) and target.untracked:
        return lambda: commands.discard_untracked(target.path)
    if isinstance(target, DeltaTarget) and target.source != DiffSource.COMMIT:
        staged = target.source == DiffSource.STAGED
        return lambda: commands.discard_file(target.path, staged)
    if isinstance(target, HunkTarget) and target.source != DiffSource.COMMIT:
        staged = target.source == DiffSource.STAGED
        return lambda: commands.discard_patch(target.patch, staged)
    return None


def _show(ops: ActionOps, target: TargetData) -> Action | None:
    ref = _ref_of(target)
    if ref is not None:
        return lambda: ops.show_commit(ref)
    if isinstance(target, (FileTarget, DeltaTarget)):
        return lambda: ops.open_editor(target.path, None)
    if isinstance(target, HunkTarget):
        return lambda: ops.open_editor(target.path, target.new_start)
    return None


def _commit_only(target: TargetData, run: Callable[[str], CommandResult]) -> Action | None:
    if isinstance(target, CommitTarget):
        return lambda: run(target.ref)
    return None


def _any_ref(target: TargetData, run: Callable[[str], "CommandResult | None"]) -> Action | None:
    ref = _ref_of(target)
    if ref is None:
        return None
    return lambda: run(ref)


def target_action(ops: ActionOps, kind: TargetOp, target: TargetData | None) -> Action | None:
    """Return the callable implementing ``kind`` on ``target``, or ``None``."""
    if target is None:
        return None
    commands = ops.commands
    if kind == TargetOp.STAGE:
        return _stage(ops, target)
    if kind == TargetOp.UNSTAGE:
        return _unstage(ops, target)
    if kind == TargetOp.DISCARD:
        return _discard(ops, target)
    if kind == TargetOp.SHOW:
        return _show(ops, target)
    if kind == TargetOp.CHECKOUT:
        return _any_ref(target, commands.checkout)
    if kind == TargetOp.LOG_OTHER:
        return _any_ref(target, ops.show_log)
    if kind == TargetOp.COMMIT_FIXUP:
        return _commit_only(target, commands.commit_fixup)
    if kind == TargetOp.REBASE_AUTOSQUASH:
        return _commit_only(target, commands.rebase_autosquash)
    if kind == TargetOp.REBASE_INTERACTIVE:
        return _commit_only(target, commands.rebase_interactive)
    if kind == TargetOp.RESET_SOFT:
        return _any_ref(target, lambda ref: commands.reset("soft", ref))
    if kind == TargetOp.RESET_MIXED:
        return _any_ref(target, lambda ref: commands.reset("mixed", ref))
    if kind == TargetOp.RESET_HARD:
        return _any_ref(target, lambda ref: commands.reset("hard", ref))
    return None


def leaf_action(ops: ActionOps, op: Op) -> Action | None:
    """Return the executor call for repository-level leaf operations.

    Navigation, refresh, and quit are handled by the runtime and map to ``None``.
    """
    commands = ops.commands
    table: dict[Op, Action] = {
        Op.CHECKOUT_NEW_BRANCH: commands.checkout_new_branch,
        Op.COMMIT: commands.commit,
        Op.COMMIT_AMEND: commands.commit_amend,
        Op.FETCH_ALL: commands.fetch_all,
        Op.PULL: commands.pull,
        Op.PUSH: commands.push,
        Op.REBASE_ABORT: commands.rebase_abort,
        Op.REBASE_CONTINUE: commands.rebase_continue,
        Op.SHOW_REFS: ops.show_refs,
        Op.LOG_CURRENT: lambda: ops.show_log(None),
    }
    return table.get(op)
