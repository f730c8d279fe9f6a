"""Command-line front door for gitdash.

Parses CLI options, configures logging, and either prints rows for the
``show``/``log`` pass-through subcommands or launches the dashboard.
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path

from .errors import QueryError, SetupError
from .git.query import GitRepo
from .items import Item, ItemStyle, log_items
from .runtime import run_dashboard
from .runtime.app import build_item_style
from .runtime.config import load_dashboard_config
from .screens.show import passthrough_items
from .ui_theme import available_theme_names

LOG_ENV_VAR = "GITDASH_LOG"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(log_file: str | None) -> None:
    """Attach a file handler when a log path is given; stay silent otherwise."""
    target = log_file or os.environ.get(LOG_ENV_VAR)
    if not target:
        logging.getLogger("gitdash").addHandler(logging.NullHandler())
        return
    logging.basicConfig(filename=target, level=logging.DEBUG, format=LOG_FORMAT)


def render_rows(items: list[Item]) -> str:
    out: list[str] = []
    for item in items:
        out.append(item.display)
        if "\033" in item.display:
            out.append("\033[0m")
        out.append("\n")
    return "".join(out)


def render_show(repo: GitRepo, style: ItemStyle, args: list[str]) -> str:
    """Rows for ``git show ARGS`` laid out like the dashboard's show screen."""
    return render_rows(passthrough_items(repo, style, args))


def render_log(repo: GitRepo, style: ItemStyle, args: list[str]) -> str:
    return render_rows(log_items(repo.log(0, None, tuple(args)), 0, style))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gitdash",
        description="Interactive terminal dashboard for the git repository in the current directory.",
    )
    parser.add_argument("--style", default=None, help="Pygments style name for diff content.")
    parser.add_argument(
        "--theme",
        default=None,
        help=f"UI theme name ({', '.join(available_theme_names())}).",
    )
    parser.add_argument("--no-color", action="store_true", help="Disable color output.")
    parser.add_argument(
        "--log-file",
        default=None,
        metavar="PATH",
        help=f"Write debug logs to PATH (also via ${LOG_ENV_VAR}).",
    )
    subparsers = parser.add_subparsers(dest="command")
    subparsers.add_parser("show", help="Print `git show ARGS` as dashboard rows and exit.")
    subparsers.add_parser("log", help="Print `git log ARGS` as dashboard rows and exit.")
    return parser


def main(argv: list[str] | None = None, default_path: Path | None = None) -> None:
    """Parse CLI arguments and run gitdash.

    ``default_path`` is primarily for tests; when omitted the current working
    directory is used.
    """
    parser = build_parser()
    # Arguments the subcommands do not know are handed to git verbatim.
    args, git_args = parser.parse_known_args(argv)
    if args.command is None and git_args:
        parser.error(f"unrecognized arguments: {' '.join(git_args)}")
    configure_logging(args.log_file)
    path = default_path if default_path is not None else Path.cwd()

    if args.command in {"show", "log"}:
        style = build_item_style(load_dashboard_config(), args.theme, args.style, args.no_color)
        try:
            repo = GitRepo.discover(path)
            if args.command == "show":
                output = render_show(repo, style, git_args)
            else:
                output = render_log(repo, style, git_args)
        except QueryError as exc:
            raise SystemExit(exc.status_text()) from exc
        sys.stdout.write(output)
        return

    try:
        run_dashboard(path, args.theme, args.style, args.no_color)
    except (SetupError, QueryError) as exc:
        message = exc.status_text() if isinstance(exc, QueryError) else str(exc)
        raise SystemExit(message) from exc


if __name__ == "__main__":
    main()
