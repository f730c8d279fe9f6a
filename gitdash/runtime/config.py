"""Read-only JSON config helpers.

Holds UI theme, syntax style, and list lengths. Config is never written by
gitdash; malformed or missing values fall back to defaults.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path

from platformdirs import user_config_dir

from ..highlight import DEFAULT_SYNTAX_STYLE
from ..screens.log import DEFAULT_LOG_COUNT
from ..screens.status import DEFAULT_RECENT_COMMITS

logger = logging.getLogger(__name__)

APP_NAME = "gitdash"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME


@dataclass(frozen=True)
class DashboardConfig:
    theme: str | None = None
    syntax_style: str = DEFAULT_SYNTAX_STYLE
    recent_commits: int = DEFAULT_RECENT_COMMITS
    log_count: int = DEFAULT_LOG_COUNT


def load_config(path: Path | None = None) -> dict[str, object]:
    """Load the JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    config_path = CONFIG_PATH if path is None else path
    try:
        data = json.loads(config_path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return {}
    except (OSError, ValueError) as exc:
        logger.warning("ignoring unreadable config %s: %s", config_path, exc)
        return {}
    return data if isinstance(data, dict) else {}


def _coerce_positive_int(value: object, default: int) -> int:
    """Booleans, non-integers, and values below one fall back to ``default``."""
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        return default
    return value


def _coerce_name(value: object) -> str | None:
    if not isinstance(value, str):
        return None
    stripped = value.strip()
    return stripped if stripped else None


def load_dashboard_config(path: Path | None = None) -> DashboardConfig:
    data = load_config(path)
    return DashboardConfig(
        theme=_coerce_name(data.get("theme")),
        syntax_style=_coerce_name(data.get("syntax_style")) or DEFAULT_SYNTAX_STYLE,
        recent_commits=_coerce_positive_int(data.get("recent_commits"), DEFAULT_RECENT_COMMITS),
        log_count=_coerce_positive_int(data.get("log_count"), DEFAULT_LOG_COUNT),
    )
