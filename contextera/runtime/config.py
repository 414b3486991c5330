"""Persistent JSON config helpers.

Stores the last indexed root, scan visibility options, and the preferred
view. All access is defensive: malformed or missing config falls back safely.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from platformdirs import user_config_dir

LOGGER = logging.getLogger(__name__)

APP_NAME = "contextera"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME
VIEW_NAMES = ("table", "tree")
DEFAULT_VIEW = "table"


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return {}
    except (OSError, ValueError) as exc:
        LOGGER.debug("ignoring unreadable config %s: %s", CONFIG_PATH, exc)
        return {}
    return data if isinstance(data, dict) else {}


def save_config(data: dict[str, object]) -> None:
    """Persist config data as pretty-printed JSON.

    Filesystem/serialization errors are logged and otherwise ignored so a
    read-only config directory never breaks indexing.
    """
    try:
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        CONFIG_PATH.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except (OSError, TypeError, ValueError) as exc:
        LOGGER.debug("could not write config %s: %s", CONFIG_PATH, exc)


def _load_bool(key: str, default: bool) -> bool:
    """Only explicit JSON booleans are accepted; anything else is ``default``."""
    value = load_config().get(key)
    return value if isinstance(value, bool) else default


def _save_value(key: str, value: object) -> None:
    config = load_config()
    config[key] = value
    save_config(config)


def load_last_root() -> Path | None:
    """Return the last indexed root, or ``None`` when unset/invalid."""
    value = load_config().get("last_root")
    if not isinstance(value, str) or not value.strip():
        return None
    return Path(value)


def save_last_root(root: Path) -> None:
    _save_value("last_root", str(root))


def load_show_hidden() -> bool:
    """Return whether dot-files are indexed (default ``True``)."""
    return _load_bool("show_hidden", True)


def save_show_hidden(show_hidden: bool) -> None:
    _save_value("show_hidden", bool(show_hidden))


def load_skip_gitignored() -> bool:
    """Return whether git-ignored paths are left out (default ``False``)."""
    return _load_bool("skip_gitignored", False)


def save_skip_gitignored(skip_gitignored: bool) -> None:
    _save_value("skip_gitignored", bool(skip_gitignored))


def load_view_name() -> str:
    """Load the preferred view name, falling back to ``"table"``."""
    value = load_config().get("view")
    if not isinstance(value, str):
        return DEFAULT_VIEW
    stripped = value.strip().lower()
    return stripped if stripped in VIEW_NAMES else DEFAULT_VIEW


def save_view_name(view_name: str) -> None:
    """Persist the preferred view; unknown names are ignored."""
    stripped = str(view_name).strip().lower()
    if stripped not in VIEW_NAMES:
        return
    _save_value("view", stripped)
