"""Persistent JSON config helpers.

Stores default zoom/tab settings and outline filter switches.
All access is defensive: malformed or missing config falls back safely.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path

from platformdirs import user_config_dir

from .project_tree.rendering import DEFAULT_MAX_DEPTH
from .zoom import DEFAULT_TAB_WIDTH

logger = logging.getLogger(__name__)

APP_NAME = "codezoom"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME
DEFAULT_ZOOM_LEVEL = 1


@dataclass(frozen=True)
class RenderDefaults:
    """Defaults applied when the caller leaves a setting unspecified."""

    zoom_level: int = DEFAULT_ZOOM_LEVEL
    tab_width: int = DEFAULT_TAB_WIDTH
    max_depth: int = DEFAULT_MAX_DEPTH
    include_tests: bool = False
    include_docs: bool = False
    include_hidden: bool = False


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
        logger.warning("Ignoring unreadable config %s: %s", CONFIG_PATH, exc)
        return {}
    return data if isinstance(data, dict) else {}


def save_config(data: dict[str, object]) -> None:
    """Persist config data as pretty-printed JSON.

    Filesystem and serialization errors are logged, never raised.
    """
    try:
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        CONFIG_PATH.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except (OSError, TypeError, ValueError) as exc:
        logger.warning("Could not write config %s: %s", CONFIG_PATH, exc)


def _int_value(data: dict[str, object], key: str, default: int, minimum: int) -> int:
    """Read an integer ``>= minimum``; bools and other types fall back."""
    value = data.get(key)
    if isinstance(value, bool) or not isinstance(value, int) or value < minimum:
        return default
    return value


def _bool_value(data: dict[str, object], key: str, default: bool) -> bool:
    value = data.get(key)
    return value if isinstance(value, bool) else default


def load_render_defaults() -> RenderDefaults:
    """Return persisted defaults merged over the built-in ones."""
    data = load_config()
    return RenderDefaults(
        zoom_level=_int_value(data, "zoom_level", DEFAULT_ZOOM_LEVEL, 0),
        tab_width=_int_value(data, "tab_width", DEFAULT_TAB_WIDTH, 1),
        max_depth=_int_value(data, "max_depth", DEFAULT_MAX_DEPTH, 0),
        include_tests=_bool_value(data, "include_tests", False),
        include_docs=_bool_value(data, "include_docs", False),
        include_hidden=_bool_value(data, "include_hidden", False),
    )


def save_default_zoom_level(zoom_level: int) -> None:
    """Persist the default zoom level used when none is given."""
    config = load_config()
    config["zoom_level"] = max(0, int(zoom_level))
    save_config(config)


__all__ = [
    "APP_NAME",
    "CONFIG_PATH",
    "DEFAULT_ZOOM_LEVEL",
    "RenderDefaults",
    "load_config",
    "save_config",
    "load_render_defaults",
    "save_default_zoom_level",
]
