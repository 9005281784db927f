"""Persistent JSON config helpers.

Reads the default Pygments style, the highlighting toggle, and whether
directory listings are sorted. All access is defensive: malformed or missing
config falls back safely to built-in defaults.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path

from platformdirs import user_config_dir

APP_NAME = "catls"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME
DEFAULT_STYLE = "monokai"

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Settings:
    """Effective options for one invocation."""

    style: str = DEFAULT_STYLE
    highlight: bool = True
    sort: bool = False


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
        logger.debug("ignoring unreadable config %s: %s", CONFIG_PATH, exc)
        return {}
    return data if isinstance(data, dict) else {}


def _load_bool(data: dict[str, object], key: str, default: bool) -> bool:
    """Only explicit booleans are accepted; anything else yields ``default``."""
    value = data.get(key)
    return value if isinstance(value, bool) else default


def load_style_name(data: dict[str, object]) -> str:
    """Return configured style name, or the default when unset/invalid."""
    value = data.get("style")
    if not isinstance(value, str):
        return DEFAULT_STYLE
    stripped = value.strip()
    return stripped if stripped else DEFAULT_STYLE


def load_settings() -> Settings:
    """Read the config file once and normalize it into ``Settings``."""
    data = load_config()
    return Settings(
        style=load_style_name(data),
        highlight=_load_bool(data, "highlight", True),
        sort=_load_bool(data, "sort", False),
    )
