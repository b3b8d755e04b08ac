"""Persistent JSON config helpers.

Stores tab width, mark-line width, search defaults, theme choice and style
overrides. Malformed or missing config falls back to defaults.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path

from platformdirs import user_config_dir

from .document import DEFAULT_TAB_WIDTH

APP_NAME = "lazypager"
CONFIG_FILENAME = "config.json"
DEFAULT_CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME
CONFIG_PATH = DEFAULT_CONFIG_PATH

DEFAULT_MARK_STYLE_WIDTH = 1


@dataclass(frozen=True)
class GeneralConfig:
    tab_width: int = DEFAULT_TAB_WIDTH
    mark_style_width: int = DEFAULT_MARK_STYLE_WIDTH
    min_start_x: int = 0
    regexp_search: bool = False
    incsearch: bool = True
    case_sensitive: bool = False
    theme: str | None = None


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return {}
    return data if isinstance(data, dict) else {}


def save_config(data: dict[str, object]) -> None:
    """Persist config data as pretty-printed JSON.

    Filesystem errors are ignored.
    """
    try:
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        CONFIG_PATH.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except OSError:
        pass


def _coerce_int(value: object, default: int, minimum: int) -> int:
    """Booleans, non-integers and values below ``minimum`` yield ``default``."""
    if isinstance(value, bool) or not isinstance(value, int):
        return default
    if value < minimum:
        return default
    return value


def _coerce_bool(value: object, default: bool) -> bool:
    return value if isinstance(value, bool) else default


def load_tab_width(data: dict[str, object] | None = None) -> int:
    if data is None:
        data = load_config()
    return _coerce_int(data.get("tab_width"), DEFAULT_TAB_WIDTH, 1)


def load_mark_style_width(data: dict[str, object] | None = None) -> int:
    if data is None:
        data = load_config()
    return _coerce_int(data.get("mark_style_width"), DEFAULT_MARK_STYLE_WIDTH, 0)


def load_theme_name(data: dict[str, object] | None = None) -> str | None:
    if data is None:
        data = load_config()
    value = data.get("theme")
    return value if isinstance(value, str) and value.strip() else None


def load_style_overrides(data: dict[str, object] | None = None) -> dict[str, object]:
    if data is None:
        data = load_config()
    value = data.get("styles")
    return value if isinstance(value, dict) else {}


def load_general() -> GeneralConfig:
    """Read all general settings in one pass over the config file."""
    data = load_config()
    min_start_x = data.get("min_start_x")
    if isinstance(min_start_x, bool) or not isinstance(min_start_x, int) or min_start_x > 0:
        min_start_x = 0
    return GeneralConfig(
        tab_width=load_tab_width(data),
        mark_style_width=load_mark_style_width(data),
        min_start_x=min_start_x,
        regexp_search=_coerce_bool(data.get("regexp_search"), False),
        incsearch=_coerce_bool(data.get("incsearch"), True),
        case_sensitive=_coerce_bool(data.get("case_sensitive"), False),
        theme=load_theme_name(data),
    )


def save_theme_name(name: str) -> None:
    config = load_config()
    config["theme"] = str(name)
    save_config(config)
