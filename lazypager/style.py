"""Immutable cell styles and overlay composition.

A ``Style`` is the concrete look of one terminal cell. An ``OverlayStyle`` is a
partial style: unset fields leave the underlying attribute alone, so overlays
stack in any order without knowing the base style in advance.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, fields, replace
from typing import Union

Color = Union[int, str]

NAMED_COLORS: dict[str, int] = {
    "black": 0,
    "red": 1,
    "green": 2,
    "yellow": 3,
    "blue": 4,
    "magenta": 5,
    "cyan": 6,
    "white": 7,
    "gray": 8,
    "grey": 8,
    "brightred": 9,
    "brightgreen": 10,
    "brightyellow": 11,
    "brightblue": 12,
    "brightmagenta": 13,
    "brightcyan": 14,
    "brightwhite": 15,
}

DEFAULT_COLOR = "default"

_HEX_COLOR_RE = re.compile(r"^#[0-9a-fA-F]{6}$")

_ATTR_SGR: tuple[tuple[str, int], ...] = (
    ("bold", 1),
    ("dim", 2),
    ("italic", 3),
    ("underline", 4),
    ("blink", 5),
    ("reverse", 7),
    ("strikethrough", 9),
)


@dataclass(frozen=True)
class Style:
    """Concrete style of one cell; ``None`` colors mean terminal default."""

    fg: Color | None = None
    bg: Color | None = None
    bold: bool = False
    dim: bool = False
    italic: bool = False
    underline: bool = False
    blink: bool = False
    reverse: bool = False
    strikethrough: bool = False

    def sgr(self) -> str:
        """Return the SGR sequence that selects this style from a reset state."""
        params = ["0"]
        for name, code in _ATTR_SGR:
            if getattr(self, name):
                params.append(str(code))
        if self.fg is not None:
            params.append(_color_params(self.fg, foreground=True))
        if self.bg is not None:
            params.append(_color_params(self.bg, foreground=False))
        return f"\033[{';'.join(params)}m"


DEFAULT_STYLE = Style()


@dataclass(frozen=True)
class OverlayStyle:
    """Partial style; every ``None`` field leaves the base attribute untouched."""

    fg: Color | None = None
    bg: Color | None = None
    bold: bool | None = None
    dim: bool | None = None
    italic: bool | None = None
    underline: bool | None = None
    blink: bool | None = None
    reverse: bool | None = None
    strikethrough: bool | None = None

    def is_empty(self) -> bool:
        return all(getattr(self, f.name) is None for f in fields(self))


EMPTY_OVERLAY = OverlayStyle()

_OVERLAY_FIELDS: tuple[str, ...] = tuple(f.name for f in fields(OverlayStyle))


def _set_fields(overlay: OverlayStyle) -> dict[str, object]:
    out: dict[str, object] = {}
    for name in _OVERLAY_FIELDS:
        value = getattr(overlay, name)
        if value is not None:
            out[name] = value
    return out


def apply_style(base: Style, overlay: OverlayStyle) -> Style:
    """Compose ``overlay`` onto ``base`` and return the resulting style.

    Attributes set in the overlay win; everything else is kept from ``base``.
    The special color ``"default"`` resets a color to the terminal default.
    """
    changes = _set_fields(overlay)
    if not changes:
        return base
    for name in ("fg", "bg"):
        if changes.get(name) == DEFAULT_COLOR:
            changes[name] = None
    return replace(base, **changes)


def merge_overlays(first: OverlayStyle, second: OverlayStyle) -> OverlayStyle:
    """Return one overlay equivalent to applying ``first`` then ``second``."""
    changes = _set_fields(second)
    if not changes:
        return first
    return replace(first, **changes)


def parse_color(value: object) -> Color | None:
    """Normalize a config color value.

    Accepts palette indices 0-255, named colors, ``#rrggbb`` and ``"default"``.
    Anything else yields ``None``.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value if 0 <= value <= 255 else None
    if not isinstance(value, str):
        return None
    candidate = value.strip().lower()
    if candidate == DEFAULT_COLOR:
        return DEFAULT_COLOR
    if candidate in NAMED_COLORS:
        return NAMED_COLORS[candidate]
    if _HEX_COLOR_RE.match(candidate):
        return candidate
    return None


def overlay_from_dict(data: object) -> OverlayStyle:
    """Build an overlay from a JSON mapping such as ``{"background": "red", "bold": true}``.

    Unknown keys and invalid values are dropped.
    """
    if not isinstance(data, dict):
        return EMPTY_OVERLAY
    changes: dict[str, object] = {}
    for key, name in (("foreground", "fg"), ("background", "bg")):
        color = parse_color(data.get(key))
        if color is not None:
            changes[name] = color
    for name, _code in _ATTR_SGR:
        value = data.get(name)
        if isinstance(value, bool):
            changes[name] = value
    return OverlayStyle(**changes)


def _color_params(color: Color, *, foreground: bool) -> str:
    if isinstance(color, int):
        if color < 8:
            return str((30 if foreground else 40) + color)
        if color < 16:
            return str((90 if foreground else 100) + color - 8)
        return f"{38 if foreground else 48};5;{color}"
    if color.startswith("#"):
        red = int(color[1:3], 16)
        green = int(color[3:5], 16)
        blue = int(color[5:7], 16)
        return f"{38 if foreground else 48};2;{red};{green};{blue}"
    return "39" if foreground else "49"


__all__ = [
    "Color",
    "DEFAULT_STYLE",
    "EMPTY_OVERLAY",
    "OverlayStyle",
    "Style",
    "apply_style",
    "merge_overlays",
    "overlay_from_dict",
    "parse_color",
]
