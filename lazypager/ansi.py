"""ANSI-aware text measurement and SGR decoding.

Provides terminal column widths for single characters and turns SGR escape
parameters into cell styles, so colored input keeps its colors once expanded
into cells.
"""

from __future__ import annotations

import re
import unicodedata
from dataclasses import replace

from .style import DEFAULT_STYLE, Color, Style

ANSI_ESCAPE_RE = re.compile(r"\x1b\[[0-9;:?]*[ -/]*[@-~]")
TAB_STOP = 8

_ATTR_ON: dict[int, str] = {
    1: "bold",
    2: "dim",
    3: "italic",
    4: "underline",
    5: "blink",
    7: "reverse",
    9: "strikethrough",
}

_ATTR_OFF: dict[int, tuple[str, ...]] = {
    21: ("bold",),
    22: ("bold", "dim"),
    23: ("italic",),
    24: ("underline",),
    25: ("blink",),
    27: ("reverse",),
    29: ("strikethrough",),
}


def char_display_width(ch: str, col: int, tab_stop: int = TAB_STOP) -> int:
    """Return terminal column width for one character at visual column ``col``.

    Tabs expand to the next tab stop, combining marks and format characters
    consume no columns, and East Asian wide/fullwidth characters consume two.
    """
    if ch == "\t":
        if tab_stop <= 0:
            return 1
        return tab_stop - (col % tab_stop)
    if is_combining(ch):
        return 0
    if unicodedata.east_asian_width(ch) in {"W", "F"}:
        return 2
    return 1


def is_combining(ch: str) -> bool:
    """Return whether ``ch`` attaches to the preceding glyph."""
    if unicodedata.combining(ch):
        return True
    # Variation selectors and zero-width format characters (ZWJ, ZWSP, word
    # joiner) ride along with their base. The soft hyphen is shown.
    if "\ufe00" <= ch <= "\ufe0f":
        return True
    return unicodedata.category(ch) == "Cf" and ch != "\u00ad"


def _int_param(value: str) -> int | None:
    if value == "":
        return 0
    try:
        return int(value)
    except ValueError:
        return None


def _extended_color(codes: list[str], idx: int) -> tuple[Color | None, int]:
    """Decode ``38;5;n`` / ``38;2;r;g;b`` starting at ``codes[idx]``.

    Returns the color (or ``None``) and the index of the next unread code.
    """
    if idx + 1 >= len(codes):
        return None, len(codes)
    kind = codes[idx + 1]
    if kind == "5" and idx + 2 < len(codes):
        value = _int_param(codes[idx + 2])
        if value is None or not 0 <= value <= 255:
            return None, idx + 3
        return value, idx + 3
    if kind == "2" and idx + 4 < len(codes):
        channels = [_int_param(part) for part in codes[idx + 2 : idx + 5]]
        if any(ch is None or not 0 <= ch <= 255 for ch in channels):
            return None, idx + 5
        return "#{:02x}{:02x}{:02x}".format(*channels), idx + 5
    return None, len(codes)


def parse_sgr(params: str, style: Style) -> Style:
    """Apply SGR parameters (the text between ``ESC[`` and ``m``) to ``style``.

    Unknown or malformed parameters are ignored.
    """
    if params == "":
        return DEFAULT_STYLE

    codes = params.replace(":", ";").split(";")
    idx = 0
    while idx < len(codes):
        code = _int_param(codes[idx])
        if code is None:
            idx += 1
            continue
        if code == 0:
            style = DEFAULT_STYLE
        elif code in _ATTR_ON:
            style = replace(style, **{_ATTR_ON[code]: True})
        elif code in _ATTR_OFF:
            style = replace(style, **{name: False for name in _ATTR_OFF[code]})
        elif 30 <= code <= 37:
            style = replace(style, fg=code - 30)
        elif 90 <= code <= 97:
            style = replace(style, fg=code - 90 + 8)
        elif 40 <= code <= 47:
            style = replace(style, bg=code - 40)
        elif 100 <= code <= 107:
            style = replace(style, bg=code - 100 + 8)
        elif code == 39:
            style = replace(style, fg=None)
        elif code == 49:
            style = replace(style, bg=None)
        elif code in (38, 48):
            color, idx = _extended_color(codes, idx)
            if color is not None:
                style = replace(style, **{"fg" if code == 38 else "bg": color})
            continue
        idx += 1
    return style


def strip_ansi(text: str) -> str:
    return ANSI_ESCAPE_RE.sub("", text)
