"""Source loading, sanitization, and syntax highlighting.

Highlighting runs through Pygments and yields ANSI-colored text, which
content expansion later turns into cell styles. Control bytes are neutralized
so a previewed file cannot move the cursor or ring the bell.
"""

from __future__ import annotations

import re
from pathlib import Path

from pygments import highlight as _pygments_highlight
from pygments.formatters import Terminal256Formatter
from pygments.lexers import TextLexer, get_lexer_for_filename
from pygments.styles import get_style_by_name
from pygments.util import ClassNotFound

DEFAULT_STYLE_NAME = "monokai"

_CONTROL_RE = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f-\x9f]")
_SGR_RE = re.compile(r"\x1b\[[0-9;:]*m")

_FORMATTERS: dict[str, Terminal256Formatter] = {}
_VALID_STYLES: set[str] = set()
_INVALID_STYLES: set[str] = set()


def read_text(path: Path) -> str:
    for encoding in ("utf-8", "utf-8-sig", "latin-1"):
        try:
            return path.read_text(encoding=encoding)
        except UnicodeDecodeError:
            continue
    return path.read_bytes().decode("utf-8", errors="replace")


def _escape_controls(chunk: str) -> str:
    out: list[str] = []
    for ch in chunk:
        code = ord(ch)
        if ch in {"\n", "\r", "\t"}:
            out.append(ch)
            continue
        # C0 controls + DEL + C1 controls.
        if code < 32 or code == 127 or 0x80 <= code <= 0x9F:
            out.append(f"\\x{code:02x}")
            continue
        out.append(ch)
    return "".join(out)


def sanitize_terminal_text(source: str) -> str:
    """Escape terminal control bytes, keeping SGR color sequences intact."""
    if _CONTROL_RE.search(source) is None:
        return source

    out: list[str] = []
    cursor = 0
    for match in _SGR_RE.finditer(source):
        out.append(_escape_controls(source[cursor : match.start()]))
        out.append(match.group(0))
        cursor = match.end()
    out.append(_escape_controls(source[cursor:]))
    return "".join(out)


def has_sgr(text: str) -> bool:
    return _SGR_RE.search(text) is not None


def _normalize_style(style: str) -> str:
    if style in _VALID_STYLES:
        return style
    if style in _INVALID_STYLES:
        return DEFAULT_STYLE_NAME

    try:
        get_style_by_name(style)
    except ClassNotFound:
        _INVALID_STYLES.add(style)
        return DEFAULT_STYLE_NAME
    _VALID_STYLES.add(style)
    return style


def _formatter_for_style(style: str) -> Terminal256Formatter:
    formatter = _FORMATTERS.get(style)
    if formatter is not None:
        return formatter
    formatter = Terminal256Formatter(style=style)
    _FORMATTERS[style] = formatter
    return formatter


def pygments_highlight(source: str, path: Path, style: str = DEFAULT_STYLE_NAME) -> str:
    """Return ``source`` colored for a 256-color terminal.

    The lexer is picked from the file name; unknown file types are passed
    through the plain text lexer.
    """
    formatter = _formatter_for_style(_normalize_style(style))
    try:
        lexer = get_lexer_for_filename(path.name, source)
    except ClassNotFound:
        lexer = TextLexer()
    return _pygments_highlight(source, lexer, formatter)


def colorize_source(source: str, path: Path, style: str = DEFAULT_STYLE_NAME) -> str:
    """Highlight ``source`` unless it already carries its own ANSI colors."""
    if has_sgr(source):
        return source
    rendered = pygments_highlight(source, path, style)
    if not source.endswith("\n") and rendered.endswith("\n"):
        rendered = rendered[:-1]
    return rendered
