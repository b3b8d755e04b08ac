"""Overlay palettes and selection helpers.

A theme holds one overlay style per overlay kind. Syntax highlighting colors
come from the document itself; themes only decide how the pager decorates
them.
"""

from __future__ import annotations

from dataclasses import dataclass, replace

from .style import OverlayStyle, merge_overlays, overlay_from_dict


@dataclass(frozen=True)
class PagerTheme:
    """Overlay styles used by the renderers."""

    name: str
    body: OverlayStyle
    header: OverlayStyle
    alternate: OverlayStyle
    mark_line: OverlayStyle
    column_highlight: OverlayStyle
    search_highlight: OverlayStyle
    line_number: OverlayStyle
    selection: OverlayStyle


OVERLAY_NAMES: tuple[str, ...] = (
    "body",
    "header",
    "alternate",
    "mark_line",
    "column_highlight",
    "search_highlight",
    "line_number",
    "selection",
)


DEFAULT_THEME = PagerTheme(
    name="default",
    body=OverlayStyle(),
    header=OverlayStyle(bold=True),
    alternate=OverlayStyle(bg=236),
    mark_line=OverlayStyle(bg=136),
    column_highlight=OverlayStyle(reverse=True),
    search_highlight=OverlayStyle(reverse=True),
    line_number=OverlayStyle(bold=True),
    selection=OverlayStyle(reverse=True),
)

OCEAN_THEME = PagerTheme(
    name="ocean",
    body=OverlayStyle(),
    header=OverlayStyle(fg=45, bold=True, underline=True),
    alternate=OverlayStyle(bg=235),
    mark_line=OverlayStyle(bg=24),
    column_highlight=OverlayStyle(bg=31),
    search_highlight=OverlayStyle(fg=16, bg=153),
    line_number=OverlayStyle(fg=73),
    selection=OverlayStyle(reverse=True),
)

PLAIN_THEME = PagerTheme(
    name="plain",
    body=OverlayStyle(),
    header=OverlayStyle(bold=True),
    alternate=OverlayStyle(),
    mark_line=OverlayStyle(underline=True),
    column_highlight=OverlayStyle(reverse=True),
    search_highlight=OverlayStyle(reverse=True),
    line_number=OverlayStyle(),
    selection=OverlayStyle(reverse=True),
)

_THEMES: dict[str, PagerTheme] = {
    DEFAULT_THEME.name: DEFAULT_THEME,
    OCEAN_THEME.name: OCEAN_THEME,
}


def available_theme_names() -> tuple[str, ...]:
    """Return selectable non-plain theme names."""
    return tuple(sorted(_THEMES.keys()))


def normalize_theme_name(name: str | None) -> str:
    """Return a valid theme name, falling back to default."""
    if not name:
        return DEFAULT_THEME.name
    candidate = str(name).strip().lower()
    if candidate in _THEMES:
        return candidate
    return DEFAULT_THEME.name


def resolve_theme(name: str | None, *, no_color: bool = False) -> PagerTheme:
    """Return concrete theme for requested name and color mode."""
    if no_color:
        return PLAIN_THEME
    return _THEMES.get(normalize_theme_name(name), DEFAULT_THEME)


def theme_with_overrides(theme: PagerTheme, overrides: object) -> PagerTheme:
    """Layer user style overrides (``{"search_highlight": {...}}``) onto ``theme``."""
    if not isinstance(overrides, dict):
        return theme
    changes: dict[str, OverlayStyle] = {}
    for name in OVERLAY_NAMES:
        if name not in overrides:
            continue
        extra = overlay_from_dict(overrides[name])
        if not extra.is_empty():
            changes[name] = merge_overlays(getattr(theme, name), extra)
    if not changes:
        return theme
    return replace(theme, **changes)


__all__ = [
    "PagerTheme",
    "DEFAULT_THEME",
    "OCEAN_THEME",
    "PLAIN_THEME",
    "OVERLAY_NAMES",
    "available_theme_names",
    "normalize_theme_name",
    "resolve_theme",
    "theme_with_overrides",
]
