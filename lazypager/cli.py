"""Command-line front door for lazypager.

Parses CLI options, loads the target file into a document, applies the
requested view modes and renders a single frame to the terminal.
"""

from __future__ import annotations

import argparse
import logging
import shutil
import sys
from pathlib import Path

from . import config
from .document import Document
from .input import SearchFlags
from .render import FrameRenderer
from .screen import CellScreen
from .state import ScrollState, ViewerState
from .theme import available_theme_names, resolve_theme, theme_with_overrides


def _positive_int(value: str) -> int:
    """argparse type for positive integer values."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError("value must be >= 1")
    return parsed


def _nonnegative_int(value: str) -> int:
    """argparse type for integer values >= 0."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed < 0:
        raise argparse.ArgumentTypeError("value must be >= 0")
    return parsed


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Render a file as one pager screen.")
    parser.add_argument("path", help="Path to the file to show.")
    parser.add_argument("--wrap", dest="wrap", action="store_true", default=True, help="Wrap long lines (default).")
    parser.add_argument("--no-wrap", dest="wrap", action="store_false", help="Scroll long lines horizontally.")
    parser.add_argument("--line-numbers", action="store_true", help="Show the line-number gutter.")
    parser.add_argument("--alternate-rows", action="store_true", help="Style every other line.")
    parser.add_argument("--header", type=_nonnegative_int, default=0, help="Number of header lines.")
    parser.add_argument("--skip-lines", type=_nonnegative_int, default=0, help="Lines hidden before the header.")
    parser.add_argument("--column-delimiter", default=None, help="Enable column mode with this delimiter.")
    parser.add_argument("--column", type=_nonnegative_int, default=0, help="Highlighted column (0-based).")
    parser.add_argument("--search", default="", help="Highlight matches of this word.")
    parser.add_argument("--regexp", action="store_true", default=None, help="Treat --search as a regular expression.")
    parser.add_argument(
        "--case-sensitive",
        action="store_true",
        default=None,
        help="Match --search case-sensitively.",
    )
    parser.add_argument(
        "--mark",
        type=_nonnegative_int,
        action="append",
        default=[],
        help="Mark a logical line (repeatable).",
    )
    parser.add_argument("--top", type=_nonnegative_int, default=0, help="First body line (0-based).")
    parser.add_argument("--left", type=_nonnegative_int, default=0, help="Horizontal scroll offset.")
    parser.add_argument("--tab-width", type=_positive_int, default=None, help="Tab stop width.")
    parser.add_argument("--style", default="monokai", help="Pygments style name.")
    parser.add_argument(
        "--theme",
        default=None,
        help=f"UI theme name ({', '.join(available_theme_names())}).",
    )
    parser.add_argument("--no-color", action="store_true", help="Disable colors and syntax highlighting.")
    parser.add_argument("--width", type=_positive_int, default=None, help="Frame width (default: terminal).")
    parser.add_argument("--height", type=_positive_int, default=None, help="Frame height (default: terminal).")
    parser.add_argument("--plain", action="store_true", help="Print frame rows as plain text.")
    parser.add_argument("--log-file", default=None, help="Write warnings to this file.")
    return parser


def build_state(args: argparse.Namespace, general: config.GeneralConfig) -> ViewerState:
    path = Path(args.path)
    document = Document.from_path(path, highlight=not args.no_color, style=args.style)
    document.tab_width = args.tab_width if args.tab_width is not None else general.tab_width
    document.wrap_mode = args.wrap
    document.line_num_mode = args.line_numbers
    document.alternate_rows = args.alternate_rows
    document.header = args.header
    document.skip_lines = args.skip_lines
    if args.column_delimiter:
        document.column_mode = True
        document.column_delimiter = args.column_delimiter
        document.column_num = args.column
    document.marked = set(args.mark)
    document.scroll = ScrollState(top_ln=args.top, top_lx=0, x=args.left)

    flags = SearchFlags(
        regexp_search=general.regexp_search if args.regexp is None else args.regexp,
        incsearch=general.incsearch,
        case_sensitive=general.case_sensitive if args.case_sensitive is None else args.case_sensitive,
    )
    return ViewerState(documents=[document], search_word=args.search, search_flags=flags)


def main(argv: list[str] | None = None) -> None:
    """Parse CLI arguments and render one frame of the requested file."""
    args = build_parser().parse_args(argv)

    path = Path(args.path)
    if not path.is_file():
        raise SystemExit(f"Path not found: {path}")

    if args.log_file:
        logging.basicConfig(
            filename=args.log_file,
            level=logging.WARNING,
            format="%(asctime)s %(name)s %(levelname)s %(message)s",
        )

    general = config.load_general()
    theme = resolve_theme(args.theme or general.theme, no_color=args.no_color)
    theme = theme_with_overrides(theme, config.load_style_overrides())

    term = shutil.get_terminal_size((80, 24))
    width = args.width if args.width is not None else max(1, term.columns)
    height = args.height if args.height is not None else max(1, term.lines)

    state = build_state(args, general)
    screen = CellScreen(width, height)
    renderer = FrameRenderer(screen, theme, general)
    if args.plain:
        renderer.draw(state, flush=False)
        rows = [screen.row_text(y).rstrip() for y in range(screen.height)]
        sys.stdout.write("\n".join(rows) + "\n")
        return
    renderer.draw(state)
    sys.stdout.flush()


if __name__ == "__main__":
    main()
