"""Header and body row rendering: row map, gutter and per-line caching."""

from __future__ import annotations

import unittest
from dataclasses import replace
from unittest import mock

from lazypager.document import Document
from lazypager.render.body import initial_wrap_segment, line_number_contents, render_body
from lazypager.render.frame import build_viewport
from lazypager.render.header import render_header
from lazypager.render.layout import WrapLayout, select_layout
from lazypager.render.overlay import OverlayResolver
from lazypager.screen import CellScreen
from lazypager.state import EMPTY_ROW, LineNumber, Viewport
from lazypager.style import OverlayStyle
from lazypager.theme import DEFAULT_THEME


def _render(document: Document, width: int, height: int, top_ln: int = 0, lx: int = 0, theme=DEFAULT_THEME):
    screen = CellScreen(width, height)
    viewport = build_viewport(document, width, height)
    layout = select_layout(document.wrap_mode, viewport)
    resolver = OverlayResolver(theme, document, None, width, 1)
    row_map = [EMPTY_ROW] * height
    ly, header_rows = render_header(screen, document, viewport, layout, resolver, row_map, 0)
    end = render_body(screen, document, viewport, layout, resolver, row_map, top_ln, lx, ly, header_rows)
    return screen, row_map, end, header_rows


LONG = "abcdefghijklmnopqrstuvwxy"


class BodyRowTests(unittest.TestCase):
    def test_row_map_follows_wrap_segments(self) -> None:
        doc = Document([LONG, "short", "x"])
        screen, row_map, end, _ = _render(doc, 10, 7)
        self.assertEqual(
            row_map,
            [
                LineNumber(0, 0),
                LineNumber(0, 1),
                LineNumber(0, 2),
                LineNumber(1, 0),
                LineNumber(2, 0),
                EMPTY_ROW,
                EMPTY_ROW,
            ],
        )
        self.assertEqual(end, (0, 4))
        self.assertEqual(screen.row_text(1), "klmnopqrst")
        self.assertEqual(screen.row_text(2), "uvwxy     ")

    def test_start_inside_wrapped_line(self) -> None:
        doc = Document([LONG, "short", "x"])
        screen, row_map, _, _ = _render(doc, 10, 6, lx=10)
        self.assertEqual(row_map[:4], [LineNumber(0, 1), LineNumber(0, 2), LineNumber(1, 0), LineNumber(2, 0)])
        self.assertEqual(screen.row_text(0), "klmnopqrst")

    def test_wrapped_line_is_expanded_once(self) -> None:
        doc = Document([LONG, "short", "x"])
        with mock.patch.object(doc, "get_contents", wraps=doc.get_contents) as get_contents:
            _render(doc, 10, 6)
        self.assertEqual([c.args[0] for c in get_contents.call_args_list], [0, 1, 2])

    def test_no_wrap_shows_one_row_per_line(self) -> None:
        doc = Document([LONG, "short", "x"])
        doc.wrap_mode = False
        screen, row_map, end, _ = _render(doc, 10, 6, lx=2)
        self.assertEqual(row_map, [LineNumber(0, 0), LineNumber(1, 0), LineNumber(2, 0), EMPTY_ROW, EMPTY_ROW, EMPTY_ROW])
        self.assertEqual(screen.row_text(0), "cdefghijkl")
        self.assertEqual(screen.row_text(1), "ort       ")
        self.assertEqual(end, (2, 5))

    def test_rows_past_end_of_buffer_are_blank(self) -> None:
        doc = Document(["a"])
        screen, row_map, _, _ = _render(doc, 4, 4, top_ln=3)
        self.assertEqual(row_map[:3], [EMPTY_ROW] * 3)
        self.assertEqual(screen.row_text(0), "    ")

    def test_line_numbers_only_on_first_segment(self) -> None:
        doc = Document([LONG, "b", "c"])
        doc.line_num_mode = True
        screen, row_map, _, _ = _render(doc, 10, 7)
        self.assertEqual(screen.row_text(0), "1 abcdefgh")
        self.assertEqual(screen.row_text(1), "  ijklmnop")
        self.assertEqual(screen.row_text(4), "2 b       ")
        self.assertTrue(screen.get_content(0, 0).style.bold)
        self.assertEqual(row_map[3], LineNumber(0, 3))

    def test_line_number_contents(self) -> None:
        cells = line_number_contents(7, 3, OverlayStyle(bold=True))
        self.assertEqual("".join(cell.mainc for cell in cells), "  7")
        self.assertTrue(all(cell.style.bold for cell in cells))
        self.assertEqual("".join(cell.mainc for cell in line_number_contents(None, 2, OverlayStyle())), "  ")

    def test_initial_wrap_segment_for_missing_line(self) -> None:
        doc = Document(["abc"])
        layout = WrapLayout(Viewport(width=10, height=3))
        with self.assertLogs("lazypager.render.body", level="WARNING"):
            self.assertEqual(initial_wrap_segment(doc, layout, 9, 5), 0)

    def test_body_overlay_is_applied_to_every_line(self) -> None:
        theme = replace(DEFAULT_THEME, body=OverlayStyle(fg=2))
        doc = Document(["ab"])
        screen, _, _, _ = _render(doc, 4, 2, theme=theme)
        self.assertEqual(screen.get_content(0, 0).style.fg, 2)
        self.assertIsNone(screen.get_content(3, 0).style.fg)


class HeaderRowTests(unittest.TestCase):
    def setUp(self) -> None:
        self.doc = Document(["H1", "H2", "b1", "b2", "b3"])
        self.doc.header = 2

    def test_header_rows_stay_while_body_scrolls(self) -> None:
        screen, row_map, _, header_rows = _render(self.doc, 6, 5, top_ln=1)
        self.assertEqual(header_rows, 2)
        self.assertEqual([screen.row_text(y).rstrip() for y in range(4)], ["H1", "H2", "b2", "b3"])
        self.assertEqual(row_map[:4], [LineNumber(0), LineNumber(1), LineNumber(3), LineNumber(4)])

    def test_header_style_covers_full_row(self) -> None:
        screen, _, _, _ = _render(self.doc, 6, 5)
        self.assertTrue(all(style.bold for style in screen.row_styles(0)))
        self.assertFalse(any(style.bold for style in screen.row_styles(2)))

    def test_header_overrides_conflicting_content_overlay(self) -> None:
        theme = replace(DEFAULT_THEME, column_highlight=OverlayStyle(bg=1), header=OverlayStyle(bg=4))
        self.doc.column_mode = True
        screen, _, _, _ = _render(self.doc, 6, 5, theme=theme)
        self.assertEqual([style.bg for style in screen.row_styles(0)], [4] * 6)
        self.assertEqual(screen.get_content(0, 2).style.bg, 1)

    def test_skipped_lines_are_hidden(self) -> None:
        self.doc.skip_lines = 1
        self.doc.header = 1
        screen, row_map, _, header_rows = _render(self.doc, 6, 4)
        self.assertEqual(header_rows, 1)
        self.assertEqual(screen.row_text(0).rstrip(), "H2")
        self.assertEqual(screen.row_text(1).rstrip(), "b1")
        self.assertEqual(row_map[0], LineNumber(1))

    def test_header_gutter_is_blank_and_body_numbers_restart(self) -> None:
        self.doc.line_num_mode = True
        screen, _, _, _ = _render(self.doc, 6, 5)
        self.assertEqual(screen.row_text(0), "  H1  ")
        self.assertEqual(screen.row_text(2), "1 b1  ")

    def test_wrapped_header_line_uses_extra_rows(self) -> None:
        doc = Document(["header-line", "body"])
        doc.header = 1
        screen, row_map, _, header_rows = _render(doc, 6, 5)
        self.assertEqual(header_rows, 2)
        self.assertEqual(row_map[:3], [LineNumber(0, 0), LineNumber(0, 1), LineNumber(1, 0)])
        self.assertTrue(all(style.bold for style in screen.row_styles(1)))

    def test_header_is_cut_at_usable_rows(self) -> None:
        self.doc.header = 4
        _, _, _, header_rows = _render(self.doc, 6, 3)
        self.assertEqual(header_rows, 2)


if __name__ == "__main__":
    unittest.main()
