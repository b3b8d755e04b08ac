"""Tests for the in-memory cell grid and its ANSI repaint."""

from __future__ import annotations

import unittest
from unittest import mock

from lazypager.content import DEFAULT_CELL, parse_contents
from lazypager.screen import CellScreen
from lazypager.style import Style


class CellScreenTests(unittest.TestCase):
    def test_out_of_bounds_writes_are_ignored(self) -> None:
        screen = CellScreen(3, 2)
        screen.set_content(5, 0, "x")
        screen.set_content(0, -1, "x")
        self.assertEqual(screen.row_text(0), "   ")
        self.assertEqual(screen.get_content(9, 9), DEFAULT_CELL)

    def test_set_and_get_content(self) -> None:
        screen = CellScreen(3, 1)
        style = Style(fg=2)
        screen.set_content(1, 0, "e", ("\u0301",), style)
        cell = screen.get_content(1, 0)
        self.assertEqual(cell.mainc, "e")
        self.assertEqual(cell.combc, ("\u0301",))
        self.assertEqual(cell.style, style)

    def test_row_text_skips_wide_fillers(self) -> None:
        screen = CellScreen(5, 1)
        screen.put_contents(0, 0, parse_contents("漢a"))
        self.assertEqual(screen.row_text(0), "漢a  ")

    def test_row_text_keeps_marks_on_tabs(self) -> None:
        screen = CellScreen(6, 1)
        screen.put_contents(0, 0, parse_contents("\t\u0301x", 4))
        self.assertEqual(screen.row_text(0), " \u0301   x ")

    def test_clear_and_resize(self) -> None:
        screen = CellScreen(2, 1)
        screen.set_content(0, 0, "x")
        screen.show_cursor(1, 0)
        screen.clear()
        self.assertEqual(screen.row_text(0), "  ")
        self.assertIsNone(screen.cursor)

        screen.resize(4, 2)
        self.assertEqual(screen.size(), (4, 2))
        self.assertEqual(screen.row_text(1), "    ")

    def test_render_ansi_frame(self) -> None:
        screen = CellScreen(2, 2)
        screen.set_content(0, 0, "a", style=Style(fg=1))
        screen.show_cursor(1, 1)
        frame = screen.render_ansi()
        self.assertTrue(frame.startswith("\033[H\033[J"))
        self.assertIn("\033[0;31ma", frame)
        self.assertIn("\r\n", frame)
        self.assertTrue(frame.endswith("\033[2;2H\033[?25h"))

    def test_render_ansi_hides_cursor_when_unset(self) -> None:
        self.assertTrue(CellScreen(1, 1).render_ansi().endswith("\033[?25l"))

    def test_show_writes_frame_to_fd(self) -> None:
        screen = CellScreen(2, 1, out_fd=1)
        screen.set_content(0, 0, "z")
        writes: list[bytes] = []

        def capture(_fd: int, data: bytes) -> int:
            writes.append(data)
            return len(data)

        with mock.patch("lazypager.screen.os.write", side_effect=capture):
            screen.show()

        self.assertEqual(len(writes), 1)
        self.assertIn(b"z", writes[0])


if __name__ == "__main__":
    unittest.main()
