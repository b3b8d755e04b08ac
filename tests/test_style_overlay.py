"""Style composition and SGR encoding tests.

Overlays must compose attribute-by-attribute so stacked highlights never
erase each other, and composition must not depend on grouping.
"""

from __future__ import annotations

import unittest

from lazypager.style import (
    DEFAULT_STYLE,
    OverlayStyle,
    Style,
    apply_style,
    merge_overlays,
    overlay_from_dict,
    parse_color,
)


class ApplyStyleTests(unittest.TestCase):
    def test_overlay_wins_only_on_attributes_it_sets(self) -> None:
        base = Style(fg=1, bold=True)
        result = apply_style(base, OverlayStyle(fg=4))
        self.assertEqual(result, Style(fg=4, bold=True))

    def test_overlay_can_switch_attribute_off(self) -> None:
        result = apply_style(Style(bold=True, underline=True), OverlayStyle(bold=False))
        self.assertEqual(result, Style(underline=True))

    def test_empty_overlay_returns_base_unchanged(self) -> None:
        base = Style(bg=3)
        self.assertIs(apply_style(base, OverlayStyle()), base)

    def test_default_color_resets_to_terminal_default(self) -> None:
        result = apply_style(Style(fg=3, bg=4), OverlayStyle(fg="default"))
        self.assertIsNone(result.fg)
        self.assertEqual(result.bg, 4)

    def test_composition_is_associative(self) -> None:
        base = Style(fg=7, italic=True)
        first = OverlayStyle(fg=2, bold=True)
        second = OverlayStyle(bg=3, bold=False, reverse=True)
        stepwise = apply_style(apply_style(base, first), second)
        merged = apply_style(base, merge_overlays(first, second))
        self.assertEqual(stepwise, merged)
        self.assertEqual(stepwise, Style(fg=2, bg=3, italic=True, reverse=True))

    def test_base_style_is_not_mutated(self) -> None:
        base = Style(fg=1)
        apply_style(base, OverlayStyle(fg=2, reverse=True))
        self.assertEqual(base, Style(fg=1))


class SgrTests(unittest.TestCase):
    def test_default_style_is_plain_reset(self) -> None:
        self.assertEqual(DEFAULT_STYLE.sgr(), "\033[0m")

    def test_basic_and_bright_palette_colors(self) -> None:
        self.assertEqual(Style(fg=1, bold=True).sgr(), "\033[0;1;31m")
        self.assertEqual(Style(fg=9, bg=12).sgr(), "\033[0;91;104m")

    def test_extended_and_truecolor(self) -> None:
        self.assertEqual(Style(fg=200, bg="#0a0b0c").sgr(), "\033[0;38;5;200;48;2;10;11;12m")

    def test_reverse_attribute(self) -> None:
        self.assertEqual(Style(reverse=True).sgr(), "\033[0;7m")


class OverlayConfigTests(unittest.TestCase):
    def test_overlay_from_dict_keeps_valid_fields_only(self) -> None:
        overlay = overlay_from_dict(
            {
                "foreground": "Red",
                "background": "#FFAA00",
                "bold": True,
                "underline": "yes",
                "bogus": 1,
            }
        )
        self.assertEqual(overlay, OverlayStyle(fg=1, bg="#ffaa00", bold=True))

    def test_overlay_from_non_mapping_is_empty(self) -> None:
        self.assertTrue(overlay_from_dict(["bold"]).is_empty())

    def test_parse_color_rejects_invalid_values(self) -> None:
        self.assertIsNone(parse_color(True))
        self.assertIsNone(parse_color(300))
        self.assertIsNone(parse_color("not-a-color"))
        self.assertEqual(parse_color(42), 42)
        self.assertEqual(parse_color("default"), "default")


if __name__ == "__main__":
    unittest.main()
