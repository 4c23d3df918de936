"""Tests for extent and alignment parsing and region placement."""

from __future__ import annotations

import unittest

from tez.tui.viewport import (
    Alignment,
    Area,
    Extent,
    ParseAlignmentError,
    ParseExtentError,
    Viewport,
)


class ExtentTests(unittest.TestCase):
    def test_parses_cells(self) -> None:
        self.assertEqual(Extent.parse("1"), Extent(1))
        self.assertEqual(Extent.parse("0"), Extent(0))
        self.assertEqual(Extent.parse("65535"), Extent(65535))

    def test_parses_percentages(self) -> None:
        for text in ("10%", "10.0%", "10 %"):
            with self.subTest(text=text):
                self.assertEqual(Extent.parse(text), Extent(0.1, percent=True))

    def test_rejects_malformed_text(self) -> None:
        for text in ("10.0", " 1 ", " 10% ", "", "%", "-5%", "inf%", "nan%", "65536", "1_000", "-1"):
            with self.subTest(text=text):
                with self.assertRaises(ParseExtentError):
                    Extent.parse(text)

    def test_from_cells_range(self) -> None:
        self.assertEqual(Extent.from_cells(20), Extent(20))
        for value in (-1, 65536, True):
            with self.subTest(value=value):
                with self.assertRaises(ParseExtentError):
                    Extent.from_cells(value)

    def test_cells_scales_percentages(self) -> None:
        self.assertEqual(Extent(12).cells(80), 12)
        self.assertEqual(Extent.parse("50%").cells(81), 40)
        self.assertEqual(Extent.parse("150%").cells(10), 15)

    def test_str(self) -> None:
        self.assertEqual(str(Extent.parse("40%")), "40%")
        self.assertEqual(str(Extent(7)), "7")


class AlignmentTests(unittest.TestCase):
    def test_parses_valid_forms(self) -> None:
        cases = {
            "left": Alignment(),
            "left(1)": Alignment("left", Extent(1)),
            "left ( 1 )": Alignment("left", Extent(1)),
            "center": Alignment("center"),
            "right": Alignment("right"),
            "right(1)": Alignment("right", Extent(1)),
            "right(10%)": Alignment("right", Extent(0.1, percent=True)),
        }
        for text, expected in cases.items():
            with self.subTest(text=text):
                self.assertEqual(Alignment.parse(text), expected)

    def test_rejects_malformed_text(self) -> None:
        for text in (" left ", " center ", "left ", "left(", "leftish", "center(1)", "left(1.5)", "middle", ""):
            with self.subTest(text=text):
                with self.assertRaises(ParseAlignmentError):
                    Alignment.parse(text)

    def test_str(self) -> None:
        self.assertEqual(str(Alignment()), "left")
        self.assertEqual(str(Alignment("right", Extent(2))), "right(2)")
        self.assertEqual(str(Alignment("center")), "center")


class ViewportTests(unittest.TestCase):
    def test_default_fills_terminal(self) -> None:
        viewport = Viewport()
        self.assertFalse(viewport.is_inline)
        self.assertIsNone(viewport.inline_height(24))
        self.assertEqual(viewport.area(80, 24), Area(0, 0, 80, 24))

    def test_area_placement(self) -> None:
        width = Extent(20)
        cases = [
            (Alignment(), 0),
            (Alignment("left", Extent(10)), 10),
            (Alignment("left", Extent(70)), 60),
            (Alignment("center"), 30),
            (Alignment("right"), 60),
            (Alignment("right", Extent(5)), 55),
            (Alignment("right", Extent(0.1, percent=True)), 52),
            (Alignment("right", Extent(90)), 0),
        ]
        for alignment, x in cases:
            with self.subTest(alignment=str(alignment)):
                area = Viewport(width=width, alignment=alignment).area(80, 24)
                self.assertEqual(area, Area(x, 0, 20, 24))

    def test_width_is_clamped_to_terminal(self) -> None:
        self.assertEqual(Viewport(width=Extent(200)).area(80, 24).width, 80)
        self.assertEqual(Viewport(width=Extent(0)).area(80, 24).width, 1)
        self.assertEqual(Viewport(width=Extent.parse("50%")).area(80, 24).width, 40)

    def test_inline_height_is_clamped(self) -> None:
        self.assertTrue(Viewport(height=Extent(5)).is_inline)
        self.assertEqual(Viewport(height=Extent(5)).inline_height(24), 5)
        self.assertEqual(Viewport(height=Extent(1)).inline_height(24), 3)
        self.assertEqual(Viewport(height=Extent(100)).inline_height(24), 23)
        self.assertEqual(Viewport(height=Extent.parse("50%")).inline_height(24), 12)
        self.assertEqual(Viewport(height=Extent(10)).inline_height(3), 2)
        self.assertEqual(Viewport(height=Extent(10)).inline_height(1), 1)
