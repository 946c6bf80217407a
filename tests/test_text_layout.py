"""Tests for silkscreen text alignment and stroke layout."""

from __future__ import annotations

import pytest

from circuit_fab.geom.alphabet import LINE_ALPHABET, glyph_segments
from circuit_fab.geom.text import (
    TextAlignment,
    TextMetrics,
    anchored_text_start,
    layout_text,
    resolve_alignment,
)


class TestResolveAlignment:
    """anchor_alignment wins over anchor_side, which wins over the centre default."""

    def test_anchor_alignment_takes_precedence(self) -> None:
        assert resolve_alignment("top_left", "bottom") is TextAlignment.TOP_LEFT

    @pytest.mark.parametrize(
        ("side", "expected"),
        [
            ("top", TextAlignment.TOP_CENTER),
            ("bottom", TextAlignment.BOTTOM_CENTER),
            ("left", TextAlignment.CENTER_LEFT),
            ("right", TextAlignment.CENTER_RIGHT),
        ],
    )
    def test_anchor_side(self, side: str, expected: TextAlignment) -> None:
        assert resolve_alignment(None, side) is expected

    def test_default_is_center(self) -> None:
        assert resolve_alignment(None, None) is TextAlignment.CENTER

    @pytest.mark.parametrize(("alignment", "side"), [("middle", None), (None, "up")])
    def test_unknown_values_raise(self, alignment: str | None, side: str | None) -> None:
        with pytest.raises(ValueError):
            resolve_alignment(alignment, side)

    def test_alignment_parts(self) -> None:
        assert TextAlignment.CENTER.vertical == "center"
        assert TextAlignment.CENTER.horizontal == "center"
        assert TextAlignment.BOTTOM_RIGHT.vertical == "bottom"
        assert TextAlignment.BOTTOM_RIGHT.horizontal == "right"


class TestAnchoredTextStart:
    """Lower-left corner of a 6 x 2 box anchored at (10, 20)."""

    @pytest.mark.parametrize(
        ("alignment", "expected"),
        [
            (TextAlignment.CENTER, (7, 19)),
            (TextAlignment.TOP_LEFT, (10, 18)),
            (TextAlignment.TOP_CENTER, (7, 18)),
            (TextAlignment.TOP_RIGHT, (4, 18)),
            (TextAlignment.CENTER_LEFT, (10, 19)),
            (TextAlignment.CENTER_RIGHT, (4, 19)),
            (TextAlignment.BOTTOM_LEFT, (10, 20)),
            (TextAlignment.BOTTOM_CENTER, (7, 20)),
            (TextAlignment.BOTTOM_RIGHT, (4, 20)),
        ],
    )
    def test_start(self, alignment: TextAlignment, expected: tuple[float, float]) -> None:
        assert anchored_text_start((10, 20), alignment, 6, 2) == expected


class TestMetrics:
    def test_derived_from_cap_height(self) -> None:
        metrics = TextMetrics.from_font_size(1)
        assert metrics.cap_height == pytest.approx(0.7)
        assert metrics.letter_spacing == pytest.approx(0.28)
        assert metrics.space_width == pytest.approx(0.35)

    def test_measure_excludes_trailing_spacing(self) -> None:
        metrics = TextMetrics.from_font_size(1)
        width, height = metrics.measure("AB")
        assert width == pytest.approx(0.7 * 2 + 0.28)
        assert height == pytest.approx(0.7)

    def test_space_advance(self) -> None:
        metrics = TextMetrics.from_font_size(1)
        assert metrics.advance(" ") == pytest.approx(0.35 + 0.28)


class TestLayout:
    def test_dash_at_bottom_left(self) -> None:
        strokes = layout_text("-", font_size=1, anchor=(0, 0), alignment=TextAlignment.BOTTOM_LEFT)
        assert len(strokes) == 1
        (x1, y1), (x2, y2) = strokes[0]
        assert (x1, y1) == pytest.approx((0.0875, 0.35))
        assert (x2, y2) == pytest.approx((0.6125, 0.35))

    def test_mirror_flips_horizontally_about_the_box_centre(self) -> None:
        strokes = layout_text("-", font_size=1, anchor=(0, 0), alignment=TextAlignment.BOTTOM_LEFT, mirror=True)
        (x1, y1), (x2, y2) = strokes[0]
        assert (x1, y1) == pytest.approx((0.6125, 0.35))
        assert (x2, y2) == pytest.approx((0.0875, 0.35))

    def test_rotation_about_box_centre(self) -> None:
        strokes = layout_text("-", font_size=1, anchor=(0, 0), alignment=TextAlignment.CENTER, ccw_rotation=90)
        (x1, y1), (x2, y2) = strokes[0]
        assert x1 == pytest.approx(0) and x2 == pytest.approx(0)
        assert abs(y2 - y1) == pytest.approx(0.525)

    def test_lowercase_is_uppercased(self) -> None:
        lower = layout_text("ab", font_size=2, anchor=(1, 1))
        upper = layout_text("AB", font_size=2, anchor=(1, 1))
        assert lower == upper

    def test_unknown_glyph_advances_without_strokes(self) -> None:
        strokes = layout_text("~-", font_size=1, anchor=(0, 0), alignment=TextAlignment.BOTTOM_LEFT)
        assert len(strokes) == 1
        assert strokes[0][0][0] == pytest.approx(0.98 + 0.0875)

    def test_space_draws_nothing(self) -> None:
        assert layout_text(" ", font_size=1, anchor=(0, 0)) == []


class TestAlphabet:
    def test_letters_and_digits_have_glyphs(self) -> None:
        for char in "ABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789":
            assert glyph_segments(char), char

    def test_glyphs_stay_near_the_unit_box(self) -> None:
        for char, segments in LINE_ALPHABET.items():
            for seg in segments:
                for value in (seg.x1, seg.y1, seg.x2, seg.y2):
                    assert -0.25 <= value <= 1.0, char

    def test_missing_glyph_is_empty(self) -> None:
        assert glyph_segments("~") == ()
