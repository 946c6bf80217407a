"""Tests for affine transforms and bulge arcs."""

from __future__ import annotations

import math

import numpy as np
import pytest

from circuit_fab.errors import MalformedElementError
from circuit_fab.geom.arcs import RingVertex, bulge_arc_center_offset, reverse_ring, ring_from_soup
from circuit_fab.geom.transforms import (
    about,
    apply_to_point,
    apply_to_points,
    compose,
    identity,
    mirror_horizontal,
    rect_corners,
    rotate_degrees,
    rotate_offset,
    translate,
)


class TestTransforms:
    def test_identity(self) -> None:
        assert apply_to_point(identity(), (1.5, -2)) == (1.5, -2)

    def test_compose_applies_rightmost_first(self) -> None:
        matrix = compose(translate(1, 0), rotate_degrees(90))
        assert apply_to_point(matrix, (1, 0)) == pytest.approx((1, 1))

    def test_mirror_about_center(self) -> None:
        matrix = about((2, 0), mirror_horizontal())
        assert apply_to_point(matrix, (3, 5)) == pytest.approx((1, 5))

    def test_apply_to_points_empty(self) -> None:
        assert apply_to_points(identity(), []) == []

    def test_rotate_offset(self) -> None:
        assert rotate_offset(1, 0, 90) == pytest.approx((0, 1))
        assert rotate_offset(1, 2, 0) == (1, 2)

    def test_rect_corners(self) -> None:
        assert rect_corners((0, 0), 2, 1) == [(-1, 0.5), (1, 0.5), (1, -0.5), (-1, -0.5)]

    def test_rotated_rect_corners(self) -> None:
        corners = rect_corners((1, 1), 2, 2, 90)
        assert np.allclose(corners, [(0, 0), (0, 2), (2, 2), (2, 0)])


class TestBulgeArcs:
    def test_ccw_semicircle(self) -> None:
        assert bulge_arc_center_offset((0, 0), (2, 0), 1) == pytest.approx((1, 0))

    def test_cw_semicircle(self) -> None:
        assert bulge_arc_center_offset((2, 0), (0, 0), -1) == pytest.approx((-1, 0), abs=1e-12)

    def test_center_is_equidistant(self) -> None:
        start, end = (0.0, 0.0), (1.0, 1.0)
        i, j = bulge_arc_center_offset(start, end, math.tan(math.pi / 8))
        center = (start[0] + i, start[1] + j)
        assert math.dist(center, start) == pytest.approx(math.dist(center, end))
        assert math.dist(center, start) == pytest.approx(1.0)

    def test_degenerate_arcs(self) -> None:
        assert bulge_arc_center_offset((1, 1), (1, 1), 0.5) is None
        assert bulge_arc_center_offset((0, 0), (1, 0), 1e-12) is None


class TestRings:
    def test_ring_from_soup(self) -> None:
        ring = {"vertices": [{"x": 0, "y": 0, "bulge": 0.5}, {"x": 1, "y": 0}]}
        assert ring_from_soup({"type": "pcb_copper_pour"}, ring, "brep_shape.outer_ring") == [
            RingVertex(0, 0, 0.5),
            RingVertex(1, 0, None),
        ]

    @pytest.mark.parametrize(
        "ring",
        [None, {"vertices": "nope"}, {"vertices": [{"x": 0}]}, {"vertices": [{"x": 0, "y": 0, "bulge": "big"}]}],
    )
    def test_malformed_rings(self, ring: object) -> None:
        with pytest.raises(MalformedElementError, match="brep_shape"):
            ring_from_soup({"type": "pcb_copper_pour"}, ring, "brep_shape")

    def test_reverse_moves_bulges_to_segment_starts(self) -> None:
        ring = [RingVertex(0, 0, 1), RingVertex(2, 0), RingVertex(2, 2), RingVertex(0, 2)]
        assert reverse_ring(ring) == [
            RingVertex(0, 2),
            RingVertex(2, 2),
            RingVertex(2, 0, -1),
            RingVertex(0, 0),
        ]

    def test_reverse_twice_is_identity(self) -> None:
        ring = [RingVertex(0, 0, 0.3), RingVertex(2, 0, -0.2), RingVertex(1, 2)]
        assert reverse_ring(reverse_ring(ring)) == ring

    def test_reverse_empty(self) -> None:
        assert reverse_ring([]) == []

    def test_has_arc(self) -> None:
        assert RingVertex(0, 0, 0.1).has_arc
        assert not RingVertex(0, 0, 0).has_arc
        assert not RingVertex(0, 0).has_arc
