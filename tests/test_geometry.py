"""Tests for the polygon primitives and the trapezoid model.

Validates:
  - Ray-casting containment, including the inclusive boundary rule
  - Point-to-segment distance with projection clamping
  - Trapezoid vertex layout, margin region and validation
"""

from __future__ import annotations

import math
import unittest

from sheetpack.geometry import (
    GeometryError,
    InvalidDimensions,
    Trapezoid,
    TrapezoidSpec,
    compute_trapezoid,
    distance_to_boundary,
    distance_to_segment,
    point_in_polygon,
    polygon_area,
    polygon_bounds,
    polygon_centroid,
    validate_trapezoid,
)
from sheetpack.geometry.polygon import expand_bounds


SQUARE = [(0.0, 0.0), (10.0, 0.0), (10.0, 10.0), (0.0, 10.0)]


class TestPointInPolygon(unittest.TestCase):

    def test_inside(self):
        self.assertTrue(point_in_polygon(5, 5, SQUARE))

    def test_outside(self):
        self.assertFalse(point_in_polygon(15, 5, SQUARE))
        self.assertFalse(point_in_polygon(5, -0.01, SQUARE))

    def test_on_edge_is_inside(self):
        self.assertTrue(point_in_polygon(0, 5, SQUARE))
        self.assertTrue(point_in_polygon(10, 5, SQUARE))
        self.assertTrue(point_in_polygon(5, 10, SQUARE))

    def test_vertices_are_inside(self):
        for x, y in SQUARE:
            self.assertTrue(point_in_polygon(x, y, SQUARE), (x, y))

    def test_float_noise_on_edge(self):
        """A hair outside the edge still counts as on it."""
        self.assertTrue(point_in_polygon(10.0 + 1e-12, 5, SQUARE))
        self.assertFalse(point_in_polygon(10.001, 5, SQUARE))

    def test_slanted_edge(self):
        tri = [(0.0, 0.0), (10.0, 0.0), (0.0, 10.0)]
        self.assertTrue(point_in_polygon(5, 5, tri))      # on hypotenuse
        self.assertTrue(point_in_polygon(2, 2, tri))
        self.assertFalse(point_in_polygon(6, 6, tri))


class TestSegmentDistance(unittest.TestCase):

    def test_point_on_segment(self):
        self.assertEqual(distance_to_segment(0, 5, (0, 0), (0, 10)), 0.0)

    def test_clamps_to_endpoint(self):
        self.assertAlmostEqual(distance_to_segment(5, -5, (0, 0), (10, 0)), 5.0)
        self.assertAlmostEqual(distance_to_segment(15, 0, (0, 0), (10, 0)), 5.0)
        self.assertAlmostEqual(distance_to_segment(-3, 4, (0, 0), (10, 0)), 5.0)

    def test_perpendicular(self):
        self.assertAlmostEqual(distance_to_segment(5, 3, (0, 0), (10, 0)), 3.0)

    def test_zero_length_segment(self):
        self.assertAlmostEqual(distance_to_segment(3, 4, (0, 0), (0, 0)), 5.0)

    def test_distance_to_boundary(self):
        self.assertAlmostEqual(distance_to_boundary(12, 5, SQUARE), 2.0)
        self.assertAlmostEqual(distance_to_boundary(5, 4, SQUARE), 4.0)
        self.assertAlmostEqual(distance_to_boundary(13, 14, SQUARE), 5.0)


class TestPolygonHelpers(unittest.TestCase):

    def test_area_and_winding(self):
        self.assertAlmostEqual(polygon_area(SQUARE), 100.0)
        self.assertAlmostEqual(polygon_area(list(reversed(SQUARE))), -100.0)

    def test_centroid(self):
        cx, cy = polygon_centroid(SQUARE)
        self.assertAlmostEqual(cx, 5.0)
        self.assertAlmostEqual(cy, 5.0)

    def test_bounds(self):
        self.assertEqual(polygon_bounds(SQUARE), (0.0, 0.0, 10.0, 10.0))

    def test_expand_bounds(self):
        self.assertEqual(
            expand_bounds(polygon_bounds(SQUARE), 0.5), (-0.5, -0.5, 10.5, 10.5),
        )
        with self.assertRaises(TypeError):
            expand_bounds(polygon_bounds(SQUARE), 0.5, 2.0)


class TestTrapezoid(unittest.TestCase):

    def test_vertex_order_and_region(self):
        trap = compute_trapezoid(
            TrapezoidSpec(bottom_base=100, top_base=60, height=50, vertical_margin=2),
            min_base_difference=5,
        )
        self.assertIsInstance(trap, Trapezoid)
        self.assertEqual(
            trap.polygon,
            ((-50.0, 0.0), (50.0, 0.0), (30.0, 50.0), (-30.0, 50.0)),
        )
        self.assertEqual(trap.region, (-50.0, -2.0, 50.0, 52.0))
        self.assertAlmostEqual(trap.area, 4000.0)

    def test_margin_does_not_change_outline(self):
        a = compute_trapezoid(TrapezoidSpec(80, 40, 30, 1), min_base_difference=5)
        b = compute_trapezoid(TrapezoidSpec(80, 40, 30, 9), min_base_difference=5)
        self.assertEqual(a.polygon, b.polygon)
        self.assertLess(b.region[1], a.region[1])
        self.assertGreater(b.region[3], a.region[3])

    def test_centroid_inside(self):
        """Every valid trapezoid contains its own centroid."""
        specs = [
            TrapezoidSpec(100, 60, 50, 2),
            TrapezoidSpec(60, 100, 50, 2),     # wider at the top
            TrapezoidSpec(20, 1, 300, 0.5),    # tall and nearly triangular
            TrapezoidSpec(500, 494, 3, 10),    # flat
        ]
        for spec in specs:
            trap = compute_trapezoid(spec, min_base_difference=5)
            cx, cy = trap.centroid
            self.assertTrue(point_in_polygon(cx, cy, trap.polygon), spec)
            self.assertGreater(polygon_area(trap.polygon), 0, "expected CCW order")

    def test_base_difference_floor(self):
        with self.assertRaises(InvalidDimensions) as ctx:
            compute_trapezoid(TrapezoidSpec(100, 98, 50, 2), min_base_difference=5)
        self.assertEqual(len(ctx.exception.errors), 1)
        self.assertIn("differ", ctx.exception.errors[0])

    def test_base_difference_boundary_is_valid(self):
        trap = compute_trapezoid(TrapezoidSpec(100, 95, 50, 2), min_base_difference=5)
        self.assertEqual(len(trap.polygon), 4)

    def test_non_positive_dimensions(self):
        for spec in (
            TrapezoidSpec(0, 60, 50, 2),
            TrapezoidSpec(100, -60, 50, 2),
            TrapezoidSpec(100, 60, 0, 2),
            TrapezoidSpec(100, 60, 50, 0),
            TrapezoidSpec(100, 60, math.nan, 2),
            TrapezoidSpec(math.inf, 60, 50, 2),
            TrapezoidSpec(100, math.inf, 50, 2),
            TrapezoidSpec(100, 60, math.inf, 2),
            TrapezoidSpec(100, 60, 50, math.inf),
        ):
            with self.assertRaises(GeometryError):
                compute_trapezoid(spec, min_base_difference=5)

    def test_infinite_margin_reported(self):
        errors = validate_trapezoid(TrapezoidSpec(100, 60, 50, math.inf), min_base_difference=5)
        self.assertEqual(len(errors), 1)
        self.assertIn("vertical_margin", errors[0])

    def test_validate_collects_all_errors(self):
        errors = validate_trapezoid(TrapezoidSpec(10, 10, -1, 2), min_base_difference=5)
        self.assertEqual(len(errors), 2)
        self.assertTrue(any("height" in e for e in errors))
        self.assertEqual(validate_trapezoid(TrapezoidSpec(10, 4, 1, 1), 5), [])


if __name__ == "__main__":
    unittest.main()
