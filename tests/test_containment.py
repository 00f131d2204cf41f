"""Tests for whole-region containment."""

import math

import pytest
from shapely.geometry import Point, Polygon as ShapelyPolygon

from plantwin import Region, Vertex
from plantwin.analysis import ContainmentTester, GeometryUtils

L_SHAPE = [(0, 0), (20, 0), (20, 10), (10, 10), (10, 20), (0, 20)]


def octagon(cx=50.0, cy=50.0, radius=40.0):
    return [
        (cx + radius * math.cos(k * math.pi / 4), cy + radius * math.sin(k * math.pi / 4))
        for k in range(8)
    ]


def scaled(points, factor):
    cx = sum(p[0] for p in points) / len(points)
    cy = sum(p[1] for p in points) / len(points)
    return [(cx + factor * (x - cx), cy + factor * (y - cy)) for x, y in points]


class TestContainmentTester:

    def test_region_well_inside(self, boundary, rect):
        assert ContainmentTester().contains(boundary, rect(10, 10, 30, 20))

    def test_region_entirely_outside(self, boundary, rect):
        assert not ContainmentTester().contains(boundary, rect(150, 150, 170, 170))

    def test_partial_overlap_is_outside(self, boundary, rect):
        assert not ContainmentTester().contains(boundary, rect(90, 90, 110, 110))

    def test_shared_lower_left_edges_count_as_inside(self, boundary, rect):
        assert ContainmentTester().contains(boundary, rect(0, 0, 50, 50))

    def test_right_edge_counts_as_outside(self, boundary, rect):
        assert not ContainmentTester().contains(boundary, rect(50, 10, 100, 20))

    def test_empty_candidate(self, boundary):
        assert not ContainmentTester().contains(boundary, Region())

    def test_degenerate_boundary(self, rect):
        line = Region(vertices=[(0, 0), (100, 0)])
        assert not ContainmentTester().contains(line, rect(10, 10, 20, 20))

    def test_single_vertex_candidate(self, boundary):
        assert ContainmentTester().contains(boundary, Region(vertices=[(40, 40)]))

    def test_z_is_ignored(self, boundary, rect):
        assert ContainmentTester().contains(boundary, rect(10, 10, 20, 20, z=6_371_000.0))

    def test_point_inside(self):
        square = [Vertex(x=0, y=0), Vertex(x=10, y=0), Vertex(x=10, y=10), Vertex(x=0, y=10)]
        tester = ContainmentTester()

        assert tester.point_inside(Vertex(x=5, y=5), square)
        assert not tester.point_inside(Vertex(x=15, y=5), square)

    def test_concave_boundary_matches_shapely(self):
        reference = ShapelyPolygon(L_SHAPE)
        for i in range(25):
            for j in range(25):
                x, y = i - 2 + 0.5, j - 2 + 0.5
                expected = reference.contains(Point(x, y))
                assert GeometryUtils.point_in_polygon(x, y, L_SHAPE) == expected, (x, y)

    def test_region_in_notch_of_concave_boundary(self):
        boundary = Region(vertices=L_SHAPE)
        notch = Region(vertices=[(12, 12), (18, 12), (18, 18), (12, 18)])
        arm = Region(vertices=[(2, 12), (8, 12), (8, 18), (2, 18)])
        tester = ContainmentTester()

        assert not tester.contains(boundary, notch)
        assert tester.contains(boundary, arm)

    @pytest.mark.parametrize("factor", [0.9, 0.5, 0.25, 0.1])
    def test_shrunk_convex_region_stays_inside(self, factor):
        outline = octagon()
        boundary = Region(vertices=outline)
        assert ContainmentTester().contains(boundary, Region(vertices=scaled(outline, factor)))

    def test_grown_convex_region_is_outside(self):
        outline = octagon()
        boundary = Region(vertices=outline)
        assert not ContainmentTester().contains(boundary, Region(vertices=scaled(outline, 1.1)))
