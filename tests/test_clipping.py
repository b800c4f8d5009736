"""Tests for clipping cells against the bound."""

import pytest

from py_voronoi.core.clipping import BOTTOM, LEFT, RIGHT, TOP, CellClipper
from py_voronoi.core.geometry import Bound


def always(i, x, y):
    return True


def never(i, x, y):
    return False


@pytest.fixture
def clipper():
    return CellClipper(Bound(0, 0, 10, 10), always)


class TestCodes:
    """Test region and edge codes."""

    @pytest.mark.parametrize("x,y,expected", [
        (5, 5, 0),
        (-1, 5, LEFT),
        (11, 5, RIGHT),
        (5, -1, TOP),
        (5, 11, BOTTOM),
        (11, -1, RIGHT | TOP),
        (-1, 11, LEFT | BOTTOM),
        (0, 0, 0),
    ])
    def test_region_code(self, clipper, x, y, expected):
        """Test region codes inside and around the bound."""
        assert clipper.region_code(x, y) == expected

    @pytest.mark.parametrize("x,y,expected", [
        (5, 5, 0),
        (0, 5, LEFT),
        (10, 5, RIGHT),
        (5, 0, TOP),
        (5, 10, BOTTOM),
        (0, 0, LEFT | TOP),
        (10, 10, RIGHT | BOTTOM),
    ])
    def test_edge_code(self, clipper, x, y, expected):
        """Test edge codes for points on the bound."""
        assert clipper.edge_code(x, y) == expected

    def test_rectangle_starts_top_right(self, clipper):
        """Test the rectangle vertex order."""
        assert clipper.rectangle() == [(10, 0), (10, 10), (0, 10), (0, 0)]


class TestClipSegment:
    """Test Cohen-Sutherland style segment clipping."""

    def test_inside(self, clipper):
        """Test that a segment inside the bound is kept."""
        assert clipper.clip_segment(1, 1, 9, 9, 0, 0) == (1, 1, 9, 9)

    def test_one_end_outside(self, clipper):
        """Test clipping a segment leaving through the right edge."""
        assert clipper.clip_segment(5, 5, 15, 5, 0, RIGHT) == (5, 5, 10, 5)

    def test_both_ends_outside(self, clipper):
        """Test clipping a segment crossing the whole bound."""
        assert clipper.clip_segment(-5, 5, 15, 5, LEFT, RIGHT) == (0, 5, 10, 5)

    def test_diagonal(self, clipper):
        """Test clipping a diagonal through two corners."""
        s = clipper.clip_segment(-5, -5, 15, 15, LEFT | TOP, RIGHT | BOTTOM)
        assert s == pytest.approx((0, 0, 10, 10))

    def test_trivial_reject(self, clipper):
        """Test that a segment left of the bound is rejected."""
        assert clipper.clip_segment(-5, -5, -1, 20, LEFT | TOP, LEFT | BOTTOM) is None

    def test_miss_past_corner(self, clipper):
        """Test a segment crossing two outer regions without entering."""
        assert clipper.clip_segment(-5, 8, 2, 15, LEFT, BOTTOM) is None


class TestProject:
    """Test ray projection onto the bound."""

    @pytest.mark.parametrize("x0,y0,vx,vy,expected", [
        (5, 5, 1, 0, (10, 5)),
        (5, 5, -1, 0, (0, 5)),
        (5, 5, 0, -1, (5, 0)),
        (5, 5, 0, 2, (5, 10)),
        (5, 5, 1, 1, (10, 10)),
        (5, 5, -1, -2, (2.5, 0)),
        (5, -100, 0, 1, (5, 10)),
    ])
    def test_project(self, clipper, x0, y0, vx, vy, expected):
        """Test where rays leave the bound."""
        assert clipper.project(x0, y0, vx, vy) == pytest.approx(expected)

    @pytest.mark.parametrize("x0,y0,vx,vy", [
        (11, 5, 1, 0),
        (-1, 5, -1, 0),
        (5, -1, 0, -1),
        (5, 10, 0, 1),
    ])
    def test_project_from_beyond(self, clipper, x0, y0, vx, vy):
        """Test that rays heading away from the bound give None."""
        assert clipper.project(x0, y0, vx, vy) is None


class TestInsertCorners:
    """Test corner insertion and cleanup."""

    def test_inserts_corner_between_edges(self, clipper):
        """Test that a corner is added between a top and a right vertex."""
        polygon = [(5, 0), (10, 5)]
        j = clipper.insert_corners(0, TOP, RIGHT, polygon, 1)
        assert polygon == [(5, 0), (10, 0), (10, 5)]
        assert j == 2

    def test_walks_several_corners(self, clipper):
        """Test walking around several corners."""
        polygon = [(5, 0)]
        clipper.insert_corners(0, RIGHT, TOP, polygon, 1)
        assert polygon == [(5, 0), (10, 10), (0, 10), (0, 0)]

    def test_skips_corner_outside_cell(self):
        """Test that corners outside the cell are skipped."""
        clipper = CellClipper(Bound(0, 0, 10, 10), never)
        polygon = [(5, 0), (10, 5)]
        j = clipper.insert_corners(0, TOP, RIGHT, polygon, 1)
        assert polygon == [(5, 0), (10, 5)]
        assert j == 1

    def test_skips_corner_already_present(self, clipper):
        """Test that an existing corner is not added twice."""
        polygon = [(5, 0), (10, 0), (10, 5)]
        clipper.insert_corners(0, TOP, RIGHT, polygon, 1)
        assert polygon == [(5, 0), (10, 0), (10, 5)]

    def test_drops_vertices_inside_straight_runs(self, clipper):
        """Test that vertices between collinear neighbors are removed."""
        polygon = [(0, 0), (5, 0), (10, 0), (5, 5)]
        clipper.insert_corners(0, TOP, TOP, polygon, 0)
        assert polygon == [(0, 0), (10, 0), (5, 5)]


class TestClipFinite:
    """Test clipping of closed cells."""

    def test_inside_is_unchanged(self, clipper):
        """Test that a cell inside the bound is unchanged."""
        points = [(2, 2), (8, 2), (5, 8)]
        assert clipper.clip_finite(0, points) == points

    def test_crossing_one_edge(self, clipper):
        """Test clipping a cell sticking out of the right edge."""
        clipped = clipper.clip_finite(0, [(5, 5), (15, 5), (15, 8), (5, 8)])
        assert clipped == [(5, 5), (10, 5), (10, 8), (5, 8)]

    def test_crossing_corner(self, clipper):
        """Test that the bound corner is added to a cell overlapping it."""
        clipped = clipper.clip_finite(0, [(5, 5), (15, 5), (15, 15), (5, 15)])
        assert sorted(clipped) == sorted([(5, 5), (10, 5), (10, 10), (5, 10)])

    def test_surrounding_cell_is_whole_rectangle(self, clipper):
        """Test that a cell covering the bound becomes the rectangle."""
        square = [(-5, -5), (15, -5), (15, 15), (-5, 15)]
        assert clipper.clip_finite(0, square) == clipper.rectangle()

    def test_outside_cell_is_empty(self):
        """Test that a cell outside the bound is empty."""
        clipper = CellClipper(Bound(0, 0, 10, 10), never)
        assert clipper.clip_finite(0, [(20, 20), (30, 20), (30, 30)]) is None


class TestClipInfinite:
    """Test clipping of unbounded hull cells."""

    def test_rays_close_the_cell(self, clipper):
        """Test a single vertex with rays to the top and left edges."""
        clipper.contains = lambda i, x, y: x <= 5 and y <= 5
        clipped = clipper.clip_infinite(0, [(5, 5)], 0, -1, -1, 0)
        assert clipped == [(0, 0), (5, 0), (5, 5), (0, 5)]

    def test_empty_cell_containing_center(self):
        """Test that a cell holding the bound center becomes the rectangle."""
        clipper = CellClipper(Bound(0, 0, 10, 10), always)
        clipped = clipper.clip_infinite(0, [(50, 50)], 1, 0, 0, 1)
        assert clipped == clipper.rectangle()

    def test_empty_cell(self):
        """Test that a cell missing the bound is empty."""
        clipper = CellClipper(Bound(0, 0, 10, 10), never)
        assert clipper.clip_infinite(0, [(50, 50)], 1, 0, 0, 1) is None
