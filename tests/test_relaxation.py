"""Tests for Lloyd relaxation."""

import numpy as np
import pytest

from py_voronoi.core.delaunay import Delaunay
from py_voronoi.core.relaxation import RelaxationStats, area_stats, relax


@pytest.fixture
def off_center_square():
    """Four corners and an interior point away from the middle."""
    points = np.array([[0.0, 0.0], [100.0, 0.0], [0.0, 100.0], [100.0, 100.0], [54.0, 52.0]])
    return Delaunay(points).voronoi((0, 0, 100, 100))


class TestRelax:
    """Test the relaxation loop."""

    def test_reduces_area_variance(self, off_center_square):
        """Test that relaxation evens out cell areas and centers the inner point."""
        initial = area_stats(off_center_square)
        start = np.hypot(*(off_center_square.delaunay.points[4] - [50, 50]))

        history = off_center_square.relax(10)

        assert history[-1].area_variance < initial.area_variance
        end = np.hypot(*(off_center_square.delaunay.points[4] - [50, 50]))
        assert end < start

    def test_one_stats_entry_per_iteration(self, off_center_square):
        """Test that stats are returned for every iteration."""
        history = relax(off_center_square, 3)
        assert [stats.iteration for stats in history] == [1, 2, 3]
        assert all(isinstance(stats, RelaxationStats) for stats in history)
        for stats in history:
            assert stats.mean_area == pytest.approx(100 * 100 / 5)

    def test_zero_iterations(self, off_center_square):
        """Test that zero iterations leave the points alone."""
        before = off_center_square.delaunay.points.copy()
        assert relax(off_center_square, 0) == []
        np.testing.assert_array_equal(off_center_square.delaunay.points, before)

    def test_negative_iterations(self, off_center_square):
        """Test that a negative iteration count is rejected."""
        with pytest.raises(ValueError):
            relax(off_center_square, -1)

    def test_batched_keeps_points_inside(self, off_center_square):
        """Test that batched relaxation keeps points in the bound."""
        off_center_square.relax(5, batched=True)
        points = off_center_square.delaunay.points
        assert np.all((points >= 0) & (points <= 100))

    def test_batched_reduces_area_variance(self, off_center_square):
        """Test that batched relaxation evens out cell areas."""
        initial = area_stats(off_center_square)
        history = relax(off_center_square, 5, batched=True)
        assert history[-1].area_variance < initial.area_variance

    @pytest.mark.parametrize("batched", [False, True])
    def test_point_with_empty_cell_stays(self, batched):
        """Test that a point outside the bound is left alone."""
        voronoi = Delaunay([2, 2, 8, 3, 50, 50]).voronoi((0, 0, 10, 10))
        relax(voronoi, 1, batched=batched)
        np.testing.assert_array_equal(voronoi.delaunay.points[2], [50, 50])

    def test_writes_through_to_caller_buffer(self):
        """Test that relaxation moves the caller's coordinates."""
        coordinates = np.array([[10.0, 10.0], [20.0, 10.0], [15.0, 40.0]])
        voronoi = Delaunay(coordinates).voronoi((0, 0, 50, 50))
        voronoi.relax(1)
        assert not np.array_equal(coordinates, [[10.0, 10.0], [20.0, 10.0], [15.0, 40.0]])


class TestAreaStats:
    """Test cell area statistics."""

    def test_equal_cells(self):
        """Test stats for two equal cells."""
        voronoi = Delaunay([10, 10, 20, 10]).voronoi((0, 0, 30, 20))
        stats = area_stats(voronoi, iteration=4)
        assert stats == RelaxationStats(4, 300.0, 0.0)

    def test_empty_cells_are_ignored(self):
        """Test that empty cells do not count."""
        voronoi = Delaunay([5, 5, 5, 30]).voronoi((0, 0, 10, 10))
        stats = area_stats(voronoi)
        assert stats.mean_area == pytest.approx(100.0)
        assert stats.area_variance == pytest.approx(0.0)

    def test_no_points(self):
        """Test stats for an empty diagram."""
        voronoi = Delaunay().voronoi((0, 0, 10, 10))
        assert area_stats(voronoi) == RelaxationStats(0, 0.0, 0.0)
