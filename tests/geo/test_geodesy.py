"""Tests for great-circle path length and interpolation."""

import math

import pytest

from geo.geodesy import path_length_m, point_at_distance
from shared.constants import EARTH_MEAN_RADIUS_M

ONE_DEGREE_M = 2 * math.pi * EARTH_MEAN_RADIUS_M / 360


class TestPathLength:
    """Tests for path_length_m()."""

    def test_one_degree_on_equator(self):
        assert path_length_m([(0.0, 0.0), (1.0, 0.0)]) == pytest.approx(ONE_DEGREE_M, rel=1e-9)

    def test_one_degree_on_meridian(self):
        assert path_length_m([(5.0, 10.0), (5.0, 11.0)]) == pytest.approx(ONE_DEGREE_M, rel=1e-9)

    def test_sums_segments(self):
        coords = [(0.0, 0.0), (1.0, 0.0), (1.0, 1.0)]
        assert path_length_m(coords) == pytest.approx(2 * ONE_DEGREE_M, rel=1e-9)

    def test_single_point(self):
        assert path_length_m([(0.0, 0.0)]) == 0.0

    def test_repeated_point(self):
        assert path_length_m([(3.0, 4.0), (3.0, 4.0)]) == pytest.approx(0.0, abs=1e-9)


class TestPointAtDistance:
    """Tests for point_at_distance()."""

    def test_start(self):
        assert point_at_distance([(1.0, 2.0), (3.0, 4.0)], 0.0) == (1.0, 2.0)

    def test_negative_clamps_to_start(self):
        assert point_at_distance([(1.0, 2.0), (3.0, 4.0)], -10.0) == (1.0, 2.0)

    def test_midpoint_on_equator(self):
        lon, lat = point_at_distance([(0.0, 0.0), (1.0, 0.0)], ONE_DEGREE_M / 2)
        assert lon == pytest.approx(0.5, abs=1e-9)
        assert lat == pytest.approx(0.0, abs=1e-9)

    def test_second_segment(self):
        coords = [(0.0, 0.0), (1.0, 0.0), (1.0, 1.0)]
        lon, lat = point_at_distance(coords, ONE_DEGREE_M * 1.25)
        assert lon == pytest.approx(1.0, abs=1e-9)
        assert lat == pytest.approx(0.25, abs=1e-9)

    def test_end_and_beyond(self):
        coords = [(0.0, 0.0), (1.0, 0.0), (1.0, 1.0)]
        end = point_at_distance(coords, path_length_m(coords))
        assert end == pytest.approx((1.0, 1.0), abs=1e-9)
        assert point_at_distance(coords, 1e9) == (1.0, 1.0)

    def test_skips_zero_length_segment(self):
        coords = [(0.0, 0.0), (0.0, 0.0), (1.0, 0.0)]
        lon, _ = point_at_distance(coords, ONE_DEGREE_M / 4)
        assert lon == pytest.approx(0.25, abs=1e-9)
