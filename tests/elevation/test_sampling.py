"""Tests for sample distance planning and minimum spacing."""

import pytest

from domain.models import MinSpacingPolicy
from elevation.sampling import (
    auto_min_spacing_m,
    plan_sample_distances,
    resolve_min_spacing_m,
)


class TestAutoMinSpacing:
    """Tests for auto_min_spacing_m()."""

    def test_equator(self):
        # 4.777 m pixel footprint rounds up to 4.8 m
        assert auto_min_spacing_m(0.0) == pytest.approx(4.8)

    def test_sixty_degrees(self):
        # 2.389 m rounds up to 2.4 m
        assert auto_min_spacing_m(60.0) == pytest.approx(2.4)

    def test_granularity(self):
        for lat in (0.0, 12.3, 45.0, 71.9):
            value = auto_min_spacing_m(lat) * 10
            assert value == pytest.approx(round(value))


class TestResolveMinSpacing:
    """Tests for resolve_min_spacing_m()."""

    def test_auto_uses_start_latitude(self):
        assert resolve_min_spacing_m(MinSpacingPolicy.auto(), 60.0) == pytest.approx(2.4)

    def test_none(self):
        assert resolve_min_spacing_m(MinSpacingPolicy.none(), 0.0) is None

    def test_explicit(self):
        assert resolve_min_spacing_m(MinSpacingPolicy.explicit(60), 0.0) == 60.0


class TestPlanSampleDistances:
    """Tests for plan_sample_distances()."""

    def test_evenly_spaced_without_minimum(self):
        assert plan_sample_distances(1000.0, 5, None) == [0.0, 250.0, 500.0, 750.0, 1000.0]

    def test_forced_minimum_spacing(self):
        assert plan_sample_distances(100.0, 50, 60.0) == [0.0, 60.0, 100.0]

    def test_minimum_smaller_than_step_is_ignored(self):
        assert plan_sample_distances(1000.0, 5, 10.0) == [0.0, 250.0, 500.0, 750.0, 1000.0]

    def test_two_points(self):
        assert plan_sample_distances(321.0, 2, None) == [0.0, 321.0]

    def test_minimum_longer_than_path(self):
        assert plan_sample_distances(30.0, 10, 60.0) == [0.0, 30.0]

    def test_zero_length(self):
        assert plan_sample_distances(0.0, 5, None) == [0.0]

    @pytest.mark.parametrize('length', [1.0, 99.9, 1234.5, 98765.4])
    @pytest.mark.parametrize('count', [2, 3, 7, 100])
    def test_endpoint_and_monotonic(self, length, count):
        distances = plan_sample_distances(length, count, None)
        assert distances[-1] == length
        assert len(distances) == count
        assert distances[0] == 0.0
        assert all(b >= a for a, b in zip(distances, distances[1:]))

    def test_auto_spacing_lower_bound(self):
        spacing = auto_min_spacing_m(0.0)
        distances = plan_sample_distances(100.0, 1000, spacing)
        assert distances[-1] == 100.0
        gaps = [b - a for a, b in zip(distances, distances[1:])]
        # The last gap may be shorter, every other one respects the minimum
        assert all(g >= spacing - 1e-9 for g in gaps[:-1])
        assert len(distances) < 1000

    def test_rejects_single_point(self):
        with pytest.raises(ValueError):
            plan_sample_distances(100.0, 1, None)

    def test_rejects_negative_length(self):
        with pytest.raises(ValueError):
            plan_sample_distances(-1.0, 5, None)
