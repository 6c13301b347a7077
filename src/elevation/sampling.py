"""Choice of the distances along the path at which elevation is sampled."""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

from geo.topography import pixel_ground_size_m
from shared.constants import (
    AUTO_SPACING_DECIMAL_FACTOR,
    MIN_POINTS_FOR_LINE,
    ZOOM_LEVEL,
    MinSpacingMode,
)

if TYPE_CHECKING:
    from domain.models import MinSpacingPolicy


def auto_min_spacing_m(lat_deg: float, zoom: int = ZOOM_LEVEL) -> float:
    """Ground size of one pixel at lat_deg, rounded up to 0.1 m."""
    scaled = pixel_ground_size_m(lat_deg, zoom) * AUTO_SPACING_DECIMAL_FACTOR
    return math.ceil(scaled) / AUTO_SPACING_DECIMAL_FACTOR


def resolve_min_spacing_m(
    policy: MinSpacingPolicy,
    start_lat_deg: float,
    zoom: int = ZOOM_LEVEL,
) -> float | None:
    """Effective minimum spacing in meters, or None when no minimum applies."""
    if policy.mode is MinSpacingMode.AUTO:
        return auto_min_spacing_m(start_lat_deg, zoom)
    if policy.mode is MinSpacingMode.NONE:
        return None
    return policy.meters


def plan_sample_distances(
    path_length_m: float,
    number_of_points: int,
    min_spacing_m: float | None = None,
) -> list[float]:
    """
    Distances (meters) from the path start at which to sample.

    The step is length / (number_of_points - 1), widened to min_spacing_m when
    it is smaller. Steps are emitted while they stay short of the path end and
    fewer than number_of_points - 1 were emitted; the path length itself is
    always the last distance.
    """
    if number_of_points < MIN_POINTS_FOR_LINE:
        msg = f'number_of_points must be at least {MIN_POINTS_FOR_LINE}, got {number_of_points}'
        raise ValueError(msg)
    if path_length_m < 0:
        msg = f'path length must not be negative, got {path_length_m}'
        raise ValueError(msg)

    step = path_length_m / (number_of_points - 1)
    if min_spacing_m is not None and step < min_spacing_m:
        step = min_spacing_m

    distances: list[float] = []
    i = 0
    while i < number_of_points - 1 and step * i < path_length_m:
        distances.append(step * i)
        i += 1
    distances.append(path_length_m)
    return distances
