"""
Great-circle measurements along a path.

Distances use a sphere of mean earth radius, so lengths and interpolated
points match the usual GeoJSON tooling conventions.
"""

from __future__ import annotations

from collections.abc import Sequence

from pyproj import Geod

from shared.constants import EARTH_MEAN_RADIUS_M

_sphere = Geod(a=EARTH_MEAN_RADIUS_M, f=0.0)


def path_length_m(coords: Sequence[tuple[float, float]]) -> float:
    """Total length of a (lon, lat) polyline in meters."""
    if len(coords) < 2:
        return 0.0
    lons = [c[0] for c in coords]
    lats = [c[1] for c in coords]
    return float(_sphere.line_length(lons, lats))


def point_at_distance(
    coords: Sequence[tuple[float, float]],
    distance_m: float,
) -> tuple[float, float]:
    """
    Point (lon, lat) located distance_m along the polyline.

    Distances <= 0 give the first vertex, distances past the end give the last.
    """
    if distance_m <= 0:
        return coords[0]
    travelled = 0.0
    for (lon1, lat1), (lon2, lat2) in zip(coords, coords[1:]):
        azimuth, _, segment_m = _sphere.inv(lon1, lat1, lon2, lat2)
        if segment_m <= 0:
            continue
        remaining = distance_m - travelled
        if remaining < segment_m:
            lon, lat, _ = _sphere.fwd(lon1, lat1, azimuth, remaining)
            return float(lon), float(lat)
        travelled += segment_m
    return coords[-1]
