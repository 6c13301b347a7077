"""Errors raised while building an elevation profile."""

from __future__ import annotations


class ElevationProfileError(RuntimeError):
    """Base class for every failure of a profile run."""


class GeometryError(ElevationProfileError, ValueError):
    """Malformed or degenerate path, or an invalid sample request."""


class TileFetchError(ElevationProfileError):
    """A single tile could not be retrieved; the whole run is aborted."""

    def __init__(self, z: int, x: int, y: int, reason: object) -> None:
        self.tile = (z, x, y)
        super().__init__(f'Failed to fetch terrain tile z/x/y={z}/{x}/{y}: {reason}')


class CoverageMismatchError(ElevationProfileError):
    """A sample point lies outside every fetched tile."""

    def __init__(
        self,
        coordinates: tuple[float, float],
        pixel_xy: tuple[float, float],
    ) -> None:
        self.coordinates = coordinates
        self.pixel_xy = pixel_xy
        lon, lat = coordinates
        px, py = pixel_xy
        super().__init__(
            f'No fetched tile covers point lon={lon:.6f} lat={lat:.6f} '
            f'(pixel {px:.2f}, {py:.2f})'
        )
