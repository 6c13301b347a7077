"""Matching of sample points to the fetched tiles that contain them."""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

from domain.errors import CoverageMismatchError
from geo.topography import decode_terrain_rgb

if TYPE_CHECKING:
    from collections.abc import Sequence

    from domain.models import SamplePoint, TileDescriptor


class CoverageIndex:
    """
    Point-to-tile lookup over the tiles of one run.

    A point belongs to a tile when its pixel position lies in
    [origin, origin + 256) on both axes. Tiles are scanned in the order the
    coverage resolver produced them and the first match wins.
    """

    def __init__(self, tiles: Sequence[TileDescriptor]) -> None:
        self._tiles = tiles

    def resolve(self, point: SamplePoint) -> tuple[TileDescriptor, int, int]:
        """Return (tile, col, row) of the pixel under the point."""
        if point.pixel_xy is None:
            msg = f'Sample point at {point.distance_along_path_m:.1f} m is not projected'
            raise ValueError(msg)
        px, py = point.pixel_xy
        for tile in self._tiles:
            if tile.contains(px, py):
                ox, oy = tile.pixel_origin
                return tile, math.floor(px - ox), math.floor(py - oy)
        raise CoverageMismatchError(point.coordinates, point.pixel_xy)

    def elevation_at(self, point: SamplePoint) -> float:
        """Decoded elevation (meters) of the pixel under the point."""
        tile, col, row = self.resolve(point)
        if tile.pixels is None:
            msg = f'Tile z/x/y={tile.z}/{tile.x}/{tile.y} has no pixel data'
            raise ValueError(msg)
        red, green, blue = tile.pixels[row, col, :3]
        return decode_terrain_rgb(red, green, blue)

    def annotate(self, points: Sequence[SamplePoint]) -> None:
        """Attach elevation_m to every point in place."""
        for point in points:
            point.elevation_m = self.elevation_at(point)
