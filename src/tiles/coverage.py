from __future__ import annotations

import math
from collections.abc import Iterable, Sequence

from geo.topography import latlng_to_pixel_xy
from shared.constants import TILE_SIZE, ZOOM_LEVEL


def _tile_fraction(lng: float, lat: float, zoom: int) -> tuple[float, float]:
    """Fractional tile coordinates, using the same projection as the samples."""
    x, y = latlng_to_pixel_xy(lat, lng, zoom)
    return x / TILE_SIZE, y / TILE_SIZE


def tiles_covering(
    coords: Sequence[tuple[float, float]],
    zoom: int = ZOOM_LEVEL,
) -> list[tuple[int, int, int]]:
    """
    Tiles (x, y, z) crossed by a (lon, lat) polyline at a single zoom level.

    Each segment is walked cell by cell through the tile grid. Tiles are
    returned once each, in the order the walk first reaches them; the tile
    holding each segment end is always part of the result. Tile columns wrap
    around the antimeridian, so longitude 180 maps to column 0.
    """
    found: dict[tuple[int, int, int], None] = {}
    columns = 2**zoom

    def add(tx: int, ty: int) -> None:
        found.setdefault((tx % columns, ty, zoom), None)

    for (lng0, lat0), (lng1, lat1) in zip(coords, coords[1:]):
        x0, y0 = _tile_fraction(lng0, lat0, zoom)
        x1, y1 = _tile_fraction(lng1, lat1, zoom)
        dx = x1 - x0
        dy = y1 - y0
        if dx == 0 and dy == 0:
            continue

        sx = 1 if dx > 0 else -1
        sy = 1 if dy > 0 else -1
        x = math.floor(x0)
        y = math.floor(y0)
        t_max_x = abs(((1 if dx > 0 else 0) + x - x0) / dx) if dx else math.inf
        t_max_y = abs(((1 if dy > 0 else 0) + y - y0) / dy) if dy else math.inf
        t_dx = abs(sx / dx) if dx else math.inf
        t_dy = abs(sy / dy) if dy else math.inf

        add(x, y)
        while t_max_x < 1 or t_max_y < 1:
            if t_max_x < t_max_y:
                t_max_x += t_dx
                x += sx
            else:
                t_max_y += t_dy
                y += sy
            add(x, y)
        # The walk stops short of an end vertex lying exactly on a tile edge
        add(math.floor(x1), math.floor(y1))

    return list(found)


def tiles_under_pixels(
    pixels: Iterable[tuple[float, float]],
    zoom: int = ZOOM_LEVEL,
) -> list[tuple[int, int, int]]:
    """Tiles (x, y, z) holding each world pixel position, once each, in input order."""
    columns = 2**zoom
    found: dict[tuple[int, int, int], None] = {}
    for px, py in pixels:
        tx = math.floor(px / TILE_SIZE) % columns
        found.setdefault((tx, math.floor(py / TILE_SIZE), zoom), None)
    return list(found)
