import math
from collections.abc import Iterable
from typing import TYPE_CHECKING

from shared.constants import (
    EARTH_EQUATORIAL_CIRCUMFERENCE_M,
    MERCATOR_MAX_SIN,
    TERRAIN_RGB_OFFSET_M,
    TERRAIN_RGB_SCALE_M,
    TILE_SIZE,
    TILE_SIZE_LOG2,
    WORLD_LNG_HALF_SPAN_DEG,
    WORLD_LNG_SPAN_DEG,
    ZOOM_LEVEL,
)

if TYPE_CHECKING:
    from domain.models import SamplePoint


def pixel_ground_size_m(lat_deg: float, zoom: int = ZOOM_LEVEL) -> float:
    """Ground size of one 256-tile pixel (meters) at the given latitude and zoom."""
    lat_rad = math.radians(lat_deg)
    return EARTH_EQUATORIAL_CIRCUMFERENCE_M * math.cos(lat_rad) / 2 ** (
        zoom + TILE_SIZE_LOG2
    )


def latlng_to_pixel_xy(
    lat_deg: float,
    lng_deg: float,
    zoom: int,
) -> tuple[float, float]:
    """Convert WGS84 (lat, lng) to continuous Web Mercator world pixels."""
    siny = math.sin(math.radians(lat_deg))
    siny = min(max(siny, -MERCATOR_MAX_SIN), MERCATOR_MAX_SIN)
    world_size = TILE_SIZE * (2**zoom)
    x = (lng_deg + WORLD_LNG_HALF_SPAN_DEG) / WORLD_LNG_SPAN_DEG * world_size
    y = (0.5 - math.log((1 + siny) / (1 - siny)) / (4 * math.pi)) * world_size
    return x, y


def tile_pixel_origin(x: int, y: int) -> tuple[int, int]:
    """Top-left corner of tile (x, y) in world pixels."""
    return x * TILE_SIZE, y * TILE_SIZE


def project_sample_points(points: Iterable['SamplePoint'], zoom: int = ZOOM_LEVEL) -> None:
    """
    Assign world pixel coordinates to each sample point in place.

    x is wrapped into [0, world size) so longitude 180 lands in column 0,
    matching the tile columns listed by the coverage walk.
    """
    world_size = TILE_SIZE * (2**zoom)
    for point in points:
        lng, lat = point.coordinates
        x, y = latlng_to_pixel_xy(lat, lng, zoom)
        point.pixel_xy = (x % world_size, y)


def decode_terrain_rgb(red: int, green: int, blue: int) -> float:
    """
    Decode one Terrain-RGB pixel into elevation (meters).

    elevation = -10000 + (R*256*256 + G*256 + B) * 0.1
    """
    value = int(red) * 65536 + int(green) * 256 + int(blue)
    return TERRAIN_RGB_OFFSET_M + value * TERRAIN_RGB_SCALE_M
