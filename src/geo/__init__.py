"""Geo module - geodesy, Web Mercator projection and Terrain-RGB decoding."""

from .geodesy import path_length_m, point_at_distance
from .topography import (
    decode_terrain_rgb,
    latlng_to_pixel_xy,
    pixel_ground_size_m,
    project_sample_points,
    tile_pixel_origin,
)

__all__ = [
    'decode_terrain_rgb',
    'latlng_to_pixel_xy',
    'path_length_m',
    'pixel_ground_size_m',
    'point_at_distance',
    'project_sample_points',
    'tile_pixel_origin',
]
