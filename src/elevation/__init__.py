"""Elevation module - sample planning and Terrain-RGB tile provider."""

from .provider import TerrainRgbProvider, decode_tile_png
from .sampling import auto_min_spacing_m, plan_sample_distances, resolve_min_spacing_m

__all__ = [
    'TerrainRgbProvider',
    'auto_min_spacing_m',
    'decode_tile_png',
    'plan_sample_distances',
    'resolve_min_spacing_m',
]
