"""Terrain tiles of a profile run.

This module provides:
- tiles_covering: tiles crossed by a path at one zoom level
- tiles_under_pixels: tiles holding given world pixel positions
- CoverageIndex: point to tile and pixel offset lookup
- TileFetcher: concurrent fetch of all tiles with fail-fast
"""

from tiles.coverage import tiles_covering, tiles_under_pixels
from tiles.fetcher import TileFetcher
from tiles.index import CoverageIndex

__all__ = [
    'CoverageIndex',
    'TileFetcher',
    'tiles_covering',
    'tiles_under_pixels',
]
