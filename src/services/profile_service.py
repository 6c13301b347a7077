"""
Elevation profile along a GeoJSON LineString.

Samples points along the line, fetches the Terrain-RGB tiles covering it
concurrently and returns the points as a FeatureCollection annotated with
elevation and distance along the line.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from domain.errors import GeometryError
from domain.models import (
    MinSpacingPolicy,
    ProfilerSettings,
    ProfileRequest,
    SamplePoint,
    TileDescriptor,
)
from elevation.provider import TerrainRgbProvider
from elevation.sampling import plan_sample_distances, resolve_min_spacing_m
from geo.geodesy import path_length_m, point_at_distance
from geo.topography import project_sample_points
from infrastructure.http.client import make_http_session
from shared.constants import ZOOM_LEVEL
from shared.diagnostics import log_memory_usage
from tiles.coverage import tiles_covering, tiles_under_pixels
from tiles.fetcher import TileFetcher
from tiles.index import CoverageIndex

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    import numpy as np

logger = logging.getLogger(__name__)


@dataclass
class ProfileRun:
    """State of a single profile run; never shared between runs."""

    request: ProfileRequest
    path_length_m: float
    points: list[SamplePoint] = field(default_factory=list)
    tiles: list[TileDescriptor] = field(default_factory=list)


def build_feature_collection(points: list[SamplePoint]) -> dict[str, Any]:
    """FeatureCollection of the sampled points, one feature per point."""
    return {
        'type': 'FeatureCollection',
        'features': [p.to_feature() for p in points],
    }


class ElevationProfileGenerator:
    """
    Runs the sampling pipeline against a tile source.

    fetch_tile(x, y, z, access_token) must return the tile's RGB pixels as an
    array indexed [row, col, channel].
    """

    def __init__(
        self,
        fetch_tile: Callable[[int, int, int, str], Awaitable[np.ndarray]],
        *,
        zoom: int = ZOOM_LEVEL,
        on_progress: Callable[[int], Awaitable[None]] | None = None,
    ) -> None:
        self._fetch_tile = fetch_tile
        self.zoom = zoom
        self._on_progress = on_progress

    def prepare(self, request: ProfileRequest) -> ProfileRun:
        """Sample points, project them and list the tiles to fetch."""
        coords = request.coordinates
        length_m = path_length_m(coords)
        if length_m <= 0:
            msg = 'Path has zero length'
            raise GeometryError(msg)

        min_spacing_m = resolve_min_spacing_m(
            request.min_spacing, request.start_latitude, self.zoom
        )
        distances = plan_sample_distances(length_m, request.number_of_points, min_spacing_m)
        logger.info(
            'Path length %.1f m: %d samples (requested %d, min spacing %s)',
            length_m,
            len(distances),
            request.number_of_points,
            'none' if min_spacing_m is None else f'{min_spacing_m:.1f} m',
        )

        run = ProfileRun(request=request, path_length_m=length_m)
        run.points = [SamplePoint(point_at_distance(coords, d), d) for d in distances]
        project_sample_points(run.points, self.zoom)
        # Samples sit on the great circle while the walk follows the Mercator
        # line; the tiles under the samples are appended after the walk order
        indices = dict.fromkeys(tiles_covering(coords, self.zoom))
        indices.update(
            dict.fromkeys(tiles_under_pixels((p.pixel_xy for p in run.points), self.zoom))
        )
        run.tiles = [TileDescriptor(x, y, z) for x, y, z in indices]
        return run

    async def generate_profile(
        self,
        path: Any,
        number_of_points: int,
        access_token: str,
        min_spacing: MinSpacingPolicy | str | float | None = MinSpacingPolicy(),
    ) -> dict[str, Any]:
        """
        Build the annotated FeatureCollection for a path.

        Raises GeometryError, TileFetchError or CoverageMismatchError; no
        partial result is returned.
        """
        request = ProfileRequest.build(path, number_of_points, min_spacing)
        run = self.prepare(request)

        logger.info('Fetching %d terrain tiles at zoom %d', len(run.tiles), self.zoom)
        fetcher = TileFetcher(self._fetch_tile, on_progress=self._on_progress)
        await fetcher.fetch_all(run.tiles, access_token)
        log_memory_usage('after terrain tile fetch')

        CoverageIndex(run.tiles).annotate(run.points)
        logger.info('Elevation profile ready: %d points', len(run.points))
        return build_feature_collection(run.points)


async def get_line_string_elevation_points(
    line_string: Any,
    number_of_points: int,
    access_token: str,
    min_spacing: MinSpacingPolicy | str | float | None = MinSpacingPolicy(),
    *,
    settings: ProfilerSettings | None = None,
) -> dict[str, Any]:
    """Elevation profile of a LineString using the Mapbox Terrain-RGB service."""
    settings = settings or ProfilerSettings()
    async with make_http_session(verify_ssl=settings.verify_ssl) as session:
        provider = TerrainRgbProvider(session, settings)
        generator = ElevationProfileGenerator(provider.fetch_tile)
        return await generator.generate_profile(
            line_string, number_of_points, access_token, min_spacing
        )


def generate_profile_sync(
    line_string: Any,
    number_of_points: int,
    access_token: str,
    min_spacing: MinSpacingPolicy | str | float | None = MinSpacingPolicy(),
    *,
    settings: ProfilerSettings | None = None,
) -> dict[str, Any]:
    """Blocking wrapper around get_line_string_elevation_points."""
    return asyncio.run(
        get_line_string_elevation_points(
            line_string,
            number_of_points,
            access_token,
            min_spacing,
            settings=settings,
        )
    )
