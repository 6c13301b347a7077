"""Domain layer - data model and errors of a profile run."""
from domain.errors import (
    CoverageMismatchError,
    ElevationProfileError,
    GeometryError,
    TileFetchError,
)
from domain.models import (
    MinSpacingPolicy,
    ProfilerSettings,
    ProfileRequest,
    SamplePoint,
    TileDescriptor,
)

__all__ = [
    'CoverageMismatchError',
    'ElevationProfileError',
    'GeometryError',
    'MinSpacingPolicy',
    'ProfileRequest',
    'ProfilerSettings',
    'SamplePoint',
    'TileDescriptor',
    'TileFetchError',
]
