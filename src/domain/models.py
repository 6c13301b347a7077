import logging
import math
from dataclasses import dataclass, field
from typing import Any

import numpy as np
from pydantic import BaseModel, ValidationError, field_validator

from domain.errors import GeometryError
from shared.constants import (
    HTTP_BACKOFF_FACTOR,
    HTTP_RETRIES_DEFAULT,
    HTTP_TIMEOUT_DEFAULT,
    MIN_POINTS_FOR_LINE,
    TERRAIN_RGB_URL_TEMPLATE,
    TILE_SIZE,
    MinSpacingMode,
)

Coordinate = tuple[float, float]


@dataclass
class SamplePoint:
    """A point on the path chosen for elevation lookup."""

    coordinates: Coordinate
    distance_along_path_m: float
    # Filled by the projection step
    pixel_xy: tuple[float, float] | None = None
    # Filled by the decoding step
    elevation_m: float | None = None

    def to_feature(self) -> dict[str, Any]:
        """GeoJSON Point feature without the pixel-space bookkeeping."""
        lon, lat = self.coordinates
        return {
            'type': 'Feature',
            'properties': {
                'distanceAlongLine': float(self.distance_along_path_m),
                'elevation': (
                    float(self.elevation_m) if self.elevation_m is not None else None
                ),
            },
            'geometry': {'type': 'Point', 'coordinates': [lon, lat]},
        }


@dataclass
class TileDescriptor:
    """A required terrain tile, with its pixel grid once fetched."""

    x: int
    y: int
    z: int
    pixels: np.ndarray | None = field(default=None, repr=False)

    @property
    def index(self) -> tuple[int, int, int]:
        return self.x, self.y, self.z

    @property
    def pixel_origin(self) -> tuple[int, int]:
        """Top-left corner of the tile in shared pixel space."""
        return self.x * TILE_SIZE, self.y * TILE_SIZE

    def contains(self, px: float, py: float) -> bool:
        """Half-open test: [origin, origin + TILE_SIZE) on both axes."""
        ox, oy = self.pixel_origin
        return ox <= px < ox + TILE_SIZE and oy <= py < oy + TILE_SIZE


@dataclass(frozen=True)
class MinSpacingPolicy:
    """Minimum distance between consecutive samples."""

    mode: MinSpacingMode = MinSpacingMode.AUTO
    meters: float | None = None

    def __post_init__(self) -> None:
        if self.mode is MinSpacingMode.EXPLICIT:
            if self.meters is None or not math.isfinite(self.meters) or self.meters <= 0:
                msg = f'Explicit minimum spacing must be a positive number, got {self.meters!r}'
                raise ValueError(msg)
        elif self.meters is not None:
            msg = f'Minimum spacing meters only apply to explicit mode, not {self.mode.value}'
            raise ValueError(msg)

    @classmethod
    def auto(cls) -> 'MinSpacingPolicy':
        return cls(MinSpacingMode.AUTO)

    @classmethod
    def none(cls) -> 'MinSpacingPolicy':
        return cls(MinSpacingMode.NONE)

    @classmethod
    def explicit(cls, meters: float) -> 'MinSpacingPolicy':
        return cls(MinSpacingMode.EXPLICIT, float(meters))

    @classmethod
    def parse(cls, value: 'str | float | MinSpacingPolicy | None') -> 'MinSpacingPolicy':
        """Accept 'auto', 'none', None (no minimum) or a number of meters."""
        if isinstance(value, MinSpacingPolicy):
            return value
        if value is None:
            return cls.none()
        if isinstance(value, str):
            text = value.strip().lower()
            if text == MinSpacingMode.AUTO.value:
                return cls.auto()
            if text == MinSpacingMode.NONE.value:
                return cls.none()
            try:
                return cls.explicit(float(text))
            except ValueError:
                msg = f"Minimum spacing must be 'auto', 'none' or meters, got {value!r}"
                raise ValueError(msg) from None
        return cls.explicit(float(value))


class ProfilerSettings(BaseModel):
    """Runtime settings for the tile provider and the command line."""

    model_config = {
        'extra': 'ignore',
    }

    # URL template with {z}, {x}, {y} placeholders; the token is appended
    terrain_url: str = TERRAIN_RGB_URL_TEMPLATE
    # Total timeout per tile request (seconds)
    timeout_s: float = HTTP_TIMEOUT_DEFAULT
    # Attempts per tile for 429/5xx and transport errors
    retries: int = HTTP_RETRIES_DEFAULT
    # Delay before attempt n is backoff_factor ** n seconds
    backoff_factor: float = HTTP_BACKOFF_FACTOR
    verify_ssl: bool = True
    log_level: str = 'INFO'

    @field_validator('terrain_url')
    @classmethod
    def validate_terrain_url(cls, v: str) -> str:
        missing = [p for p in ('{z}', '{x}', '{y}') if p not in v]
        if missing:
            msg = f'terrain_url is missing placeholders: {", ".join(missing)}'
            raise ValueError(msg)
        return v

    @field_validator('timeout_s', 'backoff_factor')
    @classmethod
    def validate_positive(cls, v: float | str) -> float:
        v = float(v)
        if v <= 0:
            msg = 'Value must be positive'
            raise ValueError(msg)
        return v

    @field_validator('retries')
    @classmethod
    def validate_retries(cls, v: int) -> int:
        return max(1, int(v))

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = str(v).upper()
        if not isinstance(logging.getLevelName(level), int):
            msg = f'Unknown log level: {v}'
            raise ValueError(msg)
        return level


class ProfileRequest(BaseModel):
    """Validated input of one profile run."""

    model_config = {
        'arbitrary_types_allowed': True,
    }

    coordinates: list[Coordinate]
    number_of_points: int
    min_spacing: MinSpacingPolicy = MinSpacingPolicy()

    @field_validator('coordinates', mode='before')
    @classmethod
    def validate_coordinates(cls, v: Any) -> list[Coordinate]:
        if not isinstance(v, (list, tuple)):
            msg = 'Path coordinates must be a list of [longitude, latitude] pairs'
            raise ValueError(msg)
        if len(v) < MIN_POINTS_FOR_LINE:
            msg = f'Path needs at least {MIN_POINTS_FOR_LINE} coordinates, got {len(v)}'
            raise ValueError(msg)
        out: list[Coordinate] = []
        for i, pos in enumerate(v):
            # GeoJSON positions may carry a third (altitude) value
            if not isinstance(pos, (list, tuple)) or len(pos) < MIN_POINTS_FOR_LINE:
                msg = f'Coordinate #{i} is not a [longitude, latitude] pair: {pos!r}'
                raise ValueError(msg)
            try:
                lon, lat = float(pos[0]), float(pos[1])
            except (TypeError, ValueError):
                msg = f'Coordinate #{i} is not numeric: {pos!r}'
                raise ValueError(msg) from None
            if not (math.isfinite(lon) and math.isfinite(lat)):
                msg = f'Coordinate #{i} is not finite: {pos!r}'
                raise ValueError(msg)
            out.append((lon, lat))
        return out

    @field_validator('number_of_points')
    @classmethod
    def validate_number_of_points(cls, v: int) -> int:
        if v < MIN_POINTS_FOR_LINE:
            msg = f'number_of_points must be at least {MIN_POINTS_FOR_LINE}, got {v}'
            raise ValueError(msg)
        return v

    @property
    def start_latitude(self) -> float:
        return self.coordinates[0][1]

    @classmethod
    def build(
        cls,
        path: Any,
        number_of_points: int,
        min_spacing: 'MinSpacingPolicy | str | float | None' = MinSpacingPolicy(),
    ) -> 'ProfileRequest':
        """
        Build a request from a GeoJSON LineString, a Feature wrapping one,
        or a bare coordinate list.

        Raises GeometryError for anything that does not describe a usable path.
        """
        try:
            policy = MinSpacingPolicy.parse(min_spacing)
            return cls(
                coordinates=extract_line_coordinates(path),
                number_of_points=number_of_points,
                min_spacing=policy,
            )
        except ValidationError as e:
            details = '; '.join(err['msg'] for err in e.errors())
            raise GeometryError(details) from e
        except GeometryError:
            raise
        except ValueError as e:
            raise GeometryError(str(e)) from e


def extract_line_coordinates(path: Any) -> Any:
    """Return the raw coordinate list of a LineString in any accepted shape."""
    if isinstance(path, dict):
        if path.get('type') == 'Feature':
            geometry = path.get('geometry')
            if not isinstance(geometry, dict):
                msg = 'Feature has no geometry'
                raise GeometryError(msg)
            path = geometry
        geom_type = path.get('type')
        if geom_type != 'LineString':
            msg = f'Expected a LineString geometry, got {geom_type!r}'
            raise GeometryError(msg)
        return path.get('coordinates')
    return path
