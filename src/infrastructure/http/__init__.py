"""HTTP client infrastructure."""
from infrastructure.http.client import (
    make_http_session,
    mask_api_key,
    validate_terrain_api,
)

__all__ = [
    'make_http_session',
    'mask_api_key',
    'validate_terrain_api',
]
