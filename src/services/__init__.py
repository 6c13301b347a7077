"""Services package - profile generation and settings."""

from services.profile_service import (
    ElevationProfileGenerator,
    ProfileRun,
    build_feature_collection,
    generate_profile_sync,
    get_line_string_elevation_points,
)
from services.settings_service import load_settings, save_settings

__all__ = [
    'ElevationProfileGenerator',
    'ProfileRun',
    'build_feature_collection',
    'generate_profile_sync',
    'get_line_string_elevation_points',
    'load_settings',
    'save_settings',
]
