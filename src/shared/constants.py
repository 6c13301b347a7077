from enum import Enum

# Fixed zoom level used for sampling, projection and tile coverage
ZOOM_LEVEL = 15

# Web Mercator tile size (pixels)
TILE_SIZE = 256

# log2(TILE_SIZE), added to the zoom for the world size in pixels
TILE_SIZE_LOG2 = 8

# Earth equatorial circumference (meters)
EARTH_EQUATORIAL_CIRCUMFERENCE_M = 40075016.686

# Mean earth radius used for distances along the path (meters)
EARTH_MEAN_RADIUS_M = 6371008.8

# Minimum number of points for a path and for a sample plan
MIN_POINTS_FOR_LINE = 2

# Auto spacing rounds the pixel footprint up to 1/10 m
AUTO_SPACING_DECIMAL_FACTOR = 10

# Terrain-RGB decoding: elevation = OFFSET + (R*65536 + G*256 + B) * SCALE
TERRAIN_RGB_OFFSET_M = -10000.0
TERRAIN_RGB_SCALE_M = 0.1

# Web Mercator limits
MERCATOR_MAX_SIN = 0.9999
WORLD_LNG_SPAN_DEG = 360.0
WORLD_LNG_HALF_SPAN_DEG = 180.0

# Terrain-RGB tile endpoint (pngraw keeps the exact RGB values)
MAPBOX_TERRAIN_RGB_PATH = 'https://api.mapbox.com/v4/mapbox.terrain-rgb'
TERRAIN_RGB_URL_TEMPLATE = MAPBOX_TERRAIN_RGB_PATH + '/{z}/{x}/{y}.pngraw'

# HTTP
HTTP_TIMEOUT_DEFAULT = 20.0
HTTP_RETRIES_DEFAULT = 4
HTTP_BACKOFF_FACTOR = 1.6
HTTP_5XX_MIN = 500
HTTP_5XX_MAX = 600
HTTP_OK = 200
HTTP_UNAUTHORIZED = 401
HTTP_FORBIDDEN = 403

# Environment variable holding the Mapbox access token
ACCESS_TOKEN_ENV = 'MAPBOX_ACCESS_TOKEN'

# Number of visible characters of the token when masked for logs
API_KEY_VISIBLE_PREFIX_LEN = 4

# Default number of samples for the command line
DEFAULT_NUMBER_OF_POINTS = 100

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


class MinSpacingMode(str, Enum):
    """How the minimum distance between samples is chosen."""

    AUTO = 'auto'  # derived from the pixel footprint at the start latitude
    NONE = 'none'  # no minimum, always number_of_points samples
    EXPLICIT = 'explicit'  # caller supplied meters
