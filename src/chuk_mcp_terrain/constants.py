"""
Constants for chuk-mcp-terrain server.

All magic strings, tile geometry, decoder parameters, and configuration values live here.
"""


class ServerConfig:
    NAME = "chuk-mcp-terrain"
    VERSION = "0.1.0"
    DESCRIPTION = "Terrain-RGB Elevation Decoding & Surface Metrics MCP Server"


class EnvVar:
    TILE_URL = "TERRAIN_TILE_URL"
    ACCESS_TOKEN = "MAPBOX_ACCESS_TOKEN"
    HTTP_TIMEOUT = "TERRAIN_HTTP_TIMEOUT"
    MCP_STDIO = "MCP_STDIO"


# Tile geometry (spherical Web-Mercator, 256px tiles only)
TILE_SIZE = 256
BYTES_PER_PIXEL = 4
TILE_BYTES = TILE_SIZE * TILE_SIZE * BYTES_PER_PIXEL

# Terrain-RGB fixed-point encoding
ELEVATION_BASE_M = -10000.0
ELEVATION_STEP_M = 0.1
RGB_MAX_VALUE = 256 * 256 * 256 - 1

# Surface metrics
DEFAULT_CELL_SIZE_M = 30.0
NEIGHBOUR_FILL_VALUE = 0.0
ASPECT_LABELS = ["N", "NE", "E", "SE", "S", "SW", "W", "NW"]
ASPECT_SECTOR_DEG = 45.0

# Tile source
DEFAULT_TILE_URL = (
    "https://api.mapbox.com/v4/mapbox.terrain-rgb/{z}/{x}/{y}.pngraw?access_token={token}"
)
DEFAULT_HTTP_TIMEOUT = 30.0
MAX_ZOOM = 22

# Retry (network only)
RETRY_ATTEMPTS = 3
RETRY_WAIT_MIN = 1
RETRY_WAIT_MAX = 10

TERRAIN_TOOLS = [
    "terrain_tile_address",
    "terrain_query",
    "terrain_query_points",
    "terrain_tile_summary",
]
DISCOVERY_TOOLS = ["terrain_status", "terrain_capabilities"]


class ErrorMessages:
    INVALID_ZOOM = "Invalid zoom level {}: must be a non-negative integer"
    PIXEL_OUT_OF_BOUNDS = "Pixel ({}, {}) outside tile range [0, {})"
    TILE_OUT_OF_BOUNDS = "Coordinate ({}, {}) has no tile at zoom {} (tile {}/{} outside [0, {}))"
    MERCATOR_UNDEFINED = "Latitude {} cannot be projected to Web-Mercator"
    INVALID_ELEVATION = "Decoded elevation {} at pixel ({}, {}) is not finite"
    UNENCODABLE_ELEVATION = "Cannot encode non-finite elevation {}"
    INVALID_TILE_SIZE = "Tile buffer has {} bytes, expected {} ({}x{} RGBA)"
    INVALID_TILE_BUFFER = "Tile data is not a byte buffer: {}"
    INVALID_TILE_IMAGE = "Tile image is {}x{}, expected {}x{}"
    UNDECODABLE_TILE = "Tile data could not be decoded as an image: {}"
    TILE_UNAVAILABLE = "No terrain data for tile {} (HTTP {})"
    NO_POINTS = "points must contain at least one [lon, lat] pair"
    INVALID_POINT = "Each point must be [lon, lat], got {}"
    MISSING_TOKEN = (
        "No access token configured. Set {} or use a tile URL template without {{token}}."
    )


class SuccessMessages:
    TILE_ADDRESS = "Tile {}/{}/{} pixel ({}, {})"
    QUERY = "Elevation {:.1f}m, slope {:.1f}°, aspect {}"
    QUERY_POINTS = "Queried terrain at {} points"
    TILE_SUMMARY = "Tile {}/{}/{} elevation {:.1f}m to {:.1f}m"
