"""
Point terrain queries against a terrain-RGB tile.

Synchronous and stateless; async callers wrap query_terrain() in
asyncio.to_thread().
"""

import logging
import math
from dataclasses import dataclass
from typing import Any

from ..constants import DEFAULT_CELL_SIZE_M, NEIGHBOUR_FILL_VALUE, TILE_SIZE, ErrorMessages
from .elevation_decoder import as_raster_tile, decode_pixel
from .errors import InvalidElevationError, OutOfBoundsError
from .surface_metrics import ElevationGrid, compute_surface_metrics
from .tile_math import PixelCoordinate, TileAddress, is_valid_address, pixel_in_tile, tile_address

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TerrainSample:
    """Elevation and surface metrics at one queried coordinate."""

    elevation_m: float
    longitude: float
    latitude: float
    slope_deg: float
    aspect_deg: float
    aspect_label: str
    roughness: float
    tile: TileAddress
    pixel: PixelCoordinate


def build_elevation_grid(tile: memoryview | bytes, pixel: PixelCoordinate) -> ElevationGrid:
    """
    Sample the 3x3 window around a pixel.

    Neighbours that fall outside the tile are zero-filled, not edge-replicated.
    """
    values = []
    for dy in (-1, 0, 1):
        for dx in (-1, 0, 1):
            x = pixel.x + dx
            y = pixel.y + dy
            if 0 <= x < TILE_SIZE and 0 <= y < TILE_SIZE:
                values.append(decode_pixel(tile, x, y))
            else:
                values.append(NEIGHBOUR_FILL_VALUE)
    return ElevationGrid(tuple(values))


def locate_tile(lon: float, lat: float, zoom: int) -> TileAddress:
    """Tile address of a coordinate, failing when it lies outside the world grid."""
    address = tile_address(lon, lat, zoom)
    if not is_valid_address(address):
        raise OutOfBoundsError(
            ErrorMessages.TILE_OUT_OF_BOUNDS.format(
                lon, lat, zoom, address.x, address.y, 2**zoom
            )
        )
    return address


def query_terrain(
    lon: float,
    lat: float,
    zoom: int,
    tile: Any,
    cell_size_m: float = DEFAULT_CELL_SIZE_M,
) -> TerrainSample:
    """
    Decode elevation and surface metrics at a coordinate.

    Args:
        lon: Longitude in degrees
        lat: Latitude in degrees
        zoom: Zoom level of the supplied tile
        tile: 256x256 RGBA terrain-RGB buffer for the tile containing (lon, lat)
        cell_size_m: Horizontal sample spacing for the gradient

    Returns:
        TerrainSample built from a single 3x3 elevation grid

    Raises:
        InvalidZoomError: zoom is negative
        OutOfBoundsError: the coordinate has no tile in the world grid
        InvalidElevationError: malformed tile or non-finite centre elevation
    """
    address = locate_tile(lon, lat, zoom)
    pixel = pixel_in_tile(lon, lat, zoom)
    raster = as_raster_tile(tile)

    grid = build_elevation_grid(raster, pixel)
    for value in grid.values:
        if not math.isfinite(value):
            raise InvalidElevationError(
                ErrorMessages.INVALID_ELEVATION.format(value, pixel.x, pixel.y)
            )

    metrics = compute_surface_metrics(grid, cell_size_m)
    elevation = grid.center

    logger.debug(
        f"Terrain at ({lon}, {lat}) tile {address} px ({pixel.x}, {pixel.y}): "
        f"{elevation:.1f}m slope {metrics.slope_deg:.1f} {metrics.aspect_label}"
    )

    return TerrainSample(
        elevation_m=elevation,
        longitude=lon,
        latitude=lat,
        slope_deg=metrics.slope_deg,
        aspect_deg=metrics.aspect_deg,
        aspect_label=metrics.aspect_label,
        roughness=metrics.roughness,
        tile=address,
        pixel=pixel,
    )


class ElevationQueryService:
    """Object wrapper around query_terrain() with a fixed cell size."""

    def __init__(self, cell_size_m: float = DEFAULT_CELL_SIZE_M) -> None:
        self.cell_size_m = cell_size_m

    def query(self, lon: float, lat: float, zoom: int, tile: Any) -> TerrainSample:
        return query_terrain(lon, lat, zoom, tile, self.cell_size_m)
