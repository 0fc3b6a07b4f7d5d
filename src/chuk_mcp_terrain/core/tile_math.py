"""
Spherical Web-Mercator tile math.

Converts geographic coordinates to XYZ tile addresses and to pixel offsets
inside a 256px tile, and back again. Latitude is not clamped to the Mercator
limit: callers that pass latitudes beyond ~85.0511 get tile rows outside the
world grid, and the south pole itself cannot be projected.
"""

import math
from dataclasses import dataclass

from ..constants import TILE_SIZE, ErrorMessages
from .errors import InvalidZoomError, OutOfBoundsError


@dataclass(frozen=True)
class GeoCoordinate:
    """Longitude/latitude pair in degrees (EPSG:4326)."""

    lon: float
    lat: float


@dataclass(frozen=True)
class TileAddress:
    """XYZ tile index at a zoom level."""

    zoom: int
    x: int
    y: int

    def __str__(self) -> str:
        return f"{self.zoom}/{self.x}/{self.y}"


@dataclass(frozen=True)
class PixelCoordinate:
    """Pixel position inside a tile, origin at the top-left corner."""

    x: int
    y: int


def _check_zoom(zoom: int) -> None:
    if zoom < 0:
        raise InvalidZoomError(ErrorMessages.INVALID_ZOOM.format(zoom))


def _fractional_tile_position(lon: float, lat: float, zoom: int) -> tuple[float, float]:
    """Position of a coordinate in tile units (integer part = tile index)."""
    _check_zoom(zoom)
    n = 2**zoom

    lat_rad = lat * math.pi / 180.0
    mercator = math.tan(lat_rad) + 1.0 / math.cos(lat_rad)
    if not mercator > 0.0:
        raise OutOfBoundsError(ErrorMessages.MERCATOR_UNDEFINED.format(lat))

    fx = (lon + 180.0) / 360.0 * n
    fy = (1.0 - math.log(mercator) / math.pi) / 2.0 * n

    if not (math.isfinite(fx) and math.isfinite(fy)):
        raise OutOfBoundsError(ErrorMessages.MERCATOR_UNDEFINED.format(lat))
    return fx, fy


def tile_address(lon: float, lat: float, zoom: int) -> TileAddress:
    """
    Get the XYZ tile containing a coordinate.

    Args:
        lon: Longitude in degrees
        lat: Latitude in degrees
        zoom: Zoom level (>= 0)

    Returns:
        TileAddress (indices are not clamped to the world grid)

    Raises:
        InvalidZoomError: zoom is negative
        OutOfBoundsError: latitude cannot be projected
    """
    fx, fy = _fractional_tile_position(lon, lat, zoom)
    return TileAddress(zoom=zoom, x=math.floor(fx), y=math.floor(fy))


def pixel_in_tile(lon: float, lat: float, zoom: int) -> PixelCoordinate:
    """Get the pixel inside its tile that a coordinate falls on."""
    fx, fy = _fractional_tile_position(lon, lat, zoom)
    return PixelCoordinate(
        x=math.floor(fx * TILE_SIZE) % TILE_SIZE,
        y=math.floor(fy * TILE_SIZE) % TILE_SIZE,
    )


def is_valid_address(address: TileAddress) -> bool:
    """Whether a tile address lies inside the world grid for its zoom."""
    n = 2**address.zoom
    return 0 <= address.x < n and 0 <= address.y < n


def tile_to_lonlat(tile_x: float, tile_y: float, zoom: int) -> GeoCoordinate:
    """Inverse projection of a (possibly fractional) tile position."""
    _check_zoom(zoom)
    n = 2**zoom
    lon = tile_x / n * 360.0 - 180.0
    lat = math.degrees(math.atan(math.sinh(math.pi * (1.0 - 2.0 * tile_y / n))))
    return GeoCoordinate(lon=lon, lat=lat)


def tile_center(address: TileAddress) -> GeoCoordinate:
    return tile_to_lonlat(address.x + 0.5, address.y + 0.5, address.zoom)


def tile_bounds(address: TileAddress) -> list[float]:
    """Tile extent as [west, south, east, north] in degrees."""
    nw = tile_to_lonlat(address.x, address.y, address.zoom)
    se = tile_to_lonlat(address.x + 1, address.y + 1, address.zoom)
    return [nw.lon, se.lat, se.lon, nw.lat]


def pixel_to_lonlat(address: TileAddress, pixel: PixelCoordinate) -> GeoCoordinate:
    """Coordinate at the centre of a pixel."""
    return tile_to_lonlat(
        address.x + (pixel.x + 0.5) / TILE_SIZE,
        address.y + (pixel.y + 0.5) / TILE_SIZE,
        address.zoom,
    )
