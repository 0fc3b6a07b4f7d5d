"""
Terrain-RGB elevation decoding.

Elevations are packed as a 24-bit fixed-point value with 0.1m resolution and
a -10000m floor:

    elevation = -10000 + (R * 65536 + G * 256 + B) * 0.1

Tiles are 256x256 RGBA byte buffers in row-major order; the alpha channel is
ignored. Nothing here mutates the caller's buffer.
"""

import math
from typing import Any

import numpy as np
from numpy.typing import NDArray

from ..constants import (
    BYTES_PER_PIXEL,
    ELEVATION_BASE_M,
    ELEVATION_STEP_M,
    RGB_MAX_VALUE,
    TILE_BYTES,
    TILE_SIZE,
    ErrorMessages,
)
from .errors import InvalidElevationError, OutOfBoundsError

FloatArray = NDArray[np.floating[Any]]


def as_raster_tile(data: Any) -> memoryview:
    """
    Wrap a tile buffer as a flat, read-only byte view.

    Accepts bytes, bytearray, memoryview or a uint8 array of shape
    (256, 256, 4). Strided arrays are copied into a contiguous buffer.

    Raises:
        InvalidElevationError: data is not a buffer, or not exactly 256*256*4 bytes
    """
    try:
        view = memoryview(data)
    except TypeError as e:
        raise InvalidElevationError(ErrorMessages.INVALID_TILE_BUFFER.format(e)) from e
    if not view.c_contiguous:
        view = memoryview(view.tobytes())
    if view.format != "B" or view.ndim != 1:
        view = view.cast("B")
    if view.nbytes != TILE_BYTES:
        raise InvalidElevationError(
            ErrorMessages.INVALID_TILE_SIZE.format(view.nbytes, TILE_BYTES, TILE_SIZE, TILE_SIZE)
        )
    return view.toreadonly()


def decode_rgb(r: int, g: int, b: int) -> float:
    """Decode one terrain-RGB triple to metres."""
    return ELEVATION_BASE_M + (r * 65536 + g * 256 + b) * ELEVATION_STEP_M


def decode_pixel(tile: memoryview | bytes, x: int, y: int) -> float:
    """
    Decode the elevation of a single pixel.

    Args:
        tile: 256x256 RGBA buffer (see as_raster_tile)
        x: Column in [0, 256)
        y: Row in [0, 256)

    Returns:
        Elevation in metres

    Raises:
        OutOfBoundsError: x or y outside the tile
    """
    if not (0 <= x < TILE_SIZE and 0 <= y < TILE_SIZE):
        raise OutOfBoundsError(ErrorMessages.PIXEL_OUT_OF_BOUNDS.format(x, y, TILE_SIZE))

    idx = (y * TILE_SIZE + x) * BYTES_PER_PIXEL
    return decode_rgb(tile[idx], tile[idx + 1], tile[idx + 2])


def decode_tile(tile: Any) -> FloatArray:
    """Decode a whole tile to a 256x256 float64 elevation array."""
    view = as_raster_tile(tile)
    rgba = np.frombuffer(view, dtype=np.uint8).reshape(TILE_SIZE, TILE_SIZE, BYTES_PER_PIXEL)

    packed = (
        rgba[:, :, 0].astype(np.int64) * 65536
        + rgba[:, :, 1].astype(np.int64) * 256
        + rgba[:, :, 2].astype(np.int64)
    )
    return ELEVATION_BASE_M + packed * ELEVATION_STEP_M


def encode_elevation(elevation: float) -> tuple[int, int, int]:
    """
    Pack an elevation into a terrain-RGB triple.

    Rounds to the nearest 0.1m step and clamps to the encodable range
    (-10000m to 1667721.5m).
    """
    if not math.isfinite(elevation):
        raise InvalidElevationError(ErrorMessages.UNENCODABLE_ELEVATION.format(elevation))

    value = int(round((elevation - ELEVATION_BASE_M) / ELEVATION_STEP_M))
    value = max(0, min(RGB_MAX_VALUE, value))
    return (value >> 16) & 0xFF, (value >> 8) & 0xFF, value & 0xFF
