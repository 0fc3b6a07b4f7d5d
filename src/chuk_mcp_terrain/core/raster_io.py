"""
Terrain tile I/O.

All functions are synchronous — callers wrap them in asyncio.to_thread().
Handles tile URL construction, HTTP download with retry, and PNG decoding
into the 256x256 RGBA buffer the decoder reads.
"""

import io
import logging

import numpy as np
import requests
from PIL import Image, UnidentifiedImageError
from tenacity import (
    before_sleep_log,
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from ..constants import (
    DEFAULT_HTTP_TIMEOUT,
    RETRY_ATTEMPTS,
    RETRY_WAIT_MAX,
    RETRY_WAIT_MIN,
    TILE_SIZE,
    ErrorMessages,
)
from .errors import InvalidElevationError, TileUnavailableError
from .tile_math import TileAddress

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Retry decorator for network I/O
# ---------------------------------------------------------------------------

# Only connection failures and timeouts are transient. Malformed URLs,
# redirect loops and HTTP status failures (TileUnavailableError) fail at once.
_retry_network = retry(
    stop=stop_after_attempt(RETRY_ATTEMPTS),
    wait=wait_exponential(multiplier=1, min=RETRY_WAIT_MIN, max=RETRY_WAIT_MAX),
    retry=retry_if_exception_type((requests.ConnectionError, requests.Timeout)),
    before_sleep=before_sleep_log(logger, logging.WARNING),
    reraise=True,
)


# ---------------------------------------------------------------------------
# Tile download
# ---------------------------------------------------------------------------


def build_tile_url(template: str, address: TileAddress, access_token: str | None = None) -> str:
    """
    Fill an XYZ URL template.

    Args:
        template: URL with {z}, {x}, {y} and optionally {token} placeholders
        address: Tile to request
        access_token: Value substituted for {token}

    Returns:
        Tile URL
    """
    return template.format(z=address.zoom, x=address.x, y=address.y, token=access_token or "")


@_retry_network
def fetch_tile_bytes(
    url: str,
    address: TileAddress,
    timeout: float = DEFAULT_HTTP_TIMEOUT,
) -> bytes:
    """
    Download raw tile bytes.

    Args:
        url: Tile URL
        address: Tile being fetched (for messages; the URL may carry a token)
        timeout: Request timeout in seconds

    Returns:
        Response body

    Raises:
        TileUnavailableError: the server answered with a non-200 status
    """
    response = requests.get(url, timeout=timeout)
    if response.status_code != 200:
        raise TileUnavailableError(
            ErrorMessages.TILE_UNAVAILABLE.format(address, response.status_code),
            status_code=response.status_code,
        )

    logger.debug(f"Fetched tile {address}: {len(response.content)} bytes")
    return response.content


# ---------------------------------------------------------------------------
# Tile decoding
# ---------------------------------------------------------------------------


def png_to_raster_tile(data: bytes) -> bytes:
    """
    Decode an encoded tile image to a 256x256 RGBA byte buffer.

    Args:
        data: PNG (or any Pillow-readable) image bytes

    Returns:
        262144 bytes, row-major RGBA

    Raises:
        InvalidElevationError: undecodable image or size other than 256x256
    """
    try:
        img = Image.open(io.BytesIO(data))
        img.load()
    except (UnidentifiedImageError, OSError) as e:
        raise InvalidElevationError(ErrorMessages.UNDECODABLE_TILE.format(e)) from e

    if img.size != (TILE_SIZE, TILE_SIZE):
        raise InvalidElevationError(
            ErrorMessages.INVALID_TILE_IMAGE.format(img.size[0], img.size[1], TILE_SIZE, TILE_SIZE)
        )

    rgba = np.asarray(img.convert("RGBA"), dtype=np.uint8)
    return rgba.tobytes()


def raster_tile_to_png(tile: bytes) -> bytes:
    """Encode a 256x256 RGBA buffer as PNG bytes."""
    rgba = np.frombuffer(tile, dtype=np.uint8).reshape(TILE_SIZE, TILE_SIZE, 4)
    img = Image.fromarray(rgba)
    buf = io.BytesIO()
    img.save(buf, format="PNG")
    return buf.getvalue()
