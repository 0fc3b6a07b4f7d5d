"""Shared test fixtures for chuk-mcp-terrain."""

import io

import numpy as np
import pytest
from PIL import Image
from unittest.mock import MagicMock


def encode_tile(elevation: np.ndarray) -> bytes:
    """Pack a 256x256 elevation array (metres) into a terrain-RGB RGBA buffer."""
    value = np.rint((elevation + 10000.0) / 0.1).astype(np.int64)
    rgba = np.zeros((256, 256, 4), dtype=np.uint8)
    rgba[:, :, 0] = (value >> 16) & 0xFF
    rgba[:, :, 1] = (value >> 8) & 0xFF
    rgba[:, :, 2] = value & 0xFF
    rgba[:, :, 3] = 255
    return rgba.tobytes()


def encode_png(tile: bytes) -> bytes:
    """Encode an RGBA buffer as PNG bytes, as a tile server would."""
    from chuk_mcp_terrain.core.raster_io import raster_tile_to_png

    return raster_tile_to_png(tile)


def encode_image(size: tuple[int, int], mode: str = "RGB") -> bytes:
    """PNG bytes of a blank image of arbitrary size/mode."""
    buf = io.BytesIO()
    Image.new(mode, size).save(buf, format="PNG")
    return buf.getvalue()


@pytest.fixture
def flat_tile():
    """Tile at a constant 100m."""
    return encode_tile(np.full((256, 256), 100.0))


@pytest.fixture
def east_rising_tile():
    """Tile rising 3m per pixel eastwards from 1000m at column 0."""
    cols = np.arange(256, dtype=np.float64)
    return encode_tile(np.tile(1000.0 + 3.0 * cols, (256, 1)))


@pytest.fixture
def flat_tile_png(flat_tile):
    return encode_png(flat_tile)


@pytest.fixture
def east_rising_tile_png(east_rising_tile):
    return encode_png(east_rising_tile)


@pytest.fixture
def mock_manager():
    """TerrainManager with a token-protected example tile source."""
    from chuk_mcp_terrain.core.terrain_manager import TerrainManager

    return TerrainManager(
        tile_url="https://tiles.example.com/{z}/{x}/{y}.pngraw?access_token={token}",
        access_token="test-token",
        timeout=5.0,
    )


@pytest.fixture
def mock_mcp():
    """Mock ChukMCPServer."""
    mcp = MagicMock()
    mcp.tool = MagicMock(return_value=lambda fn: fn)
    return mcp


@pytest.fixture
def make_tile():
    """Factory: elevation array -> terrain-RGB RGBA buffer."""
    return encode_tile


@pytest.fixture
def make_png():
    """Factory: RGBA buffer -> PNG bytes."""
    return encode_png


@pytest.fixture
def make_image():
    """Factory: (size, mode) -> PNG bytes of a blank image."""
    return encode_image
