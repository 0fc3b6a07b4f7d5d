"""Tests for chuk_mcp_terrain.tools.terrain.api module.

Tests terrain_tile_address, terrain_query, terrain_query_points and
terrain_tile_summary end to end against a manager whose tile download is
patched to return in-memory PNG tiles.
"""

import json
from unittest.mock import MagicMock, patch

import pytest

from chuk_mcp_terrain.constants import TERRAIN_TOOLS
from chuk_mcp_terrain.core.errors import TileUnavailableError
from chuk_mcp_terrain.tools.terrain.api import register_terrain_tools

FETCH = "chuk_mcp_terrain.core.raster_io.fetch_tile_bytes"


# ── Fixtures ───────────────────────────────────────────────────────


@pytest.fixture
def terrain_tools(mock_manager):
    """Register terrain tools and return a dict mapping name -> coroutine function."""
    tools = {}
    mcp = MagicMock()

    def capture_tool(**kwargs):
        def decorator(fn):
            tools[fn.__name__] = fn
            return fn

        return decorator

    mcp.tool = capture_tool
    register_terrain_tools(mcp, mock_manager)
    return tools


# ── Registration tests ─────────────────────────────────────────────


class TestRegistration:
    def test_registers_four_tools(self, terrain_tools):
        assert len(terrain_tools) == 4

    def test_tool_names(self, terrain_tools):
        assert set(terrain_tools) == set(TERRAIN_TOOLS)


# ── terrain_tile_address ───────────────────────────────────────────


class TestTerrainTileAddress:
    @pytest.mark.asyncio
    async def test_json(self, terrain_tools):
        result = json.loads(
            await terrain_tools["terrain_tile_address"](lon=-122.4194, lat=37.7749, zoom=10)
        )
        assert result["tile_x"] == 163
        assert result["tile_y"] == 395
        assert 0 <= result["pixel_x"] < 256
        assert len(result["bounds"]) == 4
        assert result["message"].startswith("Tile 10/163/395 pixel")

    @pytest.mark.asyncio
    async def test_text(self, terrain_tools):
        text = await terrain_tools["terrain_tile_address"](
            lon=0.0, lat=0.0, zoom=0, output_mode="text"
        )
        assert "Tile: 0/0/0" in text
        assert "Pixel: (128, 128)" in text

    @pytest.mark.asyncio
    async def test_unclamped_address(self, terrain_tools):
        result = json.loads(await terrain_tools["terrain_tile_address"](lon=0.0, lat=89.0, zoom=2))
        assert result["tile_y"] < 0

    @pytest.mark.asyncio
    async def test_negative_zoom_error(self, terrain_tools):
        result = json.loads(await terrain_tools["terrain_tile_address"](lon=0.0, lat=0.0, zoom=-1))
        assert "Invalid zoom level -1" in result["error"]


# ── terrain_query ──────────────────────────────────────────────────


class TestTerrainQuery:
    @pytest.mark.asyncio
    async def test_json(self, terrain_tools, east_rising_tile_png):
        with patch(FETCH, return_value=east_rising_tile_png):
            result = json.loads(await terrain_tools["terrain_query"](lon=0.0, lat=0.0, zoom=0))

        point = result["point"]
        assert point["elevation_m"] == pytest.approx(1384.0)
        assert point["slope_deg"] == pytest.approx(5.7106, abs=1e-3)
        assert point["aspect_deg"] == pytest.approx(180.0)
        assert point["aspect"] == "S"
        assert point["tile"] == [0, 0, 0]
        assert point["pixel"] == [128, 128]
        assert result["cell_size_m"] == 30.0
        assert result["message"] == "Elevation 1384.0m, slope 5.7°, aspect S"

    @pytest.mark.asyncio
    async def test_text(self, terrain_tools, flat_tile_png):
        with patch(FETCH, return_value=flat_tile_png):
            text = await terrain_tools["terrain_query"](
                lon=0.0, lat=0.0, zoom=0, output_mode="text"
            )

        assert "Elevation: 100.0 m" in text
        assert "Slope: 0.0°" in text
        assert "Aspect: N" in text
        assert "Roughness: 0.0 m" in text
        assert "Tile: 0/0/0 pixel (128, 128)" in text

    @pytest.mark.asyncio
    async def test_out_of_world(self, terrain_tools):
        with patch(FETCH) as mock_fetch:
            result = json.loads(await terrain_tools["terrain_query"](lon=0.0, lat=88.0, zoom=4))
        assert "no tile" in result["error"]
        mock_fetch.assert_not_called()

    @pytest.mark.asyncio
    async def test_tile_unavailable(self, terrain_tools):
        with patch(
            FETCH, side_effect=TileUnavailableError("No terrain data for tile 0/0/0 (HTTP 404)")
        ):
            result = json.loads(await terrain_tools["terrain_query"](lon=0.0, lat=0.0, zoom=0))
        assert result["error"] == "No terrain data for tile 0/0/0 (HTTP 404)"

    @pytest.mark.asyncio
    async def test_bad_image(self, terrain_tools):
        with patch(FETCH, return_value=b"not a png"):
            text = await terrain_tools["terrain_query"](
                lon=0.0, lat=0.0, zoom=0, output_mode="text"
            )
        assert text.startswith("Error: Tile data could not be decoded")


# ── terrain_query_points ───────────────────────────────────────────


class TestTerrainQueryPoints:
    @pytest.mark.asyncio
    async def test_json(self, terrain_tools, east_rising_tile_png):
        points = [[0.0, 0.0], [-170.0, 10.0], [170.0, -10.0]]
        with patch(FETCH, return_value=east_rising_tile_png) as mock_fetch:
            result = json.loads(await terrain_tools["terrain_query_points"](points=points, zoom=0))

        assert mock_fetch.call_count == 1
        assert result["point_count"] == 3
        assert [[p["lon"], p["lat"]] for p in result["points"]] == points
        low, high = result["elevation_range"]
        assert low < 1384.0 < high
        assert result["message"] == "Queried terrain at 3 points"

    @pytest.mark.asyncio
    async def test_text(self, terrain_tools, flat_tile_png):
        with patch(FETCH, return_value=flat_tile_png):
            text = await terrain_tools["terrain_query_points"](
                points=[[1.0, 1.0], [2.0, 2.0]], zoom=0, output_mode="text"
            )
        assert "Terrain at 2 points (zoom 0)" in text
        assert "100.0m to 100.0m" in text

    @pytest.mark.asyncio
    async def test_empty(self, terrain_tools):
        result = json.loads(await terrain_tools["terrain_query_points"](points=[], zoom=0))
        assert "at least one" in result["error"]

    @pytest.mark.asyncio
    async def test_malformed_point(self, terrain_tools):
        result = json.loads(
            await terrain_tools["terrain_query_points"](points=[[1.0, 2.0, 3.0]], zoom=0)
        )
        assert "[lon, lat]" in result["error"]


# ── terrain_tile_summary ───────────────────────────────────────────


class TestTerrainTileSummary:
    @pytest.mark.asyncio
    async def test_json(self, terrain_tools, east_rising_tile_png):
        with patch(FETCH, return_value=east_rising_tile_png):
            result = json.loads(
                await terrain_tools["terrain_tile_summary"](lon=-122.4194, lat=37.7749, zoom=10)
            )

        assert result["tile"] == [10, 163, 395]
        assert result["elevation_range"] == pytest.approx([1000.0, 1765.0])
        assert result["elevation_mean_m"] == pytest.approx(1382.5)
        assert result["message"] == "Tile 10/163/395 elevation 1000.0m to 1765.0m"

    @pytest.mark.asyncio
    async def test_text(self, terrain_tools, flat_tile_png):
        with patch(FETCH, return_value=flat_tile_png):
            text = await terrain_tools["terrain_tile_summary"](
                lon=0.0, lat=0.0, zoom=0, output_mode="text"
            )
        assert "Tile: 0/0/0" in text
        assert "Mean elevation: 100.0m" in text

    @pytest.mark.asyncio
    async def test_missing_token(self, terrain_tools, mock_manager):
        mock_manager.access_token = None
        with patch(FETCH) as mock_fetch:
            result = json.loads(
                await terrain_tools["terrain_tile_summary"](lon=0.0, lat=0.0, zoom=0)
            )
        assert "MAPBOX_ACCESS_TOKEN" in result["error"]
        mock_fetch.assert_not_called()
