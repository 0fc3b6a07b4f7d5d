"""
Terrain tools — tile lookup, point terrain queries, tile summary.

terrain_tile_address is pure math; the other tools download terrain-RGB
tiles from the configured tile source and decode them.
"""

import logging

from ...constants import SuccessMessages
from ...models.responses import (
    ErrorResponse,
    TerrainPointInfo,
    TerrainPointsResponse,
    TerrainQueryResponse,
    TileAddressResponse,
    TileSummaryResponse,
    format_response,
)

logger = logging.getLogger(__name__)


def register_terrain_tools(mcp, manager):
    """Register terrain tools with the MCP server."""

    @mcp.tool()
    async def terrain_tile_address(
        lon: float,
        lat: float,
        zoom: int,
        output_mode: str = "json",
    ) -> str:
        """Locate the Web-Mercator tile and the pixel inside it for a coordinate.

        No network access. Useful to check which tile a query will download.

        Args:
            lon: Longitude (-180 to 180)
            lat: Latitude (about -85.05 to 85.05 for valid tiles)
            zoom: Zoom level (>= 0)
            output_mode: "json" or "text"

        Returns:
            Tile address, pixel position, and tile bounds
        """
        try:
            result = manager.tile_address(lon, lat, zoom)
            tile = result["tile"]
            pixel = result["pixel"]

            response = TileAddressResponse(
                lon=lon,
                lat=lat,
                zoom=zoom,
                tile_x=tile.x,
                tile_y=tile.y,
                pixel_x=pixel.x,
                pixel_y=pixel.y,
                bounds=result["bounds"],
                message=SuccessMessages.TILE_ADDRESS.format(
                    tile.zoom, tile.x, tile.y, pixel.x, pixel.y
                ),
            )
            return format_response(response, output_mode)

        except Exception as e:
            logger.error(f"terrain_tile_address failed: {e}")
            return format_response(ErrorResponse(error=str(e)), output_mode)

    @mcp.tool()
    async def terrain_query(
        lon: float,
        lat: float,
        zoom: int,
        output_mode: str = "json",
    ) -> str:
        """Get elevation, slope, aspect, and roughness at a geographic point.

        Downloads the terrain-RGB tile under the point, decodes the elevation,
        and derives slope and aspect from the 3x3 pixel neighbourhood with
        Horn's method. Pixels past the tile edge count as 0m.

        Args:
            lon: Longitude (-180 to 180)
            lat: Latitude (about -85.05 to 85.05)
            zoom: Tile zoom level (>= 0); higher zooms sample finer pixels
            output_mode: "json" or "text"

        Returns:
            Terrain sample with elevation in metres, slope in degrees,
            aspect octant, and roughness in metres
        """
        try:
            sample = await manager.fetch_terrain(lon=lon, lat=lat, zoom=zoom)

            response = TerrainQueryResponse(
                zoom=zoom,
                point=TerrainPointInfo.from_sample(sample),
                cell_size_m=manager.cell_size_m,
                message=SuccessMessages.QUERY.format(
                    sample.elevation_m, sample.slope_deg, sample.aspect_label
                ),
            )
            return format_response(response, output_mode)

        except Exception as e:
            logger.error(f"terrain_query failed: {e}")
            return format_response(ErrorResponse(error=str(e)), output_mode)

    @mcp.tool()
    async def terrain_query_points(
        points: list[list[float]],
        zoom: int,
        output_mode: str = "json",
    ) -> str:
        """Get elevation and surface metrics at several points.

        Each distinct tile is downloaded once; results keep request order.

        Args:
            points: List of [lon, lat] pairs
            zoom: Tile zoom level (>= 0)
            output_mode: "json" or "text"

        Returns:
            Terrain samples for every point and the elevation range
        """
        try:
            samples = await manager.fetch_terrain_points(points=points, zoom=zoom)

            infos = [TerrainPointInfo.from_sample(s) for s in samples]
            elevations = [s.elevation_m for s in samples]

            response = TerrainPointsResponse(
                zoom=zoom,
                point_count=len(infos),
                points=infos,
                elevation_range=[min(elevations), max(elevations)],
                message=SuccessMessages.QUERY_POINTS.format(len(infos)),
            )
            return format_response(response, output_mode)

        except Exception as e:
            logger.error(f"terrain_query_points failed: {e}")
            return format_response(ErrorResponse(error=str(e)), output_mode)

    @mcp.tool()
    async def terrain_tile_summary(
        lon: float,
        lat: float,
        zoom: int,
        output_mode: str = "json",
    ) -> str:
        """Get the elevation range of the whole tile containing a point.

        Args:
            lon: Longitude (-180 to 180)
            lat: Latitude (about -85.05 to 85.05)
            zoom: Tile zoom level (>= 0)
            output_mode: "json" or "text"

        Returns:
            Tile address, bounds, min/max and mean elevation
        """
        try:
            result = await manager.tile_summary(lon=lon, lat=lat, zoom=zoom)
            tile = result.tile

            response = TileSummaryResponse(
                tile=[tile.zoom, tile.x, tile.y],
                bounds=result.bounds,
                elevation_range=[result.elevation_min_m, result.elevation_max_m],
                elevation_mean_m=result.elevation_mean_m,
                message=SuccessMessages.TILE_SUMMARY.format(
                    tile.zoom, tile.x, tile.y, result.elevation_min_m, result.elevation_max_m
                ),
            )
            return format_response(response, output_mode)

        except Exception as e:
            logger.error(f"terrain_tile_summary failed: {e}")
            return format_response(ErrorResponse(error=str(e)), output_mode)
