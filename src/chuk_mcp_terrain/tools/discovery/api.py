"""
Discovery tools — server status and capabilities.

These tools require no network I/O and return information about the
tile source configuration and what the server can compute.
"""

import logging

from ...constants import (
    ASPECT_LABELS,
    DISCOVERY_TOOLS,
    MAX_ZOOM,
    TERRAIN_TOOLS,
    TILE_SIZE,
    ServerConfig,
)
from ...models.responses import (
    CapabilitiesResponse,
    ErrorResponse,
    StatusResponse,
    format_response,
)

logger = logging.getLogger(__name__)


def register_discovery_tools(mcp, manager):
    """Register discovery tools with the MCP server."""

    @mcp.tool()
    async def terrain_status(output_mode: str = "json") -> str:
        """Get server status including version and tile source configuration.

        Args:
            output_mode: "json" for structured data, "text" for human-readable summary

        Returns:
            Server status information
        """
        try:
            response = StatusResponse(
                server=ServerConfig.NAME,
                version=ServerConfig.VERSION,
                tile_url=manager.tile_url,
                token_configured=manager.token_configured,
                http_timeout_s=manager.timeout,
            )
            return format_response(response, output_mode)

        except Exception as e:
            logger.error(f"terrain_status failed: {e}")
            return format_response(ErrorResponse(error=str(e)), output_mode)

    @mcp.tool()
    async def terrain_capabilities(output_mode: str = "json") -> str:
        """Get full server capabilities including tools, aspect labels,
        tile geometry, and the elevation encoding.

        Args:
            output_mode: "json" for structured data, "text" for human-readable summary

        Returns:
            Complete server capabilities
        """
        try:
            tools = DISCOVERY_TOOLS + TERRAIN_TOOLS

            response = CapabilitiesResponse(
                server=ServerConfig.NAME,
                version=ServerConfig.VERSION,
                tools=tools,
                tool_count=len(tools),
                tile_size=TILE_SIZE,
                max_zoom=MAX_ZOOM,
                cell_size_m=manager.cell_size_m,
                aspect_labels=ASPECT_LABELS,
                elevation_encoding="-10000 + (R * 65536 + G * 256 + B) * 0.1",
                llm_guidance=(
                    "Use terrain_query for elevation, slope, aspect, and roughness at a point. "
                    "Use terrain_query_points for several points in one call. "
                    "Use terrain_tile_address to see which tile and pixel a point maps to. "
                    "Use terrain_tile_summary for the elevation range of a whole tile. "
                    "Zoom 12-15 gives pixel sizes closest to the 30m slope cell size."
                ),
                message=f"{ServerConfig.NAME} v{ServerConfig.VERSION} capabilities",
            )
            return format_response(response, output_mode)

        except Exception as e:
            logger.error(f"terrain_capabilities failed: {e}")
            return format_response(ErrorResponse(error=str(e)), output_mode)
