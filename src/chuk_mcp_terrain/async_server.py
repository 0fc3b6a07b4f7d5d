#!/usr/bin/env python3
"""
Async Terrain MCP Server using chuk-mcp-server

Terrain-RGB elevation decoding and surface metrics. Downloads 256px
terrain-RGB tiles from the configured tile source and derives elevation,
slope, aspect, and roughness at requested points.
"""

import logging

from chuk_mcp_server import ChukMCPServer

from .core.terrain_manager import TerrainManager
from .tools.discovery import register_discovery_tools
from .tools.terrain import register_terrain_tools

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

# Create the MCP server instance
mcp = ChukMCPServer("chuk-mcp-terrain")

# Create terrain manager instance
manager = TerrainManager()

# Register all tool modules
register_discovery_tools(mcp, manager)
register_terrain_tools(mcp, manager)

# Run the server
if __name__ == "__main__":
    logger.info("Starting Terrain MCP Server...")
    logger.info(f"Tile source: {manager.tile_url}")
    mcp.run(stdio=True)
