"""
chuk-mcp-terrain: Terrain-RGB Elevation Decoding & Surface Metrics MCP Server

Maps coordinates to Web-Mercator tiles, decodes terrain-RGB elevation tiles,
and derives slope, aspect, and roughness from the 3x3 pixel neighbourhood.
"""
