"""MCP tool registration for chuk-mcp-terrain."""
