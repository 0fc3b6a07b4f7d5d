"""Response models for chuk-mcp-terrain."""

from .responses import (
    CapabilitiesResponse,
    ErrorResponse,
    StatusResponse,
    TerrainPointInfo,
    TerrainPointsResponse,
    TerrainQueryResponse,
    TileAddressResponse,
    TileSummaryResponse,
    format_response,
)

__all__ = [
    "ErrorResponse",
    "TileAddressResponse",
    "TerrainPointInfo",
    "TerrainQueryResponse",
    "TerrainPointsResponse",
    "TileSummaryResponse",
    "StatusResponse",
    "CapabilitiesResponse",
    "format_response",
]
