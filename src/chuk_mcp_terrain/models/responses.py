"""
Response models for chuk-mcp-terrain tools.

All tool responses are Pydantic models for type safety and consistent API.
"""

from pydantic import BaseModel, ConfigDict, Field

from ..core.query import TerrainSample


def format_response(model: BaseModel, output_mode: str = "json") -> str:
    """Format a response model as JSON or human-readable text.

    Args:
        model: Pydantic response model instance
        output_mode: "json" (default) or "text"

    Returns:
        Formatted string
    """
    if output_mode == "text" and hasattr(model, "to_text"):
        return str(model.to_text())
    return str(model.model_dump_json())


class ErrorResponse(BaseModel):
    """Error response model for tool failures."""

    model_config = ConfigDict(extra="forbid")

    error: str = Field(..., description="Error message describing what went wrong")

    def to_text(self) -> str:
        return f"Error: {self.error}"


# ---------------------------------------------------------------------------
# Tile math
# ---------------------------------------------------------------------------


class TileAddressResponse(BaseModel):
    """Response model for locating the tile and pixel under a coordinate."""

    model_config = ConfigDict(extra="forbid")

    lon: float = Field(..., description="Queried longitude")
    lat: float = Field(..., description="Queried latitude")
    zoom: int = Field(..., description="Zoom level", ge=0)
    tile_x: int = Field(..., description="Tile column (not clamped to the world grid)")
    tile_y: int = Field(..., description="Tile row (not clamped to the world grid)")
    pixel_x: int = Field(..., description="Pixel column inside the tile", ge=0, lt=256)
    pixel_y: int = Field(..., description="Pixel row inside the tile", ge=0, lt=256)
    bounds: list[float] = Field(..., description="Tile extent [west, south, east, north]")
    message: str = Field(..., description="Operation result message")

    def to_text(self) -> str:
        bounds = ", ".join(f"{b:.6f}" for b in self.bounds)
        lines = [
            f"Tile: {self.zoom}/{self.tile_x}/{self.tile_y}",
            f"Pixel: ({self.pixel_x}, {self.pixel_y})",
            f"Point: ({self.lon:.4f}, {self.lat:.4f})",
            f"Bounds: [{bounds}]",
        ]
        return "\n".join(lines)


# ---------------------------------------------------------------------------
# Terrain queries
# ---------------------------------------------------------------------------


class TerrainPointInfo(BaseModel):
    """Elevation and surface metrics at one coordinate."""

    model_config = ConfigDict(extra="forbid")

    lon: float = Field(..., description="Longitude")
    lat: float = Field(..., description="Latitude")
    elevation_m: float = Field(..., description="Decoded elevation in metres")
    slope_deg: float = Field(..., description="Slope in degrees (Horn's method)", ge=0)
    aspect_deg: float = Field(..., description="Aspect in degrees [0, 360)", ge=0, lt=360)
    aspect: str = Field(..., description="Aspect octant (N, NE, E, SE, S, SW, W, NW)")
    roughness: float = Field(..., description="RMS neighbour elevation difference", ge=0)
    tile: list[int] = Field(..., description="Tile address [zoom, x, y]")
    pixel: list[int] = Field(..., description="Pixel inside the tile [x, y]")

    @classmethod
    def from_sample(cls, sample: TerrainSample) -> "TerrainPointInfo":
        return cls(
            lon=sample.longitude,
            lat=sample.latitude,
            elevation_m=sample.elevation_m,
            slope_deg=sample.slope_deg,
            aspect_deg=sample.aspect_deg,
            aspect=sample.aspect_label,
            roughness=sample.roughness,
            tile=[sample.tile.zoom, sample.tile.x, sample.tile.y],
            pixel=[sample.pixel.x, sample.pixel.y],
        )

    def to_text(self) -> str:
        return (
            f"({self.lon:.4f}, {self.lat:.4f}): {self.elevation_m:.1f}m, "
            f"slope {self.slope_deg:.1f}°, aspect {self.aspect}, roughness {self.roughness:.1f}m"
        )


class TerrainQueryResponse(BaseModel):
    """Response model for a single-point terrain query."""

    model_config = ConfigDict(extra="forbid")

    zoom: int = Field(..., description="Zoom level of the sampled tile", ge=0)
    point: TerrainPointInfo = Field(..., description="Terrain sample")
    cell_size_m: float = Field(..., description="Horizontal sample spacing used for slope")
    message: str = Field(..., description="Operation result message")

    def to_text(self) -> str:
        p = self.point
        lines = [
            f"Longitude: {p.lon:.4f}°",
            f"Latitude: {p.lat:.4f}°",
            f"Elevation: {p.elevation_m:.1f} m",
            f"Slope: {p.slope_deg:.1f}°",
            f"Aspect: {p.aspect}",
            f"Roughness: {p.roughness:.1f} m",
            f"Tile: {p.tile[0]}/{p.tile[1]}/{p.tile[2]} pixel ({p.pixel[0]}, {p.pixel[1]})",
        ]
        return "\n".join(lines)


class TerrainPointsResponse(BaseModel):
    """Response model for a multi-point terrain query."""

    model_config = ConfigDict(extra="forbid")

    zoom: int = Field(..., description="Zoom level of the sampled tiles", ge=0)
    point_count: int = Field(..., description="Number of points queried", ge=1)
    points: list[TerrainPointInfo] = Field(..., description="Terrain samples, in request order")
    elevation_range: list[float] = Field(..., description="[min, max] elevation in metres")
    message: str = Field(..., description="Operation result message")

    def to_text(self) -> str:
        lines = [
            f"Terrain at {self.point_count} points (zoom {self.zoom})",
            f"Elevation range: {self.elevation_range[0]:.1f}m to {self.elevation_range[1]:.1f}m",
            "",
        ]
        for p in self.points:
            lines.append(f"  {p.to_text()}")
        return "\n".join(lines)


class TileSummaryResponse(BaseModel):
    """Response model for whole-tile elevation statistics."""

    model_config = ConfigDict(extra="forbid")

    tile: list[int] = Field(..., description="Tile address [zoom, x, y]")
    bounds: list[float] = Field(..., description="Tile extent [west, south, east, north]")
    elevation_range: list[float] = Field(..., description="[min, max] elevation in metres")
    elevation_mean_m: float = Field(..., description="Mean elevation in metres")
    message: str = Field(..., description="Operation result message")

    def to_text(self) -> str:
        bounds = ", ".join(f"{b:.6f}" for b in self.bounds)
        lines = [
            f"Tile: {self.tile[0]}/{self.tile[1]}/{self.tile[2]}",
            f"Bounds: [{bounds}]",
            f"Elevation range: {self.elevation_range[0]:.1f}m to {self.elevation_range[1]:.1f}m",
            f"Mean elevation: {self.elevation_mean_m:.1f}m",
        ]
        return "\n".join(lines)


# ---------------------------------------------------------------------------
# Discovery
# ---------------------------------------------------------------------------


class StatusResponse(BaseModel):
    """Response model for server status queries."""

    model_config = ConfigDict(extra="forbid")

    server: str = Field(default="chuk-mcp-terrain", description="Server name")
    version: str = Field(default="0.1.0", description="Server version")
    tile_url: str = Field(..., description="Tile URL template ({z}/{x}/{y}, {token})")
    token_configured: bool = Field(..., description="Whether an access token is set")
    http_timeout_s: float = Field(..., description="Tile download timeout in seconds")

    def to_text(self) -> str:
        token = "configured" if self.token_configured else "not configured"
        lines = [
            f"{self.server} v{self.version}",
            f"Tile URL: {self.tile_url}",
            f"Access token: {token}",
            f"HTTP timeout: {self.http_timeout_s:.0f}s",
        ]
        return "\n".join(lines)


class CapabilitiesResponse(BaseModel):
    """Response model for server capabilities listing."""

    model_config = ConfigDict(extra="forbid")

    server: str = Field(..., description="Server name")
    version: str = Field(..., description="Server version")
    tools: list[str] = Field(..., description="Available tool names")
    tool_count: int = Field(..., description="Number of available tools", ge=0)
    tile_size: int = Field(..., description="Tile edge length in pixels")
    max_zoom: int = Field(..., description="Highest supported zoom level")
    cell_size_m: float = Field(..., description="Horizontal spacing used for slope and aspect")
    aspect_labels: list[str] = Field(..., description="Aspect octant labels, clockwise from N")
    elevation_encoding: str = Field(..., description="Terrain-RGB decoding formula")
    llm_guidance: str = Field(..., description="LLM-friendly usage guidance for the server")
    message: str = Field(..., description="Operation result message")

    def to_text(self) -> str:
        lines = [
            f"{self.server} v{self.version}",
            f"Tools ({self.tool_count}): {', '.join(self.tools)}",
            f"Tiles: {self.tile_size}px, zoom 0-{self.max_zoom}",
            f"Cell size: {self.cell_size_m:.0f}m",
            f"Aspect labels: {', '.join(self.aspect_labels)}",
            f"Encoding: {self.elevation_encoding}",
            f"Guidance: {self.llm_guidance}",
        ]
        return "\n".join(lines)
