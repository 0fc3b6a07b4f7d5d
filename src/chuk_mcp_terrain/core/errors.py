"""
Error taxonomy for terrain decoding.

All errors derive from ValueError: they are deterministic consequences of bad
input and are never retried.
"""


class TerrainError(ValueError):
    """Base class for terrain decoding failures."""


class InvalidZoomError(TerrainError):
    """Zoom level is negative."""


class OutOfBoundsError(TerrainError):
    """Pixel or tile index lies outside its valid range."""


class InvalidElevationError(TerrainError):
    """Decoded elevation is not finite, or the tile buffer is malformed."""


class TileUnavailableError(TerrainError):
    """The tile source answered without terrain data for the requested tile."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
