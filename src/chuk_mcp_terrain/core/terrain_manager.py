"""
Terrain Manager — central orchestrator for terrain-RGB queries.

Builds tile URLs, downloads and decodes tiles, and runs point queries.
All public async methods wrap synchronous I/O and decoding via asyncio.to_thread().
Tiles are not cached between calls.
"""

import asyncio
import logging
import os
from dataclasses import dataclass
from typing import Any

import numpy as np

from ..constants import (
    DEFAULT_CELL_SIZE_M,
    DEFAULT_HTTP_TIMEOUT,
    DEFAULT_TILE_URL,
    EnvVar,
    ErrorMessages,
)
from .query import TerrainSample, locate_tile, query_terrain
from .tile_math import TileAddress, pixel_in_tile, tile_address, tile_bounds

logger = logging.getLogger(__name__)


@dataclass
class TileSummaryResult:
    """Elevation statistics for one whole tile."""

    tile: TileAddress
    bounds: list[float]
    elevation_min_m: float
    elevation_max_m: float
    elevation_mean_m: float


class TerrainManager:
    """Central manager for terrain-RGB tile queries."""

    def __init__(
        self,
        tile_url: str | None = None,
        access_token: str | None = None,
        timeout: float | None = None,
        cell_size_m: float = DEFAULT_CELL_SIZE_M,
    ) -> None:
        self.tile_url = tile_url or os.environ.get(EnvVar.TILE_URL, DEFAULT_TILE_URL)
        self.access_token = access_token or os.environ.get(EnvVar.ACCESS_TOKEN)
        if timeout is None:
            timeout = float(os.environ.get(EnvVar.HTTP_TIMEOUT, DEFAULT_HTTP_TIMEOUT))
        self.timeout = timeout
        self.cell_size_m = cell_size_m

    @property
    def token_configured(self) -> bool:
        return bool(self.access_token)

    # ------------------------------------------------------------------
    # Tile math (sync, no I/O)
    # ------------------------------------------------------------------

    def tile_address(self, lon: float, lat: float, zoom: int) -> dict:
        """Locate the tile and pixel under a coordinate."""
        address = tile_address(lon, lat, zoom)
        pixel = pixel_in_tile(lon, lat, zoom)
        return {
            "tile": address,
            "pixel": pixel,
            "bounds": tile_bounds(address),
        }

    # ------------------------------------------------------------------
    # Queries (async)
    # ------------------------------------------------------------------

    async def sample_tile(self, lon: float, lat: float, zoom: int, tile: Any) -> TerrainSample:
        """Query a tile buffer the caller already holds."""
        return await asyncio.to_thread(query_terrain, lon, lat, zoom, tile, self.cell_size_m)

    async def fetch_tile(self, address: TileAddress) -> bytes:
        """Download one tile and decode it to an RGBA buffer."""
        from . import raster_io

        url = self._tile_url(address)
        logger.info(f"Fetching terrain tile {address}")
        data = await asyncio.to_thread(raster_io.fetch_tile_bytes, url, address, self.timeout)
        return await asyncio.to_thread(raster_io.png_to_raster_tile, data)

    async def fetch_terrain(self, lon: float, lat: float, zoom: int) -> TerrainSample:
        """Fetch the tile under a coordinate and query it."""
        address = locate_tile(lon, lat, zoom)
        tile = await self.fetch_tile(address)
        return await self.sample_tile(lon, lat, zoom, tile)

    async def fetch_terrain_points(
        self,
        points: list[list[float]],
        zoom: int,
    ) -> list[TerrainSample]:
        """
        Query several coordinates at one zoom.

        Each distinct tile is downloaded once per call; results keep the
        order of `points`.
        """
        if not points:
            raise ValueError(ErrorMessages.NO_POINTS)
        for p in points:
            if len(p) != 2:
                raise ValueError(ErrorMessages.INVALID_POINT.format(p))

        addresses = [locate_tile(lon, lat, zoom) for lon, lat in points]
        unique = list(dict.fromkeys(addresses))
        tiles = await asyncio.gather(*(self.fetch_tile(a) for a in unique))
        by_address = dict(zip(unique, tiles))

        return list(
            await asyncio.gather(
                *(
                    self.sample_tile(lon, lat, zoom, by_address[address])
                    for (lon, lat), address in zip(points, addresses)
                )
            )
        )

    async def tile_summary(self, lon: float, lat: float, zoom: int) -> TileSummaryResult:
        """Elevation range of the whole tile under a coordinate."""
        from .elevation_decoder import decode_tile

        address = locate_tile(lon, lat, zoom)
        tile = await self.fetch_tile(address)
        elevation = await asyncio.to_thread(decode_tile, tile)

        return TileSummaryResult(
            tile=address,
            bounds=tile_bounds(address),
            elevation_min_m=float(np.min(elevation)),
            elevation_max_m=float(np.max(elevation)),
            elevation_mean_m=float(np.mean(elevation)),
        )

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _tile_url(self, address: TileAddress) -> str:
        """Build the download URL, refusing token templates without a token."""
        from .raster_io import build_tile_url

        if "{token}" in self.tile_url and not self.access_token:
            raise ValueError(ErrorMessages.MISSING_TOKEN.format(EnvVar.ACCESS_TOKEN))
        return build_tile_url(self.tile_url, address, self.access_token)
