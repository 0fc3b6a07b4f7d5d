#!/usr/bin/env python3
"""
Synthetic Cone Demo -- chuk-mcp-terrain

Builds a terrain-RGB tile holding a 1500m cone in memory, then samples
elevation, slope, aspect, and roughness around it. No network access;
shows the decoder and Horn metrics on a surface with a known shape.

Usage:
    python examples/synthetic_cone_demo.py
"""

import asyncio

import numpy as np

from chuk_mcp_terrain.core.elevation_decoder import encode_elevation
from chuk_mcp_terrain.core.terrain_manager import TerrainManager
from chuk_mcp_terrain.core.tile_math import PixelCoordinate, TileAddress, pixel_to_lonlat


def build_cone_tile() -> bytes:
    rows, cols = np.mgrid[0:256, 0:256]
    distance = np.hypot(cols - 128, rows - 128)
    elevation = np.clip(1500.0 - distance * 15.0, 0.0, None)

    rgba = np.zeros((256, 256, 4), dtype=np.uint8)
    for y in range(256):
        for x in range(256):
            rgba[y, x, :3] = encode_elevation(float(elevation[y, x]))
    rgba[:, :, 3] = 255
    return rgba.tobytes()


async def main() -> None:
    tile = build_cone_tile()
    address = TileAddress(zoom=12, x=655, y=1430)
    manager = TerrainManager(tile_url="http://localhost/{z}/{x}/{y}.png")

    print("=" * 60)
    print(f"Synthetic 1500m cone in tile {address}")
    print("=" * 60)

    probes = {
        "summit": (128, 128),
        "north flank": (128, 90),
        "east flank": (166, 128),
        "south flank": (128, 166),
        "west flank": (90, 128),
        "plain": (10, 10),
        "tile edge": (0, 200),
    }
    for name, (px, py) in probes.items():
        coord = pixel_to_lonlat(address, PixelCoordinate(x=px, y=py))
        sample = await manager.sample_tile(coord.lon, coord.lat, address.zoom, tile)
        print(
            f"  {name:12s} px ({px:3d}, {py:3d})  {sample.elevation_m:7.1f}m  "
            f"slope {sample.slope_deg:5.1f}°  aspect {sample.aspect_label:2s}  "
            f"roughness {sample.roughness:6.1f}m"
        )


if __name__ == "__main__":
    asyncio.run(main())
