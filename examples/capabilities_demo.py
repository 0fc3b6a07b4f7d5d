#!/usr/bin/env python3
"""
Capabilities Demo -- chuk-mcp-terrain

Quick-start script showing what the server can do, without any network
access. Prints server status, full capabilities, and a tile lookup in
both output modes.

Usage:
    python examples/capabilities_demo.py
"""

import asyncio

from tool_runner import ToolRunner


async def main() -> None:
    runner = ToolRunner()

    print("=" * 60)
    print("chuk-mcp-terrain -- Server Capabilities")
    print("=" * 60)

    print(f"\nRegistered tools ({len(runner.tool_names)}):")
    for name in sorted(runner.tool_names):
        print(f"  - {name}")

    status = await runner.run("terrain_status")
    print("\nServer Status:")
    print(f"  {status['server']} v{status['version']}")
    print(f"  Tile URL: {status['tile_url']}")
    print(f"  Access token: {'configured' if status['token_configured'] else 'not configured'}")

    caps = await runner.run("terrain_capabilities")
    print("\nCapabilities:")
    print(f"  Tiles: {caps['tile_size']}px, zoom 0-{caps['max_zoom']}")
    print(f"  Encoding: {caps['elevation_encoding']}")
    print(f"  Aspect labels: {', '.join(caps['aspect_labels'])}")
    print(f"  Guidance: {caps['llm_guidance']}")

    # ---------------------------------------------------------------
    # Dual output mode: text vs JSON
    # ---------------------------------------------------------------
    print("\n" + "-" * 60)
    print("Tile lookup: Mount Rainier at zoom 12")
    print("-" * 60)

    print("\nJSON:")
    print(await runner.run("terrain_tile_address", lon=-121.7603, lat=46.8523, zoom=12))
    print("\nText:")
    print(await runner.run_text("terrain_tile_address", lon=-121.7603, lat=46.8523, zoom=12))


if __name__ == "__main__":
    asyncio.run(main())
