"""Core terrain decoding: tile math, terrain-RGB decoding, surface metrics, queries."""
