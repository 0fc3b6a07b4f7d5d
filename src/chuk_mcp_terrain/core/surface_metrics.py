"""
Local surface metrics from a 3x3 elevation window.

Uses Horn's method (1981) for the gradient:

    z1 z2 z3
    z4 z5 z6        dx = ((z3 + 2*z6 + z9) - (z1 + 2*z4 + z7)) / (8 * cell)
    z7 z8 z9        dy = ((z7 + 2*z8 + z9) - (z1 + 2*z2 + z3)) / (8 * cell)

Rows run top (north) to bottom (south), so dy grows southwards. Aspect is
atan2(dy, -dx) folded into [0, 360) and bucketed into eight compass octants.
Roughness is the population RMS of the eight neighbour differences to z5.
"""

import math
from dataclasses import dataclass

from ..constants import ASPECT_LABELS, ASPECT_SECTOR_DEG, DEFAULT_CELL_SIZE_M

GRID_CELLS = 9
CENTER_INDEX = 4


@dataclass(frozen=True)
class ElevationGrid:
    """3x3 elevation window in row-major order (z1..z9), z5 is the centre."""

    values: tuple[float, ...]

    def __post_init__(self) -> None:
        if len(self.values) != GRID_CELLS:
            raise ValueError(f"ElevationGrid needs {GRID_CELLS} values, got {len(self.values)}")

    @classmethod
    def from_rows(cls, rows: list[list[float]]) -> "ElevationGrid":
        return cls(tuple(float(v) for row in rows for v in row))

    @property
    def center(self) -> float:
        return self.values[CENTER_INDEX]

    @property
    def neighbours(self) -> tuple[float, ...]:
        return self.values[:CENTER_INDEX] + self.values[CENTER_INDEX + 1 :]


@dataclass(frozen=True)
class SurfaceMetrics:
    """Slope, aspect and roughness derived from one ElevationGrid."""

    slope_deg: float
    aspect_deg: float
    aspect_label: str
    roughness: float


def horn_gradient(
    grid: ElevationGrid,
    cell_size_m: float = DEFAULT_CELL_SIZE_M,
) -> tuple[float, float]:
    """Return (dx, dy) rise-over-run using Horn's weighted differences."""
    z1, z2, z3, z4, _, z6, z7, z8, z9 = grid.values
    dx = ((z3 + 2 * z6 + z9) - (z1 + 2 * z4 + z7)) / (8 * cell_size_m)
    dy = ((z7 + 2 * z8 + z9) - (z1 + 2 * z2 + z3)) / (8 * cell_size_m)
    return dx, dy


def slope_degrees(dx: float, dy: float) -> float:
    return math.atan(math.sqrt(dx * dx + dy * dy)) * (180 / math.pi)


def aspect_degrees(dx: float, dy: float) -> float:
    """
    Compass direction of the gradient in [0, 360).

    A zero gradient has no direction; it reports 0 (north), the value
    atan2(0, 0) yields.
    """
    if dx == 0 and dy == 0:
        return 0.0
    return ((math.atan2(dy, -dx) * (180 / math.pi)) + 360) % 360


def aspect_label(aspect_deg: float) -> str:
    """Map an aspect to its octant label, N first, clockwise."""
    index = math.floor(((aspect_deg + ASPECT_SECTOR_DEG / 2) % 360) / ASPECT_SECTOR_DEG)
    return ASPECT_LABELS[index]


def roughness(grid: ElevationGrid) -> float:
    """Root-mean-square of |zi - z5| over the 8 neighbours (divisor 8)."""
    center = grid.center
    diffs = [abs(z - center) for z in grid.neighbours]
    return math.sqrt(sum(d * d for d in diffs) / len(diffs))


def compute_surface_metrics(
    grid: ElevationGrid,
    cell_size_m: float = DEFAULT_CELL_SIZE_M,
) -> SurfaceMetrics:
    """
    Reduce a 3x3 window to slope, aspect and roughness.

    Args:
        grid: Elevation window, centre = queried sample
        cell_size_m: Horizontal spacing between samples in metres

    Returns:
        SurfaceMetrics computed from this grid only
    """
    dx, dy = horn_gradient(grid, cell_size_m)
    aspect = aspect_degrees(dx, dy)
    return SurfaceMetrics(
        slope_deg=slope_degrees(dx, dy),
        aspect_deg=aspect,
        aspect_label=aspect_label(aspect),
        roughness=roughness(grid),
    )
