"""
Terrain analysis under a hypothetical water level.

TerrainAnalyzer answers questions about one terrain: elevation extrema,
which cells are flooded, how much land is visible, how much land a change in
water level costs, and how many islands remain. Every call works on its own
freshly computed flood mask (and union-find, for islands), so a single
analyzer can be shared between threads.
"""

from typing import Optional, Tuple

import numpy as np
import structlog

from .flooding import FloodEngine
from .grid import CellLike, Terrain
from .union_find import WeightedQuickUnionUF

logger = structlog.get_logger()

# Half of the 8-neighbourhood; scanning these from every cell visits each
# adjacent pair exactly once.
FORWARD_OFFSETS = ((0, 1), (1, -1), (1, 0), (1, 1))


class TerrainAnalyzer:
    """Flood-based metrics for a single terrain."""

    def __init__(self, terrain: Terrain, engine: Optional[FloodEngine] = None):
        """
        Args:
            terrain: Terrain to analyze (never modified)
            engine: Flood engine to use, a default FloodEngine if omitted
        """
        self.terrain = terrain
        self.engine = engine or FloodEngine()

    def elevation_extrema(self) -> Tuple[float, float]:
        """Lowest and highest elevation on the terrain, as (min, max)."""
        heights = self.terrain.heights
        return float(heights.min()), float(heights.max())

    def flooded_regions_in(self, height: float) -> np.ndarray:
        """Submersion mask at the given water height."""
        return self.engine.flood(self.terrain, height)

    def is_flooded(self, height: float, cell: CellLike) -> bool:
        loc = self.terrain.require(cell)
        return bool(self.flooded_regions_in(height)[loc.row, loc.col])

    def height_above_water(self, height: float, cell: CellLike) -> float:
        """
        Elevation of cell relative to the water level.

        Negative values are depth below water, positive values height above.
        """
        return self.terrain.height_at(cell) - height

    def flooded_cell_count(self, height: float) -> int:
        return int(np.count_nonzero(self.flooded_regions_in(height)))

    def total_visible_land(self, height: float) -> int:
        """Number of cells that are not flooded at the given water height."""
        return int(np.count_nonzero(~self.flooded_regions_in(height)))

    def land_lost(self, height: float, new_height: float) -> int:
        """
        Change in visible land when the water moves from height to new_height.

        Positive means land is lost, negative means land is gained.
        """
        return self.total_visible_land(height) - self.total_visible_land(new_height)

    def num_of_islands(self, height: float) -> int:
        """
        Count islands at the given water height.

        An island is a maximal group of non-flooded cells connected through
        any of the 8 neighbouring directions, so two landmasses touching only
        at a corner are one island.
        """
        land = ~self.flooded_regions_in(height)
        rows, cols = self.terrain.shape
        uf = WeightedQuickUnionUF(rows, cols)

        for r in range(rows):
            for c in range(cols):
                if not land[r, c]:
                    continue
                for dr, dc in FORWARD_OFFSETS:
                    nr, nc = r + dr, c + dc
                    if 0 <= nr < rows and 0 <= nc < cols and land[nr, nc]:
                        uf.union((r, c), (nr, nc))

        islands = uf.count_roots(land)
        logger.debug("Islands counted", water_height=height, islands=islands)
        return islands
