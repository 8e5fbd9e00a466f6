"""
Multi-source flood fill.

Water enters at every terrain source and spreads breadth-first to orthogonal
neighbours. Two thresholds are involved:

- a dequeued cell is marked flooded only if its height is strictly below the
  water height;
- water spreads into a neighbour (marking and enqueueing it) when the
  neighbour's height is at most the water height.

So a neighbour sitting exactly at water level is marked when it is reached,
while a source sitting exactly at water level is not. Keep both comparisons
as they are; the island and land metrics depend on them.
"""

from collections import deque

import numpy as np
import structlog

from .grid import Terrain

logger = structlog.get_logger()

ORTHOGONAL_OFFSETS = ((1, 0), (-1, 0), (0, 1), (0, -1))


class FloodEngine:
    """Computes submersion masks for a terrain at a given water height."""

    def flood(self, terrain: Terrain, water_height: float) -> np.ndarray:
        """
        Flood the terrain from its sources.

        Args:
            terrain: Terrain to flood
            water_height: Water level

        Returns:
            Fresh (rows, cols) bool array, True where the cell is underwater

        Raises:
            OutOfRangeError: if any source lies outside the terrain
        """
        sources = [terrain.require(s, what="water source") for s in terrain.sources]

        heights = terrain.heights
        rows, cols = terrain.shape
        flooded = np.zeros((rows, cols), dtype=bool)

        queue = deque((s.row, s.col) for s in sources)
        while queue:
            r, c = queue.popleft()
            if heights[r, c] < water_height:
                flooded[r, c] = True

            for dr, dc in ORTHOGONAL_OFFSETS:
                nr, nc = r + dr, c + dc
                if not (0 <= nr < rows and 0 <= nc < cols):
                    continue
                if flooded[nr, nc] or heights[nr, nc] > water_height:
                    continue
                flooded[nr, nc] = True
                queue.append((nr, nc))

        logger.debug(
            "Flood completed",
            water_height=water_height,
            sources=len(sources),
            flooded_cells=int(flooded.sum()),
        )
        return flooded


def flood(terrain: Terrain, water_height: float) -> np.ndarray:
    """Shortcut for ``FloodEngine().flood(terrain, water_height)``."""
    return FloodEngine().flood(terrain, water_height)
