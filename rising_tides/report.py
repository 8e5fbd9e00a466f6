"""
Analysis reports for display layers.

Collects every TerrainAnalyzer result for one request into a pydantic model,
and runs water level sweeps concurrently (each analysis is independent, so
the same terrain can be shared between worker threads).
"""

from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional, Sequence, Tuple

import structlog
from pydantic import BaseModel, Field

from .core.analyzer import TerrainAnalyzer
from .core.grid import CellLike

logger = structlog.get_logger()


class AnalysisReport(BaseModel):
    """Everything the analyzer reports for one water level request."""

    rows: int
    cols: int
    water_height: float
    future_water_height: float
    lowest_point: float
    highest_point: float
    cell: Tuple[int, int] = Field(..., description="Probed (row, col)")
    cell_flooded: bool
    cell_height_above_water: float
    cell_height_relation: str = Field(..., description='"meters above" or "meters below"')
    total_visible_land: int
    land_lost: int
    land_change_direction: str = Field(..., description='"Will lose" or "Will gain"')
    islands: int

    def to_text(self) -> str:
        row, col = self.cell
        lines = [
            f"Terrain: {self.rows} rows x {self.cols} columns",
            f"Elevation Extrema: lowest point {self.lowest_point} meters / "
            f"highest point {self.highest_point} meters",
            f"Is ({row}, {col}) Flooded: {self.cell_flooded}",
            f"Height at ({row}, {col}): {abs(self.cell_height_above_water)} "
            f"{self.cell_height_relation} sea level",
            f"Total Land: {self.total_visible_land} cells of land above water",
            f"Land Lost: {self.land_change_direction} {abs(self.land_lost)} cells of land",
            f"Number of Islands: {self.islands} islands",
        ]
        return "\n".join(lines)


class WaterLevelSummary(BaseModel):
    """Land metrics at a single water height."""

    water_height: float
    total_visible_land: int
    flooded_cells: int
    islands: int


def build_report(
    analyzer: TerrainAnalyzer,
    water_height: float,
    future_water_height: float,
    cell: CellLike,
) -> AnalysisReport:
    """
    Run every analysis for one request.

    Raises:
        OutOfRangeError: if cell lies outside the terrain
    """
    loc = analyzer.terrain.require(cell)
    lowest, highest = analyzer.elevation_extrema()
    above = analyzer.height_above_water(water_height, loc)
    lost = analyzer.land_lost(water_height, future_water_height)

    return AnalysisReport(
        rows=analyzer.terrain.rows,
        cols=analyzer.terrain.cols,
        water_height=water_height,
        future_water_height=future_water_height,
        lowest_point=lowest,
        highest_point=highest,
        cell=(loc.row, loc.col),
        cell_flooded=analyzer.is_flooded(water_height, loc),
        cell_height_above_water=above,
        cell_height_relation="meters below" if above < 0 else "meters above",
        total_visible_land=analyzer.total_visible_land(water_height),
        land_lost=lost,
        land_change_direction="Will gain" if lost < 0 else "Will lose",
        islands=analyzer.num_of_islands(water_height),
    )


def summarize_water_level(analyzer: TerrainAnalyzer, water_height: float) -> WaterLevelSummary:
    flooded = analyzer.flooded_cell_count(water_height)
    return WaterLevelSummary(
        water_height=water_height,
        total_visible_land=analyzer.terrain.size - flooded,
        flooded_cells=flooded,
        islands=analyzer.num_of_islands(water_height),
    )


def water_levels(start: float, stop: float, step: float) -> List[float]:
    """Water heights from start to stop inclusive, spaced by step."""
    if step <= 0:
        raise ValueError("step must be positive")
    if stop < start:
        raise ValueError("stop must not be below start")
    count = int((stop - start) / step + 1e-9) + 1
    return [start + i * step for i in range(count)]


def sweep_water_levels(
    analyzer: TerrainAnalyzer,
    heights: Sequence[float],
    max_workers: Optional[int] = None,
) -> List[WaterLevelSummary]:
    """
    Summarize land at many water heights concurrently.

    Results come back in the same order as heights.
    """
    logger.info("Starting water level sweep", levels=len(heights), max_workers=max_workers)
    with ThreadPoolExecutor(max_workers=max_workers) as pool:
        summaries = list(pool.map(lambda h: summarize_water_level(analyzer, h), heights))
    logger.info("Water level sweep completed", levels=len(summaries))
    return summaries
