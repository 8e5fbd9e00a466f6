"""
Grid value types.

GridLocation is the coordinate key used everywhere (flood masks, union-find,
probe queries). Terrain bundles the elevation matrix with the cells where
water enters the map.
"""

from dataclasses import dataclass, field
from typing import Iterable, Iterator, Tuple, Union

import numpy as np

from ..exceptions import InvalidTerrainError, OutOfRangeError


@dataclass(frozen=True, order=True)
class GridLocation:
    """A (row, col) cell on the terrain grid."""

    row: int
    col: int

    def __str__(self) -> str:
        return f"({self.row}, {self.col})"

    def __iter__(self) -> Iterator[int]:
        yield self.row
        yield self.col


CellLike = Union[GridLocation, Tuple[int, int]]


def as_location(cell: CellLike) -> GridLocation:
    """Coerce a (row, col) pair into a GridLocation."""
    if isinstance(cell, GridLocation):
        return cell
    row, col = cell
    return GridLocation(int(row), int(col))


def _as_height_array(heights) -> np.ndarray:
    if isinstance(heights, np.ndarray):
        arr = heights
    else:
        rows = list(heights)
        if not rows:
            raise InvalidTerrainError("terrain has no rows")
        widths = {len(row) for row in rows}
        if len(widths) != 1:
            raise InvalidTerrainError(
                f"terrain rows have inconsistent lengths: {sorted(widths)}"
            )
        arr = np.asarray(rows)

    if arr.ndim != 2:
        raise InvalidTerrainError(f"terrain must be 2-D, got {arr.ndim} dimensions")
    if arr.shape[0] == 0 or arr.shape[1] == 0:
        raise InvalidTerrainError(f"terrain must be non-empty, got shape {arr.shape}")

    try:
        arr = np.array(arr, dtype=np.float64)
    except (TypeError, ValueError) as exc:
        raise InvalidTerrainError(f"terrain heights must be numeric: {exc}") from exc
    arr.setflags(write=False)
    return arr


@dataclass(frozen=True, eq=False)
class Terrain:
    """
    Elevation grid plus water sources.

    Heights are copied into a read-only float64 array so nothing downstream
    can change them. Sources are kept as given; the flood engine checks them
    when it uses them.
    """

    heights: np.ndarray
    sources: Tuple[GridLocation, ...] = field(default_factory=tuple)

    def __post_init__(self):
        object.__setattr__(self, "heights", _as_height_array(self.heights))
        object.__setattr__(
            self, "sources", tuple(as_location(s) for s in self.sources)
        )

    @property
    def rows(self) -> int:
        return self.heights.shape[0]

    @property
    def cols(self) -> int:
        return self.heights.shape[1]

    @property
    def shape(self) -> Tuple[int, int]:
        return self.heights.shape

    @property
    def size(self) -> int:
        return self.heights.size

    def contains(self, cell: CellLike) -> bool:
        row, col = cell
        return 0 <= row < self.rows and 0 <= col < self.cols

    def require(self, cell: CellLike, what: str = "cell") -> GridLocation:
        """Return cell as a GridLocation, raising OutOfRangeError if off-grid."""
        loc = as_location(cell)
        if not self.contains(loc):
            raise OutOfRangeError(loc, self.shape, what)
        return loc

    def height_at(self, cell: CellLike) -> float:
        loc = self.require(cell)
        return float(self.heights[loc.row, loc.col])

    def cells(self) -> Iterable[GridLocation]:
        for r in range(self.rows):
            for c in range(self.cols):
                yield GridLocation(r, c)

    def __str__(self) -> str:
        sources = ", ".join(str(s) for s in self.sources)
        return f"Terrain({self.rows}x{self.cols}, sources=[{sources}])"
