"""
Weighted quick-union over grid coordinates.

Used to group connected land cells when counting islands. Parent links and
component sizes live in flat int64 arrays indexed by ``row * cols + col``;
the public API speaks GridLocation.
"""

from typing import Optional

import numpy as np

from ..exceptions import OutOfRangeError
from .grid import CellLike, GridLocation, as_location


class WeightedQuickUnionUF:
    """
    Disjoint sets over a rows x cols grid.

    Every cell starts as its own root with size 1. ``union`` always hangs the
    smaller tree under the larger one, which keeps trees O(log n) deep; on a
    size tie the first argument's root goes under the second's.
    """

    def __init__(self, rows: int, cols: int):
        if rows <= 0 or cols <= 0:
            raise ValueError(f"grid must be non-empty, got {rows}x{cols}")
        self.rows = rows
        self.cols = cols
        self.parent = np.arange(rows * cols, dtype=np.int64)
        self._size = np.ones(rows * cols, dtype=np.int64)

    def _index(self, cell: CellLike) -> int:
        loc = as_location(cell)
        if not (0 <= loc.row < self.rows and 0 <= loc.col < self.cols):
            raise OutOfRangeError(loc, (self.rows, self.cols))
        return loc.row * self.cols + loc.col

    def _location(self, index: int) -> GridLocation:
        return GridLocation(index // self.cols, index % self.cols)

    def _find_index(self, x: int) -> int:
        parent = self.parent
        while parent[x] != x:
            # Path halving; roots never change.
            parent[x] = parent[parent[x]]
            x = parent[x]
        return int(x)

    def find(self, cell: CellLike) -> GridLocation:
        """Return the root of the component containing cell."""
        return self._location(self._find_index(self._index(cell)))

    def union(self, a: CellLike, b: CellLike) -> bool:
        """
        Merge the components containing a and b.

        Returns:
            True if two components were merged, False if already connected.
        """
        ra = self._find_index(self._index(a))
        rb = self._find_index(self._index(b))
        if ra == rb:
            return False

        size = self._size
        if size[ra] > size[rb]:
            ra, rb = rb, ra

        self.parent[ra] = rb
        size[rb] += size[ra]
        return True

    def connected(self, a: CellLike, b: CellLike) -> bool:
        return self._find_index(self._index(a)) == self._find_index(self._index(b))

    def size(self, cell: CellLike) -> int:
        """Number of cells in the component containing cell."""
        return int(self._size[self._find_index(self._index(cell))])

    def count_roots(self, mask: Optional[np.ndarray] = None) -> int:
        """
        Count component roots, optionally only among cells where mask is True.

        Cells excluded by the mask are skipped even if they are roots.
        """
        candidates = range(self.rows * self.cols)
        if mask is not None:
            candidates = np.flatnonzero(np.asarray(mask, dtype=bool).ravel())
        return sum(1 for i in candidates if self._find_index(int(i)) == i)
