"""Tests for grid value types."""

import numpy as np
import pytest

from rising_tides.core.grid import GridLocation, Terrain, as_location
from rising_tides.exceptions import InvalidTerrainError, OutOfRangeError


class TestGridLocation:
    """GridLocation behaves as a plain value."""

    def test_equality_by_value(self):
        assert GridLocation(2, 3) == GridLocation(2, 3)
        assert GridLocation(2, 3) is not GridLocation(2, 3)
        assert GridLocation(2, 3) != GridLocation(3, 2)

    def test_hash_by_value(self):
        cells = {GridLocation(1, 1), GridLocation(1, 1), GridLocation(0, 1)}
        assert len(cells) == 2
        assert GridLocation(1, 1) in cells

    def test_ordering(self):
        cells = sorted([GridLocation(1, 0), GridLocation(0, 5), GridLocation(0, 1)])
        assert cells == [GridLocation(0, 1), GridLocation(0, 5), GridLocation(1, 0)]

    def test_immutable(self):
        cell = GridLocation(0, 0)
        with pytest.raises(AttributeError):
            cell.row = 4

    def test_unpacking_and_str(self):
        row, col = GridLocation(4, 7)
        assert (row, col) == (4, 7)
        assert str(GridLocation(4, 7)) == "(4, 7)"

    def test_as_location(self):
        assert as_location((3, 4)) == GridLocation(3, 4)
        loc = GridLocation(1, 2)
        assert as_location(loc) is loc


class TestTerrain:
    """Terrain construction and lookups."""

    def test_heights_copied_read_only(self):
        source = [[1, 2], [3, 4]]
        terrain = Terrain(source, [(0, 0)])
        assert terrain.heights.dtype == np.float64
        assert terrain.shape == (2, 2)
        assert terrain.size == 4
        with pytest.raises(ValueError):
            terrain.heights[0, 0] = 10.0

    def test_numpy_input_not_aliased(self):
        source = np.zeros((2, 3))
        terrain = Terrain(source, [])
        source[0, 0] = 99.0
        assert terrain.heights[0, 0] == 0.0
        assert (terrain.rows, terrain.cols) == (2, 3)

    def test_sources_coerced(self):
        terrain = Terrain([[0.0]], [(0, 0)])
        assert terrain.sources == (GridLocation(0, 0),)

    def test_ragged_rows_rejected(self):
        with pytest.raises(InvalidTerrainError):
            Terrain([[1, 2, 3], [4, 5]], [])

    @pytest.mark.parametrize("heights", [[], [[]], np.zeros((0, 4)), np.zeros(5)])
    def test_empty_or_flat_rejected(self, heights):
        with pytest.raises(InvalidTerrainError):
            Terrain(heights, [])

    def test_non_numeric_rejected(self):
        with pytest.raises(InvalidTerrainError):
            Terrain([["a", "b"]], [])

    def test_out_of_range_source_allowed_at_construction(self):
        terrain = Terrain([[0, 0]], [(5, 5)])
        assert terrain.sources == (GridLocation(5, 5),)

    def test_contains_and_require(self):
        terrain = Terrain(np.zeros((3, 4)), [])
        assert terrain.contains((2, 3))
        assert not terrain.contains((3, 0))
        assert not terrain.contains((-1, 0))
        assert terrain.require((1, 1)) == GridLocation(1, 1)
        with pytest.raises(OutOfRangeError) as excinfo:
            terrain.require(GridLocation(0, -1))
        assert excinfo.value.cell == GridLocation(0, -1)
        assert excinfo.value.shape == (3, 4)

    def test_out_of_range_is_index_error(self):
        terrain = Terrain(np.zeros((1, 1)), [])
        with pytest.raises(IndexError):
            terrain.height_at((1, 0))

    def test_height_at(self):
        terrain = Terrain([[1.5, 2.5], [3.5, 4.5]], [])
        assert terrain.height_at(GridLocation(1, 0)) == 3.5

    def test_cells_row_major(self):
        terrain = Terrain(np.zeros((2, 2)), [])
        assert list(terrain.cells()) == [
            GridLocation(0, 0), GridLocation(0, 1), GridLocation(1, 0), GridLocation(1, 1)
        ]
