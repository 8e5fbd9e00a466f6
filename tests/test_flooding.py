"""Tests for the flood engine."""

import numpy as np
import pytest

from rising_tides.core.flooding import FloodEngine, flood
from rising_tides.core.grid import GridLocation, Terrain
from rising_tides.exceptions import OutOfRangeError


@pytest.fixture
def crater():
    """3x3 ring of height 5 around a pit of height 0, source in the pit."""
    return Terrain([[5, 5, 5], [5, 0, 5], [5, 5, 5]], [GridLocation(1, 1)])


@pytest.fixture
def valley():
    """Random terrain with a low west edge where water enters."""
    rng = np.random.default_rng(42)
    heights = rng.uniform(0, 100, size=(20, 30))
    return Terrain(heights, [GridLocation(r, 0) for r in range(20)])


class TestFloodEngine:
    """Flood propagation rules."""

    def test_crater_floods_only_center(self, crater):
        mask = FloodEngine().flood(crater, 1.0)
        expected = np.zeros((3, 3), dtype=bool)
        expected[1, 1] = True
        np.testing.assert_array_equal(mask, expected)

    def test_mask_shape_and_dtype(self, crater):
        mask = flood(crater, 1.0)
        assert mask.shape == crater.shape
        assert mask.dtype == bool

    def test_water_above_everything_floods_all(self, crater):
        assert flood(crater, 6.0).all()

    def test_source_at_water_level_not_marked(self):
        terrain = Terrain([[2.0, 9.0]], [(0, 0)])
        mask = flood(terrain, 2.0)
        assert not mask[0, 0]
        assert not mask[0, 1]

    def test_neighbor_at_water_level_is_marked(self):
        terrain = Terrain([[0.0, 2.0, 1.0]], [(0, 0)])
        mask = flood(terrain, 2.0)
        np.testing.assert_array_equal(mask, [[True, True, True]])

    def test_dry_source_still_spreads(self):
        # The source itself sits above the water but its low neighbour floods.
        terrain = Terrain([[10.0, 0.0, 10.0]], [(0, 0)])
        mask = flood(terrain, 1.0)
        np.testing.assert_array_equal(mask, [[False, True, False]])

    def test_propagation_is_orthogonal_only(self):
        terrain = Terrain([[0, 9], [9, 0]], [(0, 0)])
        mask = flood(terrain, 1.0)
        np.testing.assert_array_equal(mask, [[True, False], [False, False]])

    def test_unreachable_low_cells_stay_dry(self):
        terrain = Terrain([[0, 9, 0]], [(0, 0)])
        mask = flood(terrain, 5.0)
        np.testing.assert_array_equal(mask, [[True, False, False]])

    def test_multiple_sources(self):
        terrain = Terrain([[0, 9, 0]], [(0, 0), (0, 2)])
        mask = flood(terrain, 5.0)
        np.testing.assert_array_equal(mask, [[True, False, True]])

    def test_no_sources_floods_nothing(self):
        terrain = Terrain(np.zeros((4, 4)), [])
        assert not flood(terrain, 100.0).any()

    def test_out_of_range_source(self):
        terrain = Terrain(np.zeros((2, 2)), [(0, 0), (2, 0)])
        with pytest.raises(OutOfRangeError):
            flood(terrain, 1.0)

    def test_negative_source_rejected(self):
        terrain = Terrain(np.zeros((2, 2)), [(-1, 0)])
        with pytest.raises(OutOfRangeError):
            flood(terrain, 1.0)

    def test_idempotent(self, valley):
        engine = FloodEngine()
        first = engine.flood(valley, 40.0)
        second = engine.flood(valley, 40.0)
        np.testing.assert_array_equal(first, second)
        assert first is not second

    def test_monotone_in_water_height(self, valley):
        engine = FloodEngine()
        previous = engine.flood(valley, 0.0)
        for height in np.linspace(5, 100, 20):
            current = engine.flood(valley, float(height))
            assert np.all(current[previous])
            previous = current

    def test_terrain_not_modified(self, valley):
        before = valley.heights.copy()
        flood(valley, 50.0)
        np.testing.assert_array_equal(valley.heights, before)
