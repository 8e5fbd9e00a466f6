"""
Rising tides: flood simulation and island counting on elevation grids.
"""

from .core import FloodEngine, GridLocation, Terrain, TerrainAnalyzer, WeightedQuickUnionUF
from .exceptions import (
    InvalidTerrainError,
    OutOfRangeError,
    TerrainDownloadError,
    TerrainError,
    TerrainFormatError,
)

__version__ = "0.1.0"

__all__ = ['FloodEngine', 'GridLocation', 'Terrain', 'TerrainAnalyzer', 'WeightedQuickUnionUF',
           'TerrainError', 'OutOfRangeError', 'InvalidTerrainError', 'TerrainFormatError',
           'TerrainDownloadError']
