"""
Core flood simulation and island counting.
"""

from .grid import GridLocation, Terrain
from .union_find import WeightedQuickUnionUF
from .flooding import FloodEngine, flood
from .analyzer import TerrainAnalyzer

__all__ = ['GridLocation', 'Terrain', 'WeightedQuickUnionUF',
           'FloodEngine', 'flood', 'TerrainAnalyzer']
