"""
Terrain file input.
"""

from .terrain_loader import load_terrain, parse_terrain, list_terrain_files, load_web_terrain

__all__ = ['load_terrain', 'parse_terrain', 'list_terrain_files', 'load_web_terrain']
