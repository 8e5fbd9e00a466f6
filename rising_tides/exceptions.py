"""Error types raised by terrain analysis and loading."""

from typing import Optional, Tuple


class TerrainError(Exception):
    """Base class for every error raised by rising_tides."""


class OutOfRangeError(TerrainError, IndexError):
    """A grid location lies outside the terrain bounds."""

    def __init__(self, cell, shape: Tuple[int, int], what: str = "cell"):
        self.cell = cell
        self.shape = shape
        rows, cols = shape
        super().__init__(
            f"{what} {cell} is outside the terrain "
            f"(rows 0..{rows - 1}, columns 0..{cols - 1})"
        )


class InvalidTerrainError(TerrainError, ValueError):
    """Elevation data is not a non-empty rectangular grid."""


class TerrainFormatError(InvalidTerrainError):
    """A .terrain file could not be parsed."""

    def __init__(self, message: str, source: Optional[str] = None):
        self.source = source
        if source:
            message = f"{message} ({source})"
        super().__init__(message)


class TerrainDownloadError(TerrainError):
    """A remote terrain could not be fetched."""
