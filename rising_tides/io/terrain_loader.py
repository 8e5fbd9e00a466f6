"""
Loading terrains from .terrain files.

File layout (whitespace separated):

    local                      <- or a URL where the real terrain lives
    <rows> <cols>
    <num_sources>
    <row> <col>                <- repeated num_sources times
    <height> ...               <- rows * cols values, row-major

Remote terrains are downloaded once into a cache directory. Each cache entry
is a pair of files named after a hash of the URL: ``<hash>.key`` holds the
URL itself and ``<hash>.data`` the downloaded terrain file.
"""

import hashlib
from pathlib import Path
from typing import Callable, Iterator, List, Optional, Union

import numpy as np
import requests
import structlog

from ..config import settings
from ..core.grid import GridLocation, Terrain
from ..exceptions import TerrainDownloadError, TerrainFormatError

logger = structlog.get_logger()

LOCAL_MARKER = "local"
TERRAIN_SUFFIX = ".terrain"

# Called with (bytes_read, bytes_total) as a download progresses.
ProgressCallback = Callable[[int, int], None]

PathLike = Union[str, Path]


class _TokenReader:
    """Sequential reader over the whitespace separated tokens of a file."""

    def __init__(self, lines: List[str], source: Optional[str]):
        self._tokens: Iterator[str] = (tok for line in lines for tok in line.split())
        self.source = source

    def _next(self) -> str:
        try:
            return next(self._tokens)
        except StopIteration:
            raise TerrainFormatError("Unexpected end of file.", self.source) from None

    def next_int(self) -> int:
        token = self._next()
        try:
            return int(token)
        except ValueError:
            raise TerrainFormatError("Malformed file.", self.source) from None

    def next_float(self) -> float:
        token = self._next()
        try:
            return float(token)
        except ValueError:
            raise TerrainFormatError("Malformed file.", self.source) from None


def parse_terrain(
    text: str,
    progress: Optional[ProgressCallback] = None,
    source: Optional[str] = None,
    cache_dir: Optional[PathLike] = None,
) -> Terrain:
    """
    Parse the contents of a .terrain file.

    Args:
        text: File contents
        progress: Download progress callback, used only for remote terrains
        source: Name of the file, used in error messages
        cache_dir: Download cache directory (defaults to settings)

    Returns:
        Parsed Terrain

    Raises:
        TerrainFormatError: if the contents are truncated or malformed
    """
    lines = text.splitlines()
    if not lines:
        raise TerrainFormatError("Unexpected end of file.", source)

    origin = lines[0].strip()
    if origin != LOCAL_MARKER:
        return load_web_terrain(origin, progress=progress, cache_dir=cache_dir)

    reader = _TokenReader(lines[1:], source)
    rows = reader.next_int()
    cols = reader.next_int()
    if rows <= 0 or cols <= 0:
        raise TerrainFormatError(f"Invalid terrain size {rows}x{cols}.", source)

    num_sources = reader.next_int()
    if num_sources < 0:
        raise TerrainFormatError("Malformed file.", source)
    sources = [
        GridLocation(reader.next_int(), reader.next_int()) for _ in range(num_sources)
    ]

    heights = np.empty((rows, cols), dtype=np.float64)
    for r in range(rows):
        for c in range(cols):
            heights[r, c] = reader.next_float()

    logger.info(
        "Terrain parsed", source=source, rows=rows, cols=cols, sources=num_sources
    )
    return Terrain(heights, sources)


def load_terrain(
    path: PathLike,
    progress: Optional[ProgressCallback] = None,
    cache_dir: Optional[PathLike] = None,
) -> Terrain:
    """Load a terrain from a .terrain file, following remote references."""
    path = Path(path)
    logger.info("Loading terrain", path=str(path))
    text = path.read_text(encoding="utf-8")
    return parse_terrain(text, progress=progress, source=str(path), cache_dir=cache_dir)


def list_terrain_files(directory: PathLike) -> List[Path]:
    """All .terrain files in directory, sorted by name."""
    directory = Path(directory)
    if not directory.is_dir():
        return []
    return sorted(
        (p for p in directory.iterdir() if p.name.endswith(TERRAIN_SUFFIX)),
        key=lambda p: p.name,
    )


def cache_paths(url: str, cache_dir: PathLike) -> tuple:
    """(key_file, data_file) for a URL inside the cache directory."""
    digest = hashlib.sha1(url.encode("utf-8")).hexdigest()
    cache_dir = Path(cache_dir)
    return cache_dir / f"{digest}.key", cache_dir / f"{digest}.data"


def _is_key_for(key_file: Path, url: str) -> bool:
    lines = key_file.read_text(encoding="utf-8").splitlines()
    return bool(lines) and lines[0] == url


def _download(url: str, data_file: Path, progress: Optional[ProgressCallback]) -> None:
    logger.info("Downloading terrain", url=url)
    try:
        with requests.get(
            url, stream=True, timeout=settings.download_timeout_seconds
        ) as response:
            response.raise_for_status()
            total = int(response.headers.get("Content-Length") or 0) or 1
            read = 0
            last_percent = -1
            with open(data_file, "wb") as out:
                for chunk in response.iter_content(chunk_size=settings.download_chunk_size):
                    if not chunk:
                        continue
                    out.write(chunk)
                    read += len(chunk)
                    percent = int(100.0 * read / total)
                    if progress is not None and percent != last_percent:
                        progress(read, total)
                        last_percent = percent
    except requests.RequestException as exc:
        data_file.unlink(missing_ok=True)
        raise TerrainDownloadError(f"Could not download terrain from {url}: {exc}") from exc

    logger.info("Terrain downloaded", url=url, bytes=read)


def load_web_terrain(
    url: str,
    progress: Optional[ProgressCallback] = None,
    cache_dir: Optional[PathLike] = None,
) -> Terrain:
    """
    Load a terrain referenced by URL, downloading it unless already cached.

    Raises:
        TerrainDownloadError: if the download fails
    """
    cache_dir = Path(cache_dir or settings.download_cache_dir)
    cache_dir.mkdir(parents=True, exist_ok=True)
    key_file, data_file = cache_paths(url, cache_dir)

    if key_file.exists() and data_file.exists() and _is_key_for(key_file, url):
        logger.debug("Terrain cache hit", url=url, data_file=str(data_file))
    else:
        _download(url, data_file, progress)
        key_file.write_text(url + "\n", encoding="utf-8")

    return load_terrain(data_file, progress=progress, cache_dir=cache_dir)
