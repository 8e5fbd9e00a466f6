#!/usr/bin/env python3
"""
Command line driver.

    rising-tides                                   list available terrains
    rising-tides FILE -w 1.5 -f 3 -r 10 -c 20      full report
    rising-tides FILE --sweep 0 10 0.5             land/islands per water height
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

import structlog

from .config import settings
from .core.analyzer import TerrainAnalyzer
from .exceptions import TerrainError
from .io.terrain_loader import list_terrain_files, load_terrain
from .logging_config import configure_logging
from .report import build_report, sweep_water_levels, water_levels

logger = structlog.get_logger()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="rising-tides",
        description="Flood a terrain at a water height and report what is left above water",
    )
    parser.add_argument(
        "terrain", nargs="?", help="Terrain file (lists the terrain directory if omitted)"
    )
    parser.add_argument("-w", "--height", type=float, default=0.0, help="Water height")
    parser.add_argument(
        "-f", "--future-height", type=float, default=0.0, help="Future water height"
    )
    parser.add_argument("-r", "--row", type=int, default=0, help="Row (y) of the probed cell")
    parser.add_argument("-c", "--col", type=int, default=0, help="Column (x) of the probed cell")
    parser.add_argument(
        "--sweep",
        nargs=3,
        type=float,
        metavar=("START", "STOP", "STEP"),
        help="Summarize land and islands over a range of water heights",
    )
    parser.add_argument("--json", action="store_true", help="Print results as JSON")
    parser.add_argument(
        "--terrain-dir", default=settings.terrain_directory, help="Directory searched for terrains"
    )
    parser.add_argument("--log-level", default=settings.log_level, help="Logging level")
    return parser


def _print_progress(read: int, total: int) -> None:
    percent = int(100.0 * read / total)
    print(
        f"\rDownloading terrain ({percent}% of {total / (1 << 20):.1f} MB)",
        end="",
        file=sys.stderr,
    )


def _list_terrains(directory: str) -> int:
    files = list_terrain_files(directory)
    if not files:
        print(f"No terrain files found in {directory}", file=sys.stderr)
        return 1
    for path in files:
        print(path.name)
    return 0


def _resolve_terrain(name: str, directory: str) -> Path:
    path = Path(name)
    if not path.exists() and (Path(directory) / name).exists():
        path = Path(directory) / name
    return path


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level, settings.log_format)

    if args.terrain is None:
        return _list_terrains(args.terrain_dir)

    try:
        terrain = load_terrain(
            _resolve_terrain(args.terrain, args.terrain_dir), progress=_print_progress
        )
        analyzer = TerrainAnalyzer(terrain)

        if args.sweep:
            start, stop, step = args.sweep
            summaries = sweep_water_levels(
                analyzer, water_levels(start, stop, step), settings.max_concurrent_jobs
            )
            for summary in summaries:
                if args.json:
                    print(summary.model_dump_json())
                else:
                    print(
                        f"water {summary.water_height:>10.3f}  "
                        f"land {summary.total_visible_land:>8d}  "
                        f"islands {summary.islands:>6d}"
                    )
            return 0

        report = build_report(analyzer, args.height, args.future_height, (args.row, args.col))
    except (TerrainError, OSError, ValueError) as exc:
        logger.error("Analysis failed", terrain=args.terrain, error=str(exc))
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    print(report.model_dump_json(indent=2) if args.json else report.to_text())
    return 0


if __name__ == "__main__":
    sys.exit(main())
