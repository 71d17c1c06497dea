#!/usr/bin/env python3
"""Create the image folder tree for every series in the catalog.

Folders follow the layout the image resolver probes:
``<images-root>/<series-slug>/`` and, with ``--artworks``,
``<images-root>/<series-slug>/<artwork-id>/``. Artworks without a series go
under ``artworks/``. Series whose names slugify to the same folder (e.g.
"Modern Ruins" and "modern ruins") share it.

Typical usage:
  python scripts/create_series_folders.py [--csv <export.csv> | --json projects.json] \
    [--images-root assets/images] [--artworks] [--dry-run]
"""

import argparse
import sys
from pathlib import Path
from typing import List, Tuple

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from portfolio.catalog import Catalog, load_catalog, series_folder
from portfolio.config import get_config, setup_logging
from portfolio.errors import ConfigError, PortfolioError


def plan_folders(catalog: Catalog, images_root: Path, include_artworks: bool = False) -> List[Path]:
    """Folders to create, in catalog order, without duplicates."""
    seen = set()
    folders: List[Path] = []
    for artwork in catalog.all_items():
        series_dir = images_root / series_folder(artwork.series)
        candidates = [series_dir]
        if include_artworks and artwork.id:
            candidates.append(series_dir / artwork.id)
        for folder in candidates:
            if folder in seen:
                continue
            seen.add(folder)
            folders.append(folder)
    return folders


def create_folders(folders: List[Path], dry_run: bool = False) -> Tuple[int, int]:
    """Create ``folders``.

    Returns:
        ``(created, existing)`` counts.
    """
    created = existing = 0
    for folder in folders:
        if folder.is_dir():
            existing += 1
            print(f"Folder already exists: {folder}")
            continue
        if dry_run:
            print(f"DRY-RUN would create: {folder}")
        else:
            folder.mkdir(parents=True, exist_ok=True)
            print(f"Created folder: {folder}")
        created += 1
    return created, existing


def parse_args(argv: List[str]) -> argparse.Namespace:
    """Parse command-line arguments.

    Args:
        argv: List of CLI arguments (excluding the program name).

    Returns:
        Parsed ``argparse.Namespace``.
    """
    parser = argparse.ArgumentParser(description="Create image folders for every series in the catalog.")
    source = parser.add_mutually_exclusive_group()
    source.add_argument("--url", type=str, default=None, help="Published CSV URL of the sheet.")
    source.add_argument("--csv", type=str, default=None, help="Local CSV export of the sheet.")
    source.add_argument("--json", type=str, default=None, help="Exported projects.json dataset.")
    parser.add_argument(
        "--images-root",
        type=str,
        default=None,
        help="Images root directory (default: images.root from the config).",
    )
    parser.add_argument("--artworks", action="store_true", help="Also create one subfolder per artwork.")
    parser.add_argument("--dry-run", action="store_true", help="Print what would be created.")
    parser.add_argument("--config", type=str, default=None, help="Path to a site.yaml config file.")
    return parser.parse_args(argv)


def main(argv: List[str]) -> int:
    """Entry point for command-line execution.

    Args:
        argv: List of CLI arguments (excluding the program name).

    Returns:
        Process exit code where 0 indicates success.
    """
    args = parse_args(argv)
    try:
        cfg = get_config(Path(args.config) if args.config else None)
    except ConfigError as e:
        print(f"Error: {e}")
        return 1
    setup_logging(cfg.log_level, cfg.log_format)

    url = args.url
    if not (args.url or args.csv or args.json):
        url = cfg.sheet_url
    images_root = args.images_root or cfg.images_root

    try:
        catalog = load_catalog(url=url, csv_path=args.csv, json_path=args.json, images_root=images_root)
    except (PortfolioError, OSError, ValueError) as e:
        print(f"Error: could not load catalog: {e}")
        return 1

    folders = plan_folders(catalog, Path(images_root), include_artworks=args.artworks)
    created, existing = create_folders(folders, dry_run=args.dry_run)
    verb = "Would create" if args.dry_run else "Created"
    print(f"\n{verb} {created} new folder(s); {existing} already existed")
    print(f"Total unique folders: {len(folders)}")
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
