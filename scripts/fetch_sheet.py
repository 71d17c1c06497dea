#!/usr/bin/env python3
"""Fetch the artworks spreadsheet and export the catalog.

Reads the published Google Sheet (or a local CSV export), runs it through the
catalog pipeline and writes:

- ``<out-dir>/projects.json``: series and artworks as loaded by the site
- ``<out-dir>/artworks_index.csv``: one row per artwork with its candidate count

Typical usage:
  python scripts/fetch_sheet.py [--url <csv-url> | --csv <export.csv>] \
    [--out-dir assets/data] [--images-root assets/images] [--no-fallback]

Without ``--url`` or ``--csv`` the sheet URL from ``config/site.yaml`` is used.
"""

import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from portfolio.catalog import (
    Catalog,
    catalog_frame,
    catalog_to_json,
    load_catalog,
    summarize_catalog,
)
from portfolio.config import SiteConfig, get_config, setup_logging
from portfolio.errors import ConfigError, PortfolioError


DEFAULT_OUT_DIR = "assets/data"
JSON_NAME = "projects.json"
INDEX_NAME = "artworks_index.csv"


def write_outputs(catalog: Catalog, out_dir: Path) -> List[Path]:
    """Write the JSON dataset and the flat CSV index into ``out_dir``.

    Returns:
        Paths written, JSON first.
    """
    out_dir.mkdir(parents=True, exist_ok=True)
    json_path = out_dir / JSON_NAME
    with open(json_path, "w", encoding="utf-8") as f:
        json.dump(catalog_to_json(catalog), f, indent=2, ensure_ascii=False)
    index_path = out_dir / INDEX_NAME
    catalog_frame(catalog).to_csv(index_path, index=False)
    return [json_path, index_path]


def print_summary(catalog: Catalog) -> None:
    summary = summarize_catalog(catalog)
    print(f"Source: {summary['source']}")
    print(f"Artworks: {summary['num_artworks']} ({summary['num_selected']} selected)")
    print(f"Series: {summary['num_series']}")
    for title, count in summary["counts_by_series"].items():
        print(f"  - {title}: {count}")


def parse_args(argv: List[str]) -> argparse.Namespace:
    """Parse command-line arguments.

    Args:
        argv: List of CLI arguments (excluding the program name).

    Returns:
        Parsed ``argparse.Namespace``.
    """
    parser = argparse.ArgumentParser(
        description="Fetch the artworks sheet and export projects.json plus a CSV index."
    )
    source = parser.add_mutually_exclusive_group()
    source.add_argument("--url", type=str, default=None, help="Published CSV URL of the sheet.")
    source.add_argument("--csv", type=str, default=None, help="Local CSV export to read instead of the sheet.")
    parser.add_argument(
        "--out-dir",
        type=str,
        default=DEFAULT_OUT_DIR,
        help=f"Directory for {JSON_NAME} and {INDEX_NAME} (default: {DEFAULT_OUT_DIR}).",
    )
    parser.add_argument(
        "--images-root",
        type=str,
        default=None,
        help="Root prefix for candidate image paths (default: images.root from the config).",
    )
    parser.add_argument(
        "--no-fallback",
        action="store_true",
        help="Fail instead of exporting the static dataset when the sheet cannot be loaded.",
    )
    parser.add_argument("--config", type=str, default=None, help="Path to a site.yaml config file.")
    parser.add_argument("--log-level", type=str, default=None, help="Logging level (default: from config).")
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
        cfg: Optional[SiteConfig] = get_config(Path(args.config) if args.config else None)
    except ConfigError as e:
        if args.config:
            print(f"Error: {e}")
            return 1
        cfg = None
    setup_logging(args.log_level or (cfg.log_level if cfg else "INFO"), cfg.log_format if cfg else None)

    loader_cfg = cfg.loader_config() if cfg else None
    images_root = args.images_root or (cfg.images_root if cfg else "assets/images")
    url = args.url
    if not args.url and not args.csv and loader_cfg is not None:
        url = loader_cfg.sheet_url

    try:
        catalog = load_catalog(
            url=url,
            csv_path=args.csv,
            images_root=images_root,
            fallback=not args.no_fallback,
            timeout_s=loader_cfg.timeout_s if loader_cfg else 10.0,
        )
    except (PortfolioError, OSError, ValueError) as e:
        print(f"Error: could not load catalog: {e}")
        return 1

    written = write_outputs(catalog, Path(args.out_dir))
    print_summary(catalog)
    for path in written:
        print(f"Wrote {path}")
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
