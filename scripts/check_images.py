#!/usr/bin/env python3
"""Check which artworks resolve to an image file on disk.

Runs every artwork's candidate list through the same probe order the site
uses, against a local images tree, and writes ``image_report.csv`` with one
row per artwork:

- ``id``, ``series``: artwork identity
- ``resolved``: winning path, empty when nothing matched
- ``attempts``: number of probes until success or exhaustion

Typical usage:
  python scripts/check_images.py [--csv <export.csv> | --json projects.json] \
    [--images-root assets/images] [--output image_report.csv] [--no-verify]
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

import pandas as pd
from tqdm import tqdm

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from portfolio.catalog import Catalog, load_catalog
from portfolio.config import get_config, setup_logging
from portfolio.errors import ConfigError, PortfolioError
from portfolio.images import FileSystemProber, ImageResolver


DEFAULT_REPORT = "image_report.csv"
REPORT_COLUMNS = ["id", "series", "resolved", "attempts"]


def build_report(catalog: Catalog, resolver: ImageResolver, show_progress: bool = True) -> pd.DataFrame:
    """Resolve every artwork and tabulate the outcome."""
    rows = []
    for artwork in tqdm(catalog.all_items(), desc="Resolving", disable=not show_progress):
        chain = resolver.chain(artwork.images)
        resolved: Optional[str] = chain.run()
        rows.append({
            "id": artwork.id,
            "series": artwork.series or "",
            "resolved": resolved or "",
            "attempts": len(chain.attempts),
        })
    return pd.DataFrame(rows, columns=REPORT_COLUMNS)


def parse_args(argv: List[str]) -> argparse.Namespace:
    """Parse command-line arguments.

    Args:
        argv: List of CLI arguments (excluding the program name).

    Returns:
        Parsed ``argparse.Namespace``.
    """
    parser = argparse.ArgumentParser(description="Report which artworks have an image on disk.")
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
    parser.add_argument(
        "--output",
        type=str,
        default=DEFAULT_REPORT,
        help=f"Report CSV path (default: {DEFAULT_REPORT}).",
    )
    parser.add_argument("--no-verify", action="store_true", help="Skip decoding files with Pillow.")
    parser.add_argument("--quiet", action="store_true", help="Disable the progress bar.")
    parser.add_argument("--config", type=str, default=None, help="Path to a site.yaml config file.")
    return parser.parse_args(argv)


def main(argv: List[str]) -> int:
    """Entry point for command-line execution.

    Args:
        argv: List of CLI arguments (excluding the program name).

    Returns:
        Process exit code: 0 when every artwork resolved, 1 on load errors,
        2 when some artworks have no image.
    """
    args = parse_args(argv)
    try:
        cfg = get_config(Path(args.config) if args.config else None)
    except ConfigError as e:
        print(f"Error: {e}")
        return 1
    setup_logging(cfg.log_level, cfg.log_format)

    resolver_cfg = cfg.resolver_config()
    images_root = args.images_root or resolver_cfg.images_root
    url = args.url
    if not (args.url or args.csv or args.json):
        url = cfg.sheet_url

    try:
        catalog = load_catalog(
            url=url,
            csv_path=args.csv,
            json_path=args.json,
            images_root=images_root,
        )
    except (PortfolioError, OSError, ValueError) as e:
        print(f"Error: could not load catalog: {e}")
        return 1

    prober = FileSystemProber(verify=resolver_cfg.verify and not args.no_verify)
    resolver = ImageResolver(prober, extensions=resolver_cfg.extensions)
    report = build_report(catalog, resolver, show_progress=not args.quiet)

    out = Path(args.output)
    out.parent.mkdir(parents=True, exist_ok=True)
    report.to_csv(out, index=False)

    missing = report[report["resolved"] == ""]
    print(f"Resolved: {len(report) - len(missing)} / {len(report)}")
    if len(missing):
        print(f"Missing ({len(missing)}):")
        for _, row in missing.iterrows():
            print(f"  - {row['id']} ({row['series'] or 'no series'})")
    print(f"Wrote report -> {out}")
    return 2 if len(missing) else 0


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
