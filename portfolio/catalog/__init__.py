"""
Artwork catalog.

This package contains the spreadsheet-to-catalog pipeline:
- Entities (Artwork, Series, Catalog)
- Header column resolution
- Row transformation and candidate image paths
- Series grouping
- Loading, export, fallback data and the catalog store
"""

from .models import Artwork, Series, Catalog
from .columns import ColumnIndices, DEFAULT_COLUMNS, resolve_columns
from .transform import (
    series_folder,
    build_blurb,
    build_image_paths,
    transform_row,
    transform_rows,
)
from .grouping import OTHER_WORKS, year_range, group_by_series
from .fallback import fallback_catalog
from .loader import (
    CatalogStore,
    parse_catalog_csv,
    fetch_sheet_csv,
    load_catalog,
    catalog_to_json,
    catalog_from_json,
    catalog_frame,
    summarize_catalog,
)

__all__ = [
    # Models
    "Artwork",
    "Series",
    "Catalog",
    # Columns
    "ColumnIndices",
    "DEFAULT_COLUMNS",
    "resolve_columns",
    # Transform
    "series_folder",
    "build_blurb",
    "build_image_paths",
    "transform_row",
    "transform_rows",
    # Grouping
    "OTHER_WORKS",
    "year_range",
    "group_by_series",
    # Loading
    "fallback_catalog",
    "CatalogStore",
    "parse_catalog_csv",
    "fetch_sheet_csv",
    "load_catalog",
    "catalog_to_json",
    "catalog_from_json",
    "catalog_frame",
    "summarize_catalog",
]
