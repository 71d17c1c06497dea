"""
Core helpers - dataset-agnostic text and CSV utilities.

These helpers know nothing about artworks or series and are shared by the
catalog, image and site modules.
"""

from .csv_parser import (
    MIN_FIELDS,
    parse_csv_line,
    split_csv_lines,
)
from .text import (
    slugify,
    parse_years,
    first_year,
    year_key,
    normalize_link,
)

__all__ = [
    # CSV
    "MIN_FIELDS",
    "parse_csv_line",
    "split_csv_lines",
    # Text
    "slugify",
    "parse_years",
    "first_year",
    "year_key",
    "normalize_link",
]
