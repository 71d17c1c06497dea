"""
Gallery layout.

Greedy shortest-column masonry layout with responsive column counts.
"""

from .masonry import (
    DEFAULT_BREAKPOINTS,
    DEFAULT_GAP,
    MIN_ITEM_HEIGHT,
    Placement,
    MasonryResult,
    get_num_columns,
    column_width,
    masonry_layout,
    measure_image_item,
    MasonryGallery,
)

__all__ = [
    "DEFAULT_BREAKPOINTS",
    "DEFAULT_GAP",
    "MIN_ITEM_HEIGHT",
    "Placement",
    "MasonryResult",
    "get_num_columns",
    "column_width",
    "masonry_layout",
    "measure_image_item",
    "MasonryGallery",
]
