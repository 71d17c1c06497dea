"""
Site pages.

Works page filtering, home carousel selection and page navigation.
"""

from .browse import (
    PREFERRED_TAGS,
    SORT_MODES,
    BrowseState,
    BrowseView,
    unique_tags,
    matches_filters,
    sort_items,
    select_bento,
    browse,
)
from .carousel import select_carousel_items, carousel_thumbnail_width
from .navigation import PAGES, ArtworkViewer, Navigator

__all__ = [
    # Works page
    "PREFERRED_TAGS",
    "SORT_MODES",
    "BrowseState",
    "BrowseView",
    "unique_tags",
    "matches_filters",
    "sort_items",
    "select_bento",
    "browse",
    # Carousel
    "select_carousel_items",
    "carousel_thumbnail_width",
    # Navigation
    "PAGES",
    "ArtworkViewer",
    "Navigator",
]
