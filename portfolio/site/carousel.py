"""Home page carousel selection."""

from __future__ import annotations

from typing import List, Tuple

from ..catalog.models import Artwork, Catalog


CAROUSEL_LIMIT = 8
THUMB_HEIGHT = 200
MIN_THUMB_WIDTH = 150
MAX_THUMB_WIDTH = 380


def select_carousel_items(catalog: Catalog, limit: int = CAROUSEL_LIMIT) -> Tuple[List[Artwork], List[Artwork]]:
    """Pick the artworks for the two home carousel rows.

    First row: selected works, else featured works, else the first items.
    Second row: items from the same pool that are not in the first row; when
    fewer than ``limit`` remain, an offset window of the pool is used instead.

    Returns:
        ``(first_row, second_row)``; both empty for an empty catalog.
    """
    items = catalog.all_items()
    selected = [a for a in items if a.selected_work]
    featured = [a for a in items if a.featured][:limit]
    if selected:
        first = selected[:limit]
    elif featured:
        first = featured
    else:
        first = items[:limit]

    pool = selected if selected else items
    first_ids = {a.id for a in first}
    second = [a for a in pool if a.id not in first_ids][:limit]
    if len(second) < limit:
        offset = limit // 2
        second = pool[offset:offset + limit]
    return first, second


def carousel_thumbnail_width(
    natural_width: float,
    natural_height: float,
    height: float = THUMB_HEIGHT,
    min_width: float = MIN_THUMB_WIDTH,
    max_width: float = MAX_THUMB_WIDTH,
) -> float:
    """Placeholder width for a thumbnail shown at a fixed ``height``.

    Keeps the image aspect ratio, clamped to ``[min_width, max_width]``. An
    image without a known size gets ``min_width``.
    """
    if not natural_width or not natural_height:
        return float(min_width)
    width = height * natural_width / natural_height
    return float(max(min_width, min(max_width, width)))
