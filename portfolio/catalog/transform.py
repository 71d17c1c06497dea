"""Row → Artwork transformation.

Maps one parsed spreadsheet row to an ``Artwork``, including the candidate
image paths used later by the image resolver. Asset filenames on disk were
never standardized, so each artwork gets a fixed fan-out of naming variants
(plain, underscore, zero-padded and unpadded numeric suffixes). Nothing here
touches the filesystem; existence is checked at resolution time.
"""

from __future__ import annotations

import logging
import re
from typing import Iterable, List, Optional, Sequence

from ..core.text import parse_years, slugify
from .columns import DEFAULT_COLUMNS, ColumnIndices
from .models import Artwork


logger = logging.getLogger(__name__)

DEFAULT_IMAGES_ROOT = "assets/images"
NO_SERIES_FOLDER = "artworks"
MAX_VARIANTS = 20

_PAGE_SUFFIX = re.compile(r"page-(\d+)$")


def series_folder(series: Optional[str]) -> str:
    """Folder name under the images root for a series (``"artworks"`` without one)."""
    return (slugify(series) if series else "") or NO_SERIES_FOLDER


def _cell(row: Sequence[str], index: int) -> str:
    if index < 0 or index >= len(row):
        return ""
    value = row[index]
    return "" if value is None else str(value).strip()


def is_header_or_blank(title: str) -> bool:
    """True for titles that must not become artworks (blank or a repeated header)."""
    t = (title or "").strip()
    return not t or t.lower() == "title"


def build_blurb(work_type: str, medium: str) -> str:
    """``"<work type> created using <medium>"``; empty without a medium."""
    if not medium:
        return ""
    return f"{work_type or 'Artwork'} created using {medium}"


def build_image_paths(
    artwork_id: str,
    series: Optional[str] = None,
    images_root: str = DEFAULT_IMAGES_ROOT,
    max_variants: int = MAX_VARIANTS,
) -> List[str]:
    """Return candidate extension-less image paths for an artwork.

    Normal works live at ``<root>/<series>/<id>/<id>`` with numbered variants.
    Multi-page works (books, zines) whose id equals the series slug or starts
    with ``<series>-page-`` use nested ``page-N/page-N`` folders with a flat
    fallback.

    Args:
        artwork_id: Slugified artwork id.
        series: Series name as written in the sheet, or ``None``.
        images_root: Root prefix for all paths.
        max_variants: Highest numeric suffix tried.

    Returns:
        Ordered list of candidate paths; earlier entries win.
    """
    root = images_root.rstrip("/")
    series_slug = slugify(series) if series else ""
    folder = series_folder(series)
    paths: List[str] = []

    paged = bool(series_slug) and (
        series_slug == artwork_id or artwork_id.startswith(series_slug + "-page-")
    )
    if paged:
        m = _PAGE_SUFFIX.search(artwork_id)
        if m:
            page = m.group(1)
            paths.append(f"{root}/{folder}/page-{page}/page-{page}")
        elif series_slug == artwork_id:
            for i in range(1, max_variants + 1):
                paths.append(f"{root}/{folder}/page-{i}/page-{i}")
        flat = f"{root}/{folder}/{artwork_id}"
        paths.append(flat)
        for i in range(1, max_variants + 1):
            paths.append(f"{flat}-page-{i}")
            paths.append(f"{flat}-{i}")
        return paths

    base = f"{root}/{folder}/{artwork_id}/{artwork_id}"
    under = f"{root}/{folder}/{artwork_id}/{artwork_id.replace('-', '_')}"
    # Plain names first so simple files (monkey-bars.jpg) beat numbered ones.
    paths.append(base)
    paths.append(under)
    for i in range(1, max_variants + 1):
        padded = f"{i:04d}"
        paths.append(f"{base}_{padded}")
        paths.append(f"{under}_{padded}")
        paths.append(f"{base}-{padded}")
        paths.append(f"{base}_{i}")
        paths.append(f"{under}_{i}")
        paths.append(f"{base}-{i}")
    return paths


def transform_row(
    row: Sequence[str],
    columns: Optional[ColumnIndices] = None,
    images_root: str = DEFAULT_IMAGES_ROOT,
    max_variants: int = MAX_VARIANTS,
) -> Optional[Artwork]:
    """Transform a parsed row into an ``Artwork``.

    Args:
        row: Field values from ``parse_csv_line``.
        columns: Column indices from ``resolve_columns``; defaults to fixed positions.
        images_root: Root prefix for candidate image paths.
        max_variants: Highest numeric suffix in candidate paths.

    Returns:
        The artwork, or ``None`` when the row must be skipped (blank title or
        a repeated header row).
    """
    col = columns or DEFAULT_COLUMNS
    title = _cell(row, col.title)
    if is_header_or_blank(title):
        logger.debug("Skipping row without a usable title: %r", list(row)[:3])
        return None

    series = _cell(row, col.series)
    years = _cell(row, col.years)
    work_type = _cell(row, col.work_type)
    medium = _cell(row, col.medium)
    made_in_collab = _cell(row, col.made_in_collaboration_with)
    collaborators = _cell(row, col.collaborators) or made_in_collab
    selected = _cell(row, col.selected_work).upper() == "Y"

    artwork_id = slugify(title)
    images = build_image_paths(artwork_id, series or None, images_root, max_variants)

    return Artwork(
        id=artwork_id,
        title=title,
        years=parse_years(years) if years else "",
        tags=(work_type,) if work_type else (),
        featured=False,
        blurb=build_blurb(work_type, medium),
        series=series or None,
        statement=_cell(row, col.theme) or None,
        dimensions=_cell(row, col.dimensions) or None,
        medium=medium or None,
        work_type=work_type or None,
        exhibited=_cell(row, col.exhibited) or None,
        awards=_cell(row, col.awards) or None,
        link=_cell(row, col.link) or None,
        made_in_collaboration_with=made_in_collab or None,
        collaborators=collaborators or None,
        selected_work=selected,
        thumbnail=images[0] if images else "",
        images=tuple(images),
    )


def transform_rows(
    rows: Iterable[Sequence[str]],
    columns: Optional[ColumnIndices] = None,
    images_root: str = DEFAULT_IMAGES_ROOT,
    max_variants: int = MAX_VARIANTS,
) -> List[Artwork]:
    """Transform many rows, dropping skipped ones."""
    artworks: List[Artwork] = []
    skipped = 0
    for row in rows:
        artwork = transform_row(row, columns, images_root, max_variants)
        if artwork is None:
            skipped += 1
            continue
        artworks.append(artwork)
    if skipped:
        logger.info("Skipped %d row(s) without a usable title", skipped)
    return artworks
