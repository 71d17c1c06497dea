"""Catalog loading, export and the reloadable catalog store.

Loads the artworks sheet (published CSV URL, local CSV export or exported
JSON dataset), runs it through the parse → transform → group pipeline and
hands the result to a ``CatalogStore``. Any failure to load falls back to the
static dataset with a warning; nothing here is fatal to the site.
"""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path
from typing import Callable, Dict, List, Mapping, Optional, Union
import json
import logging

import pandas as pd
import requests

from ..core.csv_parser import parse_csv_line, split_csv_lines
from ..errors import CatalogLoadError, SheetFetchError
from .columns import resolve_columns
from .fallback import fallback_catalog
from .grouping import group_by_series
from .models import Artwork, Catalog
from .transform import DEFAULT_IMAGES_ROOT, MAX_VARIANTS, is_header_or_blank, transform_rows


logger = logging.getLogger(__name__)

CatalogListener = Callable[[Catalog], None]


def parse_catalog_csv(
    text: str,
    images_root: str = DEFAULT_IMAGES_ROOT,
    source: str = "sheet",
    max_variants: int = MAX_VARIANTS,
) -> Catalog:
    """Parse sheet CSV text into a ``Catalog``.

    Args:
        text: Full CSV text including the header row.
        images_root: Root prefix for candidate image paths.
        source: Label stored on the returned catalog.
        max_variants: Highest numeric suffix in candidate paths.

    Returns:
        The parsed catalog.

    Raises:
        CatalogLoadError: If there is no header plus at least one data row.
    """
    lines = split_csv_lines(text)
    if len(lines) < 2:
        raise CatalogLoadError("No data rows found in spreadsheet")

    header = parse_csv_line(lines[0])
    columns = resolve_columns(header)
    logger.info("Found columns: %s", ", ".join(h for h in header if h))

    rows: List[List[str]] = []
    for line in lines[1:]:
        row = parse_csv_line(line)
        # Duplicate header rows inside the data are dropped here as well.
        if is_header_or_blank(row[0]):
            continue
        rows.append(row)
    logger.info("Found %d artwork entries", len(rows))

    artworks = transform_rows(rows, columns, images_root, max_variants)
    logger.info("Transformed %d artworks", len(artworks))
    series = group_by_series(artworks)
    logger.info("Grouped into %d series", len(series))
    return Catalog(artworks=tuple(artworks), series=tuple(series), source=source)


def fetch_sheet_csv(url: str, timeout_s: float = 10.0, session: Optional[requests.Session] = None) -> str:
    """Fetch the published sheet as CSV text.

    Raises:
        SheetFetchError: On network errors or non-2xx responses.
    """
    http = session or requests
    try:
        resp = http.get(str(url), timeout=float(timeout_s))
    except requests.RequestException as e:
        raise SheetFetchError(url=str(url), message=str(e)) from e
    if resp.status_code // 100 != 2:
        raise SheetFetchError(url=str(url), status_code=int(resp.status_code), message=resp.text[:200])
    # Sheets serves text/csv without a charset; requests would guess latin-1.
    if not resp.encoding or resp.encoding.lower() == "iso-8859-1":
        resp.encoding = "utf-8"
    return resp.text


def catalog_to_json(catalog: Catalog) -> Dict[str, object]:
    """Serialize a catalog to the exported dataset layout."""
    return {
        "generatedAt": datetime.now(timezone.utc).isoformat(),
        "source": catalog.source,
        "projects": [s.to_dict() for s in catalog.series],
        "artworks": [a.to_dict() for a in catalog.artworks],
    }


def catalog_from_json(payload: Mapping[str, object], source: str = "file") -> Catalog:
    """Rebuild a catalog from an exported dataset.

    Series are regrouped from the artworks so that members are the same
    objects as the flat list.
    """
    if not isinstance(payload, Mapping):
        raise CatalogLoadError("Dataset root must be a JSON object")
    raw_artworks = payload.get("artworks")
    if not isinstance(raw_artworks, list):
        raise CatalogLoadError("Dataset has no 'artworks' list")
    artworks = [Artwork.from_dict(a) for a in raw_artworks if isinstance(a, dict)]
    artworks = [a for a in artworks if not is_header_or_blank(a.title)]
    return Catalog(artworks=tuple(artworks), series=tuple(group_by_series(artworks)), source=source)


def load_catalog(
    url: Optional[str] = None,
    csv_path: Optional[Union[str, Path]] = None,
    json_path: Optional[Union[str, Path]] = None,
    images_root: str = DEFAULT_IMAGES_ROOT,
    fallback: bool = True,
    timeout_s: float = 10.0,
) -> Catalog:
    """Load the catalog from the first configured source.

    Sources are tried in order: exported JSON, local CSV, sheet URL.

    Args:
        url: Published sheet CSV URL.
        csv_path: Local CSV export.
        json_path: Exported JSON dataset.
        images_root: Root prefix for candidate image paths.
        fallback: Return the static dataset instead of raising on failure.
        timeout_s: Network timeout for the sheet fetch.

    Returns:
        The loaded catalog (``source == "fallback"`` when the fallback was used).
    """
    try:
        if json_path is not None:
            payload = json.loads(Path(json_path).read_text(encoding="utf-8"))
            return catalog_from_json(payload)
        if csv_path is not None:
            text = Path(csv_path).read_text(encoding="utf-8-sig")
            return parse_catalog_csv(text, images_root, source="file")
        if url:
            logger.info("Loading data from sheet: %s", url)
            return parse_catalog_csv(fetch_sheet_csv(url, timeout_s), images_root, source="sheet")
        raise CatalogLoadError("No catalog source configured")
    except (CatalogLoadError, OSError, ValueError) as e:
        if not fallback:
            raise
        logger.warning("Error loading catalog (%s); falling back to static dataset", e)
        return fallback_catalog(images_root)


def catalog_frame(catalog: Catalog) -> pd.DataFrame:
    """Flat artwork table for export and summaries."""
    rows = []
    for a in catalog.artworks:
        rows.append({
            "id": a.id,
            "title": a.title,
            "series": a.series or "",
            "years": a.years,
            "work_type": a.work_type or "",
            "featured": a.featured,
            "selected_work": a.selected_work,
            "thumbnail": a.thumbnail,
            "num_candidates": len(a.images),
        })
    columns = ["id", "title", "series", "years", "work_type", "featured", "selected_work", "thumbnail", "num_candidates"]
    return pd.DataFrame(rows, columns=columns)


def summarize_catalog(catalog: Catalog) -> Dict[str, object]:
    """Counts by series and work type."""
    df = catalog_frame(catalog)
    by_series = {s.title: len(s.artworks) for s in catalog.series}
    by_work_type = df[df["work_type"] != ""].groupby("work_type").size().to_dict() if len(df) else {}
    return {
        "source": catalog.source,
        "num_artworks": len(catalog.artworks),
        "num_series": len(catalog.series),
        "num_selected": int(df["selected_work"].sum()) if len(df) else 0,
        "counts_by_series": by_series,
        "counts_by_work_type": {str(k): int(v) for k, v in by_work_type.items()},
    }


class CatalogStore:
    """Holds the current catalog and notifies listeners on every (re)load.

    The catalog is replaced wholesale; readers take ``store.catalog`` as an
    immutable snapshot and must tolerate it changing between two reads.
    """

    def __init__(self, catalog: Optional[Catalog] = None):
        self._catalog = catalog or Catalog()
        self._listeners: List[CatalogListener] = []

    @property
    def catalog(self) -> Catalog:
        return self._catalog

    @property
    def loaded(self) -> bool:
        return self._catalog.source != "empty"

    def subscribe(self, listener: CatalogListener) -> Callable[[], None]:
        """Register ``listener``; returns a callable that unsubscribes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)
        return unsubscribe

    def replace(self, catalog: Catalog) -> None:
        self._catalog = catalog
        logger.info(
            "Catalog replaced: %d artworks, %d series (source=%s)",
            len(catalog.artworks), len(catalog.series), catalog.source,
        )
        for listener in list(self._listeners):
            try:
                listener(catalog)
            except Exception:
                logger.exception("Catalog listener failed")

    def reload(self, loader: Callable[[], Catalog]) -> Catalog:
        """Run ``loader`` and replace the current catalog with its result."""
        catalog = loader()
        self.replace(catalog)
        return catalog
