"""Configuration dataclasses for loading, image resolution and layout.

These dataclasses hold the tunables used by the catalog loader, the image
resolver and the masonry layout engine. Defaults match the behavior of the
published site so code can run without a YAML file.
"""

from dataclasses import dataclass, field
from typing import Optional, Tuple


@dataclass
class LoaderConfig:
    """Catalog source configuration.

    Attributes:
        sheet_url: Published CSV URL of the spreadsheet; ``None`` disables fetching.
        csv_path: Optional local CSV export used instead of the sheet.
        json_path: Optional exported JSON dataset (see ``scripts/fetch_sheet.py``).
        fallback: If ``True``, fall back to the static dataset on any load failure.
        timeout_s: Network timeout for the sheet fetch in seconds.
    """
    sheet_url: Optional[str] = None
    csv_path: Optional[str] = None
    json_path: Optional[str] = None
    fallback: bool = True
    timeout_s: float = 10.0


@dataclass
class ResolverConfig:
    """Image lookup configuration.

    Attributes:
        images_root: Root prefix for candidate paths (``<root>/<series>/<artwork>/...``).
        extensions: Extension probe order; the first existing file wins.
        max_variants: Number of numeric-suffix variants generated per candidate stem.
        verify: If ``True``, a local probe also requires Pillow to identify the file.
    """
    images_root: str = "assets/images"
    extensions: Tuple[str, ...] = ("jpg", "jpeg", "JPEG", "webp", "gif", "GIF")
    max_variants: int = 20
    verify: bool = True


@dataclass
class LayoutConfig:
    """Masonry layout configuration.

    Attributes:
        gap: Gap between columns and between stacked items, in pixels.
        min_item_height: Items shorter than this are laid out at this height.
        breakpoints: ``(min_width, columns)`` pairs, widest first.
    """
    gap: int = 32
    min_item_height: int = 100
    breakpoints: Tuple[Tuple[int, int], ...] = field(
        default_factory=lambda: ((1200, 4), (900, 3), (600, 2))
    )


@dataclass
class CarouselConfig:
    """Home carousel configuration.

    Attributes:
        limit: Items per carousel row.
        thumb_height: Fixed thumbnail height in pixels.
        min_width: Narrowest thumbnail box width.
        max_width: Widest thumbnail box width.
    """
    limit: int = 8
    thumb_height: int = 200
    min_width: int = 150
    max_width: int = 380
