"""Works page: tag chips, search, sorting and the selected-works bento.

The works page shows two lists built from the same filter state: a bento of
selected artworks and a catalog of series. Both are filtered by the active
tags (any match) and a free-text search, then sorted.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Sequence, Set, Tuple, TypeVar, Union
import logging

from ..catalog.models import Artwork, Catalog, Series
from ..core.text import year_key


logger = logging.getLogger(__name__)

PREFERRED_TAGS: Tuple[str, ...] = (
    "Photography",
    "Print",
    "Screenprint",
    "Sculpture",
    "3D",
    "Drawing",
    "Painting",
    "Design",
    "Graphic Design",
    "Data",
    "System",
)
SORT_MODES = ("featured", "newest", "oldest", "az")
BENTO_LIMIT = 8

Item = Union[Artwork, Series]
T = TypeVar("T", Artwork, Series)


@dataclass
class BrowseState:
    """Filter and sort state of the works page."""
    active_tags: Set[str] = field(default_factory=set)
    search: str = ""
    sort: str = "featured"

    def toggle_tag(self, tag: str) -> None:
        if tag in self.active_tags:
            self.active_tags.discard(tag)
        else:
            self.active_tags.add(tag)

    def clear(self) -> None:
        self.active_tags.clear()
        self.search = ""
        self.sort = "featured"


@dataclass(frozen=True)
class BrowseView:
    """What the works page renders for one state.

    Attributes:
        tags: Chip labels in display order.
        selected: Bento picks (artworks).
        catalog: Filtered and sorted series.
    """
    tags: Tuple[str, ...]
    selected: Tuple[Artwork, ...]
    catalog: Tuple[Series, ...]


def unique_tags(artworks: Iterable[Artwork], series: Iterable[Series] = ()) -> List[str]:
    """All tags in use: preferred ones first in fixed order, the rest alphabetically."""
    seen: Set[str] = set()
    for item in list(artworks) + list(series):
        seen.update(item.tags)
    preferred = [t for t in PREFERRED_TAGS if t in seen]
    rest = sorted((t for t in seen if t not in PREFERRED_TAGS), key=str.casefold)
    return preferred + rest


def matches_filters(item: Item, state: BrowseState) -> bool:
    """Tag filter (any active tag) combined with a case-insensitive search."""
    tags = item.tags or ()
    tag_ok = not state.active_tags or any(t in state.active_tags for t in tags)
    s = state.search.strip().lower()
    if not s:
        return tag_ok
    haystacks = (
        item.title or "",
        item.blurb or "",
        item.statement or "",
        " ".join(tags),
    )
    return tag_ok and any(s in h.lower() for h in haystacks)


def _title_key(item: Item) -> str:
    return (item.title or "").casefold()


def sort_items(items: Sequence[T], sort: str = "featured") -> List[T]:
    """Sort a copy of ``items``; an unknown mode keeps source order.

    Python's sort is stable, so items with equal keys keep their order.
    """
    out = list(items)
    if sort == "featured":
        out.sort(key=lambda p: (0 if p.featured else 1, -year_key(p.years), _title_key(p)))
    elif sort == "newest":
        out.sort(key=lambda p: (-year_key(p.years), _title_key(p)))
    elif sort == "oldest":
        out.sort(key=lambda p: (year_key(p.years), _title_key(p)))
    elif sort == "az":
        out.sort(key=_title_key)
    else:
        logger.debug("Unknown sort mode %r; keeping source order", sort)
    return out


def select_bento(items: Sequence[Artwork], limit: int = BENTO_LIMIT) -> List[Artwork]:
    """Featured items if there are any, otherwise the list head."""
    featured = [p for p in items if p.featured]
    return list(featured or items)[:limit]


def browse(catalog: Catalog, state: BrowseState) -> BrowseView:
    """Build the works page for ``state``."""
    artworks = sort_items([a for a in catalog.all_items() if matches_filters(a, state)], state.sort)
    series = sort_items([s for s in catalog.series if matches_filters(s, state)], state.sort)
    return BrowseView(
        tags=tuple(unique_tags(catalog.artworks, catalog.series)),
        selected=tuple(select_bento(artworks)),
        catalog=tuple(series),
    )
