"""Series grouping: aggregate artworks into series by series name."""

from __future__ import annotations

from typing import Dict, List, Sequence

from ..core.text import first_year, slugify
from .models import Artwork, Series


OTHER_WORKS = "Other Works"
EN_DASH = "–"


def year_range(year_strings: Sequence[str]) -> str:
    """Format the span of a set of year strings.

    Non-empty values are sorted by their first 4-digit number (stable for
    ties); the result is ``"first–last"``, a single value when only one
    distinct value remains, or ``""`` when there are none.
    """
    years = sorted((y for y in year_strings if y), key=first_year)
    if not years:
        return ""
    first, last = years[0], years[-1]
    if len(years) == 1 or first == last:
        return first
    return f"{first}{EN_DASH}{last}"


def _unique_tags(artworks: Sequence[Artwork]) -> tuple:
    seen: Dict[str, None] = {}
    for a in artworks:
        for t in a.tags:
            seen.setdefault(t, None)
    return tuple(seen)


def build_series(name: str, members: Sequence[Artwork]) -> Series:
    """Build one ``Series`` from its members (which must be non-empty)."""
    if not members:
        raise ValueError(f"Series {name!r} has no artworks")
    years = year_range([a.years for a in members])
    if len(members) > 1:
        blurb = f"A series of {len(members)} artworks" + (f" ({years})" if years else "")
    else:
        blurb = members[0].blurb or ""
    return Series(
        id=slugify(name),
        title=name,
        years=years,
        tags=_unique_tags(members),
        featured=any(a.featured for a in members),
        blurb=blurb,
        statement=members[0].statement or "",
        images=tuple(p for a in members for p in a.images if p),
        artworks=tuple(members),
    )


def group_by_series(artworks: Sequence[Artwork]) -> List[Series]:
    """Group artworks into series in first-seen order.

    Artworks without a series land in the ``"Other Works"`` bucket. Member
    order follows source order.
    """
    groups: Dict[str, List[Artwork]] = {}
    for a in artworks:
        groups.setdefault(a.series or OTHER_WORKS, []).append(a)
    return [build_series(name, members) for name, members in groups.items()]
