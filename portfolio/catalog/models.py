"""Artwork, Series and Catalog entities.

Entities are frozen: a load builds them once and a reload replaces the whole
catalog rather than mutating anything in place.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional, Tuple


# (attribute, JSON key) for optional string fields; emitted only when non-empty
_OPTIONAL_FIELDS: Tuple[Tuple[str, str], ...] = (
    ("series", "series"),
    ("statement", "statement"),
    ("dimensions", "dimensions"),
    ("medium", "medium"),
    ("work_type", "workType"),
    ("exhibited", "exhibited"),
    ("awards", "awards"),
    ("link", "link"),
    ("made_in_collaboration_with", "madeInCollaborationWith"),
    ("collaborators", "collaborators"),
)


@dataclass(frozen=True)
class Artwork:
    """A single artwork row from the spreadsheet.

    Attributes:
        id: Slug derived from the title.
        title: Display title.
        years: First 4-digit year of the year cell (or the raw cell).
        tags: Ordered tags; currently the work type only.
        featured: Featured flag (never set by the sheet itself).
        blurb: Short generated description.
        images: Candidate image paths without extension, in priority order.
        thumbnail: First candidate path, or ``""``.
        selected_work: ``True`` when the "Selected Work" column is ``Y``.
    """
    id: str
    title: str
    years: str = ""
    tags: Tuple[str, ...] = ()
    featured: bool = False
    blurb: str = ""
    series: Optional[str] = None
    statement: Optional[str] = None
    dimensions: Optional[str] = None
    medium: Optional[str] = None
    work_type: Optional[str] = None
    exhibited: Optional[str] = None
    awards: Optional[str] = None
    link: Optional[str] = None
    made_in_collaboration_with: Optional[str] = None
    collaborators: Optional[str] = None
    selected_work: bool = False
    thumbnail: str = ""
    images: Tuple[str, ...] = ()

    def to_dict(self) -> Dict[str, object]:
        """Sparse JSON-ready dict; empty optional fields are omitted."""
        out: Dict[str, object] = {
            "id": self.id,
            "title": self.title,
            "years": self.years,
            "tags": list(self.tags),
            "featured": self.featured,
            "blurb": self.blurb,
        }
        for attr, key in _OPTIONAL_FIELDS:
            value = getattr(self, attr)
            if value:
                out[key] = value
        if self.selected_work:
            out["selectedWork"] = True
        out["thumbnail"] = self.thumbnail
        out["images"] = list(self.images)
        return out

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> "Artwork":
        kwargs: Dict[str, object] = {}
        for attr, key in _OPTIONAL_FIELDS:
            value = data.get(key)
            if value:
                kwargs[attr] = str(value)
        return cls(
            id=str(data.get("id", "")),
            title=str(data.get("title", "")),
            years=str(data.get("years", "") or ""),
            tags=tuple(str(t) for t in (data.get("tags") or [])),
            featured=bool(data.get("featured", False)),
            blurb=str(data.get("blurb", "") or ""),
            selected_work=bool(data.get("selectedWork", False)),
            thumbnail=str(data.get("thumbnail", "") or ""),
            images=tuple(str(p) for p in (data.get("images") or [])),
            **kwargs,
        )


@dataclass(frozen=True)
class Series:
    """A named body of work grouping one or more artworks.

    ``artworks`` keeps source row order; a series never has zero members.
    """
    id: str
    title: str
    years: str
    tags: Tuple[str, ...]
    featured: bool
    blurb: str
    statement: str
    images: Tuple[str, ...]
    artworks: Tuple[Artwork, ...]

    def to_dict(self) -> Dict[str, object]:
        return {
            "id": self.id,
            "title": self.title,
            "years": self.years,
            "tags": list(self.tags),
            "featured": self.featured,
            "blurb": self.blurb,
            "statement": self.statement,
            "images": list(self.images),
            "artworks": [a.to_dict() for a in self.artworks],
        }


@dataclass(frozen=True)
class Catalog:
    """One load's worth of artworks and series.

    Attributes:
        artworks: Flat artwork list in source row order.
        series: Series in first-seen order.
        source: Where the data came from: ``"sheet"``, ``"file"``, ``"fallback"`` or ``"empty"``.
    """
    artworks: Tuple[Artwork, ...] = ()
    series: Tuple[Series, ...] = ()
    source: str = "empty"
    _artwork_index: Dict[str, Artwork] = field(default_factory=dict, init=False, repr=False, compare=False)
    _series_index: Dict[str, Series] = field(default_factory=dict, init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        # Later duplicates overwrite earlier ones: last write wins on id collisions.
        self._artwork_index.update({a.id: a for a in self.artworks})
        self._series_index.update({s.id: s for s in self.series})

    def __len__(self) -> int:
        return len(self.artworks)

    def artwork_by_id(self, artwork_id: str) -> Optional[Artwork]:
        return self._artwork_index.get(artwork_id)

    def series_by_id(self, series_id: str) -> Optional[Series]:
        return self._series_index.get(series_id)

    def series_for(self, artwork: Artwork) -> Optional[Series]:
        """Return the series that holds ``artwork``, if any."""
        for s in self.series:
            if artwork in s.artworks:
                return s
        return None

    def all_items(self) -> List[Artwork]:
        """Artworks, or the members of every series when the flat list is empty."""
        if self.artworks:
            return list(self.artworks)
        items: List[Artwork] = []
        for s in self.series:
            items.extend(s.artworks)
        return items
