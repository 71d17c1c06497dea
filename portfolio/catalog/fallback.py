"""Static catalog used when the spreadsheet cannot be loaded."""

from __future__ import annotations

from typing import Dict, List

from ..core.text import slugify
from .grouping import group_by_series
from .models import Artwork, Catalog
from .transform import DEFAULT_IMAGES_ROOT, series_folder


# Extension-less image names inside each project folder
FALLBACK_IMAGE_NAMES = ("thumbnail", "image1", "image2")


FALLBACK_PROJECTS: List[Dict[str, object]] = [
    {
        "title": "Technomancy",
        "years": "2024–2025",
        "tags": ["Photography"],
        "featured": True,
        "blurb": "Photography exploring how technology mediates memory, ritual, and looking.",
        "statement": "A photographic series that treats everyday devices and digital artifacts as contemporary talismans.",
    },
    {
        "title": "Vanished Spaces / Banished Faces",
        "years": "2023–2024",
        "tags": ["Photography", "Print"],
        "featured": True,
        "blurb": "Image-to-print work about absence, erasure, and the politics of visibility.",
        "statement": "This project moves between photography and printmaking to study disappearance.",
    },
    {
        "title": "Freshman",
        "years": "2024",
        "tags": ["Screenprint", "Print"],
        "featured": False,
        "blurb": "Screenprint series on identity formation, pressure, and repetition.",
        "statement": "A screenprint series using layered repetition to capture the push-pull between belonging and self-definition.",
    },
    {
        "title": "Memoria",
        "years": "2024",
        "tags": ["Screenprint", "Print"],
        "featured": True,
        "blurb": "Print-based work about memory as a physical and imperfect record.",
        "statement": "Memoria treats memory as material: layered, fragile, and constantly re-printed with errors.",
    },
    {
        "title": "Cognitive Dissonance",
        "years": "2025",
        "tags": ["Sculpture", "3D"],
        "featured": True,
        "blurb": "3D work staging contradictions between form, function, and belief.",
        "statement": "A sculptural project that makes tension visible: objects that look useful but resist use.",
    },
    {
        "title": "Modern Ruins",
        "years": "2025",
        "tags": ["Sculpture", "3D"],
        "featured": False,
        "blurb": "Sculptural fragments imagining futures that already feel like ruins.",
        "statement": "Modern Ruins assembles partial structures and surfaces to suggest collapse as a slow everyday process.",
    },
    {
        "title": "Postermania",
        "years": "2024–2025",
        "tags": ["Design", "Graphic Design"],
        "featured": True,
        "blurb": "Poster series exploring typography, constraint, and visual rhythm.",
        "statement": "A set of posters treated as a lab: each piece tests a rule set and pushes it until it breaks.",
    },
    {
        "title": "Data Visualization",
        "years": "2025",
        "tags": ["Data", "Design", "System"],
        "featured": True,
        "blurb": "Data as image: turning measurement into narrative and form.",
        "statement": "A collection of data-driven visuals that focus on clarity and affect.",
    },
    {
        "title": "Chronophobia",
        "years": "2023",
        "tags": ["Drawing"],
        "featured": False,
        "blurb": "Drawings about time anxiety: urgency, drift, and compression.",
        "statement": "A drawing series tracking how time pressure changes attention.",
    },
    {
        "title": "Explorador",
        "years": "2022–2023",
        "tags": ["Painting"],
        "featured": False,
        "blurb": "Painting as searching: maps, wandering, and partial translation.",
        "statement": "Explorador uses painting to model exploration: paths that don't resolve.",
    },
]


def fallback_artworks(images_root: str = DEFAULT_IMAGES_ROOT) -> List[Artwork]:
    """Artworks for the static dataset; each project is its own series.

    Images are looked up as ``<root>/<project-slug>/{thumbnail,image1,image2}``.
    """
    artworks = []
    for p in FALLBACK_PROJECTS:
        title = str(p["title"])
        artwork_id = slugify(title)
        folder = f"{images_root.rstrip('/')}/{series_folder(title)}"
        images = [f"{folder}/{name}" for name in FALLBACK_IMAGE_NAMES]
        artworks.append(
            Artwork(
                id=artwork_id,
                title=title,
                years=str(p["years"]),
                tags=tuple(p["tags"]),  # type: ignore[arg-type]
                featured=bool(p["featured"]),
                blurb=str(p["blurb"]),
                series=title,
                statement=str(p["statement"]),
                thumbnail=images[0] if images else "",
                images=tuple(images),
            )
        )
    return artworks


def fallback_catalog(images_root: str = DEFAULT_IMAGES_ROOT) -> Catalog:
    artworks = fallback_artworks(images_root)
    return Catalog(artworks=tuple(artworks), series=tuple(group_by_series(artworks)), source="fallback")
