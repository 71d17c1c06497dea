"""Page navigation and the artwork viewer.

The site is a single page with five views. ``Navigator`` keeps the history
stack, the content rendered on the series and artwork pages, and a cache of
the last series and artwork opened so that back navigation can restore a
page whose content was cleared when it was left.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, List, Optional
import logging

from ..catalog.loader import CatalogStore
from ..catalog.models import Artwork, Catalog, Series
from ..core.text import normalize_link
from ..images.resolver import THUMBNAIL_EXTENSIONS, EXTENSIONS, Probe, ResolutionChain


logger = logging.getLogger(__name__)

PAGES = ("home", "works", "about", "series", "artwork")
CONTENT_PAGES = ("series", "artwork")


class ArtworkViewer:
    """State of the artwork page: main image, thumbnail strip and counter.

    Thumbnails whose image cannot be found are hidden; the counter only
    counts the ones still visible. A thumbnail that has not finished probing
    counts as visible.

    Args:
        artwork: Artwork to show.
        image_index: Initially selected candidate; out-of-range falls back to 0.
    """

    def __init__(self, artwork: Artwork, image_index: int = 0):
        self.artwork = artwork
        self.images: List[str] = list(artwork.images)
        self.index = image_index if 0 <= image_index < len(self.images) else 0
        self.available: Dict[int, bool] = {}
        self.main_src: Optional[str] = None

    @property
    def has_images(self) -> bool:
        return bool(self.images)

    @property
    def link(self) -> str:
        return normalize_link(self.artwork.link)

    @property
    def current_image(self) -> Optional[str]:
        return self.images[self.index] if self.images else None

    def visible_indices(self) -> List[int]:
        return [i for i in range(len(self.images)) if self.available.get(i, True)]

    def switch_image(self, index: int) -> bool:
        """Select thumbnail ``index``; hidden or out-of-range thumbnails are ignored."""
        if index not in self.visible_indices():
            logger.debug("Ignoring switch to unavailable image %d of %s", index, self.artwork.id)
            return False
        self.index = index
        self.main_src = None
        return True

    def mark_available(self, index: int, ok: bool) -> None:
        self.available[index] = bool(ok)

    def counter(self) -> str:
        """``"k / n"`` over visible thumbnails, or ``""`` when none are visible."""
        visible = self.visible_indices()
        if not visible:
            return ""
        position = visible.index(self.index) + 1 if self.index in visible else 1
        return f"{position} / {len(visible)}"

    def main_chain(self, probe: Probe) -> ResolutionChain:
        """Chain for the main image: the selected candidate, then the ones after it."""

        def on_load(path: str) -> None:
            self.main_src = path

        return ResolutionChain(probe, self.images[self.index:], on_load=on_load, extensions=EXTENSIONS)

    def thumbnail_chains(self, probe: Probe) -> List[ResolutionChain]:
        """One chain per thumbnail; each marks its thumbnail available or hidden."""
        chains = []
        for i, path in enumerate(self.images):
            chains.append(
                ResolutionChain(
                    probe,
                    [path],
                    on_load=lambda _p, i=i: self.mark_available(i, True),
                    on_error=lambda i=i: self.mark_available(i, False),
                    extensions=THUMBNAIL_EXTENSIONS,
                )
            )
        return chains


@dataclass
class _ArtworkEntry:
    artwork: Artwork
    image_index: int = 0


class Navigator:
    """History-aware page switcher bound to a ``CatalogStore``.

    Args:
        store: Catalog store; the navigator follows its reloads.
        probe: Optional prober; when given, opening an artwork starts (but
            does not run) resolution chains for its images.
        on_change: Called with the page name after every page switch.
    """

    def __init__(
        self,
        store: CatalogStore,
        probe: Optional[Probe] = None,
        on_change: Optional[Callable[[str], None]] = None,
    ):
        self.store = store
        self.probe = probe
        self.on_change = on_change
        self.current = "home"
        self.history: List[str] = []
        self.series: Optional[Series] = None
        self.viewer: Optional[ArtworkViewer] = None
        self._cached_series: Optional[Series] = None
        self._cached_artwork: Optional[_ArtworkEntry] = None
        self._chains: Dict[str, List[ResolutionChain]] = {page: [] for page in PAGES}
        self._unsubscribe = store.subscribe(self._on_catalog)

    @property
    def catalog(self) -> Catalog:
        return self.store.catalog

    def close(self) -> None:
        """Stop following the store and cancel every running chain."""
        self._unsubscribe()
        for page in PAGES:
            self._cancel_chains(page)

    # ---------------- Pages ----------------

    def navigate(self, page: str, add_to_history: bool = True) -> bool:
        """Switch to ``page``; leaving a series or artwork page clears its content."""
        if page not in PAGES:
            logger.warning("Unknown page: %s", page)
            return False
        if self.current != page and self.current in CONTENT_PAGES:
            self._clear(self.current)
        self.current = page
        if add_to_history:
            self.history.append(page)
        if self.on_change is not None:
            self.on_change(page)
        return True

    def back(self) -> str:
        """Go to the previous page, or home when there is none."""
        if len(self.history) > 1:
            self.history.pop()
            previous = self.history[-1]
            self._restore(previous)
            self.navigate(previous, add_to_history=False)
        else:
            self.navigate("home", add_to_history=True)
        return self.current

    def pop_state(self, page: str) -> str:
        """Sync with a browser back/forward step that landed on ``page``."""
        while len(self.history) > 1 and self.history[-1] != page:
            self.history.pop()
        if not self.history or self.history[-1] != page:
            self.history.append(page)
        if self.navigate(page, add_to_history=False):
            self._restore(page)
        return self.current

    # ---------------- Opening entities ----------------

    def open_series(self, series_id: str) -> bool:
        series = self.catalog.series_by_id(series_id)
        if series is None:
            logger.warning("Series not found with id: %s", series_id)
            return False
        self._cached_series = series
        self._render_series(series)
        return self.navigate("series")

    def open_artwork(self, artwork_id: str, image_index: int = 0) -> bool:
        artwork = self.catalog.artwork_by_id(artwork_id)
        if artwork is None:
            logger.warning("Artwork not found with id: %s", artwork_id)
            return False
        self._cached_artwork = _ArtworkEntry(artwork, image_index)
        self._render_artwork(artwork, image_index)
        return self.navigate("artwork")

    def open_artwork_from_series(self, series_id: str, artwork_id: Optional[str], index: int) -> bool:
        """Open an artwork clicked on a series page, by id or by position in the series."""
        if artwork_id:
            return self.open_artwork(artwork_id, 0)
        series = self.catalog.series_by_id(series_id)
        if series is None or not 0 <= index < len(series.artworks):
            logger.warning("No artwork %d in series %s", index, series_id)
            return False
        return self.open_artwork(series.artworks[index].id, 0)

    # ---------------- Chains ----------------

    def track(self, chain: ResolutionChain, page: Optional[str] = None) -> ResolutionChain:
        """Register ``chain`` so that it is cancelled when ``page`` is left."""
        self._chains[page or self.current].append(chain)
        return chain

    def chains(self, page: Optional[str] = None) -> List[ResolutionChain]:
        return list(self._chains[page or self.current])

    def _cancel_chains(self, page: str) -> None:
        for chain in self._chains[page]:
            chain.cancel()
        self._chains[page] = []

    # ---------------- Rendering ----------------

    def _clear(self, page: str) -> None:
        self._cancel_chains(page)
        if page == "series":
            self.series = None
        elif page == "artwork":
            self.viewer = None

    def _render_series(self, series: Series) -> None:
        self._cancel_chains("series")
        self.series = series

    def _render_artwork(self, artwork: Artwork, image_index: int) -> None:
        self._cancel_chains("artwork")
        self.viewer = ArtworkViewer(artwork, image_index)
        if self.probe is not None and self.viewer.has_images:
            self.track(self.viewer.main_chain(self.probe), "artwork")
            for chain in self.viewer.thumbnail_chains(self.probe):
                self.track(chain, "artwork")

    def _restore(self, page: str) -> None:
        if page == "series" and self._cached_series is not None:
            self._render_series(self._cached_series)
        elif page == "artwork" and self._cached_artwork is not None:
            self._render_artwork(self._cached_artwork.artwork, self._cached_artwork.image_index)

    def _on_catalog(self, catalog: Catalog) -> None:
        if self._cached_series is not None:
            series = catalog.series_by_id(self._cached_series.id)
            if series is None:
                logger.info("Cached series %s no longer exists", self._cached_series.id)
            self._cached_series = series
        if self._cached_artwork is not None:
            artwork = catalog.artwork_by_id(self._cached_artwork.artwork.id)
            if artwork is None:
                logger.info("Cached artwork %s no longer exists", self._cached_artwork.artwork.id)
                self._cached_artwork = None
            else:
                self._cached_artwork = _ArtworkEntry(artwork, self._cached_artwork.image_index)
