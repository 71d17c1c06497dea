import logging

import pytest

from portfolio.catalog import Artwork, Catalog, CatalogStore, group_by_series
from portfolio.images import CANCELLED, PENDING, StaticProber
from portfolio.site import (
    ArtworkViewer,
    BrowseState,
    Navigator,
    browse,
    carousel_thumbnail_width,
    matches_filters,
    select_bento,
    select_carousel_items,
    sort_items,
    unique_tags,
)


def _art(id, title, series=None, years="", tags=(), featured=False, selected=False, **kw):
    return Artwork(id=id, title=title, series=series, years=years, tags=tuple(tags),
                   featured=featured, selected_work=selected, **kw)


def _catalog(artworks, source="sheet"):
    return Catalog(artworks=tuple(artworks), series=tuple(group_by_series(artworks)), source=source)


@pytest.fixture()
def works():
    return [
        _art("alpha", "Alpha", "Light", "2020", ["Photography"], selected=True,
             images=("p/a0", "p/a1", "p/a2"), link="oppr.org/s/alpha"),
        _art("beta", "Beta", "Light", "2023", ["Print"], featured=True),
        _art("gamma", "Gamma", None, "2019", ["Zine"], statement="A book about penguins"),
        _art("delta", "Delta", "Dark", "2021", ["Aardvark", "Photography"], blurb="Shadow study"),
    ]


# ---------------- Works page ----------------

def test_unique_tags_preferred_first(works):
    cat = _catalog(works)
    assert unique_tags(cat.artworks, cat.series) == ["Photography", "Print", "Aardvark", "Zine"]


def test_matches_filters_tags_and_search(works):
    state = BrowseState(active_tags={"Print", "Zine"})
    assert [matches_filters(a, state) for a in works] == [False, True, True, False]

    state = BrowseState(search="  PENGUIN ")
    assert [a.id for a in works if matches_filters(a, state)] == ["gamma"]

    state = BrowseState(search="photo")
    assert [a.id for a in works if matches_filters(a, state)] == ["alpha", "delta"]

    state = BrowseState(active_tags={"Photography"}, search="shadow")
    assert [a.id for a in works if matches_filters(a, state)] == ["delta"]


def test_browse_state_toggle_and_clear():
    state = BrowseState(search="x", sort="az")
    state.toggle_tag("Print")
    assert state.active_tags == {"Print"}
    state.toggle_tag("Print")
    assert state.active_tags == set()
    state.toggle_tag("Data")
    state.clear()
    assert state.active_tags == set()
    assert state.search == ""
    assert state.sort == "featured"


@pytest.mark.parametrize(
    "mode,expected",
    [
        ("featured", ["beta", "delta", "alpha", "gamma"]),
        ("newest", ["beta", "delta", "alpha", "gamma"]),
        ("oldest", ["gamma", "alpha", "delta", "beta"]),
        ("az", ["alpha", "beta", "delta", "gamma"]),
        ("bogus", ["alpha", "beta", "gamma", "delta"]),
    ],
)
def test_sort_items(works, mode, expected):
    assert [a.id for a in sort_items(works, mode)] == expected


def test_sort_featured_then_title_on_equal_years():
    items = [_art("b", "b", years="2020"), _art("a", "A", years="2020"), _art("z", "Z", featured=True)]
    assert [a.id for a in sort_items(items, "featured")] == ["z", "a", "b"]


def test_select_bento(works):
    assert [a.id for a in select_bento(works)] == ["beta"]
    plain = [_art(f"w{i}", f"W{i}") for i in range(10)]
    assert [a.id for a in select_bento(plain)] == [f"w{i}" for i in range(8)]


def test_browse_view(works):
    view = browse(_catalog(works), BrowseState(sort="az"))
    assert view.tags[:2] == ("Photography", "Print")
    assert [a.id for a in view.selected] == ["beta"]
    assert [s.title for s in view.catalog] == ["Dark", "Light", "Other Works"]

    view = browse(_catalog(works), BrowseState(search="nothing matches this"))
    assert view.selected == ()
    assert view.catalog == ()


# ---------------- Carousel ----------------

def test_carousel_prefers_selected_works():
    items = [_art(f"s{i}", f"S{i}", selected=True) for i in range(10)] + [_art("x", "X", featured=True)]
    first, second = select_carousel_items(_catalog(items))
    assert [a.id for a in first] == [f"s{i}" for i in range(8)]
    # only two selected works are left over, so the second row is an offset window
    assert [a.id for a in second] == [f"s{i}" for i in range(4, 10)]


def test_carousel_featured_then_all():
    items = [_art(f"w{i}", f"W{i}", featured=i in (3, 5)) for i in range(20)]
    first, second = select_carousel_items(_catalog(items))
    assert [a.id for a in first] == ["w3", "w5"]
    assert [a.id for a in second] == ["w0", "w1", "w2", "w4", "w6", "w7", "w8", "w9"]

    plain = [_art(f"w{i}", f"W{i}") for i in range(20)]
    first, second = select_carousel_items(_catalog(plain))
    assert [a.id for a in first] == [f"w{i}" for i in range(8)]
    assert [a.id for a in second] == [f"w{i}" for i in range(8, 16)]


def test_carousel_empty_catalog():
    assert select_carousel_items(Catalog()) == ([], [])


def test_carousel_thumbnail_width_clamped():
    assert carousel_thumbnail_width(300, 200) == 300
    assert carousel_thumbnail_width(400, 200) == 380
    assert carousel_thumbnail_width(100, 200) == 150
    assert carousel_thumbnail_width(0, 0) == 150


# ---------------- Artwork viewer ----------------

def test_artwork_viewer_counter_and_switching(works):
    viewer = ArtworkViewer(works[0], image_index=7)
    assert viewer.index == 0
    assert viewer.link == "https://oppr.org/s/alpha"
    assert viewer.counter() == "1 / 3"

    viewer.mark_available(1, False)
    assert viewer.counter() == "1 / 2"
    assert viewer.switch_image(1) is False
    assert viewer.switch_image(2) is True
    assert viewer.current_image == "p/a2"
    assert viewer.counter() == "2 / 2"

    viewer.mark_available(0, False)
    viewer.mark_available(2, False)
    assert viewer.counter() == ""


def test_artwork_viewer_probes_thumbnails_and_main_image(works):
    probe = StaticProber({"p/a0.JPG", "p/a2.gif"})
    viewer = ArtworkViewer(works[0])
    for chain in viewer.thumbnail_chains(probe):
        chain.run()
    assert viewer.available == {0: True, 1: False, 2: True}

    # the main image does not try the upper-case .JPG variant
    viewer.main_chain(probe).run()
    assert viewer.main_src == "p/a2.gif"


def test_artwork_viewer_without_images(works):
    viewer = ArtworkViewer(works[1])
    assert not viewer.has_images
    assert viewer.current_image is None
    assert viewer.counter() == ""


# ---------------- Navigation ----------------

def test_navigation_history_and_back(works):
    store = CatalogStore(_catalog(works))
    pages = []
    nav = Navigator(store, on_change=pages.append)

    assert nav.navigate("works")
    assert nav.open_series("light")
    assert nav.series.title == "Light"
    assert nav.open_artwork("alpha", 1)
    assert nav.current == "artwork"
    assert nav.series is None
    assert nav.viewer.index == 1
    assert nav.history == ["works", "series", "artwork"]

    assert nav.back() == "series"
    assert nav.series.title == "Light"
    assert nav.viewer is None
    assert nav.back() == "works"
    assert nav.series is None
    # nothing left to go back to
    assert nav.back() == "home"
    assert nav.history == ["works", "home"]
    assert pages == ["works", "series", "artwork", "series", "works", "home"]


def test_navigation_unknown_targets_leave_page_unchanged(works, caplog):
    nav = Navigator(CatalogStore(_catalog(works)))
    nav.navigate("works")
    with caplog.at_level(logging.WARNING, logger="portfolio.site.navigation"):
        assert nav.navigate("gallery") is False
        assert nav.open_series("nope") is False
        assert nav.open_artwork("nope") is False
    assert nav.current == "works"
    assert nav.history == ["works"]
    assert len([r for r in caplog.records if r.levelno == logging.WARNING]) == 3


def test_pop_state_syncs_history(works):
    nav = Navigator(CatalogStore(_catalog(works)))
    nav.navigate("home")
    nav.navigate("works")
    nav.open_series("dark")
    nav.open_artwork("delta")
    assert nav.pop_state("works") == "works"
    assert nav.history == ["home", "works"]

    # a page that is no longer on the stack unwinds to the root, then is pushed
    assert nav.pop_state("series") == "series"
    assert nav.history == ["home", "series"]
    assert nav.series.id == "dark"


def test_open_artwork_from_series(works):
    nav = Navigator(CatalogStore(_catalog(works)))
    assert nav.open_artwork_from_series("light", None, 1)
    assert nav.viewer.artwork.id == "beta"
    assert nav.open_artwork_from_series("light", "delta", 0)
    assert nav.viewer.artwork.id == "delta"
    assert nav.open_artwork_from_series("light", None, 9) is False


def test_leaving_artwork_page_cancels_its_chains(works):
    nav = Navigator(CatalogStore(_catalog(works)), probe=StaticProber(set()))
    nav.open_artwork("alpha")
    chains = nav.chains("artwork")
    assert len(chains) == 1 + 3
    assert all(c.status == PENDING for c in chains)

    nav.navigate("about")
    assert all(c.status == CANCELLED for c in chains)
    assert nav.chains("artwork") == []


def test_catalog_reload_drops_missing_cached_entities(works):
    store = CatalogStore(_catalog(works))
    nav = Navigator(store)
    nav.open_series("light")
    nav.open_artwork("alpha")
    nav.navigate("home")

    store.replace(_catalog(works[1:]))
    nav.pop_state("artwork")
    assert nav.viewer is None
    nav.pop_state("series")
    assert nav.series is not None
    assert [a.id for a in nav.series.artworks] == ["beta"]

    # once closed, reloads no longer touch the cache
    nav.close()
    store.replace(_catalog(works[2:]))
    nav.navigate("home")
    nav.pop_state("series")
    assert [a.id for a in nav.series.artworks] == ["beta"]
