import pytest

from portfolio.catalog import (
    Artwork,
    Catalog,
    DEFAULT_COLUMNS,
    OTHER_WORKS,
    build_blurb,
    build_image_paths,
    group_by_series,
    resolve_columns,
    series_folder,
    transform_row,
    transform_rows,
    year_range,
)
from portfolio.catalog.grouping import build_series
from portfolio.core import parse_csv_line


HEADER = (
    "Title,Series,Year,Work Type,Medium,Dimensions,Theme/Statement,Exhibited,Awards,"
    "Link,Made in Collaboration With,Selected Work"
)
ROW = (
    'Monkey Bars,Modern Ruins,2021,Photography,Archival inkjet print,"20"" x 30""",Decay,'
    "Gallery X,,oppr.org/s/abc,Jane Doe,Y"
)


def _art(title, series=None, years="", tags=(), featured=False, **kw):
    from portfolio.core import slugify
    return Artwork(id=slugify(title), title=title, series=series, years=years,
                   tags=tuple(tags), featured=featured, **kw)


def test_resolve_columns_from_header():
    cols = resolve_columns(parse_csv_line(HEADER))
    assert cols.title == 0
    assert cols.series == 1
    assert cols.years == 2
    assert cols.work_type == 3
    assert cols.theme == 6
    assert cols.link == 9
    assert cols.made_in_collaboration_with == 10
    # no dedicated collaborators column: shares the collaboration column
    assert cols.collaborators == 10
    assert cols.selected_work == 11


def test_resolve_columns_reordered_and_missing():
    cols = resolve_columns(parse_csv_line("Title,Medium,Series,Collaborators,URL"))
    assert cols.medium == 1
    assert cols.series == 2
    assert cols.collaborators == 3
    assert cols.link == 4
    # absent headers fall back to fixed positions
    assert cols.years == 2
    assert cols.awards == 8
    assert cols.selected_work == -1


def test_transform_row_full():
    cols = resolve_columns(parse_csv_line(HEADER))
    a = transform_row(parse_csv_line(ROW), cols)
    assert a is not None
    assert a.id == "monkey-bars"
    assert a.years == "2021"
    assert a.tags == ("Photography",)
    assert a.blurb == "Photography created using Archival inkjet print"
    assert a.series == "Modern Ruins"
    assert a.dimensions == '20" x 30"'
    assert a.statement == "Decay"
    assert a.awards is None
    assert a.link == "oppr.org/s/abc"
    assert a.made_in_collaboration_with == "Jane Doe"
    assert a.collaborators == "Jane Doe"
    assert a.selected_work is True
    assert a.featured is False
    assert a.thumbnail == "assets/images/modern-ruins/monkey-bars/monkey-bars"
    assert a.images[0] == a.thumbnail


@pytest.mark.parametrize("title", ["", "   ", "Title", "  title "])
def test_transform_row_skips_blank_and_header_titles(title):
    row = parse_csv_line(f"{title},Series,2020")
    assert transform_row(row) is None


def test_transform_rows_drops_skipped():
    rows = [parse_csv_line(x) for x in ["A,,2020", ",,", "title,,", "B,,2021"]]
    out = transform_rows(rows, DEFAULT_COLUMNS)
    assert [a.title for a in out] == ["A", "B"]


def test_transform_row_optional_fields_absent():
    a = transform_row(parse_csv_line("Lonely"))
    assert a is not None
    assert a.years == ""
    assert a.tags == ()
    assert a.blurb == ""
    assert a.series is None
    assert a.selected_work is False
    d = a.to_dict()
    assert "series" not in d
    assert "selectedWork" not in d


def test_build_blurb():
    assert build_blurb("Painting", "oil") == "Painting created using oil"
    assert build_blurb("", "oil") == "Artwork created using oil"
    assert build_blurb("Painting", "") == ""


def test_build_image_paths_normal_order():
    paths = build_image_paths("monkey-bars", "Modern Ruins", max_variants=2)
    base = "assets/images/modern-ruins/monkey-bars/monkey-bars"
    under = "assets/images/modern-ruins/monkey-bars/monkey_bars"
    assert paths == [
        base,
        under,
        f"{base}_0001", f"{under}_0001", f"{base}-0001", f"{base}_1", f"{under}_1", f"{base}-1",
        f"{base}_0002", f"{under}_0002", f"{base}-0002", f"{base}_2", f"{under}_2", f"{base}-2",
    ]


def test_build_image_paths_without_series_and_custom_root():
    paths = build_image_paths("x", None, images_root="/srv/img/", max_variants=1)
    assert paths[0] == "/srv/img/artworks/x/x"
    assert series_folder(None) == "artworks"
    assert series_folder("*/Encoded/*") == "encoded"


def test_build_image_paths_single_page():
    paths = build_image_paths("zine-page-3", "Zine", max_variants=2)
    assert paths == [
        "assets/images/zine/page-3/page-3",
        "assets/images/zine/zine-page-3",
        "assets/images/zine/zine-page-3-page-1",
        "assets/images/zine/zine-page-3-1",
        "assets/images/zine/zine-page-3-page-2",
        "assets/images/zine/zine-page-3-2",
    ]


def test_build_image_paths_whole_book():
    paths = build_image_paths("zine", "Zine", max_variants=3)
    assert paths[:3] == [
        "assets/images/zine/page-1/page-1",
        "assets/images/zine/page-2/page-2",
        "assets/images/zine/page-3/page-3",
    ]
    assert paths[3] == "assets/images/zine/zine"
    assert len(paths) == 3 + 1 + 2 * 3


def test_year_range():
    assert year_range(["2023", "2020"]) == "2020–2023"
    assert year_range(["2021"]) == "2021"
    assert year_range(["2021", "2021"]) == "2021"
    assert year_range(["", ""]) == ""


def test_group_by_series_order_and_blurbs():
    a1 = _art("One", series="S", years="2023", tags=["Print"])
    a2 = _art("Loose", years="2019", blurb="solo blurb")
    a3 = _art("Two", series="S", years="2020", tags=["Photography", "Print"], featured=True)
    series = group_by_series([a1, a2, a3])

    assert [s.title for s in series] == ["S", OTHER_WORKS]
    s, other = series
    assert s.id == "s"
    assert s.artworks == (a1, a3)
    assert s.years == "2020–2023"
    assert s.blurb == "A series of 2 artworks (2020–2023)"
    assert s.tags == ("Print", "Photography")
    assert s.featured is True
    assert other.id == "other-works"
    assert other.years == "2019"
    assert other.blurb == "solo blurb"


def test_build_series_rejects_empty():
    with pytest.raises(ValueError):
        build_series("Empty", [])


def test_catalog_lookups():
    a = _art("A", series="S")
    b = _art("B")
    dup = _art("A", series="T", years="2024")
    cat = Catalog(artworks=(a, b, dup), series=tuple(group_by_series([a, b, dup])), source="file")

    assert len(cat) == 3
    # id collisions: last one wins
    assert cat.artwork_by_id("a") is dup
    assert cat.series_by_id("s").artworks == (a,)
    assert cat.series_for(b).title == OTHER_WORKS
    assert cat.series_by_id("missing") is None


def test_catalog_all_items_falls_back_to_series_members():
    a = _art("A", series="S")
    cat = Catalog(artworks=(), series=tuple(group_by_series([a])))
    assert cat.all_items() == [a]


def test_artwork_dict_round_trip():
    cols = resolve_columns(parse_csv_line(HEADER))
    a = transform_row(parse_csv_line(ROW), cols)
    d = a.to_dict()
    assert d["workType"] == "Photography"
    assert d["madeInCollaborationWith"] == "Jane Doe"
    assert d["selectedWork"] is True
    assert Artwork.from_dict(d) == a
