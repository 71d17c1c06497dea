from pathlib import Path

import numpy as np
import pytest
from PIL import Image

from portfolio.errors import LayoutNotReady
from portfolio.layout import (
    DEFAULT_GAP,
    MasonryGallery,
    column_width,
    get_num_columns,
    masonry_layout,
    measure_image_item,
)


def test_equal_heights_alternate_columns():
    result = masonry_layout([100] * 5, num_columns=2)
    gap = DEFAULT_GAP
    assert result.columns == [0, 1, 0, 1, 0]
    assert result.column_heights == (300 + 3 * gap, 200 + 2 * gap)
    assert result.container_height == 300 + 3 * gap
    assert [p.top for p in result.placements] == [0, 0, 100 + gap, 100 + gap, 2 * (100 + gap)]


def test_shortest_column_wins():
    result = masonry_layout([300, 100, 100, 100], num_columns=2, gap=0)
    assert result.columns == [0, 1, 1, 1]
    assert result.column_heights == (300.0, 300.0)


def test_min_item_height_applies():
    result = masonry_layout([10, 0, None], num_columns=3, gap=0)
    assert [p.height for p in result.placements] == [100, 100, 100]


@pytest.mark.parametrize(
    "width,expected",
    [(1600, 4), (1200, 4), (1199, 3), (900, 3), (899, 2), (600, 2), (599, 1), (1, 1)],
)
def test_get_num_columns_breakpoints(width, expected):
    assert get_num_columns(width) == expected


def test_layout_from_container_width_positions():
    result = masonry_layout([200, 150, 100, 50, 120], container_width=1232)
    assert result.num_columns == 4
    assert result.column_width == pytest.approx(column_width(1232, 4))
    assert result.column_width == pytest.approx(284)
    assert result.placements[1].left == pytest.approx(316)
    # columns 2 and 3 tie at 100 (item 3 is raised to the minimum); leftmost wins
    assert result.placements[3].height == pytest.approx(100)
    assert result.placements[4].column == 2
    assert result.placements[4].top == pytest.approx(100 + DEFAULT_GAP)


def test_layout_requires_width_or_columns():
    with pytest.raises(LayoutNotReady):
        masonry_layout([100], container_width=0)
    with pytest.raises(LayoutNotReady):
        masonry_layout([100])
    with pytest.raises(ValueError):
        masonry_layout([100], num_columns=0)


def test_empty_layout():
    result = masonry_layout([], container_width=800)
    assert result.placements == ()
    assert result.column_heights == (0.0, 0.0)
    assert result.container_height == 0.0


def test_measure_image_item(tmp_path: Path):
    p = tmp_path / "wide.png"
    Image.fromarray(np.zeros((50, 100, 3), dtype=np.uint8)).save(p)
    assert measure_image_item(p, 200) == pytest.approx(100)
    assert measure_image_item(p, 200, info_height=40) == pytest.approx(140)
    assert measure_image_item(tmp_path / "missing.png", 200, info_height=40) == 40
    assert measure_image_item(None, 200, info_height=12) == 12


def test_gallery_defers_until_width_and_relayouts():
    aspect = {"a": 1.0, "b": 0.5, "c": 2.0}

    def measure(item, width):
        # images not loaded yet contribute nothing; caption block is 20px
        return width * aspect.get(item, 0.0) + 20

    gallery = MasonryGallery(["a", "b", "c", "d"], measure, gap=10)
    assert gallery.layout() is None
    assert gallery.result is None

    first = gallery.on_resize(610)
    assert first.num_columns == 2
    assert first.column_width == pytest.approx(300)
    assert first.columns == [0, 1, 1, 0]

    aspect["d"] = 3.0
    second = gallery.on_image_loaded(3)
    assert second is gallery.result
    assert second.placements[3].height == pytest.approx(920)

    narrow = gallery.on_resize(400)
    assert narrow.num_columns == 1
    assert narrow.columns == [0, 0, 0, 0]
