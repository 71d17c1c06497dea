"""Masonry layout for series galleries.

Items are placed in source order, each into the column whose running height
is currently smallest (ties go to the leftmost column). This is the usual
streaming masonry heuristic, not an optimal packing. Heights are measured
from the rendered items, so the whole layout is recomputed whenever the
container is resized or a late-loading image changes an item's height.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Generic, List, Optional, Sequence, Tuple, TypeVar, Union
import logging

import numpy as np
from PIL import Image, UnidentifiedImageError

from ..errors import LayoutNotReady


logger = logging.getLogger(__name__)

DEFAULT_BREAKPOINTS: Tuple[Tuple[int, int], ...] = ((1200, 4), (900, 3), (600, 2))
DEFAULT_GAP = 32  # 2rem
MIN_ITEM_HEIGHT = 100

T = TypeVar("T")


@dataclass(frozen=True)
class Placement:
    index: int
    column: int
    left: float
    top: float
    width: float
    height: float


@dataclass(frozen=True)
class MasonryResult:
    """Output of one layout pass.

    Attributes:
        placements: One placement per item, in source order.
        column_heights: Running height per column after the last item (gaps included).
        container_height: Height the container needs (tallest column).
        num_columns: Column count used.
        column_width: Width of each column.
    """
    placements: Tuple[Placement, ...]
    column_heights: Tuple[float, ...]
    container_height: float
    num_columns: int
    column_width: float

    @property
    def columns(self) -> List[int]:
        return [p.column for p in self.placements]


def get_num_columns(container_width: float, breakpoints: Sequence[Tuple[int, int]] = DEFAULT_BREAKPOINTS) -> int:
    """Responsive column count: the first breakpoint whose min width fits, else 1."""
    for min_width, columns in breakpoints:
        if container_width >= min_width:
            return columns
    return 1


def column_width(container_width: float, num_columns: int, gap: float = DEFAULT_GAP) -> float:
    return (container_width - gap * (num_columns - 1)) / num_columns


def masonry_layout(
    heights: Sequence[float],
    container_width: Optional[float] = None,
    num_columns: Optional[int] = None,
    gap: float = DEFAULT_GAP,
    min_height: float = MIN_ITEM_HEIGHT,
    breakpoints: Sequence[Tuple[int, int]] = DEFAULT_BREAKPOINTS,
) -> MasonryResult:
    """Place items of the given heights into balanced columns.

    Args:
        heights: Measured item heights in source order.
        container_width: Container width; required unless ``num_columns`` is given.
        num_columns: Explicit column count; overrides the breakpoints.
        gap: Horizontal and vertical gap between items.
        min_height: Items are never laid out shorter than this.
        breakpoints: ``(min_width, columns)`` pairs, widest first.

    Returns:
        A ``MasonryResult``.

    Raises:
        LayoutNotReady: If the container has no width yet.
    """
    if num_columns is None:
        if not container_width or container_width <= 0:
            raise LayoutNotReady("Container has no width yet")
        num_columns = get_num_columns(container_width, breakpoints)
    if num_columns < 1:
        raise ValueError(f"num_columns must be >= 1, got {num_columns}")

    col_w = column_width(container_width, num_columns, gap) if container_width else 0.0
    column_heights = np.zeros(num_columns, dtype=float)
    placements: List[Placement] = []
    for i, raw in enumerate(heights):
        h = max(float(raw or 0.0), float(min_height))
        col = int(np.argmin(column_heights))  # first minimum → leftmost on ties
        placements.append(
            Placement(
                index=i,
                column=col,
                left=col * (col_w + gap),
                top=float(column_heights[col]),
                width=col_w,
                height=h,
            )
        )
        column_heights[col] += h + gap

    heights_out = tuple(float(v) for v in column_heights)
    return MasonryResult(
        placements=tuple(placements),
        column_heights=heights_out,
        container_height=max(heights_out) if heights_out else 0.0,
        num_columns=num_columns,
        column_width=col_w,
    )


def measure_image_item(image_path: Union[str, Path, None], width: float, info_height: float = 0.0) -> float:
    """Rendered height of a gallery item whose image is scaled to ``width``.

    Reads the image size with Pillow; an unreadable or missing image
    contributes nothing, leaving only the caption block height.
    """
    if not image_path:
        return float(info_height)
    try:
        with Image.open(image_path) as im:
            w, h = im.size
    except (FileNotFoundError, UnidentifiedImageError, OSError) as e:
        logger.debug("Cannot measure %s: %s", image_path, e)
        return float(info_height)
    if not w:
        return float(info_height)
    return float(width) * h / w + float(info_height)


class MasonryGallery(Generic[T]):
    """A gallery of items laid out with ``masonry_layout``.

    Args:
        items: Gallery items in display order.
        measure: ``measure(item, column_width) -> height`` for the live height.
        gap: Gap in pixels.
        min_height: Minimum laid-out item height.
        breakpoints: Responsive column breakpoints.
    """

    def __init__(
        self,
        items: Sequence[T],
        measure: Callable[[T, float], float],
        gap: float = DEFAULT_GAP,
        min_height: float = MIN_ITEM_HEIGHT,
        breakpoints: Sequence[Tuple[int, int]] = DEFAULT_BREAKPOINTS,
    ):
        self.items = list(items)
        self.measure = measure
        self.gap = gap
        self.min_height = min_height
        self.breakpoints = tuple(breakpoints)
        self.container_width: Optional[float] = None
        self.result: Optional[MasonryResult] = None

    def layout(self, container_width: Optional[float] = None) -> Optional[MasonryResult]:
        """Measure every item and lay the whole gallery out again.

        Returns ``None`` (and keeps the previous result) while the container
        has no width.
        """
        if container_width is not None:
            self.container_width = container_width
        width = self.container_width
        if not width or width <= 0:
            logger.debug("Gallery container not ready; layout deferred")
            return None
        n = get_num_columns(width, self.breakpoints)
        col_w = column_width(width, n, self.gap)
        heights = [self.measure(item, col_w) for item in self.items]
        self.result = masonry_layout(
            heights,
            container_width=width,
            gap=self.gap,
            min_height=self.min_height,
            breakpoints=self.breakpoints,
        )
        return self.result

    def on_resize(self, container_width: float) -> Optional[MasonryResult]:
        return self.layout(container_width)

    def on_image_loaded(self, index: int) -> Optional[MasonryResult]:
        """Re-run the layout after item ``index`` finished loading its image.

        Heights come from live measurement, so every item is measured again.
        """
        logger.debug("Image loaded for gallery item %d; re-running layout", index)
        return self.layout()
