"""Header-driven column index resolution for the artworks sheet.

Column order in the sheet is not fixed, so indices are resolved once from the
header row by case-insensitive substring match. Headers that cannot be found
fall back to the sheet's historical fixed positions.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, List, Sequence


@dataclass(frozen=True)
class ColumnIndices:
    """Field-name → column index map; ``-1`` marks an absent column."""
    title: int = 0
    series: int = 1
    years: int = 2
    work_type: int = 3
    medium: int = 4
    dimensions: int = 5
    theme: int = 6
    exhibited: int = 7
    awards: int = 8
    link: int = 9
    made_in_collaboration_with: int = 10
    collaborators: int = -1
    selected_work: int = -1


DEFAULT_COLUMNS = ColumnIndices()


def _finder(headers: List[str], exact: bool) -> Callable[[str], int]:
    def find(name: str) -> int:
        for i, h in enumerate(headers):
            if (h == name) if exact else (name in h):
                return i
        return -1
    return find


def _first_found(*indices: int) -> int:
    for i in indices:
        if i >= 0:
            return i
    return -1


def resolve_columns(header_fields: Sequence[str]) -> ColumnIndices:
    """Build a ``ColumnIndices`` from a parsed header row.

    Args:
        header_fields: Header cells as returned by ``parse_csv_line``.

    Returns:
        Column indices; the title is always column 0.
    """
    headers = [(h or "").strip().lower() for h in header_fields]
    col = _finder(headers, exact=False)
    col_exact = _finder(headers, exact=True)

    made_in_collab = _first_found(col("collaboration"), col_exact("made in collaboration with"), 10)
    collaborators = col("collaborator")
    if collaborators < 0:
        collaborators = made_in_collab

    return ColumnIndices(
        title=0,
        series=_first_found(col("series"), 1),
        years=_first_found(col("year"), 2),
        work_type=_first_found(col("work type"), 3),
        medium=_first_found(col("medium"), 4),
        dimensions=_first_found(col("dimension"), 5),
        theme=_first_found(col("theme"), 6),
        exhibited=_first_found(col("exhibit"), 7),
        awards=_first_found(col("award"), 8),
        link=_first_found(col_exact("link"), col("link"), col("url"), 9),
        made_in_collaboration_with=made_in_collab,
        collaborators=collaborators,
        selected_work=col("selected work"),
    )
