"""
Span resolution: turn rows of cells carrying row/col spans into a dense,
rectangular grid of strings.

A column span writes the cell's content into the first spanned column only
and leaves the remaining spanned columns blank. A row span repeats the
content down every spanned row in that same column. Later cells in a row
skip over positions already claimed by a row span from an earlier row.
"""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Sequence, Set, Tuple

from tablelens.ir import Cell, Grid
from tablelens.logger import get_logger

logger = get_logger(__name__)


def _coerce_cell(raw: Any) -> Cell:
    if isinstance(raw, Cell):
        return raw
    if isinstance(raw, Mapping):
        return Cell(
            content=raw.get("content", raw.get("text", "")),
            row_span=raw.get("row_span", raw.get("rowSpan", raw.get("rowspan", 1))),
            col_span=raw.get("col_span", raw.get("colSpan", raw.get("colspan", 1))),
        )
    return Cell(content=raw)


def normalize_grid(rows: Sequence[Sequence[Any]]) -> Grid:
    """
    Resolve spans in *rows* and return a rectangular grid.

    Each item of a row may be a :class:`Cell`, a mapping with
    ``content``/``rowspan``/``colspan`` keys, or a bare value (span 1).
    Row spans are clamped to the rows that actually exist. Rows left with
    no content at all (no own cells and not covered by a span) are dropped.
    """
    source_rows = [[_coerce_cell(c) for c in (row or [])] for row in (rows or [])]
    total_rows = len(source_rows)
    if total_rows == 0:
        return []

    filled: Dict[Tuple[int, int], str] = {}
    occupied: Set[Tuple[int, int]] = set()
    width = 0

    for r, cells in enumerate(source_rows):
        cursor = 0
        for cell in cells:
            while (r, cursor) in occupied:
                cursor += 1
            row_span = min(cell.row_span, total_rows - r)
            for dr in range(row_span):
                for dc in range(cell.col_span):
                    pos = (r + dr, cursor + dc)
                    occupied.add(pos)
                    filled[pos] = cell.content if dc == 0 else ""
            cursor += cell.col_span
            width = max(width, cursor)

    grid: List[List[str]] = []
    for r in range(total_rows):
        if not any((r, c) in occupied for c in range(width)):
            continue
        grid.append([filled.get((r, c), "") for c in range(width)])

    logger.debug("normalize_grid: %d source rows -> %dx%d grid", total_rows, len(grid), width)
    return grid


def pad_rows(rows: Sequence[Sequence[Any]]) -> Grid:
    """Right-pad ragged rows of plain values with empty strings."""
    return normalize_grid(rows)


def is_rectangular(grid: Sequence[Sequence[Any]]) -> bool:
    return len({len(row) for row in grid}) <= 1
