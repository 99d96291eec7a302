"""Promote an arbitrary row of a grid to be its header row."""

from __future__ import annotations

from typing import Sequence

from tablelens.ir import Grid


def reheader(grid: Sequence[Sequence[str]], row_index: int) -> Grid:
    """
    Return a new grid whose row 0 is ``grid[row_index]``.

    Every other row keeps its original relative order (the old header
    becomes the first data row). The index is clamped into range, and
    index 0 yields a plain copy.
    """
    rows = [list(r) for r in (grid or [])]
    if not rows:
        return []
    try:
        idx = int(row_index)
    except (TypeError, ValueError):
        idx = 0
    idx = max(0, min(idx, len(rows) - 1))
    if idx == 0:
        return rows
    return [rows[idx]] + [r for i, r in enumerate(rows) if i != idx]
