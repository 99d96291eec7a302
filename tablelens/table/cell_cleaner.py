"""
CellCleaner: value normalisation utilities for the table pipeline.

Responsibilities:
- Cell-level string conversion (``cell_to_str``)
- Empty-cell detection
- Whitespace normalisation of scraped text
- Table cleanup (dropping empty columns and empty data rows)
"""

from __future__ import annotations

import re
from datetime import date, datetime
from typing import Any, List, Sequence

import pandas as pd

from tablelens.ir import Grid
from tablelens.logger import get_logger
from tablelens.table.config import EXOTIC_SPACES_RE

logger = get_logger(__name__)


class CellCleaner:
    """Stateless helper that normalises raw cell values and whole grids."""

    # ----- cell → string ---------------------------------------------------

    @staticmethod
    def is_empty(value: Any) -> bool:
        if value is None:
            return True
        if not isinstance(value, str) and pd.isna(value):
            return True
        return str(value).strip() == ""

    @staticmethod
    def cell_to_str(value: Any) -> str:
        """Convert an arbitrary cell value to a clean string."""
        if value is None:
            return ""
        if isinstance(value, str):
            return value.strip()
        if isinstance(value, (datetime, date, pd.Timestamp)):
            if pd.isna(value):
                return ""
            if isinstance(value, datetime):
                if value.hour == 0 and value.minute == 0 and value.second == 0:
                    return value.date().isoformat()
                return value.isoformat(sep=" ", timespec="seconds")
            return value.isoformat()
        if isinstance(value, bool):
            return "TRUE" if value else "FALSE"
        if isinstance(value, float):
            if pd.isna(value):
                return ""
            if value.is_integer():
                return str(int(value))
        # Rich-text objects from openpyxl may expose .plain or .text
        plain_attr = getattr(value, "plain", None)
        if isinstance(plain_attr, str):
            return plain_attr.strip()
        text_attr = getattr(value, "text", None)
        if isinstance(text_attr, str):
            return text_attr.strip()
        text = str(value).strip()
        if text.lower() in {"nan", "none", "nat"}:
            return ""
        return text

    @staticmethod
    def normalize_text(text: Any) -> str:
        """Collapse runs of whitespace (incl. no-break spaces) into single spaces."""
        if text is None:
            return ""
        raw = EXOTIC_SPACES_RE.sub(" ", str(text))
        return re.sub(r"\s+", " ", raw).strip()

    # ----- grid cleanup ----------------------------------------------------

    @staticmethod
    def clean_table(grid: Sequence[Sequence[Any]]) -> Grid:
        """
        Drop columns with no content anywhere, then drop empty rows.

        The header row (row 0) is always kept, even when blank. When every
        column is empty the grid is returned unchanged (as a copy) so that
        a caller never ends up with a zero-width table.
        """
        rows = [[CellCleaner.cell_to_str(c) for c in row] for row in (grid or [])]
        if not rows:
            return []
        width = max(len(r) for r in rows)
        rows = [r + [""] * (width - len(r)) for r in rows]

        keep_cols = [c for c in range(width) if any(r[c] != "" for r in rows)]
        if not keep_cols:
            logger.warning("All %d columns are empty; keeping original table structure", width)
            return rows

        cleaned: List[List[str]] = []
        for idx, row in enumerate(rows):
            filtered = [row[c] for c in keep_cols]
            if idx == 0 or any(v != "" for v in filtered):
                cleaned.append(filtered)

        dropped_cols = width - len(keep_cols)
        dropped_rows = len(rows) - len(cleaned)
        if dropped_cols or dropped_rows:
            logger.debug("clean_table dropped %d empty columns and %d empty rows", dropped_cols, dropped_rows)
        return cleaned


def cell_to_str(value: Any) -> str:
    return CellCleaner.cell_to_str(value)


def clean_table(grid: Sequence[Sequence[Any]]) -> Grid:
    return CellCleaner.clean_table(grid)
