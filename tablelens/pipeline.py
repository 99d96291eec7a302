"""
Table processing pipeline
=========================

Composes the table stages into one call:

    rows of cells ─► normalize_grid ─► clean_table ─► classify_columns
                  ─► infer_format (numeric-like columns) ─► ProcessedTable

A :class:`ProcessedTable` is immutable; ``override_type`` and ``reheader``
return new instances. Statistics are never cached and are recomputed from
the grid on every ``stat`` call.
"""

from __future__ import annotations

import re
from typing import Any, Dict, Iterable, List, Optional, Sequence, Union

import pandas as pd
from pydantic import BaseModel, ConfigDict

from tablelens.config import get_settings
from tablelens.export import to_dataframe
from tablelens.ir import (
    Aggregate,
    ColumnProfile,
    ColumnType,
    Grid,
    NumberFormat,
)
from tablelens.logger import get_logger
from tablelens.table.cell_cleaner import clean_table
from tablelens.table.column_types import ColumnTypeClassifier
from tablelens.table.config import TableConfig
from tablelens.table.grid_normalizer import normalize_grid
from tablelens.table.number_format import infer_format
from tablelens.table.reheader import reheader as reheader_grid
from tablelens.table.stats import StatValue, compute_stat, default_aggregate

logger = get_logger(__name__)


def _default_cfg() -> TableConfig:
    return TableConfig.from_settings(get_settings())


def _profile_column(
    classifier: ColumnTypeClassifier,
    grid: Grid,
    index: int,
    column_type: ColumnType,
    cfg: TableConfig,
    overridden: bool = False,
) -> ColumnProfile:
    fmt: Optional[NumberFormat] = None
    if column_type.is_numeric_like:
        fmt = infer_format(classifier.column_values(grid, index), cfg)
    return ColumnProfile(
        index=index,
        header=grid[0][index] if grid and index < len(grid[0]) else "",
        column_type=column_type,
        number_format=fmt,
        aggregate=default_aggregate(column_type, overridden=overridden),
        overridden=overridden,
    )


class ProcessedTable(BaseModel):
    """
    A normalised grid together with one :class:`ColumnProfile` per column.

    Row 0 of ``grid`` is the header row.
    """
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    grid: List[List[str]]
    columns: List[ColumnProfile]
    cfg: TableConfig = TableConfig()

    # ----- accessors ---------------------------------------------------------

    @property
    def header(self) -> List[str]:
        return list(self.grid[0]) if self.grid else []

    @property
    def data_rows(self) -> List[List[str]]:
        return [list(r) for r in self.grid[1:]]

    @property
    def column_types(self) -> List[ColumnType]:
        return [c.column_type for c in self.columns]

    @property
    def formats(self) -> Dict[int, NumberFormat]:
        """Number formats keyed by column index, numeric-like columns only."""
        return {c.index: c.number_format for c in self.columns if c.number_format is not None}

    def format_for(self, col: int) -> NumberFormat:
        profile = self._column(col)
        return profile.number_format or NumberFormat.default()

    def column_values(self, col: int) -> List[str]:
        """Raw cell strings of column *col* below the header, blanks included."""
        self._column(col)
        return [row[col] if col < len(row) else "" for row in self.grid[1:]]

    def _column(self, col: int) -> ColumnProfile:
        if not 0 <= col < len(self.columns):
            raise IndexError(f"column {col} out of range (table has {len(self.columns)} columns)")
        return self.columns[col]

    # ----- derived tables ----------------------------------------------------

    def override_type(self, col: int, column_type: Union[ColumnType, str]) -> "ProcessedTable":
        """
        Return a copy with column *col* forced to *column_type*.

        The column's number format is re-inferred and its default aggregate
        reset (``sum`` for numeric-like types, ``count`` otherwise).
        """
        self._column(col)
        new_type = ColumnType(column_type)
        classifier = ColumnTypeClassifier(self.cfg)
        profile = _profile_column(classifier, self.grid, col, new_type, self.cfg, overridden=True)
        columns = list(self.columns)
        columns[col] = profile
        logger.info(
            "Column %d (%r) overridden to %s; default aggregate %s",
            col, profile.header, new_type.value, profile.aggregate.value,
        )
        return ProcessedTable(grid=[list(r) for r in self.grid], columns=columns, cfg=self.cfg)

    def reheader(self, row_index: int) -> "ProcessedTable":
        """Promote *row_index* to header and re-classify every column."""
        return process_grid(reheader_grid(self.grid, row_index), clean=False, cfg=self.cfg)

    # ----- statistics --------------------------------------------------------

    def stat(self, col: int, fn: Optional[Union[Aggregate, str]] = None) -> StatValue:
        """Aggregate *fn* over column *col*; defaults to the column's current aggregate."""
        profile = self._column(col)
        return compute_stat(
            profile.column_type,
            fn if fn is not None else profile.aggregate,
            self.column_values(col),
            profile.number_format,
        )

    def summary(self) -> List[Dict[str, Any]]:
        out = []
        for profile in self.columns:
            fmt = profile.number_format
            out.append({
                "index": profile.index,
                "header": profile.header,
                "type": profile.column_type.value,
                "format": {"thousand": fmt.thousand, "decimal": fmt.decimal} if fmt else None,
                "aggregate": profile.aggregate.value,
                "value": _jsonable(self.stat(profile.index)),
            })
        return out

    def fingerprint(self) -> str:
        """
        Identity string for the table's shape and content:
        ``<headers joined by |>_<rows>x<cols>_<first three data rows>``
        with all whitespace removed.
        """
        rows = len(self.grid)
        cols = len(self.grid[0]) if self.grid else 0
        sample = "|".join("|".join(r) for r in self.grid[1:4])
        raw = f"{'|'.join(self.header)}_{rows}x{cols}_{sample}"
        return re.sub(r"\s+", "", raw)

    def to_dataframe(self) -> pd.DataFrame:
        return to_dataframe(self.grid, self.column_types, self.formats)


def _jsonable(value: StatValue) -> Any:
    if hasattr(value, "isoformat"):
        return value.isoformat()
    if isinstance(value, BaseModel):
        return value.model_dump()
    return value


def process_grid(
    grid: Sequence[Sequence[str]],
    clean: bool = True,
    cfg: Optional[TableConfig] = None,
) -> ProcessedTable:
    """Classify and profile an already-rectangular grid."""
    cfg = cfg or _default_cfg()
    rows = clean_table(grid) if clean else [[str(c) for c in r] for r in (grid or [])]
    classifier = ColumnTypeClassifier(cfg)
    types = classifier.classify(rows)
    width = len(rows[0]) if rows else 0
    if not types:
        types = [ColumnType.CATEGORICAL] * width
    columns = [_profile_column(classifier, rows, idx, t, cfg) for idx, t in enumerate(types)]
    logger.info(
        "Processed table: %d rows x %d columns, types=%s",
        len(rows), width, [t.value for t in types],
    )
    return ProcessedTable(grid=rows, columns=columns, cfg=cfg)


def process_table(
    rows: Sequence[Sequence[Any]],
    clean: bool = True,
    cfg: Optional[TableConfig] = None,
) -> ProcessedTable:
    """
    Full pipeline over rows of span-carrying cells (or plain values).

    Args:
        rows: cells as accepted by :func:`normalize_grid`
        clean: drop empty columns and empty data rows before classifying
        cfg: thresholds; defaults to the environment-derived config
    """
    return process_grid(normalize_grid(rows), clean=clean, cfg=cfg)


def process_tables(
    tables: Iterable[Sequence[Sequence[Any]]],
    clean: bool = True,
    cfg: Optional[TableConfig] = None,
) -> List[ProcessedTable]:
    cfg = cfg or _default_cfg()
    return [process_table(t, clean=clean, cfg=cfg) for t in tables]
