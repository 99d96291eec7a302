"""
ColumnTypeClassifier: assign each column one of five semantic types from
its values alone (the header row is never consulted).

Rules are tried in a fixed priority order and the first rule satisfied by
*every* non-empty value wins:

    rate -> money -> numeric -> date -> categorical

``numeric`` has one relaxation: a column made of numbers plus a single
repeated label (e.g. ``"n/a"`` or a unit string) is still numeric.
"""

from __future__ import annotations

from typing import Callable, List, Sequence

from tablelens.ir import ColumnType, Grid
from tablelens.logger import get_logger
from tablelens.table.config import (
    CURRENCY_CODE_RE,
    CURRENCY_SYMBOL_RE,
    DEFAULT_CONFIG,
    MONEY_CODE_PREFIX_RE,
    MONEY_CODE_SUFFIX_RE,
    MONEY_SYMBOL_RE,
    NUMERIC_RE,
    RATE_RE,
    TableConfig,
)
from tablelens.table.date_parser import DateParser

logger = get_logger(__name__)


def _is_rate(value: str) -> bool:
    return bool(RATE_RE.match(value))


def _is_money_shaped(value: str) -> bool:
    return bool(
        MONEY_SYMBOL_RE.match(value)
        or MONEY_CODE_PREFIX_RE.match(value)
        or MONEY_CODE_SUFFIX_RE.match(value)
    )


def _has_currency_marker(value: str) -> bool:
    return bool(CURRENCY_SYMBOL_RE.search(value) or CURRENCY_CODE_RE.search(value))


def _is_numeric(value: str) -> bool:
    return bool(NUMERIC_RE.match(value))


def _all(values: Sequence[str], predicate: Callable[[str], bool]) -> bool:
    return all(predicate(v) for v in values)


class ColumnTypeClassifier:
    """Stateless classifier; thresholds come from a :class:`TableConfig`."""

    def __init__(self, cfg: TableConfig = DEFAULT_CONFIG):
        self._cfg = cfg

    def column_values(self, grid: Sequence[Sequence[str]], col: int) -> List[str]:
        """Trimmed non-empty values of column *col*, header excluded."""
        values: List[str] = []
        for row in list(grid)[1:]:
            raw = row[col] if col < len(row) else ""
            value = "" if raw is None else str(raw).strip()
            if value:
                values.append(value)
        limit = self._cfg.classify_sample_limit
        return values[:limit] if limit > 0 else values

    def classify_values(self, values: Sequence[str]) -> ColumnType:
        """Classify one column given its non-empty, trimmed values."""
        values = [v for v in (str(x).strip() for x in values if x is not None) if v]
        if not values:
            return ColumnType.CATEGORICAL

        if _all(values, _is_rate):
            return ColumnType.RATE

        if _all(values, _is_money_shaped) and any(_has_currency_marker(v) for v in values):
            return ColumnType.MONEY

        if _all(values, _is_numeric):
            return ColumnType.NUMERIC

        numeric = [v for v in values if _is_numeric(v)]
        labels = {v for v in values if not _is_numeric(v)}
        if numeric and len(labels) == 1:
            return ColumnType.NUMERIC

        if _all(values, lambda v: DateParser.looks_like_date(v, self._cfg)):
            return ColumnType.DATE

        return ColumnType.CATEGORICAL

    def classify(self, grid: Sequence[Sequence[str]]) -> List[ColumnType]:
        """
        Classify every column of *grid* (row 0 is the header).

        Grids with fewer than two rows have no data to look at and yield ``[]``.
        """
        rows = list(grid or [])
        if len(rows) < 2:
            return []
        width = len(rows[0])
        types = [self.classify_values(self.column_values(rows, col)) for col in range(width)]
        logger.debug("classify: %d columns -> %s", width, [t.value for t in types])
        return types


def classify_columns(grid: Grid, cfg: TableConfig = DEFAULT_CONFIG) -> List[ColumnType]:
    return ColumnTypeClassifier(cfg).classify(grid)


def classify_values(values: Sequence[str], cfg: TableConfig = DEFAULT_CONFIG) -> ColumnType:
    return ColumnTypeClassifier(cfg).classify_values(values)
