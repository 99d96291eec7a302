"""
Statistics engine: per-column aggregates for each column type.

- numeric / money / rate: count, sum, avg, min, max, std
- date: count, unique, mode, earliest, latest, range
- categorical: count, unique, mode

Numeric ``count`` counts every non-empty raw value, parseable or not; the
other numeric aggregates only see values that parse under the column's
number format and fall back to ``0`` when none do.
"""

from __future__ import annotations

import math
from collections import Counter
from datetime import datetime
from typing import Dict, FrozenSet, Iterable, List, Optional, Sequence, Union

from tablelens.ir import (
    NUMERIC_LIKE_TYPES,
    Aggregate,
    ColumnType,
    ModeResult,
    NumberFormat,
)
from tablelens.logger import get_logger
from tablelens.table.date_parser import DateParser
from tablelens.table.number_format import try_parse_number

logger = get_logger(__name__)

StatValue = Union[int, float, str, datetime, ModeResult, None]

_NUMERIC_AGGREGATES: FrozenSet[Aggregate] = frozenset({
    Aggregate.COUNT, Aggregate.SUM, Aggregate.AVG, Aggregate.MIN, Aggregate.MAX, Aggregate.STD,
})

VALID_AGGREGATES: Dict[ColumnType, FrozenSet[Aggregate]] = {
    ColumnType.NUMERIC: _NUMERIC_AGGREGATES,
    ColumnType.MONEY: _NUMERIC_AGGREGATES,
    ColumnType.RATE: _NUMERIC_AGGREGATES,
    ColumnType.DATE: frozenset({
        Aggregate.COUNT, Aggregate.UNIQUE, Aggregate.MODE,
        Aggregate.EARLIEST, Aggregate.LATEST, Aggregate.RANGE,
    }),
    ColumnType.CATEGORICAL: frozenset({Aggregate.COUNT, Aggregate.UNIQUE, Aggregate.MODE}),
}

NO_MODE = "N/A"


def default_aggregate(column_type: ColumnType, overridden: bool = False) -> Aggregate:
    """
    Aggregate shown for a column by default.

    Freshly classified columns all start on ``count``; once a caller
    overrides a column's type, numeric-like columns switch to ``sum``.
    """
    if overridden and ColumnType(column_type) in NUMERIC_LIKE_TYPES:
        return Aggregate.SUM
    return Aggregate.COUNT


def valid_aggregates(column_type: ColumnType) -> List[Aggregate]:
    allowed = VALID_AGGREGATES[ColumnType(column_type)]
    return [a for a in Aggregate if a in allowed]


def _non_empty(values: Iterable) -> List[str]:
    out: List[str] = []
    for v in values or []:
        if v is None:
            continue
        text = str(v).strip()
        if text:
            out.append(text)
    return out


# ---------------------------------------------------------------------------
# Per-type reducers
# ---------------------------------------------------------------------------

def numeric_stats_from_numbers(numbers: Sequence[float], fn: Aggregate) -> float:
    """Reduce already-parsed numbers; empty input yields ``0``."""
    nums = [n for n in numbers if n is not None and not math.isnan(n)]
    if fn == Aggregate.COUNT:
        return len(nums)
    if not nums:
        return 0
    if fn == Aggregate.SUM:
        return math.fsum(nums)
    if fn == Aggregate.AVG:
        return math.fsum(nums) / len(nums)
    if fn == Aggregate.MIN:
        return min(nums)
    if fn == Aggregate.MAX:
        return max(nums)
    if fn == Aggregate.STD:
        if len(nums) < 2:
            return 0
        mean = math.fsum(nums) / len(nums)
        return math.sqrt(math.fsum((n - mean) ** 2 for n in nums) / len(nums))
    return 0


def _numeric_stat(values: List[str], fn: Aggregate, fmt: Optional[NumberFormat]) -> float:
    if fn == Aggregate.COUNT:
        return len(values)
    parsed = [try_parse_number(v, fmt) for v in values]
    return numeric_stats_from_numbers([n for n in parsed if n is not None], fn)


def _mode(values: List[str]) -> ModeResult:
    if not values:
        return ModeResult(value=NO_MODE, extra=0)
    freq = Counter(values)
    top = max(freq.values())
    tied = [v for v in freq if freq[v] == top]
    return ModeResult(value=tied[0], extra=len(tied) - 1)


def _date_stat(values: List[str], fn: Aggregate) -> StatValue:
    if fn == Aggregate.UNIQUE:
        return len(set(values))
    if fn == Aggregate.MODE:
        return _mode(values)

    dates = [d for d in (DateParser.parse_date(v) for v in values) if d is not None]
    if fn == Aggregate.COUNT:
        return len(dates)
    if not dates:
        return None
    if fn == Aggregate.EARLIEST:
        return min(dates)
    if fn == Aggregate.LATEST:
        return max(dates)
    if fn == Aggregate.RANGE:
        if len(dates) < 2:
            return 0
        span = max(dates) - min(dates)
        return math.ceil(span.total_seconds() / 86400)
    return 0


def _categorical_stat(values: List[str], fn: Aggregate) -> StatValue:
    if fn == Aggregate.COUNT:
        return len(values)
    if fn == Aggregate.UNIQUE:
        return len(set(values))
    if fn == Aggregate.MODE:
        return _mode(values)
    return 0


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------

def compute_stat(
    column_type: Union[ColumnType, str],
    fn: Union[Aggregate, str],
    values: Sequence[str],
    fmt: Optional[NumberFormat] = None,
) -> StatValue:
    """
    Compute aggregate *fn* over a column's raw *values*.

    An unknown *column_type* is treated as categorical. An aggregate that is
    unknown, or not defined for the column type, yields ``0``.
    """
    type_name = str(getattr(column_type, "value", column_type)).strip().lower()
    try:
        ctype = ColumnType(type_name)
    except ValueError:
        logger.warning("Unknown column type %r, treating as categorical", column_type)
        ctype = ColumnType.CATEGORICAL
    try:
        agg = Aggregate(str(getattr(fn, "value", fn)).strip().lower())
    except ValueError:
        logger.warning("Unknown aggregate %r for %s column", fn, ctype.value)
        return 0
    if agg not in VALID_AGGREGATES[ctype]:
        logger.warning("Aggregate %s is not defined for %s columns", agg.value, ctype.value)
        return 0

    cleaned = _non_empty(values)
    if ctype in NUMERIC_LIKE_TYPES:
        return _numeric_stat(cleaned, agg, fmt)
    if ctype == ColumnType.DATE:
        return _date_stat(cleaned, agg)
    return _categorical_stat(cleaned, agg)
