"""
Intermediate representation
===========================

Core data structures shared by the table pipeline: raw cells with spans,
number formats, table candidates, and per-column profiles.

A *grid* is a plain ``List[List[str]]``; every transformation returns a
freshly allocated grid and never mutates its input.
"""

from enum import Enum
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, field_validator, model_validator

Grid = List[List[str]]

# Upper bounds browsers apply to span attributes
MAX_COL_SPAN = 1000
MAX_ROW_SPAN = 65534


class ColumnType(str, Enum):
    """Semantic type of a column, inferred from its values only."""
    CATEGORICAL = "categorical"
    NUMERIC = "numeric"
    MONEY = "money"
    RATE = "rate"
    DATE = "date"

    @property
    def is_numeric_like(self) -> bool:
        return self in NUMERIC_LIKE_TYPES


NUMERIC_LIKE_TYPES = frozenset({ColumnType.NUMERIC, ColumnType.MONEY, ColumnType.RATE})


class Aggregate(str, Enum):
    """Named reducers available to the statistics engine."""
    COUNT = "count"
    SUM = "sum"
    AVG = "avg"
    MIN = "min"
    MAX = "max"
    STD = "std"
    UNIQUE = "unique"
    MODE = "mode"
    EARLIEST = "earliest"
    LATEST = "latest"
    RANGE = "range"


def _coerce_span(value: Any, upper: int) -> int:
    try:
        span = int(str(value).strip())
    except (TypeError, ValueError):
        return 1
    return max(1, min(span, upper))


class Cell(BaseModel):
    """
    One raw cell as read from a source, before span resolution.

    Spans that are missing, non-numeric or below 1 are read as 1, so a
    malformed ``colspan="abc"`` never breaks normalisation.
    """
    model_config = ConfigDict(frozen=True)

    content: str = ""
    row_span: int = 1
    col_span: int = 1

    @field_validator("content", mode="before")
    @classmethod
    def _content_to_str(cls, v: Any) -> str:
        return "" if v is None else str(v)

    @field_validator("row_span", mode="before")
    @classmethod
    def _clamp_row_span(cls, v: Any) -> int:
        return _coerce_span(v, MAX_ROW_SPAN)

    @field_validator("col_span", mode="before")
    @classmethod
    def _clamp_col_span(cls, v: Any) -> int:
        return _coerce_span(v, MAX_COL_SPAN)


SEPARATORS = (",", ".", " ", "")


class NumberFormat(BaseModel):
    """Thousand/decimal separator pair governing how a column's numbers are written."""
    model_config = ConfigDict(frozen=True)

    thousand: str = ","
    decimal: str = "."

    @model_validator(mode="after")
    def _check_separators(self) -> "NumberFormat":
        if self.thousand not in SEPARATORS or self.decimal not in SEPARATORS:
            raise ValueError(
                f"separators must be one of {SEPARATORS!r}, got "
                f"thousand={self.thousand!r} decimal={self.decimal!r}"
            )
        if self.thousand == self.decimal:
            raise ValueError("thousand and decimal separators must differ")
        return self

    @classmethod
    def default(cls) -> "NumberFormat":
        return cls(thousand=",", decimal=".")

    def as_tuple(self) -> tuple:
        return (self.thousand, self.decimal)


DEFAULT_NUMBER_FORMAT = NumberFormat.default()


class TableCandidate(BaseModel):
    """
    A grid plus the metrics used to pick the real data table out of a
    set of nested tables. Transient: discarded once selection is done.
    """
    grid: List[List[str]]
    data_density: float
    contains_nested_table: bool = False
    is_presentation_container: bool = False
    avg_filled_cells_per_row: float = 0.0
    source_id: Optional[str] = None

    def quality_score(self, row_cap: float) -> float:
        return self.data_density * min(self.avg_filled_cells_per_row, row_cap)


class ModeResult(BaseModel):
    """Most frequent value plus how many other values tie with it."""
    model_config = ConfigDict(frozen=True)

    value: str
    extra: int = 0


class ColumnProfile(BaseModel):
    """
    Everything the pipeline knows about one column.

    Attributes:
        index: zero-based column position
        header: header text (row 0)
        column_type: inferred or caller-overridden type
        number_format: inferred format for numeric-like columns, else ``None``
        aggregate: aggregate shown by default for this column
        overridden: ``True`` once a caller replaced the inferred type
    """
    model_config = ConfigDict(frozen=True)

    index: int
    header: str = ""
    column_type: ColumnType = ColumnType.CATEGORICAL
    number_format: Optional[NumberFormat] = None
    aggregate: Aggregate = Aggregate.COUNT
    overridden: bool = False
