"""
tablelens: turn loosely structured tables into typed, rectangular grids.

Core operations:
  - normalize_grid     resolve row/col spans into a rectangular grid
  - select_best_table  pick the real data table among nested candidates
  - classify_columns   infer categorical / numeric / money / rate / date
  - infer_format       guess thousand and decimal separators
  - parse_number       locale-aware number parsing
  - compute_stat       per-type column aggregates
  - reheader           promote a row to the header position
"""

from tablelens.errors import (
    SourceReadError,
    TableLensError,
    UnsupportedFormatError,
)
from tablelens.ir import (
    Aggregate,
    Cell,
    ColumnProfile,
    ColumnType,
    Grid,
    ModeResult,
    NumberFormat,
    TableCandidate,
)
from tablelens.table import (
    TableConfig,
    classify_columns,
    clean_table,
    compute_stat,
    infer_format,
    normalize_grid,
    parse_number,
    reheader,
    select_best_table,
)
from tablelens.pipeline import ProcessedTable, process_grid, process_table, process_tables

__version__ = "0.1.0"

__all__ = [
    "normalize_grid",
    "select_best_table",
    "classify_columns",
    "infer_format",
    "parse_number",
    "compute_stat",
    "reheader",
    "clean_table",
    "process_grid",
    "process_table",
    "process_tables",
    "ProcessedTable",
    "TableConfig",
    "Aggregate",
    "Cell",
    "ColumnProfile",
    "ColumnType",
    "Grid",
    "ModeResult",
    "NumberFormat",
    "TableCandidate",
    "TableLensError",
    "UnsupportedFormatError",
    "SourceReadError",
]
