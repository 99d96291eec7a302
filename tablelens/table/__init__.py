"""
Table processing subpackage.

Public API:
  - normalize_grid         (span resolution, grid_normalizer.py)
  - build_candidate / rank_candidates / select_best_table  (table_selector.py)
  - ColumnTypeClassifier / classify_columns               (column_types.py)
  - infer_format / parse_number / try_parse_number        (number_format.py)
  - compute_stat / default_aggregate                      (stats.py)
  - reheader                                              (reheader.py)
  - CellCleaner / clean_table                             (cell_cleaner.py)
  - DateParser                                            (date_parser.py)
  - TableConfig                                           (tunable thresholds)
"""

from tablelens.table.config import TableConfig, DEFAULT_CONFIG
from tablelens.table.cell_cleaner import CellCleaner, cell_to_str, clean_table
from tablelens.table.column_types import ColumnTypeClassifier, classify_columns, classify_values
from tablelens.table.date_parser import DateParser
from tablelens.table.grid_normalizer import normalize_grid
from tablelens.table.number_format import infer_format, parse_number, try_parse_number
from tablelens.table.reheader import reheader
from tablelens.table.stats import compute_stat, default_aggregate, valid_aggregates
from tablelens.table.table_selector import build_candidate, rank_candidates, select_best_table

__all__ = [
    "TableConfig",
    "DEFAULT_CONFIG",
    "CellCleaner",
    "cell_to_str",
    "clean_table",
    "ColumnTypeClassifier",
    "classify_columns",
    "classify_values",
    "DateParser",
    "normalize_grid",
    "infer_format",
    "parse_number",
    "try_parse_number",
    "reheader",
    "compute_stat",
    "default_aggregate",
    "valid_aggregates",
    "build_candidate",
    "rank_candidates",
    "select_best_table",
]
