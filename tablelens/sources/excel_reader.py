"""
ExcelReader: read a worksheet into rows of span-carrying cells.

Merged ranges become a single :class:`Cell` at the range's top-left
position with ``row_span``/``col_span`` set; the cells the range covers
are skipped, so :func:`tablelens.table.grid_normalizer.normalize_grid`
rebuilds the sheet exactly as it looks on screen.
"""

from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Optional, Set, Tuple, Union

from openpyxl import load_workbook

from tablelens.errors import SourceReadError
from tablelens.ir import Cell, Grid
from tablelens.logger import get_logger
from tablelens.table.cell_cleaner import CellCleaner
from tablelens.table.grid_normalizer import normalize_grid

logger = get_logger(__name__)

PathLike = Union[str, Path]


def _open_workbook(file_path: PathLike):
    try:
        return load_workbook(file_path, data_only=True, read_only=False)
    except Exception as e:
        raise SourceReadError(f"cannot open workbook {file_path}: {e}") from e


def _close(wb) -> None:
    try:
        wb.close()
    except Exception:
        pass


def list_sheet_names(file_path: PathLike) -> List[str]:
    wb = _open_workbook(file_path)
    try:
        return list(wb.sheetnames or [])
    finally:
        _close(wb)


def read_excel_rows(file_path: PathLike, sheet_name: Optional[Union[str, int]] = None) -> List[List[Cell]]:
    """
    Read one worksheet as rows of :class:`Cell`.

    *sheet_name* may be a sheet title or a zero-based index; ``None``
    reads the active sheet.
    """
    wb = _open_workbook(file_path)
    try:
        if sheet_name is None:
            ws = wb.active
        elif isinstance(sheet_name, int):
            names = wb.sheetnames
            if not 0 <= sheet_name < len(names):
                raise SourceReadError(f"sheet index {sheet_name} out of range ({len(names)} sheets)")
            ws = wb[names[sheet_name]]
        elif sheet_name in wb.sheetnames:
            ws = wb[sheet_name]
        else:
            raise SourceReadError(f"sheet {sheet_name!r} not found in {file_path}")

        anchors: Dict[Tuple[int, int], Tuple[int, int]] = {}
        covered: Set[Tuple[int, int]] = set()
        for rng in ws.merged_cells.ranges:
            anchors[(rng.min_row, rng.min_col)] = (
                rng.max_row - rng.min_row + 1,
                rng.max_col - rng.min_col + 1,
            )
            for r in range(rng.min_row, rng.max_row + 1):
                for c in range(rng.min_col, rng.max_col + 1):
                    if (r, c) != (rng.min_row, rng.min_col):
                        covered.add((r, c))

        rows: List[List[Cell]] = []
        for r_idx, row in enumerate(ws.iter_rows(values_only=True), start=1):
            cells: List[Cell] = []
            for c_idx, value in enumerate(row, start=1):
                if (r_idx, c_idx) in covered:
                    continue
                row_span, col_span = anchors.get((r_idx, c_idx), (1, 1))
                cells.append(Cell(
                    content=CellCleaner.cell_to_str(value),
                    row_span=row_span,
                    col_span=col_span,
                ))
            rows.append(cells)

        logger.info(
            "Read sheet %r: %d rows, %d merged ranges",
            ws.title, len(rows), len(anchors),
        )
        return rows
    finally:
        _close(wb)


def read_excel_grid(file_path: PathLike, sheet_name: Optional[Union[str, int]] = None) -> Grid:
    return normalize_grid(read_excel_rows(file_path, sheet_name))
