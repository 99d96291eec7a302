"""
Export: serialise a grid as CSV, TSV, Markdown or JSON records, or load it
into a typed :class:`pandas.DataFrame`.

Row 0 is always treated as the header.
"""

from __future__ import annotations

import csv
import io
import json
from typing import Any, Dict, List, Mapping, Optional, Sequence

import pandas as pd

from tablelens.errors import UnsupportedFormatError
from tablelens.ir import ColumnType, NumberFormat
from tablelens.logger import get_logger
from tablelens.table.date_parser import DateParser
from tablelens.table.number_format import try_parse_number

logger = get_logger(__name__)


def to_delimited(grid: Sequence[Sequence[str]], sep: str = ",") -> str:
    """Write rows with :mod:`csv` using minimal quoting; no trailing newline."""
    buf = io.StringIO()
    writer = csv.writer(buf, delimiter=sep, lineterminator="\n")
    writer.writerows([str(c) for c in row] for row in grid or [])
    text = buf.getvalue()
    return text[:-1] if text.endswith("\n") else text


def to_csv(grid: Sequence[Sequence[str]]) -> str:
    return to_delimited(grid, ",")


def to_tsv(grid: Sequence[Sequence[str]]) -> str:
    return to_delimited(grid, "\t")


def _md_cell(cell: Any) -> str:
    return str(cell).replace("|", "\\|").replace("\r", " ").replace("\n", " ")


def to_markdown(grid: Sequence[Sequence[str]]) -> str:
    if not grid:
        return ""
    header = list(grid[0])
    lines = [
        "| " + " | ".join(_md_cell(c) for c in header) + " |",
        "| " + " | ".join("---" for _ in header) + " |",
    ]
    for row in grid[1:]:
        lines.append("| " + " | ".join(_md_cell(c) for c in row) + " |")
    return "\n".join(lines)


def dedup_headers(headers: Sequence[str]) -> List[str]:
    """Make header names unique: blanks become ``column_N``, repeats get ``_2``, ``_3``..."""
    seen: Dict[str, int] = {}
    out: List[str] = []
    for idx, h in enumerate(headers):
        name = str(h).strip() or f"column_{idx + 1}"
        if name not in seen:
            seen[name] = 1
            out.append(name)
        else:
            seen[name] += 1
            out.append(f"{name}_{seen[name]}")
    return out


def to_records(grid: Sequence[Sequence[str]]) -> List[Dict[str, str]]:
    if not grid:
        return []
    headers = dedup_headers(grid[0])
    records = []
    for row in grid[1:]:
        cells = list(row) + [""] * (len(headers) - len(row))
        records.append(dict(zip(headers, cells)))
    return records


def to_json(grid: Sequence[Sequence[str]], indent: Optional[int] = 2) -> str:
    return json.dumps(to_records(grid), ensure_ascii=False, indent=indent)


EXPORTERS = {
    "csv": to_csv,
    "tsv": to_tsv,
    "markdown": to_markdown,
    "json": to_json,
}


def export(grid: Sequence[Sequence[str]], fmt: str = "csv") -> str:
    key = (fmt or "").strip().lower()
    if key == "md":
        key = "markdown"
    exporter = EXPORTERS.get(key)
    if exporter is None:
        raise UnsupportedFormatError(f"unsupported export format {fmt!r}; expected one of {sorted(EXPORTERS)}")
    return exporter(grid)


def to_dataframe(
    grid: Sequence[Sequence[str]],
    column_types: Optional[Sequence[ColumnType]] = None,
    formats: Optional[Mapping[int, NumberFormat]] = None,
) -> pd.DataFrame:
    """
    Build a DataFrame from *grid*, converting numeric-like columns to
    floats and date columns to timestamps. Unparseable cells become
    ``NaN``/``NaT``; untyped columns stay as strings.
    """
    if not grid:
        return pd.DataFrame()
    headers = dedup_headers(grid[0])
    body = [list(row) + [""] * (len(headers) - len(row)) for row in grid[1:]]
    df = pd.DataFrame(body, columns=headers, dtype=object)
    formats = formats or {}

    for idx, ctype in enumerate(column_types or []):
        if idx >= len(headers):
            break
        name = headers[idx]
        ctype = ColumnType(ctype)
        if ctype.is_numeric_like:
            fmt = formats.get(idx)
            df[name] = pd.to_numeric(
                df[name].map(lambda v: try_parse_number(str(v), fmt) if str(v).strip() else None),
                errors="coerce",
            )
        elif ctype == ColumnType.DATE:
            df[name] = pd.to_datetime(df[name].map(lambda v: DateParser.parse_date(str(v))), errors="coerce")
    logger.debug("to_dataframe: %d rows x %d columns", len(df), len(headers))
    return df
