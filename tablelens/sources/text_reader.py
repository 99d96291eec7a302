"""
TextReader: turn plain-text tables into grids.

Covers three shapes of text a caller may hand over:

- comma-separated text (quote-aware),
- Markdown pipe tables,
- text recognised from a captured image, where the column separator is
  unknown and has to be guessed (tab, pipe, runs of spaces, single spaces).
"""

from __future__ import annotations

import csv
import io
import re
from collections import Counter
from typing import Callable, List, Optional, Sequence, Tuple

from tablelens.errors import UnsupportedFormatError
from tablelens.ir import Grid
from tablelens.logger import get_logger
from tablelens.table.config import DEFAULT_CONFIG, TableConfig
from tablelens.table.grid_normalizer import pad_rows

logger = get_logger(__name__)

MD_SEPARATOR_RE = re.compile(r"^\s*\|?\s*:?-{3,}:?\s*(?:\|\s*:?-{3,}:?\s*)*\|?\s*$")
_UNESCAPED_PIPE_RE = re.compile(r"(?<!\\)\|")
_MONEY_START_RE = re.compile(r"^[$£€¥]")
_NUMBER_PIECE_RE = re.compile(r"^[\d,.-]+$")
_ENDS_NUMERIC_RE = re.compile(r"[\d$£€¥%]$")


def _lines(text: str) -> List[str]:
    return (text or "").strip().split("\n")


# ---------------------------------------------------------------------------
# Sniffing
# ---------------------------------------------------------------------------

def looks_like_csv(text: str, cfg: TableConfig = DEFAULT_CONFIG) -> bool:
    """Most lines carry about as many commas as the first one."""
    lines = _lines(text)
    if len(lines) < 2:
        return False
    comma_count = lines[0].count(",")
    if comma_count == 0:
        return False
    similar = sum(1 for line in lines if abs(line.count(",") - comma_count) <= 1)
    return similar >= len(lines) * cfg.csv_consistency_ratio


def looks_like_markdown(text: str) -> bool:
    lines = _lines(text)
    if len(lines) < 2:
        return False
    has_structure = any("|" in line and len(line.split("|")) >= 3 for line in lines)
    has_separator = any("---" in line and "|" in line for line in lines)
    return has_structure and (has_separator or len(lines) >= 3)


# ---------------------------------------------------------------------------
# Parsers
# ---------------------------------------------------------------------------

def parse_csv(text: str, delimiter: str = ",") -> Grid:
    """Parse delimited text; quoted fields may hold the delimiter or newlines."""
    reader = csv.reader(io.StringIO((text or "").strip()), delimiter=delimiter)
    rows = [[cell.strip() for cell in row] for row in reader if row]
    return pad_rows(rows)


def parse_markdown_table(text: str) -> Grid:
    """Parse a pipe table; the ``| --- |`` separator row is skipped."""
    rows: List[List[str]] = []
    for line in _lines(text):
        stripped = line.strip()
        if not stripped or MD_SEPARATOR_RE.match(stripped):
            continue
        if stripped.startswith("|"):
            stripped = stripped[1:]
        if stripped.endswith("|") and not stripped.endswith("\\|"):
            stripped = stripped[:-1]
        cells = [c.strip().replace("\\|", "|") for c in _UNESCAPED_PIPE_RE.split(stripped)]
        if any(cells):
            rows.append(cells)
    return pad_rows(rows)


def smart_space_split(line: str) -> List[str]:
    """
    Split on single spaces, keeping numbers that were written with space
    grouping (``$ 1 234.56``) together in one cell.
    """
    parts: List[str] = []
    current = ""
    in_number = False
    for word in line.split():
        is_money = bool(_MONEY_START_RE.match(word))
        is_numeric = word[:1].isdigit()
        prev_numeric = bool(_ENDS_NUMERIC_RE.search(current))
        if not current:
            current = word
            in_number = is_money or is_numeric
        elif in_number and (is_numeric or _NUMBER_PIECE_RE.match(word)):
            current += " " + word
        elif prev_numeric and _NUMBER_PIECE_RE.match(word):
            current += " " + word
            in_number = True
        else:
            parts.append(current)
            current = word
            in_number = is_money or is_numeric
    if current:
        parts.append(current)
    return [p for p in parts if p.strip()]


def _split_on(sep: str) -> Callable[[str], List[str]]:
    def split(line: str) -> List[str]:
        return [c.strip() for c in line.split(sep) if c.strip()]
    return split


def _split_wide_spaces(line: str) -> List[str]:
    return [c.strip() for c in re.split(r"\s{2,}", line) if c.strip()]


OCR_SEPARATORS: Tuple[Tuple[str, Callable[[str], List[str]]], ...] = (
    ("tab", _split_on("\t")),
    ("pipe", _split_on("|")),
    ("double space", _split_wide_spaces),
    ("single space", smart_space_split),
)


def _modal_width(widths: Sequence[int]) -> int:
    return Counter(widths).most_common(1)[0][0]


def parse_ocr_text(text: str, cfg: TableConfig = DEFAULT_CONFIG) -> Optional[Grid]:
    """
    Rebuild a table from recognised text, or return ``None`` if no
    separator yields at least two consistently shaped rows.
    """
    if not text:
        return None
    cleaned = re.sub(r"\n\s*\n", "\n", text.replace("\r", "")).strip()
    lines = [line for line in cleaned.split("\n") if line.strip()]
    if len(lines) < 2:
        return None

    tol = cfg.ocr_width_tolerance
    best: Optional[Tuple[str, Callable[[str], List[str]], int]] = None
    best_consistent = 0
    for name, split in OCR_SEPARATORS:
        widths = [len(parts) for parts in (split(line) for line in lines) if len(parts) > 1]
        if not widths:
            continue
        mode = _modal_width(widths)
        consistent = sum(1 for w in widths if abs(w - mode) <= tol)
        logger.debug("OCR separator %r: %d consistent rows with ~%d columns", name, consistent, mode)
        if consistent > best_consistent:
            best_consistent = consistent
            best = (name, split, mode)

    if best is None or best_consistent < cfg.ocr_min_consistent_rows:
        logger.info("No usable column separator found in recognised text")
        return None

    name, split, mode = best
    rows = []
    for line in lines:
        row = split(line)
        if max(2, mode - tol) <= len(row) <= mode + tol:
            rows.append(row)
    logger.info("Recognised text split on %s into %d rows", name, len(rows))
    return pad_rows(rows) if len(rows) > 1 else None


def read_text_table(text: str, kind: str = "auto", cfg: TableConfig = DEFAULT_CONFIG) -> Grid:
    """
    Parse *text* as ``csv``, ``tsv``, ``markdown`` or ``ocr``; ``auto``
    sniffs Markdown, then CSV, then falls back to separator guessing.
    """
    kind = (kind or "auto").strip().lower()
    if kind == "auto":
        if looks_like_markdown(text):
            kind = "markdown"
        elif looks_like_csv(text, cfg):
            kind = "csv"
        else:
            kind = "ocr"
    if kind == "csv":
        return parse_csv(text)
    if kind == "tsv":
        return parse_csv(text, delimiter="\t")
    if kind == "markdown":
        return parse_markdown_table(text)
    if kind == "ocr":
        return parse_ocr_text(text, cfg) or []
    raise UnsupportedFormatError(f"unknown text table kind: {kind!r}")
