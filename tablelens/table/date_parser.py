"""
Date parsing utilities for table cells.

Handles:
- Day-first numeric dates: DD/MM/YYYY, DD-MM-YY (month-first as fallback)
- ISO-like dates: YYYY-MM-DD, YYYY/MM/DD, YYYY.MM.DD
- Spanish long form: "12 de septiembre de 2025"
- Anything else python-dateutil understands that carries a four-digit year
  (month names, 12-Sep-2025, ...)
"""

from __future__ import annotations

import re
from datetime import datetime
from typing import Optional

from dateutil import parser as date_parser

from tablelens.table.config import (
    DATE_PATTERNS,
    DEFAULT_CONFIG,
    LEADING_FLOAT_RE,
    NUMERIC_RE,
    TableConfig,
)

DMY_RE = re.compile(r"^(\d{1,2})[/-](\d{1,2})[/-](\d{2,4})$")
YMD_RE = re.compile(r"^(\d{4})[/.-](\d{1,2})[/.-](\d{1,2})$")
SPANISH_LONG_RE = re.compile(r"^(\d{1,2})\s+de\s+([a-záéíóú]+)\s+de\s+(\d{4})$", re.IGNORECASE)
# Free-form dates must carry a four-digit year ("Sat 3" is not a date).
YEAR_TOKEN_RE = re.compile(r"(?<!\d)\d{4}(?!\d)")

SPANISH_MONTHS = {
    "enero": 1, "febrero": 2, "marzo": 3, "abril": 4, "mayo": 5, "junio": 6,
    "julio": 7, "agosto": 8, "septiembre": 9, "setiembre": 9, "octubre": 10,
    "noviembre": 11, "diciembre": 12,
}

# Fills the parts a partial date leaves out ("Sep 2025" -> 2025-09-01).
_DEFAULT_PARTS = datetime(2000, 1, 1)


def _expand_year(year: int) -> int:
    if year < 100:
        return 2000 + year if year < 70 else 1900 + year
    return year


class DateParser:
    """Stateless helper unifying every date strategy used by the classifier and stats."""

    @staticmethod
    def matches_date_pattern(text: str) -> bool:
        """True if *text* matches one of the fixed date layouts."""
        return any(p.match(text) for p in DATE_PATTERNS)

    @staticmethod
    def parse_date(text: str) -> Optional[datetime]:
        """Parse *text* into a ``datetime`` or return ``None``."""
        if text is None:
            return None
        value = str(text).strip()
        if not value:
            return None

        match = DMY_RE.match(value)
        if match:
            first, second, year = int(match.group(1)), int(match.group(2)), _expand_year(int(match.group(3)))
            for day, month in ((first, second), (second, first)):
                try:
                    return datetime(year, month, day)
                except ValueError:
                    continue
            return None

        match = YMD_RE.match(value)
        if match:
            try:
                return datetime(int(match.group(1)), int(match.group(2)), int(match.group(3)))
            except ValueError:
                return None

        match = SPANISH_LONG_RE.match(value)
        if match:
            month = SPANISH_MONTHS.get(match.group(2).lower())
            if month is None:
                return None
            try:
                return datetime(int(match.group(3)), month, int(match.group(1)))
            except ValueError:
                return None

        if NUMERIC_RE.match(value):
            return None
        return DateParser._parse_fallback(value)

    @staticmethod
    def looks_like_date(text: str, cfg: TableConfig = DEFAULT_CONFIG) -> bool:
        """
        True if *text* is a date for classification purposes.

        Either one of the fixed layouts matches, or the value is long enough,
        does not start like a number, and still parses as a calendar date.
        """
        value = str(text or "").strip()
        if not value:
            return False
        if DateParser.matches_date_pattern(value):
            return True
        if len(value) < cfg.date_fallback_min_length or LEADING_FLOAT_RE.match(value):
            return False
        return DateParser._parse_fallback(value) is not None

    @staticmethod
    def _parse_fallback(value: str) -> Optional[datetime]:
        if not YEAR_TOKEN_RE.search(value):
            return None
        try:
            return date_parser.parse(value, dayfirst=True, default=_DEFAULT_PARTS)
        except (ValueError, OverflowError):
            return None


def parse_date(text: str) -> Optional[datetime]:
    return DateParser.parse_date(text)


def looks_like_date(text: str, cfg: TableConfig = DEFAULT_CONFIG) -> bool:
    return DateParser.looks_like_date(text, cfg)
