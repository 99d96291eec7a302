"""
Centralised configuration for the table pipeline.

All magic numbers, regex patterns and tunable thresholds live here so the
algorithm modules stay free of hard-coded values.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, replace
from typing import Tuple


# ---------------------------------------------------------------------------
# Character classes
# ---------------------------------------------------------------------------

# "R" covers rand and the "R$" prefix.
CURRENCY_SYMBOLS = "$€£¥₽₹R"
CURRENCY_CLASS = "[" + re.escape(CURRENCY_SYMBOLS) + "]"

CURRENCY_CODES: Tuple[str, ...] = (
    "usd", "eur", "gbp", "jpy", "cad", "aud", "chf", "cny", "inr", "clp",
    "mxn", "ars", "cop", "brl", "dkk", "sek", "nok", "zar",
)
_CODES_ALT = "|".join(CURRENCY_CODES)

# No-break and narrow no-break spaces show up as grouping in scraped reports.
EXOTIC_SPACES_RE = re.compile(r"[\u00a0\u2007\u202f]")


# ---------------------------------------------------------------------------
# Pre-compiled regex patterns (shared across modules)
# ---------------------------------------------------------------------------

# A numeric literal body: digits, grouping/decimal punctuation and spaces,
# with at least one digit somewhere.
_NUM_BODY = r"(?=[\d.,\s]*\d)[\d.,\s]+"
# One currency marker; "R$" is matched as a unit.
_SYMBOL = r"(?:R\$|" + CURRENCY_CLASS + r")"

RATE_RE = re.compile(r"^[+-]?" + _NUM_BODY + r"%$")
MONEY_SYMBOL_RE = re.compile(
    r"^[+-]?\s*" + _SYMBOL + r"?\s*[+-]?" + _NUM_BODY + r"\s*" + _SYMBOL + r"?$"
)
MONEY_CODE_SUFFIX_RE = re.compile(
    r"^[+-]?" + _NUM_BODY + r"\s*(?:" + _CODES_ALT + r")$", re.IGNORECASE
)
MONEY_CODE_PREFIX_RE = re.compile(
    r"^(?:" + _CODES_ALT + r")\s*[+-]?" + _NUM_BODY + r"$", re.IGNORECASE
)
CURRENCY_SYMBOL_RE = re.compile(CURRENCY_CLASS)
CURRENCY_CODE_RE = re.compile(r"(?<![A-Za-z])(?:" + _CODES_ALT + r")(?![A-Za-z])", re.IGNORECASE)
NUMERIC_RE = re.compile(r"^[+-]?" + _NUM_BODY + r"$")

# JavaScript-style parseFloat prefix: anything starting like a number.
LEADING_FLOAT_RE = re.compile(r"^\s*[+-]?(?:\d+(?:\.\d*)?|\.\d+)")

_MONTH_ABBR = r"(?:jan|feb|mar|apr|may|jun|jul|aug|sep|oct|nov|dec)"
DATE_PATTERNS: Tuple[re.Pattern, ...] = (
    re.compile(r"^\d{1,2}[/-]\d{1,2}[/-]\d{2,4}$"),                       # 12/09/2025, 12-09-25
    re.compile(r"^\d{4}[/-]\d{1,2}[/-]\d{1,2}$"),                         # 2025-09-12
    re.compile(r"^" + _MONTH_ABBR + r"[a-z]*\s+\d{1,2},?\s+\d{4}", re.IGNORECASE),  # Sep 12, 2025
    re.compile(r"^\d{1,2}\s+" + _MONTH_ABBR + r"[a-z]*\s+\d{4}$", re.IGNORECASE),   # 12 Sep 2025
    re.compile(r"^\d{1,2}-[A-Za-z]{3}-\d{4}$"),                           # 12-Sep-2025
    re.compile(r"^\d{1,2}\s+de\s+[a-záéíóú]+\s+de\s+\d{4}$", re.IGNORECASE),  # 12 de septiembre de 2025
)

# Format inference evidence (applied to the whitespace/currency-stripped core)
DECIMAL_COMMA_RE = re.compile(r",\d{2}$")
DECIMAL_DOT_RE = re.compile(r"\.\d{2}$")
GROUP_DOT_RE = re.compile(r"\d\.\d{3}(?:[.,]|$)")
GROUP_COMMA_RE = re.compile(r"\d,\d{3}(?:[.,]|$)")
# Space grouping is checked on the currency-stripped value with spaces kept.
GROUP_SPACE_RE = re.compile(r"\d \d{3}(?:[ .,]|$)")


# ---------------------------------------------------------------------------
# TableConfig - tunable thresholds
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class TableConfig:
    """Immutable bag of thresholds used throughout the table pipeline."""

    # Candidate table selection
    presentation_max_density: float = 0.15
    wide_table_min_columns: int = 20
    wide_table_max_filled_per_row: float = 5.0
    score_row_cap: float = 10.0
    min_candidate_rows: int = 2

    # Sampling
    format_sample_limit: int = 60
    classify_sample_limit: int = 0  # 0 = every value

    # Date fallback parsing
    date_fallback_min_length: int = 4

    # OCR text splitting
    ocr_min_consistent_rows: int = 2
    ocr_width_tolerance: int = 1

    # Text sniffing
    csv_consistency_ratio: float = 0.7

    @classmethod
    def from_settings(cls, settings) -> "TableConfig":
        """Overlay the sampling limits configured through the environment."""
        return replace(
            DEFAULT_CONFIG,
            format_sample_limit=settings.FORMAT_SAMPLE_LIMIT or DEFAULT_CONFIG.format_sample_limit,
            classify_sample_limit=settings.CLASSIFY_SAMPLE_LIMIT,
        )


# Singleton default config
DEFAULT_CONFIG = TableConfig()
