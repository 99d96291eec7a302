"""
Number format inference and locale-aware number parsing.

``infer_format`` looks at a sample of a column's values and decides which
punctuation mark groups thousands and which marks decimals; ``parse_number``
then turns a single raw value into a float under that format. Every caller
goes through this pair, so ``"$ 5.339.195"`` and ``"1,234.50"`` are read
consistently everywhere.
"""

from __future__ import annotations

import re
from collections import Counter
from typing import Iterable, Optional

from tablelens.ir import DEFAULT_NUMBER_FORMAT, NumberFormat
from tablelens.logger import get_logger
from tablelens.table.config import (
    CURRENCY_CODE_RE,
    CURRENCY_SYMBOL_RE,
    DECIMAL_COMMA_RE,
    DECIMAL_DOT_RE,
    DEFAULT_CONFIG,
    EXOTIC_SPACES_RE,
    GROUP_COMMA_RE,
    GROUP_DOT_RE,
    GROUP_SPACE_RE,
    TableConfig,
)

logger = get_logger(__name__)


def _other_mark(decimal: str) -> str:
    return "," if decimal == "." else "."


def _strip_currency(value: str) -> str:
    value = EXOTIC_SPACES_RE.sub(" ", value)
    value = CURRENCY_CODE_RE.sub("", value)
    return CURRENCY_SYMBOL_RE.sub("", value)


def infer_format(samples: Iterable[str], cfg: TableConfig = DEFAULT_CONFIG) -> NumberFormat:
    """
    Infer ``(thousand, decimal)`` separators from numeric-looking samples.

    Only the first ``cfg.format_sample_limit`` samples are inspected. With
    no samples, or no evidence at all, the default ``(',', '.')`` is returned.
    """
    values = [str(s) for s in (samples or []) if s is not None][: cfg.format_sample_limit]
    if not values:
        return DEFAULT_NUMBER_FORMAT

    evidence: Counter = Counter()
    for raw in values:
        spaced = re.sub(r"\s+", " ", _strip_currency(raw.strip())).strip()
        core = re.sub(r"\s+", "", spaced)
        if DECIMAL_COMMA_RE.search(core):
            evidence["decimal,"] += 1
        if DECIMAL_DOT_RE.search(core):
            evidence["decimal."] += 1
        if GROUP_DOT_RE.search(core):
            evidence["group."] += 1
        if GROUP_COMMA_RE.search(core):
            evidence["group,"] += 1
        if GROUP_SPACE_RE.search(spaced):
            evidence["group "] += 1

    comma_decimal, dot_decimal = evidence["decimal,"], evidence["decimal."]
    dot_group, comma_group, space_group = evidence["group."], evidence["group,"], evidence["group "]

    if comma_decimal + dot_decimal > 0:
        decimal = "," if comma_decimal > dot_decimal else "."
        remaining = [
            (sep, count)
            for sep, count in ((".", dot_group), (",", comma_group), (" ", space_group))
            if sep != decimal and count > 0
        ]
        remaining.sort(key=lambda item: item[1], reverse=True)
        if not remaining or (len(remaining) > 1 and remaining[0][1] == remaining[1][1]):
            thousand = _other_mark(decimal)
        else:
            thousand = remaining[0][0]
    elif dot_group > 0 and comma_group == 0:
        thousand, decimal = ".", ","
    elif comma_group > 0 and dot_group == 0:
        thousand, decimal = ",", "."
    elif space_group > 0:
        thousand, decimal = " ", ","
    else:
        thousand, decimal = ",", "."

    if thousand == decimal:
        thousand = _other_mark(decimal)

    fmt = NumberFormat(thousand=thousand, decimal=decimal)
    logger.debug("infer_format: %d samples, evidence=%s -> %s", len(values), dict(evidence), fmt.as_tuple())
    return fmt


def try_parse_number(value: str, fmt: Optional[NumberFormat] = None) -> Optional[float]:
    """
    Parse *value* under *fmt*; return ``None`` when it holds no digits.

    Currency symbols/codes, ``%`` and surrounding whitespace are removed, a
    leading sign is captured, the last decimal separator splits integer and
    fraction, and thousand separators plus any other non-digits are dropped.
    """
    if value is None:
        return None
    fmt = fmt or DEFAULT_NUMBER_FORMAT
    cleaned = _strip_currency(str(value)).replace("%", "")
    cleaned = re.sub(r"\s+", " ", cleaned).strip()

    sign = -1.0 if cleaned.startswith("-") else 1.0
    cleaned = re.sub(r"^[-+]\s*", "", cleaned)
    cleaned = re.sub(r"[^0-9.,\s]", "", cleaned)

    integer_part, decimal_part = cleaned, ""
    if fmt.decimal and fmt.decimal in cleaned:
        idx = cleaned.rfind(fmt.decimal)
        integer_part, decimal_part = cleaned[:idx], cleaned[idx + 1:]

    if fmt.thousand == " ":
        integer_part = re.sub(r"\s+", "", integer_part)
    elif fmt.thousand:
        integer_part = integer_part.replace(fmt.thousand, "")
    integer_part = re.sub(r"[^0-9]", "", integer_part)
    decimal_part = re.sub(r"[^0-9]", "", decimal_part)

    if not integer_part and not decimal_part:
        return None
    normalized = (integer_part or "0") + ("." + decimal_part if decimal_part else "")
    try:
        return sign * float(normalized)
    except ValueError:
        return None


def parse_number(value: str, fmt: Optional[NumberFormat] = None) -> float:
    """Like :func:`try_parse_number` but yields ``0`` on any failure."""
    result = try_parse_number(value, fmt)
    return 0.0 if result is None else result
