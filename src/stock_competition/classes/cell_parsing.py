"""Lenient parsers for currency and percentage cells."""

from __future__ import annotations

import math
import re
from collections.abc import Sequence

DEFAULT_PORTFOLIO_VALUE = 10000.0
DEFAULT_NUMERIC = 0.0

_CURRENCY_NOISE_RE = re.compile(r"[$€£¥,]")
_PERCENT_NOISE_RE = re.compile(r"[%,]")
# leading number, e.g. "12.5" out of "12.5 (est)"
_NUMBER_PREFIX_RE = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


def cell_text(row: Sequence[str | None] | None, index: int) -> str:
    """Return the stripped text at row[index], or "" for a missing row or cell."""
    if not row or index < 0 or index >= len(row):
        return ""
    value = row[index]
    if value is None:
        return ""
    return str(value).strip()


def _parse_number(text: str | None, noise: re.Pattern[str], default: float) -> float:
    if text is None:
        return default
    cleaned = noise.sub("", str(text)).strip()
    match = _NUMBER_PREFIX_RE.match(cleaned)
    if not match:
        return default
    value = float(match.group(0))
    if not math.isfinite(value):
        return default
    return value


def parse_currency(cell: str | None, default: float = DEFAULT_NUMERIC) -> float:
    """Parse "$11,000.50" style cells; fall back to default when unparseable."""
    return _parse_number(cell, _CURRENCY_NOISE_RE, default)


def parse_percent(cell: str | None, default: float = DEFAULT_NUMERIC) -> float:
    """Parse "-5.25%" style cells; fall back to default when unparseable."""
    return _parse_number(cell, _PERCENT_NOISE_RE, default)
