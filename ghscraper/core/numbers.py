"""Parsing and formatting of human-formatted counters ("1.2k", "3,400")."""

from __future__ import annotations

import math
import re

COUNT_RE = re.compile(r"^([\d,.]*\d(?:\.\d+)?)([km])?$")
LEADING_NUMBER_RE = re.compile(r"\d+(?:\.\d+)?|\.\d+")
NON_NUMERIC_RE = re.compile(r"[^0-9.]")
SUFFIX_MULTIPLIERS = {None: 1, "k": 1_000, "m": 1_000_000}


def _round_count(value: float) -> int:
    # Half rounds up; counters are never negative.
    if not math.isfinite(value):
        return 0
    return math.floor(value + 0.5)


def parse_count(text: str | None) -> int:
    """Parse GitHub counter text into an integer, returning 0 when unparseable."""
    if not text:
        return 0
    value = re.sub(r"\s+", "", str(text).lower()).replace(",", "")
    match = COUNT_RE.match(value)
    if not match:
        digits = NON_NUMERIC_RE.sub("", value)
        try:
            return _round_count(float(digits))
        except ValueError:
            return 0
    # "1.2.3" reads as its longest numeric prefix, 1.2
    prefix = LEADING_NUMBER_RE.match(match.group(1))
    if not prefix:
        return 0
    return _round_count(float(prefix.group(0)) * SUFFIX_MULTIPLIERS[match.group(2)])


def format_count(num: int) -> str:
    try:
        return f"{num:,}"
    except (TypeError, ValueError):
        return str(num)
