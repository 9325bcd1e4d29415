# -*- coding: utf-8 -*-
"""
Amount Parsing

Turns a matched numeric token (plus an optional unit word) into a float.
Supported forms:
- plain numbers: 50, 50.5
- thousands separators: 1,250 -> 1250
- thousands shorthand: 50k, 50 nghìn, 50 thousand -> 50000
- millions: 10 million, 2 triệu, 2tr -> 2000000
- bare currency: $500, 500 dollars, 500đ -> 500
"""

import re
from typing import Optional

from finchat.parser.keywords import normalize_text

# Numeric token as captured by the patterns. Loose ("1.2.3" matches);
# malformed numbers are rejected by parse_amount.
AMOUNT_TOKEN = r"\d[\d.,]*"

# Unit words, longest first inside each group so alternation prefers them
THOUSANDS_SUFFIX = r"thousand|nghìn|ngàn|k"
MILLIONS_SUFFIX = r"millions?|triệu|tr"
CURRENCY_SUFFIX = r"dollars?|usd|vnd|đồng|đ|\$"

_UNIT_MULTIPLIERS = {
    "million": 1_000_000,
    "millions": 1_000_000,
    "triệu": 1_000_000,
    "tr": 1_000_000,
    "thousand": 1_000,
    "nghìn": 1_000,
    "ngàn": 1_000,
    "k": 1_000,
    "dollar": 1,
    "dollars": 1,
    "usd": 1,
    "vnd": 1,
    "đồng": 1,
    "đ": 1,
    "$": 1,
}

_GROUPING = re.compile(r",")


def unit_multiplier(unit: Optional[str]) -> int:
    """Multiplier for a unit word; unknown or missing units count as 1."""
    if not unit:
        return 1
    return _UNIT_MULTIPLIERS.get(normalize_text(unit.strip()), 1)


def parse_amount(token: str, unit: Optional[str] = None) -> Optional[float]:
    """
    Parse a captured amount token.

    Args:
        token: numeric text captured by a pattern (e.g. "1,250", "50.5")
        unit: optional unit word captured next to it (e.g. "k", "triệu")

    Returns:
        The amount as float, or None when the token is not a valid number

    Examples:
        >>> parse_amount("1,250")
        1250.0
        >>> parse_amount("50", "k")
        50000.0
        >>> parse_amount("1.2.3") is None
        True
    """
    if not token:
        return None

    # 1. Strip grouping separators and a sentence-final period ("50." -> "50")
    cleaned = _GROUPING.sub("", token.strip()).rstrip(".")
    if not cleaned:
        return None

    # 2. Parse
    try:
        value = float(cleaned)
    except ValueError:
        return None

    # 3. Apply unit
    multiplier = unit_multiplier(unit)
    if multiplier != 1:
        value = round(value * multiplier, 2)
    return value
