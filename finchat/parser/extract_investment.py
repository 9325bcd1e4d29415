# -*- coding: utf-8 -*-
"""
Investment Parameter Extraction

Three independent scans over the whole utterance (amount, time horizon,
risk tolerance). Word order does not matter and anything missing falls back
to InvestmentParameters defaults.
"""

import re
from typing import Optional

from finchat.parser.extract_amount import (
    AMOUNT_TOKEN,
    CURRENCY_SUFFIX,
    MILLIONS_SUFFIX,
    THOUSANDS_SUFFIX,
    parse_amount,
)
from finchat.parser.types import InvestmentParameters, RiskTolerance, TimeHorizon

# "$500" or "<number><unit>"; only the first hit is used
_AMOUNT_PATTERN = re.compile(
    rf"\$\s*(?P<prefixed>{AMOUNT_TOKEN})(?:\s*(?P<prefixed_unit>{MILLIONS_SUFFIX}|{THOUSANDS_SUFFIX})(?!\w))?"
    rf"|(?P<amount>{AMOUNT_TOKEN})\s*(?P<unit>(?:{MILLIONS_SUFFIX}|{THOUSANDS_SUFFIX}|{CURRENCY_SUFFIX})(?!\w))",
    re.IGNORECASE | re.UNICODE,
)

_HORIZON_PATTERNS: tuple[tuple[TimeHorizon, re.Pattern], ...] = (
    (TimeHorizon.SHORT_TERM, re.compile(r"\bshort[\s-]?term\b|ngắn hạn", re.IGNORECASE)),
    (TimeHorizon.MEDIUM_TERM, re.compile(r"\bmedium[\s-]?term\b|trung hạn", re.IGNORECASE)),
    (TimeHorizon.LONG_TERM, re.compile(r"\blong[\s-]?term\b|dài hạn", re.IGNORECASE)),
)

_RISK_PATTERNS: tuple[tuple[RiskTolerance, re.Pattern], ...] = (
    (RiskTolerance.CONSERVATIVE, re.compile(r"\bconservative\b|thận trọng|an toàn", re.IGNORECASE)),
    (RiskTolerance.MODERATE, re.compile(r"\bmoderate\b|vừa phải|cân bằng", re.IGNORECASE)),
    (RiskTolerance.AGGRESSIVE, re.compile(r"\baggressive\b|mạo hiểm|táo bạo", re.IGNORECASE)),
)


def extract_investment_amount(text: str) -> float:
    """First "<number><unit>" (or "$<number>") in the text, 0 when absent."""
    match = _AMOUNT_PATTERN.search(text or "")
    if not match:
        return 0.0

    if match.group("prefixed"):
        amount = parse_amount(match.group("prefixed"), match.group("prefixed_unit"))
    else:
        amount = parse_amount(match.group("amount"), match.group("unit"))

    if amount is None or amount < 0:
        return 0.0
    return amount


def _first_enum(text: str, patterns) -> Optional[object]:
    for value, pattern in patterns:
        if pattern.search(text):
            return value
    return None


def extract_time_horizon(text: str) -> TimeHorizon:
    return _first_enum(text or "", _HORIZON_PATTERNS) or TimeHorizon.MEDIUM_TERM


def extract_risk_tolerance(text: str) -> RiskTolerance:
    return _first_enum(text or "", _RISK_PATTERNS) or RiskTolerance.MODERATE


def extract_investment_parameters(text: str) -> InvestmentParameters:
    """
    Extract investment parameters from an utterance with investment intent.

    Examples:
        "invest 10 million, long term, aggressive"
            -> amount=10_000_000, LONG_TERM, AGGRESSIVE
        "aggressive long-term investment of 50k"
            -> amount=50_000, LONG_TERM, AGGRESSIVE
        "how should I invest?" -> amount=0, MEDIUM_TERM, MODERATE
    """
    return InvestmentParameters(
        amount=extract_investment_amount(text),
        time_horizon=extract_time_horizon(text),
        risk_tolerance=extract_risk_tolerance(text),
    )
