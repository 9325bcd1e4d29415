# -*- coding: utf-8 -*-
"""
Chat intent classifier.

Decides whether one chat utterance is an expense to record, an investment
advice request, or a general question, and extracts structured fields for
the first two. Pure function of the text, `now` and the keyword tables.

Entry point:
- classify(utterance, now=None, tables=None) -> ClassificationResult

Usage:
    from finchat.parser import classify
    result = classify("spent 50 on food")
"""

import unicodedata
from datetime import date, datetime
from typing import Optional, Union
from zoneinfo import ZoneInfo

from finchat import config
from finchat.parser.errors import ParserError, ParserErrorCode
from finchat.parser.keywords import KeywordTables, contains_any, default_keyword_tables, normalize_text
from finchat.parser.types import (
    Category,
    ClassificationResult,
    ExpenseCandidate,
    Intent,
    InvestmentParameters,
    RiskTolerance,
    TimeHorizon,
)


def classify(
    utterance: str,
    now: Optional[Union[datetime, date]] = None,
    tables: Optional[KeywordTables] = None,
) -> ClassificationResult:
    """
    Classify one chat utterance.

    Args:
        utterance: raw user message
        now: classification time (defaults to now in APP_TIMEZONE); the
            expense date is its calendar date
        tables: keyword tables (defaults to the bundled YAML tables)

    Returns:
        ClassificationResult with exactly one of Expense / Investment / General.
        Never raises for any input text.

    Resolution order:
    1. expense keyword present -> skip the investment branch
    2. investment keyword present -> Investment
    3. expense extraction succeeds -> Expense, otherwise General
    """
    from finchat.parser.extract_expense import extract_expense
    from finchat.parser.extract_investment import extract_investment_parameters

    tables = tables or default_keyword_tables()
    now = now or datetime.now(ZoneInfo(config.APP_TIMEZONE))
    text = unicodedata.normalize("NFC", utterance or "").strip()

    if not text:
        return ClassificationResult.general(ParserErrorCode.EMPTY_MESSAGE.value)

    normalized = normalize_text(text)

    # 1. Expense vocabulary overrides investment vocabulary
    has_expense_keyword = contains_any(normalized, tables.expense_keywords)

    # 2. Investment
    if not has_expense_keyword and contains_any(normalized, tables.investment_keywords):
        return ClassificationResult.for_investment(extract_investment_parameters(text))

    # 3. Expense extraction, General as fallback
    extraction = extract_expense(text, now, tables)
    if extraction.ok:
        return ClassificationResult.for_expense(extraction.candidate)
    return ClassificationResult.general(extraction.error_code.value)


# Export
__all__ = [
    "classify",
    "Category",
    "ClassificationResult",
    "ExpenseCandidate",
    "Intent",
    "InvestmentParameters",
    "KeywordTables",
    "ParserError",
    "ParserErrorCode",
    "RiskTolerance",
    "TimeHorizon",
]
