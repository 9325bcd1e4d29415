# -*- coding: utf-8 -*-
"""
Expense Field Extraction

Pulls amount / category / description / date out of a free-text purchase.
Patterns are tried in order and the first one that yields a valid amount
wins; there is no scoring across patterns.

Supported shapes (English and Vietnamese):
- keyword first:        "expense: lunch 50", "chi phí sửa xe 200k"
- verb, amount first:   "spent 50 on food", "chi 50k cho ăn trưa"
- verb, item first:     "bought coffee for 30k", "mua cà phê 30k"
- item, cost verb:      "taxi cost 120", "phở giá 45k"
- bare amount first:    "50k mì", "1,250 for rent"
- bare item first:      "coffee 30k"

Questions ("what is my budget for 2025?") only match the verb and keyword
anchored shapes.
"""

import logging
import re
from datetime import date, datetime
from typing import Union

from finchat.parser.errors import ParserError, ParserErrorCode
from finchat.parser.extract_amount import AMOUNT_TOKEN, THOUSANDS_SUFFIX, parse_amount
from finchat.parser.extract_category import resolve_category
from finchat.parser.keywords import KeywordTables
from finchat.parser.types import ExpenseCandidate, ExpenseExtraction

logger = logging.getLogger(__name__)

# === Vocabulary ===

_VERBS = r"(?:spent|spend|paid|pay|bought|buy|chi|tiêu|trả|mua)"
_PREPOSITIONS = r"(?:on|for|cho|vào|để)"
_COST_VERBS = r"(?:costs?|was|were|giá|hết)"
_EXPENSE_NOUNS = r"(?:expenses?|chi tiêu|chi phí)\b"

_AMOUNT = rf"\$?\s*(?P<amount>{AMOUNT_TOKEN})(?:\s*(?P<unit>{THOUSANDS_SUFFIX})\b)?"
_CURRENCY = r"(?:\s*(?:dollars?|usd|vnd|đồng|đ)\b|\$)?"
_FLAGS = re.IGNORECASE | re.UNICODE

# Questions ("what is my budget for 2025", "tiết kiệm bao nhiêu") are not
# expenses unless a purchase verb or the expense keyword anchors them
_QUESTION = re.compile(
    r"\?"
    r"|^\s*(?:what|how|why|when|where|which|who|whose|should|could|would|can|is|are|did)\b"
    r"|^\s*(?:tại sao|vì sao|làm sao|làm thế nào|khi nào|có nên)\b"
    r"|\bbao nhiêu\b",
    _FLAGS,
)

# === Ordered patterns (first valid match wins) ===

EXPENSE_PATTERNS: tuple[tuple[str, re.Pattern], ...] = (
    (
        "keyword_anchored",
        re.compile(
            rf"^\s*{_EXPENSE_NOUNS}\s*[:\-]?\s*(?P<desc>.+?)\s*[:\-]?\s+{_AMOUNT}{_CURRENCY}\s*$",
            _FLAGS,
        ),
    ),
    (
        "verb_amount_first",
        re.compile(
            rf"\b{_VERBS}\s+{_AMOUNT}{_CURRENCY}\s+{_PREPOSITIONS}\s+(?P<desc>.+)$",
            _FLAGS,
        ),
    ),
    (
        "verb_description_first",
        re.compile(
            rf"\b{_VERBS}\s+(?P<desc>.+?)\s+(?:{_PREPOSITIONS}\s+)?{_AMOUNT}{_CURRENCY}\s*$",
            _FLAGS,
        ),
    ),
    (
        "description_cost_verb",
        re.compile(
            rf"^\s*(?P<desc>.+?)\s+{_COST_VERBS}\s+{_AMOUNT}{_CURRENCY}\s*$",
            _FLAGS,
        ),
    ),
    (
        "amount_first",
        re.compile(
            rf"^\s*{_AMOUNT}{_CURRENCY}\s+(?:{_PREPOSITIONS}\s+)?(?P<desc>\D.*?)\s*$",
            _FLAGS,
        ),
    ),
    (
        "description_first",
        re.compile(
            rf"^\s*(?P<desc>.*?[^\W\d_].*?)\s+{_AMOUNT}{_CURRENCY}\s*$",
            _FLAGS,
        ),
    ),
)

# Patterns without a verb or keyword anchor; skipped for questions
UNANCHORED_PATTERNS = frozenset({"description_cost_verb", "amount_first", "description_first"})


def normalize_description(text: str) -> str:
    """Trim and capitalize the first letter only ("iced coffee" -> "Iced coffee")."""
    cleaned = (text or "").strip()
    if not cleaned:
        return ""
    return cleaned[0].upper() + cleaned[1:]


def _to_date(now: Union[datetime, date]) -> date:
    if isinstance(now, datetime):
        return now.date()
    return now


def extract_expense(
    text: str,
    now: Union[datetime, date],
    tables: KeywordTables,
    patterns: tuple[tuple[str, re.Pattern], ...] = EXPENSE_PATTERNS,
) -> ExpenseExtraction:
    """
    Extract an expense from free text.

    Args:
        text: user utterance
        now: classification time; its calendar date becomes the expense date
        tables: keyword tables for category resolution
        patterns: ordered (name, regex) pairs; each regex exposes the named
            groups `amount`, `desc` and optionally `unit`

    Returns:
        ExpenseExtraction with a candidate, or with the error code / message
        of the last failure (numeric failures take precedence over no-match)
    """
    if not text or not text.strip():
        error = ParserError(ParserErrorCode.EMPTY_MESSAGE)
        return ExpenseExtraction(error_code=error.code, message=error.message)

    utterance = text.strip()
    failure = ParserError(ParserErrorCode.PATTERN_NO_MATCH)
    is_question = bool(_QUESTION.search(utterance))

    for name, pattern in patterns:
        if is_question and name in UNANCHORED_PATTERNS:
            continue

        match = pattern.search(utterance)
        if not match:
            continue

        groups = match.groupdict()
        amount = parse_amount(groups.get("amount") or "", groups.get("unit"))
        if amount is None:
            logger.debug(f"Pattern {name} matched but amount {groups.get('amount')!r} is not a number")
            failure = ParserError(ParserErrorCode.NUMERIC_PARSE_FAILURE, value=groups.get("amount"))
            continue
        if amount <= 0:
            failure = ParserError(ParserErrorCode.NON_POSITIVE_AMOUNT)
            continue

        description = normalize_description(groups.get("desc") or "")
        if not description:
            continue

        category = resolve_category(utterance, description, tables)
        candidate = ExpenseCandidate(
            amount=amount,
            category=category,
            description=description,
            date=_to_date(now),
        )
        logger.debug(f"Pattern {name} extracted {candidate}")
        return ExpenseExtraction(candidate=candidate)

    return ExpenseExtraction(error_code=failure.code, message=failure.message)
