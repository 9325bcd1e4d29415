# -*- coding: utf-8 -*-
"""
Category resolution.

Ordered passes, first hit wins in each:
1. the extracted description against the category keyword table
2. the whole utterance plus description against the category keyword table,
   then against the broader context rules

Anything left unmatched is Category.OTHER.
"""

from __future__ import annotations

from finchat.parser.keywords import CategoryTable, KeywordTables, contains_any, normalize_text
from finchat.parser.types import Category


def _first_match(text: str, table: CategoryTable) -> Category | None:
    for category, keywords in table:
        if contains_any(text, keywords):
            return category
    return None


def resolve_category(utterance: str, description: str, tables: KeywordTables) -> Category:
    """
    Resolve the category of an extracted expense.

    Args:
        utterance: full user message
        description: description fragment captured by the expense pattern
        tables: keyword tables to consult

    Returns:
        The first matching category in declared order, or Category.OTHER

    Examples:
        "coffee" -> FOOD (pass 1)
        "shoes" in "gym: spent 40 on shoes" -> ENTERTAINMENT (pass 2, keyword)
        "về nhà" in "50k grab về nhà" -> TRANSPORTATION (pass 2, context rule)
        "mì" -> OTHER
    """
    desc = normalize_text(description)
    category = _first_match(desc, tables.categories)
    if category:
        return category

    combined = normalize_text(f"{utterance} {description}")
    category = _first_match(combined, tables.categories) or _first_match(combined, tables.context_rules)
    if category:
        return category

    return Category.OTHER
