# -*- coding: utf-8 -*-
"""
Keyword table loading.

The classifier never reads module-level keyword globals. Tables are loaded
once from `finchat/data/keywords.yaml` (or `KEYWORDS_PATH`) into an immutable
`KeywordTables` and passed to `classify()`, so tests can inject their own.
"""

from __future__ import annotations

import unicodedata
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Iterable, Optional

import yaml

from finchat import config
from finchat.parser.types import Category

CategoryTable = tuple[tuple[Category, tuple[str, ...]], ...]

_DEFAULT_PATH = Path(__file__).resolve().parents[1] / "data" / "keywords.yaml"


def normalize_text(value: str) -> str:
    """NFC + casefold so composed/decomposed Vietnamese compares equal."""
    return unicodedata.normalize("NFC", value or "").casefold()


@dataclass(frozen=True)
class KeywordTables:
    """Read-only keyword configuration for one classifier"""

    expense_keywords: tuple[str, ...]
    investment_keywords: tuple[str, ...]
    categories: CategoryTable
    context_rules: CategoryTable

    @classmethod
    def build(
        cls,
        *,
        expense_keywords: Iterable[str] = (),
        investment_keywords: Iterable[str] = (),
        categories: Optional[dict] = None,
        context_rules: Optional[dict] = None,
    ) -> "KeywordTables":
        """
        Build tables from plain Python data.

        Args:
            expense_keywords: words that force the expense path
            investment_keywords: words that select the investment path
            categories: category name -> keywords, in resolution order
            context_rules: category name -> terms for the second pass

        Returns:
            KeywordTables with every keyword normalized
        """
        return cls(
            expense_keywords=_normalize_words(expense_keywords),
            investment_keywords=_normalize_words(investment_keywords),
            categories=_build_category_table(categories or {}),
            context_rules=_build_category_table(context_rules or {}),
        )


def _normalize_words(words: Iterable[str]) -> tuple[str, ...]:
    return tuple(normalize_text(str(w)) for w in words if str(w).strip())


def _build_category_table(mapping: dict) -> CategoryTable:
    table = []
    for name, words in mapping.items():
        table.append((Category.from_string(str(name)), _normalize_words(words or [])))
    return tuple(table)


def load_keyword_tables_from_file(path: Path) -> KeywordTables:
    """Load tables from a YAML file (see finchat/data/keywords.yaml)."""
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    intents = data.get("intents") or {}
    return KeywordTables.build(
        expense_keywords=intents.get("expense") or [],
        investment_keywords=intents.get("investment") or [],
        categories=data.get("categories") or {},
        context_rules=data.get("context_rules") or {},
    )


@lru_cache(maxsize=1)
def default_keyword_tables() -> KeywordTables:
    """Process-wide tables, loaded on first use."""
    path = Path(config.KEYWORDS_PATH) if config.KEYWORDS_PATH else _DEFAULT_PATH
    return load_keyword_tables_from_file(path)


def contains_any(text: str, keywords: Iterable[str]) -> bool:
    """Substring test of already-normalized text against normalized keywords."""
    return any(keyword in text for keyword in keywords)
