# -*- coding: utf-8 -*-
"""
Spending aggregation for the dashboard and the chat advice context.
"""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass, field
from typing import Iterable

from finchat.parser.types import Category
from finchat.services.storage import Budget, Expense


@dataclass
class SpendingSummary:
    total_expenses: float = 0.0
    total_budget: float = 0.0
    by_category: dict[str, float] = field(default_factory=dict)
    budget_by_category: dict[str, float] = field(default_factory=dict)

    @property
    def remaining(self) -> float:
        return round(self.total_budget - self.total_expenses, 2)

    def to_dict(self) -> dict:
        return {
            "total_expenses": self.total_expenses,
            "total_budget": self.total_budget,
            "remaining": self.remaining,
            "by_category": self.by_category,
            "budget_by_category": self.budget_by_category,
        }


def summarize_spending(expenses: Iterable[Expense], budgets: Iterable[Budget]) -> SpendingSummary:
    """
    Aggregate a user's expenses and budgets.

    Category keys follow Category declaration order; categories with neither
    spending nor budget are left out.
    """
    spent: dict[str, float] = defaultdict(float)
    planned: dict[str, float] = defaultdict(float)

    for expense in expenses:
        spent[expense.category] += float(expense.amount)
    for budget in budgets:
        planned[budget.category] += float(budget.amount)

    order = [c.value for c in Category]
    return SpendingSummary(
        total_expenses=round(sum(spent.values()), 2),
        total_budget=round(sum(planned.values()), 2),
        by_category={c: round(spent[c], 2) for c in order if c in spent},
        budget_by_category={c: round(planned[c], 2) for c in order if c in planned},
    )
