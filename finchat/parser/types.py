# -*- coding: utf-8 -*-
"""
Classifier Types

Intent / category enums and the transient records produced by one
classification call. Shared by the parser, the chat orchestrator and storage.
"""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Optional

from finchat.parser.errors import ParserErrorCode


class Intent(Enum):
    """Coarse purpose of one chat utterance"""

    EXPENSE = "expense"
    INVESTMENT = "investment"
    GENERAL = "general"


class Category(Enum):
    """Expense categories, in resolution order"""

    HOUSING = "Housing"
    TRANSPORTATION = "Transportation"
    FOOD = "Food"
    UTILITIES = "Utilities"
    INSURANCE = "Insurance"
    HEALTHCARE = "Healthcare"
    ENTERTAINMENT = "Entertainment"
    OTHER = "Other"

    @classmethod
    def from_string(cls, value: str) -> "Category":
        """Case-insensitive lookup by display name (e.g. "food" -> FOOD)"""
        normalized = (value or "").strip().lower()
        for category in cls:
            if category.value.lower() == normalized:
                return category
        raise ValueError(f"Unknown category: {value}")


class TimeHorizon(Enum):
    SHORT_TERM = "short-term"
    MEDIUM_TERM = "medium-term"
    LONG_TERM = "long-term"


class RiskTolerance(Enum):
    CONSERVATIVE = "conservative"
    MODERATE = "moderate"
    AGGRESSIVE = "aggressive"


@dataclass(frozen=True)
class ExpenseCandidate:
    """Fully extracted expense, ready to be persisted"""

    amount: float
    category: Category
    description: str
    date: date

    def to_dict(self) -> dict:
        return {
            "amount": self.amount,
            "category": self.category.value,
            "description": self.description,
            "date": self.date.isoformat(),
        }


@dataclass(frozen=True)
class InvestmentParameters:
    """Investment request parameters; defaults fill anything not mentioned"""

    amount: float = 0.0
    time_horizon: TimeHorizon = TimeHorizon.MEDIUM_TERM
    risk_tolerance: RiskTolerance = RiskTolerance.MODERATE

    def to_dict(self) -> dict:
        return {
            "amount": self.amount,
            "time_horizon": self.time_horizon.value,
            "risk_tolerance": self.risk_tolerance.value,
        }


@dataclass(frozen=True)
class ExpenseExtraction:
    """
    Outcome of the expense extractor.

    Either `candidate` is set (success) or `error_code` / `message` explain
    why no pattern produced an expense.
    """

    candidate: Optional[ExpenseCandidate] = None
    error_code: Optional[ParserErrorCode] = None
    message: str = ""

    @property
    def ok(self) -> bool:
        return self.candidate is not None


@dataclass(frozen=True)
class ClassificationResult:
    """
    Tagged union over Expense / Investment / General.

    Exactly one variant is active: `expense` is set only for EXPENSE,
    `investment` only for INVESTMENT, neither for GENERAL.
    """

    intent: Intent
    expense: Optional[ExpenseCandidate] = None
    investment: Optional[InvestmentParameters] = None
    # Why expense extraction failed (GENERAL only, informational)
    notes: tuple = field(default_factory=tuple)

    def __post_init__(self) -> None:
        has_expense = self.expense is not None
        has_investment = self.investment is not None
        if self.intent is Intent.EXPENSE and (not has_expense or has_investment):
            raise ValueError("EXPENSE result requires exactly an expense candidate")
        if self.intent is Intent.INVESTMENT and (not has_investment or has_expense):
            raise ValueError("INVESTMENT result requires exactly investment parameters")
        if self.intent is Intent.GENERAL and (has_expense or has_investment):
            raise ValueError("GENERAL result carries no payload")

    @classmethod
    def for_expense(cls, candidate: ExpenseCandidate) -> "ClassificationResult":
        return cls(intent=Intent.EXPENSE, expense=candidate)

    @classmethod
    def for_investment(cls, params: InvestmentParameters) -> "ClassificationResult":
        return cls(intent=Intent.INVESTMENT, investment=params)

    @classmethod
    def general(cls, *notes: str) -> "ClassificationResult":
        return cls(intent=Intent.GENERAL, notes=tuple(notes))

    def to_dict(self) -> dict:
        """JSON-friendly representation"""
        return {
            "intent": self.intent.value,
            "expense": self.expense.to_dict() if self.expense else None,
            "investment": self.investment.to_dict() if self.investment else None,
        }
