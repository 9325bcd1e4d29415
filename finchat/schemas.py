# -*- coding: utf-8 -*-
"""
Payload validation for expenses and budgets.

Request bodies (HTTP API, CLI) are checked here before they reach storage.
Valid payloads come back normalized: amounts as float, category as its
display name, dates as ISO "YYYY-MM-DD" strings.
"""

from __future__ import annotations

from datetime import date
from typing import Any

from finchat.parser.types import Category

BUDGET_PERIODS = ("monthly", "yearly")

EXPENSE_FIELDS = ("amount", "category", "description", "date")
BUDGET_FIELDS = ("category", "amount", "period")


class ValidationError(ValueError):
    """Invalid payload; `errors` maps field name -> message"""

    def __init__(self, errors: dict[str, str]):
        self.errors = errors
        detail = "; ".join(f"{k}: {v}" for k, v in errors.items())
        super().__init__(f"invalid payload ({detail})")


def _check_amount(value: Any) -> float:
    if isinstance(value, bool):
        raise ValueError("must be a number")
    try:
        amount = float(str(value).replace(",", "")) if isinstance(value, str) else float(value)
    except (TypeError, ValueError):
        raise ValueError("must be a number")
    if amount <= 0:
        raise ValueError("must be greater than zero")
    return amount


def _check_category(value: Any) -> str:
    try:
        return Category.from_string(str(value)).value
    except ValueError:
        allowed = ", ".join(c.value for c in Category)
        raise ValueError(f"must be one of: {allowed}")


def _check_description(value: Any) -> str:
    text = str(value or "").strip()
    if not text:
        raise ValueError("must not be empty")
    return text


def _check_date(value: Any) -> str:
    if isinstance(value, date):
        return value.isoformat()
    try:
        # Accept full timestamps too; only the calendar date is kept
        return date.fromisoformat(str(value)[:10]).isoformat()
    except ValueError:
        raise ValueError("must be an ISO date (YYYY-MM-DD)")


def _check_period(value: Any) -> str:
    period = str(value or "").strip().lower()
    if period not in BUDGET_PERIODS:
        raise ValueError(f"must be one of: {', '.join(BUDGET_PERIODS)}")
    return period


_EXPENSE_CHECKS = {
    "amount": _check_amount,
    "category": _check_category,
    "description": _check_description,
    "date": _check_date,
}

_BUDGET_CHECKS = {
    "category": _check_category,
    "amount": _check_amount,
    "period": _check_period,
}


def _validate(data: Any, checks: dict, *, partial: bool) -> dict:
    if not isinstance(data, dict):
        raise ValidationError({"body": "must be a JSON object"})

    cleaned: dict = {}
    errors: dict[str, str] = {}
    for field_name, check in checks.items():
        if field_name not in data or data[field_name] is None:
            if not partial:
                errors[field_name] = "is required"
            continue
        try:
            cleaned[field_name] = check(data[field_name])
        except ValueError as e:
            errors[field_name] = str(e)

    if partial and not cleaned and not errors:
        errors["body"] = "no updatable fields"
    if errors:
        raise ValidationError(errors)
    return cleaned


def validate_expense_payload(data: Any, *, partial: bool = False) -> dict:
    """
    Validate an expense payload.

    Args:
        data: request body
        partial: True for updates (only the given fields are checked)

    Returns:
        Normalized dict with keys from EXPENSE_FIELDS

    Raises:
        ValidationError: one or more fields are invalid
    """
    return _validate(data, _EXPENSE_CHECKS, partial=partial)


def validate_budget_payload(data: Any, *, partial: bool = False) -> dict:
    """Validate a budget payload (see validate_expense_payload)."""
    return _validate(data, _BUDGET_CHECKS, partial=partial)
