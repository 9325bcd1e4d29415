# -*- coding: utf-8 -*-

from datetime import date

from finchat.formatters import (
    format_advice_text,
    format_amount,
    format_expense_confirmation,
    format_investment_question,
)
from finchat.parser.types import (
    Category,
    ExpenseCandidate,
    InvestmentParameters,
    RiskTolerance,
    TimeHorizon,
)


def test_format_advice_text_drops_blank_lines_and_trims():
    raw = "  - Save 20%  \n\n\n- Cut takeout\r\n   \nTip: automate savings"
    assert format_advice_text(raw) == "- Save 20%\n\n- Cut takeout\n\nTip: automate savings"


def test_format_advice_text_empty():
    assert format_advice_text("") == ""
    assert format_advice_text(None) == ""


def test_format_amount():
    assert format_amount(1250.0) == "1,250"
    assert format_amount(50000) == "50,000"
    assert format_amount(12.5) == "12.50"


def test_format_expense_confirmation():
    expense = ExpenseCandidate(
        amount=50000.0,
        category=Category.FOOD,
        description="Ăn trưa",
        date=date(2026, 1, 23),
    )

    message = format_expense_confirmation(expense)

    assert message.startswith("✅ Expense added!")
    assert "Ăn trưa" in message
    assert "Amount: 50,000" in message
    assert "Category: Food" in message
    assert "Date: 2026-01-23" in message


def test_format_investment_question_with_amount():
    params = InvestmentParameters(
        amount=10_000_000.0,
        time_horizon=TimeHorizon.LONG_TERM,
        risk_tolerance=RiskTolerance.AGGRESSIVE,
    )

    text = format_investment_question("invest 10 million", params)

    assert text == (
        "invest 10 million\n"
        "Investment parameters: amount 10,000,000, "
        "time horizon long-term, risk tolerance aggressive"
    )


def test_format_investment_question_without_amount():
    text = format_investment_question("how should I invest?", InvestmentParameters())
    assert "amount not specified" in text
    assert "time horizon medium-term" in text
    assert "risk tolerance moderate" in text
