# -*- coding: utf-8 -*-
"""
Chat reply formatters.
"""

from finchat.parser.types import ExpenseCandidate, InvestmentParameters


def format_advice_text(text: str) -> str:
    """
    Normalize multi-line advice text for display.

    Splits on line breaks, trims each line, drops empty lines and joins the
    rest with a blank line between entries.

    Examples:
        >>> format_advice_text("- Save more\\n\\n   - Spend less  \\n")
        '- Save more\\n\\n- Spend less'
    """
    lines = [line.strip() for line in (text or "").splitlines()]
    return "\n\n".join(line for line in lines if line)


def format_amount(amount: float) -> str:
    """1250.0 -> "1,250", 12.5 -> "12.50"."""
    if float(amount).is_integer():
        return f"{amount:,.0f}"
    return f"{amount:,.2f}"


def format_expense_confirmation(expense: ExpenseCandidate) -> str:
    """Confirmation shown after an expense from chat was recorded."""
    message = f"""✅ Expense added!

📋 {expense.description}
💰 Amount: {format_amount(expense.amount)}
📂 Category: {expense.category.value}
📅 Date: {expense.date.isoformat()}"""
    return message


def format_investment_question(question: str, params: InvestmentParameters) -> str:
    """Append the parsed investment parameters to the user's question."""
    amount = format_amount(params.amount) if params.amount else "not specified"
    return (
        f"{question}\n"
        f"Investment parameters: amount {amount}, "
        f"time horizon {params.time_horizon.value}, "
        f"risk tolerance {params.risk_tolerance.value}"
    )
