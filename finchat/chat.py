# -*- coding: utf-8 -*-
"""
Chat Orchestrator

One chat message in, one reply out:
1. classify the message
2. Expense -> persist it and confirm
3. Investment / General -> ask the advice service with the user's totals

Storage and advice failures become conversational error replies; nothing
raises to the caller.
"""

import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional, Union
from zoneinfo import ZoneInfo

from finchat import config
from finchat.advice import AdviceContext, AdviceServiceError
from finchat.formatters import format_advice_text, format_expense_confirmation, format_investment_question
from finchat.parser import ClassificationResult, Intent, KeywordTables, classify
from finchat.services.storage import BaseStorage, Expense, StorageError
from finchat.services.summary import summarize_spending

logger = logging.getLogger(__name__)

EMPTY_MESSAGE_REPLY = "Please enter a message"
ADVICE_ERROR_REPLY = "Sorry, something went wrong while getting advice. Please try again later."


@dataclass
class ChatReply:
    intent: str
    response_text: str
    expense: Optional[Expense] = None
    error_message: Optional[str] = None

    @property
    def is_error(self) -> bool:
        return self.error_message is not None

    def to_dict(self) -> dict:
        payload = {"intent": self.intent, "response": self.response_text}
        if self.expense:
            payload["expense"] = self.expense.to_dict()
        if self.error_message:
            payload["error"] = self.error_message
        return payload


class ChatService:
    """
    Chat orchestrator.

    Args:
        storage: expense / budget storage
        advice_client: anything with get_advice(question, context) -> str
        tables: keyword tables for the classifier (None -> bundled defaults)
    """

    def __init__(self, storage: BaseStorage, advice_client, tables: Optional[KeywordTables] = None):
        self.storage = storage
        self.advice_client = advice_client
        self.tables = tables

    def handle_message(
        self,
        user_id: str,
        text: str,
        *,
        now: Optional[Union[datetime, date]] = None,
    ) -> ChatReply:
        """
        Handle one chat message for an authenticated user.

        Args:
            user_id: owner of any expense created
            text: chat message
            now: message time (defaults to now in APP_TIMEZONE)

        Returns:
            ChatReply (intent "error" when the message is empty or a
            downstream call failed)
        """
        if not text or not text.strip():
            return ChatReply(intent="error", response_text=EMPTY_MESSAGE_REPLY, error_message=EMPTY_MESSAGE_REPLY)

        now = now or datetime.now(ZoneInfo(config.APP_TIMEZONE))
        result = classify(text, now, self.tables)
        logger.info(f"Classified message from user {user_id} as {result.intent.value}")

        if result.intent is Intent.EXPENSE:
            return self._record_expense(user_id, result)
        return self._ask_advice(user_id, text.strip(), result)

    def _record_expense(self, user_id: str, result: ClassificationResult) -> ChatReply:
        try:
            expense = self.storage.create_expense(user_id, result.expense)
        except (StorageError, ValueError, TypeError) as e:
            logger.error(f"Failed to add expense for user {user_id}: {e}")
            message = f"Could not add expense: {e}"
            return ChatReply(intent="error", response_text=message, error_message=message)

        return ChatReply(
            intent=Intent.EXPENSE.value,
            response_text=format_expense_confirmation(result.expense),
            expense=expense,
        )

    def _ask_advice(self, user_id: str, question: str, result: ClassificationResult) -> ChatReply:
        if result.intent is Intent.INVESTMENT:
            question = format_investment_question(question, result.investment)

        try:
            context = self._advice_context(user_id)
            answer = self.advice_client.get_advice(question, context)
        except (AdviceServiceError, StorageError, ValueError) as e:
            logger.error(f"Advice failed for user {user_id}: {e}")
            return ChatReply(intent="error", response_text=ADVICE_ERROR_REPLY, error_message=str(e))

        return ChatReply(intent=result.intent.value, response_text=format_advice_text(answer))

    def _advice_context(self, user_id: str) -> AdviceContext:
        summary = summarize_spending(
            self.storage.get_expenses(user_id),
            self.storage.get_budgets(user_id),
        )
        return AdviceContext(expenses=summary.total_expenses, budget=summary.total_budget)
