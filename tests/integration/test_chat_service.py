# -*- coding: utf-8 -*-
"""
End-to-end chat flow: classify -> store / advise -> reply.
"""

from unittest.mock import Mock

import pytest

from finchat.advice import AdviceContext, AdviceServiceError
from finchat.chat import ADVICE_ERROR_REPLY, EMPTY_MESSAGE_REPLY, ChatService
from finchat.services.storage import StorageError
from tests.test_utils import make_advice_client


@pytest.fixture
def advice_client():
    return make_advice_client("- Save 20%\n\n\n   - Spend less  ")


@pytest.fixture
def service(storage, advice_client):
    return ChatService(storage, advice_client)


class TestExpenseFlow:

    def test_expense_is_persisted_and_confirmed(self, service, storage, advice_client, now):
        reply = service.handle_message("u1", "spent 50 on food", now=now)

        assert reply.intent == "expense"
        assert not reply.is_error
        assert "✅ Expense added!" in reply.response_text
        assert reply.expense.id == 1

        stored = storage.get_expenses("u1")
        assert len(stored) == 1
        assert stored[0].amount == 50.0
        assert stored[0].category == "Food"
        assert stored[0].date == "2026-01-23"
        advice_client.get_advice.assert_not_called()

    def test_storage_failure_becomes_error_reply(self, advice_client, now):
        broken = Mock()
        broken.create_expense.side_effect = StorageError("storage unavailable")
        service = ChatService(broken, advice_client)

        reply = service.handle_message("u1", "coffee 30k", now=now)

        assert reply.is_error
        assert reply.intent == "error"
        assert reply.response_text == "Could not add expense: storage unavailable"


class TestAdviceFlow:

    def test_general_question_gets_formatted_advice(self, service, advice_client, now):
        reply = service.handle_message("u1", "how do I budget better?", now=now)

        assert reply.intent == "general"
        assert reply.response_text == "- Save 20%\n\n- Spend less"
        question, context = advice_client.get_advice.call_args.args
        assert question == "how do I budget better?"
        assert context == AdviceContext(expenses=0.0, budget=0.0)

    def test_investment_question_is_enriched(self, service, advice_client, now):
        reply = service.handle_message("u1", "invest 10 million, long term, aggressive", now=now)

        assert reply.intent == "investment"
        question = advice_client.get_advice.call_args.args[0]
        assert question.startswith("invest 10 million, long term, aggressive\n")
        assert "amount 10,000,000" in question
        assert "time horizon long-term" in question
        assert "risk tolerance aggressive" in question

    def test_context_uses_user_totals(self, service, storage, advice_client, now):
        storage.create_expense("u1", {"amount": 1200.0, "category": "Housing", "description": "Rent", "date": "2026-01-01"})
        storage.create_budget("u1", {"category": "Housing", "amount": 2000.0, "period": "monthly"})
        storage.create_expense("u2", {"amount": 99.0, "category": "Food", "description": "x", "date": "2026-01-01"})

        service.handle_message("u1", "should I save more?", now=now)

        context = advice_client.get_advice.call_args.args[1]
        assert context == AdviceContext(expenses=1200.0, budget=2000.0)

    def test_advice_failure_becomes_error_reply(self, service, advice_client, now):
        advice_client.get_advice.side_effect = AdviceServiceError("Could not get financial advice: timeout")

        reply = service.handle_message("u1", "how do I budget?", now=now)

        assert reply.intent == "error"
        assert reply.response_text == ADVICE_ERROR_REPLY
        assert "timeout" in reply.error_message

    def test_missing_api_key_becomes_error_reply(self, service, advice_client, now):
        advice_client.get_advice.side_effect = ValueError("OPENAI_API_KEY is not set")

        reply = service.handle_message("u1", "how do I budget?", now=now)

        assert reply.is_error
        assert reply.response_text == ADVICE_ERROR_REPLY


@pytest.mark.parametrize("text", ["", "   ", None])
def test_empty_message(service, text):
    reply = service.handle_message("u1", text)
    assert reply.intent == "error"
    assert reply.response_text == EMPTY_MESSAGE_REPLY


def test_reply_to_dict(service, now):
    payload = service.handle_message("u1", "taxi cost 120", now=now).to_dict()

    assert payload["intent"] == "expense"
    assert payload["expense"]["category"] == "Transportation"
    assert "error" not in payload
