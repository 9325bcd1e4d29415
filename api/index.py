# -*- coding: utf-8 -*-
"""
finchat HTTP API (Flask)

This module handles:
1. Expense / budget CRUD scoped to the calling user
2. Spending summary
3. Chat: classify a message, record expenses, relay advice

The caller is identified by the X-User-Id header, set by the authenticating
proxy in front of this app.
"""

import logging
from flask import Flask, abort, jsonify, request

from finchat.advice import AdviceClient
from finchat.chat import ChatService
from finchat.parser import classify
from finchat.schemas import ValidationError, validate_budget_payload, validate_expense_payload
from finchat.services.storage import NotFoundError, get_storage
from finchat.services.summary import summarize_spending

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

# Initialize Flask app
app = Flask(__name__)

# Global variables for lazy initialization
_chat_service = None


def get_chat_service() -> ChatService:
    """Get or initialize the chat orchestrator (lazy initialization)"""
    global _chat_service
    if _chat_service is None:
        logger.info("Initializing ChatService")
        _chat_service = ChatService(get_storage(), AdviceClient())
    return _chat_service


def current_user_id() -> str:
    user_id = (request.headers.get('X-User-Id') or '').strip()
    if not user_id:
        abort(401)
    return user_id


def _json_body() -> dict:
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValidationError({"body": "must be a JSON object"})
    return data


def _owned(entity, user_id: str):
    """404 for missing entities and for entities of other users"""
    if entity is None or entity.user_id != user_id:
        abort(404)
    return entity


@app.errorhandler(ValidationError)
def handle_validation_error(e: ValidationError):
    return jsonify({"error": "validation failed", "fields": e.errors}), 400


@app.errorhandler(NotFoundError)
def handle_not_found(e: NotFoundError):
    return jsonify({"error": str(e)}), 404


@app.route("/api/health", methods=['GET'])
def health():
    """Health check endpoint"""
    return jsonify({"status": "ok"})


# === Expenses ===

@app.route("/api/expenses", methods=['GET'])
def list_expenses():
    user_id = current_user_id()
    return jsonify([e.to_dict() for e in get_storage().get_expenses(user_id)])


@app.route("/api/expenses", methods=['POST'])
def create_expense():
    user_id = current_user_id()
    data = validate_expense_payload(_json_body())
    expense = get_storage().create_expense(user_id, data)
    return jsonify(expense.to_dict()), 201


@app.route("/api/expenses/<int:expense_id>", methods=['PATCH'])
def update_expense(expense_id: int):
    user_id = current_user_id()
    storage = get_storage()
    _owned(storage.get_expense(expense_id), user_id)
    changes = validate_expense_payload(_json_body(), partial=True)
    return jsonify(storage.update_expense(expense_id, changes).to_dict())


@app.route("/api/expenses/<int:expense_id>", methods=['DELETE'])
def delete_expense(expense_id: int):
    user_id = current_user_id()
    storage = get_storage()
    _owned(storage.get_expense(expense_id), user_id)
    storage.delete_expense(expense_id)
    return '', 204


# === Budgets ===

@app.route("/api/budgets", methods=['GET'])
def list_budgets():
    user_id = current_user_id()
    return jsonify([b.to_dict() for b in get_storage().get_budgets(user_id)])


@app.route("/api/budgets", methods=['POST'])
def create_budget():
    user_id = current_user_id()
    data = validate_budget_payload(_json_body())
    budget = get_storage().create_budget(user_id, data)
    return jsonify(budget.to_dict()), 201


@app.route("/api/budgets/<int:budget_id>", methods=['PATCH'])
def update_budget(budget_id: int):
    user_id = current_user_id()
    storage = get_storage()
    _owned(storage.get_budget(budget_id), user_id)
    changes = validate_budget_payload(_json_body(), partial=True)
    return jsonify(storage.update_budget(budget_id, changes).to_dict())


@app.route("/api/budgets/<int:budget_id>", methods=['DELETE'])
def delete_budget(budget_id: int):
    user_id = current_user_id()
    storage = get_storage()
    _owned(storage.get_budget(budget_id), user_id)
    storage.delete_budget(budget_id)
    return '', 204


@app.route("/api/summary", methods=['GET'])
def spending_summary():
    user_id = current_user_id()
    storage = get_storage()
    summary = summarize_spending(storage.get_expenses(user_id), storage.get_budgets(user_id))
    return jsonify(summary.to_dict())


# === Chat ===

@app.route("/api/classify", methods=['POST'])
def classify_message():
    """Classification only, nothing is stored"""
    current_user_id()
    text = _json_body().get('text')
    if not isinstance(text, str) or not text.strip():
        return jsonify({"error": "text is required"}), 400
    return jsonify(classify(text).to_dict())


@app.route("/api/chat", methods=['POST'])
def chat():
    """
    Chat entry point

    Body: {"question": "..."}
    Returns: {"intent": ..., "response": ..., "expense"?: {...}}
    """
    user_id = current_user_id()
    question = _json_body().get('question')
    if not isinstance(question, str) or not question.strip():
        return jsonify({"error": "Question is required"}), 400

    # Downstream failures come back as conversational replies (intent "error")
    reply = get_chat_service().handle_message(user_id, question)
    return jsonify(reply.to_dict())


# Local development entry point
if __name__ == "__main__":
    app.run(debug=True, port=5000)
