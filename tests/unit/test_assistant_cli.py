# -*- coding: utf-8 -*-

import json

import pytest

from finchat import assistant_cli
from finchat.assistant_cli import build_parser, main
from finchat.services.storage import MemStorage


def _output(capsys) -> dict:
    return json.loads(capsys.readouterr().out)


def test_classify_expense(capsys) -> None:
    code = main(["classify", "--text", "spent 50 on food"])

    payload = _output(capsys)
    assert code == 0
    assert payload["status"] == "ok"
    assert payload["result"]["intent"] == "expense"
    assert payload["result"]["expense"]["category"] == "Food"
    assert payload["result"]["investment"] is None


def test_classify_investment_keeps_unicode(capsys) -> None:
    main(["classify", "--text", "đầu tư 2 triệu dài hạn"])

    out = capsys.readouterr().out
    assert "\\u" not in out
    payload = json.loads(out)
    assert payload["result"]["investment"] == {
        "amount": 2_000_000.0,
        "time_horizon": "long-term",
        "risk_tolerance": "moderate",
    }


def test_classify_empty_text(capsys) -> None:
    assert main(["classify", "--text", "   "]) == 1
    assert _output(capsys)["status"] == "error"


def test_chat_records_expense(capsys, monkeypatch) -> None:
    store = MemStorage()
    monkeypatch.setattr(assistant_cli, "get_storage", lambda: store)

    code = main(["chat", "--user-id", "u1", "--text", "coffee 30k", "--no-llm"])

    payload = _output(capsys)
    assert code == 0
    assert payload["result"]["intent"] == "expense"
    assert payload["result"]["expense"]["amount"] == 30000.0
    assert [e.description for e in store.get_expenses("u1")] == ["Coffee"]


def test_chat_no_llm_echoes_prompt(capsys, monkeypatch) -> None:
    store = MemStorage()
    monkeypatch.setattr(assistant_cli, "get_storage", lambda: store)

    code = main(["chat", "--user-id", "u1", "--text", "how do I budget?", "--no-llm"])

    payload = _output(capsys)
    assert code == 0
    assert payload["result"]["intent"] == "general"
    assert "Question: how do I budget?" in payload["result"]["response"]
    assert "Monthly expenses: 0" in payload["result"]["response"]


def test_chat_empty_text_is_error(capsys, monkeypatch) -> None:
    monkeypatch.setattr(assistant_cli, "get_storage", MemStorage)

    assert main(["chat", "--user-id", "u1", "--text", "", "--no-llm"]) == 1
    assert _output(capsys)["error"]["message"] == "Please enter a message"


def test_parser_requires_command() -> None:
    with pytest.raises(SystemExit):
        build_parser().parse_args([])
