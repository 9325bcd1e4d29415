# -*- coding: utf-8 -*-
"""finchat local CLI.

Runs the chat classifier and orchestrator from a terminal, printing JSON.

- `classify`: show how a message would be classified (no side effects)
- `chat`: run the full chat flow against the configured storage; with
  `--no-llm` the advice call is skipped and the question that would have
  been sent is echoed instead
"""

from __future__ import annotations

import argparse
import json
import sys
from typing import Any

from finchat.advice import AdviceClient, AdviceContext
from finchat.advice.client import build_user_prompt
from finchat.chat import ChatService
from finchat.parser import classify
from finchat.services.storage import get_storage


class _EchoAdviceClient:
    """Advice stand-in for --no-llm: returns the prompt it would send."""

    def get_advice(self, question: str, context: AdviceContext | None = None) -> str:
        return build_user_prompt(question, context)


def _print_json(payload: dict[str, Any]) -> None:
    sys.stdout.write(json.dumps(payload, ensure_ascii=False))
    sys.stdout.write("\n")


def cmd_classify(args: argparse.Namespace) -> int:
    text = args.text.strip()
    if not text:
        _print_json({"status": "error", "error": {"message": "empty text", "reason": "empty"}})
        return 1

    result = classify(text)
    _print_json({"status": "ok", "result": result.to_dict()})
    return 0


def cmd_chat(args: argparse.Namespace) -> int:
    advice_client = _EchoAdviceClient() if args.no_llm else AdviceClient()
    service = ChatService(get_storage(), advice_client)

    reply = service.handle_message(args.user_id, args.text)
    if reply.is_error:
        _print_json({"status": "error", "error": {"message": reply.error_message, "reason": reply.intent}})
        return 1

    _print_json({"status": "ok", "result": reply.to_dict()})
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="finchat", description="finchat local assistant CLI")
    sub = parser.add_subparsers(dest="command", required=True)

    cls = sub.add_parser("classify", help="Classify a chat message (no side effects)")
    cls.add_argument("--text", required=True)
    cls.set_defaults(func=cmd_classify)

    chat = sub.add_parser("chat", help="Run the chat flow for one message")
    chat.add_argument("--user-id", required=True)
    chat.add_argument("--text", required=True)
    chat.add_argument("--no-llm", action="store_true", help="Never call OpenAI (echo the advice prompt)")
    chat.set_defaults(func=cmd_chat)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    return int(args.func(args))


if __name__ == "__main__":
    raise SystemExit(main())
