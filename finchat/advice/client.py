# -*- coding: utf-8 -*-
"""
Advice Client

Wraps the OpenAI chat completions API as a text-in / text-out financial
advisor. Used for investment requests and general questions from chat.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from openai import OpenAI

from finchat import config
from finchat.formatters import format_amount

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "You are a financial advisor. Give helpful advice on personal finance, "
    "budgeting and spending management. Reply in the user's language and "
    "format your answer in clear sections:\n\n"
    "1. Use bullet points (-) for the key points\n"
    "2. Separate sections with blank lines\n"
    "3. Highlight the key numbers and recommendations\n"
    "4. Finish with one short piece of advice"
)

FALLBACK_ANSWER = "Sorry, I can't give advice right now."


class AdviceServiceError(Exception):
    """The advice provider could not answer"""


@dataclass(frozen=True)
class AdviceContext:
    """User totals sent along with the question"""

    expenses: float
    budget: float


def build_user_prompt(question: str, context: Optional[AdviceContext] = None) -> str:
    """
    Build the user message for the advice request.

    Examples:
        >>> build_user_prompt("Should I save?", AdviceContext(expenses=1200, budget=2000))
        'Question: Should I save?\\nContext: Monthly expenses: 1,200, Budget: 2,000'
    """
    if context:
        info = f"Monthly expenses: {format_amount(context.expenses)}, Budget: {format_amount(context.budget)}"
    else:
        info = "No financial information yet"
    return f"Question: {question}\nContext: {info}"


class AdviceClient:
    """
    Financial advice backed by OpenAI.

    Args:
        api_key: OpenAI API key (defaults to OPENAI_API_KEY)
        model: chat model name (defaults to GPT_MODEL)
        client: prebuilt OpenAI client (tests)
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        client: Optional[OpenAI] = None,
    ):
        self.api_key = api_key or config.OPENAI_API_KEY
        self.model = model or config.GPT_MODEL
        self._client = client

    def _get_client(self) -> OpenAI:
        if self._client is None:
            if not self.api_key:
                raise ValueError("OPENAI_API_KEY is not set")
            self._client = OpenAI(api_key=self.api_key)
        return self._client

    def get_advice(self, question: str, context: Optional[AdviceContext] = None) -> str:
        """
        Ask the advice provider one question.

        Args:
            question: user question (possibly enriched with investment parameters)
            context: the user's spending / budget totals, if known

        Returns:
            Advice text (FALLBACK_ANSWER when the model returns nothing)

        Raises:
            ValueError: API key not configured
            AdviceServiceError: the API call failed
        """
        client = self._get_client()

        try:
            completion = client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": SYSTEM_PROMPT},
                    {"role": "user", "content": build_user_prompt(question, context)},
                ],
            )
        except Exception as e:
            logger.error(f"Advice request failed: {e}")
            raise AdviceServiceError(f"Could not get financial advice: {e}") from e

        if not completion.choices:
            logger.warning("Advice response had no choices")
            return FALLBACK_ANSWER

        content = completion.choices[0].message.content
        logger.debug(f"Advice response: {content!r}")
        return content or FALLBACK_ANSWER
