# -*- coding: utf-8 -*-
"""
Parser Error Types

Error codes and user-facing message templates for the expense extractor.
None of these escape `classify()`; they travel inside extraction results.
"""

from enum import Enum


class ParserErrorCode(Enum):
    """Parser error codes"""

    EMPTY_MESSAGE = "empty_message"              # blank utterance
    PATTERN_NO_MATCH = "pattern_no_match"        # no expense pattern matched
    NUMERIC_PARSE_FAILURE = "numeric_parse"      # matched, but the amount token is not a number
    NON_POSITIVE_AMOUNT = "non_positive_amount"  # matched, but the amount is <= 0


ERROR_MESSAGES = {
    ParserErrorCode.EMPTY_MESSAGE: "Please enter a message",
    ParserErrorCode.PATTERN_NO_MATCH: (
        "I couldn't find an expense in that. Try an amount and what it was for, "
        "e.g. \"spent 50 on food\" or \"chi 50k cho ăn trưa\""
    ),
    ParserErrorCode.NUMERIC_PARSE_FAILURE: "The amount \"{value}\" is not a valid number",
    ParserErrorCode.NON_POSITIVE_AMOUNT: "The amount must be greater than zero",
}


class ParserError(Exception):
    """
    Why one pattern (or the whole utterance) did not yield an expense.

    Args:
        code: failure kind
        **params: values for the message template (e.g. value="1.2.3")
    """

    def __init__(self, code: ParserErrorCode, **params):
        self.code = code
        self.params = params
        super().__init__(self.message)

    @property
    def message(self) -> str:
        template = ERROR_MESSAGES.get(self.code, "Could not read an expense from the message")
        return template.format(**self.params)
