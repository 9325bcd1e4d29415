# -*- coding: utf-8 -*-
"""
Unit tests for extract_amount module.
"""

import pytest

from finchat.parser.extract_amount import parse_amount, unit_multiplier


class TestParseAmount:
    """Tests for parse_amount function."""

    # === Plain numbers ===

    def test_integer(self):
        assert parse_amount("50") == 50.0

    def test_decimal(self):
        assert parse_amount("50.5") == 50.5

    def test_thousands_separator_is_stripped(self):
        """1,250 -> 1250, not 1.25"""
        assert parse_amount("1,250") == 1250.0

    def test_multiple_separators(self):
        assert parse_amount("1,250,000") == 1250000.0

    def test_sentence_final_period(self):
        """spent 50. on food -> token "50." """
        assert parse_amount("50.") == 50.0

    # === Units ===

    @pytest.mark.parametrize("unit", ["k", "K", "nghìn", "ngàn", "thousand"])
    def test_thousands_shorthand(self, unit):
        assert parse_amount("50", unit) == 50000.0

    def test_thousands_shorthand_with_decimal(self):
        assert parse_amount("1.1", "k") == 1100.0

    @pytest.mark.parametrize("unit", ["million", "millions", "triệu", "tr"])
    def test_millions(self, unit):
        assert parse_amount("10", unit) == 10_000_000.0

    @pytest.mark.parametrize("unit", ["$", "dollars", "usd", "đ", "đồng"])
    def test_currency_units_do_not_scale(self, unit):
        assert parse_amount("500", unit) == 500.0

    # === Invalid tokens ===

    @pytest.mark.parametrize("token", ["", "1.2.3", ",", "abc"])
    def test_invalid_token_returns_none(self, token):
        assert parse_amount(token) is None


def test_unit_multiplier_unknown_unit():
    assert unit_multiplier("parsecs") == 1
    assert unit_multiplier(None) == 1
