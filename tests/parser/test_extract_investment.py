# -*- coding: utf-8 -*-
"""
Unit tests for the investment parameter extractor.
"""

import pytest

from finchat.parser.extract_investment import (
    extract_investment_amount,
    extract_investment_parameters,
    extract_risk_tolerance,
    extract_time_horizon,
)
from finchat.parser.types import InvestmentParameters, RiskTolerance, TimeHorizon


class TestInvestmentAmount:

    @pytest.mark.parametrize(
        "text, expected",
        [
            ("invest 10 million", 10_000_000.0),
            ("invest 2 triệu", 2_000_000.0),
            ("đầu tư 3tr", 3_000_000.0),
            ("invest 50k", 50_000.0),
            ("invest 20 thousand", 20_000.0),
            ("savings of 500 dollars", 500.0),
            ("put $1,500 in my portfolio", 1_500.0),
            ("put $5k in stocks", 5_000.0),
            ("tiết kiệm 200000đ", 200_000.0),
        ],
    )
    def test_units(self, text, expected):
        assert extract_investment_amount(text) == expected

    def test_missing_amount_defaults_to_zero(self):
        assert extract_investment_amount("should I invest?") == 0.0

    def test_number_without_unit_is_ignored(self):
        """A bare number (e.g. a year count) is not an amount"""
        assert extract_investment_amount("invest for 5 years") == 0.0

    def test_first_match_only(self):
        assert extract_investment_amount("invest 10k now and 20k later") == 10_000.0

    def test_word_starting_with_unit_letters_is_not_a_unit(self):
        """2 trillion must not read as 2 tr"""
        assert extract_investment_amount("a 2 trillion market") == 0.0


class TestTimeHorizon:

    @pytest.mark.parametrize(
        "text, expected",
        [
            ("short term plan", TimeHorizon.SHORT_TERM),
            ("short-term", TimeHorizon.SHORT_TERM),
            ("Medium Term", TimeHorizon.MEDIUM_TERM),
            ("long-term growth", TimeHorizon.LONG_TERM),
            ("đầu tư ngắn hạn", TimeHorizon.SHORT_TERM),
            ("đầu tư dài hạn", TimeHorizon.LONG_TERM),
            ("no horizon here", TimeHorizon.MEDIUM_TERM),
        ],
    )
    def test_horizon(self, text, expected):
        assert extract_time_horizon(text) == expected


class TestRiskTolerance:

    @pytest.mark.parametrize(
        "text, expected",
        [
            ("I'm conservative", RiskTolerance.CONSERVATIVE),
            ("AGGRESSIVE growth", RiskTolerance.AGGRESSIVE),
            ("moderate risk", RiskTolerance.MODERATE),
            ("muốn an toàn", RiskTolerance.CONSERVATIVE),
            ("chấp nhận mạo hiểm", RiskTolerance.AGGRESSIVE),
            ("nothing said", RiskTolerance.MODERATE),
        ],
    )
    def test_risk(self, text, expected):
        assert extract_risk_tolerance(text) == expected


def test_parameters_always_fully_populated():
    assert extract_investment_parameters("invest") == InvestmentParameters()


def test_parameters_combined():
    params = extract_investment_parameters("invest 10 million, long term, aggressive")
    assert params == InvestmentParameters(
        amount=10_000_000.0,
        time_horizon=TimeHorizon.LONG_TERM,
        risk_tolerance=RiskTolerance.AGGRESSIVE,
    )
