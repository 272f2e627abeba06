"""Tests for price string parsing."""

import pytest

from zocli.stats.amount import normalize_currency, parse_amount, round2


@pytest.mark.parametrize(
    "text, value, currency",
    [
        ("₹123.45", 123.45, "₹"),
        ("Rs. 100", 100.0, "₹"),
        ("1,234.56", 1234.56, ""),
        ("$50", 50.0, "$"),
        ("50 USD", 50.0, "USD"),
        ("₹1,50,000", 150000.0, "₹"),
        ("INR 75", 75.0, "₹"),
        ("  ₹ 99  ", 99.0, "₹"),
    ],
)
def test_parse_amount(text, value, currency):
    assert parse_amount(text) == (value, currency)


def test_parse_amount_invalid():
    assert parse_amount("invalid") == (0.0, "")


def test_parse_amount_empty():
    assert parse_amount("") == (0.0, "")
    assert parse_amount(None) == (0.0, "")


def test_parse_amount_prefix_preferred_over_suffix():
    assert parse_amount("$50USD") == (50.0, "$")


def test_parse_amount_fallback_with_label():
    """Text around the amount falls back to the first digit run."""
    value, currency = parse_amount("Total: ₹ 1,234")
    assert value == 1234.0
    assert currency == "₹"


def test_parse_amount_malformed_number_is_zero():
    value, currency = parse_amount("₹1.2.3")
    assert value == 0.0
    assert currency == "₹"


class TestNormalizeCurrency:
    def test_rupee_variants(self):
        assert normalize_currency("Rs") == "₹"
        assert normalize_currency("rs.") == "₹"
        assert normalize_currency("RS..") == "₹"
        assert normalize_currency("inr") == "₹"
        assert normalize_currency("₹") == "₹"

    def test_passthrough(self):
        assert normalize_currency("$") == "$"
        assert normalize_currency("EUR") == "EUR"

    def test_empty(self):
        assert normalize_currency("  ") == ""


class TestRound2:
    def test_half_away_from_zero(self):
        assert round2(0.125) == 0.13
        assert round2(-0.125) == -0.13

    def test_plain(self):
        assert round2(120.0) == 120.0
        assert round2(33.333333) == 33.33
