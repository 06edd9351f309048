"""Tests for cost string parsing and currency formatting."""
import math

import pytest

from itinerary_planner.currency import format_currency, parse_currency


@pytest.mark.parametrize(
    "text, amount, code",
    [
        ("50000 IDR", 50000.0, "IDR"),
        ("150 USD", 150.0, "USD"),
        ("12,5 eur", 12.5, "EUR"),
        ("1.500.000 IDR", 1500000.0, "IDR"),
        ("1.234,5 jpy", 1234.5, "JPY"),
        ("3000", 3000.0, "IDR"),
    ],
)
def test_parse_well_formed_costs(text, amount, code):
    parsed = parse_currency(text)
    assert math.isclose(parsed.amount, amount)
    assert parsed.currency_code == code
    assert parsed.recognized


@pytest.mark.parametrize("text", ["", "   ", None])
def test_parse_empty_cost_defaults(text):
    parsed = parse_currency(text)
    assert parsed.amount == 0
    assert parsed.currency_code == "IDR"
    assert not parsed.recognized


def test_parse_bare_period_reads_as_thousands_separator():
    assert parse_currency("1.234").amount == 1234.0


def test_parse_without_digits_is_zero_and_unrecognized():
    parsed = parse_currency("Gratis")
    assert parsed.amount == 0
    assert parsed.currency_code == "GRA"
    assert parsed.recognized is False


def test_parse_uses_leading_number_when_several_decimals():
    # "1,2,3" normalizes to "1.2.3"; only the leading number counts
    assert parse_currency("1,2,3 EUR").amount == 1.2


def test_format_idr_uses_indonesian_grouping():
    out = format_currency(50000, "IDR")
    assert out.startswith("Rp")
    assert "50.000" in out
    assert ",00" not in out


def test_format_keeps_up_to_two_fraction_digits():
    assert "1.234,5" in format_currency(1234.5, "IDR")
    assert "1,26" in format_currency(1.256, "USD")


def test_format_defaults_to_idr():
    assert format_currency(1000).startswith("Rp")


@pytest.mark.parametrize("amount", [None, float("nan")])
def test_format_missing_amount(amount):
    assert format_currency(amount, "IDR") == "N/A"


def test_format_unknown_currency_falls_back_to_plain_text():
    assert format_currency(1500, "XYZ") == "1500 XYZ"
    assert format_currency(12.5, "QQ") == "12.5 QQ"


def test_format_follows_configured_locale_layout(monkeypatch):
    monkeypatch.setenv("CURRENCY_LOCALE", "de_DE")
    out = format_currency(10, "EUR")
    assert out.startswith("10")
    assert out.endswith("€")
    assert format_currency(1234.5, "EUR").startswith("1.234,5")
