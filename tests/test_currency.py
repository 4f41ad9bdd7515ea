"""
Tests for money helpers and currency formatting
"""
from decimal import Decimal

import pytest

from storefront.services.currency import (
    FALLBACK_CURRENCY,
    CurrencyFormatter,
    CurrencySettings,
    decode_symbol,
)
from storefront.services.money import discount_percent, round_money, to_decimal, to_float


class TestMoney:
    @pytest.mark.parametrize("value,expected", [
        ("10.50", Decimal("10.50")),
        (3, Decimal("3")),
        (None, Decimal("0")),
        ("abc", Decimal("0")),
        (float("nan"), Decimal("0")),
        (float("inf"), Decimal("0")),
        (True, Decimal("0")),
    ])
    def test_to_decimal(self, value, expected):
        assert to_decimal(value) == expected

    def test_round_money_half_up(self):
        assert round_money("2.345") == Decimal("2.35")
        assert round_money("2.5", 0) == Decimal("3")

    def test_to_float(self):
        assert to_float(Decimal("19.99")) == 19.99

    @pytest.mark.parametrize("regular,sale,expected", [
        ("100", "80", 20),
        ("30", "20", 33),
        ("100", "100", 0),
        ("0", "10", 0),
        ("100", "120", 0),
    ])
    def test_discount_percent(self, regular, sale, expected):
        assert discount_percent(regular, sale) == expected


class TestCurrencySettings:
    def test_defaults(self):
        assert FALLBACK_CURRENCY.code == "USD"
        assert FALLBACK_CURRENCY.symbol == "$"

    def test_from_long_keys(self):
        settings = CurrencySettings.from_payload({
            "currencyCode": "eur",
            "currencySymbol": "€",
            "currencyPosition": "right_space",
            "thousandSeparator": ".",
            "decimalSeparator": ",",
            "decimals": "2",
        })

        assert settings.code == "EUR"
        assert settings.position == "right_space"
        assert settings.thousand_separator == "."

    def test_from_short_keys(self):
        settings = CurrencySettings.from_payload({"currency": "BDT", "symbol": "&#2547;", "position": "left"})

        assert settings.code == "BDT"
        assert settings.symbol == "&#2547;"

    @pytest.mark.parametrize("payload", [None, [], "USD", {}])
    def test_unusable_payload_falls_back(self, payload):
        assert CurrencySettings.from_payload(payload) == FALLBACK_CURRENCY

    def test_invalid_position_and_decimals(self):
        settings = CurrencySettings.from_payload({"position": "middle", "decimals": -1})

        assert settings.position == "left"
        assert settings.decimals == 2

    def test_to_dict_round_trips_payload(self):
        settings = CurrencySettings(code="JPY", symbol="¥", decimals=0)

        assert CurrencySettings.from_payload(settings.to_dict()) == settings


class TestCurrencyFormatter:
    def test_default_format(self):
        assert CurrencyFormatter().format(1234.5) == "$1,234.50"

    @pytest.mark.parametrize("position,expected", [
        ("left", "€1.234,50"),
        ("left_space", "€ 1.234,50"),
        ("right", "1.234,50€"),
        ("right_space", "1.234,50 €"),
    ])
    def test_positions_and_separators(self, position, expected):
        settings = CurrencySettings(
            code="EUR", symbol="€", position=position, thousand_separator=".", decimal_separator=",",
        )

        assert CurrencyFormatter(settings).format("1234.5") == expected

    def test_zero_decimals(self):
        formatter = CurrencyFormatter(CurrencySettings(code="JPY", symbol="¥", decimals=0))

        assert formatter.format(1999.6) == "¥2,000"

    def test_html_entity_symbol(self):
        formatter = CurrencyFormatter(CurrencySettings(code="BDT", symbol="&#2547;", position="left_space"))

        assert formatter.format(50) == "৳ 50.00"

    def test_negative_amount(self):
        assert CurrencyFormatter()(-5) == "-$5.00"

    def test_non_numeric_formats_as_zero(self):
        assert CurrencyFormatter().format("oops") == "$0.00"

    def test_currency_code(self):
        assert CurrencyFormatter(CurrencySettings(code="GBP", symbol="£")).currency == "GBP"

    def test_decode_symbol(self):
        assert decode_symbol("&euro;", "EUR") == "€"
        assert decode_symbol("Rs&nbsp;", "INR") == "Rs"
        assert decode_symbol("", "CHF") == "CHF"
