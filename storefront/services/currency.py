"""
Currency Formatting Service

Formats amounts the way the WooCommerce store is configured to show them
(symbol, symbol position, separators, decimals). The formatter is built from
settings once and passed to whoever renders prices; there is no module-level
"current formatter".
"""
import html
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Optional

from storefront.logging import get_logger
from storefront.services.money import Number, round_money, to_decimal

logger = get_logger(__name__)

CURRENCY_POSITIONS = ("left", "right", "left_space", "right_space")


@dataclass(frozen=True)
class CurrencySettings:
    """Store currency display settings."""

    code: str = "USD"
    symbol: str = "$"
    position: str = "left"
    thousand_separator: str = ","
    decimal_separator: str = "."
    decimals: int = 2

    @classmethod
    def from_payload(cls, payload: Optional[dict[str, Any]]) -> "CurrencySettings":
        """
        Build settings from the settings endpoint payload.

        Accepts both the long keys (currencyCode, currencySymbol, ...) and the
        short ones (currency, symbol, position). Anything unusable falls back
        to the USD defaults.
        """
        default = cls()
        if not isinstance(payload, dict):
            return default

        def pick(*keys: str) -> Any:
            for key in keys:
                if payload.get(key) is not None:
                    return payload[key]
            return None

        code = str(pick("currencyCode", "currency") or default.code).upper()
        symbol = str(pick("currencySymbol", "symbol") or default.symbol)

        position = str(pick("currencyPosition", "position") or default.position).lower()
        if position not in CURRENCY_POSITIONS:
            position = default.position

        thousand = pick("thousandSeparator", "thousand_separator")
        decimal_sep = pick("decimalSeparator", "decimal_separator")

        raw_decimals = pick("decimals", "currencyDecimals")
        try:
            decimals = int(float(raw_decimals)) if raw_decimals is not None else default.decimals
        except (TypeError, ValueError):
            decimals = default.decimals
        if decimals < 0:
            decimals = default.decimals

        return cls(
            code=code,
            symbol=symbol,
            position=position,
            thousand_separator=default.thousand_separator if thousand is None else str(thousand),
            decimal_separator=default.decimal_separator if decimal_sep is None else str(decimal_sep),
            decimals=decimals,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "currencyCode": self.code,
            "currencySymbol": self.symbol,
            "currencyPosition": self.position,
            "thousandSeparator": self.thousand_separator,
            "decimalSeparator": self.decimal_separator,
            "decimals": self.decimals,
        }


FALLBACK_CURRENCY = CurrencySettings()


def decode_symbol(symbol: Optional[str], code: str) -> str:
    """Decode HTML entities ("&#2547;", "&nbsp;") and normalize spaces."""
    decoded = html.unescape(symbol or "")
    return (decoded or code).replace("\u00a0", " ").strip()


class CurrencyFormatter:
    """Formats amounts for one set of currency settings."""

    def __init__(self, settings: CurrencySettings = FALLBACK_CURRENCY):
        self.settings = settings
        self.symbol = decode_symbol(settings.symbol, settings.code)

    @property
    def currency(self) -> str:
        return self.settings.code

    def _format_number(self, amount: Decimal) -> str:
        s = self.settings
        rounded = round_money(amount, s.decimals)
        integer_part, _, fraction = f"{rounded:,.{s.decimals}f}".partition(".")
        integer_part = integer_part.replace(",", s.thousand_separator)
        if s.decimals > 0:
            return f"{integer_part}{s.decimal_separator}{fraction}"
        return integer_part

    def format(self, amount: Number) -> str:
        """
        Format an amount with symbol and separators.

        Non-numeric and non-finite input is formatted as zero; the minus sign
        goes in front of the symbol.
        """
        value = to_decimal(amount)
        is_negative = value < 0
        numeric = self._format_number(abs(value))

        position = self.settings.position
        if position == "left_space":
            formatted = f"{self.symbol} {numeric}"
        elif position == "right":
            formatted = f"{numeric}{self.symbol}"
        elif position == "right_space":
            formatted = f"{numeric} {self.symbol}"
        else:
            formatted = f"{self.symbol}{numeric}"

        return f"-{formatted}" if is_negative else formatted

    __call__ = format
