# Services Module
from .currency import CurrencyFormatter, CurrencySettings
from .money import to_decimal, round_money

__all__ = ["CurrencyFormatter", "CurrencySettings", "to_decimal", "round_money"]
