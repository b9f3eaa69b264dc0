"""Currency formatting used by feed projections, details and exports."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Callable

CurrencyFormatter = Callable[[float | None], str]

_CURRENCY_SYMBOLS = {
    "USD": "$",
    "EUR": "€",
    "GBP": "£",
    "JPY": "¥",
    "INR": "₹",
    "CAD": "CA$",
    "AUD": "A$",
}

# ISO 4217 currencies without minor units.
_ZERO_DECIMAL = frozenset({"JPY", "KRW", "VND"})


def format_currency(amount: float | None, currency: str = "USD") -> str:
    """Format an amount in en-US style, e.g. ``$1,500.00``.

    A missing amount formats as zero.
    """
    code = currency.upper()
    places = 0 if code in _ZERO_DECIMAL else 2
    value = Decimal(str(amount if amount is not None else 0))
    quantum = Decimal(1).scaleb(-places)
    value = value.quantize(quantum, rounding=ROUND_HALF_UP)
    sign = "-" if value < 0 else ""
    body = f"{abs(value):,.{places}f}"
    symbol = _CURRENCY_SYMBOLS.get(code)
    if symbol is None:
        return f"{sign}{code} {body}"
    return f"{sign}{symbol}{body}"


def currency_formatter(currency: str = "USD") -> CurrencyFormatter:
    def _format(amount: float | None) -> str:
        return format_currency(amount, currency)

    return _format


def format_amount(amount: float | None) -> str:
    """Plain numeric rendering for exports; missing amounts become ``0``."""
    if amount is None:
        return "0"
    if float(amount).is_integer():
        return str(int(amount))
    return str(amount)
