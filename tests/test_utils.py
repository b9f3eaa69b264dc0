from datetime import date, datetime

import pytest

from unified_approvals.utils.formatting import currency_formatter, format_amount, format_currency
from unified_approvals.utils.time import iso_date, locale_date, parse_display_date


@pytest.mark.parametrize(
    ("amount", "currency", "expected"),
    [
        (1500, "USD", "$1,500.00"),
        (0.005, "USD", "$0.01"),
        (None, "USD", "$0.00"),
        (-42.5, "usd", "-$42.50"),
        (1234567.891, "EUR", "€1,234,567.89"),
        (1500, "JPY", "¥1,500"),
        (99.5, "CHF", "CHF 99.50"),
    ],
)
def test_format_currency(amount, currency, expected):
    assert format_currency(amount, currency) == expected


def test_currency_formatter_binds_code():
    fmt = currency_formatter("GBP")
    assert fmt(12) == "£12.00"


def test_format_amount():
    assert format_amount(None) == "0"
    assert format_amount(1500.0) == "1500"
    assert format_amount(12.5) == "12.5"


def test_locale_date_is_unpadded():
    assert locale_date(date(2026, 1, 5)) == "1/5/2026"
    assert locale_date(datetime(2026, 10, 19, 23, 59)) == "10/19/2026"


def test_iso_date():
    assert iso_date(datetime(2026, 1, 5, 8, 0)) == "2026-01-05"
    assert iso_date(date(2026, 1, 5)) == "2026-01-05"


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("2024-11-12", date(2024, 11, 12)),
        ("2024-11-12T10:00:00Z", date(2024, 11, 12)),
        ("11/12/2024", date(2024, 11, 12)),
        ("1/5/2026", date(2026, 1, 5)),
        ("13/40/2024", None),
        ("yesterday", None),
        ("", None),
        (None, None),
    ],
)
def test_parse_display_date(text, expected):
    assert parse_display_date(text) == expected
