"""Time helpers."""

from __future__ import annotations

from datetime import date, datetime


def local_now() -> datetime:
    return datetime.now()


def locale_date(value: date | datetime) -> str:
    """Render a date the way the console's display layer does (M/D/YYYY)."""
    return f"{value.month}/{value.day}/{value.year}"


def iso_date(value: date | datetime) -> str:
    if isinstance(value, datetime):
        value = value.date()
    return value.isoformat()


def parse_display_date(text: str | None) -> date | None:
    """Parse an ISO (YYYY-MM-DD) or locale (M/D/YYYY) date string.

    Returns None for empty or unrecognised input.
    """
    if not text:
        return None
    candidate = text.strip()
    try:
        return date.fromisoformat(candidate[:10])
    except ValueError:
        pass
    parts = candidate.split("/")
    if len(parts) == 3:
        try:
            month, day, year = (int(p) for p in parts)
            return date(year, month, day)
        except ValueError:
            return None
    return None
