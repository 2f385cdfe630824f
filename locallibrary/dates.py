from __future__ import annotations

from datetime import date


def format_date(value: date | None) -> str:
    """Medium display format, e.g. 'Jun 6, 1973'. Empty for missing dates."""
    if value is None:
        return ""
    return f"{value:%b} {value.day}, {value.year}"


def iso_date(value: date | None) -> str:
    """YYYY-MM-DD for <input type="date"> values."""
    return value.isoformat() if value else ""


def parse_stored_date(value: str | date | None) -> date | None:
    """Convert a date column read back from SQLite."""
    if value is None or value == "":
        return None
    if isinstance(value, date):
        return value
    return date.fromisoformat(value)
