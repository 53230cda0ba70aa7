"""Date helpers for stored timestamps and human-readable output."""

import datetime as dt


def utc_now() -> dt.datetime:
    """Current time as an aware UTC datetime."""
    return dt.datetime.now(dt.UTC)


def parse_timestamp(value: str) -> dt.datetime:
    """Parse an ISO 8601 timestamp as stored in DynamoDB."""
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    return dt.datetime.fromisoformat(value)


_ORDINAL_SUFFIXES = {1: "st", 2: "nd", 3: "rd"}


def _ordinal(day: int) -> str:
    if 11 <= day % 100 <= 13:
        return f"{day}th"
    return f"{day}{_ORDINAL_SUFFIXES.get(day % 10, 'th')}"


def format_long_date(value: dt.date) -> str:
    """Format a date for guests, e.g. ``June 1st, 2025``."""
    return f"{value.strftime('%B')} {_ordinal(value.day)}, {value.year}"


def format_activity_timestamp(value: dt.datetime | None) -> str:
    """Format a timestamp for the dashboard feed, e.g. ``01.06.2025 14:30``."""
    if value is None:
        return "N/A"
    return value.strftime("%d.%m.%Y %H:%M")
