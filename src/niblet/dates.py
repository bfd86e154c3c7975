"""Datetime helpers."""

from datetime import UTC, datetime


def as_utc(value: datetime) -> datetime:
    """Return ``value`` as an aware datetime, reading naive values as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value
