"""Calendar helpers shared by notification and report code."""

from __future__ import annotations

import math
from datetime import date, datetime, time, timezone

SECONDS_PER_DAY = 86400


def as_utc(value: datetime) -> datetime:
    """Treat naive datetimes as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def end_of_contract(end_date: date | datetime) -> datetime:
    """A date-only end is read as midnight UTC of that day."""
    if isinstance(end_date, datetime):
        return as_utc(end_date)
    return datetime.combine(end_date, time.min, tzinfo=timezone.utc)


def days_until(end_date: date | datetime, now: datetime | None = None) -> int:
    """Whole days until ``end_date``, rounding fractional days up."""
    reference = as_utc(now) if now is not None else datetime.now(timezone.utc)
    delta = end_of_contract(end_date) - reference
    return math.ceil(delta.total_seconds() / SECONDS_PER_DAY)


def month_key(value: date | datetime) -> tuple[int, int]:
    return value.year, value.month


def month_label(key: tuple[int, int]) -> str:
    """``(2026, 3)`` -> ``"Mar 2026"``."""
    year, month = key
    return date(year, month, 1).strftime("%b %Y")
