"""Deterministic validators and sanitizers used across services."""

from __future__ import annotations

import re
from datetime import date
from decimal import Decimal

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def sanitize_text(value: str | None, max_len: int = 20000) -> str:
    """Sanitize free-form content before persistence/display."""
    if value is None:
        return ""
    cleaned = str(value).replace("\x00", "").strip()
    cleaned = cleaned[:max_len]
    return cleaned


def is_valid_email(value: str | None) -> bool:
    if not value:
        return False
    return bool(EMAIL_PATTERN.match(value.strip()))


def is_valid_date_range(start_date: date | None, end_date: date | None) -> bool:
    """A contract period is valid when both ends exist and start <= end."""
    if start_date is None or end_date is None:
        return False
    return start_date <= end_date


def is_non_negative_amount(amount: Decimal | float | int | None) -> bool:
    if amount is None:
        return False
    return Decimal(str(amount)) >= 0


def normalize_thresholds(thresholds: list[int] | tuple[int, ...]) -> list[int]:
    """Drop duplicates while keeping caller order; thresholds are an unordered set."""
    seen: set[int] = set()
    result: list[int] = []
    for threshold in thresholds:
        value = int(threshold)
        if value < 0:
            raise ValueError("thresholds must be non-negative")
        if value not in seen:
            seen.add(value)
            result.append(value)
    return result
