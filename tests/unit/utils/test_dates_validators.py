from __future__ import annotations

from datetime import date, datetime, timezone

import pytest

from app.core.security import hash_password, verify_password
from app.utils.dates import days_until, month_label
from app.utils.ids import new_record_id
from app.utils.validators import is_valid_email, normalize_thresholds, sanitize_text


def test_days_until_rounds_partial_days_up():
    now = datetime(2026, 3, 1, 9, 0, tzinfo=timezone.utc)
    assert days_until(date(2026, 3, 8), now=now) == 7
    assert days_until(date(2026, 3, 1), now=now) == 0
    assert days_until(date(2026, 2, 28), now=now) == -1


def test_days_until_exact_midnight():
    now = datetime(2026, 3, 1, tzinfo=timezone.utc)
    assert days_until(date(2026, 3, 31), now=now) == 30


def test_days_until_treats_naive_now_as_utc():
    assert days_until(date(2026, 3, 8), now=datetime(2026, 3, 1, 9, 0)) == 7


def test_month_label():
    assert month_label((2026, 3)) == "Mar 2026"


def test_normalize_thresholds_dedupes_and_rejects_negative():
    assert normalize_thresholds([7, 30, 7, 15]) == [7, 30, 15]
    with pytest.raises(ValueError):
        normalize_thresholds([7, -1])


def test_sanitize_text_strips_null_and_trims():
    assert sanitize_text("  hello\x00world  ") == "helloworld"


def test_email_validation():
    assert is_valid_email("ops@pacta.local")
    assert not is_valid_email("not-an-email")
    assert not is_valid_email(None)


def test_record_ids_are_unique():
    assert len({new_record_id() for _ in range(500)}) == 500


def test_password_hash_roundtrip():
    hashed = hash_password("correct horse", iterations=1000)
    assert hashed.startswith("pbkdf2_sha256$1000$")
    assert "correct horse" not in hashed
    assert verify_password("correct horse", hashed)
    assert not verify_password("wrong horse", hashed)
    assert not verify_password("correct horse", "garbage")
