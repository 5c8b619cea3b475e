"""Identifier generation helpers."""

from __future__ import annotations

import time
import uuid


def new_record_id() -> str:
    """Millisecond timestamp plus random suffix, unique within one millisecond."""
    return f"{int(time.time() * 1000)}-{uuid.uuid4().hex[:12]}"


def new_trace_id() -> str:
    """Create a UUID4-based trace identifier."""
    return uuid.uuid4().hex
