"""Security primitives for password workflows."""

from __future__ import annotations

import base64
import hashlib
import hmac
import secrets

HASH_ALGORITHM = "pbkdf2_sha256"


def hash_password(password: str, iterations: int = 240000, salt: str | None = None) -> str:
    """Return a salted PBKDF2 hash encoded as ``algorithm$iterations$salt$digest``."""
    salt = salt or secrets.token_hex(16)
    digest = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt.encode("utf-8"), iterations)
    encoded = base64.b64encode(digest).decode("ascii")
    return f"{HASH_ALGORITHM}${iterations}${salt}${encoded}"


def verify_password(password: str, hashed_password: str) -> bool:
    """Constant-time comparison for hashed password values."""
    try:
        algorithm, iterations, salt, _ = hashed_password.split("$", 3)
    except ValueError:
        return False
    if algorithm != HASH_ALGORITHM:
        return False
    candidate = hash_password(password=password, iterations=int(iterations), salt=salt)
    return hmac.compare_digest(candidate, hashed_password)
