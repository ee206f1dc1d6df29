"""
Signed session tokens and password hashing.

Token format: ``<user_id>:<issued_at>:<hmac_sha256 hex>``.
Password format: ``<salt>:<pbkdf2_sha256 hex>``.
"""

from __future__ import annotations

import hashlib
import hmac
import secrets
import time
from typing import Optional

PBKDF2_ITERATIONS = 100_000


def hash_password(password: str, salt: Optional[str] = None) -> str:
    salt = salt or secrets.token_hex(16)
    digest = hashlib.pbkdf2_hmac(
        "sha256", password.encode(), salt.encode(), PBKDF2_ITERATIONS
    )
    return salt + ":" + digest.hex()


def check_password(password: str, stored: str) -> bool:
    salt, sep, _ = stored.partition(":")
    if not sep:
        return False
    return hmac.compare_digest(hash_password(password, salt), stored)


def _sign(payload: str, secret: str) -> str:
    return hmac.new(secret.encode(), payload.encode(), "sha256").hexdigest()


def make_session_token(user_id: int, secret: str, issued_at: Optional[float] = None) -> str:
    """Return a signed token identifying user_id."""
    issued = int(issued_at if issued_at is not None else time.time())
    payload = f"{user_id}:{issued}"
    return payload + ":" + _sign(payload, secret)


def read_session_token(
    token: Optional[str],
    secret: str,
    max_age_seconds: int,
    now: Optional[float] = None,
) -> Optional[int]:
    """Return the user id carried by a valid, unexpired token; None otherwise."""
    if not token:
        return None
    payload, sep, signature = token.rpartition(":")
    if not sep or not payload:
        return None
    if not hmac.compare_digest(signature, _sign(payload, secret)):
        return None
    user_part, _, issued_part = payload.partition(":")
    try:
        user_id = int(user_part)
        issued = int(issued_part)
    except ValueError:
        return None
    current = now if now is not None else time.time()
    if current - issued > max_age_seconds:
        return None
    return user_id
