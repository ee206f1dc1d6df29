"""Unit tests for session tokens and password hashing."""

from __future__ import annotations

import sys
from pathlib import Path

_backend = Path(__file__).resolve().parent.parent.parent
if str(_backend) not in sys.path:
    sys.path.insert(0, str(_backend))

from core.session import check_password, hash_password, make_session_token, read_session_token

SECRET = "s3cret"


def test_token_roundtrip():
    token = make_session_token(42, SECRET, issued_at=1_000)
    assert read_session_token(token, SECRET, max_age_seconds=60, now=1_030) == 42


def test_token_expired():
    token = make_session_token(42, SECRET, issued_at=1_000)
    assert read_session_token(token, SECRET, max_age_seconds=60, now=1_061) is None


def test_token_wrong_secret():
    token = make_session_token(42, SECRET, issued_at=1_000)
    assert read_session_token(token, "other", max_age_seconds=60, now=1_001) is None


def test_token_tampered_user():
    token = make_session_token(42, SECRET, issued_at=1_000)
    forged = "43" + token[2:]
    assert read_session_token(forged, SECRET, max_age_seconds=60, now=1_001) is None


def test_token_garbage():
    assert read_session_token(None, SECRET, 60) is None
    assert read_session_token("", SECRET, 60) is None
    assert read_session_token("nonsense", SECRET, 60) is None


def test_password_hash_and_check():
    stored = hash_password("hunter22")
    assert check_password("hunter22", stored)
    assert not check_password("hunter23", stored)
    assert not check_password("hunter22", "no-separator")
