"""Tests for the auth API: register, login, logout, me."""

from __future__ import annotations

import sys
from pathlib import Path

_backend = Path(__file__).resolve().parent.parent
if str(_backend) not in sys.path:
    sys.path.insert(0, str(_backend))

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import func, select

from core.config import get_settings
from main import app
from models.prediction import Prediction


def _client() -> AsyncClient:
    return AsyncClient(transport=ASGITransport(app=app), base_url="http://test")


@pytest.mark.asyncio
async def test_register_creates_one_prediction_per_match(world, test_db):
    async with _client() as client:
        r = await client.post(
            "/api/v1/auth/register",
            json={"username": "carol", "password": "secret123"},
        )
    assert r.status_code == 201
    data = r.json()
    assert data["user"]["username"] == "carol"
    assert data["token"]
    assert get_settings().session_cookie_name in r.cookies

    async with test_db.session() as session:
        count = await session.scalar(
            select(func.count()).select_from(Prediction).where(Prediction.user_id == data["user"]["id"])
        )
    assert count == 9


@pytest.mark.asyncio
async def test_register_duplicate_username(world):
    async with _client() as client:
        r = await client.post(
            "/api/v1/auth/register",
            json={"username": "alice", "password": "secret123"},
        )
    assert r.status_code == 409


@pytest.mark.asyncio
async def test_register_validates_body(test_db):
    async with _client() as client:
        r = await client.post("/api/v1/auth/register", json={"username": "dan", "password": "123"})
    assert r.status_code == 422


@pytest.mark.asyncio
async def test_login_cookie_grants_access(test_db):
    async with _client() as client:
        await client.post("/api/v1/auth/register", json={"username": "erin", "password": "secret123"})
        client.cookies.clear()

        bad = await client.post("/api/v1/auth/login", json={"username": "erin", "password": "wrong-pass"})
        assert bad.status_code == 401

        r = await client.post("/api/v1/auth/login", json={"username": "erin", "password": "secret123"})
        assert r.status_code == 200
        me = await client.get("/api/v1/auth/me")
        assert me.status_code == 200
        assert me.json()["user"]["username"] == "erin"

        game = await client.get("/api/v1/game")
        assert game.status_code == 200
        assert game.json() == {"groups": []}


@pytest.mark.asyncio
async def test_logout_clears_cookie(test_db):
    async with _client() as client:
        await client.post("/api/v1/auth/register", json={"username": "finn", "password": "secret123"})
        r = await client.post("/api/v1/auth/logout")
        assert r.status_code == 200
        assert (await client.get("/api/v1/auth/me")).status_code == 401


@pytest.mark.asyncio
async def test_health_and_version():
    async with _client() as client:
        health = await client.get("/health")
        version = await client.get("/api/v1/meta/version")
    assert health.json() == {"status": "ok"}
    assert version.json()["version"] == "1.0.0"
