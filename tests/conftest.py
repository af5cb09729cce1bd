"""
Shared fixtures: every test gets its own SQLite file, upload dir and
JWT secret, and outgoing mail is captured instead of sent.
"""
from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

import api.users
from config import settings
from main import app

TEST_SECRET = "test-secret-that-is-long-enough-for-hs256"


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch):
    monkeypatch.setattr(settings, "database_url", f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    monkeypatch.setattr(settings, "upload_dir", str(tmp_path / "uploads"))
    monkeypatch.setattr(settings, "jwt_secret", TEST_SECRET)
    yield settings


@pytest.fixture()
def sent_mail(monkeypatch):
    """Record (email, token) for every verification email the API schedules."""
    outbox: list[tuple[str, str]] = []

    def _record(email: str, token: str) -> bool:
        outbox.append((email, token))
        return True

    monkeypatch.setattr(api.users, "send_verification_email", _record)
    return outbox


@pytest.fixture()
def client(sent_mail):
    # the context manager runs startup (create tables) and shutdown (dispose engine)
    with TestClient(app, raise_server_exceptions=False) as c:
        yield c


def signup(client: TestClient, username="ana", email="ana@x.com", password="secret1", **extra) -> str:
    r = client.post("/api/users/signup", json={"username": username, "email": email, "password": password, **extra})
    assert r.status_code == 200, r.text
    return r.json()["token"]


def auth_headers(token: str) -> dict[str, str]:
    return {"x-auth-token": token}
