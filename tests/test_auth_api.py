"""
Login and email confirmation routes.
"""
from __future__ import annotations

import pytest

from conftest import auth_headers, signup
from services.auth import verify_token


@pytest.mark.parametrize("prefix", ["/api/auth", "/auth"])
def test_login_issues_session_for_right_password(client, prefix):
    uid = verify_token(signup(client))
    r = client.post(f"{prefix}/login", json={"email": "ana@x.com", "password": "secret1"})
    assert r.status_code == 200
    assert verify_token(r.json()["token"]) == uid


@pytest.mark.parametrize(
    "email,password",
    [("ana@x.com", "wrong-one"), ("nobody@x.com", "secret1")],
)
def test_login_rejects_bad_credentials(client, email, password):
    signup(client)
    r = client.post("/api/auth/login", json={"email": email, "password": password})
    assert r.status_code == 400
    assert r.json() == {"errors": [{"msg": "Invalid Credentials"}]}


def test_verify_email_marks_account_verified(client, sent_mail):
    token = signup(client)
    uid = verify_token(token)
    email, vtoken = sent_mail[0]

    r = client.get("/auth/verify-email", params={"email": email, "token": vtoken})
    assert r.status_code == 200
    assert r.json() == {"msg": "Email verified"}

    account = client.get(f"/api/users/{uid}", headers=auth_headers(token)).json()
    assert account["verified"] is True
    # confirming does not rotate the token
    assert account["verificationToken"] == vtoken

    # the link stays usable
    assert client.get("/api/auth/verify-email", params={"email": email, "token": vtoken}).status_code == 200


def test_verify_email_with_wrong_token(client, sent_mail):
    token = signup(client)
    uid = verify_token(token)

    r = client.get("/auth/verify-email", params={"email": "ana@x.com", "token": "nope"})
    assert r.status_code == 400
    assert r.json() == {"errors": [{"msg": "Invalid or expired verification link"}]}
    assert client.get(f"/api/users/{uid}", headers=auth_headers(token)).json()["verified"] is False


def test_verify_email_requires_both_params(client):
    r = client.get("/auth/verify-email", params={"email": "ana@x.com"})
    assert r.status_code == 400
    assert r.json()["errors"][0]["path"] == "token"
    assert r.json()["errors"][0]["location"] == "query"
