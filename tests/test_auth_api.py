from datetime import timedelta

from taskboard.services.auth import create_access_token, resolve_token
from taskboard.errors import Unauthenticated

import pytest


def test_register_returns_token_and_user(client):
    resp = client.post("/api/auth/register",
                       json={"email": "New@Taskboard.io", "password": "pw-123456", "name": " Nia "})
    assert resp.status_code == 201
    body = resp.json()
    assert body["user"]["email"] == "new@taskboard.io"
    assert body["user"]["name"] == "Nia"
    assert resolve_token(body["token"]).id == body["user"]["id"]


def test_register_duplicate_email(client, owner):
    resp = client.post("/api/auth/register",
                       json={"email": owner.email, "password": "pw", "name": "Again"})
    assert resp.status_code == 400
    assert resp.json()["detail"] == "User already exists with this email"


def test_register_missing_name(client):
    resp = client.post("/api/auth/register", json={"email": "x@taskboard.io", "password": "pw"})
    assert resp.status_code == 400
    assert resp.json()["kind"] == "validation"


def test_login_and_profile(client, owner):
    resp = client.post("/api/auth/login", json={"email": owner.email, "password": "s3cret-pass"})
    assert resp.status_code == 200
    token = resp.json()["token"]

    profile = client.get("/api/auth/profile", headers={"Authorization": f"Bearer {token}"})
    assert profile.status_code == 200
    assert profile.json()["id"] == owner.id
    assert profile.json()["email"] == owner.email


def test_login_wrong_password(client, owner):
    resp = client.post("/api/auth/login", json={"email": owner.email, "password": "nope"})
    assert resp.status_code == 401
    assert resp.json()["detail"] == "Invalid email or password"
    assert resp.headers["www-authenticate"] == "Bearer"


def test_missing_token_is_unauthenticated(client):
    resp = client.get("/api/boards")
    assert resp.status_code == 401


def test_garbage_token_is_unauthenticated(client):
    resp = client.get("/api/boards", headers={"Authorization": "Bearer not-a-jwt"})
    assert resp.status_code == 401
    assert resp.json()["kind"] == "unauthenticated"


def test_expired_token_rejected():
    token = create_access_token({"sub": "u1", "email": "u1@taskboard.io"},
                                expires_delta=timedelta(minutes=-1))
    with pytest.raises(Unauthenticated):
        resolve_token(token)


def test_token_without_subject_rejected():
    with pytest.raises(Unauthenticated):
        resolve_token(create_access_token({"email": "u1@taskboard.io"}))


def test_health(client):
    resp = client.get("/api/health")
    assert resp.status_code == 200
    assert resp.json()["status"] == "OK"
