"""Tests covering registration, login, and profile management."""

from __future__ import annotations

from datetime import timedelta

import pytest
from flask.testing import FlaskClient
from flask_jwt_extended import create_access_token, decode_token

from models.user import User

REGISTER_PAYLOAD = {
    "name": "Ada",
    "email": "ada@example.com",
    "password": "secret123",
}


def _register(client: FlaskClient, **overrides):
    return client.post("/api/auth/register", json={**REGISTER_PAYLOAD, **overrides})


def _login(client: FlaskClient, email: str, password: str):
    return client.post("/api/auth/login", json={"email": email, "password": password})


def test_register_returns_token_and_public_fields(client: FlaskClient, app):
    response = _register(client, avatar="https://img.example/ada.png")

    assert response.status_code == 201
    data = response.get_json()
    assert data["token"]
    assert data["user"] == {
        "id": data["user"]["id"],
        "name": "Ada",
        "email": "ada@example.com",
        "role": "reader",
    }

    with app.app_context():
        user = User.query.filter_by(email="ada@example.com").one()
        assert user.avatar == "https://img.example/ada.png"
        assert user.password_hash != "secret123"
        assert decode_token(data["token"])["sub"] == str(user.id)


def test_token_expires_after_seven_days(client: FlaskClient, app):
    token = _register(client).get_json()["token"]

    with app.app_context():
        claims = decode_token(token)

    assert claims["exp"] - claims["iat"] == int(timedelta(days=7).total_seconds())


@pytest.mark.parametrize(
    "overrides",
    [
        {"name": ""},
        {"email": "   "},
        {"password": ""},
        {"email": "not-an-email"},
        {"password": "123"},
        {"name": "n" * 121},
        {"email": "a" * 250 + "@example.com"},
        {"avatar": "https://img.example/" + "a" * 600},
    ],
)
def test_register_validation(client: FlaskClient, overrides):
    response = _register(client, **overrides)

    assert response.status_code == 400
    assert response.get_json()["message"]


def test_register_duplicate_email_conflicts(client: FlaskClient):
    assert _register(client).status_code == 201

    response = _register(client, email="ADA@example.com", name="Other")

    assert response.status_code == 400
    assert response.get_json()["message"] == "User already exists"


def test_register_ignores_requested_role(client: FlaskClient):
    response = _register(client, role="admin")

    assert response.get_json()["user"]["role"] == "reader"


def test_login_returns_fresh_token(client: FlaskClient, make_user):
    make_user("writer@example.com", role="author", password="Writer123")

    response = _login(client, "writer@example.com", "Writer123")

    assert response.status_code == 200
    data = response.get_json()
    assert data["token"]
    assert data["user"]["email"] == "writer@example.com"
    assert data["user"]["role"] == "author"


def test_login_failures_are_indistinguishable(client: FlaskClient, make_user):
    make_user("known@example.com", password="Known123")

    unknown = _login(client, "nobody@example.com", "Known123")
    wrong = _login(client, "known@example.com", "wrong-password")

    assert unknown.status_code == wrong.status_code == 401
    assert unknown.get_json()["message"] == wrong.get_json()["message"] == "Invalid credentials"


@pytest.mark.parametrize(
    "payload",
    [
        {"email": "known@example.com"},
        {"password": "Known123"},
        {"email": 123, "password": "Known123"},
        {"email": ["known@example.com"], "password": "Known123"},
    ],
)
def test_login_requires_both_fields(client: FlaskClient, payload):
    response = client.post("/api/auth/login", json=payload)

    assert response.status_code == 400


def test_me_returns_profile_without_password(client, make_user, auth_headers):
    user_id = make_user("me@example.com", name="Me")

    response = client.get("/api/auth/me", headers=auth_headers(user_id))

    assert response.status_code == 200
    data = response.get_json()
    assert data["id"] == user_id
    assert data["name"] == "Me"
    assert data["bio"] == ""
    assert "password_hash" not in data
    assert "password" not in data


def test_me_requires_token(client):
    response = client.get("/api/auth/me")

    assert response.status_code == 401
    assert response.get_json()["message"] == "Not authorized, no token"


@pytest.mark.parametrize(
    "header",
    ["Bearer not-a-jwt", "Token abc", "Bearer"],
)
def test_me_rejects_malformed_tokens(client, header):
    response = client.get("/api/auth/me", headers={"Authorization": header})

    assert response.status_code == 401


def test_me_rejects_expired_token(client, app, make_user):
    user_id = make_user("old@example.com")
    with app.app_context():
        token = create_access_token(
            identity=str(user_id), expires_delta=timedelta(seconds=-10)
        )

    response = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 401


def test_me_rejects_token_for_missing_user(client, auth_headers):
    response = client.get("/api/auth/me", headers=auth_headers(9999))

    assert response.status_code == 401


def test_update_profile_fields(client, make_user, auth_headers):
    user_id = make_user("profile@example.com", name="Before")

    response = client.put(
        "/api/auth/profile",
        json={"name": "After", "bio": "Hello there", "avatar": "https://img/a.png"},
        headers=auth_headers(user_id),
    )

    assert response.status_code == 200
    data = response.get_json()
    assert data["message"] == "Profile updated successfully"
    assert data["user"]["name"] == "After"
    assert data["user"]["bio"] == "Hello there"
    assert data["user"]["avatar"] == "https://img/a.png"


def test_update_profile_rotates_password(client, make_user, auth_headers):
    user_id = make_user("rotate@example.com", password="OldPass1")

    response = client.put(
        "/api/auth/profile",
        json={"currentPassword": "OldPass1", "newPassword": "NewPass1"},
        headers=auth_headers(user_id),
    )

    assert response.status_code == 200
    assert _login(client, "rotate@example.com", "OldPass1").status_code == 401
    assert _login(client, "rotate@example.com", "NewPass1").status_code == 200


def test_update_profile_wrong_current_password(client, make_user, auth_headers):
    user_id = make_user("wrongpw@example.com", password="OldPass1", name="Keep")

    response = client.put(
        "/api/auth/profile",
        json={"name": "Changed", "currentPassword": "nope", "newPassword": "NewPass1"},
        headers=auth_headers(user_id),
    )

    assert response.status_code == 401
    me = client.get("/api/auth/me", headers=auth_headers(user_id)).get_json()
    assert me["name"] == "Keep"
    assert _login(client, "wrongpw@example.com", "OldPass1").status_code == 200


def test_update_profile_short_new_password(client, make_user, auth_headers):
    user_id = make_user("short@example.com", password="OldPass1")

    response = client.put(
        "/api/auth/profile",
        json={"currentPassword": "OldPass1", "newPassword": "abc"},
        headers=auth_headers(user_id),
    )

    assert response.status_code == 400
    assert _login(client, "short@example.com", "OldPass1").status_code == 200


def test_update_profile_with_empty_body_is_noop(client, make_user, auth_headers):
    user_id = make_user("noop@example.com", name="Same")

    response = client.put("/api/auth/profile", json={}, headers=auth_headers(user_id))

    assert response.status_code == 200
    user = response.get_json()["user"]
    assert user["name"] == "Same"
    assert user["email"] == "noop@example.com"


def test_update_profile_rejects_overlong_name(client, make_user, auth_headers):
    user_id = make_user("long@example.com", name="Short")

    response = client.put(
        "/api/auth/profile", json={"name": "x" * 121}, headers=auth_headers(user_id)
    )

    assert response.status_code == 400
    me = client.get("/api/auth/me", headers=auth_headers(user_id)).get_json()
    assert me["name"] == "Short"
