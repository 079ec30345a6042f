"""
Tests for signup, login and bearer-token authentication.
"""

from datetime import timedelta

import jwt

from domain.models.base import utcnow
from test_fixtures import DEFAULT_PASSWORD, TEST_SETTINGS, signup_user, unique_email


# =============================================================================
# SIGNUP
# =============================================================================


def test_signup_returns_token_and_user(client):
    email = unique_email("amy")
    response = client.post(
        "/api/auth/signup",
        json={"name": "  Amy Park ", "email": email, "password": DEFAULT_PASSWORD},
    )

    assert response.status_code == 201
    body = response.json()
    assert body["token"]
    assert body["user"]["name"] == "Amy Park"
    assert body["user"]["email"] == email
    assert "password" not in body["user"]
    assert "passwordHash" not in body["user"]


def test_signup_stores_a_hash_not_the_password(client, mongo_db):
    email = unique_email("hash")
    signup_user(client, email=email)

    stored = mongo_db.users.find_one({"email": email})
    assert stored["password_hash"] != DEFAULT_PASSWORD
    assert stored["password_hash"].startswith("$2")


def test_signup_duplicate_email_is_rejected(client):
    email = unique_email("dup")
    signup_user(client, email=email)

    response = client.post(
        "/api/auth/signup",
        json={"name": "Someone Else", "email": email, "password": DEFAULT_PASSWORD},
    )

    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    assert body["message"] == "User already exists"


def test_signup_email_is_case_insensitive(client):
    email = unique_email("case")
    signup_user(client, email=email)

    response = client.post(
        "/api/auth/signup",
        json={"name": "Shouty", "email": email.upper(), "password": DEFAULT_PASSWORD},
    )

    assert response.status_code == 400


def test_signup_rejects_short_password_and_bad_email(client):
    response = client.post(
        "/api/auth/signup",
        json={"name": "Bad Input", "email": "not-an-email", "password": "123"},
    )

    assert response.status_code == 400
    body = response.json()
    assert body["message"] == "Validation failed"
    assert {e["field"] for e in body["errors"]} == {"email", "password"}


def test_signup_rejects_blank_name(client):
    response = client.post(
        "/api/auth/signup",
        json={"name": "   ", "email": unique_email(), "password": DEFAULT_PASSWORD},
    )

    assert response.status_code == 400
    assert response.json()["errors"] == [{"field": "name", "message": "Name is required"}]


# =============================================================================
# LOGIN
# =============================================================================


def test_login_with_valid_credentials(client):
    email = unique_email("login")
    _, signup_body = signup_user(client, email=email)

    response = client.post(
        "/api/auth/login", json={"email": email, "password": DEFAULT_PASSWORD}
    )

    assert response.status_code == 200
    body = response.json()
    assert body["token"]
    assert body["user"]["id"] == signup_body["user"]["id"]


def test_login_with_wrong_password(client):
    email = unique_email("wrong")
    signup_user(client, email=email)

    response = client.post(
        "/api/auth/login", json={"email": email, "password": "not-the-password"}
    )

    assert response.status_code == 401
    assert response.json()["message"] == "Invalid credentials"


def test_login_unknown_email_gives_same_error(client):
    response = client.post(
        "/api/auth/login",
        json={"email": unique_email("ghost"), "password": DEFAULT_PASSWORD},
    )

    assert response.status_code == 401
    assert response.json()["message"] == "Invalid credentials"


# =============================================================================
# BEARER TOKENS
# =============================================================================


def test_me_returns_current_user(client):
    headers, signup_body = signup_user(client, name="Jordan Lee")

    response = client.get("/api/auth/me", headers=headers)

    assert response.status_code == 200
    assert response.json()["id"] == signup_body["user"]["id"]
    assert response.json()["name"] == "Jordan Lee"


def test_missing_token_is_rejected(client):
    response = client.get("/api/recipes")

    assert response.status_code == 401
    body = response.json()
    assert body["success"] is False
    assert body["message"] == "Not authorized to access this route"


def test_garbage_token_is_rejected(client):
    response = client.get(
        "/api/recipes", headers={"Authorization": "Bearer not.a.token"}
    )

    assert response.status_code == 401
    assert response.json()["message"] == "Invalid token"


def test_token_signed_with_other_secret_is_rejected(client):
    _, body = signup_user(client)
    forged = jwt.encode(
        {"id": body["user"]["id"], "exp": utcnow() + timedelta(days=1)},
        "some-other-secret",
        algorithm=TEST_SETTINGS.jwt_algorithm,
    )

    response = client.get("/api/recipes", headers={"Authorization": f"Bearer {forged}"})

    assert response.status_code == 401
    assert response.json()["message"] == "Invalid token"


def test_expired_token_is_rejected(client):
    _, body = signup_user(client)
    now = utcnow()
    expired = jwt.encode(
        {"id": body["user"]["id"], "iat": now - timedelta(days=31), "exp": now - timedelta(days=1)},
        TEST_SETTINGS.jwt_secret,
        algorithm=TEST_SETTINGS.jwt_algorithm,
    )

    response = client.get("/api/recipes", headers={"Authorization": f"Bearer {expired}"})

    assert response.status_code == 401
    assert response.json()["message"] == "Token expired"


def test_token_for_deleted_user_is_rejected(client, mongo_db):
    headers, body = signup_user(client)
    mongo_db.users.delete_many({})

    response = client.get("/api/auth/me", headers=headers)

    assert response.status_code == 401
    assert response.json()["message"] == "User not found"
