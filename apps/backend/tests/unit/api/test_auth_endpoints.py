"""
Name: Auth & Profile Endpoint Tests

Responsibilities:
  - End-to-end password flow over HTTP (cookie session)
  - RFC7807 error bodies with stable codes
  - Login failures indistinguishable on the wire
  - Password / hash never echoed
  - Google OAuth URL + popup callback
"""

import pytest

pytestmark = pytest.mark.unit


def _signup(client, email="a@x.com", password="pw1"):
    return client.post("/api/auth/signup", json={"email": email, "password": password})


# ============================================================================
# Password flow
# ============================================================================


def test_signup_login_me_logout_flow(api_client):
    signup = _signup(api_client)
    assert signup.status_code == 200
    body = signup.json()
    assert body["message"] == "User created"
    user_id = body["user"]["id"]
    assert body["user"] == {"id": user_id, "email": "a@x.com"}
    assert "facecounter_session" in signup.headers["set-cookie"]
    assert "httponly" in signup.headers["set-cookie"].lower()

    me = api_client.get("/api/auth/me")
    assert me.status_code == 200
    assert me.json() == {"user": {"id": user_id, "email": "a@x.com"}, "profile": None}

    logout = api_client.post("/api/auth/logout")
    assert logout.status_code == 200
    assert logout.json() == {"message": "Logged out"}

    assert api_client.get("/api/auth/me").status_code == 401

    login = api_client.post(
        "/api/auth/login", json={"email": "a@x.com", "password": "pw1"}
    )
    assert login.status_code == 200
    assert login.json()["user"]["id"] == user_id


def test_signup_missing_fields(api_client):
    response = api_client.post("/api/auth/signup", json={"email": "a@x.com"})

    assert response.status_code == 400
    assert response.headers["content-type"].startswith("application/problem+json")
    problem = response.json()
    assert problem["code"] == "VALIDATION_ERROR"
    assert problem["detail"] == "Email and password are required"


def test_signup_duplicate_email(api_client):
    _signup(api_client)

    response = _signup(api_client, email="A@x.com", password="different")

    assert response.status_code == 400
    assert response.json()["code"] == "DUPLICATE_EMAIL"
    assert response.json()["detail"] == "Email already exists"


def test_signup_with_session_store_down(api_client, sessions, monkeypatch):
    from unittest.mock import Mock

    from facecounter.crosscutting.exceptions import DatabaseError

    monkeypatch.setattr(
        sessions, "create", Mock(side_effect=DatabaseError("Redis unavailable"))
    )

    response = _signup(api_client)

    assert response.status_code == 200
    assert response.json()["message"] == "User created, please log in"
    assert "set-cookie" not in response.headers

    monkeypatch.undo()
    login = api_client.post(
        "/api/auth/login", json={"email": "a@x.com", "password": "pw1"}
    )
    assert login.status_code == 200
    assert login.json()["user"]["id"] == response.json()["user"]["id"]


def test_login_failures_are_indistinguishable(api_client):
    _signup(api_client)
    api_client.post("/api/auth/logout")

    wrong = api_client.post(
        "/api/auth/login", json={"email": "a@x.com", "password": "wrong"}
    )
    unknown = api_client.post(
        "/api/auth/login", json={"email": "nobody@x.com", "password": "pw1"}
    )

    assert wrong.status_code == unknown.status_code == 401
    for response in (wrong, unknown):
        problem = response.json()
        assert problem["code"] == "INVALID_CREDENTIALS"
        assert problem["detail"] == "Invalid email or password"
        assert "set-cookie" not in response.headers
    assert set(wrong.json()) == set(unknown.json())


def test_password_and_hash_never_returned(api_client):
    signup = _signup(api_client, password="super-secret-pw")
    login = api_client.post(
        "/api/auth/login", json={"email": "a@x.com", "password": "super-secret-pw"}
    )
    me = api_client.get("/api/auth/me")

    for response in (signup, login, me):
        assert "super-secret-pw" not in response.text
        assert "argon2" not in response.text
        assert "password" not in response.text


def test_me_requires_session(api_client):
    response = api_client.get("/api/auth/me")

    assert response.status_code == 401
    assert response.json()["code"] == "UNAUTHORIZED"
    assert response.json()["detail"] == "Not logged in"


def test_me_user_deleted(api_client, users):
    user_id = _signup(api_client).json()["user"]["id"]
    users.delete_user(user_id)

    response = api_client.get("/api/auth/me")

    assert response.status_code == 404
    assert response.json()["code"] == "NOT_FOUND"


def test_logout_without_session(api_client):
    response = api_client.post("/api/auth/logout")

    assert response.status_code == 200
    assert response.json() == {"message": "Logged out"}


def test_malformed_body_is_rfc7807_400(api_client):
    response = api_client.post(
        "/api/auth/login",
        content="{not json",
        headers={"Content-Type": "application/json"},
    )

    assert response.status_code == 400
    assert response.json()["code"] == "VALIDATION_ERROR"


# ============================================================================
# Profile
# ============================================================================


def test_update_profile_then_me(api_client):
    _signup(api_client)

    response = api_client.post(
        "/api/user/profile", json={"profile": {"name": "Alex", "targetJob": "PM"}}
    )
    assert response.status_code == 200
    assert response.json() == {"message": "Profile updated"}

    me = api_client.get("/api/auth/me").json()
    assert me["profile"] == {"name": "Alex", "targetJob": "PM"}
    assert me["profile"]["name"] == "Alex"

    api_client.post("/api/user/profile", json={"profile": {"industry": "Retail"}})
    assert api_client.get("/api/auth/me").json()["profile"] == {"industry": "Retail"}


def test_update_profile_requires_session(api_client):
    response = api_client.post("/api/user/profile", json={"profile": {"name": "x"}})

    assert response.status_code == 401


def test_login_returns_stored_profile(api_client):
    _signup(api_client)
    api_client.post("/api/user/profile", json={"profile": {"name": "Alex"}})
    api_client.post("/api/auth/logout")

    login = api_client.post(
        "/api/auth/login", json={"email": "a@x.com", "password": "pw1"}
    )

    assert login.json()["profile"] == {"name": "Alex"}


# ============================================================================
# Google OAuth
# ============================================================================


def test_google_url(api_client):
    response = api_client.get("/api/auth/google/url")

    assert response.status_code == 200
    assert response.json()["url"].startswith("https://idp.test/auth")
    assert "/auth/google/callback" in response.json()["url"]


def test_google_url_not_configured(api_client):
    from facecounter import container
    from facecounter.api.main import app
    from facecounter.application.usecases.auth import StartOAuthUseCase

    app.dependency_overrides[container.get_start_oauth_use_case] = (
        lambda: StartOAuthUseCase(oauth_provider=None)
    )

    response = api_client.get("/api/auth/google/url")

    assert response.status_code == 500
    assert response.json()["code"] == "OAUTH_NOT_CONFIGURED"


@pytest.mark.parametrize("path", ["/auth/google/callback", "/auth/google/callback/"])
def test_google_callback_signs_in(api_client, users, path):
    response = api_client.get(path, params={"code": "code-b"})

    assert response.status_code == 200
    assert "OAUTH_AUTH_SUCCESS" in response.text
    assert "window.close()" in response.text

    me = api_client.get("/api/auth/me").json()
    assert me["user"]["email"] == "b@y.com"
    assert me["profile"] == {"name": "Bea"}
    assert users.get_user_by_email("b@y.com").password_hash is None


def test_google_callback_twice_reuses_user(api_client):
    api_client.get("/auth/google/callback", params={"code": "code-b"})
    first_id = api_client.get("/api/auth/me").json()["user"]["id"]

    api_client.get("/auth/google/callback", params={"code": "code-b-again"})

    assert api_client.get("/api/auth/me").json()["user"]["id"] == first_id


def test_google_callback_without_code(api_client):
    response = api_client.get("/auth/google/callback")

    assert response.status_code == 400
    assert response.text == "No code provided"


def test_google_callback_exchange_failure(api_client, oauth_provider):
    oauth_provider.fail_exchange = True

    response = api_client.get("/auth/google/callback", params={"code": "code-b"})

    assert response.status_code == 500
    assert response.text == "Authentication failed: Bad Request"
    assert api_client.get("/api/auth/me").status_code == 401
