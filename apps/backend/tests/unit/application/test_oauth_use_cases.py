"""
===============================================================================
TEST: Google OAuth Use Cases
===============================================================================

Cobertura:
  - StartOAuthUseCase: happy path, proveedor no configurado
  - HandleOAuthCallbackUseCase: primer login crea usuario sin password,
    segundo login reutiliza el id, cuenta con password se reutiliza intacta,
    code vacío, exchange falla, userinfo falla, carrera de creación
===============================================================================
"""

from __future__ import annotations

import pytest
from facecounter.application.usecases.auth import (
    AuthErrorCode,
    HandleOAuthCallbackInput,
    HandleOAuthCallbackUseCase,
    StartOAuthInput,
    StartOAuthUseCase,
)
from facecounter.crosscutting.exceptions import DuplicateEmailError
from facecounter.infrastructure.repositories import InMemoryUserRepository

pytestmark = pytest.mark.unit

_REDIRECT = "https://app.example.com/auth/google/callback"


@pytest.fixture
def callback(oauth_provider, users, sessions) -> HandleOAuthCallbackUseCase:
    return HandleOAuthCallbackUseCase(
        oauth_provider=oauth_provider, users=users, sessions=sessions
    )


def _input(code: str, current_token: str | None = None) -> HandleOAuthCallbackInput:
    return HandleOAuthCallbackInput(
        code=code, redirect_uri=_REDIRECT, current_token=current_token
    )


# ---------------------------------------------------------------------------
# StartOAuth
# ---------------------------------------------------------------------------


def test_start_oauth_returns_url(oauth_provider):
    result = StartOAuthUseCase(oauth_provider=oauth_provider).execute(
        StartOAuthInput(redirect_uri=_REDIRECT)
    )

    assert result.error is None
    assert _REDIRECT in result.url


def test_start_oauth_not_configured():
    result = StartOAuthUseCase(oauth_provider=None).execute(
        StartOAuthInput(redirect_uri=_REDIRECT)
    )

    assert result.url is None
    assert result.error.code == AuthErrorCode.OAUTH_NOT_CONFIGURED
    assert "GOOGLE_CLIENT_ID" in result.error.message


# ---------------------------------------------------------------------------
# Callback: find-or-create
# ---------------------------------------------------------------------------


def test_first_callback_creates_user_without_password(callback, users, sessions):
    result = callback.execute(_input("code-b"))

    assert result.error is None
    stored = users.get_user_by_email("b@y.com")
    assert stored.id == result.user.id
    assert stored.password_hash is None
    assert stored.profile == {"name": "Bea"}
    assert sessions.resolve(result.session_token) == stored.id


def test_second_callback_reuses_user(callback, users):
    first = callback.execute(_input("code-b"))
    second = callback.execute(_input("code-b-again"))

    assert second.user.id == first.user.id
    assert users.get_user_by_email("b@y.com").id == first.user.id


def test_callback_reuses_password_account(callback, users, password_hasher):
    existing = users.create_user(
        email="b@y.com",
        password_hash=password_hasher.hash("pw"),
        profile={"name": "Beatriz", "targetJob": "PM"},
    )

    result = callback.execute(_input("code-b"))

    assert result.user.id == existing.id
    stored = users.get_user_by_id(existing.id)
    assert stored.password_hash == existing.password_hash
    assert stored.profile == {"name": "Beatriz", "targetJob": "PM"}


def test_display_name_falls_back_to_email_local_part(callback, users):
    callback.execute(_input("code-noname"))

    assert users.get_user_by_email("noname@y.com").profile == {"name": "noname"}


def test_callback_replaces_previous_session(callback, sessions):
    old_token = sessions.create("someone-else")

    result = callback.execute(_input("code-b", current_token=old_token))

    assert sessions.resolve(old_token) is None
    assert sessions.resolve(result.session_token) == result.user.id


# ---------------------------------------------------------------------------
# Callback: failures
# ---------------------------------------------------------------------------


@pytest.mark.parametrize("code", ["", "   "])
def test_callback_requires_code(callback, oauth_provider, code):
    result = callback.execute(_input(code))

    assert result.error.code == AuthErrorCode.VALIDATION_ERROR
    assert result.error.message == "No code provided"
    assert oauth_provider.exchanged == []


def test_callback_not_configured(users, sessions):
    use_case = HandleOAuthCallbackUseCase(
        oauth_provider=None, users=users, sessions=sessions
    )

    assert use_case.execute(_input("code-b")).error.code == (
        AuthErrorCode.OAUTH_NOT_CONFIGURED
    )


def test_exchange_failure(callback, oauth_provider, users, sessions):
    oauth_provider.fail_exchange = True

    result = callback.execute(_input("code-b"))

    assert result.error.code == AuthErrorCode.OAUTH_EXCHANGE_FAILED
    assert result.error.message == "Bad Request"
    assert users.get_user_by_email("b@y.com") is None
    assert len(sessions) == 0


def test_profile_failure(callback, oauth_provider, users):
    oauth_provider.fail_profile = True

    result = callback.execute(_input("code-b"))

    assert result.error.code == AuthErrorCode.OAUTH_PROFILE_FETCH_FAILED
    assert users.get_user_by_email("b@y.com") is None


def test_concurrent_creation_refetches(oauth_provider, sessions):
    class _RacingRepository(InMemoryUserRepository):
        """Otro callback inserta el mismo email entre el lookup y el insert."""

        def create_user(self, *, email, password_hash, profile=None):
            winner = super().create_user(
                email=email, password_hash=None, profile={"name": "winner"}
            )
            raise DuplicateEmailError(winner.email)

    users = _RacingRepository()
    use_case = HandleOAuthCallbackUseCase(
        oauth_provider=oauth_provider, users=users, sessions=sessions
    )

    result = use_case.execute(_input("code-b"))

    assert result.error is None
    assert result.user.profile == {"name": "winner"}
