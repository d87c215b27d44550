"""
===============================================================================
USE CASE: Handle OAuth Callback
===============================================================================

Business Goal:
    Recibir el authorization code de Google, intercambiarlo por un access
    token, obtener el email verificado y hacer find-or-create del usuario por
    email; luego ligar la sesión del navegador a ese usuario.

Rules:
    - Sin reintentos: cualquier falla del proveedor termina el callback.
    - Usuario nuevo: sin password_hash; profile sembrado con el nombre visible.
    - Usuario existente (incluso con password): se reutiliza su id; su hash
      y su profile no se tocan.
    - Carrera de creación concurrente: DuplicateEmailError -> re-lectura.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass

from ....crosscutting.exceptions import (
    DuplicateEmailError,
    OAuthExchangeError,
    OAuthProfileError,
)
from ....crosscutting.logger import logger
from ....crosscutting.metrics import record_auth_outcome, record_oauth_failure
from ....domain.entities import OAuthIdentity, User
from ....domain.repositories import UserRepository
from ....domain.services import OAuthProvider, SessionStore
from .auth_results import AuthError, AuthErrorCode, AuthResult, normalize_email
from .session_binding import bind_session
from .start_oauth import MSG_OAUTH_NOT_CONFIGURED


@dataclass(frozen=True)
class HandleOAuthCallbackInput:
    code: str
    redirect_uri: str
    current_token: str | None = None


def _fail(code: AuthErrorCode, message: str) -> AuthResult:
    record_auth_outcome("oauth", code.value)
    return AuthResult(error=AuthError(code=code, message=message))


class HandleOAuthCallbackUseCase:
    """Procesa el callback OAuth: exchange code + userinfo + find-or-create."""

    def __init__(
        self,
        oauth_provider: OAuthProvider | None,
        users: UserRepository,
        sessions: SessionStore,
    ):
        self._oauth = oauth_provider
        self._users = users
        self._sessions = sessions

    def execute(self, input: HandleOAuthCallbackInput) -> AuthResult:
        if not (input.code or "").strip():
            return _fail(AuthErrorCode.VALIDATION_ERROR, "No code provided")

        if self._oauth is None:
            return _fail(AuthErrorCode.OAUTH_NOT_CONFIGURED, MSG_OAUTH_NOT_CONFIGURED)

        # 1) Exchange code -> access token
        try:
            access_token = self._oauth.exchange_code(
                code=input.code, redirect_uri=input.redirect_uri
            )
        except OAuthExchangeError as exc:
            record_oauth_failure("exchange")
            logger.error(
                "oauth exchange failed",
                extra={"error_id": exc.error_id, "error": exc.message},
            )
            return _fail(AuthErrorCode.OAUTH_EXCHANGE_FAILED, exc.message)

        # 2) Verified identity
        try:
            identity = self._oauth.fetch_identity(access_token)
        except OAuthProfileError as exc:
            record_oauth_failure("profile")
            logger.error(
                "oauth profile fetch failed",
                extra={"error_id": exc.error_id, "error": exc.message},
            )
            return _fail(AuthErrorCode.OAUTH_PROFILE_FETCH_FAILED, exc.message)

        # 3) Find-or-create
        user = self._find_or_create(identity)
        if user is None:
            record_oauth_failure("store")
            return _fail(
                AuthErrorCode.INTERNAL_ERROR, "Could not resolve the signed-in user"
            )

        # 4) Bind session
        token = bind_session(
            self._sessions, user_id=user.id, current_token=input.current_token
        )

        logger.info(
            "oauth login completed",
            extra={
                "user_id": user.id,
                "email_domain": user.email.split("@")[-1]
                if "@" in user.email
                else "unknown",
            },
        )
        record_auth_outcome("oauth", "ok")
        return AuthResult(user=user, session_token=token)

    def _find_or_create(self, identity: OAuthIdentity) -> User | None:
        email = normalize_email(identity.email)

        existing = self._users.get_user_by_email(email)
        if existing is not None:
            return existing

        display_name = (identity.name or "").strip() or email.split("@")[0]
        try:
            user = self._users.create_user(
                email=email, password_hash=None, profile={"name": display_name}
            )
        except DuplicateEmailError:
            # R: Otro callback creó el usuario entre el lookup y el insert.
            return self._users.get_user_by_email(email)

        logger.info("user created from oauth", extra={"user_id": user.id})
        return user
