"""
===============================================================================
USE CASE: Log In
===============================================================================

Business Goal:
    Validar credenciales y ligar una sesión al usuario.

Rules:
    - "Email desconocido", "cuenta solo-OAuth" y "password incorrecto" son
      indistinguibles: mismo código, mismo mensaje y una verificación Argon2
      en los tres casos (hash dummy cuando no hay hash real).
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass

from ....crosscutting.logger import logger
from ....crosscutting.metrics import record_auth_outcome
from ....domain.repositories import UserRepository
from ....domain.services import PasswordHasher, SessionStore
from .auth_results import (
    MSG_INVALID_CREDENTIALS,
    AuthError,
    AuthErrorCode,
    AuthResult,
    normalize_email,
)
from .session_binding import bind_session


@dataclass(frozen=True)
class LogInInput:
    email: str
    password: str
    current_token: str | None = None


class LogInUseCase:
    def __init__(
        self,
        users: UserRepository,
        password_hasher: PasswordHasher,
        sessions: SessionStore,
    ):
        self._users = users
        self._hasher = password_hasher
        self._sessions = sessions

    def execute(self, input: LogInInput) -> AuthResult:
        email = normalize_email(input.email)
        user = self._users.get_user_by_email(email) if email else None

        stored_hash = user.password_hash if user else None
        # R: Siempre verificamos (hash dummy si no hay usuario o no tiene password).
        if not self._hasher.verify(input.password or "", stored_hash) or user is None:
            logger.info("login rejected")
            record_auth_outcome("login", AuthErrorCode.INVALID_CREDENTIALS.value)
            return AuthResult(
                error=AuthError(
                    code=AuthErrorCode.INVALID_CREDENTIALS,
                    message=MSG_INVALID_CREDENTIALS,
                )
            )

        token = bind_session(
            self._sessions, user_id=user.id, current_token=input.current_token
        )

        logger.info("user logged in", extra={"user_id": user.id})
        record_auth_outcome("login", "ok")
        return AuthResult(user=user, session_token=token)
