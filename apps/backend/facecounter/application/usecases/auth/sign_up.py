"""
===============================================================================
USE CASE: Sign Up
===============================================================================

Business Goal:
    Registrar un usuario con email + password, hashear el password (Argon2) e
    iniciar sesión inmediatamente.

Rules:
    - email y password obligatorios (VALIDATION_ERROR).
    - Email duplicado -> DUPLICATE_EMAIL (traducido por el credential store).
    - Nunca se devuelve ni se loguea el password o su hash.
    - Si el session store falla después de crear la cuenta, se devuelve el
      usuario sin sesión (la cuenta ya existe; el cliente debe hacer login).
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass

from ....crosscutting.exceptions import DatabaseError, DuplicateEmailError
from ....crosscutting.logger import logger
from ....crosscutting.metrics import record_auth_outcome
from ....domain.repositories import UserRepository
from ....domain.services import PasswordHasher, SessionStore
from .auth_results import (
    MSG_DUPLICATE_EMAIL,
    MSG_FIELDS_REQUIRED,
    AuthError,
    AuthErrorCode,
    AuthResult,
    normalize_email,
)
from .session_binding import bind_session


@dataclass(frozen=True)
class SignUpInput:
    email: str
    password: str
    current_token: str | None = None


class SignUpUseCase:
    def __init__(
        self,
        users: UserRepository,
        password_hasher: PasswordHasher,
        sessions: SessionStore,
    ):
        self._users = users
        self._hasher = password_hasher
        self._sessions = sessions

    def execute(self, input: SignUpInput) -> AuthResult:
        email = normalize_email(input.email)
        if not email or not input.password:
            record_auth_outcome("signup", AuthErrorCode.VALIDATION_ERROR.value)
            return AuthResult(
                error=AuthError(
                    code=AuthErrorCode.VALIDATION_ERROR, message=MSG_FIELDS_REQUIRED
                )
            )

        password_hash = self._hasher.hash(input.password)

        try:
            user = self._users.create_user(email=email, password_hash=password_hash)
        except DuplicateEmailError:
            record_auth_outcome("signup", AuthErrorCode.DUPLICATE_EMAIL.value)
            return AuthResult(
                error=AuthError(
                    code=AuthErrorCode.DUPLICATE_EMAIL, message=MSG_DUPLICATE_EMAIL
                )
            )

        try:
            token = bind_session(
                self._sessions, user_id=user.id, current_token=input.current_token
            )
        except DatabaseError as exc:
            logger.warning(
                "user signed up without session",
                extra={"user_id": user.id, "error_id": exc.error_id},
            )
            record_auth_outcome("signup", "ok_without_session")
            return AuthResult(user=user)

        logger.info("user signed up", extra={"user_id": user.id})
        record_auth_outcome("signup", "ok")
        return AuthResult(user=user, session_token=token)
