"""
===============================================================================
USE CASE: Get Current User
===============================================================================

Business Goal:
    Resolver la sesión del navegador al usuario autenticado (id, email, profile).

Rules:
    - Sin token o token vencido/desconocido -> UNAUTHENTICATED.
    - Token válido pero usuario inexistente -> NOT_FOUND (inconsistencia de datos).
===============================================================================
"""

from __future__ import annotations

from ....crosscutting.logger import logger
from ....domain.repositories import UserRepository
from ....domain.services import SessionStore
from .auth_results import (
    MSG_NOT_LOGGED_IN,
    MSG_USER_NOT_FOUND,
    AuthError,
    AuthErrorCode,
    AuthResult,
)


class GetCurrentUserUseCase:
    def __init__(self, users: UserRepository, sessions: SessionStore):
        self._users = users
        self._sessions = sessions

    def execute(self, session_token: str | None) -> AuthResult:
        user_id = self._sessions.resolve(session_token) if session_token else None
        if user_id is None:
            return AuthResult(
                error=AuthError(
                    code=AuthErrorCode.UNAUTHENTICATED, message=MSG_NOT_LOGGED_IN
                )
            )

        user = self._users.get_user_by_id(user_id)
        if user is None:
            logger.warning(
                "session bound to a missing user", extra={"user_id": user_id}
            )
            return AuthResult(
                error=AuthError(code=AuthErrorCode.NOT_FOUND, message=MSG_USER_NOT_FOUND)
            )

        return AuthResult(user=user)
