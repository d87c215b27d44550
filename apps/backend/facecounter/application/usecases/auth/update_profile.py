"""
===============================================================================
USE CASE: Update Profile
===============================================================================

Business Goal:
    Reemplazar COMPLETO el profile del usuario autenticado (onboarding).

Rules:
    - Sin sesión válida -> UNAUTHENTICATED.
    - Sin validación de forma: documentos vacíos o parciales se aceptan.
    - Sin merge con el profile anterior.
    - Documento no serializable / no-objeto -> VALIDATION_ERROR.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ....crosscutting.logger import logger
from ....domain.profile import serialize_profile
from ....domain.repositories import UserRepository
from ....domain.services import SessionStore
from .auth_results import (
    MSG_NOT_LOGGED_IN,
    MSG_USER_NOT_FOUND,
    AuthError,
    AuthErrorCode,
    UpdateProfileResult,
)


@dataclass(frozen=True)
class UpdateProfileInput:
    session_token: str | None
    profile: dict[str, Any] | None


class UpdateProfileUseCase:
    def __init__(self, users: UserRepository, sessions: SessionStore):
        self._users = users
        self._sessions = sessions

    def execute(self, input: UpdateProfileInput) -> UpdateProfileResult:
        user_id = (
            self._sessions.resolve(input.session_token) if input.session_token else None
        )
        if user_id is None:
            return UpdateProfileResult(
                error=AuthError(
                    code=AuthErrorCode.UNAUTHENTICATED, message=MSG_NOT_LOGGED_IN
                )
            )

        try:
            serialize_profile(input.profile)
        except ValueError as exc:
            return UpdateProfileResult(
                error=AuthError(code=AuthErrorCode.VALIDATION_ERROR, message=str(exc))
            )

        if not self._users.update_profile(user_id, input.profile):
            return UpdateProfileResult(
                error=AuthError(code=AuthErrorCode.NOT_FOUND, message=MSG_USER_NOT_FOUND)
            )

        logger.info("profile updated", extra={"user_id": user_id})
        return UpdateProfileResult(updated=True)
