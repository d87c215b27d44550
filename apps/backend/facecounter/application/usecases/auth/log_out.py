"""
===============================================================================
USE CASE: Log Out
===============================================================================

Business Goal:
    Destruir la sesión del navegador.

Rules:
    - Idempotente: sin token, token desconocido o ya destruido -> éxito.
    - Si el session store no responde, igual respondemos éxito (la cookie se
      borra en el cliente); el fallo queda logueado.
===============================================================================
"""

from __future__ import annotations

from ....crosscutting.exceptions import DatabaseError
from ....crosscutting.logger import logger
from ....domain.services import SessionStore
from .auth_results import LogOutResult


class LogOutUseCase:
    def __init__(self, sessions: SessionStore):
        self._sessions = sessions

    def execute(self, session_token: str | None) -> LogOutResult:
        if session_token:
            try:
                self._sessions.destroy(session_token)
            except DatabaseError as exc:
                logger.warning(
                    "session destroy failed during logout",
                    extra={"error_id": exc.error_id},
                )
        return LogOutResult(logged_out=True)
