"""
===============================================================================
USE CASE: Continue Interview
===============================================================================

Business Goal:
    Producir el siguiente turno del coach para una entrevista simulada,
    personalizado con el profile guardado del usuario.

Rules:
    - Requiere sesión válida.
    - Historial vacío -> saludo inicial sin llamar al LLM.
    - Respuesta vacía del LLM -> mensaje fijo "please repeat".
    - LLMError (provider caído) se propaga (503 en la capa HTTP).
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass, field

from ....crosscutting.logger import logger
from ....domain.entities import ROLE_AI, InterviewMessage
from ....domain.repositories import UserRepository
from ....domain.services import InterviewLLMService, SessionStore
from .interview_results import (
    InterviewError,
    InterviewErrorCode,
    InterviewReplyResult,
    validate_messages,
)
from .prompts import EMPTY_REPLY_FALLBACK, GREETING, build_system_instruction


@dataclass(frozen=True)
class ContinueInterviewInput:
    session_token: str | None
    messages: list[InterviewMessage] = field(default_factory=list)
    interview_role: str | None = None


class ContinueInterviewUseCase:
    def __init__(
        self,
        users: UserRepository,
        sessions: SessionStore,
        llm_service: InterviewLLMService,
    ):
        self._users = users
        self._sessions = sessions
        self._llm = llm_service

    def execute(self, input: ContinueInterviewInput) -> InterviewReplyResult:
        user_id = (
            self._sessions.resolve(input.session_token) if input.session_token else None
        )
        if user_id is None:
            return InterviewReplyResult(
                error=InterviewError(
                    code=InterviewErrorCode.UNAUTHENTICATED, message="Not logged in"
                )
            )

        error = validate_messages(input.messages)
        if error is not None:
            return InterviewReplyResult(error=error)

        if not input.messages:
            return InterviewReplyResult(
                message=InterviewMessage(role=ROLE_AI, content=GREETING)
            )

        user = self._users.get_user_by_id(user_id)
        if user is None:
            return InterviewReplyResult(
                error=InterviewError(
                    code=InterviewErrorCode.NOT_FOUND, message="User not found"
                )
            )

        instruction = build_system_instruction(user.profile, input.interview_role)
        text = self._llm.generate_reply(input.messages, instruction).strip()
        if not text:
            logger.warning("coach returned an empty reply", extra={"user_id": user_id})
            text = EMPTY_REPLY_FALLBACK

        return InterviewReplyResult(message=InterviewMessage(role=ROLE_AI, content=text))
