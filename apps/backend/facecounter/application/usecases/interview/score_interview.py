"""
===============================================================================
USE CASE: Score Interview
===============================================================================

Business Goal:
    Evaluar una entrevista terminada: score 0-100, fortalezas, mejoras y resumen.

Rules:
    - Requiere sesión válida y al menos un turno.
    - Score fuera de rango se recorta a [0, 100].
    - JSON inválido del modelo -> LLM_INVALID_OUTPUT.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass, field

from ....crosscutting.exceptions import LLMOutputError
from ....crosscutting.logger import logger
from ....domain.entities import InterviewFeedback, InterviewMessage
from ....domain.services import InterviewLLMService, SessionStore
from .interview_results import (
    InterviewError,
    InterviewErrorCode,
    InterviewFeedbackResult,
    clamp_score,
    validate_messages,
)
from .prompts import DEFAULT_INTERVIEW_ROLE


@dataclass(frozen=True)
class ScoreInterviewInput:
    session_token: str | None
    messages: list[InterviewMessage] = field(default_factory=list)
    interview_role: str | None = None


class ScoreInterviewUseCase:
    def __init__(self, sessions: SessionStore, llm_service: InterviewLLMService):
        self._sessions = sessions
        self._llm = llm_service

    def execute(self, input: ScoreInterviewInput) -> InterviewFeedbackResult:
        user_id = (
            self._sessions.resolve(input.session_token) if input.session_token else None
        )
        if user_id is None:
            return InterviewFeedbackResult(
                error=InterviewError(
                    code=InterviewErrorCode.UNAUTHENTICATED, message="Not logged in"
                )
            )

        if not input.messages:
            return InterviewFeedbackResult(
                error=InterviewError(
                    code=InterviewErrorCode.VALIDATION_ERROR,
                    message="At least one message is required",
                )
            )

        error = validate_messages(input.messages)
        if error is not None:
            return InterviewFeedbackResult(error=error)

        role = (input.interview_role or "").strip() or DEFAULT_INTERVIEW_ROLE
        try:
            raw = self._llm.generate_feedback(input.messages, role)
        except LLMOutputError as exc:
            logger.error(
                "coach feedback unparseable",
                extra={"user_id": user_id, "error_id": exc.error_id},
            )
            return InterviewFeedbackResult(
                error=InterviewError(
                    code=InterviewErrorCode.LLM_INVALID_OUTPUT,
                    message="The AI coach returned an invalid evaluation",
                )
            )

        feedback = InterviewFeedback(
            score=clamp_score(raw.score),
            strengths=list(raw.strengths),
            improvements=list(raw.improvements),
            summary=raw.summary,
        )
        logger.info(
            "interview scored", extra={"user_id": user_id, "score": feedback.score}
        )
        return InterviewFeedbackResult(feedback=feedback)
