"""
===============================================================================
INTERVIEW USE CASE RESULTS
===============================================================================

Name:
    Interview Coach Results

Responsibilities:
    - Definir InterviewErrorCode (set acotado).
    - Representar resultados de "siguiente turno" y "feedback".
    - Validar el historial recibido del cliente.

Collaborators:
    - domain.entities (InterviewMessage, InterviewFeedback)
    - api/error_mapping.py
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from ....domain.entities import ROLE_AI, ROLE_USER, InterviewFeedback, InterviewMessage


class InterviewErrorCode(str, Enum):
    VALIDATION_ERROR = "VALIDATION_ERROR"
    UNAUTHENTICATED = "UNAUTHENTICATED"
    NOT_FOUND = "NOT_FOUND"
    LLM_INVALID_OUTPUT = "LLM_INVALID_OUTPUT"


@dataclass(frozen=True)
class InterviewError:
    code: InterviewErrorCode
    message: str


@dataclass
class InterviewReplyResult:
    message: InterviewMessage | None = None
    error: InterviewError | None = None


@dataclass
class InterviewFeedbackResult:
    feedback: InterviewFeedback | None = None
    error: InterviewError | None = None


_VALID_ROLES = {ROLE_AI, ROLE_USER}


def validate_messages(messages: list[InterviewMessage]) -> InterviewError | None:
    """R: Cada turno debe tener rol conocido y contenido no vacío."""
    for index, message in enumerate(messages):
        if message.role not in _VALID_ROLES:
            return InterviewError(
                code=InterviewErrorCode.VALIDATION_ERROR,
                message=f"messages[{index}].role must be 'ai' or 'user'",
            )
        if not (message.content or "").strip():
            return InterviewError(
                code=InterviewErrorCode.VALIDATION_ERROR,
                message=f"messages[{index}].content must not be empty",
            )
    return None


def clamp_score(score: int) -> int:
    return max(0, min(100, int(score)))
