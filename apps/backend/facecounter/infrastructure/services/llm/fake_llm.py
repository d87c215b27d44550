"""
Name: Fake Interview Coach (Deterministic Test Double)

Qué es
------
Implementación determinista de `domain.services.InterviewLLMService` para
tests/CI y desarrollo local sin API key. No realiza IO.

CRC (Class-Responsibility-Collaboration)
----------------------------------------
Class: FakeInterviewLLMService
Responsibilities:
  - Generar turnos del coach deterministas para un historial dado
  - Generar un feedback estable (score según cantidad de respuestas)
Collaborators:
  - domain.entities (InterviewMessage, InterviewFeedback)
  - domain.services.InterviewLLMService
Constraints:
  - Determinismo total: mismas entradas -> misma salida
"""

from __future__ import annotations

import hashlib

from ....crosscutting.logger import logger
from ....domain.entities import ROLE_USER, InterviewFeedback, InterviewMessage
from ....domain.services import InterviewLLMService


def _digest(messages: list[InterviewMessage], extra: str = "") -> str:
    payload = "|".join(f"{m.role}:{m.content.strip()}" for m in messages) + extra
    return hashlib.sha256(payload.encode("utf-8")).hexdigest()[:12]


class FakeInterviewLLMService(InterviewLLMService):
    MODEL_ID = "fake-coach-v1"

    def __init__(self) -> None:
        # R: Evitar ruido en CI/tests: debug en vez de info.
        logger.debug("FakeInterviewLLMService initialized")

    @property
    def model_id(self) -> str:
        return self.MODEL_ID

    def generate_reply(
        self, messages: list[InterviewMessage], system_instruction: str
    ) -> str:
        digest = _digest(messages, system_instruction)
        return (
            f"Good, please share more details ({digest}). Next, how do you "
            "handle challenges in team collaboration?"
        )

    def generate_feedback(
        self, messages: list[InterviewMessage], interview_role: str
    ) -> InterviewFeedback:
        answers = [m for m in messages if m.role == ROLE_USER and m.content.strip()]
        score = min(100, 50 + 10 * len(answers))
        return InterviewFeedback(
            score=score,
            strengths=[
                "Clear structure in answers",
                f"Relevant experience for {interview_role}",
                "Confident communication",
            ],
            improvements=[
                "Quantify the impact of your work",
                "Give more concrete examples",
            ],
            summary=(
                f"Simulated evaluation ({_digest(messages)}) of {len(answers)} "
                f"answer(s) for the {interview_role} role."
            ),
        )
