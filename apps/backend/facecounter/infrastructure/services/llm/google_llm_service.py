"""
Name: Google Gemini Interview Coach (Adapter)

Qué hace
--------
Implementación concreta de `domain.services.InterviewLLMService` usando
Google GenAI (Gemini). Este componente se encarga de:
  - Traducir el historial de la entrevista al formato de contents de Gemini
    (rol "ai" -> "model")
  - Generar el siguiente turno del entrevistador con una system instruction
  - Generar el feedback final en modo JSON con esquema de respuesta
  - Reintentar errores transitorios con exponential backoff + jitter (tenacity)

CRC (Class-Responsibility-Collaboration)
----------------------------------------
Class: GoogleInterviewLLMService
Responsibilities:
  - generate_reply: siguiente pregunta / comentario del coach
  - generate_feedback: score + fortalezas + mejoras + resumen
  - Loguear observabilidad básica (modelo, tamaños, latencia)
Collaborators:
  - google.genai.Client: SDK externo
  - retry.create_retry_decorator: resiliencia
  - crosscutting.metrics.observe_llm_latency
Constraints:
  - JSON inválido del modelo -> LLMOutputError (no se reintenta)
  - Nunca loguear el contenido de la conversación
"""

from __future__ import annotations

import json
import time

from google import genai
from google.genai import types
from pydantic import BaseModel, Field, ValidationError

from ....crosscutting.exceptions import LLMError, LLMOutputError
from ....crosscutting.logger import logger
from ....crosscutting.metrics import observe_llm_latency
from ....domain.entities import ROLE_AI, InterviewFeedback, InterviewMessage
from ....domain.services import InterviewLLMService
from ..retry import create_retry_decorator

_FEEDBACK_PROMPT = (
    "Based on the following mock interview for the role of {role}, provide a "
    "score (0-100), 3 strengths, 2 areas for improvement and a short summary. "
    "Conversation: {conversation}"
)


class FeedbackSchema(BaseModel):
    """Esquema de respuesta pedido al modelo en modo JSON."""

    score: float = Field(allow_inf_nan=False)
    strengths: list[str]
    improvements: list[str]
    summary: str


class FeedbackEnvelope(BaseModel):
    feedback: FeedbackSchema


def to_gemini_contents(messages: list[InterviewMessage]) -> list[types.Content]:
    """R: "ai" -> "model"; todo lo demás es turno del usuario."""
    return [
        types.Content(
            role="model" if m.role == ROLE_AI else "user",
            parts=[types.Part(text=m.content)],
        )
        for m in messages
    ]


def parse_feedback(raw: str) -> InterviewFeedback:
    """
    Convierte el JSON del modelo en InterviewFeedback.

    Acepta {"feedback": {...}} o el objeto plano.

    Raises:
        LLMOutputError: JSON inválido o campos faltantes
    """
    try:
        data = json.loads(raw or "")
    except json.JSONDecodeError as exc:
        raise LLMOutputError("Model returned invalid JSON") from exc

    if isinstance(data, dict) and "feedback" in data:
        data = data["feedback"]

    try:
        parsed = FeedbackSchema.model_validate(data)
    except ValidationError as exc:
        raise LLMOutputError("Model returned an unexpected feedback shape") from exc

    return InterviewFeedback(
        score=int(round(parsed.score)),
        strengths=[s for s in parsed.strengths if s.strip()],
        improvements=[s for s in parsed.improvements if s.strip()],
        summary=parsed.summary.strip(),
    )


class GoogleInterviewLLMService(InterviewLLMService):
    """
    R: Google Gemini implementation of InterviewLLMService.
    """

    DEFAULT_MODEL_ID = "gemini-2.0-flash"

    def __init__(
        self,
        api_key: str | None = None,
        *,
        client: genai.Client | None = None,
        model_id: str | None = None,
        retry_decorator=None,
    ) -> None:
        """
        R: Inicializa el servicio (preferible vía DI).

        Args:
            api_key: API key (inyectada desde Settings)
            client: Cliente genai preconstruido (útil para tests)
            model_id: Override del modelo
            retry_decorator: Decorator tenacity (inyectable para tests)

        Raises:
            LLMError: si no hay API key y no se inyectó `client`.
        """
        resolved_key = (api_key or "").strip()
        if not resolved_key and client is None:
            logger.error("GoogleInterviewLLMService: GOOGLE_API_KEY not configured")
            raise LLMError("GOOGLE_API_KEY not configured")

        self._client = client or genai.Client(api_key=resolved_key)
        self._model_id = (model_id or self.DEFAULT_MODEL_ID).strip()

        # R: Preconstruimos el wrapper con retry para no redefinir closures por llamada.
        decorator = retry_decorator or create_retry_decorator()
        self._generate_content = decorator(self._client.models.generate_content)

        logger.info(
            "GoogleInterviewLLMService initialized", extra={"model_id": self._model_id}
        )

    @property
    def model_id(self) -> str:
        return self._model_id

    def _call(self, *, operation: str, contents, config: types.GenerateContentConfig) -> str:
        start = time.perf_counter()
        try:
            response = self._generate_content(
                model=self._model_id, contents=contents, config=config
            )
        except Exception as exc:
            logger.error(
                "GoogleInterviewLLMService: generation failed",
                exc_info=True,
                extra={
                    "model_id": self._model_id,
                    "operation": operation,
                    "error_type": type(exc).__name__,
                },
            )
            raise LLMError("Failed to generate response", original_error=exc) from exc

        elapsed = time.perf_counter() - start
        observe_llm_latency(operation, elapsed)

        text = (getattr(response, "text", "") or "").strip()
        logger.info(
            "GoogleInterviewLLMService: response generated",
            extra={
                "model_id": self._model_id,
                "operation": operation,
                "answer_chars": len(text),
                "latency_ms": round(elapsed * 1000, 2),
            },
        )
        return text

    def generate_reply(
        self, messages: list[InterviewMessage], system_instruction: str
    ) -> str:
        return self._call(
            operation="reply",
            contents=to_gemini_contents(messages),
            config=types.GenerateContentConfig(system_instruction=system_instruction),
        )

    def generate_feedback(
        self, messages: list[InterviewMessage], interview_role: str
    ) -> InterviewFeedback:
        conversation = json.dumps(
            [{"role": m.role, "content": m.content} for m in messages],
            ensure_ascii=False,
        )
        prompt = _FEEDBACK_PROMPT.format(role=interview_role, conversation=conversation)

        raw = self._call(
            operation="feedback",
            contents=prompt,
            config=types.GenerateContentConfig(
                response_mime_type="application/json",
                response_schema=FeedbackEnvelope,
            ),
        )
        return parse_feedback(raw)
