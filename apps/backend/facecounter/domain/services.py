"""
===============================================================================
TARJETA CRC — domain/services.py
===============================================================================

Módulo:
    Puertos de Servicios Externos (Protocols)

Responsabilidades:
    - Definir contratos para hashing, sesiones, proveedor OAuth y LLM.
    - Proteger a application de detalles del proveedor (argon2, redis, httpx, genai).
    - Mantener el dominio independiente de SDKs.

Colaboradores:
    - identity/passwords.py: Argon2PasswordHasher
    - infrastructure/sessions/*: InMemorySessionStore / RedisSessionStore
    - infrastructure/services/google_oauth.py: GoogleOAuthAdapter
    - infrastructure/services/llm/*: GoogleInterviewLLMService / FakeInterviewLLMService
    - application/usecases: consumen estos puertos.

Reglas:
    - SOLO interfaces: nada de implementación.
    - Los tokens de sesión son opacos: nadie fuera del SessionStore los inspecciona.
===============================================================================
"""

from __future__ import annotations

from typing import Protocol

from .entities import InterviewFeedback, InterviewMessage, OAuthIdentity


class PasswordHasher(Protocol):
    """Hash lento y con sal. verify() nunca lanza."""

    def hash(self, password: str) -> str: ...

    def verify(self, password: str, password_hash: str | None) -> bool:
        """Si password_hash es None verifica contra un hash dummy (mismo costo)."""
        ...


class SessionStore(Protocol):
    """Mapeo token opaco -> user_id con expiración absoluta."""

    def create(self, user_id: str) -> str:
        """Emite un token nuevo ligado a user_id."""
        ...

    def resolve(self, token: str) -> str | None:
        """user_id si el token existe y no expiró; None en otro caso."""
        ...

    def destroy(self, token: str) -> None:
        """Idempotente: destruir un token inexistente no es error."""
        ...

    def ping(self) -> bool: ...


class OAuthProvider(Protocol):
    """Proveedor de identidad federada (authorization-code flow)."""

    def build_authorization_url(self, *, redirect_uri: str) -> str: ...

    def exchange_code(self, *, code: str, redirect_uri: str) -> str:
        """
        Devuelve access_token.

        Raises:
            OAuthExchangeError
        """
        ...

    def fetch_identity(self, access_token: str) -> OAuthIdentity:
        """
        Raises:
            OAuthProfileError
        """
        ...


class InterviewLLMService(Protocol):
    """Contrato del coach de entrevistas."""

    def generate_reply(
        self, messages: list[InterviewMessage], system_instruction: str
    ) -> str:
        """Siguiente turno del entrevistador (puede devolver "")."""
        ...

    def generate_feedback(
        self, messages: list[InterviewMessage], interview_role: str
    ) -> InterviewFeedback:
        """
        Raises:
            LLMError: provider falló o devolvió JSON inválido
        """
        ...
