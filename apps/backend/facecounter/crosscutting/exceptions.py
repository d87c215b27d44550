"""
===============================================================================
MÓDULO: Excepciones tipadas del backend (errores internos)
===============================================================================

Objetivo
--------
Tener excepciones internas coherentes, con:
- error_code estable
- error_id para correlación con logs
- message "humana" (sin filtrar secretos, passwords ni hashes)

-------------------------------------------------------------------------------
CRC (Component Card)
-------------------------------------------------------------------------------
Componente:
  FaceCounterError + subclases

Responsabilidades:
  - Estandarizar errores de infraestructura que luego se mapean a HTTP
  - Generar error_id para rastreo

Colaboradores:
  - infrastructure/repositories/* (DatabaseError, DuplicateEmailError)
  - infrastructure/services/google_oauth.py (OAuthExchangeError, OAuthProfileError)
  - infrastructure/services/llm/* (LLMError)
  - api/exception_handlers.py (mapea a AppHTTPException)
===============================================================================
"""

from __future__ import annotations

from uuid import uuid4


class FaceCounterError(Exception):
    """
    ----------------------------------------------------------------------------
    CRC (Class Card)
    ----------------------------------------------------------------------------
    Clase:
      FaceCounterError

    Responsabilidades:
      - Base para errores internos del sistema
      - Proveer error_code + error_id + message

    Colaboradores:
      - api/exception_handlers.py
    ----------------------------------------------------------------------------
    """

    error_code: str = "FACECOUNTER_ERROR"

    def __init__(
        self,
        message: str,
        error_id: str | None = None,
        original_error: Exception | None = None,
    ):
        self.message = message
        self.error_id = error_id or str(uuid4())
        self.original_error = original_error
        super().__init__(message)


class DatabaseError(FaceCounterError):
    """Errores del credential store (conexión, query, datos corruptos)."""

    error_code: str = "DATABASE_ERROR"


class DuplicateEmailError(FaceCounterError):
    """Violación de unicidad de email, traducida desde el backend concreto."""

    error_code: str = "DUPLICATE_EMAIL"

    def __init__(self, email: str, original_error: Exception | None = None):
        super().__init__("Email already exists", original_error=original_error)
        self.email = email


class OAuthError(FaceCounterError):
    """Errores del proveedor de identidad externo."""

    error_code: str = "OAUTH_ERROR"


class OAuthExchangeError(OAuthError):
    """El proveedor rechazó el code o falló el transporte del token exchange."""

    error_code: str = "OAUTH_EXCHANGE_FAILED"


class OAuthProfileError(OAuthError):
    """Falló la obtención del perfil verificado (userinfo)."""

    error_code: str = "OAUTH_PROFILE_FETCH_FAILED"


class LLMError(FaceCounterError):
    """Errores del LLM (provider externo / quota / respuesta inválida)."""

    error_code: str = "LLM_ERROR"


class LLMOutputError(LLMError):
    """El LLM respondió, pero con un JSON que no respeta el esquema pedido."""

    error_code: str = "LLM_INVALID_OUTPUT"
