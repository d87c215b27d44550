"""
===============================================================================
AUTH USE CASE RESULTS (Shared Result / Error Models)
===============================================================================

Name:
    Auth Use Case Results

Business Goal:
    Proveer modelos compartidos de resultados y errores para los casos de uso
    de autenticación y perfil, con un contrato estable y explícito para:
      - validaciones
      - credenciales inválidas (sin distinguir "no existe" de "password mal")
      - sesión ausente o vencida
      - fallas del proveedor OAuth

Why (Context / Intención):
    - Los use cases devuelven resultados tipados en lugar de lanzar excepciones
      hacia afuera; la capa HTTP mapea cada código a un status.
    - Los errores de infraestructura (DatabaseError) SÍ se propagan: no son
      resultados esperados del negocio.

-------------------------------------------------------------------------------
CRC CARD (Class-Responsibility-Collaborator)
-------------------------------------------------------------------------------
Component:
    auth_results models (module)

Responsibilities:
    - Definir AuthErrorCode (set acotado y estable).
    - Representar AuthError (code + message).
    - Representar resultados: AuthResult, LogOutResult, UpdateProfileResult,
      OAuthUrlResult.

Collaborators:
    - domain.entities.User
    - api/error_mapping.py (code -> HTTP)
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from ....domain.entities import User


class AuthErrorCode(str, Enum):
    """
    Códigos:
      - VALIDATION_ERROR: inputs faltantes o no serializables.
      - DUPLICATE_EMAIL: el email ya está registrado.
      - INVALID_CREDENTIALS: login fallido (sin revelar qué chequeo falló).
      - UNAUTHENTICATED: no hay sesión válida.
      - NOT_FOUND: la sesión apunta a un usuario que ya no existe.
      - OAUTH_NOT_CONFIGURED: falta GOOGLE_CLIENT_ID.
      - OAUTH_EXCHANGE_FAILED / OAUTH_PROFILE_FETCH_FAILED: fallas del proveedor.
      - INTERNAL_ERROR: inconsistencia inesperada.
    """

    VALIDATION_ERROR = "VALIDATION_ERROR"
    DUPLICATE_EMAIL = "DUPLICATE_EMAIL"
    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"
    UNAUTHENTICATED = "UNAUTHENTICATED"
    NOT_FOUND = "NOT_FOUND"
    OAUTH_NOT_CONFIGURED = "OAUTH_NOT_CONFIGURED"
    OAUTH_EXCHANGE_FAILED = "OAUTH_EXCHANGE_FAILED"
    OAUTH_PROFILE_FETCH_FAILED = "OAUTH_PROFILE_FETCH_FAILED"
    INTERNAL_ERROR = "INTERNAL_ERROR"


@dataclass(frozen=True)
class AuthError:
    code: AuthErrorCode
    message: str


# Mensajes estables (los ve el usuario).
MSG_FIELDS_REQUIRED = "Email and password are required"
MSG_DUPLICATE_EMAIL = "Email already exists"
MSG_INVALID_CREDENTIALS = "Invalid email or password"
MSG_NOT_LOGGED_IN = "Not logged in"
MSG_USER_NOT_FOUND = "User not found"


@dataclass
class AuthResult:
    """
    Resultado de signup / login / me / oauth callback.

    Contrato:
      - éxito: user presente; session_token presente cuando se emitió una sesión
      - fallo: error presente
    """

    user: User | None = None
    session_token: str | None = None
    error: AuthError | None = None


@dataclass
class LogOutResult:
    logged_out: bool = True


@dataclass
class UpdateProfileResult:
    updated: bool = False
    error: AuthError | None = None


@dataclass
class OAuthUrlResult:
    url: str | None = None
    error: AuthError | None = None


def normalize_email(email: str | None) -> str:
    """R: Política única de emails (trim + lower) en el borde de identidad."""
    return (email or "").strip().lower()
