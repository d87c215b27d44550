"""
===============================================================================
MÓDULO: Respuestas de error estándar (RFC 7807 / Problem Details)
===============================================================================

Objetivo
--------
Uniformar TODOS los errores HTTP para que:
- El frontend pueda manejar por "code"
- El backend pueda correlacionar por request_id / error_id
- Login fallido tenga SIEMPRE la misma forma (sin enumeración de usuarios)

-------------------------------------------------------------------------------
CRC (Component Card)
-------------------------------------------------------------------------------
Componente:
  AppHTTPException + handlers

Responsabilidades:
  - Definir catálogo de códigos de error (ErrorCode)
  - Construir payload RFC7807 (ErrorDetail)
  - Proveer factories de errores frecuentes
  - Proveer handlers (FastAPI) para devolver JSON problem+json

Colaboradores:
  - crosscutting/middleware.py (request_id)
  - api/error_mapping.py (AuthErrorCode -> AppHTTPException)
  - api/exception_handlers.py (mapea errores internos)
===============================================================================
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from fastapi import HTTPException, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel


class ErrorCode(str, Enum):
    # 4xx
    VALIDATION_ERROR = "VALIDATION_ERROR"
    DUPLICATE_EMAIL = "DUPLICATE_EMAIL"
    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"
    UNAUTHORIZED = "UNAUTHORIZED"
    NOT_FOUND = "NOT_FOUND"

    # 5xx
    INTERNAL_ERROR = "INTERNAL_ERROR"
    OAUTH_NOT_CONFIGURED = "OAUTH_NOT_CONFIGURED"
    OAUTH_EXCHANGE_FAILED = "OAUTH_EXCHANGE_FAILED"
    OAUTH_PROFILE_FETCH_FAILED = "OAUTH_PROFILE_FETCH_FAILED"
    LLM_ERROR = "LLM_ERROR"
    DATABASE_ERROR = "DATABASE_ERROR"


class ErrorDetail(BaseModel):
    """
    Modelo RFC 7807 (Problem Details).

    Campos extra:
    - code: error code estable para clientes
    - errors: lista opcional de detalles (ej: [{"field":"email","msg":"..."}])
    """

    type: str = "about:blank"
    title: str
    status: int
    detail: str
    code: ErrorCode
    instance: str | None = None
    errors: list[dict[str, Any]] | None = None


PROBLEM_JSON_MEDIA_TYPE = "application/problem+json"

_OPENAPI_ERROR_CONTENT = {
    PROBLEM_JSON_MEDIA_TYPE: {"schema": {"$ref": "#/components/schemas/ErrorDetail"}}
}

OPENAPI_ERROR_RESPONSES = {
    "400": {
        "description": "Bad Request (RFC7807)",
        "model": ErrorDetail,
        "content": _OPENAPI_ERROR_CONTENT,
    },
    "401": {
        "description": "Unauthorized (RFC7807)",
        "model": ErrorDetail,
        "content": _OPENAPI_ERROR_CONTENT,
    },
    "404": {
        "description": "Not Found (RFC7807)",
        "model": ErrorDetail,
        "content": _OPENAPI_ERROR_CONTENT,
    },
    "default": {
        "description": "Error (RFC7807)",
        "model": ErrorDetail,
        "content": _OPENAPI_ERROR_CONTENT,
    },
}


class AppHTTPException(HTTPException):
    """
    ----------------------------------------------------------------------------
    CRC (Class Card)
    ----------------------------------------------------------------------------
    Clase:
      AppHTTPException

    Responsabilidades:
      - Adjuntar un ErrorCode estable
      - Transportar errores de validación (errors[])

    Colaboradores:
      - app_exception_handler()
    ----------------------------------------------------------------------------
    """

    def __init__(
        self,
        status_code: int,
        code: ErrorCode,
        detail: str,
        errors: list[dict[str, Any]] | None = None,
    ):
        super().__init__(status_code=status_code, detail=detail)
        self.code = code
        self.errors = errors


# ---------------------------------------------------------------------------
# Factories de error (helpers)
# ---------------------------------------------------------------------------
def validation_error(
    detail: str, errors: list[dict[str, Any]] | None = None
) -> AppHTTPException:
    return AppHTTPException(400, ErrorCode.VALIDATION_ERROR, detail, errors)


def duplicate_email(detail: str = "Email already exists") -> AppHTTPException:
    return AppHTTPException(400, ErrorCode.DUPLICATE_EMAIL, detail)


def invalid_credentials() -> AppHTTPException:
    # Mismo detalle para "email desconocido" y "password incorrecto".
    return AppHTTPException(
        401, ErrorCode.INVALID_CREDENTIALS, "Invalid email or password"
    )


def unauthorized(detail: str = "Not logged in") -> AppHTTPException:
    return AppHTTPException(401, ErrorCode.UNAUTHORIZED, detail)


def not_found(detail: str = "User not found") -> AppHTTPException:
    return AppHTTPException(404, ErrorCode.NOT_FOUND, detail)


def oauth_failed(code: ErrorCode, detail: str) -> AppHTTPException:
    return AppHTTPException(500, code, f"Authentication failed: {detail}")


def internal_error(detail: str = "Unexpected error") -> AppHTTPException:
    return AppHTTPException(500, ErrorCode.INTERNAL_ERROR, detail)


def llm_error(detail: str) -> AppHTTPException:
    return AppHTTPException(502, ErrorCode.LLM_ERROR, detail)


# ---------------------------------------------------------------------------
# Handlers FastAPI
# ---------------------------------------------------------------------------
def build_problem(
    request: Request,
    *,
    status: int,
    code: ErrorCode,
    detail: str,
    errors: list[dict[str, Any]] | None = None,
) -> dict[str, Any]:
    request_id = getattr(getattr(request, "state", None), "request_id", None)

    errors = errors or []
    if request_id:
        errors = [*errors, {"request_id": request_id}]

    return ErrorDetail(
        type=f"about:blank/{code.value.lower()}",
        title=code.value.replace("_", " ").title(),
        status=status,
        detail=detail,
        code=code,
        instance=str(request.url),
        errors=errors or None,
    ).model_dump(exclude_none=True, mode="json")


async def app_exception_handler(
    request: Request, exc: AppHTTPException
) -> JSONResponse:
    """
    Handler para AppHTTPException.

    Incluye instance (URL) y propaga headers opcionales.
    """
    content = build_problem(
        request,
        status=exc.status_code,
        code=exc.code,
        detail=str(exc.detail),
        errors=exc.errors,
    )
    return JSONResponse(
        status_code=exc.status_code,
        content=content,
        headers=getattr(exc, "headers", None),
        media_type=PROBLEM_JSON_MEDIA_TYPE,
    )
