"""
===============================================================================
TARJETA CRC — identity/sessions.py
===============================================================================

Módulo:
    Transporte de sesión (cookie httpOnly)

Responsabilidades:
    - Escribir / borrar la cookie de sesión de forma consistente.
    - Exponer la dependencia FastAPI que extrae el token opaco del request.

Colaboradores:
    - crosscutting.config.get_settings: nombre, Secure, SameSite, TTL.
    - api/*_routes.py: setean la cookie tras signup/login/OAuth.

Decisiones de diseño:
    - El token es opaco: acá no se valida, solo se transporta. La resolución
      token -> user_id es responsabilidad del SessionStore.
    - max_age = TTL de la sesión (vida absoluta, no se renueva).
    - Nunca loguear el valor de la cookie.
===============================================================================
"""

from __future__ import annotations

from fastapi import Request, Response

from ..crosscutting.config import get_settings


def set_session_cookie(response: Response, token: str) -> None:
    """Setea la cookie httpOnly con el token de sesión."""
    settings = get_settings()
    response.set_cookie(
        key=settings.session_cookie_name,
        value=token,
        httponly=True,
        secure=settings.session_cookie_secure,
        samesite=settings.session_cookie_samesite,
        max_age=settings.session_ttl_seconds,
        path="/",
    )


def clear_session_cookie(response: Response) -> None:
    settings = get_settings()
    response.delete_cookie(
        key=settings.session_cookie_name,
        path="/",
        secure=settings.session_cookie_secure,
        httponly=True,
        samesite=settings.session_cookie_samesite,
    )


def get_session_token(request: Request) -> str | None:
    """Dependencia FastAPI: token de sesión de la cookie (o None)."""
    token = request.cookies.get(get_settings().session_cookie_name)
    return token or None
