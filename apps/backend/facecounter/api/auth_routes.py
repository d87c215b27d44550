"""
===============================================================================
TARJETA CRC — api/auth_routes.py (Autenticación y Sesión)
===============================================================================

Responsabilidades:
  - Exponer signup / login / me / logout y el flujo Google OAuth (popup).
  - Gestionar la cookie de sesión httpOnly de forma consistente.
  - Traducir resultados de use cases a HTTP (RFC7807 en errores).

Patrones aplicados:
  - Adapter / Presentation Layer: traduce HTTP <-> caso de uso.
  - Fail-safe security: si la autenticación falla, se deniega por defecto.

Colaboradores:
  - container: factories de use cases (Depends)
  - identity.sessions: cookie de sesión + get_session_token
  - api.error_mapping: AuthError -> AppHTTPException
===============================================================================
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, Request, Response
from fastapi.responses import HTMLResponse, PlainTextResponse
from pydantic import BaseModel

from ..application.usecases.auth import (
    AuthErrorCode,
    GetCurrentUserUseCase,
    HandleOAuthCallbackInput,
    HandleOAuthCallbackUseCase,
    LogInInput,
    LogInUseCase,
    LogOutUseCase,
    SignUpInput,
    SignUpUseCase,
    StartOAuthInput,
    StartOAuthUseCase,
)
from ..container import (
    get_current_user_use_case,
    get_handle_oauth_callback_use_case,
    get_log_in_use_case,
    get_log_out_use_case,
    get_sign_up_use_case,
    get_start_oauth_use_case,
)
from ..crosscutting.config import get_settings
from ..crosscutting.error_responses import OPENAPI_ERROR_RESPONSES
from ..domain.entities import User
from ..identity.sessions import (
    clear_session_cookie,
    get_session_token,
    set_session_cookie,
)
from .error_mapping import raise_auth_error

router = APIRouter(responses=OPENAPI_ERROR_RESPONSES)

OAUTH_CALLBACK_PATH = "/auth/google/callback"

# R: El popup avisa a la ventana que lo abrió y se cierra; sin opener, vuelve a "/".
OAUTH_SUCCESS_HTML = """<html>
  <body>
    <script>
      if (window.opener) {
        window.opener.postMessage({ type: 'OAUTH_AUTH_SUCCESS' }, '*');
        window.close();
      } else {
        window.location.href = '/';
      }
    </script>
    <p>Authentication successful. This window should close automatically.</p>
  </body>
</html>
"""


# -----------------------------------------------------------------------------
# Modelos HTTP (DTOs)
# -----------------------------------------------------------------------------


class CredentialsRequest(BaseModel):
    # R: Campos opcionales; la validación "requeridos" vive en el use case.
    email: str = ""
    password: str = ""


class UserResponse(BaseModel):
    id: str
    email: str


class SignUpResponse(BaseModel):
    message: str
    user: UserResponse


class SessionUserResponse(BaseModel):
    user: UserResponse
    profile: dict[str, Any] | None = None


class MessageResponse(BaseModel):
    message: str


class OAuthUrlResponse(BaseModel):
    url: str


# -----------------------------------------------------------------------------
# Helpers
# -----------------------------------------------------------------------------


def _to_user_response(user: User) -> UserResponse:
    """Solo id + email: password_hash nunca sale por HTTP."""
    return UserResponse(id=user.id, email=user.email)


def _oauth_redirect_uri(request: Request) -> str:
    base = get_settings().public_base_url(str(request.base_url))
    return f"{base}{OAUTH_CALLBACK_PATH}"


# -----------------------------------------------------------------------------
# Password flow
# -----------------------------------------------------------------------------


@router.post("/api/auth/signup", response_model=SignUpResponse, tags=["auth"])
def signup(
    req: CredentialsRequest,
    response: Response,
    session_token: str | None = Depends(get_session_token),
    use_case: SignUpUseCase = Depends(get_sign_up_use_case),
):
    """Registra un usuario y abre sesión."""
    result = use_case.execute(
        SignUpInput(
            email=req.email, password=req.password, current_token=session_token
        )
    )
    if result.error is not None:
        raise_auth_error(result.error)

    if result.session_token is None:
        # R: Cuenta creada pero sin sesión (session store caído).
        return SignUpResponse(
            message="User created, please log in",
            user=_to_user_response(result.user),
        )

    set_session_cookie(response, result.session_token)
    return SignUpResponse(message="User created", user=_to_user_response(result.user))


@router.post("/api/auth/login", response_model=SessionUserResponse, tags=["auth"])
def login(
    req: CredentialsRequest,
    response: Response,
    session_token: str | None = Depends(get_session_token),
    use_case: LogInUseCase = Depends(get_log_in_use_case),
):
    """
    Inicia sesión.

    - Email desconocido y password incorrecto responden exactamente igual.
    """
    result = use_case.execute(
        LogInInput(email=req.email, password=req.password, current_token=session_token)
    )
    if result.error is not None:
        raise_auth_error(result.error)

    set_session_cookie(response, result.session_token)
    return SessionUserResponse(
        user=_to_user_response(result.user), profile=result.user.profile
    )


@router.get("/api/auth/me", response_model=SessionUserResponse, tags=["auth"])
def me(
    session_token: str | None = Depends(get_session_token),
    use_case: GetCurrentUserUseCase = Depends(get_current_user_use_case),
):
    """Devuelve el usuario de la sesión actual."""
    result = use_case.execute(session_token)
    if result.error is not None:
        raise_auth_error(result.error)

    return SessionUserResponse(
        user=_to_user_response(result.user), profile=result.user.profile
    )


@router.post("/api/auth/logout", response_model=MessageResponse, tags=["auth"])
def logout(
    response: Response,
    session_token: str | None = Depends(get_session_token),
    use_case: LogOutUseCase = Depends(get_log_out_use_case),
):
    """
    Cierra sesión.

    - Siempre borra la cookie (si estaba presente).
    - Idempotente: sin sesión también responde 200.
    """
    use_case.execute(session_token)
    clear_session_cookie(response)
    return MessageResponse(message="Logged out")


# -----------------------------------------------------------------------------
# Google OAuth (popup)
# -----------------------------------------------------------------------------


@router.get("/api/auth/google/url", response_model=OAuthUrlResponse, tags=["auth"])
def google_auth_url(
    request: Request,
    use_case: StartOAuthUseCase = Depends(get_start_oauth_use_case),
):
    result = use_case.execute(StartOAuthInput(redirect_uri=_oauth_redirect_uri(request)))
    if result.error is not None:
        raise_auth_error(result.error)
    return OAuthUrlResponse(url=result.url)


@router.get(OAUTH_CALLBACK_PATH, response_class=HTMLResponse, tags=["auth"])
@router.get(
    f"{OAUTH_CALLBACK_PATH}/",
    response_class=HTMLResponse,
    tags=["auth"],
    include_in_schema=False,
)
def google_callback(
    request: Request,
    code: str = "",
    session_token: str | None = Depends(get_session_token),
    use_case: HandleOAuthCallbackUseCase = Depends(
        get_handle_oauth_callback_use_case
    ),
):
    """
    Callback del popup de Google.

    - Éxito: HTML que notifica al opener (OAUTH_AUTH_SUCCESS) y cierra.
    - Falla: texto plano (el popup no interpreta JSON).
    """
    result = use_case.execute(
        HandleOAuthCallbackInput(
            code=code,
            redirect_uri=_oauth_redirect_uri(request),
            current_token=session_token,
        )
    )
    if result.error is not None:
        if result.error.code == AuthErrorCode.VALIDATION_ERROR:
            return PlainTextResponse(result.error.message, status_code=400)
        return PlainTextResponse(
            f"Authentication failed: {result.error.message}", status_code=500
        )

    response = HTMLResponse(OAUTH_SUCCESS_HTML)
    set_session_cookie(response, result.session_token)
    return response
