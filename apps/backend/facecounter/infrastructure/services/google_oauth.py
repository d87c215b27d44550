"""
============================================================
TARJETA CRC — infrastructure/services/google_oauth.py
============================================================
Class: GoogleOAuthAdapter

Responsibilities:
  - Implementar OAuthProvider para "Sign in with Google" (OpenID scopes).
  - Construir authorization URL (popup con selector de cuenta).
  - Intercambiar authorization code por access_token (token endpoint).
  - Obtener email + nombre verificados desde userinfo.

Collaborators:
  - domain.services.OAuthProvider, domain.entities.OAuthIdentity
  - httpx (HTTP client)
  - crosscutting.exceptions (OAuthExchangeError, OAuthProfileError)

Constraints:
  - Sin reintentos: si el proveedor falla, el usuario reinicia el login.
  - Nunca loguear code ni access_token.
============================================================
"""

from __future__ import annotations

from urllib.parse import urlencode

import httpx

from ...crosscutting.exceptions import OAuthExchangeError, OAuthProfileError
from ...crosscutting.logger import logger
from ...domain.entities import OAuthIdentity
from ...domain.services import OAuthProvider

# Google OAuth endpoints
_GOOGLE_AUTH_URL = "https://accounts.google.com/o/oauth2/v2/auth"
_GOOGLE_TOKEN_URL = "https://oauth2.googleapis.com/token"
_GOOGLE_USERINFO_URL = "https://www.googleapis.com/oauth2/v3/userinfo"

_LOGIN_SCOPES = ["openid", "email", "profile"]


def _provider_error_message(response: httpx.Response) -> str:
    """error_description del proveedor cuando existe."""
    try:
        body = response.json()
    except ValueError:
        return f"HTTP {response.status_code}"
    if isinstance(body, dict):
        return str(
            body.get("error_description")
            or body.get("error")
            or f"HTTP {response.status_code}"
        )
    return f"HTTP {response.status_code}"


class GoogleOAuthAdapter(OAuthProvider):
    """Implementación de OAuthProvider para Google OAuth 2.0."""

    def __init__(
        self,
        *,
        client_id: str,
        client_secret: str,
        timeout_seconds: float = 10.0,
        http_client: httpx.Client | None = None,
    ):
        if not client_id:
            raise ValueError("GOOGLE_CLIENT_ID is required")
        self._client_id = client_id
        self._client_secret = client_secret
        self._timeout = timeout_seconds
        self._http = http_client or httpx.Client(timeout=timeout_seconds)

    def build_authorization_url(self, *, redirect_uri: str) -> str:
        """Construye la URL de autorización de Google."""
        params = {
            "client_id": self._client_id,
            "redirect_uri": redirect_uri,
            "response_type": "code",
            "scope": " ".join(_LOGIN_SCOPES),
            "access_type": "offline",
            "prompt": "select_account",
        }
        return f"{_GOOGLE_AUTH_URL}?{urlencode(params)}"

    def exchange_code(self, *, code: str, redirect_uri: str) -> str:
        """Intercambia authorization code por access_token."""
        try:
            token_resp = self._http.post(
                _GOOGLE_TOKEN_URL,
                data={
                    "client_id": self._client_id,
                    "client_secret": self._client_secret,
                    "code": code,
                    "grant_type": "authorization_code",
                    "redirect_uri": redirect_uri,
                },
                timeout=self._timeout,
            )
        except httpx.HTTPError as exc:
            logger.error(
                "google oauth token exchange transport error",
                extra={"error_type": type(exc).__name__},
            )
            raise OAuthExchangeError(
                f"token exchange failed: {exc}", original_error=exc
            ) from exc

        if token_resp.is_error:
            logger.error(
                "google oauth token exchange rejected",
                extra={"status": token_resp.status_code},
            )
            raise OAuthExchangeError(_provider_error_message(token_resp))

        try:
            body = token_resp.json()
        except ValueError as exc:
            raise OAuthExchangeError("token endpoint returned invalid JSON") from exc

        access_token = body.get("access_token") if isinstance(body, dict) else None

        if not access_token:
            raise OAuthExchangeError("token endpoint returned no access_token")
        return access_token

    def fetch_identity(self, access_token: str) -> OAuthIdentity:
        """Obtiene email y nombre desde userinfo."""
        try:
            userinfo_resp = self._http.get(
                _GOOGLE_USERINFO_URL,
                headers={"Authorization": f"Bearer {access_token}"},
                timeout=self._timeout,
            )
        except httpx.HTTPError as exc:
            logger.error(
                "google userinfo transport error",
                extra={"error_type": type(exc).__name__},
            )
            raise OAuthProfileError(
                f"profile fetch failed: {exc}", original_error=exc
            ) from exc

        if userinfo_resp.is_error:
            logger.error(
                "google userinfo rejected", extra={"status": userinfo_resp.status_code}
            )
            raise OAuthProfileError(_provider_error_message(userinfo_resp))

        try:
            data = userinfo_resp.json()
        except ValueError as exc:
            raise OAuthProfileError("userinfo returned invalid JSON") from exc

        if not isinstance(data, dict):
            raise OAuthProfileError("userinfo returned an unexpected payload")

        email = (data.get("email") or "").strip()
        if not email:
            raise OAuthProfileError("provider did not return an email")

        return OAuthIdentity(email=email, name=data.get("name"))
