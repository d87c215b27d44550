"""
===============================================================================
USE CASE: Start OAuth
===============================================================================

Business Goal:
    Devolver la URL de autorización de Google para abrirla en un popup.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass

from ....domain.services import OAuthProvider
from .auth_results import AuthError, AuthErrorCode, OAuthUrlResult

MSG_OAUTH_NOT_CONFIGURED = (
    "Google Client ID not configured. Please set GOOGLE_CLIENT_ID in "
    "Environment Variables."
)


@dataclass(frozen=True)
class StartOAuthInput:
    redirect_uri: str


class StartOAuthUseCase:
    def __init__(self, oauth_provider: OAuthProvider | None):
        self._oauth = oauth_provider

    def execute(self, input: StartOAuthInput) -> OAuthUrlResult:
        if self._oauth is None:
            return OAuthUrlResult(
                error=AuthError(
                    code=AuthErrorCode.OAUTH_NOT_CONFIGURED,
                    message=MSG_OAUTH_NOT_CONFIGURED,
                )
            )
        return OAuthUrlResult(
            url=self._oauth.build_authorization_url(redirect_uri=input.redirect_uri)
        )
