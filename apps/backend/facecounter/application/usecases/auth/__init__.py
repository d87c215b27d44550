"""
Auth use cases: signup, login, current user, logout, profile update, Google OAuth.
"""

from .auth_results import (
    AuthError,
    AuthErrorCode,
    AuthResult,
    LogOutResult,
    OAuthUrlResult,
    UpdateProfileResult,
    normalize_email,
)
from .get_current_user import GetCurrentUserUseCase
from .handle_oauth_callback import HandleOAuthCallbackInput, HandleOAuthCallbackUseCase
from .log_in import LogInInput, LogInUseCase
from .log_out import LogOutUseCase
from .sign_up import SignUpInput, SignUpUseCase
from .start_oauth import StartOAuthInput, StartOAuthUseCase
from .update_profile import UpdateProfileInput, UpdateProfileUseCase

__all__ = [
    "AuthError",
    "AuthErrorCode",
    "AuthResult",
    "LogOutResult",
    "OAuthUrlResult",
    "UpdateProfileResult",
    "normalize_email",
    "GetCurrentUserUseCase",
    "HandleOAuthCallbackInput",
    "HandleOAuthCallbackUseCase",
    "LogInInput",
    "LogInUseCase",
    "LogOutUseCase",
    "SignUpInput",
    "SignUpUseCase",
    "StartOAuthInput",
    "StartOAuthUseCase",
    "UpdateProfileInput",
    "UpdateProfileUseCase",
]
