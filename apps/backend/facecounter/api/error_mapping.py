"""
===============================================================================
TARJETA CRC — api/error_mapping.py
===============================================================================

Responsabilidades:
  - Traducir códigos de error de los use cases a AppHTTPException (RFC7807).
  - Mantener una única tabla código -> status HTTP.

Colaboradores:
  - application.usecases.auth (AuthError / AuthErrorCode)
  - application.usecases.interview (InterviewError / InterviewErrorCode)
  - crosscutting.error_responses (factories)
===============================================================================
"""

from __future__ import annotations

from typing import NoReturn

from ..application.usecases.auth import AuthError, AuthErrorCode
from ..application.usecases.interview import InterviewError, InterviewErrorCode
from ..crosscutting.error_responses import (
    AppHTTPException,
    ErrorCode,
    duplicate_email,
    internal_error,
    invalid_credentials,
    llm_error,
    not_found,
    oauth_failed,
    unauthorized,
    validation_error,
)


def auth_error_to_http(error: AuthError) -> AppHTTPException:
    code = error.code
    if code == AuthErrorCode.VALIDATION_ERROR:
        return validation_error(error.message)
    if code == AuthErrorCode.DUPLICATE_EMAIL:
        return duplicate_email(error.message)
    if code == AuthErrorCode.INVALID_CREDENTIALS:
        return invalid_credentials()
    if code == AuthErrorCode.UNAUTHENTICATED:
        return unauthorized(error.message)
    if code == AuthErrorCode.NOT_FOUND:
        return not_found(error.message)
    if code == AuthErrorCode.OAUTH_NOT_CONFIGURED:
        return AppHTTPException(500, ErrorCode.OAUTH_NOT_CONFIGURED, error.message)
    if code == AuthErrorCode.OAUTH_EXCHANGE_FAILED:
        return oauth_failed(ErrorCode.OAUTH_EXCHANGE_FAILED, error.message)
    if code == AuthErrorCode.OAUTH_PROFILE_FETCH_FAILED:
        return oauth_failed(ErrorCode.OAUTH_PROFILE_FETCH_FAILED, error.message)
    return internal_error(error.message)


def raise_auth_error(error: AuthError) -> NoReturn:
    raise auth_error_to_http(error)


def raise_interview_error(error: InterviewError) -> NoReturn:
    code = error.code
    if code == InterviewErrorCode.VALIDATION_ERROR:
        raise validation_error(error.message)
    if code == InterviewErrorCode.UNAUTHENTICATED:
        raise unauthorized(error.message)
    if code == InterviewErrorCode.NOT_FOUND:
        raise not_found(error.message)
    if code == InterviewErrorCode.LLM_INVALID_OUTPUT:
        raise llm_error(error.message)
    raise internal_error(error.message)
