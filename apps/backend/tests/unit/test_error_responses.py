"""Unit tests for error_responses and api.error_mapping."""

import pytest
from facecounter.api.error_mapping import (
    auth_error_to_http,
    raise_auth_error,
    raise_interview_error,
)
from facecounter.application.usecases.auth import AuthError, AuthErrorCode
from facecounter.application.usecases.interview import (
    InterviewError,
    InterviewErrorCode,
)
from facecounter.crosscutting.error_responses import (
    AppHTTPException,
    ErrorCode,
    ErrorDetail,
    invalid_credentials,
    llm_error,
    unauthorized,
    validation_error,
)

pytestmark = pytest.mark.unit


class TestErrorFactories:
    """Test error factory functions."""

    def test_validation_error(self):
        exc = validation_error("Email and password required", [{"field": "email"}])
        assert exc.status_code == 400
        assert exc.code == ErrorCode.VALIDATION_ERROR
        assert exc.errors == [{"field": "email"}]

    def test_invalid_credentials_has_fixed_detail(self):
        exc = invalid_credentials()
        assert exc.status_code == 401
        assert exc.detail == "Invalid email or password"

    def test_unauthorized(self):
        exc = unauthorized()
        assert exc.status_code == 401
        assert exc.code == ErrorCode.UNAUTHORIZED

    def test_llm_error(self):
        exc = llm_error("Model returned no JSON")
        assert exc.status_code == 502
        assert exc.code == ErrorCode.LLM_ERROR


class TestErrorDetail:
    """Test ErrorDetail model."""

    def test_serialization_drops_empty_fields(self):
        detail = ErrorDetail(
            title="Not Found",
            status=404,
            detail="User not found",
            code=ErrorCode.NOT_FOUND,
        )
        data = detail.model_dump(exclude_none=True, mode="json")
        assert data["code"] == "NOT_FOUND"
        assert data["type"] == "about:blank"
        assert "errors" not in data


class TestAuthErrorMapping:
    @pytest.mark.parametrize(
        "code, status, http_code",
        [
            (AuthErrorCode.VALIDATION_ERROR, 400, ErrorCode.VALIDATION_ERROR),
            (AuthErrorCode.DUPLICATE_EMAIL, 400, ErrorCode.DUPLICATE_EMAIL),
            (AuthErrorCode.INVALID_CREDENTIALS, 401, ErrorCode.INVALID_CREDENTIALS),
            (AuthErrorCode.UNAUTHENTICATED, 401, ErrorCode.UNAUTHORIZED),
            (AuthErrorCode.NOT_FOUND, 404, ErrorCode.NOT_FOUND),
            (AuthErrorCode.OAUTH_NOT_CONFIGURED, 500, ErrorCode.OAUTH_NOT_CONFIGURED),
            (
                AuthErrorCode.OAUTH_EXCHANGE_FAILED,
                500,
                ErrorCode.OAUTH_EXCHANGE_FAILED,
            ),
            (
                AuthErrorCode.OAUTH_PROFILE_FETCH_FAILED,
                500,
                ErrorCode.OAUTH_PROFILE_FETCH_FAILED,
            ),
            (AuthErrorCode.INTERNAL_ERROR, 500, ErrorCode.INTERNAL_ERROR),
        ],
    )
    def test_status_per_code(self, code, status, http_code):
        exc = auth_error_to_http(AuthError(code, "boom"))

        assert exc.status_code == status
        assert exc.code == http_code

    def test_invalid_credentials_ignores_message(self):
        exc = auth_error_to_http(
            AuthError(AuthErrorCode.INVALID_CREDENTIALS, "no such user")
        )
        assert "no such user" not in exc.detail

    def test_raise_auth_error(self):
        with pytest.raises(AppHTTPException) as info:
            raise_auth_error(AuthError(AuthErrorCode.DUPLICATE_EMAIL, "Email exists"))
        assert info.value.status_code == 400


class TestInterviewErrorMapping:
    @pytest.mark.parametrize(
        "code, status",
        [
            (InterviewErrorCode.VALIDATION_ERROR, 400),
            (InterviewErrorCode.UNAUTHENTICATED, 401),
            (InterviewErrorCode.NOT_FOUND, 404),
            (InterviewErrorCode.LLM_INVALID_OUTPUT, 502),
        ],
    )
    def test_status_per_code(self, code, status):
        with pytest.raises(AppHTTPException) as info:
            raise_interview_error(InterviewError(code, "x"))
        assert info.value.status_code == status
