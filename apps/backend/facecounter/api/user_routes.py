"""
Name: User Profile Routes

Responsibilities:
  - POST /api/user/profile: replace the signed-in user's profile wholesale

Collaborators:
  - UpdateProfileUseCase (container)
  - identity.sessions.get_session_token
  - api.error_mapping
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from ..application.usecases.auth import UpdateProfileInput, UpdateProfileUseCase
from ..container import get_update_profile_use_case
from ..crosscutting.error_responses import OPENAPI_ERROR_RESPONSES
from ..identity.sessions import get_session_token
from .error_mapping import raise_auth_error

router = APIRouter(responses=OPENAPI_ERROR_RESPONSES)


class UpdateProfileRequest(BaseModel):
    # R: Sin validar la forma: perfiles vacíos o parciales se aceptan tal cual.
    profile: dict[str, Any] | None = None


class MessageResponse(BaseModel):
    message: str


@router.post("/api/user/profile", response_model=MessageResponse, tags=["user"])
def update_profile(
    req: UpdateProfileRequest,
    session_token: str | None = Depends(get_session_token),
    use_case: UpdateProfileUseCase = Depends(get_update_profile_use_case),
):
    result = use_case.execute(
        UpdateProfileInput(session_token=session_token, profile=req.profile)
    )
    if result.error is not None:
        raise_auth_error(result.error)
    return MessageResponse(message="Profile updated")
