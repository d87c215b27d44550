"""
Name: Interview Coach Routes

Responsibilities:
  - POST /api/interview/reply: next coach turn for the running mock interview
  - POST /api/interview/feedback: score + strengths/improvements for a finished one

Collaborators:
  - ContinueInterviewUseCase / ScoreInterviewUseCase (container)
  - identity.sessions.get_session_token
  - api.error_mapping

Notes:
  - The conversation lives in the client; every call carries the full history
  - LLMError (provider down) is mapped by the exception handlers to 503
"""

from __future__ import annotations

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from ..application.usecases.interview import (
    ContinueInterviewInput,
    ContinueInterviewUseCase,
    ScoreInterviewInput,
    ScoreInterviewUseCase,
)
from ..container import get_continue_interview_use_case, get_score_interview_use_case
from ..crosscutting.error_responses import OPENAPI_ERROR_RESPONSES
from ..domain.entities import InterviewMessage
from ..identity.sessions import get_session_token
from .error_mapping import raise_interview_error

router = APIRouter(prefix="/api/interview", responses=OPENAPI_ERROR_RESPONSES)


class InterviewMessageDTO(BaseModel):
    role: str = ""
    content: str = ""


class InterviewRequest(BaseModel):
    messages: list[InterviewMessageDTO] = Field(default_factory=list)
    role: str | None = None


class InterviewReplyResponse(BaseModel):
    message: InterviewMessageDTO


class FeedbackDTO(BaseModel):
    score: int
    strengths: list[str]
    improvements: list[str]
    summary: str


class InterviewFeedbackResponse(BaseModel):
    feedback: FeedbackDTO


def _to_messages(req: InterviewRequest) -> list[InterviewMessage]:
    return [InterviewMessage(role=m.role, content=m.content) for m in req.messages]


@router.post("/reply", response_model=InterviewReplyResponse, tags=["interview"])
def interview_reply(
    req: InterviewRequest,
    session_token: str | None = Depends(get_session_token),
    use_case: ContinueInterviewUseCase = Depends(get_continue_interview_use_case),
):
    result = use_case.execute(
        ContinueInterviewInput(
            session_token=session_token,
            messages=_to_messages(req),
            interview_role=req.role,
        )
    )
    if result.error is not None:
        raise_interview_error(result.error)

    return InterviewReplyResponse(
        message=InterviewMessageDTO(
            role=result.message.role, content=result.message.content
        )
    )


@router.post(
    "/feedback", response_model=InterviewFeedbackResponse, tags=["interview"]
)
def interview_feedback(
    req: InterviewRequest,
    session_token: str | None = Depends(get_session_token),
    use_case: ScoreInterviewUseCase = Depends(get_score_interview_use_case),
):
    result = use_case.execute(
        ScoreInterviewInput(
            session_token=session_token,
            messages=_to_messages(req),
            interview_role=req.role,
        )
    )
    if result.error is not None:
        raise_interview_error(result.error)

    feedback = result.feedback
    return InterviewFeedbackResponse(
        feedback=FeedbackDTO(
            score=feedback.score,
            strengths=feedback.strengths,
            improvements=feedback.improvements,
            summary=feedback.summary,
        )
    )
