"""
Interview coach use cases: next coach turn and final evaluation.
"""

from .continue_interview import ContinueInterviewInput, ContinueInterviewUseCase
from .interview_results import (
    InterviewError,
    InterviewErrorCode,
    InterviewFeedbackResult,
    InterviewReplyResult,
)
from .score_interview import ScoreInterviewInput, ScoreInterviewUseCase

__all__ = [
    "ContinueInterviewInput",
    "ContinueInterviewUseCase",
    "InterviewError",
    "InterviewErrorCode",
    "InterviewFeedbackResult",
    "InterviewReplyResult",
    "ScoreInterviewInput",
    "ScoreInterviewUseCase",
]
