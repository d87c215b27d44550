"""
Name: Interview Coach Prompts

Responsibilities:
  - Build the coach's system instruction from the stored profile
  - Hold the fixed coach messages (greeting, "please repeat")

Notes:
  - Missing profile fields are omitted; a missing industry reads "not specified"
"""

from __future__ import annotations

from typing import Any

from ....domain.profile import PROFILE_FIELDS, profile_field

COACH_NAME = "Facecounter"
DEFAULT_INTERVIEW_ROLE = "Software Engineer"

GREETING = (
    "Hello! I'm your AI interview coach. Please start by introducing yourself "
    "and the position you'd like to interview for."
)
EMPTY_REPLY_FALLBACK = "Sorry, I didn't catch that. Could you please repeat?"

_BASE_INSTRUCTION = (
    "You are a professional AI interview coach named {coach}. Your goal is to "
    "help the user practice for interviews. Stay professional, encouraging and "
    "challenging. The current mock interview is for the role of {role}. Ask one "
    "question at a time and react to the candidate's previous answer."
)

_FIELD_LABELS = {
    "name": "Name",
    "currentJob": "Current job",
    "targetJob": "Target job",
    "experience": "Experience",
    "industry": "Industry",
}
_FIELD_DEFAULTS = {"industry": "not specified"}


def build_system_instruction(
    profile: dict[str, Any] | None, interview_role: str | None = None
) -> str:
    role = (interview_role or "").strip() or DEFAULT_INTERVIEW_ROLE
    instruction = _BASE_INSTRUCTION.format(coach=COACH_NAME, role=role)

    if not profile:
        return instruction

    details = []
    for field in PROFILE_FIELDS:
        value = profile_field(profile, field, _FIELD_DEFAULTS.get(field, ""))
        if value:
            details.append(f"- {_FIELD_LABELS[field]}: {value}")
    return f"{instruction}\nCandidate information:\n" + "\n".join(details)
