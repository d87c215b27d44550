"""
Name: Profile Document Accessor

Responsibilities:
  - Serialize a profile document to text for storage
  - Deserialize stored text (or a native JSON column value) back to a document
  - Surface an absent stored profile as "no profile" (None), never as an error

Collaborators:
  - infrastructure/repositories/*: call these at the storage boundary
  - application/usecases/interview: reads the recognized fields

Constraints:
  - Symmetric: deserialize_profile(serialize_profile(p)) == p
  - No shape validation beyond serializability; partial documents are accepted
"""

from __future__ import annotations

import json
from typing import Any

# Recognized fields of the onboarding form. Others are kept as-is.
PROFILE_FIELDS = ("name", "currentJob", "targetJob", "experience", "industry")


def serialize_profile(profile: dict[str, Any] | None) -> str | None:
    """
    Profile document -> text.

    Raises:
        ValueError: if the document is not a JSON object or not serializable
    """
    if profile is None:
        return None
    if not isinstance(profile, dict):
        raise ValueError("Profile must be a JSON object")
    try:
        return json.dumps(profile, ensure_ascii=False)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"Profile is not serializable: {exc}") from exc


def deserialize_profile(raw: str | dict[str, Any] | None) -> dict[str, Any] | None:
    """
    Stored value -> profile document.

    Accepts serialized text (embedded store) or an already-decoded object
    (cloud JSON column). Empty/absent values mean "no profile".

    Raises:
        ValueError: if the stored text is not a JSON object
    """
    if raw is None:
        return None
    if isinstance(raw, dict):
        return dict(raw)
    if not isinstance(raw, str):
        raise ValueError(f"Unsupported stored profile type: {type(raw).__name__}")
    if not raw.strip():
        return None

    try:
        value = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise ValueError(f"Stored profile is not valid JSON: {exc}") from exc

    if value is None:
        return None
    if not isinstance(value, dict):
        raise ValueError("Stored profile is not a JSON object")
    return value


def profile_field(profile: dict[str, Any] | None, key: str, default: str = "") -> str:
    """Read a recognized field as text (missing/null -> default)."""
    if not profile:
        return default
    value = profile.get(key)
    if value is None or value == "":
        return default
    return str(value)
