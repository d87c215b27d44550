"""
Name: Session Binding

Responsibilities:
  - Move a browser from ANONYMOUS (or a previous user) to AUTHENTICATED
  - Drop the previous token so only one live binding exists per browser

Collaborators:
  - domain.services.SessionStore
"""

from __future__ import annotations

from ....domain.services import SessionStore


def bind_session(
    sessions: SessionStore, *, user_id: str, current_token: str | None = None
) -> str:
    """Issue a fresh token for user_id, destroying current_token first."""
    if current_token:
        sessions.destroy(current_token)
    return sessions.create(user_id)
