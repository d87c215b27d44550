"""
CRC — domain/repositories.py

Name
- Domain Repository Interfaces (Protocols)

Responsibilities
- Define the credential store contract (port) behind which every backend lives.
- Keep application/domain independent from sqlite3, supabase-py, etc.
- Enable dependency inversion and straightforward unit testing (fake repositories).

Collaborators
- domain.entities: User
- infrastructure.repositories: in_memory, sqlite, supabase implementations
- container.py: selects ONE implementation at startup

Constraints
- Pure interfaces only: no side effects, no infrastructure imports, no SQL.
- Implementations MUST translate backend-specific uniqueness violations into
  crosscutting.exceptions.DuplicateEmailError and any other backend failure
  into crosscutting.exceptions.DatabaseError.

Notes
- Emails arrive already normalised (trim + lower).
- "Not found" is None for lookups and False for update_profile.
"""

from typing import Any, Optional, Protocol

from .entities import User


class UserRepository(Protocol):
    """
    R: Interface for user record persistence.

    Implementations must provide:
      - Unique email enforcement
      - Lookup by email and by id
      - Wholesale profile replacement
    """

    def create_user(
        self,
        *,
        email: str,
        password_hash: Optional[str],
        profile: Optional[dict[str, Any]] = None,
    ) -> User:
        """
        R: Persist a new user and return it with its assigned id.

        Raises:
            DuplicateEmailError: a user with that email already exists
        """
        ...

    def get_user_by_email(self, email: str) -> Optional[User]:
        """R: Find user by (normalised) email."""
        ...

    def get_user_by_id(self, user_id: str) -> Optional[User]:
        """R: Find user by id."""
        ...

    def update_profile(self, user_id: str, profile: Optional[dict[str, Any]]) -> bool:
        """R: Replace the stored profile. Returns False when the user does not exist."""
        ...

    def ping(self) -> bool:
        """R: Lightweight connectivity check for health endpoints."""
        ...
