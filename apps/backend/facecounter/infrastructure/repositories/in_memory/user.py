"""
============================================================
TARJETA CRC — infrastructure/repositories/in_memory/user.py
============================================================
Class: InMemoryUserRepository

Responsibilities:
  - Almacenar usuarios en memoria (tests / local dev / CREDENTIAL_STORE=memory).
  - Replicar la semántica de los backends reales: email único, ids opacos,
    reemplazo completo del profile.

Collaborators:
  - domain.entities.User
  - domain.repositories.UserRepository (contrato a implementar)
  - crosscutting.exceptions.DuplicateEmailError

Constraints / Notes:
  - Thread-safe: acceso protegido por Lock.
  - Copias defensivas del profile: evita aliasing de dicts mutables entre callers.
============================================================
"""

from __future__ import annotations

import copy
from threading import Lock
from typing import Any, Dict, Optional
from uuid import uuid4

from ....crosscutting.exceptions import DuplicateEmailError
from ....domain.entities import User
from ....domain.repositories import UserRepository


class InMemoryUserRepository(UserRepository):
    """
    Modelo mental:
    - _users es la "tabla" (id -> User).
    - _ids_by_email es el índice único (email -> id).
    """

    def __init__(self) -> None:
        self._lock = Lock()
        self._users: Dict[str, User] = {}
        self._ids_by_email: Dict[str, str] = {}

    @staticmethod
    def _copy(user: User) -> User:
        """R: Copia defensiva del profile."""
        return User(
            id=user.id,
            email=user.email,
            password_hash=user.password_hash,
            profile=copy.deepcopy(user.profile),
        )

    def create_user(
        self,
        *,
        email: str,
        password_hash: Optional[str],
        profile: Optional[dict[str, Any]] = None,
    ) -> User:
        with self._lock:
            if email in self._ids_by_email:
                raise DuplicateEmailError(email)

            user = User(
                id=uuid4().hex,
                email=email,
                password_hash=password_hash,
                profile=copy.deepcopy(profile),
            )
            self._users[user.id] = user
            self._ids_by_email[email] = user.id
            return self._copy(user)

    def get_user_by_email(self, email: str) -> Optional[User]:
        with self._lock:
            user_id = self._ids_by_email.get(email)
            if user_id is None:
                return None
            return self._copy(self._users[user_id])

    def get_user_by_id(self, user_id: str) -> Optional[User]:
        with self._lock:
            user = self._users.get(user_id)
            return self._copy(user) if user else None

    def update_profile(self, user_id: str, profile: Optional[dict[str, Any]]) -> bool:
        with self._lock:
            user = self._users.get(user_id)
            if user is None:
                return False
            self._users[user_id] = User(
                id=user.id,
                email=user.email,
                password_hash=user.password_hash,
                profile=copy.deepcopy(profile),
            )
            return True

    def delete_user(self, user_id: str) -> None:
        """R: Solo para tests (simula un registro que desapareció)."""
        with self._lock:
            user = self._users.pop(user_id, None)
            if user is not None:
                self._ids_by_email.pop(user.email, None)

    def ping(self) -> bool:
        return True
