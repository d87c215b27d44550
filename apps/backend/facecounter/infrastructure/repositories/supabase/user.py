"""
============================================================
TARJETA CRC — infrastructure/repositories/supabase/user.py
============================================================
Class: SupabaseUserRepository

Responsibilities:
  - Credential store en la nube (tabla `users` de Supabase vía PostgREST).
  - Mapear filas (dicts) -> entidad `User`.
  - Traducir el error de unicidad de Postgres (23505) a DuplicateEmailError.
  - Exponer el resto de fallos (API / transporte) vía DatabaseError.

Collaborators:
  - supabase.Client (supabase-py)
  - postgrest.exceptions.APIError
  - domain.profile (el profile vive en una columna JSON nativa;
    se toleran valores guardados como texto)
  - crosscutting.exceptions / crosscutting.logger

Constraints / Notes:
  - El id lo asigna el backend (default de la tabla); lo exponemos como str.
  - El cliente se inyecta por __init__ (tests usan un doble).
============================================================
"""

from __future__ import annotations

from typing import Any, Callable, Optional, TypeVar

import httpx
from postgrest.exceptions import APIError
from supabase import Client, create_client

from ....crosscutting.exceptions import DatabaseError, DuplicateEmailError
from ....crosscutting.logger import logger
from ....domain.entities import User
from ....domain.profile import deserialize_profile
from ....domain.repositories import UserRepository

_TABLE = "users"
_USER_COLUMNS = "id, email, password_hash, profile"

# R: unique_violation en Postgres.
_PG_UNIQUE_VIOLATION = "23505"

T = TypeVar("T")


def create_supabase_client(url: str, key: str) -> Client:
    """Factory del cliente (una vez por proceso, desde el container)."""
    return create_client(url, key)


class SupabaseUserRepository(UserRepository):
    def __init__(self, client: Client) -> None:
        self._client = client

    @staticmethod
    def _row_to_user(row: dict[str, Any]) -> User:
        try:
            profile = deserialize_profile(row.get("profile"))
        except ValueError as exc:
            raise DatabaseError(
                f"Invalid stored profile for user {row.get('id')}"
            ) from exc

        return User(
            id=str(row["id"]),
            email=row["email"],
            password_hash=row.get("password_hash"),
            profile=profile,
        )

    def _run(self, op: Callable[[], T], *, log_msg: str, log_extra: dict) -> T:
        """Ejecuta una llamada PostgREST con manejo consistente de errores."""
        try:
            return op()
        except (APIError, httpx.HTTPError) as exc:
            logger.exception(log_msg, extra={**log_extra, "error": str(exc)})
            raise DatabaseError(f"{log_msg}: {exc}", original_error=exc) from exc

    def _select_one(self, column: str, value: str, *, log_msg: str) -> Optional[User]:
        response = self._run(
            lambda: self._client.table(_TABLE)
            .select(_USER_COLUMNS)
            .eq(column, value)
            .limit(1)
            .execute(),
            log_msg=log_msg,
            log_extra={column: value},
        )
        rows = response.data or []
        return self._row_to_user(rows[0]) if rows else None

    def create_user(
        self,
        *,
        email: str,
        password_hash: Optional[str],
        profile: Optional[dict[str, Any]] = None,
    ) -> User:
        payload = {"email": email, "password_hash": password_hash, "profile": profile}
        try:
            response = self._client.table(_TABLE).insert(payload).execute()
        except APIError as exc:
            if exc.code == _PG_UNIQUE_VIOLATION:
                logger.info(
                    "SupabaseUserRepository: duplicate email", extra={"email": email}
                )
                raise DuplicateEmailError(email, original_error=exc) from exc
            logger.exception(
                "SupabaseUserRepository: create_user failed",
                extra={"email": email, "error": str(exc)},
            )
            raise DatabaseError(
                f"Failed to create user: {exc.message}", original_error=exc
            ) from exc
        except httpx.HTTPError as exc:
            logger.exception(
                "SupabaseUserRepository: create_user transport failure",
                extra={"email": email, "error": str(exc)},
            )
            raise DatabaseError(
                f"Failed to create user: {exc}", original_error=exc
            ) from exc

        rows = response.data or []
        if not rows:
            raise DatabaseError("Failed to create user: empty insert response")
        return self._row_to_user(rows[0])

    def get_user_by_email(self, email: str) -> Optional[User]:
        return self._select_one(
            "email", email, log_msg="SupabaseUserRepository: get_user_by_email failed"
        )

    def get_user_by_id(self, user_id: str) -> Optional[User]:
        return self._select_one(
            "id", user_id, log_msg="SupabaseUserRepository: get_user_by_id failed"
        )

    def update_profile(self, user_id: str, profile: Optional[dict[str, Any]]) -> bool:
        response = self._run(
            lambda: self._client.table(_TABLE)
            .update({"profile": profile})
            .eq("id", user_id)
            .execute(),
            log_msg="SupabaseUserRepository: update_profile failed",
            log_extra={"user_id": user_id},
        )
        return bool(response.data)

    def ping(self) -> bool:
        try:
            self._client.table(_TABLE).select("id").limit(1).execute()
            return True
        except (APIError, httpx.HTTPError) as exc:
            logger.warning(
                "SupabaseUserRepository: ping failed", extra={"error": str(exc)}
            )
            return False
