"""
============================================================
TARJETA CRC — infrastructure/repositories/sqlite/user.py
============================================================
Class: SqliteUserRepository

Responsibilities:
  - Credential store embebido (un archivo SQLite, sin servidor).
  - Crear el esquema `users` al arrancar (idempotente).
  - Ejecutar SQL parametrizado y mapear filas -> entidad `User`.
  - Traducir la violación UNIQUE(email) a DuplicateEmailError.
  - Exponer el resto de fallos vía DatabaseError con logging estructurado.

Collaborators:
  - sqlite3 (stdlib)
  - domain.profile (serialize/deserialize del profile como texto JSON)
  - crosscutting.exceptions (DatabaseError, DuplicateEmailError)
  - crosscutting.logger

Constraints / Notes:
  - Una conexión por operación: sqlite3 no comparte conexiones entre threads
    y FastAPI ejecuta endpoints sync en un threadpool.
  - Retorna None cuando no existe el recurso (no exception por "not found").
  - SQL parametrizado siempre (nunca interpolar input de usuario).
============================================================
"""

from __future__ import annotations

import sqlite3
from contextlib import closing
from pathlib import Path
from typing import Any, Iterable, Optional
from uuid import uuid4

from ....crosscutting.exceptions import DatabaseError, DuplicateEmailError
from ....crosscutting.logger import logger
from ....domain.entities import User
from ....domain.profile import deserialize_profile, serialize_profile
from ....domain.repositories import UserRepository

# R: Lista explícita de columnas para mantener el contrato estable con el esquema.
_USER_COLUMNS = "id, email, password_hash, profile"

_SCHEMA = """
    CREATE TABLE IF NOT EXISTS users (
        id TEXT PRIMARY KEY,
        email TEXT UNIQUE NOT NULL,
        password_hash TEXT,
        profile TEXT
    )
"""


class SqliteUserRepository(UserRepository):
    def __init__(self, db_path: str | Path) -> None:
        self._db_path = str(db_path)

    # =========================================================
    # Helpers internos
    # =========================================================
    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self._db_path)
        conn.row_factory = sqlite3.Row
        return conn

    @staticmethod
    def _row_to_user(row: sqlite3.Row) -> User:
        """
        Convierte una fila de `users` a `User`.

        Un profile corrupto es drift de datos -> DatabaseError.
        """
        try:
            profile = deserialize_profile(row["profile"])
        except ValueError as exc:
            raise DatabaseError(f"Invalid stored profile for user {row['id']}") from exc

        return User(
            id=row["id"],
            email=row["email"],
            password_hash=row["password_hash"],
            profile=profile,
        )

    def _fetchone(
        self,
        *,
        query: str,
        params: Iterable[object],
        log_msg: str,
        log_extra: dict[str, object],
    ) -> sqlite3.Row | None:
        try:
            with closing(self._connect()) as conn:
                return conn.execute(query, tuple(params)).fetchone()
        except sqlite3.Error as exc:
            logger.exception(log_msg, extra={**log_extra, "error": str(exc)})
            raise DatabaseError(f"{log_msg}: {exc}", original_error=exc) from exc

    # =========================================================
    # Esquema
    # =========================================================
    def ensure_schema(self) -> None:
        """R: Crea la tabla users si no existe."""
        try:
            with closing(self._connect()) as conn, conn:
                conn.execute(_SCHEMA)
        except sqlite3.Error as exc:
            logger.exception(
                "SqliteUserRepository: ensure_schema failed",
                extra={"db_path": self._db_path, "error": str(exc)},
            )
            raise DatabaseError(
                f"Could not initialise schema: {exc}", original_error=exc
            ) from exc

    # =========================================================
    # API del repositorio
    # =========================================================
    def create_user(
        self,
        *,
        email: str,
        password_hash: Optional[str],
        profile: Optional[dict[str, Any]] = None,
    ) -> User:
        user_id = uuid4().hex
        serialized = serialize_profile(profile)

        try:
            with closing(self._connect()) as conn, conn:
                conn.execute(
                    f"INSERT INTO users ({_USER_COLUMNS}) VALUES (?, ?, ?, ?)",
                    (user_id, email, password_hash, serialized),
                )
        except sqlite3.IntegrityError as exc:
            # R: La única restricción que el input puede violar es UNIQUE(email).
            logger.info(
                "SqliteUserRepository: duplicate email", extra={"email": email}
            )
            raise DuplicateEmailError(email, original_error=exc) from exc
        except sqlite3.Error as exc:
            logger.exception(
                "SqliteUserRepository: create_user failed",
                extra={"email": email, "error": str(exc)},
            )
            raise DatabaseError(
                f"Failed to create user: {exc}", original_error=exc
            ) from exc

        return User(
            id=user_id,
            email=email,
            password_hash=password_hash,
            profile=deserialize_profile(serialized),
        )

    def get_user_by_email(self, email: str) -> Optional[User]:
        row = self._fetchone(
            query=f"SELECT {_USER_COLUMNS} FROM users WHERE email = ?",
            params=(email,),
            log_msg="SqliteUserRepository: get_user_by_email failed",
            log_extra={"email": email},
        )
        return self._row_to_user(row) if row else None

    def get_user_by_id(self, user_id: str) -> Optional[User]:
        row = self._fetchone(
            query=f"SELECT {_USER_COLUMNS} FROM users WHERE id = ?",
            params=(user_id,),
            log_msg="SqliteUserRepository: get_user_by_id failed",
            log_extra={"user_id": user_id},
        )
        return self._row_to_user(row) if row else None

    def update_profile(self, user_id: str, profile: Optional[dict[str, Any]]) -> bool:
        serialized = serialize_profile(profile)
        try:
            with closing(self._connect()) as conn, conn:
                cursor = conn.execute(
                    "UPDATE users SET profile = ? WHERE id = ?",
                    (serialized, user_id),
                )
                return cursor.rowcount > 0
        except sqlite3.Error as exc:
            logger.exception(
                "SqliteUserRepository: update_profile failed",
                extra={"user_id": user_id, "error": str(exc)},
            )
            raise DatabaseError(
                f"Failed to update profile: {exc}", original_error=exc
            ) from exc

    def ping(self) -> bool:
        try:
            with closing(self._connect()) as conn:
                conn.execute("SELECT 1").fetchone()
            return True
        except sqlite3.Error:
            return False
