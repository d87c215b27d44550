"""
============================================================
TARJETA CRC — infrastructure/sessions/in_memory.py
============================================================
Class: InMemorySessionStore

Responsibilities:
  - Emitir tokens opacos y mapearlos a user_id.
  - Aplicar expiración absoluta (TTL desde la emisión), chequeada en resolve().
  - Destruir sesiones de forma idempotente.

Collaborators:
  - domain.services.SessionStore (contrato)
  - secrets (tokens URL-safe)

Constraints / Notes:
  - Thread-safe: acceso protegido por Lock.
  - Expiración perezosa: las entradas vencidas se borran al resolverlas
    y en cada create().
  - Reloj inyectable (tests controlan el paso del tiempo).
============================================================
"""

from __future__ import annotations

import secrets
import time
from dataclasses import dataclass
from threading import Lock
from typing import Callable, Dict

from ...domain.services import SessionStore

TOKEN_BYTES = 32


def new_session_token() -> str:
    return secrets.token_urlsafe(TOKEN_BYTES)


@dataclass(frozen=True, slots=True)
class _SessionEntry:
    user_id: str
    expires_at: float


class InMemorySessionStore(SessionStore):
    def __init__(
        self,
        *,
        ttl_seconds: int,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be > 0")
        self._ttl_seconds = ttl_seconds
        self._clock = clock
        self._lock = Lock()
        self._sessions: Dict[str, _SessionEntry] = {}

    def create(self, user_id: str) -> str:
        token = new_session_token()
        with self._lock:
            self._sweep_expired()
            self._sessions[token] = _SessionEntry(
                user_id=user_id, expires_at=self._clock() + self._ttl_seconds
            )
        return token

    def resolve(self, token: str) -> str | None:
        if not token:
            return None
        with self._lock:
            entry = self._sessions.get(token)
            if entry is None:
                return None
            if self._clock() >= entry.expires_at:
                del self._sessions[token]
                return None
            return entry.user_id

    def destroy(self, token: str) -> None:
        if not token:
            return
        with self._lock:
            self._sessions.pop(token, None)

    def _sweep_expired(self) -> None:
        # R: Llamar con el lock tomado.
        now = self._clock()
        expired = [t for t, e in self._sessions.items() if now >= e.expires_at]
        for token in expired:
            del self._sessions[token]

    def ping(self) -> bool:
        return True

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)
