"""
============================================================
TARJETA CRC — infrastructure/sessions/redis_store.py
============================================================
Class: RedisSessionStore

Responsibilities:
  - Guardar token -> user_id en Redis con TTL nativo (SET ... EX).
  - Compartir sesiones entre procesos/instancias.

Collaborators:
  - redis.Redis
  - domain.services.SessionStore (contrato)
  - crosscutting.exceptions.DatabaseError (Redis caído = store no disponible)

Constraints / Notes:
  - Namespace de claves para no pisar otras claves del mismo Redis.
  - La expiración la aplica Redis: GET de una clave vencida devuelve None.
  - Nunca loguear el token; solo el user_id.
============================================================
"""

from __future__ import annotations

from redis import Redis
from redis.exceptions import RedisError

from ...crosscutting.exceptions import DatabaseError
from ...crosscutting.logger import logger
from ...domain.services import SessionStore
from .in_memory import new_session_token


class RedisSessionStore(SessionStore):
    SESSION_PREFIX = "facecounter:session:"

    def __init__(self, *, redis: Redis, ttl_seconds: int) -> None:
        if ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be > 0")
        self._redis = redis
        self._ttl_seconds = ttl_seconds

    @classmethod
    def from_url(cls, redis_url: str, *, ttl_seconds: int) -> "RedisSessionStore":
        client = Redis.from_url(
            redis_url,
            decode_responses=True,
            socket_connect_timeout=2,
            socket_timeout=5,
            health_check_interval=30,
        )
        return cls(redis=client, ttl_seconds=ttl_seconds)

    def _k(self, token: str) -> str:
        """Compone clave namespaced."""
        return f"{self.SESSION_PREFIX}{token}"

    def create(self, user_id: str) -> str:
        token = new_session_token()
        try:
            self._redis.set(self._k(token), user_id, ex=self._ttl_seconds)
        except RedisError as exc:
            logger.exception(
                "RedisSessionStore: create failed",
                extra={"user_id": user_id, "error": str(exc)},
            )
            raise DatabaseError("Session store unavailable", original_error=exc) from exc
        return token

    def resolve(self, token: str) -> str | None:
        if not token:
            return None
        try:
            value = self._redis.get(self._k(token))
        except RedisError as exc:
            logger.exception(
                "RedisSessionStore: resolve failed", extra={"error": str(exc)}
            )
            raise DatabaseError("Session store unavailable", original_error=exc) from exc
        if value is None:
            return None
        return value.decode() if isinstance(value, bytes) else str(value)

    def destroy(self, token: str) -> None:
        if not token:
            return
        try:
            self._redis.delete(self._k(token))
        except RedisError as exc:
            logger.exception(
                "RedisSessionStore: destroy failed", extra={"error": str(exc)}
            )
            raise DatabaseError("Session store unavailable", original_error=exc) from exc

    def ping(self) -> bool:
        try:
            return bool(self._redis.ping())
        except RedisError:
            return False
