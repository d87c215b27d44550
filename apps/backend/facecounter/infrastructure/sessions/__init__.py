"""
Session stores: opaque token -> user_id with absolute expiry.

- InMemorySessionStore: single process (default)
- RedisSessionStore: shared across processes (REDIS_URL)
"""

from .in_memory import InMemorySessionStore
from .redis_store import RedisSessionStore

__all__ = ["InMemorySessionStore", "RedisSessionStore"]
