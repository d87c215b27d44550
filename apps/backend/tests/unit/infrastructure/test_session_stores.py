"""
Name: Session Store Tests

Responsibilities:
  - Opaque, unique tokens
  - Absolute expiry checked lazily (fake clock)
  - destroy is idempotent
  - Redis adapter: SET EX with namespaced keys, outages -> DatabaseError
"""

from unittest.mock import MagicMock

import pytest
from facecounter.crosscutting.exceptions import DatabaseError
from facecounter.infrastructure.sessions import (
    InMemorySessionStore,
    RedisSessionStore,
)
from redis.exceptions import ConnectionError as RedisConnectionError

pytestmark = pytest.mark.unit

TTL = 24 * 60 * 60


# ============================================================================
# In-memory
# ============================================================================


def test_create_and_resolve(sessions):
    token = sessions.create("user-1")

    assert sessions.resolve(token) == "user-1"


def test_tokens_are_opaque_and_unique(sessions):
    tokens = {sessions.create("user-1") for _ in range(50)}

    assert len(tokens) == 50
    assert all("user-1" not in token for token in tokens)
    assert all(len(token) >= 40 for token in tokens)


def test_unknown_and_empty_tokens(sessions):
    assert sessions.resolve("nope") is None
    assert sessions.resolve("") is None


def test_session_expires_after_ttl(sessions, clock):
    token = sessions.create("user-1")

    clock.advance(TTL - 1)
    assert sessions.resolve(token) == "user-1"

    clock.advance(1)
    assert sessions.resolve(token) is None
    assert len(sessions) == 0


def test_expiry_is_absolute(sessions, clock):
    token = sessions.create("user-1")

    # R: Resolver no renueva la vida de la sesión.
    for _ in range(4):
        clock.advance(TTL / 4 - 1)
        sessions.resolve(token)
    clock.advance(4)

    assert sessions.resolve(token) is None


def test_destroy_is_idempotent(sessions):
    token = sessions.create("user-1")

    sessions.destroy(token)
    sessions.destroy(token)
    sessions.destroy("")

    assert sessions.resolve(token) is None


def test_invalid_ttl():
    with pytest.raises(ValueError):
        InMemorySessionStore(ttl_seconds=0)


def test_create_sweeps_expired_sessions(clock):
    store = InMemorySessionStore(ttl_seconds=10, clock=clock)
    for i in range(1000):
        store.create(f"user-{i}")
    assert len(store) == 1000

    clock.advance(3600)
    token = store.create("user-new")

    assert len(store) == 1
    assert store.resolve(token) == "user-new"


def test_sweep_keeps_live_sessions(clock):
    store = InMemorySessionStore(ttl_seconds=100, clock=clock)
    old = store.create("user-old")
    clock.advance(60)
    recent = store.create("user-recent")

    clock.advance(50)
    store.create("user-3")

    assert len(store) == 2
    assert store.resolve(old) is None
    assert store.resolve(recent) == "user-recent"


# ============================================================================
# Redis
# ============================================================================


@pytest.fixture
def redis_client() -> MagicMock:
    return MagicMock()


def test_redis_create_uses_set_ex(redis_client):
    store = RedisSessionStore(redis=redis_client, ttl_seconds=TTL)

    token = store.create("user-1")

    redis_client.set.assert_called_once_with(
        f"facecounter:session:{token}", "user-1", ex=TTL
    )


def test_redis_resolve(redis_client):
    redis_client.get.return_value = "user-1"
    store = RedisSessionStore(redis=redis_client, ttl_seconds=TTL)

    assert store.resolve("tok") == "user-1"
    redis_client.get.assert_called_once_with("facecounter:session:tok")


def test_redis_resolve_bytes_and_missing(redis_client):
    store = RedisSessionStore(redis=redis_client, ttl_seconds=TTL)

    redis_client.get.return_value = b"user-2"
    assert store.resolve("tok") == "user-2"

    redis_client.get.return_value = None
    assert store.resolve("tok") is None


def test_redis_destroy(redis_client):
    store = RedisSessionStore(redis=redis_client, ttl_seconds=TTL)

    store.destroy("tok")

    redis_client.delete.assert_called_once_with("facecounter:session:tok")


def test_redis_outage_is_database_error(redis_client):
    redis_client.get.side_effect = RedisConnectionError("down")
    redis_client.ping.side_effect = RedisConnectionError("down")
    store = RedisSessionStore(redis=redis_client, ttl_seconds=TTL)

    with pytest.raises(DatabaseError):
        store.resolve("tok")
    assert store.ping() is False
