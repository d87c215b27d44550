"""
Name: Pytest Configuration and Shared Fixtures

Responsibilities:
  - Configure test environment (memory store, fake coach, non-secure cookie)
  - Provide hand-written fakes (OAuth provider, clock)
  - Provide a TestClient wired to in-memory adapters

Collaborators:
  - pytest: Test framework
  - fastapi.testclient: HTTP-level tests
  - facecounter.container: use case factories overridden per test

Notes:
  - Env vars are set BEFORE importing facecounter: the logger reads Settings
    at import time
  - Argon2 runs with minimal cost parameters to keep the suite fast
"""

import os
import sys
from pathlib import Path

import pytest

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

os.environ["APP_ENV"] = "test"
os.environ["CREDENTIAL_STORE"] = "memory"
os.environ["SESSION_COOKIE_SECURE"] = "false"
os.environ["SESSION_COOKIE_SAMESITE"] = "lax"
os.environ["FAKE_LLM"] = "true"
os.environ["LOG_JSON"] = "true"
for _var in ("REDIS_URL", "GOOGLE_CLIENT_ID", "SUPABASE_URL", "APP_URL", "VERCEL"):
    os.environ.pop(_var, None)

from facecounter.crosscutting import config as app_config  # noqa: E402

app_config.Settings.model_config["env_file"] = None
app_config.get_settings.cache_clear()

from argon2 import PasswordHasher as Argon2Hasher  # noqa: E402

from facecounter.application.usecases.auth import (  # noqa: E402
    GetCurrentUserUseCase,
    HandleOAuthCallbackUseCase,
    LogInUseCase,
    LogOutUseCase,
    SignUpUseCase,
    StartOAuthUseCase,
    UpdateProfileUseCase,
)
from facecounter.application.usecases.interview import (  # noqa: E402
    ContinueInterviewUseCase,
    ScoreInterviewUseCase,
)
from facecounter.crosscutting.exceptions import (  # noqa: E402
    OAuthExchangeError,
    OAuthProfileError,
)
from facecounter.domain.entities import OAuthIdentity  # noqa: E402
from facecounter.identity.passwords import Argon2PasswordHasher  # noqa: E402
from facecounter.infrastructure.repositories import (  # noqa: E402
    InMemoryUserRepository,
)
from facecounter.infrastructure.services import (  # noqa: E402
    FakeInterviewLLMService,
)
from facecounter.infrastructure.sessions import InMemorySessionStore  # noqa: E402


def pytest_configure(config) -> None:
    config.addinivalue_line(
        "markers", "unit: Unit tests (fast, no external dependencies)"
    )


# ============================================================================
# Fakes
# ============================================================================


class FakeClock:
    """R: Reloj controlable para expirar sesiones sin dormir."""

    def __init__(self, start: float = 1_000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeOAuthProvider:
    """
    R: Proveedor OAuth en memoria.

    - identities: code -> OAuthIdentity
    - fail_exchange / fail_profile: fuerzan la falla de cada etapa
    """

    def __init__(self, identities: dict[str, OAuthIdentity] | None = None) -> None:
        self.identities = dict(identities or {})
        self.fail_exchange = False
        self.fail_profile = False
        self.exchanged: list[tuple[str, str]] = []

    def build_authorization_url(self, *, redirect_uri: str) -> str:
        return f"https://idp.test/auth?redirect_uri={redirect_uri}"

    def exchange_code(self, *, code: str, redirect_uri: str) -> str:
        self.exchanged.append((code, redirect_uri))
        if self.fail_exchange or code not in self.identities:
            raise OAuthExchangeError("Bad Request")
        return f"access-{code}"

    def fetch_identity(self, access_token: str) -> OAuthIdentity:
        if self.fail_profile:
            raise OAuthProfileError("HTTP 401")
        return self.identities[access_token.removeprefix("access-")]


# ============================================================================
# Adapter fixtures
# ============================================================================


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def users() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture
def sessions(clock: FakeClock) -> InMemorySessionStore:
    return InMemorySessionStore(ttl_seconds=24 * 60 * 60, clock=clock)


@pytest.fixture(scope="session")
def password_hasher() -> Argon2PasswordHasher:
    return Argon2PasswordHasher(
        Argon2Hasher(time_cost=1, memory_cost=8, parallelism=1)
    )


@pytest.fixture
def oauth_provider() -> FakeOAuthProvider:
    return FakeOAuthProvider(
        {
            "code-b": OAuthIdentity(email="b@y.com", name="Bea"),
            "code-b-again": OAuthIdentity(email="B@Y.com", name="Bea"),
            "code-noname": OAuthIdentity(email="noname@y.com", name=None),
        }
    )


@pytest.fixture
def llm_service() -> FakeInterviewLLMService:
    return FakeInterviewLLMService()


# ============================================================================
# HTTP fixtures
# ============================================================================


@pytest.fixture
def api_client(users, sessions, password_hasher, oauth_provider, llm_service):
    """
    R: TestClient sobre la app real, con use cases construidos sobre fakes.

    La cookie de sesión persiste en el cookie jar del cliente.
    """
    from fastapi.testclient import TestClient

    from facecounter import container
    from facecounter.api.main import app

    overrides = {
        container.get_sign_up_use_case: lambda: SignUpUseCase(
            users=users, password_hasher=password_hasher, sessions=sessions
        ),
        container.get_log_in_use_case: lambda: LogInUseCase(
            users=users, password_hasher=password_hasher, sessions=sessions
        ),
        container.get_current_user_use_case: lambda: GetCurrentUserUseCase(
            users=users, sessions=sessions
        ),
        container.get_log_out_use_case: lambda: LogOutUseCase(sessions=sessions),
        container.get_update_profile_use_case: lambda: UpdateProfileUseCase(
            users=users, sessions=sessions
        ),
        container.get_start_oauth_use_case: lambda: StartOAuthUseCase(
            oauth_provider=oauth_provider
        ),
        container.get_handle_oauth_callback_use_case: lambda: HandleOAuthCallbackUseCase(
            oauth_provider=oauth_provider, users=users, sessions=sessions
        ),
        container.get_continue_interview_use_case: lambda: ContinueInterviewUseCase(
            users=users, sessions=sessions, llm_service=llm_service
        ),
        container.get_score_interview_use_case: lambda: ScoreInterviewUseCase(
            sessions=sessions, llm_service=llm_service
        ),
    }
    app.dependency_overrides.update(overrides)
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
