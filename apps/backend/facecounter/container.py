"""
===============================================================================
TARJETA CRC — facecounter/container.py (Composition Root / DI manual)
===============================================================================

Responsabilidades:
  - Componer dependencias (credential store, sesiones, hasher, OAuth, coach).
  - Exponer factories para FastAPI (Depends).
  - Mantener singletons con caching (lru_cache) para recursos compartidos.
  - Centralizar decisiones runtime basadas en Settings (config).

Colaboradores:
  - facecounter.crosscutting.config.get_settings
  - facecounter.domain.* (puertos)
  - facecounter.infrastructure.* (implementaciones)
  - facecounter.application.usecases.* (casos de uso)

Patrones aplicados:
  - Composition Root
  - Dependency Inversion (use cases dependen de puertos)
  - Lazy singletons con lru_cache

Notas:
  - Este archivo NO contiene lógica de negocio.
  - Este archivo NO debe depender de FastAPI (solo expone factories).
  - Los tests reemplazan singletons con `app.dependency_overrides` o limpian
    el cache con `reset_container()`.
===============================================================================
"""

from __future__ import annotations

from functools import lru_cache

from .application.usecases.auth import (
    GetCurrentUserUseCase,
    HandleOAuthCallbackUseCase,
    LogInUseCase,
    LogOutUseCase,
    SignUpUseCase,
    StartOAuthUseCase,
    UpdateProfileUseCase,
)
from .application.usecases.interview import (
    ContinueInterviewUseCase,
    ScoreInterviewUseCase,
)
from .crosscutting.config import CredentialStoreBackend, get_settings
from .crosscutting.logger import logger
from .domain.repositories import UserRepository
from .domain.services import (
    InterviewLLMService,
    OAuthProvider,
    PasswordHasher,
    SessionStore,
)
from .identity.passwords import Argon2PasswordHasher
from .infrastructure.repositories import (
    InMemoryUserRepository,
    SqliteUserRepository,
    SupabaseUserRepository,
    create_supabase_client,
)
from .infrastructure.services import (
    FakeInterviewLLMService,
    GoogleInterviewLLMService,
    GoogleOAuthAdapter,
    create_retry_decorator,
)
from .infrastructure.sessions import InMemorySessionStore, RedisSessionStore

# =============================================================================
# Credential store / sesiones (singletons)
# =============================================================================


@lru_cache(maxsize=1)
def get_user_repository() -> UserRepository:
    """Credential store elegido por Settings (memory / sqlite / supabase)."""
    settings = get_settings()
    backend = settings.resolve_credential_store()

    if backend == CredentialStoreBackend.MEMORY:
        repository: UserRepository = InMemoryUserRepository()
    elif backend == CredentialStoreBackend.SUPABASE:
        repository = SupabaseUserRepository(
            create_supabase_client(settings.supabase_url, settings.supabase_anon_key)
        )
    else:
        sqlite_repository = SqliteUserRepository(settings.resolve_sqlite_path())
        sqlite_repository.ensure_schema()
        repository = sqlite_repository

    logger.info("credential store ready", extra={"store": backend.value})
    return repository


@lru_cache(maxsize=1)
def get_session_store() -> SessionStore:
    """Redis si hay REDIS_URL; si no, memoria del proceso."""
    settings = get_settings()
    if settings.redis_url:
        return RedisSessionStore.from_url(
            settings.redis_url, ttl_seconds=settings.session_ttl_seconds
        )
    return InMemorySessionStore(ttl_seconds=settings.session_ttl_seconds)


# =============================================================================
# Servicios (singletons)
# =============================================================================


@lru_cache(maxsize=1)
def get_password_hasher() -> PasswordHasher:
    return Argon2PasswordHasher()


@lru_cache(maxsize=1)
def get_oauth_provider() -> OAuthProvider | None:
    """Google OAuth, o None si GOOGLE_CLIENT_ID no está configurado."""
    settings = get_settings()
    if not settings.oauth_configured():
        logger.warning("Google OAuth not configured")
        return None
    return GoogleOAuthAdapter(
        client_id=settings.google_client_id,
        client_secret=settings.google_client_secret,
        timeout_seconds=settings.oauth_http_timeout_seconds,
    )


@lru_cache(maxsize=1)
def get_interview_llm_service() -> InterviewLLMService:
    """Coach de entrevistas (fake en test/CI si está habilitado)."""
    settings = get_settings()
    if settings.fake_llm:
        return FakeInterviewLLMService()
    return GoogleInterviewLLMService(
        settings.google_api_key,
        model_id=settings.gemini_model,
        retry_decorator=create_retry_decorator(),
    )


def reset_container() -> None:
    """R: Limpia los singletons (tests que cambian Settings)."""
    for factory in (
        get_user_repository,
        get_session_store,
        get_password_hasher,
        get_oauth_provider,
        get_interview_llm_service,
    ):
        factory.cache_clear()


# =============================================================================
# Casos de uso (factory por request)
# =============================================================================


def get_sign_up_use_case() -> SignUpUseCase:
    return SignUpUseCase(
        users=get_user_repository(),
        password_hasher=get_password_hasher(),
        sessions=get_session_store(),
    )


def get_log_in_use_case() -> LogInUseCase:
    return LogInUseCase(
        users=get_user_repository(),
        password_hasher=get_password_hasher(),
        sessions=get_session_store(),
    )


def get_current_user_use_case() -> GetCurrentUserUseCase:
    return GetCurrentUserUseCase(
        users=get_user_repository(), sessions=get_session_store()
    )


def get_log_out_use_case() -> LogOutUseCase:
    return LogOutUseCase(sessions=get_session_store())


def get_update_profile_use_case() -> UpdateProfileUseCase:
    return UpdateProfileUseCase(
        users=get_user_repository(), sessions=get_session_store()
    )


def get_start_oauth_use_case() -> StartOAuthUseCase:
    return StartOAuthUseCase(oauth_provider=get_oauth_provider())


def get_handle_oauth_callback_use_case() -> HandleOAuthCallbackUseCase:
    """Caso de uso: callback de Google (exchange + find-or-create + sesión)."""
    return HandleOAuthCallbackUseCase(
        oauth_provider=get_oauth_provider(),
        users=get_user_repository(),
        sessions=get_session_store(),
    )


def get_continue_interview_use_case() -> ContinueInterviewUseCase:
    return ContinueInterviewUseCase(
        users=get_user_repository(),
        sessions=get_session_store(),
        llm_service=get_interview_llm_service(),
    )


def get_score_interview_use_case() -> ScoreInterviewUseCase:
    return ScoreInterviewUseCase(
        sessions=get_session_store(), llm_service=get_interview_llm_service()
    )
