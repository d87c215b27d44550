"""
Name: Application Configuration (Settings)

Responsibilities:
  - Centralized, typed configuration using pydantic-settings
  - Validate environment variables at startup
  - Resolve the credential store backend ONCE (memory / sqlite / supabase)
  - Resolve the public base URL used for OAuth redirects

Collaborators:
  - container.py: reads settings to build repositories, session store, adapters
  - api/main.py: reads settings for CORS and startup logging
  - identity/sessions.py: reads cookie settings

Constraints:
  - No business logic, pure configuration
  - Nothing else in the codebase may inspect SUPABASE_* to decide the backend;
    they call resolve_credential_store() (or get the repository from the container)

Notes:
  - Singleton via lru_cache
  - Defaults: 24h sessions, SameSite=None + Secure cookies, facecounter.db
    (/tmp/facecounter.db on Vercel)
"""

from enum import Enum
from functools import lru_cache

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class CredentialStoreBackend(str, Enum):
    """Concrete backends for the credential store."""

    MEMORY = "memory"
    SQLITE = "sqlite"
    SUPABASE = "supabase"


_VERCEL_SQLITE_PATH = "/tmp/facecounter.db"
_DEFAULT_PUBLIC_URL = "http://localhost:3000"


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Attributes:
        app_env: Application environment (development/test/production)
        app_url: Public base URL of the deployment (used for OAuth redirect_uri)
        vercel: "1" when running on Vercel
        vercel_url: Vercel deployment host (fallback for app_url)
        credential_store: Explicit backend override (memory/sqlite/supabase)
        sqlite_path: Embedded database file
        supabase_url: Supabase project URL
        supabase_anon_key: Supabase anon key
        redis_url: Redis connection string for sessions (optional)
        session_ttl_seconds: Absolute session lifetime (default: 24h)
        session_cookie_name: Cookie carrying the session token
        session_cookie_secure: Set Secure on the session cookie
        session_cookie_samesite: SameSite policy (none/lax/strict)
        google_client_id: Google OAuth client id
        google_client_secret: Google OAuth client secret
        oauth_http_timeout_seconds: Transport timeout for provider calls
        google_api_key: Gemini API key (interview coach)
        gemini_model: Gemini model id
        fake_llm: Use the deterministic interview coach (tests/CI)
        allowed_origins: Comma-separated CORS origins
        log_level: Logging level
        log_json: Emit JSON logs
    """

    # Environment
    app_env: str = "development"
    app_url: str = ""
    vercel: str = ""
    vercel_url: str = ""

    # Credential store
    credential_store: str = ""
    sqlite_path: str = "facecounter.db"
    supabase_url: str = ""
    supabase_anon_key: str = ""

    # Sessions
    redis_url: str = ""
    session_ttl_seconds: int = 24 * 60 * 60
    session_cookie_name: str = "facecounter_session"
    session_cookie_secure: bool = True
    session_cookie_samesite: str = "none"

    # Google OAuth
    google_client_id: str = ""
    google_client_secret: str = ""
    oauth_http_timeout_seconds: float = 10.0

    # Interview coach (Gemini)
    google_api_key: str = ""
    gemini_model: str = "gemini-2.0-flash"
    fake_llm: bool = False

    # Retry/Resilience
    retry_max_attempts: int = 3
    retry_base_delay_seconds: float = 1.0
    retry_max_delay_seconds: float = 30.0

    # CORS
    allowed_origins: str = _DEFAULT_PUBLIC_URL

    # Observability
    log_level: str = "INFO"
    log_json: bool = True

    @field_validator("credential_store")
    @classmethod
    def credential_store_valid(cls, v: str) -> str:
        value = (v or "").strip().lower()
        if value and value not in {b.value for b in CredentialStoreBackend}:
            raise ValueError("credential_store must be memory, sqlite, or supabase")
        return value

    @field_validator("session_cookie_samesite")
    @classmethod
    def samesite_valid(cls, v: str) -> str:
        value = (v or "lax").strip().lower()
        if value not in {"none", "lax", "strict"}:
            raise ValueError("session_cookie_samesite must be none, lax, or strict")
        return value

    @field_validator("session_ttl_seconds")
    @classmethod
    def session_ttl_positive(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("session_ttl_seconds must be greater than 0")
        return v

    @model_validator(mode="after")
    def validate_backend_requirements(self):
        if self.credential_store == CredentialStoreBackend.SUPABASE.value and not (
            self.supabase_url and self.supabase_anon_key
        ):
            raise ValueError(
                "SUPABASE_URL and SUPABASE_ANON_KEY are required when CREDENTIAL_STORE=supabase"
            )
        return self

    @model_validator(mode="after")
    def validate_security_requirements(self):
        if not self.is_production():
            return self

        if not self.session_cookie_secure:
            raise ValueError("SESSION_COOKIE_SECURE must be true in production")
        if self.resolve_credential_store() == CredentialStoreBackend.MEMORY:
            raise ValueError("CREDENTIAL_STORE=memory is not allowed in production")
        return self

    def is_production(self) -> bool:
        return self.app_env.strip().lower() == "production"

    def is_vercel(self) -> bool:
        return self.vercel.strip() == "1"

    def resolve_credential_store(self) -> CredentialStoreBackend:
        """
        Decide which credential store backs the service.

        Order:
          1) explicit CREDENTIAL_STORE
          2) supabase when both SUPABASE_URL and SUPABASE_ANON_KEY are present
          3) sqlite
        """
        if self.credential_store:
            return CredentialStoreBackend(self.credential_store)
        if self.supabase_url and self.supabase_anon_key:
            return CredentialStoreBackend.SUPABASE
        return CredentialStoreBackend.SQLITE

    def resolve_sqlite_path(self) -> str:
        """The Vercel filesystem is read-only except /tmp."""
        if self.is_vercel() and self.sqlite_path == "facecounter.db":
            return _VERCEL_SQLITE_PATH
        return self.sqlite_path

    def public_base_url(self, fallback: str | None = None) -> str:
        """APP_URL, else https://VERCEL_URL, else the caller's fallback."""
        if self.app_url.strip():
            return self.app_url.strip().rstrip("/")
        if self.vercel_url.strip():
            return f"https://{self.vercel_url.strip().rstrip('/')}"
        return (fallback or _DEFAULT_PUBLIC_URL).rstrip("/")

    def oauth_configured(self) -> bool:
        return bool(self.google_client_id.strip())

    def get_allowed_origins_list(self) -> list[str]:
        """Parse comma-separated origins into a list."""
        return [
            origin.strip()
            for origin in self.allowed_origins.split(",")
            if origin.strip()
        ]

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",  # Ignore unknown env vars
    )


@lru_cache
def get_settings() -> Settings:
    """
    Get singleton Settings instance.

    Raises:
        ValidationError: If env vars are invalid
    """
    return Settings()
