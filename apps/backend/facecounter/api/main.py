"""
Name: FastAPI Application Entry Point

Responsibilities:
  - Initialize FastAPI application with metadata (title, version)
  - Configure middleware (CORS with credentials, request context)
  - Mount auth, profile and interview routers
  - Expose health check and metrics endpoints

Collaborators:
  - FastAPI: ASGI web framework
  - CORSMiddleware: Cross-Origin Resource Sharing handler
  - RequestContextMiddleware: Request ID and logging context
  - container: credential store / session store singletons

Constraints:
  - CORS configurable via ALLOWED_ORIGINS env var (comma-separated)
  - Credentials allowed: the session travels in a cookie

Notes:
  - Middleware order matters: RequestContext → CORS → routes
  - /healthz follows Kubernetes health check convention
  - /metrics exposes Prometheus metrics

Production Readiness:
  - Settings validated on first load (lifespan touches them before serving)
  - Credential store schema prepared at startup
  - Request tracing with X-Request-Id header
  - Structured JSON logging with request correlation
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware

from ..container import get_session_store, get_user_repository
from ..crosscutting.config import get_settings
from ..crosscutting.logger import logger
from ..crosscutting.metrics import get_metrics_response
from ..crosscutting.middleware import REQUEST_ID_HEADER, RequestContextMiddleware
from .auth_routes import router as auth_router
from .exception_handlers import register_exception_handlers
from .interview_routes import router as interview_router
from .user_routes import router as user_router


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()

    # R: Resolver el backend una sola vez (SQLite crea el schema acá).
    get_user_repository()

    logger.info(
        "Facecounter API starting up",
        extra={
            "store": settings.resolve_credential_store().value,
            "sessions": "redis" if settings.redis_url else "memory",
            "oauth_configured": settings.oauth_configured(),
            "fake_llm": settings.fake_llm,
            "vercel": settings.is_vercel(),
        },
    )

    yield

    logger.info("Facecounter API shutting down")


# R: Create FastAPI application instance with API metadata
app = FastAPI(
    title="Facecounter API",
    version="0.1.0",
    lifespan=lifespan,
    openapi_tags=[
        {"name": "auth", "description": "Signup, login, session, Google OAuth"},
        {"name": "user", "description": "Onboarding profile"},
        {"name": "interview", "description": "AI interview coach"},
    ],
)

# R: Add request context middleware
app.add_middleware(RequestContextMiddleware)

# R: CORS with credentials (the session cookie is cross-site capable)
app.add_middleware(
    CORSMiddleware,
    allow_origins=get_settings().get_allowed_origins_list(),
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type", REQUEST_ID_HEADER],
    expose_headers=[REQUEST_ID_HEADER],
)

app.include_router(auth_router)
app.include_router(user_router)
app.include_router(interview_router)

# R: Register exception handlers for structured error responses
register_exception_handlers(app)


def _dependency_status(check, label: str) -> str:
    try:
        if check():
            return "connected"
    except Exception as e:
        logger.warning(f"Health check: {label} unavailable", extra={"error": str(e)})
    return "disconnected"


@app.get("/healthz")
def healthz(request: Request):
    """
    R: Health check that verifies the credential store and the session store.

    Returns:
        ok: True if both are operational
        store: "connected" or "disconnected"
        sessions: "connected" or "disconnected"
        request_id: Correlation ID for this request
    """
    store_status = _dependency_status(
        lambda: get_user_repository().ping(), "credential store"
    )
    sessions_status = _dependency_status(
        lambda: get_session_store().ping(), "session store"
    )
    return {
        "ok": store_status == "connected" and sessions_status == "connected",
        "store": store_status,
        "sessions": sessions_status,
        "request_id": getattr(request.state, "request_id", None),
    }


@app.get("/readyz")
def readyz(request: Request, response: Response):
    """R: Minimal readiness check; 503 while the credential store is down."""
    store_status = _dependency_status(
        lambda: get_user_repository().ping(), "credential store"
    )
    ok = store_status == "connected"
    if not ok:
        response.status_code = 503
    return {"ok": ok, "request_id": getattr(request.state, "request_id", None)}


# R: Prometheus metrics endpoint
@app.get("/metrics")
def metrics():
    """R: Expose Prometheus metrics (text format)."""
    body, content_type = get_metrics_response()
    return Response(content=body, media_type=content_type)
