"""
===============================================================================
ARCHIVO: crosscutting/metrics.py
===============================================================================

CRC CARD (Módulo)
-------------------------------------------------------------------------------
Nombre:
    Métricas (Prometheus)

Responsabilidades:
    - Definir métricas Prometheus en un registry propio.
    - Proveer funciones pequeñas y estables para registrar eventos/duraciones.
    - Cuidar cardinalidad (NO user_id, NO email, NO tokens).
    - Exponer helpers para generar la respuesta /metrics.

Colaboradores:
    - crosscutting.middleware: registra latencia y conteo HTTP.
    - application/usecases/auth: registra resultados de auth y fallas OAuth.
    - infrastructure/services/llm: registra latencia del LLM.
===============================================================================
"""

from __future__ import annotations

import re

from prometheus_client import (
    CONTENT_TYPE_LATEST,
    CollectorRegistry,
    Counter,
    Histogram,
    generate_latest,
)

_registry = CollectorRegistry()

# ------------------------
# HTTP
# ------------------------
_requests_total = Counter(
    "facecounter_requests_total",
    "Total de requests HTTP",
    ["endpoint", "method", "status"],
    registry=_registry,
)

_request_latency = Histogram(
    "facecounter_request_latency_seconds",
    "Latencia de requests HTTP (segundos)",
    ["endpoint", "method"],
    buckets=(0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0),
    registry=_registry,
)

# ------------------------
# Auth
# ------------------------
_auth_outcomes_total = Counter(
    "facecounter_auth_outcomes_total",
    "Resultados de operaciones de autenticación",
    ["operation", "result"],
    registry=_registry,
)

_oauth_failures_total = Counter(
    "facecounter_oauth_failures_total",
    "Fallas del flujo OAuth por etapa",
    ["stage"],
    registry=_registry,
)

# ------------------------
# Interview coach
# ------------------------
_llm_latency = Histogram(
    "facecounter_llm_latency_seconds",
    "Latencia de generación del LLM (segundos)",
    ["operation"],
    buckets=(0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0),
    registry=_registry,
)


def record_request_metrics(
    endpoint: str,
    method: str,
    status_code: int,
    latency_seconds: float,
) -> None:
    """Registra métricas HTTP.

    - endpoint se normaliza para no explotar cardinalidad.
    - status se agrupa por 2xx/4xx/5xx.
    """
    normalized = _normalize_endpoint(endpoint)
    _requests_total.labels(
        endpoint=normalized,
        method=method,
        status=_status_bucket(status_code),
    ).inc()
    _request_latency.labels(endpoint=normalized, method=method).observe(
        latency_seconds
    )


def record_auth_outcome(operation: str, result: str) -> None:
    """Cuenta resultados de auth (operation: signup/login/oauth, result: ok/<code>)."""
    _auth_outcomes_total.labels(operation=operation, result=result.lower()).inc()


def record_oauth_failure(stage: str) -> None:
    """Cuenta fallas OAuth (stage: exchange | profile | store)."""
    _oauth_failures_total.labels(stage=stage).inc()


def observe_llm_latency(operation: str, seconds: float) -> None:
    _llm_latency.labels(operation=operation).observe(seconds)


def _normalize_endpoint(path: str) -> str:
    """Normaliza paths para evitar cardinalidad alta."""
    path = re.sub(r"/[0-9a-f]{32}", "/{id}", path, flags=re.IGNORECASE)
    path = re.sub(r"/\d+", "/{id}", path)
    return path


def _status_bucket(code: int) -> str:
    """Agrupa status code para baja cardinalidad."""
    if 200 <= code < 300:
        return "2xx"
    if 300 <= code < 400:
        return "3xx"
    if 400 <= code < 500:
        return "4xx"
    if 500 <= code < 600:
        return "5xx"
    return "other"


def get_metrics_response() -> tuple[bytes, str]:
    """Genera el body y content-type para /metrics."""
    return generate_latest(_registry), CONTENT_TYPE_LATEST
