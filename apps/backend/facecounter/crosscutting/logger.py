"""
===============================================================================
MÓDULO: Logger estructurado (JSON) con contexto de request
===============================================================================

Objetivo
--------
Loguear de forma:
- Parseable (JSON)
- Correlacionable (request_id)
- Segura (redacción de passwords, hashes, tokens de sesión y códigos OAuth)

-------------------------------------------------------------------------------
CRC (Component Card)
-------------------------------------------------------------------------------
Componente:
  JSONFormatter + setup_logger()

Responsabilidades:
  - Formatear logs como JSON
  - Enriquecer con contexto (request_id, path, method)
  - Redactar campos sensibles y limitar tamaños

Colaboradores:
  - facecounter/context.py (ContextVars)
  - crosscutting/config.py (nivel y formato)
===============================================================================
"""

from __future__ import annotations

import json
import logging
import os
import sys
import traceback
from datetime import datetime, timezone
from typing import Any

# Campos internos del LogRecord que NO queremos copiar como "extra".
_INTERNAL_LOGRECORD_KEYS: set[str] = {
    "name",
    "msg",
    "args",
    "levelname",
    "levelno",
    "pathname",
    "filename",
    "module",
    "exc_info",
    "exc_text",
    "stack_info",
    "lineno",
    "funcName",
    "created",
    "msecs",
    "relativeCreated",
    "thread",
    "threadName",
    "processName",
    "process",
    "message",
    "taskName",
}

REDACTED = "***REDACTADO***"


class _Redactor:
    """
    ----------------------------------------------------------------------------
    CRC (Class Card)
    ----------------------------------------------------------------------------
    Clase:
      _Redactor

    Responsabilidades:
      - Redactar claves sensibles
      - Recortar strings gigantes
      - Mantener serialización segura en JSON

    Colaboradores:
      - JSONFormatter
    ----------------------------------------------------------------------------
    """

    SENSITIVE_KEYS = {
        "password",
        "passwd",
        "password_hash",
        "secret",
        "client_secret",
        "token",
        "session",
        "session_token",
        "code",
        "authorization",
        "cookie",
        "set-cookie",
        "api_key",
        "apikey",
        "access_token",
        "refresh_token",
        "id_token",
        "google_api_key",
        "supabase_anon_key",
    }

    def __init__(self, max_str: int = 8_000, max_depth: int = 4):
        self._max_str = max_str
        self._max_depth = max_depth

    def sanitize(self, value: Any, *, depth: int = 0, key: str | None = None) -> Any:
        # Regla 1: si la clave es sensible, redactar
        if key and key.lower() in self.SENSITIVE_KEYS:
            return REDACTED

        # Regla 2: depth limit
        if depth > self._max_depth:
            return "***TRUNCADO***"

        if isinstance(value, str):
            if len(value) <= self._max_str:
                return value
            return value[: self._max_str] + "…(truncado)"

        if isinstance(value, (bytes, bytearray)):
            return f"<bytes {len(value)}B>"

        if isinstance(value, dict):
            out: dict[str, Any] = {}
            for k, v in value.items():
                ks = str(k)
                out[ks] = self.sanitize(v, depth=depth + 1, key=ks)
            return out

        if isinstance(value, (list, tuple)):
            return [self.sanitize(v, depth=depth + 1, key=key) for v in value]

        # Fallback: serializable "as is", sino str()
        try:
            json.dumps(value)
            return value
        except (TypeError, ValueError):
            return str(value)


class JSONFormatter(logging.Formatter):
    """
    ----------------------------------------------------------------------------
    CRC (Class Card)
    ----------------------------------------------------------------------------
    Clase:
      JSONFormatter

    Responsabilidades:
      - Convertir LogRecord -> JSON
      - Enriquecer con contexto de request
      - Adjuntar stacktrace cuando hay excepción

    Colaboradores:
      - facecounter/context.get_context_dict()
      - _Redactor
    ----------------------------------------------------------------------------
    """

    def __init__(self):
        super().__init__()
        self._redactor = _Redactor()

    def format(self, record: logging.LogRecord) -> str:
        from ..context import get_context_dict

        payload: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
            "pid": os.getpid(),
        }

        payload.update(get_context_dict())

        # Extra fields: todo lo que venga en record.__dict__ que no sea interno
        for k, v in record.__dict__.items():
            if k in _INTERNAL_LOGRECORD_KEYS:
                continue
            payload[k] = self._redactor.sanitize(v, key=k)

        if record.exc_info:
            exc_type = record.exc_info[0].__name__ if record.exc_info[0] else None
            exc_msg = str(record.exc_info[1]) if record.exc_info[1] else None
            payload["exception"] = {
                "type": exc_type,
                "message": exc_msg,
                "stacktrace": traceback.format_exception(*record.exc_info),
            }

        return json.dumps(
            payload, ensure_ascii=False, default=str, separators=(",", ":")
        )


def setup_logger(name: str = "facecounter") -> logging.Logger:
    """
    Crea y configura el logger global.

    - Evita duplicación de handlers en reimport
    - Respeta log_level / log_json desde Settings
    """
    from .config import get_settings

    log = logging.getLogger(name)

    s = get_settings()
    level = (s.log_level or "INFO").upper()
    log.setLevel(getattr(logging, level, logging.INFO))

    if not log.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(
            JSONFormatter()
            if s.log_json
            else logging.Formatter("%(levelname)s %(name)s %(message)s")
        )
        log.addHandler(handler)

    return log


# Instancia global (import-friendly)
logger = setup_logger()
