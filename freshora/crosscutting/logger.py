"""
===============================================================================
MÓDULO: Logger estructurado (JSON) con contexto de request
===============================================================================

Objetivo
--------
Cada línea de log es un objeto JSON con el request_id del request en curso.
Passwords, hashes, tokens y el secreto de admin se reemplazan por un marcador
antes de serializar.

-------------------------------------------------------------------------------
CRC (Component Card)
-------------------------------------------------------------------------------
Componente:
  JSONFormatter + setup_logger()

Responsabilidades:
  - Serializar LogRecord (mensaje + extras + contexto + excepción)
  - Redactar claves sensibles en cualquier nivel de anidamiento
  - Elegir formato (JSON / texto plano) según Settings.log_json

Colaboradores:
  - freshora/context.py (ContextVars)
  - crosscutting/config.py (log_level / log_json)
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

from ..context import get_context_dict

REDACTED = "***REDACTADO***"

# Atributos estándar de un LogRecord: todo lo demás llegó vía `extra=`.
_STANDARD_ATTRS = frozenset(
    logging.LogRecord("", logging.INFO, "", 0, "", (), None).__dict__
) | {"message", "asctime", "taskName"}

_SENSITIVE_MARKERS = ("password", "secret", "token", "authorization", "cookie")

_MAX_STR = 4_000
_MAX_DEPTH = 4


def _is_sensitive(key: str | None) -> bool:
    if not key:
        return False
    lowered = key.lower()
    return any(marker in lowered for marker in _SENSITIVE_MARKERS)


def redact(value: Any, *, key: str | None = None, depth: int = 0) -> Any:
    """Copia JSON-friendly de `value` con secretos reemplazados."""
    if _is_sensitive(key):
        return REDACTED
    if depth > _MAX_DEPTH:
        return "***TRUNCADO***"

    if isinstance(value, str):
        return value if len(value) <= _MAX_STR else value[:_MAX_STR] + "…(truncado)"
    if isinstance(value, (bytes, bytearray)):
        return f"<bytes {len(value)}B>"
    if isinstance(value, dict):
        return {str(k): redact(v, key=str(k), depth=depth + 1) for k, v in value.items()}
    if isinstance(value, (list, tuple, set)):
        return [redact(v, key=key, depth=depth + 1) for v in value]
    if value is None or isinstance(value, (bool, int, float)):
        return value
    return str(value)


class JSONFormatter(logging.Formatter):
    """LogRecord -> JSON de una línea (contexto de request + extras redactados)."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
            "pid": os.getpid(),
            **get_context_dict(),
        }

        payload.update(
            (k, redact(v, key=k))
            for k, v in record.__dict__.items()
            if k not in _STANDARD_ATTRS
        )

        if record.exc_info and record.exc_info[0] is not None:
            exc_type, exc, tb = record.exc_info
            payload["exception"] = {
                "type": exc_type.__name__,
                "message": str(exc),
                "stacktrace": traceback.format_exception(exc_type, exc, tb),
            }

        return json.dumps(payload, ensure_ascii=False, default=str, separators=(",", ":"))


def setup_logger(name: str = "freshora-api") -> logging.Logger:
    """
    Logger de la app configurado desde Settings.

    Idempotente: re-importar el módulo no duplica handlers.
    """
    from .config import get_settings

    settings = get_settings()
    log = logging.getLogger(name)
    log.setLevel(getattr(logging, (settings.log_level or "INFO").upper(), logging.INFO))

    if not log.handlers:
        handler = logging.StreamHandler(sys.stdout)
        if settings.log_json:
            handler.setFormatter(JSONFormatter())
        else:
            handler.setFormatter(logging.Formatter("%(levelname)s %(name)s %(message)s"))
        log.addHandler(handler)

    return log


logger = setup_logger()
