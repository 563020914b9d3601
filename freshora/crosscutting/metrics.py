"""
===============================================================================
MÓDULO: Métricas Prometheus
===============================================================================

Responsabilidades:
  - Contar requests HTTP y su latencia por endpoint normalizado.
  - Contar fallas de autenticación/autorización por motivo.
  - Medir el costo del cálculo de estadísticas del dashboard.
  - Exponer el payload de /metrics.

Colaboradores:
  - crosscutting/middleware.py (record_request_metrics)
  - identity/auth_users.py (record_auth_failure)
  - application/usecases/admin/get_dashboard_stats.py (observe_stats_duration)

Notas:
  - Registry propio (no el global) para que los tests puedan reimportar sin
    colisiones de nombres.
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

_requests_total = Counter(
    "freshora_requests_total",
    "Total de requests HTTP",
    ["endpoint", "method", "status"],
    registry=_registry,
)

_request_latency = Histogram(
    "freshora_request_latency_seconds",
    "Latencia de requests HTTP",
    ["endpoint", "method"],
    buckets=(0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0),
    registry=_registry,
)

_auth_failures_total = Counter(
    "freshora_auth_failures_total",
    "Fallas de autenticación/autorización",
    ["reason"],
    registry=_registry,
)

_stats_duration = Histogram(
    "freshora_dashboard_stats_seconds",
    "Duración del cálculo de estadísticas del dashboard",
    buckets=(0.005, 0.01, 0.05, 0.1, 0.5, 1.0, 5.0),
    registry=_registry,
)

# UUIDs y ids numéricos colapsan a {id} para evitar cardinalidad infinita.
_ID_SEGMENT = re.compile(
    r"/([0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}|\d+)(?=/|$)"
)


def _normalize_endpoint(path: str) -> str:
    return _ID_SEGMENT.sub("/{id}", path or "/")


def _status_bucket(code: int) -> str:
    return f"{code // 100}xx" if 100 <= code < 600 else "unknown"


def record_request_metrics(
    *, endpoint: str, method: str, status_code: int, latency_seconds: float
) -> None:
    normalized = _normalize_endpoint(endpoint)
    _requests_total.labels(
        endpoint=normalized, method=method, status=_status_bucket(status_code)
    ).inc()
    _request_latency.labels(endpoint=normalized, method=method).observe(
        latency_seconds
    )


def record_auth_failure(reason: str) -> None:
    _auth_failures_total.labels(reason=reason).inc()


def observe_stats_duration(seconds: float) -> None:
    _stats_duration.observe(seconds)


def get_metrics_response() -> tuple[bytes, str]:
    return generate_latest(_registry), CONTENT_TYPE_LATEST
