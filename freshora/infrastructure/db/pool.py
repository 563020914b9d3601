"""
===============================================================================
CRC CARD — infrastructure/db/pool.py
===============================================================================

Componente:
  Pool de conexiones PostgreSQL (uno por proceso)

Responsabilidades:
  - Abrir el pool en el startup y cerrarlo en el shutdown (lifespan).
  - Aplicar statement_timeout a nivel sesión vía `options` de libpq.
  - Ping liviano para /healthz.

Colaboradores:
  - psycopg_pool.ConnectionPool
  - api/main.py (lifespan)
  - repositories/postgres/_sql.SqlRunner

Notas:
  - Usar el pool sin abrirlo (o abrirlo dos veces) es un error de
    programación: se levanta PoolStateError (DatabaseError => 503).
===============================================================================
"""

from __future__ import annotations

import threading

from psycopg_pool import ConnectionPool

from ...crosscutting.exceptions import DatabaseError
from ...crosscutting.logger import logger


class PoolStateError(DatabaseError):
    """Pool usado antes de init_pool() o inicializado dos veces."""

    error_code: str = "DB_POOL_STATE"


_lock = threading.Lock()
_state: dict[str, ConnectionPool] = {}


def init_pool(
    database_url: str,
    min_size: int,
    max_size: int,
    *,
    statement_timeout_ms: int = 0,
) -> ConnectionPool:
    with _lock:
        if "pool" in _state:
            raise PoolStateError("init_pool() llamado con el pool ya abierto")

        conn_kwargs: dict[str, object] = {}
        if statement_timeout_ms > 0:
            conn_kwargs["options"] = f"-c statement_timeout={int(statement_timeout_ms)}"

        pool = ConnectionPool(
            conninfo=database_url,
            min_size=min_size,
            max_size=max_size,
            kwargs=conn_kwargs,
            open=True,
        )
        _state["pool"] = pool

    logger.info(
        "Pool DB abierto",
        extra={
            "min_size": min_size,
            "max_size": max_size,
            "statement_timeout_ms": statement_timeout_ms,
        },
    )
    return pool


def get_pool() -> ConnectionPool:
    pool = _state.get("pool")
    if pool is None:
        raise PoolStateError("Pool no inicializado: falta init_pool() en el startup")
    return pool


def ping() -> bool:
    """True si `SELECT 1` responde; False sin pool o ante cualquier falla."""
    pool = _state.get("pool")
    if pool is None:
        return False
    try:
        with pool.connection() as conn:
            conn.execute("SELECT 1").fetchone()
    except Exception as exc:
        logger.warning("DB ping falló", extra={"error": str(exc)})
        return False
    return True


def close_pool() -> None:
    """Idempotente."""
    with _lock:
        pool = _state.pop("pool", None)
    if pool is not None:
        pool.close()
        logger.info("Pool DB cerrado")
