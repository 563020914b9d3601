"""
============================================================
TARJETA CRC — infrastructure/repositories/postgres/_sql.py
============================================================
Class: SqlRunner

Responsibilities:
  - Ejecutar SQL parametrizado sobre una conexión del pool, con filas
    como dict (psycopg.rows.dict_row).
  - Traducir UniqueViolation -> DuplicateRecordError(field=...).
  - Envolver cualquier otra falla del driver en DatabaseError (con log).

Collaborators:
  - psycopg / psycopg_pool
  - infrastructure.db.pool.get_pool (pool global si no se inyecta uno)
============================================================
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Iterable, Iterator

from psycopg import Cursor
from psycopg import errors as pg_errors
from psycopg.rows import dict_row
from psycopg_pool import ConnectionPool

from ....crosscutting.exceptions import DatabaseError, DuplicateRecordError
from ....crosscutting.logger import logger
from ...db.pool import get_pool

Row = dict[str, Any]

# Constraint -> campo expuesto al caller.
_UNIQUE_FIELDS = {"uq_users_email": "email"}


class SqlRunner:
    def __init__(self, pool: ConnectionPool | None, owner: str) -> None:
        self._pool = pool
        self._owner = owner

    @contextmanager
    def _cursor(self, operation: str, context: dict[str, object]) -> Iterator[Cursor]:
        failure = f"{self._owner}: {operation} failed"
        try:
            pool = self._pool if self._pool is not None else get_pool()
            with pool.connection() as conn:
                with conn.cursor(row_factory=dict_row) as cur:
                    yield cur
        except pg_errors.UniqueViolation as exc:
            constraint = getattr(exc.diag, "constraint_name", None) or ""
            field = _UNIQUE_FIELDS.get(constraint, constraint or "unknown")
            logger.warning(failure, extra={**context, "constraint": constraint})
            raise DuplicateRecordError(
                f"Registro duplicado ({field})", field=field, original_error=exc
            ) from exc
        except DatabaseError:
            raise
        except Exception as exc:
            logger.exception(failure, extra={**context, "error": str(exc)})
            raise DatabaseError(failure, original_error=exc) from exc

    def one(
        self,
        operation: str,
        query: str,
        params: Iterable[object] = (),
        **context: object,
    ) -> Row | None:
        with self._cursor(operation, context) as cur:
            cur.execute(query, tuple(params))
            return cur.fetchone()

    def all(
        self,
        operation: str,
        query: str,
        params: Iterable[object] = (),
        **context: object,
    ) -> list[Row]:
        with self._cursor(operation, context) as cur:
            cur.execute(query, tuple(params))
            return cur.fetchall()

    def rowcount(
        self,
        operation: str,
        query: str,
        params: Iterable[object] = (),
        **context: object,
    ) -> int:
        with self._cursor(operation, context) as cur:
            cur.execute(query, tuple(params))
            return cur.rowcount
