"""
Errores internos del backend.

Los levanta la infraestructura (repositorios, pool) y los traduce
api/exception_handlers.py a problem+json: DatabaseError => 503, cualquier
otro FreshoraError => 500. `message` va a los logs, nunca al cliente;
`error_id` viaja en ambos para correlacionar.
"""

from __future__ import annotations

from uuid import uuid4


class FreshoraError(Exception):
    error_code: str = "FRESHORA_ERROR"

    def __init__(
        self,
        message: str,
        error_id: str | None = None,
        original_error: Exception | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.error_id = error_id or uuid4().hex
        self.original_error = original_error


class DatabaseError(FreshoraError):
    """Conexión, query, timeout o estado inválido del pool."""

    error_code: str = "DATABASE_ERROR"


class DuplicateRecordError(DatabaseError):
    """Violación de unicidad; `field` indica la columna (ej: "email")."""

    error_code: str = "DUPLICATE_RECORD"

    def __init__(self, message: str, *, field: str, **kwargs):
        super().__init__(message, **kwargs)
        self.field = field
