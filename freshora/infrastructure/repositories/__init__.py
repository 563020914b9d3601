"""
============================================================
TARJETA CRC
============================================================
Class: freshora.infrastructure.repositories (Package exports)

Responsibilities:
- Exponer implementaciones concretas de repositorios (Postgres e InMemory)
  en un único punto de importación.

Collaborators:
- Repositorios Postgres (SQL crudo)
- Repositorios InMemory (testing / dev local)
============================================================
"""

from .in_memory import (
    InMemoryOrderRepository,
    InMemoryProductRepository,
    InMemoryUserRepository,
)
from .postgres import (
    PostgresOrderRepository,
    PostgresProductRepository,
    PostgresUserRepository,
)

__all__ = [
    # In-memory
    "InMemoryOrderRepository",
    "InMemoryProductRepository",
    "InMemoryUserRepository",
    # Postgres
    "PostgresOrderRepository",
    "PostgresProductRepository",
    "PostgresUserRepository",
]
