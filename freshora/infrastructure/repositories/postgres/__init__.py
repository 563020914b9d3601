"""
PostgreSQL Repository Implementations.

SQL crudo sobre psycopg 3 + psycopg_pool.
"""

from .order import PostgresOrderRepository
from .product import PostgresProductRepository
from .user import PostgresUserRepository

__all__ = [
    "PostgresOrderRepository",
    "PostgresProductRepository",
    "PostgresUserRepository",
]
