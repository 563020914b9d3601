"""
In-Memory Repository Implementations.

For testing and local development. NOT FOR PRODUCTION.
Data is lost on process restart.
"""

from .order import InMemoryOrderRepository
from .product import InMemoryProductRepository
from .user import InMemoryUserRepository

__all__ = [
    "InMemoryOrderRepository",
    "InMemoryProductRepository",
    "InMemoryUserRepository",
]
