"""
CRC — domain/repositories.py

Name
- Domain Repository Interfaces (Protocols)

Responsibilities
- Define persistence contracts for users, orders and products (ports).
- Keep application/domain independent from PostgreSQL or in-memory storage.
- Enable dependency inversion and straightforward unit testing (fake repos).

Collaborators
- identity.users: User, UserRole
- domain.entities: Order, Product
- infrastructure.repositories: postgres/*, in_memory/* implementations

Constraints
- Pure interfaces only: no side effects, no SQL.
- Return None when a record does not exist (no exception for "not found").
- create_user MUST enforce email uniqueness at the store level and raise
  DuplicateRecordError on violation.

Notes
- We use typing.Protocol for structural subtyping ("duck typing").
"""

from datetime import datetime
from typing import List, Optional, Protocol
from uuid import UUID

from ..identity.users import User, UserRole
from .entities import Order, Product


class UserRepository(Protocol):
    """R: Interface for user account persistence."""

    def get_user_by_email(self, email: str) -> Optional[User]: ...

    def get_user_by_id(self, user_id: UUID) -> Optional[User]: ...

    def list_users(self, *, limit: int = 200, offset: int = 0) -> List[User]:
        """R: Newest first (created_at DESC)."""
        ...

    def create_user(
        self,
        *,
        name: str,
        email: str,
        password_hash: str,
        role: UserRole,
        store_name: str | None = None,
    ) -> User:
        """R: Persist a new account. Raises DuplicateRecordError on email clash."""
        ...

    def update_user(
        self,
        user_id: UUID,
        *,
        name: str | None = None,
        email: str | None = None,
        role: UserRole | None = None,
        store_name: str | None = None,
    ) -> Optional[User]: ...

    def delete_user(self, user_id: UUID) -> bool: ...

    def count_users(self) -> int: ...


class OrderRepository(Protocol):
    """R: Read access to the order ledger plus admin status updates."""

    def list_orders(self, *, since: datetime | None = None) -> List[Order]:
        """
        R: All orders (newest first) with buyer projection resolved.

        Args:
            since: Optional lower bound (inclusive) on created_at
        """
        ...

    def get_order(self, order_id: UUID) -> Optional[Order]: ...

    def update_order_status(self, order_id: UUID, status: str) -> Optional[Order]: ...


class ProductRepository(Protocol):
    """R: Minimal product persistence used by admin routes and counts."""

    def create_product(self, product: Product) -> Product: ...

    def update_product(self, product_id: UUID, **fields: object) -> Optional[Product]: ...

    def delete_product(self, product_id: UUID) -> bool: ...

    def count_products(self) -> int: ...
