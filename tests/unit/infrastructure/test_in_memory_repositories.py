"""
Name: In-Memory Repository Tests

Responsibilities:
  - Email uniqueness enforced by the store (same contract as uq_users_email)
  - Deterministic ordering (created_at DESC)
  - Buyer projection resolved at read time
"""

from datetime import datetime, timedelta, timezone
from uuid import uuid4

import pytest

from freshora.crosscutting.exceptions import DuplicateRecordError
from freshora.domain.entities import Product
from freshora.identity.users import UserRole
from freshora.infrastructure.repositories import (
    InMemoryOrderRepository,
    InMemoryProductRepository,
    InMemoryUserRepository,
)

pytestmark = pytest.mark.unit


def _create(repo: InMemoryUserRepository, email: str, **kwargs):
    return repo.create_user(
        name=kwargs.pop("name", "User"),
        email=email,
        password_hash="hash",
        role=kwargs.pop("role", UserRole.CUSTOMER),
        **kwargs,
    )


class TestInMemoryUserRepository:
    def test_create_rejects_duplicate_email(self):
        repo = InMemoryUserRepository()
        _create(repo, "a@test.com")

        with pytest.raises(DuplicateRecordError) as exc_info:
            _create(repo, "a@test.com")

        assert exc_info.value.field == "email"
        assert repo.count_users() == 1

    def test_update_cannot_steal_email(self):
        repo = InMemoryUserRepository()
        _create(repo, "a@test.com")
        other = _create(repo, "b@test.com")

        with pytest.raises(DuplicateRecordError):
            repo.update_user(other.id, email="a@test.com")

        # mismo email propio no es conflicto
        assert repo.update_user(other.id, email="b@test.com").email == "b@test.com"

    def test_update_empty_store_name_clears_it(self):
        repo = InMemoryUserRepository()
        seller = _create(repo, "s@test.com", role=UserRole.SELLER, store_name="Farm")

        updated = repo.update_user(seller.id, role=UserRole.CUSTOMER, store_name="")

        assert updated.store_name is None
        assert updated.role is UserRole.CUSTOMER

    def test_list_users_paginates_newest_first(self):
        repo = InMemoryUserRepository()
        created = [_create(repo, f"u{i}@test.com") for i in range(3)]

        page = repo.list_users(limit=2, offset=0)
        rest = repo.list_users(limit=2, offset=2)

        assert len(page) == 2
        assert len(rest) == 1
        assert {u.id for u in page + rest} == {u.id for u in created}
        assert repo.list_users(limit=0) == []

    def test_delete_missing_user_returns_false(self):
        assert InMemoryUserRepository().delete_user(uuid4()) is False


class TestInMemoryOrderRepository:
    def test_buyer_projection_follows_user_changes(self, make_order):
        users = InMemoryUserRepository()
        buyer = _create(users, "buyer@test.com", name="Buyer")
        orders = InMemoryOrderRepository(users)
        order = orders.add_order(make_order(user_id=buyer.id))

        assert orders.get_order(order.id).buyer.email == "buyer@test.com"

        users.update_user(buyer.id, name="Renamed")
        assert orders.get_order(order.id).buyer.name == "Renamed"

        users.delete_user(buyer.id)
        assert orders.get_order(order.id).buyer is None

    def test_since_accepts_naive_datetimes(self, make_order):
        now = datetime.now(timezone.utc)
        orders = InMemoryOrderRepository()
        kept = orders.add_order(make_order(created_at=now))
        orders.add_order(make_order(created_at=now - timedelta(days=10)))

        naive_since = (now - timedelta(days=1)).replace(tzinfo=None)

        assert [o.id for o in orders.list_orders(since=naive_since)] == [kept.id]

    def test_update_status_of_missing_order(self):
        assert InMemoryOrderRepository().update_order_status(uuid4(), "Shipped") is None


class TestInMemoryProductRepository:
    def test_update_ignores_unknown_fields(self):
        repo = InMemoryProductRepository()
        product = repo.create_product(Product(id=uuid4(), name="Apple", price=1.0))

        updated = repo.update_product(product.id, price=2.0, id=uuid4())

        assert updated.id == product.id
        assert updated.price == 2.0
        assert repo.count_products() == 1
        assert repo.delete_product(product.id)
        assert repo.count_products() == 0
