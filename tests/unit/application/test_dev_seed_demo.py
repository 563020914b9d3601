"""
Unit tests for dev seed demo (customer + seller + admin).
"""

from unittest.mock import Mock

import pytest

from freshora.application.dev_seed_demo import ensure_dev_demo
from freshora.crosscutting.config import Settings
from freshora.identity.users import UserRole
from freshora.infrastructure.repositories import InMemoryUserRepository

pytestmark = pytest.mark.unit


def _fake_hasher(password: str) -> str:
    return f"hashed:{password}"


def test_disabled_seed_is_noop():
    repo = Mock()

    users = ensure_dev_demo(
        Settings(app_env="test", dev_seed_demo=False),
        user_repo=repo,
        password_hasher=_fake_hasher,
    )

    assert users == []
    repo.create_user.assert_not_called()


def test_seed_creates_one_account_per_role():
    repo = InMemoryUserRepository()
    settings = Settings(
        app_env="test", dev_seed_demo=True, dev_seed_demo_password="demo-pass"
    )

    users = ensure_dev_demo(settings, user_repo=repo, password_hasher=_fake_hasher)

    assert {u.role for u in users} == set(UserRole)
    seller = repo.get_user_by_email("seller@test.com")
    assert seller.store_name == "Demo Store"
    assert seller.password_hash == "hashed:demo-pass"


def test_seed_is_idempotent():
    repo = InMemoryUserRepository()
    settings = Settings(app_env="test", dev_seed_demo=True)

    first = ensure_dev_demo(settings, user_repo=repo, password_hasher=_fake_hasher)
    second = ensure_dev_demo(settings, user_repo=repo, password_hasher=_fake_hasher)

    assert [u.id for u in first] == [u.id for u in second]
    assert repo.count_users() == 3


def test_seed_refuses_production():
    settings = Mock()
    settings.dev_seed_demo = True
    settings.is_production.return_value = True
    repo = Mock()

    with pytest.raises(RuntimeError, match="production"):
        ensure_dev_demo(settings, user_repo=repo, password_hasher=_fake_hasher)

    repo.create_user.assert_not_called()
