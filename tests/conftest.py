"""
Name: Pytest Configuration and Shared Fixtures

Responsibilities:
  - Configure test environment (APP_ENV=test => in-memory repositories)
  - Reset composition-root singletons between tests
  - Provide entity factories (users, orders)

Collaborators:
  - pytest: Test framework
  - freshora.container: lru_cached repositories
  - freshora.domain / freshora.identity: entities

Notes:
  - Fixtures are auto-discovered by pytest
  - Use @pytest.fixture(scope="function") for per-test isolation
"""

import os
import sys
from datetime import datetime, timezone
from pathlib import Path
from uuid import uuid4

import pytest

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

os.environ.setdefault("APP_ENV", "test")
os.environ.setdefault("LOG_JSON", "false")

from freshora.crosscutting import config as app_config  # noqa: E402

app_config.Settings.model_config["env_file"] = None

from freshora import container  # noqa: E402
from freshora.domain.entities import BuyerSummary, Order  # noqa: E402
from freshora.identity.passwords import hash_password  # noqa: E402
from freshora.identity.users import User, UserRole  # noqa: E402


def pytest_configure(config) -> None:
    config.addinivalue_line(
        "markers", "unit: Unit tests (fast, no external dependencies)"
    )


@pytest.fixture(autouse=True)
def _fresh_repositories():
    """R: Each test starts with empty in-memory repositories."""
    container.reset_repositories()
    yield
    container.reset_repositories()


# ============================================================================
# Entity factories
# ============================================================================


@pytest.fixture
def make_user():
    """R: Build a User (not persisted) with a real Argon2 hash."""

    def _make(
        *,
        role: UserRole = UserRole.CUSTOMER,
        email: str = "user@example.com",
        password: str = "secret123",
        name: str = "Test User",
        store_name: str | None = None,
    ) -> User:
        return User(
            id=uuid4(),
            name=name,
            email=email,
            password_hash=hash_password(password),
            role=role,
            store_name=store_name,
            created_at=datetime.now(timezone.utc),
        )

    return _make


@pytest.fixture
def make_order():
    """R: Build an Order with sensible defaults."""

    def _make(
        *,
        total_price: float = 10.0,
        status: str = "Pending",
        created_at: datetime | None = None,
        buyer: BuyerSummary | None = None,
        user_id=None,
    ) -> Order:
        return Order(
            id=uuid4(),
            user_id=user_id,
            total_price=total_price,
            status=status,
            created_at=created_at or datetime.now(timezone.utc),
            buyer=buyer,
        )

    return _make
