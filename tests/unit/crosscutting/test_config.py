"""
Unit tests for Settings (pydantic-settings).
"""

import pytest
from pydantic import ValidationError

from freshora.crosscutting.config import Settings

pytestmark = pytest.mark.unit

_STRONG_JWT = "x" * 48


def _production(**overrides) -> Settings:
    values = {
        "app_env": "production",
        "jwt_secret": _STRONG_JWT,
        "admin_secret": "prod-admin-secret-value",
        "jwt_cookie_secure": True,
    }
    values.update(overrides)
    return Settings(**values)


def test_production_accepts_strong_configuration():
    settings = _production()

    assert settings.is_production()
    assert not settings.uses_memory_storage()


@pytest.mark.parametrize(
    "overrides",
    [
        {"jwt_secret": "dev-secret"},
        {"jwt_secret": "short-but-custom"},
        {"admin_secret": "dev-admin-secret"},
        {"admin_secret": "  "},
        {"jwt_cookie_secure": False},
        {"dev_seed_demo": True},
    ],
)
def test_production_rejects_weak_configuration(overrides):
    with pytest.raises(ValidationError):
        _production(**overrides)


@pytest.mark.parametrize(
    "app_env, backend, expected",
    [
        ("test", "postgres", True),
        ("ci", "postgres", True),
        ("development", "memory", True),
        ("development", "postgres", False),
    ],
)
def test_uses_memory_storage(app_env, backend, expected):
    settings = Settings(app_env=app_env, storage_backend=backend)

    assert settings.uses_memory_storage() is expected


def test_invalid_values_are_rejected():
    with pytest.raises(ValidationError):
        Settings(storage_backend="sqlite")
    with pytest.raises(ValidationError):
        Settings(jwt_access_ttl_minutes=0)
    with pytest.raises(ValidationError):
        Settings(password_min_length=0)


def test_allowed_origins_list_skips_blanks():
    settings = Settings(allowed_origins=" http://a.test , ,http://b.test")

    assert settings.get_allowed_origins_list() == ["http://a.test", "http://b.test"]
