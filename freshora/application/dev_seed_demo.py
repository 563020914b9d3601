"""
============================================================
TARJETA CRC — application/dev_seed_demo.py
============================================================
Component: ensure_dev_demo

Responsibilities:
  - Crear una cuenta demo por rol (customer, seller, admin) para los
    botones de login rápido del cliente web.
  - Idempotente: si el email ya existe, se reutiliza la cuenta.
  - Nunca corre en producción (RuntimeError antes de tocar el repo).

Collaborators:
  - UserRepository (get_user_by_email / create_user)
  - password_hasher inyectado (identity.passwords.hash_password en runtime)
  - Settings (dev_seed_demo, dev_seed_demo_password, app_env)
============================================================
"""

from __future__ import annotations

from typing import Callable

from ..crosscutting.config import Settings
from ..crosscutting.logger import logger
from ..domain.repositories import UserRepository
from ..identity.users import User, UserRole

DEMO_STORE_NAME = "Demo Store"

# (name, email, role)
_DEMO_ACCOUNTS = (
    ("Demo User", "user@test.com", UserRole.CUSTOMER),
    ("Demo Seller", "seller@test.com", UserRole.SELLER),
    ("Demo Admin", "admin@test.com", UserRole.ADMIN),
)


def ensure_dev_demo(
    settings: Settings,
    *,
    user_repo: UserRepository,
    password_hasher: Callable[[str], str],
) -> list[User]:
    """Devuelve las cuentas demo (lista vacía si DEV_SEED_DEMO está apagado)."""
    if not settings.dev_seed_demo:
        return []
    if settings.is_production():
        raise RuntimeError("DEV_SEED_DEMO refused: demo accounts cannot exist in production")

    accounts: list[User] = []
    created = 0
    for name, email, role in _DEMO_ACCOUNTS:
        user = user_repo.get_user_by_email(email)
        if user is None:
            user = user_repo.create_user(
                name=name,
                email=email,
                password_hash=password_hasher(settings.dev_seed_demo_password),
                role=role,
                store_name=DEMO_STORE_NAME if role is UserRole.SELLER else None,
            )
            created += 1
        accounts.append(user)

    logger.info(
        "Cuentas demo listas",
        extra={"demo_created": created, "demo_existing": len(accounts) - created},
    )
    return accounts
