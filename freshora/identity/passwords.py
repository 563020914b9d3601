"""
===============================================================================
TARJETA CRC — identity/passwords.py
===============================================================================

Responsabilidades:
    - Hashear/verificar passwords con Argon2 (hash salado, one-way).
    - Ofrecer una verificación "dummy" para que un email inexistente cueste lo
      mismo que un password incorrecto (sin diferencia observable en login).

Colaboradores:
    - application/usecases/identity/register_user.py
    - application/usecases/identity/login_user.py
    - application/dev_seed_demo.py
===============================================================================
"""

from __future__ import annotations

from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError, VerifyMismatchError

_password_hasher = PasswordHasher()

# Hash fijo para igualar el costo cuando el email no existe.
_DUMMY_HASH = _password_hasher.hash("freshora-dummy-password")


def hash_password(password: str) -> str:
    """Hashea un password usando Argon2 (el salt va embebido en el hash)."""
    return _password_hasher.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    """Verifica password vs hash almacenado."""
    try:
        return _password_hasher.verify(password_hash, password)
    except (VerifyMismatchError, VerificationError, InvalidHashError):
        return False


def burn_password_check(password: str) -> None:
    """Ejecuta una verificación descartable contra el hash dummy."""
    verify_password(password, _DUMMY_HASH)
