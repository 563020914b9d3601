"""
===============================================================================
TARJETA CRC — identity/users.py
===============================================================================

Módulo:
    Modelos de Usuario e Identidad

Responsabilidades:
    - Definir el enum cerrado de roles (customer / seller / admin).
    - Definir el dataclass User (registro persistido de la cuenta).
    - Definir Identity: par (user_id, role) resuelto desde un token, válido
      solo durante un request y nunca persistido.

Colaboradores:
    - identity/auth_users.py: emite/valida JWT a partir de User / Identity.
    - identity/registration.py: requests de registro por rol.
    - infrastructure/repositories/*/user.py: mapea filas -> User.

Notas:
    - Este módulo NO contiene lógica de negocio: solo "shapes" de datos.
    - Si agregás un rol nuevo, revisá authorize() y resolve_landing_route():
      ambos hacen match exhaustivo sobre UserRole.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from uuid import UUID


class UserRole(str, Enum):
    """Roles soportados. Set cerrado: no hay roles ad hoc."""

    CUSTOMER = "customer"
    SELLER = "seller"
    ADMIN = "admin"


@dataclass(frozen=True, slots=True)
class User:
    """Registro de usuario. password_hash nunca sale por la API."""

    id: UUID
    name: str
    email: str
    password_hash: str
    role: UserRole
    store_name: str | None = None
    created_at: datetime | None = None


@dataclass(frozen=True, slots=True)
class Identity:
    """Identidad resuelta de un token válido (lifetime = un request)."""

    user_id: UUID
    email: str
    role: UserRole
