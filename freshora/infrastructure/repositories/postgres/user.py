"""
============================================================
TARJETA CRC — infrastructure/repositories/postgres/user.py
============================================================
Class: PostgresUserRepository

Responsibilities:
  - CRUD de cuentas + conteo para el dashboard.
  - Mapear filas -> `User`, rechazando roles fuera de UserRole.

Collaborators:
  - SqlRunner (postgres/_sql.py)
  - identity.users.User / UserRole

Notes:
  - La unicidad de email la garantiza `uq_users_email`, no un SELECT previo:
    de dos registros concurrentes con el mismo email solo uno entra.
  - store_name "" se persiste como NULL.
============================================================
"""

from __future__ import annotations

from typing import Optional
from uuid import UUID, uuid4

from psycopg_pool import ConnectionPool

from ....crosscutting.exceptions import DatabaseError
from ....identity.users import User, UserRole
from ._sql import Row, SqlRunner

_COLUMNS = "id, name, email, password_hash, role, store_name, created_at"


def _to_user(row: Row) -> User:
    try:
        role = UserRole(row["role"])
    except ValueError as exc:
        raise DatabaseError(f"Rol desconocido en users.role: {row['role']!r}") from exc
    return User(
        id=row["id"],
        name=row["name"],
        email=row["email"],
        password_hash=row["password_hash"],
        role=role,
        store_name=row["store_name"],
        created_at=row["created_at"],
    )


class PostgresUserRepository:
    def __init__(self, pool: ConnectionPool | None = None) -> None:
        self._sql = SqlRunner(pool, "PostgresUserRepository")

    def get_user_by_email(self, email: str) -> Optional[User]:
        row = self._sql.one(
            "get_user_by_email",
            f"SELECT {_COLUMNS} FROM users WHERE email = %s",
            (email,),
            email=email,
        )
        return _to_user(row) if row else None

    def get_user_by_id(self, user_id: UUID) -> Optional[User]:
        row = self._sql.one(
            "get_user_by_id",
            f"SELECT {_COLUMNS} FROM users WHERE id = %s",
            (user_id,),
            user_id=str(user_id),
        )
        return _to_user(row) if row else None

    def list_users(self, *, limit: int = 200, offset: int = 0) -> list[User]:
        if limit <= 0:
            return []
        rows = self._sql.all(
            "list_users",
            f"SELECT {_COLUMNS} FROM users "
            "ORDER BY created_at DESC, id DESC LIMIT %s OFFSET %s",
            (limit, max(offset, 0)),
            limit=limit,
            offset=offset,
        )
        return [_to_user(r) for r in rows]

    def count_users(self) -> int:
        row = self._sql.one("count_users", "SELECT COUNT(*) AS n FROM users")
        return int(row["n"]) if row else 0

    def create_user(
        self,
        *,
        name: str,
        email: str,
        password_hash: str,
        role: UserRole,
        store_name: str | None = None,
    ) -> User:
        user_id = uuid4()
        row = self._sql.one(
            "create_user",
            "INSERT INTO users (id, name, email, password_hash, role, store_name) "
            f"VALUES (%s, %s, %s, %s, %s, %s) RETURNING {_COLUMNS}",
            (user_id, name, email, password_hash, role.value, store_name or None),
            user_id=str(user_id),
            role=role.value,
        )
        if row is None:
            raise DatabaseError("create_user: INSERT sin RETURNING")
        return _to_user(row)

    def update_user(
        self,
        user_id: UUID,
        *,
        name: str | None = None,
        email: str | None = None,
        role: UserRole | None = None,
        store_name: str | None = None,
    ) -> Optional[User]:
        changes: dict[str, object] = {}
        if name is not None:
            changes["name"] = name
        if email is not None:
            changes["email"] = email
        if role is not None:
            changes["role"] = role.value
        if store_name is not None:
            changes["store_name"] = store_name or None

        if not changes:
            return self.get_user_by_id(user_id)

        # Nombres de columna fijos (no vienen del request).
        assignments = ", ".join(f"{column} = %s" for column in changes)
        row = self._sql.one(
            "update_user",
            f"UPDATE users SET {assignments} WHERE id = %s RETURNING {_COLUMNS}",
            (*changes.values(), user_id),
            user_id=str(user_id),
            columns=list(changes),
        )
        return _to_user(row) if row else None

    def delete_user(self, user_id: UUID) -> bool:
        deleted = self._sql.rowcount(
            "delete_user",
            "DELETE FROM users WHERE id = %s",
            (user_id,),
            user_id=str(user_id),
        )
        return deleted > 0
