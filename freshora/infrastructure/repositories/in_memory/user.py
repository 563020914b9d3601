"""
============================================================
TARJETA CRC — infrastructure/repositories/in_memory/user.py
============================================================
Class: InMemoryUserRepository

Responsibilities:
  - Almacenar cuentas en memoria (tests / dev local).
  - Garantizar unicidad de email bajo lock (mismo contrato que uq_users_email):
    el check y el insert son atómicos.
  - Ordering determinístico alineado con Postgres (created_at DESC).

Collaborators:
  - identity.users.User / UserRole
  - crosscutting.exceptions.DuplicateRecordError
============================================================
"""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timezone
from threading import Lock
from typing import Dict, List, Optional
from uuid import UUID, uuid4

from ....crosscutting.exceptions import DuplicateRecordError
from ....identity.users import User, UserRole


class InMemoryUserRepository:
    def __init__(self) -> None:
        self._lock = Lock()
        self._users: Dict[UUID, User] = {}

    def _email_taken(self, email: str, *, exclude: UUID | None = None) -> bool:
        return any(
            u.email == email and u.id != exclude for u in self._users.values()
        )

    def get_user_by_email(self, email: str) -> Optional[User]:
        with self._lock:
            for user in self._users.values():
                if user.email == email:
                    return user
        return None

    def get_user_by_id(self, user_id: UUID) -> Optional[User]:
        with self._lock:
            return self._users.get(user_id)

    def list_users(self, *, limit: int = 200, offset: int = 0) -> List[User]:
        if limit <= 0:
            return []
        with self._lock:
            users = sorted(
                self._users.values(),
                key=lambda u: (u.created_at or datetime.min.replace(tzinfo=timezone.utc), str(u.id)),
                reverse=True,
            )
        start = max(offset, 0)
        return users[start : start + limit]

    def count_users(self) -> int:
        with self._lock:
            return len(self._users)

    def create_user(
        self,
        *,
        name: str,
        email: str,
        password_hash: str,
        role: UserRole,
        store_name: str | None = None,
    ) -> User:
        with self._lock:
            if self._email_taken(email):
                raise DuplicateRecordError("Registro duplicado (email)", field="email")
            user = User(
                id=uuid4(),
                name=name,
                email=email,
                password_hash=password_hash,
                role=role,
                store_name=store_name,
                created_at=datetime.now(timezone.utc),
            )
            self._users[user.id] = user
            return user

    def update_user(
        self,
        user_id: UUID,
        *,
        name: str | None = None,
        email: str | None = None,
        role: UserRole | None = None,
        store_name: str | None = None,
    ) -> Optional[User]:
        with self._lock:
            current = self._users.get(user_id)
            if current is None:
                return None
            if email is not None and self._email_taken(email, exclude=user_id):
                raise DuplicateRecordError("Registro duplicado (email)", field="email")

            updated = replace(
                current,
                name=current.name if name is None else name,
                email=current.email if email is None else email,
                role=current.role if role is None else role,
                store_name=current.store_name if store_name is None else (store_name or None),
            )
            self._users[user_id] = updated
            return updated

    def delete_user(self, user_id: UUID) -> bool:
        with self._lock:
            return self._users.pop(user_id, None) is not None
