"""
===============================================================================
USE CASES: Admin user management (list / update / delete)
===============================================================================

Responsibilities:
    - Listar cuentas (paginado) para el panel admin.
    - Editar nombre, email, rol y tienda manteniendo las invariantes de rol:
      un seller siempre tiene store_name no vacío; los demás roles no.
    - Borrar cuentas (NOT_FOUND si el id no existe).

Collaborators:
    - UserRepository
    - admin_results
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID

from ....crosscutting.exceptions import DuplicateRecordError
from ....crosscutting.logger import logger
from ....domain.repositories import UserRepository
from ....identity.users import UserRole
from .admin_results import (
    DeleteResult,
    UserListResult,
    UserResult,
    not_found_error,
    validation_error,
)

_RESOURCE = "Usuario"


class ListUsersUseCase:
    def __init__(self, users: UserRepository) -> None:
        self._users = users

    def execute(self, *, limit: int = 200, offset: int = 0) -> UserListResult:
        return UserListResult(
            users=self._users.list_users(limit=limit, offset=offset),
            total=self._users.count_users(),
        )


@dataclass(frozen=True)
class UpdateUserInput:
    """Campos None => no se modifican."""

    user_id: UUID
    name: str | None = None
    email: str | None = None
    role: UserRole | None = None
    store_name: str | None = None


class UpdateUserUseCase:
    def __init__(self, users: UserRepository) -> None:
        self._users = users

    def execute(self, input_data: UpdateUserInput) -> UserResult:
        current = self._users.get_user_by_id(input_data.user_id)
        if current is None:
            return UserResult(error=not_found_error(_RESOURCE, input_data.user_id))

        name = input_data.name.strip() if input_data.name is not None else None
        if name is not None and not name:
            return UserResult(error=validation_error("El nombre no puede estar vacío."))

        email = (
            input_data.email.strip().lower() if input_data.email is not None else None
        )
        if email is not None and "@" not in email:
            return UserResult(error=validation_error("Email inválido."))

        role = input_data.role or current.role
        store_name = (
            input_data.store_name.strip()
            if input_data.store_name is not None
            else current.store_name
        )
        if role is UserRole.SELLER and not store_name:
            return UserResult(
                error=validation_error(
                    "El nombre de la tienda es obligatorio para vendedores."
                )
            )
        if role is not UserRole.SELLER:
            # "" => el repo persiste NULL
            store_name = ""

        try:
            updated = self._users.update_user(
                input_data.user_id,
                name=name,
                email=email,
                role=input_data.role,
                store_name=store_name,
            )
        except DuplicateRecordError:
            return UserResult(error=validation_error("El email ya está registrado."))

        if updated is None:
            return UserResult(error=not_found_error(_RESOURCE, input_data.user_id))

        logger.info(
            "Usuario actualizado por admin",
            extra={"user_id": str(updated.id), "role": updated.role.value},
        )
        return UserResult(user=updated)


class DeleteUserUseCase:
    def __init__(self, users: UserRepository) -> None:
        self._users = users

    def execute(self, user_id: UUID) -> DeleteResult:
        if not self._users.delete_user(user_id):
            return DeleteResult(deleted=False, error=not_found_error(_RESOURCE, user_id))
        logger.info("Usuario eliminado por admin", extra={"user_id": str(user_id)})
        return DeleteResult(deleted=True)
