"""
===============================================================================
USE CASE: Register User
===============================================================================

Name:
    Register User Use Case

Business Goal:
    Crear una cuenta con uno de los tres roles garantizando:
      - campos obligatorios presentes (store_name para sellers)
      - password con largo mínimo
      - email único (normalizado)
      - admins solo con el secreto de proceso (ADMIN_SECRET), nunca persistido

-------------------------------------------------------------------------------
CRC CARD (Class-Responsibility-Collaborator)
-------------------------------------------------------------------------------
Class:
    RegisterUserUseCase

Responsibilities:
    - Validar el request según su variante (customer / seller / admin).
    - Verificar el secreto de admin ANTES de cualquier escritura.
    - Hashear el password (Argon2) y persistir el usuario.
    - Emitir access token y resolver la ruta de aterrizaje.

Collaborators:
    - UserRepository: get_user_by_email, create_user
    - identity.passwords.hash_password
    - identity.tokens.create_access_token
    - identity.role_router.resolve_landing_route

-------------------------------------------------------------------------------
Error Mapping:
    - VALIDATION_ERROR: campos vacíos / password corto / store_name vacío /
      email duplicado (incluida la violación de unicidad del store)
    - FORBIDDEN: admin_secret no coincide
===============================================================================
"""

from __future__ import annotations

import hmac

from ....crosscutting.exceptions import DuplicateRecordError
from ....crosscutting.logger import logger
from ....domain.repositories import UserRepository
from ....identity.passwords import hash_password
from ....identity.registration import (
    AdminRegistration,
    CustomerRegistration,
    SellerRegistration,
)
from ....identity.role_router import resolve_landing_route
from ....identity.tokens import create_access_token
from .identity_results import IdentityError, IdentityErrorCode, RegistrationResult

DEFAULT_PASSWORD_MIN_LENGTH = 6

Registration = CustomerRegistration | SellerRegistration | AdminRegistration


class RegisterUserUseCase:
    """Use Case (Command): alta de cuenta con rol."""

    def __init__(
        self,
        users: UserRepository,
        admin_secret: str,
        password_min_length: int = DEFAULT_PASSWORD_MIN_LENGTH,
    ) -> None:
        self._users = users
        self._admin_secret = admin_secret
        self._password_min_length = password_min_length

    def execute(self, request: Registration) -> RegistrationResult:
        # ---------------------------------------------------------------------
        # 1) Validación de campos.
        # ---------------------------------------------------------------------
        problem = self._validate(request)
        if problem:
            return self._validation_error(problem)

        # ---------------------------------------------------------------------
        # 2) Secreto de admin (antes de tocar el store).
        # ---------------------------------------------------------------------
        if isinstance(request, AdminRegistration) and not self._admin_secret_matches(
            request.admin_secret
        ):
            logger.warning(
                "Registro de admin rechazado: secreto inválido",
                extra={"email": request.email},
            )
            return RegistrationResult(
                error=IdentityError(
                    code=IdentityErrorCode.FORBIDDEN,
                    message="Clave de administrador inválida.",
                )
            )

        # ---------------------------------------------------------------------
        # 3) Unicidad de email.
        # ---------------------------------------------------------------------
        if self._users.get_user_by_email(request.email) is not None:
            return self._validation_error("El email ya está registrado.")

        # ---------------------------------------------------------------------
        # 4) Persistir.
        # ---------------------------------------------------------------------
        store_name = (
            request.store_name if isinstance(request, SellerRegistration) else None
        )
        try:
            user = self._users.create_user(
                name=request.name,
                email=request.email,
                password_hash=hash_password(request.password),
                role=request.account_role,
                store_name=store_name,
            )
        except DuplicateRecordError:
            # Registro concurrente con el mismo email: lo resolvió el store.
            return self._validation_error("El email ya está registrado.")

        token, expires_in = create_access_token(user)
        logger.info(
            "Usuario registrado",
            extra={"user_id": str(user.id), "role": user.role.value},
        )
        return RegistrationResult(
            user=user,
            access_token=token,
            expires_in=expires_in,
            landing_route=resolve_landing_route(user.role),
        )

    def _validate(self, request: Registration) -> str | None:
        if not request.name or not request.email or not request.password:
            return "Nombre, email y password son obligatorios."
        if "@" not in request.email:
            return "Email inválido."
        if len(request.password) < self._password_min_length:
            return (
                f"El password debe tener al menos {self._password_min_length} caracteres."
            )
        if isinstance(request, SellerRegistration) and not request.store_name:
            return "El nombre de la tienda es obligatorio para vendedores."
        return None

    def _admin_secret_matches(self, supplied: str) -> bool:
        expected = (self._admin_secret or "").encode("utf-8")
        if not expected:
            return False
        return hmac.compare_digest(supplied.encode("utf-8"), expected)

    @staticmethod
    def _validation_error(message: str) -> RegistrationResult:
        return RegistrationResult(
            error=IdentityError(
                code=IdentityErrorCode.VALIDATION_ERROR, message=message
            )
        )
