"""
===============================================================================
USE CASE: Login User
===============================================================================

Business Goal:
    Verificar credenciales y emitir un access token sin revelar si el email
    existe: email inexistente y password incorrecto devuelven el mismo error y
    cuestan lo mismo (verificación dummy de Argon2).

Collaborators:
    - UserRepository.get_user_by_email
    - identity.passwords (verify_password / burn_password_check)
    - identity.tokens.create_access_token
    - identity.role_router.resolve_landing_route
===============================================================================
"""

from __future__ import annotations

from ....crosscutting.logger import logger
from ....crosscutting.metrics import record_auth_failure
from ....domain.repositories import UserRepository
from ....identity.passwords import burn_password_check, verify_password
from ....identity.role_router import resolve_landing_route
from ....identity.tokens import create_access_token
from .identity_results import IdentityError, IdentityErrorCode, LoginResult

_INVALID_CREDENTIALS = IdentityError(
    code=IdentityErrorCode.INVALID_CREDENTIALS,
    message="Credenciales inválidas.",
)


class LoginUserUseCase:
    def __init__(self, users: UserRepository) -> None:
        self._users = users

    def execute(self, email: str, password: str) -> LoginResult:
        normalized = (email or "").strip().lower()
        user = self._users.get_user_by_email(normalized) if normalized else None

        if user is None:
            burn_password_check(password or "")
            return self._reject()

        if not verify_password(password or "", user.password_hash):
            return self._reject()

        token, expires_in = create_access_token(user)
        logger.info(
            "Login exitoso",
            extra={"user_id": str(user.id), "role": user.role.value},
        )
        return LoginResult(
            user=user,
            access_token=token,
            expires_in=expires_in,
            landing_route=resolve_landing_route(user.role),
        )

    @staticmethod
    def _reject() -> LoginResult:
        record_auth_failure("invalid_credentials")
        return LoginResult(error=_INVALID_CREDENTIALS)
