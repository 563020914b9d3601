"""
===============================================================================
TARJETA CRC — identity/auth_users.py (Cadena de autorización)
===============================================================================

Módulo:
    Autenticación + Autorización por rol (RBAC) para endpoints protegidos

Responsabilidades:
    - authenticate(token): token -> Identity (401 si falta, malformado, expirado,
      no verificable o el usuario ya no existe / cambió de rol).
    - authorize(identity, rol): 403 si el rol no coincide (match exhaustivo).
    - Extraer token desde Authorization: Bearer o cookie httpOnly.
    - Exponer dependencias FastAPI (require_identity, require_role) que aplican
      SIEMPRE authenticate -> authorize antes del handler.

Colaboradores:
    - identity.tokens: decode_access_token / get_auth_settings.
    - domain.repositories.UserRepository: verificar que el usuario exista.
    - container.get_user_repository: repo inyectado vía Depends.
    - crosscutting.metrics: contador de fallas de auth.

Decisiones de diseño:
    - Si authenticate falla, authorize nunca corre; si cualquiera falla, el
      handler nunca corre (FastAPI resuelve dependencias antes del endpoint).
    - Stateless: sin locks ni cache de identidades.
===============================================================================
"""

from __future__ import annotations

from typing import Callable
from uuid import UUID

from fastapi import Depends, Header, Request

from ..container import get_user_repository
from ..crosscutting.error_responses import forbidden, unauthorized
from ..crosscutting.logger import logger
from ..crosscutting.metrics import record_auth_failure
from ..domain.repositories import UserRepository
from .tokens import AuthSettings, decode_access_token, get_auth_settings
from .users import Identity, UserRole

DEFAULT_ACCESS_TOKEN_COOKIE: str = "access_token"


# ---------------------------------------------------------------------------
# Paso 1: autenticación
# ---------------------------------------------------------------------------


def authenticate(
    token: str | None,
    users: UserRepository,
    settings: AuthSettings | None = None,
) -> Identity:
    """Resuelve la Identity del request a partir del access token."""
    if not token:
        record_auth_failure("missing_token")
        raise unauthorized("Falta token Bearer.")

    try:
        payload = decode_access_token(token, settings)
    except Exception:
        record_auth_failure("invalid_token")
        raise

    try:
        user_id = UUID(payload.user_id)
    except ValueError as exc:
        record_auth_failure("invalid_token")
        raise unauthorized("Token inválido.") from exc

    user = users.get_user_by_id(user_id)
    if not user:
        record_auth_failure("unknown_user")
        raise unauthorized("Token inválido.")

    # R: si el admin cambió el rol, el token viejo deja de valer.
    if user.role != payload.role:
        record_auth_failure("stale_role")
        raise unauthorized("Token desactualizado. Iniciá sesión nuevamente.")

    return Identity(user_id=user.id, email=user.email, role=user.role)


# ---------------------------------------------------------------------------
# Paso 2: autorización
# ---------------------------------------------------------------------------


def _role_satisfies(actual: UserRole, required: UserRole) -> bool:
    match required:
        case UserRole.ADMIN:
            return actual is UserRole.ADMIN
        case UserRole.SELLER:
            return actual is UserRole.SELLER
        case UserRole.CUSTOMER:
            return actual is UserRole.CUSTOMER
    return False


def authorize(identity: Identity, required_role: UserRole) -> None:
    """Exige rol exacto (RBAC puro). 403 si no coincide."""
    if not _role_satisfies(identity.role, required_role):
        record_auth_failure("forbidden_role")
        logger.warning(
            "Acceso denegado por rol",
            extra={
                "user_id": str(identity.user_id),
                "role": identity.role.value,
                "required_role": required_role.value,
            },
        )
        raise forbidden("Acceso denegado. Rol insuficiente.")


# ---------------------------------------------------------------------------
# Extracción de token (header/cookie)
# ---------------------------------------------------------------------------


def _extract_bearer_token(authorization: str | None) -> str | None:
    """Extrae token desde `Authorization: Bearer <token>`."""
    if not authorization:
        return None
    parts = authorization.strip().split(" ", 1)
    if len(parts) != 2 or parts[0].lower() != "bearer":
        return None
    return parts[1].strip() or None


def extract_access_token(request: Request, authorization: str | None) -> str | None:
    """Resuelve token desde Authorization o cookie."""
    token = _extract_bearer_token(authorization)
    if token:
        return token

    cookie_name = (
        get_auth_settings().jwt_cookie_name or ""
    ).strip() or DEFAULT_ACCESS_TOKEN_COOKIE
    return request.cookies.get(cookie_name)


# ---------------------------------------------------------------------------
# Dependencias FastAPI
# ---------------------------------------------------------------------------


def require_identity() -> Callable:
    """Dependency FastAPI: requiere identidad autenticada por JWT."""

    async def dependency(
        request: Request,
        authorization: str | None = Header(None, alias="Authorization"),
        users: UserRepository = Depends(get_user_repository),
    ) -> Identity:
        token = extract_access_token(request, authorization)
        identity = authenticate(token, users)
        request.state.identity = identity
        return identity

    return dependency


def require_role(role: UserRole | str) -> Callable:
    """Dependency FastAPI: authenticate -> authorize(role)."""
    required_role = UserRole(role)

    async def dependency(
        identity: Identity = Depends(require_identity()),
    ) -> Identity:
        authorize(identity, required_role)
        return identity

    return dependency


def require_admin() -> Callable:
    return require_role(UserRole.ADMIN)
