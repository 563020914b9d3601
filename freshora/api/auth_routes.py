"""
===============================================================================
TARJETA CRC — freshora/api/auth_routes.py (Registro, login y sesión)
===============================================================================

Responsabilidades:
  - Exponer registro por rol (customer / seller / admin) y login con JWT.
  - Gestionar cookie httpOnly de acceso de forma consistente (set/clear).
  - Exponer /auth/me y /routes/landing para re-hidratar la sesión del cliente.
  - Nunca devolver password_hash.

Patrones aplicados:
  - Adapter / Presentation Layer: traduce HTTP <-> caso de uso.
  - Resultados tipados -> AppHTTPException (mapeo único de códigos).

Colaboradores:
  - application.usecases.identity: RegisterUserUseCase, LoginUserUseCase
  - identity.registration.parse_registration (unión discriminada por role)
  - identity.auth_users.require_identity
  - identity.role_router.resolve_landing_route
===============================================================================
"""

from __future__ import annotations

from datetime import datetime
from typing import Any
from uuid import UUID

from fastapi import APIRouter, Body, Depends, Response
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic.alias_generators import to_camel

from ..application.usecases import (
    AuthResult,
    IdentityErrorCode,
    LoginUserUseCase,
    RegisterUserUseCase,
)
from ..container import (
    get_login_user_use_case,
    get_register_user_use_case,
    get_user_repository,
)
from ..crosscutting.error_responses import (
    OPENAPI_ERROR_RESPONSES,
    forbidden,
    invalid_credentials,
    unauthorized,
    validation_error,
)
from ..domain.repositories import UserRepository
from ..identity.auth_users import DEFAULT_ACCESS_TOKEN_COOKIE, require_identity
from ..identity.registration import parse_registration
from ..identity.role_router import resolve_landing_route
from ..identity.tokens import get_auth_settings
from ..identity.users import Identity, User, UserRole

router = APIRouter(responses=OPENAPI_ERROR_RESPONSES)


# -----------------------------------------------------------------------------
# Modelos HTTP (DTOs)
# -----------------------------------------------------------------------------


class LoginRequest(BaseModel):
    email: str = Field(..., min_length=1, max_length=320)
    password: str = Field(..., min_length=1, max_length=512)

    @field_validator("email")
    @classmethod
    def normalizar_email(cls, v: str) -> str:
        return v.strip().lower()


class UserResponse(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: UUID
    name: str
    email: str
    role: UserRole
    store_name: str | None = None
    created_at: datetime | None = None


class AuthResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    expires_in: int
    landing_route: str
    user: UserResponse


class LandingResponse(BaseModel):
    role: UserRole
    landing_route: str


# -----------------------------------------------------------------------------
# Helpers
# -----------------------------------------------------------------------------


def to_user_response(user: User) -> UserResponse:
    """Convierte entidad a DTO (sin password_hash)."""
    return UserResponse(
        id=user.id,
        name=user.name,
        email=user.email,
        role=user.role,
        store_name=user.store_name,
        created_at=user.created_at,
    )


def _cookie_name() -> str:
    return get_auth_settings().jwt_cookie_name or DEFAULT_ACCESS_TOKEN_COOKIE


def _set_auth_cookie(response: Response, token: str, expires_in: int) -> None:
    """Setea cookie httpOnly de acceso."""
    response.set_cookie(
        key=_cookie_name(),
        value=token,
        httponly=True,
        secure=get_auth_settings().jwt_cookie_secure,
        samesite="lax",
        max_age=expires_in,
        path="/",
    )


def _clear_auth_cookie(response: Response) -> None:
    response.delete_cookie(
        key=_cookie_name(),
        path="/",
        samesite="lax",
        secure=get_auth_settings().jwt_cookie_secure,
    )


def _raise_identity_error(result: AuthResult) -> None:
    error = result.error
    if error is None:
        return
    match error.code:
        case IdentityErrorCode.VALIDATION_ERROR:
            raise validation_error(error.message)
        case IdentityErrorCode.FORBIDDEN:
            raise forbidden(error.message)
        case IdentityErrorCode.INVALID_CREDENTIALS:
            raise invalid_credentials()


def _auth_response(result: AuthResult, response: Response) -> AuthResponse:
    _raise_identity_error(result)
    _set_auth_cookie(response, result.access_token, result.expires_in)
    return AuthResponse(
        access_token=result.access_token,
        expires_in=result.expires_in,
        landing_route=result.landing_route,
        user=to_user_response(result.user),
    )


def _validation_details(exc: ValidationError) -> list[dict[str, Any]]:
    return [
        {
            "field": ".".join(str(p) for p in err.get("loc", ())),
            "msg": err.get("msg", ""),
        }
        for err in exc.errors()
    ]


# -----------------------------------------------------------------------------
# Endpoints públicos
# -----------------------------------------------------------------------------


@router.post(
    "/auth/register", response_model=AuthResponse, status_code=201, tags=["auth"]
)
def register(
    response: Response,
    payload: dict[str, Any] = Body(...),
    use_case: RegisterUserUseCase = Depends(get_register_user_use_case),
):
    """
    Registra una cuenta. `role` selecciona la variante:
      - customer (default; "user" también se acepta)
      - seller (requiere storeName)
      - admin (requiere adminSecret == ADMIN_SECRET)
    """
    body = dict(payload)
    body.setdefault("role", "customer")
    try:
        request = parse_registration(body)
    except ValidationError as exc:
        raise validation_error(
            "Datos de registro inválidos.", errors=_validation_details(exc)
        ) from exc

    return _auth_response(use_case.execute(request), response)


@router.post("/auth/login", response_model=AuthResponse, tags=["auth"])
def login(
    req: LoginRequest,
    response: Response,
    use_case: LoginUserUseCase = Depends(get_login_user_use_case),
):
    """Inicia sesión y devuelve JWT (también como cookie httpOnly)."""
    return _auth_response(use_case.execute(req.email, req.password), response)


@router.post("/auth/logout", tags=["auth"])
def logout(response: Response):
    """Borra la cookie de acceso. Idempotente; no requiere sesión."""
    _clear_auth_cookie(response)
    return {"ok": True}


# -----------------------------------------------------------------------------
# Endpoints autenticados
# -----------------------------------------------------------------------------


@router.get("/auth/me", response_model=UserResponse, tags=["auth"])
def me(
    identity: Identity = Depends(require_identity()),
    users: UserRepository = Depends(get_user_repository),
):
    user = users.get_user_by_id(identity.user_id)
    if user is None:
        raise unauthorized("Token inválido.")
    return to_user_response(user)


@router.get("/routes/landing", response_model=LandingResponse, tags=["auth"])
def landing(identity: Identity = Depends(require_identity())):
    """Ruta inicial del cliente según el rol del token."""
    return LandingResponse(
        role=identity.role, landing_route=resolve_landing_route(identity.role)
    )


__all__ = ["router", "to_user_response"]
