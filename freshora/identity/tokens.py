"""
===============================================================================
TARJETA CRC — identity/tokens.py (JWT de acceso)
===============================================================================

Responsabilidades:
    - Firmar el access token de una cuenta (HS256): sub, email, role, iat,
      exp, typ="access".
    - Verificarlo: firma, expiración, claims obligatorios, typ y rol dentro
      del set cerrado UserRole. Cualquier falla => 401.

Colaboradores:
    - PyJWT
    - crosscutting.config (JWT_SECRET, JWT_ACCESS_TTL_MINUTES, cookie)
    - crosscutting.error_responses.unauthorized
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Mapping

import jwt

from ..crosscutting.config import Settings, get_settings
from ..crosscutting.error_responses import unauthorized
from .users import User, UserRole

JWT_ALGORITHM = "HS256"
ACCESS_TOKEN_TYPE = "access"

_REQUIRED_CLAIMS = ("sub", "email", "role", "exp", "typ")
_INVALID = "Token inválido."


@dataclass(frozen=True, slots=True)
class AuthSettings:
    """Subconjunto de Settings que necesita la capa de auth."""

    jwt_secret: str
    jwt_access_ttl_minutes: int
    jwt_cookie_name: str
    jwt_cookie_secure: bool

    @classmethod
    def from_settings(cls, settings: Settings) -> "AuthSettings":
        return cls(
            jwt_secret=settings.jwt_secret,
            jwt_access_ttl_minutes=settings.jwt_access_ttl_minutes,
            jwt_cookie_name=settings.jwt_cookie_name,
            jwt_cookie_secure=settings.jwt_cookie_secure,
        )


@dataclass(frozen=True, slots=True)
class TokenPayload:
    user_id: str
    email: str
    role: UserRole


def get_auth_settings() -> AuthSettings:
    return AuthSettings.from_settings(get_settings())


def create_access_token(
    user: User, settings: AuthSettings | None = None
) -> tuple[str, int]:
    """Devuelve `(token, expires_in_seconds)`."""
    cfg = settings or get_auth_settings()
    lifetime = timedelta(minutes=cfg.jwt_access_ttl_minutes)
    now = datetime.now(timezone.utc)

    claims = {
        "sub": str(user.id),
        "email": user.email,
        "role": user.role.value,
        "typ": ACCESS_TOKEN_TYPE,
        "iat": now,
        "exp": now + lifetime,
    }
    return jwt.encode(claims, cfg.jwt_secret, algorithm=JWT_ALGORITHM), int(
        lifetime.total_seconds()
    )


def _payload_from_claims(claims: Mapping[str, Any]) -> TokenPayload:
    if claims.get("typ") != ACCESS_TOKEN_TYPE:
        raise unauthorized("Tipo de token inválido.")

    subject, email = claims.get("sub"), claims.get("email")
    if not subject or not email:
        raise unauthorized(_INVALID)

    try:
        role = UserRole(claims.get("role"))
    except ValueError as exc:
        raise unauthorized(_INVALID) from exc

    return TokenPayload(user_id=str(subject), email=str(email), role=role)


def decode_access_token(
    token: str, settings: AuthSettings | None = None
) -> TokenPayload:
    cfg = settings or get_auth_settings()
    try:
        claims = jwt.decode(
            token,
            cfg.jwt_secret,
            algorithms=[JWT_ALGORITHM],
            options={"require": list(_REQUIRED_CLAIMS)},
        )
    except jwt.ExpiredSignatureError as exc:
        raise unauthorized("Token expirado.") from exc
    except jwt.PyJWTError as exc:
        raise unauthorized(_INVALID) from exc

    return _payload_from_claims(claims)
