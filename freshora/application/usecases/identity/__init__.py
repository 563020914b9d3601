"""
Identity use cases (registro + login).
"""

from __future__ import annotations

from .identity_results import (
    AuthResult,
    IdentityError,
    IdentityErrorCode,
    LoginResult,
    RegistrationResult,
)
from .login_user import LoginUserUseCase
from .register_user import RegisterUserUseCase

__all__ = [
    "AuthResult",
    "IdentityError",
    "IdentityErrorCode",
    "LoginResult",
    "LoginUserUseCase",
    "RegisterUserUseCase",
    "RegistrationResult",
]
