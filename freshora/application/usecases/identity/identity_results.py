"""
===============================================================================
IDENTITY USE CASE RESULTS (Shared Result / Error Models)
===============================================================================

Name:
    Identity Use Case Results

Business Goal:
    Contrato estable de resultados/errores para registro y login, de modo que
    la capa HTTP mapee cada código a un status sin inspeccionar mensajes.

-------------------------------------------------------------------------------
CRC CARD (Class-Responsibility-Collaborator)
-------------------------------------------------------------------------------
Component:
    identity_results models (module)

Responsibilities:
    - IdentityErrorCode: VALIDATION_ERROR / INVALID_CREDENTIALS / FORBIDDEN.
    - IdentityError (code + message).
    - AuthResult: usuario + token emitido + ruta de aterrizaje.

Collaborators:
    - identity.users.User
    - api/auth_routes.py (mapeo a AppHTTPException)
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from ....identity.users import User


class IdentityErrorCode(str, Enum):
    """
    Códigos de error de identidad.

      - VALIDATION_ERROR: campos vacíos, password corto, store_name faltante,
        email ya registrado.
      - INVALID_CREDENTIALS: email inexistente o password incorrecto (mismo
        mensaje en ambos casos).
      - FORBIDDEN: secreto de admin incorrecto.
    """

    VALIDATION_ERROR = "VALIDATION_ERROR"
    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"
    FORBIDDEN = "FORBIDDEN"


@dataclass(frozen=True)
class IdentityError:
    code: IdentityErrorCode
    message: str


@dataclass
class AuthResult:
    """
    Resultado de registro/login.

    Contrato:
      - error is None => user, access_token y landing_route presentes.
      - error != None => no se emitió token.
    """

    user: User | None = None
    access_token: str | None = None
    expires_in: int = 0
    landing_route: str | None = None
    error: IdentityError | None = None


# Alias por legibilidad en firmas.
RegistrationResult = AuthResult
LoginResult = AuthResult
