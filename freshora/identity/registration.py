"""
===============================================================================
TARJETA CRC — identity/registration.py (Requests de registro por rol)
===============================================================================

Responsabilidades:
    - Modelar el registro como unión discriminada por `role`:
        * CustomerRegistration: name, email, password
        * SellerRegistration:   + store_name (obligatorio)
        * AdminRegistration:    + admin_secret (obligatorio)
    - Normalizar email (trim + lower) en el borde de identidad.
    - Aceptar los nombres de campo del cliente web (storeName / adminSecret).

Colaboradores:
    - application/usecases/identity/register_user.py: consume RegistrationRequest.
    - api/auth_routes.py: parsea el body con RegistrationRequest.

Notas:
    - Un CustomerRegistration no tiene campo admin_secret ni store_name: si el
      cliente los envía se descartan al parsear (extra="ignore").
    - El cliente web histórico envía role="user" para clientes; se acepta como
      alias de "customer".
===============================================================================
"""

from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator

from .users import UserRole


class _RegistrationBase(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    name: str = Field(default="", max_length=200)
    email: str = Field(default="", max_length=320)
    password: str = Field(default="", max_length=512)

    @field_validator("email")
    @classmethod
    def normalizar_email(cls, v: str) -> str:
        return (v or "").strip().lower()

    @field_validator("name")
    @classmethod
    def normalizar_nombre(cls, v: str) -> str:
        return (v or "").strip()


class CustomerRegistration(_RegistrationBase):
    role: Literal["customer", "user"] = "customer"

    @property
    def account_role(self) -> UserRole:
        return UserRole.CUSTOMER


class SellerRegistration(_RegistrationBase):
    role: Literal["seller"]
    store_name: str = Field(default="", alias="storeName", max_length=200)

    @field_validator("store_name")
    @classmethod
    def normalizar_store_name(cls, v: str) -> str:
        return (v or "").strip()

    @property
    def account_role(self) -> UserRole:
        return UserRole.SELLER


class AdminRegistration(_RegistrationBase):
    role: Literal["admin"]
    admin_secret: str = Field(default="", alias="adminSecret", max_length=512, repr=False)

    @property
    def account_role(self) -> UserRole:
        return UserRole.ADMIN


RegistrationRequest = Annotated[
    Union[CustomerRegistration, SellerRegistration, AdminRegistration],
    Field(discriminator="role"),
]

_registration_adapter: TypeAdapter[RegistrationRequest] = TypeAdapter(
    RegistrationRequest
)


def parse_registration(payload: dict) -> CustomerRegistration | SellerRegistration | AdminRegistration:
    """Parsea un dict crudo a la variante correcta (ValidationError si role es inválido)."""
    return _registration_adapter.validate_python(payload)
