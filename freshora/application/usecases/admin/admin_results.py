"""
===============================================================================
ADMIN USE CASE RESULTS (Shared Result / Error Models)
===============================================================================

Responsibilities:
    - AdminErrorCode: VALIDATION_ERROR / NOT_FOUND.
    - Resultados tipados para estadísticas, usuarios, órdenes y productos.

Collaborators:
    - domain.entities / domain.dashboard_stats / identity.users
    - api/admin_routes.py (mapeo a AppHTTPException)
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List

from ....domain.dashboard_stats import DashboardStats
from ....domain.entities import Order, Product
from ....identity.users import User


class AdminErrorCode(str, Enum):
    VALIDATION_ERROR = "VALIDATION_ERROR"
    NOT_FOUND = "NOT_FOUND"


@dataclass(frozen=True)
class AdminError:
    code: AdminErrorCode
    message: str
    resource: str | None = None


@dataclass
class DashboardStatsResult:
    stats: DashboardStats


@dataclass
class UserResult:
    user: User | None = None
    error: AdminError | None = None


@dataclass
class UserListResult:
    users: List[User] = field(default_factory=list)
    total: int = 0
    error: AdminError | None = None


@dataclass
class OrderResult:
    order: Order | None = None
    error: AdminError | None = None


@dataclass
class OrderListResult:
    orders: List[Order] = field(default_factory=list)
    error: AdminError | None = None


@dataclass
class ProductResult:
    product: Product | None = None
    error: AdminError | None = None


@dataclass
class DeleteResult:
    """Comando de baja: deleted=True si el registro existía."""

    deleted: bool
    error: AdminError | None = None


def not_found_error(resource: str, identifier: object) -> AdminError:
    return AdminError(
        code=AdminErrorCode.NOT_FOUND,
        message=f"{resource} '{identifier}' no encontrado",
        resource=resource,
    )


def validation_error(message: str) -> AdminError:
    return AdminError(code=AdminErrorCode.VALIDATION_ERROR, message=message)
