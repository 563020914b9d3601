"""
===============================================================================
TARJETA CRC — domain/entities.py
===============================================================================

Módulo:
    Entidades del dominio de comercio (productos y órdenes)

Responsabilidades:
    - Definir las "shapes" de Product, Order y OrderItem.
    - Definir el conjunto canónico de estados de orden (OrderStatus).
    - Definir la proyección mínima del comprador (BuyerSummary).

Colaboradores:
    - domain.dashboard_stats: lee Order para agregar estadísticas.
    - domain.repositories: contratos que devuelven estas entidades.
    - infrastructure.repositories.*: mapean filas -> entidades.

Notas:
    - Order.status es str (no OrderStatus): la persistencia puede contener
      valores fuera del set canónico y el dominio no debe romper al leerlos.
    - Las entidades son inmutables (frozen) salvo donde el repo las reconstruye.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from uuid import UUID


class OrderStatus(str, Enum):
    """Estados canónicos del ciclo de vida de una orden (orden fijo)."""

    PENDING = "Pending"
    CONFIRMED = "Confirmed"
    SHIPPED = "Shipped"
    DELIVERED = "Delivered"
    CANCELLED = "Cancelled"


# Orden estable usado por el histograma de estados.
CANONICAL_ORDER_STATUSES: tuple[OrderStatus, ...] = (
    OrderStatus.PENDING,
    OrderStatus.CONFIRMED,
    OrderStatus.SHIPPED,
    OrderStatus.DELIVERED,
    OrderStatus.CANCELLED,
)


@dataclass(frozen=True, slots=True)
class BuyerSummary:
    """Proyección del comprador: solo nombre y email."""

    name: str
    email: str


@dataclass(frozen=True, slots=True)
class OrderItem:
    product_id: UUID | None
    name: str
    quantity: int
    price: float


@dataclass(frozen=True, slots=True)
class Order:
    """Orden tal como la lee el core (propiedad de order-management)."""

    id: UUID
    user_id: UUID | None
    total_price: float
    status: str
    created_at: datetime
    items: tuple[OrderItem, ...] = field(default_factory=tuple)
    buyer: BuyerSummary | None = None


@dataclass(frozen=True, slots=True)
class Product:
    id: UUID
    name: str
    price: float
    description: str = ""
    category: str = ""
    stock: int = 0
    image_url: str | None = None
    created_at: datetime | None = None
