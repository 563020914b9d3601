"""
===============================================================================
TARJETA CRC — domain/__init__.py
===============================================================================

Módulo:
    Exportaciones de la Capa de Dominio

Responsabilidades:
    - Centralizar exports para imports limpios en application/api.

Reglas:
    - Solo re-exporta contratos/entidades del dominio.
    - No importar infraestructura aquí.
===============================================================================
"""

from .dashboard_stats import (
    DashboardStats,
    RecentOrder,
    SalesPoint,
    StatusCount,
    compute_dashboard_stats,
)
from .entities import (
    CANONICAL_ORDER_STATUSES,
    BuyerSummary,
    Order,
    OrderItem,
    OrderStatus,
    Product,
)
from .repositories import OrderRepository, ProductRepository, UserRepository

__all__ = [
    "BuyerSummary",
    "CANONICAL_ORDER_STATUSES",
    "DashboardStats",
    "Order",
    "OrderItem",
    "OrderRepository",
    "OrderStatus",
    "Product",
    "ProductRepository",
    "RecentOrder",
    "SalesPoint",
    "StatusCount",
    "UserRepository",
    "compute_dashboard_stats",
]
