"""
Admin use cases (dashboard + gestión de usuarios, órdenes y productos).
"""

from __future__ import annotations

from .admin_results import (
    AdminError,
    AdminErrorCode,
    DashboardStatsResult,
    DeleteResult,
    OrderListResult,
    OrderResult,
    ProductResult,
    UserListResult,
    UserResult,
)
from .get_dashboard_stats import GetDashboardStatsUseCase
from .manage_orders import ListOrdersUseCase, UpdateOrderStatusUseCase
from .manage_products import (
    CreateProductUseCase,
    DeleteProductUseCase,
    ProductInput,
    UpdateProductUseCase,
)
from .manage_users import (
    DeleteUserUseCase,
    ListUsersUseCase,
    UpdateUserInput,
    UpdateUserUseCase,
)

__all__ = [
    # Results
    "AdminError",
    "AdminErrorCode",
    "DashboardStatsResult",
    "DeleteResult",
    "OrderListResult",
    "OrderResult",
    "ProductResult",
    "UserListResult",
    "UserResult",
    # Dashboard
    "GetDashboardStatsUseCase",
    # Users
    "DeleteUserUseCase",
    "ListUsersUseCase",
    "UpdateUserInput",
    "UpdateUserUseCase",
    # Orders
    "ListOrdersUseCase",
    "UpdateOrderStatusUseCase",
    # Products
    "CreateProductUseCase",
    "DeleteProductUseCase",
    "ProductInput",
    "UpdateProductUseCase",
]
