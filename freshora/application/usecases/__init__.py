"""
Use Cases Layer (Business Operations)

This package exposes entry points for business logic, organized by feature.

Structure
---------
usecases/
├── identity/   # Registration and login
└── admin/      # Dashboard stats and user/order/product management

Usage
-----
Import from subpackages for clarity:

    from freshora.application.usecases.identity import RegisterUserUseCase

Or use the barrel exports from this module:

    from freshora.application.usecases import GetDashboardStatsUseCase
"""

# Admin
from .admin import (
    AdminError,
    AdminErrorCode,
    CreateProductUseCase,
    DashboardStatsResult,
    DeleteProductUseCase,
    DeleteResult,
    DeleteUserUseCase,
    GetDashboardStatsUseCase,
    ListOrdersUseCase,
    ListUsersUseCase,
    OrderListResult,
    OrderResult,
    ProductInput,
    ProductResult,
    UpdateOrderStatusUseCase,
    UpdateProductUseCase,
    UpdateUserInput,
    UpdateUserUseCase,
    UserListResult,
    UserResult,
)

# Identity
from .identity import (
    AuthResult,
    IdentityError,
    IdentityErrorCode,
    LoginResult,
    LoginUserUseCase,
    RegisterUserUseCase,
    RegistrationResult,
)

__all__ = [
    # Admin
    "AdminError",
    "AdminErrorCode",
    "CreateProductUseCase",
    "DashboardStatsResult",
    "DeleteProductUseCase",
    "DeleteResult",
    "DeleteUserUseCase",
    "GetDashboardStatsUseCase",
    "ListOrdersUseCase",
    "ListUsersUseCase",
    "OrderListResult",
    "OrderResult",
    "ProductInput",
    "ProductResult",
    "UpdateOrderStatusUseCase",
    "UpdateProductUseCase",
    "UpdateUserInput",
    "UpdateUserUseCase",
    "UserListResult",
    "UserResult",
    # Identity
    "AuthResult",
    "IdentityError",
    "IdentityErrorCode",
    "LoginResult",
    "LoginUserUseCase",
    "RegisterUserUseCase",
    "RegistrationResult",
]
