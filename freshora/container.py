"""
===============================================================================
TARJETA CRC — freshora/container.py (Composition Root / DI manual)
===============================================================================

Responsabilidades:
  - Componer dependencias (repositorios + casos de uso) siguiendo DIP.
  - Exponer factories para FastAPI (Depends).
  - Mantener singletons con caching (lru_cache) para los repositorios.
  - Elegir implementación según Settings (in-memory en test / STORAGE_BACKEND=memory).

Colaboradores:
  - crosscutting.config.get_settings
  - domain.repositories (puertos)
  - infrastructure.repositories (implementaciones)
  - application.usecases (casos de uso)

Notas:
  - Este archivo NO contiene lógica de negocio.
  - NO importa identity.auth_users (que depende de este módulo).
===============================================================================
"""

from __future__ import annotations

from functools import lru_cache

from .application.usecases import (
    CreateProductUseCase,
    DeleteProductUseCase,
    DeleteUserUseCase,
    GetDashboardStatsUseCase,
    ListOrdersUseCase,
    ListUsersUseCase,
    LoginUserUseCase,
    RegisterUserUseCase,
    UpdateOrderStatusUseCase,
    UpdateProductUseCase,
    UpdateUserUseCase,
)
from .crosscutting.config import get_settings
from .domain.repositories import OrderRepository, ProductRepository, UserRepository
from .infrastructure.repositories import (
    InMemoryOrderRepository,
    InMemoryProductRepository,
    InMemoryUserRepository,
    PostgresOrderRepository,
    PostgresProductRepository,
    PostgresUserRepository,
)

# =============================================================================
# Repositorios (singletons)
# =============================================================================


@lru_cache(maxsize=1)
def get_user_repository() -> UserRepository:
    """Repositorio de usuarios (in-memory en test; Postgres en runtime)."""
    if get_settings().uses_memory_storage():
        return InMemoryUserRepository()
    return PostgresUserRepository()


@lru_cache(maxsize=1)
def get_order_repository() -> OrderRepository:
    """Repositorio de órdenes (el in-memory resuelve el comprador vía users)."""
    if get_settings().uses_memory_storage():
        users = get_user_repository()
        return InMemoryOrderRepository(
            users if isinstance(users, InMemoryUserRepository) else None
        )
    return PostgresOrderRepository()


@lru_cache(maxsize=1)
def get_product_repository() -> ProductRepository:
    """Repositorio de productos."""
    if get_settings().uses_memory_storage():
        return InMemoryProductRepository()
    return PostgresProductRepository()


def reset_repositories() -> None:
    """Limpia los singletons (tests)."""
    get_user_repository.cache_clear()
    get_order_repository.cache_clear()
    get_product_repository.cache_clear()


# =============================================================================
# Casos de uso (factory por request)
# =============================================================================


def get_register_user_use_case() -> RegisterUserUseCase:
    """Caso de uso: registro por rol (admin protegido por ADMIN_SECRET)."""
    settings = get_settings()
    return RegisterUserUseCase(
        users=get_user_repository(),
        admin_secret=settings.admin_secret,
        password_min_length=settings.password_min_length,
    )


def get_login_user_use_case() -> LoginUserUseCase:
    return LoginUserUseCase(users=get_user_repository())


def get_dashboard_stats_use_case() -> GetDashboardStatsUseCase:
    """Caso de uso: estadísticas del dashboard admin (lectura completa)."""
    return GetDashboardStatsUseCase(
        orders=get_order_repository(),
        users=get_user_repository(),
        products=get_product_repository(),
    )


def get_list_users_use_case() -> ListUsersUseCase:
    return ListUsersUseCase(users=get_user_repository())


def get_update_user_use_case() -> UpdateUserUseCase:
    return UpdateUserUseCase(users=get_user_repository())


def get_delete_user_use_case() -> DeleteUserUseCase:
    return DeleteUserUseCase(users=get_user_repository())


def get_list_orders_use_case() -> ListOrdersUseCase:
    return ListOrdersUseCase(orders=get_order_repository())


def get_update_order_status_use_case() -> UpdateOrderStatusUseCase:
    return UpdateOrderStatusUseCase(orders=get_order_repository())


def get_create_product_use_case() -> CreateProductUseCase:
    return CreateProductUseCase(products=get_product_repository())


def get_update_product_use_case() -> UpdateProductUseCase:
    return UpdateProductUseCase(products=get_product_repository())


def get_delete_product_use_case() -> DeleteProductUseCase:
    return DeleteProductUseCase(products=get_product_repository())
