"""
===============================================================================
TARJETA CRC — freshora/api/admin_routes.py (Panel Admin)
===============================================================================

Responsabilidades:
  - Exponer el dashboard de estadísticas (/admin/stats).
  - Exponer gestión de usuarios, órdenes y productos para admins.
  - Aplicar autorización estricta: TODA ruta exige rol admin (router-level
    dependency), así el handler nunca corre sin authenticate -> authorize.

Patrones aplicados:
  - Thin Controller: orquesta dependencias, no contiene reglas de negocio.
  - Dependency Injection (FastAPI Depends): use cases inyectados.
  - Error Mapping: errores tipados de casos de uso -> HTTP (RFC7807).

Colaboradores:
  - application.usecases.admin
  - identity.auth_users.require_admin
===============================================================================
"""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from ..application.usecases import (
    AdminError,
    AdminErrorCode,
    CreateProductUseCase,
    DeleteProductUseCase,
    DeleteUserUseCase,
    GetDashboardStatsUseCase,
    ListOrdersUseCase,
    ListUsersUseCase,
    ProductInput,
    UpdateOrderStatusUseCase,
    UpdateProductUseCase,
    UpdateUserInput,
    UpdateUserUseCase,
)
from ..container import (
    get_create_product_use_case,
    get_dashboard_stats_use_case,
    get_delete_product_use_case,
    get_delete_user_use_case,
    get_list_orders_use_case,
    get_list_users_use_case,
    get_update_order_status_use_case,
    get_update_product_use_case,
    get_update_user_use_case,
)
from ..crosscutting.error_responses import (
    OPENAPI_ERROR_RESPONSES,
    not_found,
    validation_error,
)
from ..domain.dashboard_stats import DashboardStats
from ..domain.entities import Order, Product
from ..identity.auth_users import require_admin
from ..identity.users import UserRole
from .auth_routes import UserResponse, to_user_response

TOTAL_COUNT_HEADER = "X-Total-Count"

router = APIRouter(
    prefix="/admin",
    tags=["admin"],
    responses=OPENAPI_ERROR_RESPONSES,
    dependencies=[Depends(require_admin())],
)


# -----------------------------------------------------------------------------
# Modelos HTTP (DTOs, camelCase en el wire)
# -----------------------------------------------------------------------------


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class BuyerResponse(_CamelModel):
    name: str
    email: str


class SalesPointResponse(_CamelModel):
    date: str
    sales: float


class StatusCountResponse(_CamelModel):
    status: str
    count: int


class RecentOrderResponse(_CamelModel):
    id: UUID
    total_price: float
    status: str
    created_at: datetime
    user: BuyerResponse | None = None


class DashboardStatsResponse(_CamelModel):
    total_sales: float
    total_orders: int
    total_users: int
    total_products: int
    sales_data: list[SalesPointResponse]
    order_status_data: list[StatusCountResponse]
    recent_orders: list[RecentOrderResponse]


class OrderItemResponse(_CamelModel):
    product_id: UUID | None = None
    name: str
    quantity: int
    price: float


class OrderResponse(_CamelModel):
    id: UUID
    user_id: UUID | None = None
    user: BuyerResponse | None = None
    items: list[OrderItemResponse]
    total_price: float
    status: str
    created_at: datetime


class ProductResponse(_CamelModel):
    id: UUID
    name: str
    description: str
    price: float
    category: str
    stock: int
    image_url: str | None = None
    created_at: datetime | None = None


class UpdateUserRequest(_CamelModel):
    name: str | None = Field(default=None, max_length=200)
    email: str | None = Field(default=None, max_length=320)
    role: UserRole | None = None
    store_name: str | None = Field(default=None, max_length=200)


class UpdateOrderStatusRequest(_CamelModel):
    status: str = Field(..., min_length=1, max_length=40)


class CreateProductRequest(_CamelModel):
    name: str = Field(..., min_length=1, max_length=200)
    description: str = Field(default="", max_length=5000)
    price: float = Field(..., ge=0)
    category: str = Field(default="", max_length=120)
    stock: int = Field(default=0, ge=0)
    image_url: str | None = Field(default=None, max_length=2048)


class UpdateProductRequest(_CamelModel):
    name: str | None = Field(default=None, max_length=200)
    description: str | None = Field(default=None, max_length=5000)
    price: float | None = Field(default=None, ge=0)
    category: str | None = Field(default=None, max_length=120)
    stock: int | None = Field(default=None, ge=0)
    image_url: str | None = Field(default=None, max_length=2048)


class MessageResponse(BaseModel):
    message: str


# -----------------------------------------------------------------------------
# Helpers
# -----------------------------------------------------------------------------


def _buyer(order) -> BuyerResponse | None:
    if order.buyer is None:
        return None
    return BuyerResponse(name=order.buyer.name, email=order.buyer.email)


def _to_stats_response(stats: DashboardStats) -> DashboardStatsResponse:
    return DashboardStatsResponse(
        total_sales=stats.total_sales,
        total_orders=stats.total_orders,
        total_users=stats.total_users,
        total_products=stats.total_products,
        sales_data=[
            SalesPointResponse(date=p.date, sales=p.sales) for p in stats.sales_data
        ],
        order_status_data=[
            StatusCountResponse(status=s.status, count=s.count)
            for s in stats.order_status_data
        ],
        recent_orders=[
            RecentOrderResponse(
                id=o.id,
                total_price=o.total_price,
                status=o.status,
                created_at=o.created_at,
                user=_buyer(o),
            )
            for o in stats.recent_orders
        ],
    )


def _to_order_response(order: Order) -> OrderResponse:
    return OrderResponse(
        id=order.id,
        user_id=order.user_id,
        user=_buyer(order),
        items=[
            OrderItemResponse(
                product_id=i.product_id,
                name=i.name,
                quantity=i.quantity,
                price=i.price,
            )
            for i in order.items
        ],
        total_price=order.total_price,
        status=order.status,
        created_at=order.created_at,
    )


def _to_product_response(product: Product) -> ProductResponse:
    return ProductResponse(
        id=product.id,
        name=product.name,
        description=product.description,
        price=product.price,
        category=product.category,
        stock=product.stock,
        image_url=product.image_url,
        created_at=product.created_at,
    )


def _raise_admin_error(error: AdminError | None, identifier: UUID) -> None:
    if error is None:
        return
    if error.code == AdminErrorCode.NOT_FOUND:
        raise not_found(error.resource or "Recurso", str(identifier))
    raise validation_error(error.message)


# -----------------------------------------------------------------------------
# Dashboard
# -----------------------------------------------------------------------------


@router.get("/stats", response_model=DashboardStatsResponse)
def get_stats(
    use_case: GetDashboardStatsUseCase = Depends(get_dashboard_stats_use_case),
):
    """Estadísticas del dashboard (lectura completa en cada llamada)."""
    return _to_stats_response(use_case.execute().stats)


# -----------------------------------------------------------------------------
# Usuarios
# -----------------------------------------------------------------------------


@router.get("/users", response_model=list[UserResponse])
def list_users(
    response: Response,
    limit: int = Query(200, ge=1, le=1000),
    offset: int = Query(0, ge=0),
    use_case: ListUsersUseCase = Depends(get_list_users_use_case),
):
    """Página de usuarios (más nuevos primero); el total va en X-Total-Count."""
    result = use_case.execute(limit=limit, offset=offset)
    response.headers[TOTAL_COUNT_HEADER] = str(result.total)
    return [to_user_response(u) for u in result.users]


@router.put("/users/{user_id}", response_model=UserResponse)
def update_user(
    user_id: UUID,
    req: UpdateUserRequest,
    use_case: UpdateUserUseCase = Depends(get_update_user_use_case),
):
    result = use_case.execute(
        UpdateUserInput(
            user_id=user_id,
            name=req.name,
            email=req.email,
            role=req.role,
            store_name=req.store_name,
        )
    )
    _raise_admin_error(result.error, user_id)
    return to_user_response(result.user)


@router.delete("/users/{user_id}", response_model=MessageResponse)
def delete_user(
    user_id: UUID,
    use_case: DeleteUserUseCase = Depends(get_delete_user_use_case),
):
    result = use_case.execute(user_id)
    _raise_admin_error(result.error, user_id)
    return MessageResponse(message="Usuario eliminado.")


# -----------------------------------------------------------------------------
# Órdenes
# -----------------------------------------------------------------------------


@router.get("/orders", response_model=list[OrderResponse])
def list_orders(
    since: datetime | None = Query(None, description="Solo órdenes con createdAt >= since"),
    use_case: ListOrdersUseCase = Depends(get_list_orders_use_case),
):
    result = use_case.execute(since=since)
    return [_to_order_response(o) for o in result.orders]


@router.put("/orders/{order_id}/status", response_model=OrderResponse)
def update_order_status(
    order_id: UUID,
    req: UpdateOrderStatusRequest,
    use_case: UpdateOrderStatusUseCase = Depends(get_update_order_status_use_case),
):
    result = use_case.execute(order_id, req.status)
    _raise_admin_error(result.error, order_id)
    return _to_order_response(result.order)


# -----------------------------------------------------------------------------
# Productos
# -----------------------------------------------------------------------------


@router.post("/products", response_model=ProductResponse, status_code=201)
def create_product(
    req: CreateProductRequest,
    use_case: CreateProductUseCase = Depends(get_create_product_use_case),
):
    result = use_case.execute(
        ProductInput(
            name=req.name,
            description=req.description,
            price=req.price,
            category=req.category,
            stock=req.stock,
            image_url=req.image_url,
        )
    )
    if result.error:
        raise validation_error(result.error.message)
    return _to_product_response(result.product)


@router.put("/products/{product_id}", response_model=ProductResponse)
def update_product(
    product_id: UUID,
    req: UpdateProductRequest,
    use_case: UpdateProductUseCase = Depends(get_update_product_use_case),
):
    result = use_case.execute(product_id, **req.model_dump(exclude_none=True))
    _raise_admin_error(result.error, product_id)
    return _to_product_response(result.product)


@router.delete("/products/{product_id}", response_model=MessageResponse)
def delete_product(
    product_id: UUID,
    use_case: DeleteProductUseCase = Depends(get_delete_product_use_case),
):
    result = use_case.execute(product_id)
    _raise_admin_error(result.error, product_id)
    return MessageResponse(message="Producto eliminado.")
