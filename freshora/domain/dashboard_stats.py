"""
===============================================================================
TARJETA CRC — domain/dashboard_stats.py (Motor de agregación del dashboard)
===============================================================================

Responsabilidades:
    - Calcular estadísticas de solo lectura sobre el ledger completo de órdenes:
        * total de ventas / órdenes (+ totales de usuarios y productos recibidos)
        * serie de ventas de los últimos 7 días agrupada por fecha (UTC)
        * histograma por estado canónico (orden fijo)
        * últimas 10 órdenes con nombre/email del comprador
    - Ser una función pura: sin cache, sin IO, sin mutar inputs.

Colaboradores:
    - domain.entities: Order, OrderStatus, CANONICAL_ORDER_STATUSES
    - application.usecases.admin.get_dashboard_stats: lee repos y llama acá.

Decisiones:
    - Política de timezone: todo se normaliza a UTC antes de tomar la fecha.
      Un timestamp naive se interpreta como UTC.
    - Ventana de 7 días por comparación de timestamps (created_at >= now - 7d),
      no por alineación a días calendario.
    - Estados fuera del set canónico: no cuentan en ningún bucket del
      histograma, pero sí en total_orders.
===============================================================================
"""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Iterable, Sequence
from uuid import UUID

from .entities import CANONICAL_ORDER_STATUSES, BuyerSummary, Order

SALES_WINDOW = timedelta(days=7)
RECENT_ORDERS_LIMIT = 10


@dataclass(frozen=True, slots=True)
class SalesPoint:
    date: str
    sales: float


@dataclass(frozen=True, slots=True)
class StatusCount:
    status: str
    count: int


@dataclass(frozen=True, slots=True)
class RecentOrder:
    """Proyección acotada de una orden reciente (sin campos extra del usuario)."""

    id: UUID
    total_price: float
    status: str
    created_at: datetime
    buyer: BuyerSummary | None


@dataclass(frozen=True, slots=True)
class DashboardStats:
    total_sales: float
    total_orders: int
    total_users: int
    total_products: int
    sales_data: tuple[SalesPoint, ...]
    order_status_data: tuple[StatusCount, ...]
    recent_orders: tuple[RecentOrder, ...]
    non_canonical_orders: int = 0


def to_utc(value: datetime) -> datetime:
    """Normaliza a UTC (naive => se asume UTC)."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _sales_by_date(orders: Iterable[Order], since: datetime) -> tuple[SalesPoint, ...]:
    buckets: dict[str, float] = defaultdict(float)
    for order in orders:
        created = to_utc(order.created_at)
        if created < since:
            continue
        buckets[created.date().isoformat()] += order.total_price
    return tuple(SalesPoint(date=d, sales=buckets[d]) for d in sorted(buckets))


def _status_histogram(orders: Sequence[Order]) -> tuple[StatusCount, ...]:
    return tuple(
        StatusCount(
            status=status.value,
            count=sum(1 for o in orders if o.status == status.value),
        )
        for status in CANONICAL_ORDER_STATUSES
    )


def _recent_orders(orders: Sequence[Order]) -> tuple[RecentOrder, ...]:
    # sorted() es estable: empates conservan el orden de entrada.
    newest_first = sorted(orders, key=lambda o: to_utc(o.created_at), reverse=True)
    return tuple(
        RecentOrder(
            id=o.id,
            total_price=o.total_price,
            status=o.status,
            created_at=o.created_at,
            buyer=o.buyer,
        )
        for o in newest_first[:RECENT_ORDERS_LIMIT]
    )


def compute_dashboard_stats(
    orders: Iterable[Order],
    total_users: int,
    total_products: int,
    *,
    now: datetime | None = None,
) -> DashboardStats:
    """
    Calcula DashboardStats a partir de las órdenes y los conteos recibidos.

    Idempotente y libre de efectos: dos llamadas con los mismos inputs (y el
    mismo `now`) devuelven resultados iguales.
    """
    snapshot = tuple(orders)
    reference = to_utc(now or datetime.now(timezone.utc))

    total_sales = 0.0
    for order in snapshot:
        total_sales += order.total_price

    histogram = _status_histogram(snapshot)
    counted = sum(item.count for item in histogram)

    return DashboardStats(
        total_sales=total_sales,
        total_orders=len(snapshot),
        total_users=total_users,
        total_products=total_products,
        sales_data=_sales_by_date(snapshot, reference - SALES_WINDOW),
        order_status_data=histogram,
        recent_orders=_recent_orders(snapshot),
        non_canonical_orders=len(snapshot) - counted,
    )
