"""
============================================================
TARJETA CRC — infrastructure/repositories/postgres/order.py
============================================================
Class: PostgresOrderRepository

Responsibilities:
  - Leer el ledger de órdenes (completo o desde un timestamp) con la
    proyección del comprador (name, email) vía LEFT JOIN a users.
  - Cambiar el estado de una orden (panel admin).
  - items (jsonb) -> tuple[OrderItem].

Collaborators:
  - SqlRunner (postgres/_sql.py)
  - domain.entities: Order, OrderItem, BuyerSummary

Notes:
  - status se lee tal cual: un valor fuera del set canónico no rompe la
    lectura (el dashboard lo excluye del histograma).
============================================================
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Optional
from uuid import UUID

from psycopg_pool import ConnectionPool

from ....domain.entities import BuyerSummary, Order, OrderItem
from ._sql import Row, SqlRunner

_SELECT = (
    "SELECT o.id, o.user_id, o.items, o.total_price, o.status, o.created_at, "
    "u.name AS buyer_name, u.email AS buyer_email "
    "FROM orders o LEFT JOIN users u ON u.id = o.user_id"
)
_NEWEST_FIRST = "ORDER BY o.created_at DESC, o.id DESC"


def _to_item(raw: dict[str, Any]) -> OrderItem:
    # El cliente web históricamente guardó productId (camelCase).
    product_id = raw.get("product_id") or raw.get("productId")
    return OrderItem(
        product_id=UUID(str(product_id)) if product_id else None,
        name=str(raw.get("name") or ""),
        quantity=int(raw.get("quantity") or 0),
        price=float(raw.get("price") or 0),
    )


def _to_order(row: Row) -> Order:
    buyer = None
    if row["buyer_email"] is not None:
        buyer = BuyerSummary(name=row["buyer_name"], email=row["buyer_email"])
    return Order(
        id=row["id"],
        user_id=row["user_id"],
        items=tuple(_to_item(i) for i in row["items"] or ()),
        total_price=float(row["total_price"] or 0),
        status=row["status"],
        created_at=row["created_at"],
        buyer=buyer,
    )


class PostgresOrderRepository:
    def __init__(self, pool: ConnectionPool | None = None) -> None:
        self._sql = SqlRunner(pool, "PostgresOrderRepository")

    def list_orders(self, *, since: datetime | None = None) -> list[Order]:
        if since is None:
            rows = self._sql.all("list_orders", f"{_SELECT} {_NEWEST_FIRST}")
        else:
            rows = self._sql.all(
                "list_orders",
                f"{_SELECT} WHERE o.created_at >= %s {_NEWEST_FIRST}",
                (since,),
                since=since.isoformat(),
            )
        return [_to_order(r) for r in rows]

    def get_order(self, order_id: UUID) -> Optional[Order]:
        row = self._sql.one(
            "get_order",
            f"{_SELECT} WHERE o.id = %s",
            (order_id,),
            order_id=str(order_id),
        )
        return _to_order(row) if row else None

    def update_order_status(self, order_id: UUID, status: str) -> Optional[Order]:
        updated = self._sql.rowcount(
            "update_order_status",
            "UPDATE orders SET status = %s WHERE id = %s",
            (status, order_id),
            order_id=str(order_id),
            status=status,
        )
        return self.get_order(order_id) if updated else None
