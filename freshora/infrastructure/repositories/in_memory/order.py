"""
============================================================
TARJETA CRC — infrastructure/repositories/in_memory/order.py
============================================================
Class: InMemoryOrderRepository

Responsibilities:
  - Mantener el ledger de órdenes en memoria (tests / dev / seed demo).
  - Resolver la proyección del comprador al leer (equivalente al JOIN).
  - Ordering: created_at DESC.

Collaborators:
  - domain.entities: Order, BuyerSummary
  - InMemoryUserRepository (opcional, para resolver buyer)
============================================================
"""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timezone
from threading import Lock
from typing import Dict, List, Optional
from uuid import UUID

from ....domain.entities import BuyerSummary, Order
from .user import InMemoryUserRepository


def _as_utc(value: datetime) -> datetime:
    return value if value.tzinfo else value.replace(tzinfo=timezone.utc)


class InMemoryOrderRepository:
    def __init__(self, users: InMemoryUserRepository | None = None) -> None:
        self._lock = Lock()
        self._orders: Dict[UUID, Order] = {}
        self._users = users

    def add_order(self, order: Order) -> Order:
        """Alta directa (las órdenes las crea checkout; acá solo seed/tests)."""
        with self._lock:
            self._orders[order.id] = order
        return order

    def _with_buyer(self, order: Order) -> Order:
        if self._users is None or order.user_id is None:
            return order
        user = self._users.get_user_by_id(order.user_id)
        buyer = BuyerSummary(name=user.name, email=user.email) if user else None
        return replace(order, buyer=buyer)

    def list_orders(self, *, since: datetime | None = None) -> List[Order]:
        with self._lock:
            orders = list(self._orders.values())
        if since is not None:
            lower = _as_utc(since)
            orders = [o for o in orders if _as_utc(o.created_at) >= lower]
        orders.sort(key=lambda o: _as_utc(o.created_at), reverse=True)
        return [self._with_buyer(o) for o in orders]

    def get_order(self, order_id: UUID) -> Optional[Order]:
        with self._lock:
            order = self._orders.get(order_id)
        return self._with_buyer(order) if order else None

    def update_order_status(self, order_id: UUID, status: str) -> Optional[Order]:
        with self._lock:
            current = self._orders.get(order_id)
            if current is None:
                return None
            updated = replace(current, status=status)
            self._orders[order_id] = updated
        return self._with_buyer(updated)
