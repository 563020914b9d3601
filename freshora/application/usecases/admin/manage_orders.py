"""Admin: listar órdenes y cambiar su estado (solo valores canónicos)."""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from ....crosscutting.logger import logger
from ....domain.entities import CANONICAL_ORDER_STATUSES
from ....domain.repositories import OrderRepository
from .admin_results import OrderListResult, OrderResult, not_found_error, validation_error

_RESOURCE = "Orden"
_ALLOWED_STATUSES = tuple(s.value for s in CANONICAL_ORDER_STATUSES)


class ListOrdersUseCase:
    def __init__(self, orders: OrderRepository) -> None:
        self._orders = orders

    def execute(self, *, since: datetime | None = None) -> OrderListResult:
        return OrderListResult(orders=self._orders.list_orders(since=since))


class UpdateOrderStatusUseCase:
    def __init__(self, orders: OrderRepository) -> None:
        self._orders = orders

    def execute(self, order_id: UUID, status: str) -> OrderResult:
        normalized = (status or "").strip()
        # Acepta "shipped" / "SHIPPED" y persiste la forma canónica.
        canonical = next(
            (s for s in _ALLOWED_STATUSES if s.lower() == normalized.lower()), None
        )
        if canonical is None:
            return OrderResult(
                error=validation_error(
                    f"Estado inválido. Valores permitidos: {', '.join(_ALLOWED_STATUSES)}."
                )
            )

        updated = self._orders.update_order_status(order_id, canonical)
        if updated is None:
            return OrderResult(error=not_found_error(_RESOURCE, order_id))

        logger.info(
            "Estado de orden actualizado",
            extra={"order_id": str(order_id), "status": canonical},
        )
        return OrderResult(order=updated)
