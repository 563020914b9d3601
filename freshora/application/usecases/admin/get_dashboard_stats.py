"""
===============================================================================
USE CASE: Get Dashboard Stats
===============================================================================

Business Goal:
    Entregar al admin un resumen de solo lectura del negocio (ventas, órdenes,
    usuarios, productos, serie semanal, histograma por estado, últimas órdenes).

-------------------------------------------------------------------------------
CRC CARD
-------------------------------------------------------------------------------
Class:
    GetDashboardStatsUseCase

Responsibilities:
    - Leer el ledger completo de órdenes y los conteos de usuarios/productos.
    - Delegar el cálculo al motor puro (compute_dashboard_stats).
    - Medir la duración y advertir sobre estados fuera del set canónico.

Collaborators:
    - OrderRepository.list_orders / UserRepository.count_users /
      ProductRepository.count_products
    - domain.dashboard_stats.compute_dashboard_stats
    - crosscutting.metrics.observe_stats_duration

Notas:
    - Sin cache: cada llamada relee todo (consistencia > costo a esta escala).
    - La autorización (solo admin) la aplica la cadena de dependencias HTTP;
      este caso de uso no se ejecuta si el rol no corresponde.
===============================================================================
"""

from __future__ import annotations

import time
from datetime import datetime

from ....crosscutting.logger import logger
from ....crosscutting.metrics import observe_stats_duration
from ....domain.dashboard_stats import compute_dashboard_stats
from ....domain.repositories import OrderRepository, ProductRepository, UserRepository
from .admin_results import DashboardStatsResult


class GetDashboardStatsUseCase:
    def __init__(
        self,
        orders: OrderRepository,
        users: UserRepository,
        products: ProductRepository,
    ) -> None:
        self._orders = orders
        self._users = users
        self._products = products

    def execute(self, *, now: datetime | None = None) -> DashboardStatsResult:
        start = time.perf_counter()

        orders = self._orders.list_orders()
        stats = compute_dashboard_stats(
            orders,
            total_users=self._users.count_users(),
            total_products=self._products.count_products(),
            now=now,
        )

        observe_stats_duration(time.perf_counter() - start)

        if stats.non_canonical_orders:
            logger.warning(
                "Órdenes con estado fuera del set canónico excluidas del histograma",
                extra={"non_canonical_orders": stats.non_canonical_orders},
            )

        return DashboardStatsResult(stats=stats)
