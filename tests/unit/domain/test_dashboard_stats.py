"""
Name: Dashboard Aggregation Engine Tests

Responsibilities:
  - Validate totals, weekly sales series, status histogram and recent orders
  - Check invariants over seeded random order sets
  - Cover timezone and non-canonical status edge cases
"""

import random
from datetime import datetime, timedelta, timezone
from uuid import uuid4

import pytest

from freshora.domain.dashboard_stats import (
    RECENT_ORDERS_LIMIT,
    compute_dashboard_stats,
)
from freshora.domain.entities import (
    CANONICAL_ORDER_STATUSES,
    BuyerSummary,
    Order,
)

pytestmark = pytest.mark.unit

NOW = datetime(2024, 6, 15, 12, 0, tzinfo=timezone.utc)
_STATUSES = [s.value for s in CANONICAL_ORDER_STATUSES]


def _order(total, status="Pending", created_at=NOW, buyer=None) -> Order:
    return Order(
        id=uuid4(),
        user_id=None,
        total_price=total,
        status=status,
        created_at=created_at,
        buyer=buyer,
    )


def _random_orders(seed: int, *, non_canonical: bool = False) -> list[Order]:
    rng = random.Random(seed)
    statuses = _STATUSES + (["Refunded", "pending"] if non_canonical else [])
    orders = []
    for _ in range(rng.randint(0, 40)):
        orders.append(
            _order(
                # Multiplos de 0.25: suma exacta en float.
                total=rng.randint(0, 4000) / 4,
                status=rng.choice(statuses),
                created_at=NOW - timedelta(minutes=rng.randint(0, 60 * 24 * 20)),
            )
        )
    return orders


# ============================================================================
# Ejemplos concretos
# ============================================================================


def test_two_orders_example():
    orders = [_order(10, "Pending"), _order(20, "Shipped")]

    stats = compute_dashboard_stats(orders, total_users=3, total_products=5, now=NOW)

    assert stats.total_sales == 30
    assert stats.total_orders == 2
    assert stats.total_users == 3
    assert stats.total_products == 5
    counts = {s.status: s.count for s in stats.order_status_data}
    assert counts == {
        "Pending": 1,
        "Confirmed": 0,
        "Shipped": 1,
        "Delivered": 0,
        "Cancelled": 0,
    }


def test_empty_ledger():
    stats = compute_dashboard_stats([], total_users=0, total_products=0, now=NOW)

    assert stats.total_sales == 0
    assert stats.total_orders == 0
    assert stats.sales_data == ()
    assert stats.recent_orders == ()
    assert [s.status for s in stats.order_status_data] == _STATUSES
    assert all(s.count == 0 for s in stats.order_status_data)


def test_status_histogram_has_fixed_order():
    orders = [_order(1, "Cancelled"), _order(1, "Pending"), _order(1, "Delivered")]

    stats = compute_dashboard_stats(orders, 0, 0, now=NOW)

    assert [s.status for s in stats.order_status_data] == _STATUSES


def test_non_canonical_status_counts_in_totals_only():
    orders = [_order(5, "Pending"), _order(7, "Refunded"), _order(1, "pending")]

    stats = compute_dashboard_stats(orders, 0, 0, now=NOW)

    assert stats.total_orders == 3
    assert stats.total_sales == 13
    assert sum(s.count for s in stats.order_status_data) == 1
    assert stats.non_canonical_orders == 2


# ============================================================================
# Ventana de 7 días
# ============================================================================


def test_sales_window_excludes_older_orders():
    inside = _order(10, created_at=NOW - timedelta(days=6, hours=23))
    boundary = _order(5, created_at=NOW - timedelta(days=7))
    outside = _order(100, created_at=NOW - timedelta(days=7, seconds=1))

    stats = compute_dashboard_stats([inside, boundary, outside], 0, 0, now=NOW)

    assert sum(p.sales for p in stats.sales_data) == 15
    # El total incluye todo el ledger, no solo la ventana.
    assert stats.total_sales == 115


def test_sales_grouped_by_utc_date():
    minus_three = timezone(timedelta(hours=-3))
    # 22:00 en UTC-3 es 01:00 del día siguiente en UTC.
    late_local = datetime(2024, 6, 13, 22, 0, tzinfo=minus_three)
    same_utc_day = datetime(2024, 6, 14, 3, 0, tzinfo=timezone.utc)

    stats = compute_dashboard_stats(
        [_order(10, created_at=late_local), _order(2.5, created_at=same_utc_day)],
        0,
        0,
        now=NOW,
    )

    assert [(p.date, p.sales) for p in stats.sales_data] == [("2024-06-14", 12.5)]


def test_naive_timestamps_are_treated_as_utc():
    naive = datetime(2024, 6, 14, 23, 30)

    stats = compute_dashboard_stats([_order(4, created_at=naive)], 0, 0, now=NOW)

    assert stats.sales_data[0].date == "2024-06-14"


# ============================================================================
# Órdenes recientes
# ============================================================================


def test_recent_orders_only_carry_buyer_name_and_email():
    buyer = BuyerSummary(name="Ana", email="ana@test.com")

    stats = compute_dashboard_stats([_order(3, buyer=buyer)], 0, 0, now=NOW)

    recent = stats.recent_orders[0]
    assert recent.buyer == buyer
    assert not hasattr(recent, "items")


def test_recent_orders_ties_keep_input_order():
    first, second = _order(1), _order(2)

    stats = compute_dashboard_stats([first, second], 0, 0, now=NOW)

    assert [o.id for o in stats.recent_orders] == [first.id, second.id]


def test_inputs_are_not_mutated():
    orders = _random_orders(7)
    snapshot = list(orders)

    compute_dashboard_stats(orders, 0, 0, now=NOW)

    assert orders == snapshot


# ============================================================================
# Propiedades sobre sets aleatorios (semillas fijas)
# ============================================================================


@pytest.mark.parametrize("seed", range(25))
def test_invariants_hold_for_random_ledgers(seed):
    orders = _random_orders(seed, non_canonical=seed % 2 == 0)

    stats = compute_dashboard_stats(orders, total_users=1, total_products=2, now=NOW)

    expected_total = 0.0
    for o in orders:
        expected_total += o.total_price
    assert stats.total_sales == expected_total
    assert stats.total_orders == len(orders)

    dates = [p.date for p in stats.sales_data]
    assert dates == sorted(dates)
    assert len(dates) == len(set(dates))
    cutoff = NOW - timedelta(days=7)
    for point in stats.sales_data:
        assert point.date >= cutoff.date().isoformat()

    counted = sum(s.count for s in stats.order_status_data)
    all_canonical = all(o.status in _STATUSES for o in orders)
    assert counted <= stats.total_orders
    assert (counted == stats.total_orders) == all_canonical

    assert len(stats.recent_orders) == min(RECENT_ORDERS_LIMIT, len(orders))
    created = [o.created_at for o in stats.recent_orders]
    assert created == sorted(created, reverse=True)


def test_is_deterministic_for_same_inputs():
    orders = _random_orders(3)

    first = compute_dashboard_stats(orders, 4, 5, now=NOW)
    second = compute_dashboard_stats(orders, 4, 5, now=NOW)

    assert first == second
