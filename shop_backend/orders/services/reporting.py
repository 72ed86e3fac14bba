# orders/services/reporting.py

"""
ORDER REPORTING (PURE AGGREGATION)

Everything below snapshot_orders() / snapshot_users() is a pure function of
its arguments: no queries, no clock, no mutation. Same snapshots in, same
numbers out.

Money rules:
- Sales, DMC and SPF only count payment-confirmed orders.
- Orders saved before total_dmc / spf were stored are "legacy": their DMC is
  recomputed from the item snapshots and their SPF is what is left of the
  amount after the line total.
- to_reimburse is the seller's share (amount - dmc - spf) of paid orders
  that have not been settled yet.
"""

from __future__ import annotations

import calendar
import json
from collections import OrderedDict
from dataclasses import dataclass, field
from datetime import date, timedelta
from decimal import Decimal
from typing import Iterable, Optional, Union

from django.db.models import Count
from django.utils import timezone

ZERO = Decimal("0.00")
TWOPLACES = Decimal("0.01")

TIME_RANGE_7_DAYS = "7days"
TIME_RANGE_30_DAYS = "30days"
TIME_RANGE_3_MONTHS = "3months"
TIME_RANGE_YEAR = "year"

TIME_RANGES = (
    TIME_RANGE_7_DAYS,
    TIME_RANGE_30_DAYS,
    TIME_RANGE_3_MONTHS,
    TIME_RANGE_YEAR,
)

UNKNOWN_LOCATION = "Unknown"


def _q(value) -> Decimal:
    return Decimal(value).quantize(TWOPLACES)


# ============================================================
# SNAPSHOTS
# ============================================================

@dataclass(frozen=True)
class LineSnapshot:
    product_ref: str
    name: str
    price: Decimal
    dmc: Decimal
    quantity: int


@dataclass(frozen=True)
class OrderSnapshot:
    id: str
    created_on: date
    amount: Decimal
    total_dmc: Optional[Decimal] = None
    spf: Optional[Decimal] = None
    payment_confirmed: bool = False
    reimbursed: bool = False
    cancelled: bool = False
    refund_amount: Optional[Decimal] = None
    delivery_status: str = "pending"
    address: object = None
    user_id: Optional[str] = None
    lines: tuple = field(default_factory=tuple)


@dataclass(frozen=True)
class UserSnapshot:
    id: str
    joined_on: date
    order_count: int = 0


def snapshot_orders(queryset) -> list[OrderSnapshot]:
    """Read Order rows (with items) into immutable values."""
    out = []
    for order in queryset.prefetch_related("items"):
        out.append(
            OrderSnapshot(
                id=str(order.id),
                created_on=timezone.localtime(order.create_date).date(),
                amount=order.amount,
                total_dmc=order.total_dmc,
                spf=order.spf,
                payment_confirmed=order.payment_confirmed,
                reimbursed=order.reimbursed,
                cancelled=order.cancelled,
                refund_amount=order.refund_amount,
                delivery_status=order.delivery_status,
                address=order.address,
                user_id=str(order.user_id) if order.user_id else None,
                lines=tuple(
                    LineSnapshot(
                        product_ref=item.product_ref,
                        name=item.name,
                        price=item.price,
                        dmc=item.dmc,
                        quantity=item.quantity,
                    )
                    for item in order.items.all()
                ),
            )
        )
    return out


def snapshot_users(queryset) -> list[UserSnapshot]:
    return [
        UserSnapshot(
            id=str(user.id),
            joined_on=timezone.localtime(user.created_at).date(),
            order_count=user.order_count,
        )
        for user in queryset.annotate(order_count=Count("orders"))
    ]


# ============================================================
# PER-ORDER TOTALS
# ============================================================

@dataclass(frozen=True)
class SettledTotals:
    """Both figures were stored at checkout."""

    total_dmc: Decimal
    spf: Decimal

    @property
    def dmc(self) -> Decimal:
        return _q(self.total_dmc)


@dataclass(frozen=True)
class LegacyTotals:
    """
    At least one figure is missing; fill the gap from the line snapshots.
    """

    amount: Decimal
    lines: tuple
    total_dmc: Optional[Decimal] = None
    stored_spf: Optional[Decimal] = None

    @property
    def dmc(self) -> Decimal:
        if self.total_dmc is not None:
            return _q(self.total_dmc)
        return _q(sum((line.dmc * line.quantity for line in self.lines), ZERO))

    @property
    def spf(self) -> Decimal:
        if self.stored_spf is not None:
            return _q(self.stored_spf)
        line_total = sum(((line.price + line.dmc) * line.quantity for line in self.lines), ZERO)
        return _q(Decimal(self.amount) - line_total)


OrderTotals = Union[SettledTotals, LegacyTotals]


def order_totals(order: OrderSnapshot) -> OrderTotals:
    if order.total_dmc is not None and order.spf is not None:
        return SettledTotals(total_dmc=order.total_dmc, spf=order.spf)
    return LegacyTotals(
        amount=order.amount,
        lines=order.lines,
        total_dmc=order.total_dmc,
        stored_spf=order.spf,
    )


def normalize_totals(order: OrderSnapshot) -> tuple[Decimal, Decimal]:
    """(dmc, spf) for one order, legacy or not."""
    totals = order_totals(order)
    return totals.dmc, _q(totals.spf)


# ============================================================
# SUMMARY
# ============================================================

def summarize(
    orders: Iterable[OrderSnapshot],
    *,
    total_reimbursed=ZERO,
    current_spf=None,
    product_count: Optional[int] = None,
    user_count: Optional[int] = None,
) -> dict:
    orders = list(orders)

    total_sale = ZERO
    total_dmc = ZERO
    total_spf = ZERO
    to_reimburse = ZERO
    refunds = ZERO
    refund_dmc = ZERO
    paid = 0

    for order in orders:
        dmc, spf = normalize_totals(order)

        if order.payment_confirmed:
            paid += 1
            total_sale += order.amount
            total_dmc += dmc
            total_spf += spf
            if not order.reimbursed:
                to_reimburse += order.amount - dmc - spf

        if order.cancelled:
            refunds += order.refund_amount or ZERO
            refund_dmc += dmc

    summary = {
        "totalSale": _q(total_sale),
        "totalDmc": _q(total_dmc),
        "totalSpf": _q(total_spf),
        "toReimburse": _q(to_reimburse),
        "totalReimbursed": _q(total_reimbursed or ZERO),
        "refunds": _q(refunds),
        "refundDmc": _q(refund_dmc),
        "orders": len(orders),
        "paidOrders": paid,
        "unpaidOrders": len(orders) - paid,
    }
    if current_spf is not None:
        summary["currentSpf"] = _q(current_spf)
    if product_count is not None:
        summary["products"] = product_count
    if user_count is not None:
        summary["users"] = user_count
    return summary


# ============================================================
# TIME SERIES
# ============================================================

def _months_back(day: date, months: int) -> date:
    month_index = day.year * 12 + (day.month - 1) - months
    year, month = divmod(month_index, 12)
    month += 1
    last = calendar.monthrange(year, month)[1]
    return date(year, month, min(day.day, last))


def _next_month(day: date) -> date:
    if day.month == 12:
        return date(day.year + 1, 1, 1)
    return date(day.year, day.month + 1, 1)


def _revenue_buckets(time_range: str, today: date) -> "OrderedDict[str, dict]":
    buckets: "OrderedDict[str, dict]" = OrderedDict()

    def empty(label, day):
        return {
            "label": label,
            "date": day.isoformat(),
            "revenue": ZERO,
            "dmc": ZERO,
            "spf": ZERO,
            "orders": 0,
            "paidOrders": 0,
            "unpaidOrders": 0,
            "refunds": ZERO,
        }

    if time_range == TIME_RANGE_YEAR:
        current = _months_back(today, 12).replace(day=1)
        while current <= today:
            buckets[current.strftime("%Y-%m")] = empty(current.strftime("%b %y"), current)
            current = _next_month(current)
        return buckets

    if time_range == TIME_RANGE_3_MONTHS:
        start, label_format = _months_back(today, 3), "%b %d"
    elif time_range == TIME_RANGE_30_DAYS:
        start, label_format = today - timedelta(days=29), "%a"
    else:
        start, label_format = today - timedelta(days=6), "%a"

    current = start
    while current <= today:
        buckets[current.isoformat()] = empty(current.strftime(label_format), current)
        current += timedelta(days=1)
    return buckets


def revenue_series(orders: Iterable[OrderSnapshot], time_range: str, today: date) -> list[dict]:
    """
    Zero-filled buckets (daily, or monthly for "year") ending today.
    Money columns count paid orders; the order counters count every order.
    """
    if time_range not in TIME_RANGES:
        time_range = TIME_RANGE_7_DAYS

    buckets = _revenue_buckets(time_range, today)
    monthly = time_range == TIME_RANGE_YEAR

    for order in orders:
        key = order.created_on.strftime("%Y-%m") if monthly else order.created_on.isoformat()
        bucket = buckets.get(key)
        if bucket is None:
            continue

        bucket["orders"] += 1
        if order.payment_confirmed:
            dmc, spf = normalize_totals(order)
            bucket["paidOrders"] += 1
            bucket["revenue"] += order.amount
            bucket["dmc"] += dmc
            bucket["spf"] += spf
        else:
            bucket["unpaidOrders"] += 1

        if order.cancelled and order.refund_amount:
            bucket["refunds"] += order.refund_amount

    for bucket in buckets.values():
        for key in ("revenue", "dmc", "spf", "refunds"):
            bucket[key] = _q(bucket[key])
    return list(buckets.values())


def order_status_series(orders: Iterable[OrderSnapshot], today: date, days: int = 30) -> list[dict]:
    buckets: "OrderedDict[str, dict]" = OrderedDict()
    current = today - timedelta(days=days)
    while current <= today:
        buckets[current.isoformat()] = {
            "label": current.strftime("%b %d"),
            "date": current.isoformat(),
            "pending": 0,
            "dispatched": 0,
            "delivered": 0,
            "cancelled": 0,
        }
        current += timedelta(days=1)

    for order in orders:
        bucket = buckets.get(order.created_on.isoformat())
        if bucket is None:
            continue
        if order.cancelled or order.delivery_status == "cancelled":
            bucket["cancelled"] += 1
        elif order.delivery_status == "delivered":
            bucket["delivered"] += 1
        elif order.delivery_status == "dispatched":
            bucket["dispatched"] += 1
        else:
            bucket["pending"] += 1

    return list(buckets.values())


def user_growth_series(users: Iterable[UserSnapshot], today: date, days: int = 30) -> list[dict]:
    buckets: "OrderedDict[str, dict]" = OrderedDict()
    current = today - timedelta(days=days)
    while current <= today:
        buckets[current.isoformat()] = {
            "label": current.strftime("%b %d"),
            "date": current.isoformat(),
            "newUsers": 0,
            "repeatCustomers": 0,
        }
        current += timedelta(days=1)

    for user in users:
        bucket = buckets.get(user.joined_on.isoformat())
        if bucket is None:
            continue
        bucket["newUsers"] += 1
        if user.order_count > 1:
            bucket["repeatCustomers"] += 1

    return list(buckets.values())


# ============================================================
# PRODUCTS / LOCATIONS
# ============================================================

def product_performance(orders: Iterable[OrderSnapshot], limit: int = 5) -> list[dict]:
    """Top products by revenue (price x quantity, dmc excluded) over paid orders."""
    stats: dict[str, dict] = {}
    for order in orders:
        if not order.payment_confirmed:
            continue
        for line in order.lines:
            row = stats.setdefault(
                line.product_ref,
                {"name": line.name, "revenue": ZERO, "quantity": 0, "orders": 0},
            )
            row["revenue"] += line.price * line.quantity
            row["quantity"] += line.quantity
            row["orders"] += 1

    ranked = sorted(stats.values(), key=lambda r: (-r["revenue"], r["name"]))
    for row in ranked:
        row["revenue"] = _q(row["revenue"])
    return ranked[:limit]


def _location_from_mapping(value: dict) -> Optional[str]:
    for key in ("city", "location", "address", "line1"):
        if value.get(key):
            return str(value[key])
    parts = [v for v in value.values() if isinstance(v, str) and v.strip()]
    if parts:
        return ", ".join(parts)
    return None


def extract_location(address) -> str:
    """
    A short place label from whatever the customer typed:
    JSON objects use city/location/address/line1, plain text keeps the part
    before the first comma.
    """
    if not address:
        return UNKNOWN_LOCATION

    if isinstance(address, dict):
        return _location_from_mapping(address) or json.dumps(address, sort_keys=True)

    if isinstance(address, str):
        try:
            parsed = json.loads(address)
        except ValueError:
            return address.split(",")[0].strip()
        if isinstance(parsed, str):
            return parsed
        if isinstance(parsed, dict):
            found = _location_from_mapping(parsed)
            if found:
                return found

    return str(address)


def order_locations(orders: Iterable[OrderSnapshot]) -> list[dict]:
    grouped: dict[str, dict] = {}
    for order in orders:
        label = extract_location(order.address).strip() or UNKNOWN_LOCATION
        row = grouped.setdefault(
            label.lower(),
            {"address": label, "orderCount": 0, "cancelCount": 0},
        )
        row["orderCount"] += 1
        if order.cancelled:
            row["cancelCount"] += 1

    return sorted(grouped.values(), key=lambda r: (-r["orderCount"], r["address"].lower()))
