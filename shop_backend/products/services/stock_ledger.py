# products/services/stock_ledger.py

"""
PRODUCT STOCK LEDGER

Purpose:
- Availability pre-pass for checkout (locks the product rows).
- Datastore-side decrement / restore of remaining_stock.
- Admin restock (stock and remaining_stock grow together).

Rules:
- Quantities are integer units.
- remaining_stock never drops below 0 and never exceeds stock.
- in_stock is recomputed in the same UPDATE as every remaining_stock change
  (queryset.update() bypasses Product.save()).
"""

from __future__ import annotations

import logging
from collections import OrderedDict
from dataclasses import dataclass
from typing import Iterable

from django.db import transaction
from django.db.models import BooleanField, Case, F, Value, When
from django.db.models.functions import Greatest, Least

from products.models import Product

logger = logging.getLogger(__name__)


# ============================================================
# DOMAIN ERRORS
# ============================================================

class StockLedgerError(Exception):
    pass


class ProductNotFoundError(StockLedgerError):
    def __init__(self, product_id):
        self.product_id = product_id
        super().__init__(f"Product not found: {product_id}")


class InsufficientStockError(StockLedgerError):
    def __init__(self, product, requested: int):
        self.product = product
        self.requested = requested
        self.available = int(product.remaining_stock or 0)
        super().__init__(
            f"Insufficient stock for {product.name}. "
            f"Available: {self.available}, requested: {requested}"
        )


@dataclass(frozen=True)
class StockLine:
    product_id: object
    quantity: int


def _to_qty(value) -> int:
    if isinstance(value, bool):
        raise ValueError("quantity must be a whole integer unit")
    qty = int(value)
    if qty <= 0:
        raise ValueError("quantity must be greater than zero")
    return qty


_IN_STOCK_FROM_REMAINING = Case(
    When(remaining_stock__gt=0, then=Value(True)),
    default=Value(False),
    output_field=BooleanField(),
)


# ============================================================
# AVAILABILITY PRE-PASS
# ============================================================

def check_availability(lines: Iterable[StockLine]) -> dict:
    """
    Verify every line can be served BEFORE any write happens.

    - Quantities for the same product are summed.
    - Product rows are locked (select_for_update) for the rest of the
      caller's transaction, so a concurrent checkout waits here.
    - Raises on the first failing product, in request order.

    Returns {product_id: Product} for the caller's pricing step.
    """
    wanted: "OrderedDict[str, int]" = OrderedDict()
    for line in lines:
        key = str(line.product_id)
        wanted[key] = wanted.get(key, 0) + _to_qty(line.quantity)

    if not wanted:
        return {}

    products = {
        str(p.id): p
        for p in Product.objects.select_for_update()
        .select_related("category")
        .filter(id__in=list(wanted.keys()))
    }

    for product_id, qty in wanted.items():
        product = products.get(product_id)
        if product is None:
            raise ProductNotFoundError(product_id)
        if int(product.remaining_stock or 0) < qty:
            raise InsufficientStockError(product, qty)

    return products


# ============================================================
# MUTATIONS
# ============================================================

@transaction.atomic
def decrement_stock(product_id, quantity) -> int:
    """
    remaining_stock -= quantity, floored at 0. Returns rows updated.
    """
    qty = _to_qty(quantity)

    updated = Product.objects.filter(id=product_id).update(
        remaining_stock=Greatest(F("remaining_stock") - qty, Value(0))
    )
    if updated:
        Product.objects.filter(id=product_id).update(in_stock=_IN_STOCK_FROM_REMAINING)

    logger.info(
        "Stock decremented",
        extra={"product_id": str(product_id), "quantity": qty},
    )
    return updated


@transaction.atomic
def restore_stock(product_id, quantity) -> int:
    """
    remaining_stock += quantity, capped at stock.

    Products deleted since the order was placed are skipped (logged).
    """
    qty = _to_qty(quantity)

    updated = Product.objects.filter(id=product_id).update(
        remaining_stock=Least(F("remaining_stock") + qty, F("stock"))
    )
    if not updated:
        logger.warning(
            "Stock restore skipped: product no longer exists",
            extra={"product_id": str(product_id), "quantity": qty},
        )
        return 0

    Product.objects.filter(id=product_id).update(in_stock=_IN_STOCK_FROM_REMAINING)

    logger.info(
        "Stock restored",
        extra={"product_id": str(product_id), "quantity": qty},
    )
    return updated


@transaction.atomic
def receive_stock(*, product: Product, quantity) -> Product:
    """
    Admin restock: a new delivery grows both lifetime and sellable stock.
    """
    qty = _to_qty(quantity)

    Product.objects.filter(id=product.id).update(
        stock=F("stock") + qty,
        remaining_stock=F("remaining_stock") + qty,
    )
    Product.objects.filter(id=product.id).update(in_stock=_IN_STOCK_FROM_REMAINING)

    product.refresh_from_db()

    logger.info(
        "Stock received",
        extra={"product_id": str(product.id), "quantity": qty},
    )
    return product