# orders/services/checkout.py

"""
CHECKOUT (APPLICATION SERVICE)

Purpose:
- Turn a storefront cart into an Order with immutable item snapshots.
- Reserve stock by decrementing remaining_stock.
- Announce the order to admins.

Hard rules:
- Quantities are integer units.
- Money values are computed server-side from the live catalogue; the
  price/dmc a client sends along with each line is ignored.
- Stock is checked for EVERY line (rows locked) before anything is written.
- Stock is decremented only after the order row and its items are saved.
- Guests get a random token; it is the only credential for their order.

Notes:
- The whole checkout is one DB transaction; the admin notification is
  scheduled on commit and can never fail the order.
"""

from __future__ import annotations

import logging
import secrets
import time
import uuid
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

from django.db import transaction

from orders.models import Order, OrderItem
from orders.services import notify
from orders.services.access import is_authenticated
from orders.services.exceptions import InsufficientStock, NotFound, ValidationError
from products.services.stock_ledger import (
    InsufficientStockError,
    ProductNotFoundError,
    StockLine,
    check_availability,
    decrement_stock,
)
from storefront.services.settings_store import current_spf

logger = logging.getLogger(__name__)

TWOPLACES = Decimal("0.01")


def _money(v) -> Decimal:
    if v is None or v == "":
        return Decimal("0.00")
    return Decimal(str(v)).quantize(TWOPLACES, rounding=ROUND_HALF_UP)


def _to_int_qty(value) -> int:
    if value is None or value == "":
        return 0
    if isinstance(value, bool):
        raise ValueError("quantity must be a whole integer unit")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        s = value.strip()
        if s.isdigit():
            return int(s)
    raise ValueError("quantity must be a whole integer unit")


def _payment_intent_id() -> str:
    return f"mock_payment_{int(time.time() * 1000)}_{secrets.token_hex(5)}"


@dataclass(frozen=True)
class CheckoutLine:
    product_id: str
    quantity: int
    selected_image: Optional[dict] = None


@dataclass(frozen=True)
class PlacedOrder:
    order: Order
    guest_token: Optional[str]


def normalize_lines(items) -> list[CheckoutLine]:
    """
    Validate raw cart lines ({id, quantity, selectedImg?, ...}).
    """
    if not items:
        raise ValidationError("No items in cart")

    lines = []
    for idx, item in enumerate(items):
        raw_id = str(item.get("id") or "").strip()
        if not raw_id:
            raise ValidationError(f"Missing product id at index {idx}")
        try:
            product_id = str(uuid.UUID(raw_id))
        except ValueError as exc:
            raise ValidationError(f"Invalid product ID format: {raw_id}") from exc

        try:
            qty = _to_int_qty(item.get("quantity"))
        except ValueError as exc:
            raise ValidationError(f"Invalid quantity at index {idx}: {exc}") from exc
        if qty <= 0:
            raise ValidationError(f"Invalid quantity at index {idx}. Quantity must be at least 1.")

        selected = item.get("selectedImg")
        if selected is not None and not isinstance(selected, dict):
            raise ValidationError(f"selectedImg at index {idx} must be an object")

        lines.append(CheckoutLine(product_id=product_id, quantity=qty, selected_image=selected))

    return lines


def _default_image(product) -> Optional[dict]:
    first = product.images.first()
    return first.as_snapshot() if first else None


def _snapshot(*, order: Order, product, line: CheckoutLine, position: int) -> OrderItem:
    return OrderItem(
        order=order,
        product=product,
        product_ref=str(product.id),
        name=product.name,
        description=product.description,
        category=product.category.name if product.category_id else "",
        brand=product.brand,
        selected_image=line.selected_image or _default_image(product),
        quantity=line.quantity,
        price=_money(product.effective_price),
        dmc=_money(product.dmc),
        position=position,
    )


@transaction.atomic
def place_order(
    *,
    actor,
    items,
    guest_email: str | None = None,
    guest_name: str | None = None,
    address=None,
    notifier=None,
) -> PlacedOrder:
    lines = normalize_lines(items)

    user = actor if is_authenticated(actor) else None
    guest_email = (guest_email or "").strip()
    guest_name = (guest_name or "").strip()
    if user is None and not guest_email:
        raise ValidationError("guestEmail is required for guest checkout")

    # 1) Pre-pass: lock + verify every line before any write.
    try:
        products = check_availability(
            StockLine(product_id=line.product_id, quantity=line.quantity) for line in lines
        )
    except ProductNotFoundError as exc:
        raise NotFound(f"Product not found: {exc.product_id}") from exc
    except InsufficientStockError as exc:
        raise InsufficientStock(
            str(exc),
            product_id=str(exc.product.id),
            product_name=exc.product.name,
        ) from exc

    # 2) Price from the live catalogue.
    line_total = Decimal("0.00")
    total_dmc = Decimal("0.00")
    for line in lines:
        product = products[line.product_id]
        unit_price = _money(product.effective_price)
        unit_dmc = _money(product.dmc)
        line_total += (unit_price + unit_dmc) * line.quantity
        total_dmc += unit_dmc * line.quantity

    line_total = _money(line_total)
    total_dmc = _money(total_dmc)
    spf = _money(current_spf())
    amount = _money(line_total + spf)

    guest_token = secrets.token_hex(32) if user is None else None

    # 3) Persist order + snapshots.
    order = Order.objects.create(
        user=user,
        guest_email="" if user else guest_email,
        guest_name="" if user else guest_name,
        guest_token=guest_token,
        amount=amount,
        total_dmc=total_dmc,
        spf=spf,
        address=address or None,
        payment_intent_id=_payment_intent_id(),
    )
    OrderItem.objects.bulk_create(
        [
            _snapshot(order=order, product=products[line.product_id], line=line, position=pos)
            for pos, line in enumerate(lines)
        ]
    )

    # 4) Reserve stock now that the order exists.
    for line in lines:
        decrement_stock(line.product_id, line.quantity)

    logger.info(
        "Order placed",
        extra={
            "order_id": str(order.id),
            "amount": str(amount),
            "guest": user is None,
            "lines": len(lines),
        },
    )

    notify.admins_on_commit(
        notifier,
        "New Order",
        f"New order #{order.short_id} from {order.customer_name} - {notify.format_amount(order)}",
        {"orderId": str(order.id), "type": "new_order"},
    )

    return PlacedOrder(order=order, guest_token=guest_token)
