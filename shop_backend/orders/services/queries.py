# orders/services/queries.py

"""Read side: which orders an actor may list or open."""

from __future__ import annotations

from django.core.exceptions import ValidationError as DjangoValidationError

from orders.models import Order
from orders.services.access import can_view, is_authenticated, require_identity
from orders.services.exceptions import Forbidden, NotFound, Unauthorized
from permissions.roles import CAP_ORDERS_VIEW, user_has_capability


def orders_with_items():
    return Order.objects.select_related("user").prefetch_related("items")


def visible_orders(actor):
    if not is_authenticated(actor):
        raise Unauthorized()
    qs = orders_with_items()
    if user_has_capability(actor, CAP_ORDERS_VIEW):
        return qs
    return qs.filter(user=actor)


def get_order(order_id, actor, guest_token: str | None = None) -> Order:
    require_identity(actor, guest_token)
    try:
        order = orders_with_items().get(pk=order_id)
    except (Order.DoesNotExist, DjangoValidationError, ValueError) as exc:
        raise NotFound() from exc
    if not can_view(order, actor, guest_token):
        raise Forbidden()
    return order
