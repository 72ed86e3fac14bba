# orders/services/access.py

"""
ORDER ACCESS RULES

Who may act on an order:
- staff by capability (orders.manage to change, orders.view to read)
- the owning user
- a guest holding the order's guest token (constant-time compare)

Checks run before the order is loaded where they can (401/403 before 404).
"""

from __future__ import annotations

import hmac

from permissions.roles import CAP_ORDERS_VIEW, user_has_capability

from .exceptions import Forbidden, Unauthorized


def is_authenticated(actor) -> bool:
    return bool(actor is not None and getattr(actor, "is_authenticated", False))


def require_capability(actor, capability: str) -> None:
    if not is_authenticated(actor):
        raise Unauthorized()
    if not user_has_capability(actor, capability):
        raise Forbidden("You do not have permission to perform this action")


def require_identity(actor, guest_token: str | None) -> None:
    """Somebody must be identifiable: a signed-in user or a guest token."""
    if not is_authenticated(actor) and not guest_token:
        raise Unauthorized()


def guest_token_matches(order, guest_token: str | None) -> bool:
    if not guest_token or not order.guest_token:
        return False
    return hmac.compare_digest(str(order.guest_token), str(guest_token))


def is_owner(order, actor) -> bool:
    return is_authenticated(actor) and order.user_id is not None and order.user_id == actor.pk


def require_owner(order, actor, guest_token: str | None = None, *, staff_capability: str | None = None) -> None:
    if is_owner(order, actor) or guest_token_matches(order, guest_token):
        return
    if staff_capability and user_has_capability(actor, staff_capability):
        return
    raise Forbidden()


def can_view(order, actor, guest_token: str | None = None) -> bool:
    return (
        is_owner(order, actor)
        or guest_token_matches(order, guest_token)
        or user_has_capability(actor, CAP_ORDERS_VIEW)
    )
