# orders/services/lifecycle.py

"""
ORDER LIFECYCLE DOMAIN RULES

This module defines the ONLY allowed order state changes.

DESIGN PRINCIPLES:
- No database writes
- No stock mutation
- No side effects
- Single source of truth

Each rule comes in two halves:
- check_*(order) raises InvalidState with the user-facing message
- *_GUARD is the same rule as a Q() filter, used by the conditional
  UPDATE in orders.services.transitions so a concurrent write can never
  slip between the check and the write
"""

from decimal import Decimal

from django.db.models import Q

from orders.models import Order

from .exceptions import InvalidState

MSG_ALREADY_CANCELLED = "Order already cancelled"
MSG_ALREADY_DELIVERED = "Order already delivered"
MSG_USER_NOT_CONFIRMED = "User has not confirmed delivery"
MSG_CONFIRMATION_LOCKED = "Cannot change confirmation after order is delivered"
MSG_PAYMENT_CONFIRMED = "Payment already confirmed"
MSG_ONLY_PENDING_DELETE = "Only pending orders can be deleted"

# ============================================================
# STATE DEFINITIONS
# ============================================================

TERMINAL_STATES = {
    Order.STATUS_DELIVERED,
    Order.STATUS_CANCELLED,
}

ALLOWED_TRANSITIONS = {
    Order.STATUS_PENDING: {
        Order.STATUS_DISPATCHED,
        Order.STATUS_DELIVERED,
        Order.STATUS_CANCELLED,
    },
    Order.STATUS_DISPATCHED: {
        Order.STATUS_DISPATCHED,
        Order.STATUS_DELIVERED,
        Order.STATUS_CANCELLED,
    },
}


def can_transition(*, from_status: str, to_status: str) -> bool:
    if from_status in TERMINAL_STATES:
        return False

    return to_status in ALLOWED_TRANSITIONS.get(from_status, set())


# ============================================================
# GUARDS (same rules as SQL filters)
# ============================================================

NOT_CANCELLED = Q(cancelled=False) & ~Q(delivery_status=Order.STATUS_CANCELLED)
NOT_DELIVERED = ~Q(delivery_status=Order.STATUS_DELIVERED)
OPEN = NOT_CANCELLED & NOT_DELIVERED

CONFIRM_AVAILABILITY_GUARD = NOT_CANCELLED
PAYMENT_CLAIM_GUARD = NOT_CANCELLED & Q(payment_confirmed=False)
CONFIRM_PAYMENT_GUARD = NOT_CANCELLED & Q(payment_confirmed=False)
DISPATCH_GUARD = OPEN
DELIVERY_CONFIRMATION_GUARD = OPEN
DELIVER_GUARD = OPEN & Q(user_confirmed_delivery=True)
CANCEL_GUARD = OPEN
ADDRESS_GUARD = OPEN
DELETE_GUARD = Q(
    payment_claimed=False,
    payment_confirmed=False,
    delivery_status=Order.STATUS_PENDING,
)


# ============================================================
# DOMAIN RULES
# ============================================================


def is_cancelled(order) -> bool:
    return bool(order.cancelled) or order.delivery_status == Order.STATUS_CANCELLED


def is_delivered(order) -> bool:
    return order.delivery_status == Order.STATUS_DELIVERED


def _not_cancelled(order):
    if is_cancelled(order):
        raise InvalidState(MSG_ALREADY_CANCELLED)


def _open(order):
    _not_cancelled(order)
    if is_delivered(order):
        raise InvalidState(MSG_ALREADY_DELIVERED)


def check_confirm_availability(order):
    _not_cancelled(order)


def check_payment_claim(order):
    _not_cancelled(order)
    if order.payment_confirmed:
        raise InvalidState(MSG_PAYMENT_CONFIRMED)


def check_confirm_payment(order):
    # repeat confirmations are accepted; callers skip the write
    _not_cancelled(order)


def check_dispatch(order):
    _open(order)


def check_delivery_confirmation(order):
    _not_cancelled(order)
    if is_delivered(order):
        raise InvalidState(MSG_CONFIRMATION_LOCKED)


def check_deliver(order):
    _open(order)
    if not order.user_confirmed_delivery:
        raise InvalidState(MSG_USER_NOT_CONFIRMED)


def check_cancel(order):
    _open(order)


def check_address_update(order):
    _open(order)


def check_delete(order):
    if (
        order.payment_claimed
        or order.payment_confirmed
        or order.delivery_status != Order.STATUS_PENDING
    ):
        raise InvalidState(MSG_ONLY_PENDING_DELETE)


def refund_amount_for(order) -> Decimal:
    """Full amount back if the money was received, nothing otherwise."""
    if order.payment_confirmed:
        return Decimal(order.amount)
    return Decimal("0.00")
