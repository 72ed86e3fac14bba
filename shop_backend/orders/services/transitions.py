# orders/services/transitions.py

"""
ORDER TRANSITIONS (APPLICATION SERVICE)

Every state change an admin, customer or guest can make on an order.

Flow for each operation:
1) actor check (401 / 403)
2) load order (404)
3) lifecycle.check_*() for the user-facing precondition message (400)
4) one conditional UPDATE ... WHERE id = ? AND <guard>; if a concurrent
   write got there first, zero rows change and the order is re-checked
5) customer/admin notification scheduled on commit

Rules live in orders.services.lifecycle; this module only performs them.
"""

from __future__ import annotations

import logging

from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import transaction
from django.db.models import Case, DecimalField, F, Q, Value, When
from django.utils import timezone

from orders.models import Order
from orders.services import lifecycle, notify
from orders.services.access import (
    require_capability,
    require_identity,
    require_owner,
)
from orders.services.exceptions import InvalidState, NotFound, ValidationError
from permissions.roles import CAP_ORDERS_MANAGE
from products.services.stock_ledger import restore_stock

logger = logging.getLogger(__name__)


class OrderTransitionService:
    """
    Constructed with the notifier to use (see notifications.apps).
    """

    def __init__(self, notifier=None):
        self.notifier = notifier

    # ---------------------------------------------------------
    # internals
    # ---------------------------------------------------------
    def _load(self, order_id) -> Order:
        try:
            return Order.objects.select_related("user").get(pk=order_id)
        except (Order.DoesNotExist, DjangoValidationError, ValueError) as exc:
            raise NotFound() from exc

    def _write(self, order: Order, *, guard: Q, check, **values) -> Order:
        """
        Conditional UPDATE. check() is re-run on a fresh read when the guard
        no longer matches so the caller gets the precise reason.
        """
        values["updated_at"] = timezone.now()
        updated = Order.objects.filter(Q(pk=order.pk) & guard).update(**values)
        if not updated:
            current = self._load(order.pk)
            check(current)
            raise InvalidState("Order was modified concurrently; please retry")

        order.refresh_from_db()
        return order

    def _restore_items(self, order: Order, lines) -> None:
        for product_id, product_ref, quantity in lines:
            restore_stock(product_id or product_ref, quantity)
        logger.info(
            "Stock restored for order",
            extra={"order_id": str(order.pk), "lines": len(lines)},
        )

    # ---------------------------------------------------------
    # admin
    # ---------------------------------------------------------
    @transaction.atomic
    def confirm_availability(self, order_id, actor, confirmed: bool = True) -> Order:
        require_capability(actor, CAP_ORDERS_MANAGE)
        order = self._load(order_id)
        lifecycle.check_confirm_availability(order)

        order = self._write(
            order,
            guard=lifecycle.CONFIRM_AVAILABILITY_GUARD,
            check=lifecycle.check_confirm_availability,
            admin_confirmed_availability=bool(confirmed),
            admin_confirmed_availability_at=timezone.now() if confirmed else None,
        )

        if confirmed:
            notify.customer_on_commit(
                self.notifier,
                order,
                "Order Availability Confirmed",
                "What you want is available. You can now make payment.",
                {"type": "availability_confirmed"},
            )
        return order

    @transaction.atomic
    def confirm_payment(self, order_id, actor) -> Order:
        require_capability(actor, CAP_ORDERS_MANAGE)
        order = self._load(order_id)
        lifecycle.check_confirm_payment(order)

        # one-way flag: confirming again is a no-op with no second notification
        if order.payment_confirmed:
            return order

        try:
            order = self._write(
                order,
                guard=lifecycle.CONFIRM_PAYMENT_GUARD,
                check=lifecycle.check_confirm_payment,
                payment_confirmed=True,
                payment_confirmed_at=timezone.now(),
            )
        except InvalidState:
            current = self._load(order.pk)
            if current.payment_confirmed and not lifecycle.is_cancelled(current):
                return current
            raise

        logger.info("Payment confirmed", extra={"order_id": str(order.pk)})
        notify.customer_on_commit(
            self.notifier,
            order,
            "Payment Confirmed",
            "Your payment has been confirmed by admin. Thank you!",
            {"type": "payment_confirmed"},
        )
        return order

    @transaction.atomic
    def dispatch(self, order_id, actor) -> Order:
        require_capability(actor, CAP_ORDERS_MANAGE)
        order = self._load(order_id)
        lifecycle.check_dispatch(order)

        order = self._write(
            order,
            guard=lifecycle.DISPATCH_GUARD,
            check=lifecycle.check_dispatch,
            delivery_status=Order.STATUS_DISPATCHED,
        )

        notify.customer_on_commit(
            self.notifier,
            order,
            "Order Dispatched",
            "Your order is on the way!",
            {"type": "dispatched"},
        )
        return order

    @transaction.atomic
    def deliver(self, order_id, actor) -> Order:
        require_capability(actor, CAP_ORDERS_MANAGE)
        order = self._load(order_id)
        lifecycle.check_deliver(order)

        order = self._write(
            order,
            guard=lifecycle.DELIVER_GUARD,
            check=lifecycle.check_deliver,
            delivery_status=Order.STATUS_DELIVERED,
        )

        logger.info("Order delivered", extra={"order_id": str(order.pk)})
        notify.customer_on_commit(
            self.notifier,
            order,
            "Order Complete",
            "Your order is complete. Thank you!",
            {"type": "delivered"},
        )
        return order

    @transaction.atomic
    def cancel(self, order_id, actor) -> Order:
        require_capability(actor, CAP_ORDERS_MANAGE)
        order = self._load(order_id)
        lifecycle.check_cancel(order)

        lines = list(order.items.values_list("product_id", "product_ref", "quantity"))

        # refund is decided by payment_confirmed as it stands in the same UPDATE
        order = self._write(
            order,
            guard=lifecycle.CANCEL_GUARD,
            check=lifecycle.check_cancel,
            cancelled=True,
            cancelled_at=timezone.now(),
            delivery_status=Order.STATUS_CANCELLED,
            refund_amount=Case(
                When(payment_confirmed=True, then=F("amount")),
                default=Value(0),
                output_field=DecimalField(max_digits=12, decimal_places=2),
            ),
        )

        self._restore_items(order, lines)

        logger.info(
            "Order cancelled",
            extra={"order_id": str(order.pk), "refund_amount": str(order.refund_amount)},
        )
        notify.customer_on_commit(
            self.notifier,
            order,
            "Order Cancelled",
            f"Your order #{order.short_id} has been cancelled.",
            {"type": "cancelled", "refundAmount": str(order.refund_amount)},
        )
        return order

    def update_delivery_status(self, order_id, actor, status: str) -> Order:
        """
        Generic status endpoint. Routed through the dedicated operations so
        the delivery-confirmation rule is enforced on this path too.
        """
        routes = {
            Order.STATUS_DISPATCHED: self.dispatch,
            Order.STATUS_DELIVERED: self.deliver,
            Order.STATUS_CANCELLED: self.cancel,
        }
        handler = routes.get(status)
        if handler is None:
            require_capability(actor, CAP_ORDERS_MANAGE)
            raise ValidationError(f"Unsupported delivery status: {status}")
        return handler(order_id, actor)

    # ---------------------------------------------------------
    # customer / guest
    # ---------------------------------------------------------
    @transaction.atomic
    def set_payment_claim(self, order_id, actor, claimed: bool = True, guest_token=None) -> Order:
        require_identity(actor, guest_token)
        order = self._load(order_id)
        require_owner(order, actor, guest_token)
        lifecycle.check_payment_claim(order)

        order = self._write(
            order,
            guard=lifecycle.PAYMENT_CLAIM_GUARD,
            check=lifecycle.check_payment_claim,
            payment_claimed=bool(claimed),
        )

        if claimed:
            title = "Payment Claimed"
            body = (
                f"Customer claims payment for Order #{order.short_id} - "
                f"Amount: {notify.format_amount(order)}"
            )
        else:
            title = "Payment Claim Revoked"
            body = f"Customer revoked payment claim for Order #{order.short_id}"

        notify.admins_on_commit(
            self.notifier,
            title,
            body,
            {"orderId": str(order.pk), "type": "payment_claim" if claimed else "payment_claim_revoked"},
        )
        return order

    @transaction.atomic
    def set_delivery_confirmation(self, order_id, actor, confirmed: bool, guest_token=None) -> Order:
        require_identity(actor, guest_token)
        order = self._load(order_id)
        require_owner(order, actor, guest_token)
        lifecycle.check_delivery_confirmation(order)

        return self._write(
            order,
            guard=lifecycle.DELIVERY_CONFIRMATION_GUARD,
            check=lifecycle.check_delivery_confirmation,
            user_confirmed_delivery=bool(confirmed),
            user_confirmed_delivery_at=timezone.now() if confirmed else None,
        )

    @transaction.atomic
    def update_address(self, order_id, actor, address, guest_token=None) -> Order:
        require_identity(actor, guest_token)
        if not address:
            raise ValidationError("Address is required")
        order = self._load(order_id)
        require_owner(order, actor, guest_token)
        lifecycle.check_address_update(order)

        return self._write(
            order,
            guard=lifecycle.ADDRESS_GUARD,
            check=lifecycle.check_address_update,
            address=address,
        )

    @transaction.atomic
    def attach_guest_push_token(self, order_id, guest_token, push_token) -> Order:
        require_identity(None, guest_token)
        order = self._load(order_id)
        require_owner(order, None, guest_token)

        Order.objects.filter(pk=order.pk).update(
            guest_fcm_token=push_token or None,
            updated_at=timezone.now(),
        )
        order.refresh_from_db()
        return order

    @transaction.atomic
    def delete_pending(self, order_id, actor, guest_token=None) -> None:
        require_identity(actor, guest_token)
        order = self._load(order_id)
        require_owner(order, actor, guest_token, staff_capability=CAP_ORDERS_MANAGE)
        lifecycle.check_delete(order)

        lines = list(order.items.values_list("product_id", "product_ref", "quantity"))

        deleted, _ = Order.objects.filter(Q(pk=order.pk) & lifecycle.DELETE_GUARD).delete()
        if not deleted:
            lifecycle.check_delete(self._load(order.pk))
            raise InvalidState(lifecycle.MSG_ONLY_PENDING_DELETE)

        self._restore_items(order, lines)

        logger.info("Pending order deleted", extra={"order_id": str(order.pk)})
