# orders/tests/test_lifecycle.py

from decimal import Decimal
from types import SimpleNamespace

from django.test import SimpleTestCase

from orders.models import Order
from orders.services import lifecycle
from orders.services.exceptions import InvalidState


def _order(**overrides):
    values = {
        "cancelled": False,
        "delivery_status": Order.STATUS_PENDING,
        "payment_claimed": False,
        "payment_confirmed": False,
        "user_confirmed_delivery": False,
        "amount": Decimal("5100.00"),
    }
    values.update(overrides)
    return SimpleNamespace(**values)


class LifecycleRuleTests(SimpleTestCase):
    """
    GUARANTEES:
    - delivered and cancelled are terminal
    - cancellation is checked before delivery everywhere both apply
    - refund is the full amount only once payment is confirmed
    """

    def test_terminal_states_allow_nothing(self):
        for terminal in (Order.STATUS_DELIVERED, Order.STATUS_CANCELLED):
            for target in (Order.STATUS_PENDING, Order.STATUS_DISPATCHED, Order.STATUS_CANCELLED):
                self.assertFalse(lifecycle.can_transition(from_status=terminal, to_status=target))

    def test_open_states(self):
        self.assertTrue(
            lifecycle.can_transition(from_status=Order.STATUS_PENDING, to_status=Order.STATUS_DISPATCHED)
        )
        self.assertTrue(
            lifecycle.can_transition(from_status=Order.STATUS_DISPATCHED, to_status=Order.STATUS_CANCELLED)
        )
        self.assertFalse(
            lifecycle.can_transition(from_status=Order.STATUS_DISPATCHED, to_status=Order.STATUS_PENDING)
        )

    def test_cancelled_message_wins(self):
        order = _order(cancelled=True, delivery_status=Order.STATUS_DELIVERED)

        for check in (lifecycle.check_cancel, lifecycle.check_address_update, lifecycle.check_deliver):
            with self.assertRaises(InvalidState) as ctx:
                check(order)
            self.assertEqual(ctx.exception.message, lifecycle.MSG_ALREADY_CANCELLED)

    def test_deliver_needs_confirmation(self):
        with self.assertRaises(InvalidState) as ctx:
            lifecycle.check_deliver(_order(delivery_status=Order.STATUS_DISPATCHED))
        self.assertEqual(ctx.exception.message, lifecycle.MSG_USER_NOT_CONFIRMED)

        lifecycle.check_deliver(_order(user_confirmed_delivery=True))

    def test_delete_only_untouched_pending(self):
        lifecycle.check_delete(_order())

        for touched in (
            _order(payment_claimed=True),
            _order(payment_confirmed=True),
            _order(delivery_status=Order.STATUS_DISPATCHED),
        ):
            with self.assertRaises(InvalidState):
                lifecycle.check_delete(touched)

    def test_refund_amount(self):
        self.assertEqual(lifecycle.refund_amount_for(_order()), Decimal("0.00"))
        self.assertEqual(lifecycle.refund_amount_for(_order(payment_confirmed=True)), Decimal("5100.00"))
