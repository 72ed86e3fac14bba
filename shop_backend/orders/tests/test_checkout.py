# orders/tests/test_checkout.py

import uuid
from decimal import Decimal

from django.test import TestCase, override_settings
from rest_framework.test import APIClient

from notifications.models import Notification
from notifications.services.events import OrderEventBus
from notifications.services.notifier import Notifier
from notifications.tests.gateways import ExplodingPushGateway, RecordingPushGateway
from orders.models import Order, OrderItem
from orders.services.exceptions import InsufficientStock, NotFound, ValidationError
from orders.tests.factories import line, make_admin, make_product, make_user, place
from storefront.services import settings_store


class CheckoutServiceTests(TestCase):
    """
    GUARANTEES:
    - amount = sum((price + dmc) * qty) + spf, priced from the catalogue
    - All-or-nothing: a short line leaves every product and the order table untouched
    - Stock is decremented per line after the order exists
    - Guests (and only guests) get a 64-hex token
    - Item snapshots are frozen
    """

    def setUp(self):
        self.shopper = make_user()
        self.jollof = make_product()

    def test_amount_includes_dmc_and_spf(self):
        placed = place(self.shopper, [line(self.jollof, 2)])
        order = placed.order

        self.assertEqual(order.amount, Decimal("5100.00"))
        self.assertEqual(order.total_dmc, Decimal("400.00"))
        self.assertEqual(order.spf, Decimal("100.00"))
        self.assertEqual(order.line_total(), Decimal("5000.00"))
        self.assertEqual(order.delivery_status, Order.STATUS_PENDING)
        self.assertEqual(order.payment_status, Order.PAYMENT_PENDING)
        self.assertTrue(order.payment_intent_id.startswith("mock_payment_"))

        self.jollof.refresh_from_db()
        self.assertEqual(self.jollof.remaining_stock, 8)
        self.assertTrue(self.jollof.in_stock)

    def test_client_prices_are_ignored(self):
        placed = place(self.shopper, [line(self.jollof, 2, price="1.00", dmc="0.00")])

        self.assertEqual(placed.order.amount, Decimal("5100.00"))

    def test_discount_and_configured_spf(self):
        settings_store.set_spf(Decimal("250"))
        soap = make_product(name="Soap", price="900.00", dmc="50.00", discount=Decimal("100.00"))

        order = place(self.shopper, [line(soap, 3)]).order

        # (800 + 50) * 3 + 250
        self.assertEqual(order.amount, Decimal("2800.00"))
        self.assertEqual(order.spf, Decimal("250.00"))
        self.assertEqual(order.items.get().price, Decimal("800.00"))

    def test_insufficient_stock_is_all_or_nothing(self):
        bread = make_product(name="Bread", price="800.00", dmc="0.00", stock=3, remaining=1)

        with self.assertRaises(InsufficientStock) as ctx:
            place(self.shopper, [line(self.jollof, 2), line(bread, 2)])

        self.assertEqual(ctx.exception.product_name, "Bread")
        self.assertIn("Bread", ctx.exception.message)
        self.assertFalse(Order.objects.exists())

        self.jollof.refresh_from_db()
        bread.refresh_from_db()
        self.assertEqual(self.jollof.remaining_stock, 10)
        self.assertEqual(bread.remaining_stock, 1)

    def test_repeated_lines_are_summed_for_availability(self):
        small = make_product(name="Chin chin", stock=3)

        with self.assertRaises(InsufficientStock):
            place(self.shopper, [line(small, 2), line(small, 2)])

    def test_last_unit_empties_stock(self):
        last = make_product(name="Last one", stock=1)

        place(self.shopper, [line(last, 1)])

        last.refresh_from_db()
        self.assertEqual(last.remaining_stock, 0)
        self.assertFalse(last.in_stock)

    def test_guest_checkout_gets_token(self):
        placed = place(None, [line(self.jollof, 1)])

        self.assertEqual(len(placed.guest_token), 64)
        int(placed.guest_token, 16)
        self.assertEqual(placed.order.guest_token, placed.guest_token)
        self.assertIsNone(placed.order.user)
        self.assertEqual(placed.order.guest_email, "guest@example.com")

    def test_user_checkout_has_no_token(self):
        placed = place(self.shopper, [line(self.jollof, 1)])

        self.assertIsNone(placed.guest_token)
        self.assertIsNone(placed.order.guest_token)
        self.assertEqual(placed.order.user, self.shopper)

    def test_guest_needs_email(self):
        with self.assertRaises(ValidationError):
            place(None, [line(self.jollof, 1)], guest_email="")

    def test_rejects_empty_and_bad_lines(self):
        with self.assertRaises(ValidationError):
            place(self.shopper, [])
        with self.assertRaises(ValidationError):
            place(self.shopper, [line(self.jollof, 0)])
        with self.assertRaises(ValidationError):
            place(self.shopper, [{"id": "not-a-uuid", "quantity": 1}])

        self.assertFalse(Order.objects.exists())

    def test_unknown_product(self):
        with self.assertRaises(NotFound):
            place(self.shopper, [{"id": str(uuid.uuid4()), "quantity": 1}])

    def test_snapshot_survives_catalogue_edits(self):
        order = place(
            self.shopper,
            [line(self.jollof, 1, selectedImg={"image": "a.png", "color": "red", "colorCode": "#f00"})],
        ).order

        self.jollof.price = Decimal("9999.00")
        self.jollof.name = "Renamed"
        self.jollof.save()

        item = order.items.get()
        self.assertEqual(item.name, "Jollof Pack")
        self.assertEqual(item.price, Decimal("2300.00"))
        self.assertEqual(item.category, "Food")
        self.assertEqual(item.product_ref, str(self.jollof.id))
        self.assertEqual(item.selected_image["color"], "red")

        item.quantity = 5
        with self.assertRaises(RuntimeError):
            item.save()

    def test_deleting_product_keeps_snapshot(self):
        order = place(self.shopper, [line(self.jollof, 1)]).order

        self.jollof.delete()

        item = OrderItem.objects.get(order=order)
        self.assertIsNone(item.product_id)
        self.assertEqual(item.name, "Jollof Pack")


class CheckoutNotificationTests(TestCase):
    def setUp(self):
        RecordingPushGateway.reset()
        self.admin = make_admin(fcm_token="admin-device")
        self.jollof = make_product()

    def test_admins_hear_about_new_orders_after_commit(self):
        notifier = Notifier(gateway=RecordingPushGateway(), bus=OrderEventBus())

        with self.captureOnCommitCallbacks(execute=True) as callbacks:
            placed = place(None, [line(self.jollof, 1)], notifier=notifier)

        self.assertEqual(len(callbacks), 1)
        note = Notification.objects.get(for_admins=True)
        self.assertEqual(note.title, "New Order")
        self.assertEqual(note.order_id, placed.order.id)
        self.assertEqual(RecordingPushGateway.sent[0]["tokens"], ["admin-device"])

    def test_push_failure_never_fails_checkout(self):
        notifier = Notifier(gateway=ExplodingPushGateway(), bus=None)

        with self.assertLogs("notifications.services.notifier", level="ERROR"):
            with self.captureOnCommitCallbacks(execute=True):
                placed = place(None, [line(self.jollof, 1)], notifier=notifier)

        self.assertTrue(Order.objects.filter(pk=placed.order.pk).exists())


@override_settings(PUSH_GATEWAY="notifications.tests.gateways.RecordingPushGateway")
class CheckoutApiTests(TestCase):
    """
    GUARANTEES:
    - POST /api/orders/checkout/ returns {orderId, guestToken}
    - Guests read their order with ?guestToken= only
    - Domain errors come back as {"error": {"code", "message"}}
    """

    def setUp(self):
        RecordingPushGateway.reset()
        self.client = APIClient()
        self.jollof = make_product()

    def _checkout(self, **body):
        payload = {
            "items": [{"id": str(self.jollof.id), "name": "Jollof Pack", "price": 2300, "dmc": 200, "quantity": 2}],
            "guestEmail": "guest@example.com",
            "guestName": "Guest",
            "address": {"hostel": "Hall A", "room": "12"},
        }
        payload.update(body)
        return self.client.post("/api/orders/checkout/", payload, format="json")

    def test_guest_checkout_and_poll(self):
        res = self._checkout()
        self.assertEqual(res.status_code, 201)
        order_id, token = res.data["orderId"], res.data["guestToken"]

        res = self.client.get(f"/api/orders/{order_id}/", {"guestToken": token})
        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data["amount"], Decimal("5100.00"))
        self.assertEqual(res.data["paymentStatus"], "pending")
        self.assertEqual(res.data["products"][0]["quantity"], 2)

        res = self.client.get(f"/api/orders/{order_id}/")
        self.assertEqual(res.status_code, 401)
        self.assertEqual(res.data["error"]["code"], "unauthorized")

        res = self.client.get(f"/api/orders/{order_id}/", {"guestToken": "0" * 64})
        self.assertEqual(res.status_code, 403)

    @override_settings(PUSH_GATEWAY="notifications.services.push.FcmPushGateway", FCM={})
    def test_unconfigured_push_never_blocks_checkout(self):
        with self.assertLogs("notifications.apps", level="ERROR"):
            res = self._checkout()

        self.assertEqual(res.status_code, 201)
        self.assertEqual(Order.objects.count(), 1)

    def test_signed_in_checkout(self):
        shopper = make_user()
        self.client.force_authenticate(user=shopper)

        res = self._checkout(guestEmail=None)

        self.assertEqual(res.status_code, 201)
        self.assertIsNone(res.data["guestToken"])
        self.assertEqual(Order.objects.get().user, shopper)

    def test_insufficient_stock_payload(self):
        res = self._checkout(items=[{"id": str(self.jollof.id), "quantity": 50}])

        self.assertEqual(res.status_code, 400)
        self.assertEqual(res.data["error"]["code"], "insufficient_stock")
        self.assertIn("Jollof Pack", res.data["error"]["message"])

    def test_empty_cart_rejected(self):
        res = self._checkout(items=[])

        self.assertEqual(res.status_code, 400)
        self.assertFalse(Order.objects.exists())

    def test_guest_without_email_rejected(self):
        res = self._checkout(guestEmail="")

        self.assertEqual(res.status_code, 400)
        self.assertEqual(res.data["error"]["code"], "validation_error")
