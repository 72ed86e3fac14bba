# orders/tests/test_reimbursement.py

from decimal import Decimal

from django.test import TestCase
from rest_framework.test import APIClient

from orders.models import Order, Reimbursement
from orders.services import confirm_reimbursement, total_reimbursed
from orders.services.exceptions import Forbidden, ValidationError
from orders.services.transitions import OrderTransitionService
from orders.tests.factories import line, make_admin, make_product, make_user, place


class ReimbursementTests(TestCase):
    """
    GUARANTEES:
    - One confirmation settles every paid, unsettled order with one timestamp
    - Unpaid and already-settled orders are left alone
    - The running total grows by exactly the confirmed amount
    - Ledger rows are append-only
    """

    def setUp(self):
        self.admin = make_admin()
        self.shopper = make_user()
        product = make_product(stock=50)
        svc = OrderTransitionService()

        self.paid = [place(self.shopper, [line(product, 1)]).order for _ in range(2)]
        for order in self.paid:
            svc.confirm_payment(order.id, self.admin)
        self.unpaid = place(self.shopper, [line(product, 1)]).order

    def test_marks_only_paid_unsettled_orders(self):
        _, marked, total = confirm_reimbursement(actor=self.admin, amount="4000")

        self.assertEqual(marked, 2)
        self.assertEqual(total, Decimal("4000.00"))

        stamps = set(
            Order.objects.filter(pk__in=[o.pk for o in self.paid]).values_list("reimbursed_at", flat=True)
        )
        self.assertEqual(len(stamps), 1)
        self.assertIsNotNone(stamps.pop())

        self.unpaid.refresh_from_db()
        self.assertFalse(self.unpaid.reimbursed)
        self.assertIsNone(self.unpaid.reimbursed_at)

    def test_already_settled_orders_keep_their_timestamp(self):
        confirm_reimbursement(actor=self.admin, amount="4000")
        first = Order.objects.get(pk=self.paid[0].pk).reimbursed_at

        _, marked, total = confirm_reimbursement(actor=self.admin, amount="150.50")

        self.assertEqual(marked, 0)
        self.assertEqual(total, Decimal("4150.50"))
        self.assertEqual(total_reimbursed(), Decimal("4150.50"))
        self.assertEqual(Order.objects.get(pk=self.paid[0].pk).reimbursed_at, first)

    def test_rejects_non_positive_amounts(self):
        for bad in ("0", "-5", "abc", None):
            with self.assertRaises(ValidationError):
                confirm_reimbursement(actor=self.admin, amount=bad)

        self.assertFalse(Reimbursement.objects.exists())
        self.assertFalse(Order.objects.filter(reimbursed=True).exists())

    def test_only_admins_confirm(self):
        manager = make_user(email="manager@example.com", role="manager")

        with self.assertRaises(Forbidden):
            confirm_reimbursement(actor=manager, amount="10")

    def test_rows_are_append_only(self):
        row, _, _ = confirm_reimbursement(actor=self.admin, amount="10")
        self.assertEqual(row.confirmed_by, self.admin)

        row.amount = Decimal("99.00")
        with self.assertRaises(RuntimeError):
            row.save()
        with self.assertRaises(RuntimeError):
            row.delete()

        self.assertEqual(Reimbursement.objects.get().amount, Decimal("10.00"))


class ReimbursementApiTests(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.admin = make_admin()
        self.manager = make_user(email="manager@example.com", role="manager")

    def test_confirm_and_total(self):
        self.client.force_authenticate(user=self.admin)

        res = self.client.post("/api/orders/reimbursements/confirm/", {"amount": "2500"}, format="json")

        self.assertEqual(res.status_code, 200)
        self.assertTrue(res.data["success"])
        self.assertEqual(res.data["totalReimbursed"], Decimal("2500.00"))
        self.assertEqual(res.data["ordersMarked"], 0)

        self.client.force_authenticate(user=self.manager)
        res = self.client.get("/api/orders/reimbursements/total/")
        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data["total"], Decimal("2500.00"))

    def test_invalid_amount(self):
        self.client.force_authenticate(user=self.admin)

        res = self.client.post("/api/orders/reimbursements/confirm/", {"amount": "0"}, format="json")

        self.assertEqual(res.status_code, 400)
        self.assertEqual(res.data["error"]["message"], "Invalid reimbursement amount")

    def test_manager_cannot_confirm(self):
        self.client.force_authenticate(user=self.manager)

        res = self.client.post("/api/orders/reimbursements/confirm/", {"amount": "10"}, format="json")

        self.assertEqual(res.status_code, 403)
