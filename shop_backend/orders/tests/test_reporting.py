# orders/tests/test_reporting.py

from datetime import date, timedelta
from decimal import Decimal

from django.test import SimpleTestCase, TestCase
from rest_framework.test import APIClient

from orders.services import reporting
from orders.services.reporting import LineSnapshot, OrderSnapshot, UserSnapshot
from orders.services.transitions import OrderTransitionService
from orders.tests.factories import line, make_admin, make_product, make_user, place

TODAY = date(2026, 3, 15)


def _order(order_id, *, days_ago=0, amount="5100.00", dmc="400.00", spf="100.00", **kw):
    lines = kw.pop(
        "lines",
        (LineSnapshot(product_ref="p1", name="Jollof", price=Decimal("2300.00"), dmc=Decimal("200.00"), quantity=2),),
    )
    return OrderSnapshot(
        id=order_id,
        created_on=TODAY - timedelta(days=days_ago),
        amount=Decimal(amount),
        total_dmc=None if dmc is None else Decimal(dmc),
        spf=None if spf is None else Decimal(spf),
        lines=lines,
        **kw,
    )


class SummaryTests(SimpleTestCase):
    """
    GUARANTEES:
    - Money totals count payment-confirmed orders only
    - Legacy orders derive dmc from lines and spf from amount - line total
    - Same snapshots in, same numbers out
    """

    def test_paid_orders_drive_money(self):
        orders = [
            _order("a", payment_confirmed=True),
            _order("b", payment_confirmed=True, reimbursed=True),
            _order("c"),
        ]

        summary = reporting.summarize(orders, total_reimbursed=Decimal("4600"))

        self.assertEqual(summary["totalSale"], Decimal("10200.00"))
        self.assertEqual(summary["totalDmc"], Decimal("800.00"))
        self.assertEqual(summary["totalSpf"], Decimal("200.00"))
        # seller share of the one unsettled paid order: 5100 - 400 - 100
        self.assertEqual(summary["toReimburse"], Decimal("4600.00"))
        self.assertEqual(summary["totalReimbursed"], Decimal("4600.00"))
        self.assertEqual((summary["orders"], summary["paidOrders"], summary["unpaidOrders"]), (3, 2, 1))
        self.assertNotIn("currentSpf", summary)

    def test_legacy_orders_are_normalised(self):
        legacy = _order("old", dmc=None, spf=None, amount="5150.00", payment_confirmed=True)

        self.assertEqual(reporting.normalize_totals(legacy), (Decimal("400.00"), Decimal("150.00")))
        self.assertIsInstance(reporting.order_totals(legacy), reporting.LegacyTotals)
        self.assertIsInstance(reporting.order_totals(_order("new")), reporting.SettledTotals)

        summary = reporting.summarize([legacy])
        self.assertEqual(summary["totalSpf"], Decimal("150.00"))
        self.assertEqual(summary["toReimburse"], Decimal("4600.00"))

    def test_refunds(self):
        orders = [
            _order("a", payment_confirmed=True, cancelled=True, refund_amount=Decimal("5100.00")),
            _order("b", cancelled=True, refund_amount=Decimal("0.00")),
        ]

        summary = reporting.summarize(orders, current_spf=Decimal("100"), product_count=3, user_count=2)

        self.assertEqual(summary["refunds"], Decimal("5100.00"))
        self.assertEqual(summary["refundDmc"], Decimal("800.00"))
        self.assertEqual(summary["currentSpf"], Decimal("100.00"))
        self.assertEqual((summary["products"], summary["users"]), (3, 2))

    def test_idempotent(self):
        orders = [_order("a", payment_confirmed=True), _order("b", days_ago=3)]

        self.assertEqual(reporting.summarize(orders), reporting.summarize(orders))
        self.assertEqual(
            reporting.revenue_series(orders, "30days", TODAY),
            reporting.revenue_series(orders, "30days", TODAY),
        )


class SeriesTests(SimpleTestCase):
    def test_bucket_counts(self):
        self.assertEqual(len(reporting.revenue_series([], "7days", TODAY)), 7)
        self.assertEqual(len(reporting.revenue_series([], "30days", TODAY)), 30)
        self.assertEqual(len(reporting.revenue_series([], "year", TODAY)), 13)
        # 2025-12-15 .. 2026-03-15
        self.assertEqual(len(reporting.revenue_series([], "3months", TODAY)), 91)

    def test_unknown_range_falls_back_to_week(self):
        self.assertEqual(
            reporting.revenue_series([], "decade", TODAY),
            reporting.revenue_series([], "7days", TODAY),
        )

    def test_daily_buckets_are_zero_filled(self):
        orders = [
            _order("a", payment_confirmed=True),
            _order("b", days_ago=2),
            _order("c", days_ago=40, payment_confirmed=True),
        ]

        series = reporting.revenue_series(orders, "7days", TODAY)

        self.assertEqual(series[-1]["date"], TODAY.isoformat())
        self.assertEqual(series[-1]["label"], "Sun")
        self.assertEqual(series[-1]["revenue"], Decimal("5100.00"))
        self.assertEqual(series[-1]["paidOrders"], 1)

        two_days = series[-3]
        self.assertEqual(two_days["revenue"], Decimal("0.00"))
        self.assertEqual((two_days["orders"], two_days["unpaidOrders"]), (1, 1))

        self.assertEqual(sum(b["orders"] for b in series), 2)
        self.assertEqual(series[0]["revenue"], Decimal("0.00"))

    def test_year_buckets_are_monthly(self):
        orders = [_order("a", days_ago=20, payment_confirmed=True)]

        series = reporting.revenue_series(orders, "year", TODAY)

        self.assertEqual(series[0]["label"], "Mar 25")
        self.assertEqual(series[-1]["label"], "Mar 26")
        self.assertEqual(series[-2]["revenue"], Decimal("5100.00"))

    def test_order_status_series(self):
        orders = [
            _order("a", delivery_status="dispatched"),
            _order("b", cancelled=True, delivery_status="cancelled"),
            _order("c"),
        ]

        series = reporting.order_status_series(orders, TODAY)

        self.assertEqual(len(series), 31)
        self.assertEqual(series[-1]["label"], "Mar 15")
        self.assertEqual(
            {k: series[-1][k] for k in ("pending", "dispatched", "delivered", "cancelled")},
            {"pending": 1, "dispatched": 1, "delivered": 0, "cancelled": 1},
        )

    def test_user_growth(self):
        users = [
            UserSnapshot(id="1", joined_on=TODAY, order_count=3),
            UserSnapshot(id="2", joined_on=TODAY, order_count=1),
            UserSnapshot(id="3", joined_on=TODAY - timedelta(days=90), order_count=5),
        ]

        series = reporting.user_growth_series(users, TODAY)

        self.assertEqual((series[-1]["newUsers"], series[-1]["repeatCustomers"]), (2, 1))
        self.assertEqual(sum(b["newUsers"] for b in series), 2)


class ProductAndLocationTests(SimpleTestCase):
    def test_product_performance_excludes_dmc_and_unpaid(self):
        soap = LineSnapshot(product_ref="p2", name="Soap", price=Decimal("900.00"), dmc=Decimal("50.00"), quantity=1)
        orders = [
            _order("a", payment_confirmed=True),
            _order("b", payment_confirmed=True, lines=(soap,)),
            _order("c", lines=(soap, soap, soap)),
        ]

        rows = reporting.product_performance(orders)

        self.assertEqual([r["name"] for r in rows], ["Jollof", "Soap"])
        self.assertEqual(rows[0]["revenue"], Decimal("4600.00"))
        self.assertEqual((rows[1]["revenue"], rows[1]["quantity"]), (Decimal("900.00"), 1))

    def test_extract_location(self):
        cases = [
            (None, "Unknown"),
            ("", "Unknown"),
            ({"city": "Ibadan", "line1": "Hall A"}, "Ibadan"),
            ({"hostel": "Hall A"}, "Hall A"),
            ('{"location": "Agbowo"}', "Agbowo"),
            ("Hall B, Room 3", "Hall B"),
            ('"Hall C"', "Hall C"),
        ]
        for address, expected in cases:
            with self.subTest(address=address):
                self.assertEqual(reporting.extract_location(address), expected)

    def test_locations_group_case_insensitively(self):
        orders = [
            _order("a", address="Hall A, Room 1"),
            _order("b", address="hall a, room 9", cancelled=True),
            _order("c", address={"city": "Agbowo"}),
        ]

        rows = reporting.order_locations(orders)

        self.assertEqual(rows[0], {"address": "Hall A", "orderCount": 2, "cancelCount": 1})
        self.assertEqual(rows[1]["address"], "Agbowo")


class ReportApiTests(TestCase):
    """
    GUARANTEES:
    - Dashboards are open to admins and managers only
    - Summary reads the same rows checkout and transitions write
    """

    def setUp(self):
        self.client = APIClient()
        self.admin = make_admin()
        self.manager = make_user(email="manager@example.com", role="manager")
        self.shopper = make_user()

        order = place(self.shopper, [line(make_product(), 2)]).order
        OrderTransitionService().confirm_payment(order.id, self.admin)
        place(self.shopper, [line(make_product(name="Soap"), 1)])

    def test_manager_reads_summary(self):
        self.client.force_authenticate(user=self.manager)

        res = self.client.get("/api/orders/reports/summary/")

        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data["totalSale"], Decimal("5100.00"))
        self.assertEqual(res.data["toReimburse"], Decimal("4600.00"))
        self.assertEqual((res.data["orders"], res.data["paidOrders"]), (2, 1))
        self.assertEqual(res.data["products"], 2)

    def test_every_report_answers(self):
        self.client.force_authenticate(user=self.admin)

        for path in (
            "revenue/?range=30days",
            "revenue/?range=year",
            "order-status/",
            "product-performance/",
            "user-growth/",
            "locations/",
        ):
            with self.subTest(path=path):
                res = self.client.get(f"/api/orders/reports/{path}")
                self.assertEqual(res.status_code, 200)

        res = self.client.get("/api/orders/reports/revenue/", {"range": "30days"})
        self.assertEqual(len(res.data), 30)
        self.assertEqual(sum(b["orders"] for b in res.data), 2)

    def test_shoppers_are_forbidden(self):
        self.client.force_authenticate(user=self.shopper)

        res = self.client.get("/api/orders/reports/summary/")

        self.assertEqual(res.status_code, 403)

        self.client.force_authenticate(user=None)
        res = self.client.get("/api/orders/reports/summary/")
        self.assertEqual(res.status_code, 401)
