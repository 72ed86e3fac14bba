# products/tests/test_stock_ledger.py

import uuid
from decimal import Decimal

from django.test import TestCase

from products.models import Product
from products.services.stock_ledger import (
    InsufficientStockError,
    ProductNotFoundError,
    StockLine,
    check_availability,
    decrement_stock,
    receive_stock,
    restore_stock,
)


class StockLedgerTests(TestCase):
    """
    GUARANTEES:
    - 0 <= remaining_stock <= stock after any decrement/restore
    - in_stock == (remaining_stock > 0) after every mutation
    - Availability pre-pass never writes
    """

    def setUp(self):
        self.rice = Product.objects.create(
            name="Rice 1kg",
            price=Decimal("1500.00"),
            stock=5,
            remaining_stock=5,
        )
        self.beans = Product.objects.create(
            name="Beans 1kg",
            price=Decimal("1200.00"),
            stock=2,
            remaining_stock=1,
        )

    def _assert_invariants(self, product):
        product.refresh_from_db()
        self.assertGreaterEqual(product.remaining_stock, 0)
        self.assertLessEqual(product.remaining_stock, product.stock)
        self.assertEqual(product.in_stock, product.remaining_stock > 0)

    def test_check_availability_returns_locked_products(self):
        products = check_availability(
            [StockLine(self.rice.id, 2), StockLine(self.beans.id, 1)]
        )

        self.assertEqual(set(products.keys()), {str(self.rice.id), str(self.beans.id)})

    def test_check_availability_names_first_short_product(self):
        with self.assertRaises(InsufficientStockError) as ctx:
            check_availability(
                [StockLine(self.rice.id, 1), StockLine(self.beans.id, 3)]
            )

        self.assertEqual(ctx.exception.product.id, self.beans.id)
        self.assertIn("Beans 1kg", str(ctx.exception))

        self.rice.refresh_from_db()
        self.assertEqual(self.rice.remaining_stock, 5)

    def test_check_availability_sums_repeated_lines(self):
        with self.assertRaises(InsufficientStockError):
            check_availability(
                [StockLine(self.rice.id, 3), StockLine(self.rice.id, 3)]
            )

    def test_check_availability_unknown_product(self):
        with self.assertRaises(ProductNotFoundError):
            check_availability([StockLine(uuid.uuid4(), 1)])

    def test_decrement_floors_at_zero(self):
        decrement_stock(self.beans.id, 4)

        self.beans.refresh_from_db()
        self.assertEqual(self.beans.remaining_stock, 0)
        self.assertFalse(self.beans.in_stock)
        self._assert_invariants(self.beans)

    def test_restore_is_capped_at_stock(self):
        decrement_stock(self.rice.id, 2)
        restore_stock(self.rice.id, 10)

        self.rice.refresh_from_db()
        self.assertEqual(self.rice.remaining_stock, 5)
        self._assert_invariants(self.rice)

    def test_restore_brings_product_back_in_stock(self):
        decrement_stock(self.beans.id, 1)
        restore_stock(self.beans.id, 1)

        self.beans.refresh_from_db()
        self.assertEqual(self.beans.remaining_stock, 1)
        self.assertTrue(self.beans.in_stock)

    def test_restore_missing_product_is_skipped(self):
        self.assertEqual(restore_stock(uuid.uuid4(), 1), 0)

    def test_receive_stock(self):
        product = receive_stock(product=self.beans, quantity=3)

        self.assertEqual(product.stock, 5)
        self.assertEqual(product.remaining_stock, 4)
        self._assert_invariants(product)

    def test_quantity_must_be_positive(self):
        with self.assertRaises(ValueError):
            decrement_stock(self.rice.id, 0)
        with self.assertRaises(ValueError):
            check_availability([StockLine(self.rice.id, -1)])
