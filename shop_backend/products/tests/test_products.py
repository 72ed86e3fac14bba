# products/tests/test_products.py

from decimal import Decimal

from django.contrib.auth import get_user_model
from django.test import TestCase
from rest_framework.test import APIClient

from products.models import Category, Product

User = get_user_model()


class ProductModelTests(TestCase):
    """
    Product model tests.

    GUARANTEES:
    - in_stock is derived from remaining_stock on every save
    - remaining_stock is clamped into [0, stock]
    - effective price never goes below zero
    """

    def test_new_product_derives_in_stock(self):
        product = Product.objects.create(
            name="Cornflakes",
            price=Decimal("2300.00"),
            stock=10,
            remaining_stock=10,
        )

        self.assertTrue(product.in_stock)

    def test_out_of_stock_product(self):
        product = Product.objects.create(name="Sold Out", price=Decimal("100.00"))

        self.assertEqual(product.remaining_stock, 0)
        self.assertFalse(product.in_stock)

    def test_remaining_stock_is_clamped_to_stock(self):
        product = Product.objects.create(
            name="Overfilled",
            price=Decimal("100.00"),
            stock=5,
            remaining_stock=9,
        )

        self.assertEqual(product.remaining_stock, 5)

    def test_save_with_update_fields_keeps_in_stock_in_sync(self):
        product = Product.objects.create(
            name="Water",
            price=Decimal("250.00"),
            stock=3,
            remaining_stock=3,
        )

        product.remaining_stock = 0
        product.save(update_fields=["remaining_stock"])

        product.refresh_from_db()
        self.assertFalse(product.in_stock)

    def test_effective_price(self):
        product = Product(name="Promo", price=Decimal("900.00"), discount=Decimal("50.00"))
        self.assertEqual(product.effective_price, Decimal("850.00"))

        product.discount = Decimal("1000.00")
        self.assertEqual(product.effective_price, Decimal("0.00"))


class CatalogueApiTests(TestCase):
    """
    GUARANTEES:
    - Anonymous callers only see visible products
    - Only catalogue editors (admin) can write
    - Restock grows stock and remaining_stock together
    """

    def setUp(self):
        self.client = APIClient()

        self.admin = User.objects.create_user(
            email="admin@example.com", password="pass", role="admin"
        )
        self.manager = User.objects.create_user(
            email="manager@example.com", password="pass", role="manager"
        )

        self.snacks = Category.objects.create(name="Snacks")

        self.visible = Product.objects.create(
            name="Chin Chin",
            category=self.snacks,
            price=Decimal("700.00"),
            stock=5,
            remaining_stock=5,
        )
        self.hidden = Product.objects.create(
            name="Secret Biscuit",
            price=Decimal("300.00"),
            stock=5,
            remaining_stock=5,
            is_visible=False,
        )

    def _ids(self, res):
        return {row["id"] for row in res.data["results"]}

    def test_public_list_hides_invisible_products(self):
        res = self.client.get("/api/products/")

        self.assertEqual(res.status_code, 200)
        self.assertIn(str(self.visible.id), self._ids(res))
        self.assertNotIn(str(self.hidden.id), self._ids(res))

    def test_admin_sees_hidden_products(self):
        self.client.force_authenticate(user=self.admin)
        res = self.client.get("/api/products/")

        self.assertIn(str(self.hidden.id), self._ids(res))

    def test_search_and_filter(self):
        res = self.client.get("/api/products/", {"q": "chin"})
        self.assertEqual(self._ids(res), {str(self.visible.id)})

        res = self.client.get("/api/products/", {"category": str(self.snacks.id)})
        self.assertEqual(self._ids(res), {str(self.visible.id)})

    def test_hidden_product_detail_is_404_for_public(self):
        res = self.client.get(f"/api/products/{self.hidden.id}/")
        self.assertEqual(res.status_code, 404)

    def test_admin_creates_product_with_images(self):
        self.client.force_authenticate(user=self.admin)

        res = self.client.post(
            "/api/products/",
            {
                "name": "Toothpaste",
                "price": "900.00",
                "dmc": "50.00",
                "stock": 12,
                "category": str(self.snacks.id),
                "images": [
                    {"image": "https://cdn.example.com/red.png", "color": "Red", "color_code": "#f00"},
                    {"image": "https://cdn.example.com/blue.png", "color": "Blue", "color_code": "#00f"},
                ],
            },
            format="json",
        )

        self.assertEqual(res.status_code, 201, res.data)
        self.assertEqual(res.data["remaining_stock"], 12)
        self.assertTrue(res.data["in_stock"])
        self.assertEqual([img["color"] for img in res.data["images"]], ["Red", "Blue"])

    def test_remaining_stock_cannot_exceed_stock(self):
        self.client.force_authenticate(user=self.admin)

        res = self.client.patch(
            f"/api/products/{self.visible.id}/",
            {"remaining_stock": 50},
            format="json",
        )

        self.assertEqual(res.status_code, 400)

    def test_visibility_toggle_does_not_touch_stock(self):
        self.client.force_authenticate(user=self.admin)

        res = self.client.patch(
            f"/api/products/{self.visible.id}/",
            {"is_visible": False},
            format="json",
        )

        self.assertEqual(res.status_code, 200)
        self.visible.refresh_from_db()
        self.assertFalse(self.visible.is_visible)
        self.assertEqual(self.visible.remaining_stock, 5)

    def test_manager_cannot_write(self):
        self.client.force_authenticate(user=self.manager)

        res = self.client.post(
            "/api/products/",
            {"name": "Nope", "price": "1.00"},
            format="json",
        )

        self.assertEqual(res.status_code, 403)

    def test_anonymous_cannot_delete(self):
        res = self.client.delete(f"/api/products/{self.visible.id}/")
        self.assertEqual(res.status_code, 401)

    def test_restock(self):
        self.client.force_authenticate(user=self.admin)

        res = self.client.post(
            f"/api/products/{self.visible.id}/restock/",
            {"quantity": 7},
            format="json",
        )

        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data["stock"], 12)
        self.assertEqual(res.data["remaining_stock"], 12)

    def test_categories_are_public_but_admin_writes(self):
        res = self.client.get("/api/products/categories/")
        self.assertEqual(res.status_code, 200)
        self.assertEqual([c["name"] for c in res.data], ["Snacks"])

        res = self.client.post("/api/products/categories/", {"name": "Drinks"}, format="json")
        self.assertEqual(res.status_code, 401)

        self.client.force_authenticate(user=self.admin)
        res = self.client.post("/api/products/categories/", {"name": "Drinks"}, format="json")
        self.assertEqual(res.status_code, 201)
