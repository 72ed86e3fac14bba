# storefront/tests/test_settings.py

from decimal import Decimal

from django.contrib.auth import get_user_model
from django.core.exceptions import ValidationError
from django.test import TestCase, override_settings
from rest_framework.test import APIClient

from storefront.models import SiteSettings
from storefront.services import settings_store

User = get_user_model()


class SettingsStoreTests(TestCase):
    """
    GUARANTEES:
    - Reads work without a row (fallback defaults)
    - Writes upsert and only touch supplied fields
    - SPF is never negative
    """

    def test_defaults_without_row(self):
        row = settings_store.get_settings()

        self.assertFalse(SiteSettings.objects.exists())
        self.assertEqual(row.id, "settings")
        self.assertEqual(row.hostels, [])
        self.assertEqual(row.banner_title, "Summer Sale!")
        self.assertEqual(row.banner_colors, ["blue", "indigo"])
        self.assertTrue(row.banner_visible)
        self.assertEqual(settings_store.current_spf(), Decimal("100.00"))

    @override_settings(SHOP_DEFAULT_SPF="150.00")
    def test_default_spf_follows_configuration(self):
        self.assertEqual(settings_store.current_spf(), Decimal("150.00"))

    def test_update_upserts_and_keeps_other_fields(self):
        settings_store.update_settings(bank_name="Campus Bank", hostels=["Hall A"])
        settings_store.update_settings(spf=Decimal("250"))

        row = SiteSettings.objects.get(pk="settings")
        self.assertEqual(row.bank_name, "Campus Bank")
        self.assertEqual(row.hostels, ["Hall A"])
        self.assertEqual(row.spf, Decimal("250.00"))
        self.assertEqual(SiteSettings.objects.count(), 1)

    def test_negative_spf_rejected(self):
        with self.assertRaises(ValidationError):
            settings_store.set_spf(Decimal("-1"))

    def test_unknown_field_rejected(self):
        with self.assertRaises(ValidationError):
            settings_store.update_settings(favourite_colour="green")

    def test_banner_requires_all_text_fields(self):
        with self.assertRaises(ValidationError):
            settings_store.set_banner(title="Sale", subtitle="", discount="10%")


class SettingsApiTests(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.admin = User.objects.create_user(
            email="admin@example.com", password="pass", role="admin"
        )
        self.shopper = User.objects.create_user(
            email="shopper@example.com", password="pass"
        )

    def test_public_read(self):
        res = self.client.get("/api/settings/")

        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data["spf"], Decimal("100.00"))
        self.assertEqual(res.data["bannerTitle"], "Summer Sale!")

    def test_admin_updates_bank_details_and_hostels(self):
        self.client.force_authenticate(user=self.admin)

        res = self.client.put(
            "/api/settings/",
            {"bankName": "Campus Bank", "hostels": ["Hall A", "Hall B"]},
            format="json",
        )

        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data["bankName"], "Campus Bank")
        self.assertEqual(res.data["hostels"], ["Hall A", "Hall B"])

    def test_spf_endpoint_rejects_negative(self):
        self.client.force_authenticate(user=self.admin)

        res = self.client.put("/api/settings/spf/", {"spf": "-5"}, format="json")
        self.assertEqual(res.status_code, 400)

        res = self.client.put("/api/settings/spf/", {"spf": "120"}, format="json")
        self.assertEqual(res.status_code, 200)
        self.assertEqual(settings_store.current_spf(), Decimal("120.00"))

    def test_delivery_time_requires_a_field(self):
        self.client.force_authenticate(user=self.admin)

        res = self.client.put("/api/settings/delivery-time/", {}, format="json")
        self.assertEqual(res.status_code, 400)

        res = self.client.put(
            "/api/settings/delivery-time/",
            {"nextDeliveryTime": "2026-03-01T18:00:00Z", "nextDeliveryEnabled": True},
            format="json",
        )
        self.assertEqual(res.status_code, 200)
        self.assertTrue(res.data["nextDeliveryEnabled"])

    def test_whatsapp_and_banner(self):
        self.client.force_authenticate(user=self.admin)

        res = self.client.put(
            "/api/settings/whatsapp/", {"whatsappNumber": "+2348000000000"}, format="json"
        )
        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data["whatsappNumber"], "+2348000000000")

        res = self.client.put(
            "/api/settings/banner/",
            {
                "bannerTitle": "Exam Week",
                "bannerSubtitle": "Snacks for the library",
                "bannerDiscount": "10% OFF",
                "bannerColors": ["green", "teal"],
                "bannerVisible": False,
            },
            format="json",
        )
        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data["bannerColors"], ["green", "teal"])
        self.assertFalse(res.data["bannerVisible"])

    def test_shopper_cannot_write(self):
        self.client.force_authenticate(user=self.shopper)

        res = self.client.put("/api/settings/spf/", {"spf": "0"}, format="json")
        self.assertEqual(res.status_code, 403)

    def test_anonymous_cannot_write(self):
        res = self.client.put("/api/settings/spf/", {"spf": "0"}, format="json")
        self.assertEqual(res.status_code, 401)
