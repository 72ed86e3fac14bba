# storefront/models/site_settings.py

"""
SITE SETTINGS (SINGLETON)

One row, primary key "settings". Holds everything an admin tunes without a
deploy: bank details shown at checkout, the hostel list offered as delivery
locations, the SPF charged per order, the next delivery window, the WhatsApp
contact and the home banner.

Reads never require the row to exist: services.settings_store.get_settings()
falls back to SiteSettings.with_defaults().
"""

from decimal import Decimal

from django.conf import settings as django_settings
from django.db import models

SETTINGS_ID = "settings"

DEFAULT_BANNER_TITLE = "Summer Sale!"
DEFAULT_BANNER_SUBTITLE = "Enjoy discounts on selected items"
DEFAULT_BANNER_DISCOUNT = "GET 20% OFF"


def default_spf() -> Decimal:
    return Decimal(str(getattr(django_settings, "SHOP_DEFAULT_SPF", "100.00")))


def default_banner_colors() -> list:
    return ["blue", "indigo"]


class SiteSettings(models.Model):
    id = models.CharField(primary_key=True, max_length=32, default=SETTINGS_ID, editable=False)

    # Bank details (manual transfer)
    bank_name = models.CharField(max_length=255, blank=True, default="")
    bank_account_number = models.CharField(max_length=64, blank=True, default="")
    account_holder_name = models.CharField(max_length=255, blank=True, default="")

    # Delivery
    hostels = models.JSONField(default=list, blank=True)
    spf = models.DecimalField(max_digits=12, decimal_places=2, default=default_spf)
    next_delivery_time = models.DateTimeField(null=True, blank=True)
    next_delivery_enabled = models.BooleanField(default=False)

    whatsapp_number = models.CharField(max_length=32, null=True, blank=True)

    # Home banner
    banner_title = models.CharField(max_length=255, default=DEFAULT_BANNER_TITLE)
    banner_subtitle = models.CharField(max_length=255, default=DEFAULT_BANNER_SUBTITLE)
    banner_discount = models.CharField(max_length=255, default=DEFAULT_BANNER_DISCOUNT)
    banner_image = models.TextField(null=True, blank=True)
    banner_colors = models.JSONField(default=default_banner_colors, blank=True)
    banner_visible = models.BooleanField(default=True)

    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = "site settings"
        verbose_name_plural = "site settings"

    def __str__(self):
        return "Site settings"

    @classmethod
    def with_defaults(cls) -> "SiteSettings":
        """Unsaved instance carrying every fallback value."""
        return cls(id=SETTINGS_ID)
