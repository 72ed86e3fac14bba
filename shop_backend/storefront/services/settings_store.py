# storefront/services/settings_store.py

"""
SETTINGS STORE

Single read path (get_settings) and single write path (update_settings).
Every admin endpoint funnels into update_settings(), which upserts the
singleton row under a row lock and only touches the fields it was given.
"""

from __future__ import annotations

import logging
from decimal import Decimal, InvalidOperation

from django.core.exceptions import ValidationError
from django.db import transaction
from django.utils import timezone

from storefront.models import SETTINGS_ID, SiteSettings

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = {
    "bank_name",
    "bank_account_number",
    "account_holder_name",
    "hostels",
    "spf",
    "next_delivery_time",
    "next_delivery_enabled",
    "whatsapp_number",
    "banner_title",
    "banner_subtitle",
    "banner_discount",
    "banner_image",
    "banner_colors",
    "banner_visible",
}


def get_settings() -> SiteSettings:
    """
    The settings row, or an unsaved instance with fallback defaults.
    """
    row = SiteSettings.objects.filter(pk=SETTINGS_ID).first()
    if row is None:
        return SiteSettings.with_defaults()
    return row


def current_spf() -> Decimal:
    spf = Decimal(str(get_settings().spf))
    return spf.quantize(Decimal("0.01"))


@transaction.atomic
def update_settings(**fields) -> SiteSettings:
    """
    Upsert: create the row on first write, then change only supplied fields.
    """
    unknown = set(fields) - EDITABLE_FIELDS
    if unknown:
        raise ValidationError(f"Unknown settings fields: {', '.join(sorted(unknown))}")

    if "spf" in fields:
        fields["spf"] = _validate_spf(fields["spf"])

    row, created = SiteSettings.objects.select_for_update().get_or_create(pk=SETTINGS_ID)

    for name, value in fields.items():
        setattr(row, name, value)

    if fields:
        row.save(update_fields=[*fields.keys(), "updated_at"])

    logger.info(
        "Settings updated",
        extra={"fields": sorted(fields.keys()), "row_created": created},
    )
    return row


def _validate_spf(value) -> Decimal:
    try:
        spf = Decimal(str(value))
    except (InvalidOperation, TypeError, ValueError) as exc:
        raise ValidationError("Invalid SPF value") from exc
    if not spf.is_finite() or spf < 0:
        raise ValidationError("Invalid SPF value")
    return spf.quantize(Decimal("0.01"))


# ---------------------------------------------------------
# Dedicated admin writes
# ---------------------------------------------------------

def set_spf(spf) -> SiteSettings:
    return update_settings(spf=spf)


def set_delivery_time(*, next_delivery_time=None, enabled=None) -> SiteSettings:
    if next_delivery_time is None and enabled is None:
        raise ValidationError("Missing fields")

    fields = {}
    if next_delivery_time is not None:
        if timezone.is_naive(next_delivery_time):
            next_delivery_time = timezone.make_aware(next_delivery_time)
        fields["next_delivery_time"] = next_delivery_time
    if enabled is not None:
        fields["next_delivery_enabled"] = bool(enabled)

    return update_settings(**fields)


def set_whatsapp_number(number: str) -> SiteSettings:
    number = (number or "").strip()
    if not number:
        raise ValidationError("WhatsApp number is required")
    return update_settings(whatsapp_number=number)


def set_banner(
    *,
    title: str,
    subtitle: str,
    discount: str,
    image=None,
    colors=None,
    visible=None,
) -> SiteSettings:
    if not (title and subtitle and discount):
        raise ValidationError("All banner fields are required")

    fields = {
        "banner_title": title,
        "banner_subtitle": subtitle,
        "banner_discount": discount,
    }
    if image:
        fields["banner_image"] = image
    if colors is not None:
        fields["banner_colors"] = list(colors)
    if visible is not None:
        fields["banner_visible"] = bool(visible)

    return update_settings(**fields)


def set_bank_details(**fields) -> SiteSettings:
    allowed = {"bank_name", "bank_account_number", "account_holder_name", "hostels"}
    return update_settings(**{k: v for k, v in fields.items() if k in allowed})
