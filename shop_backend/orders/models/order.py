# orders/models/order.py

import uuid
from decimal import Decimal

from django.conf import settings
from django.db import models
from django.utils import timezone


def default_currency():
    return getattr(settings, "SHOP_CURRENCY", "NGN")


class Order(models.Model):
    """
    A storefront order placed by a registered user or a guest.

    Money (server authoritative, fixed at checkout):
    - amount     = line total (price + dmc per unit) + spf
    - total_dmc  = dmc share of the line total
    - spf        = service/platform fee charged on this order

    total_dmc and spf are NULL on orders created before they were stored
    ("legacy" orders); reporting derives them from the item snapshots.

    Lifecycle:
    - delivery_status only moves forward (pending -> dispatched -> delivered)
      except for cancellation, which is terminal.
    - Flag writes go through orders.services.transitions, never save().
    """

    STATUS_PENDING = "pending"
    STATUS_DISPATCHED = "dispatched"
    STATUS_DELIVERED = "delivered"
    STATUS_CANCELLED = "cancelled"

    DELIVERY_STATUS_CHOICES = [
        (STATUS_PENDING, "Pending"),
        (STATUS_DISPATCHED, "Dispatched"),
        (STATUS_DELIVERED, "Delivered"),
        (STATUS_CANCELLED, "Cancelled"),
    ]

    PAYMENT_PENDING = "pending"
    PAYMENT_CLAIMED = "claimed"
    PAYMENT_CONFIRMED = "confirmed"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="orders",
    )

    # Guest checkout
    guest_email = models.EmailField(blank=True, default="")
    guest_name = models.CharField(max_length=255, blank=True, default="")
    guest_token = models.CharField(max_length=64, null=True, blank=True, db_index=True)
    guest_fcm_token = models.TextField(null=True, blank=True)

    # Money
    amount = models.DecimalField(max_digits=12, decimal_places=2)
    total_dmc = models.DecimalField(max_digits=12, decimal_places=2, null=True, blank=True)
    spf = models.DecimalField(max_digits=12, decimal_places=2, null=True, blank=True)
    currency = models.CharField(max_length=8, default=default_currency)

    address = models.JSONField(null=True, blank=True)

    create_date = models.DateTimeField(default=timezone.now, db_index=True)
    payment_intent_id = models.CharField(max_length=128, unique=True)

    # Payment
    payment_claimed = models.BooleanField(default=False)
    payment_confirmed = models.BooleanField(default=False)
    payment_confirmed_at = models.DateTimeField(null=True, blank=True)

    # Delivery
    delivery_status = models.CharField(
        max_length=16,
        choices=DELIVERY_STATUS_CHOICES,
        default=STATUS_PENDING,
    )
    admin_confirmed_availability = models.BooleanField(default=False)
    admin_confirmed_availability_at = models.DateTimeField(null=True, blank=True)
    user_confirmed_delivery = models.BooleanField(default=False)
    user_confirmed_delivery_at = models.DateTimeField(null=True, blank=True)

    # Cancellation / settlement
    cancelled = models.BooleanField(default=False)
    cancelled_at = models.DateTimeField(null=True, blank=True)
    refund_amount = models.DecimalField(max_digits=12, decimal_places=2, null=True, blank=True)
    reimbursed = models.BooleanField(default=False)
    reimbursed_at = models.DateTimeField(null=True, blank=True)

    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-create_date"]
        indexes = [
            models.Index(fields=["delivery_status"], name="orders_orde_deliver_2b4e1a_idx"),
            models.Index(fields=["payment_confirmed", "reimbursed"], name="orders_orde_payment_8d3c5f_idx"),
            models.Index(fields=["user", "create_date"], name="orders_orde_user_id_6a9e02_idx"),
        ]

    @property
    def is_guest(self) -> bool:
        return self.user_id is None

    @property
    def payment_status(self) -> str:
        if self.payment_confirmed:
            return self.PAYMENT_CONFIRMED
        if self.payment_claimed:
            return self.PAYMENT_CLAIMED
        return self.PAYMENT_PENDING

    @property
    def customer_name(self) -> str:
        if self.user_id and self.user:
            return self.user.name or self.user.email
        return self.guest_name or self.guest_email or "Guest"

    @property
    def short_id(self) -> str:
        return str(self.id)[-6:]

    def line_total(self) -> Decimal:
        return sum((item.line_total for item in self.items.all()), Decimal("0.00"))

    def __str__(self):
        return f"{self.short_id} | {self.amount} | {self.delivery_status}"
