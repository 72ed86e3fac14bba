# orders/models/order_item.py

from decimal import Decimal

from django.db import models

from .order import Order


class OrderItem(models.Model):
    """
    Immutable snapshot of one cart line at purchase time.

    The product FK is kept for stock restoration only; every display and
    reporting field is copied so later catalogue edits never rewrite history.
    """

    order = models.ForeignKey(Order, on_delete=models.CASCADE, related_name="items")

    product = models.ForeignKey(
        "products.Product",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="order_items",
    )
    product_ref = models.CharField(max_length=64)

    name = models.CharField(max_length=255)
    description = models.TextField(blank=True, default="")
    category = models.CharField(max_length=255, blank=True, default="")
    brand = models.CharField(max_length=255, blank=True, default="")
    selected_image = models.JSONField(null=True, blank=True)

    quantity = models.PositiveIntegerField()
    price = models.DecimalField(max_digits=12, decimal_places=2)
    dmc = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))

    position = models.PositiveIntegerField(default=0)

    class Meta:
        ordering = ["position", "id"]

    @property
    def line_total(self) -> Decimal:
        return (self.price + self.dmc) * self.quantity

    @property
    def line_dmc(self) -> Decimal:
        return self.dmc * self.quantity

    def save(self, *args, **kwargs):
        # The product FK may be nulled by the database when a product is
        # deleted; everything else is frozen.
        if not self._state.adding:
            raise RuntimeError("OrderItem snapshots are immutable")
        super().save(*args, **kwargs)

    def __str__(self):
        return f"{self.name} x {self.quantity}"
