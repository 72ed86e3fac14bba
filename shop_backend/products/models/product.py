# products/models/product.py

import uuid
from decimal import Decimal

from django.core.exceptions import ValidationError
from django.db import models

from .category import Category


class Product(models.Model):
    """
    Represents a sellable product.

    STOCK MODEL (IMPORTANT):
    - stock            = lifetime quantity received
    - remaining_stock  = current sellable quantity
    - in_stock         = derived (remaining_stock > 0), never user-controlled

    Invariants (enforced in save(); bulk paths in services.stock_ledger
    recompute in_stock explicitly):
    - 0 <= remaining_stock <= stock
    - in_stock == (remaining_stock > 0)

    PRICING:
    - price is the list price, discount an absolute amount off it
    - dmc is a per-unit surcharge passed through to a third party
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    category = models.ForeignKey(
        Category,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="products",
    )

    name = models.CharField(max_length=255, db_index=True)
    description = models.TextField(blank=True, default="")
    brand = models.CharField(max_length=255, blank=True, default="")

    price = models.DecimalField(max_digits=12, decimal_places=2)
    discount = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))
    dmc = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))

    stock = models.PositiveIntegerField(default=0)
    remaining_stock = models.PositiveIntegerField(default=0)
    in_stock = models.BooleanField(default=False, editable=False)

    is_visible = models.BooleanField(default=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["name"], name="products_pr_name_9c1f4e_idx"),
            models.Index(fields=["is_visible", "in_stock"], name="products_pr_visible_3a7d21_idx"),
        ]

    def __str__(self):
        return self.name

    def clean(self):
        if self.price is None or Decimal(self.price) < 0:
            raise ValidationError("Price must be non-negative")

        if Decimal(self.discount or 0) < 0:
            raise ValidationError("Discount cannot be negative")

        if Decimal(self.dmc or 0) < 0:
            raise ValidationError("DMC cannot be negative")

        if int(self.remaining_stock or 0) > int(self.stock or 0):
            raise ValidationError("remaining_stock cannot exceed stock")

    def save(self, *args, **kwargs):
        stock = max(int(self.stock or 0), 0)
        remaining = min(max(int(self.remaining_stock or 0), 0), stock)

        self.stock = stock
        self.remaining_stock = remaining
        self.in_stock = remaining > 0

        update_fields = kwargs.get("update_fields")
        if update_fields is not None and (
            "stock" in update_fields or "remaining_stock" in update_fields
        ):
            kwargs["update_fields"] = {*update_fields, "stock", "remaining_stock", "in_stock"}

        super().save(*args, **kwargs)

    @property
    def effective_price(self) -> Decimal:
        """
        Price the shopper pays per unit, before dmc: max(price - discount, 0).
        """
        price = Decimal(str(self.price or "0.00"))
        discount = Decimal(str(self.discount or "0.00"))
        return max(price - discount, Decimal("0.00"))


class ProductImage(models.Model):
    """
    One image of a product, optionally tagged with a colour variant.

    `image` is whatever reference the upload layer hands back (URL or data URI).
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    product = models.ForeignKey(
        Product,
        on_delete=models.CASCADE,
        related_name="images",
    )

    image = models.TextField()
    color = models.CharField(max_length=64, blank=True, default="")
    color_code = models.CharField(max_length=32, blank=True, default="")
    position = models.PositiveIntegerField(default=0)

    class Meta:
        ordering = ["position"]

    def __str__(self):
        return f"{self.product_id} #{self.position}"

    def as_snapshot(self) -> dict:
        return {
            "image": self.image,
            "color": self.color,
            "colorCode": self.color_code,
        }
