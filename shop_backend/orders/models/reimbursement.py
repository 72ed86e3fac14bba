# orders/models/reimbursement.py

import uuid

from django.conf import settings
from django.db import models


class Reimbursement(models.Model):
    """
    One payout settling the seller's net margin (sale - DMC - SPF) on paid orders.

    APPEND-ONLY LEDGER:
    - rows are never updated or deleted
    - the running total is the sum of all rows
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    amount = models.DecimalField(max_digits=12, decimal_places=2)

    confirmed_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name="reimbursements",
    )

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-created_at"]

    def save(self, *args, **kwargs):
        if not self._state.adding:
            raise RuntimeError("Reimbursement records are immutable")
        super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        raise RuntimeError("Reimbursement records cannot be deleted")

    def __str__(self):
        return f"{self.amount} @ {self.created_at:%Y-%m-%d}"
