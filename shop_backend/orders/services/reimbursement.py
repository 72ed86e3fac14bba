# orders/services/reimbursement.py

"""
REIMBURSEMENT LEDGER

confirm_reimbursement() records one payout and, in the same transaction,
marks every paid-but-unsettled order as reimbursed with a single timestamp.
"""

from __future__ import annotations

import logging
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from django.db import transaction
from django.db.models import Sum
from django.utils import timezone

from orders.models import Order, Reimbursement
from orders.services.access import require_capability
from orders.services.exceptions import ValidationError
from permissions.roles import CAP_REIMBURSEMENT_CONFIRM

logger = logging.getLogger(__name__)

TWOPLACES = Decimal("0.01")


def _positive_amount(value) -> Decimal:
    try:
        amount = Decimal(str(value)).quantize(TWOPLACES, rounding=ROUND_HALF_UP)
    except (InvalidOperation, TypeError, ValueError) as exc:
        raise ValidationError("Invalid reimbursement amount") from exc
    if not amount.is_finite() or amount <= Decimal("0.00"):
        raise ValidationError("Invalid reimbursement amount")
    return amount


def total_reimbursed() -> Decimal:
    total = Reimbursement.objects.aggregate(total=Sum("amount")).get("total")
    return Decimal(total or "0.00").quantize(TWOPLACES)


@transaction.atomic
def confirm_reimbursement(*, actor, amount):
    """
    Returns (reimbursement, orders_marked, total_reimbursed).
    """
    require_capability(actor, CAP_REIMBURSEMENT_CONFIRM)
    amount = _positive_amount(amount)

    reimbursement = Reimbursement.objects.create(amount=amount, confirmed_by=actor)

    now = timezone.now()
    marked = Order.objects.filter(payment_confirmed=True, reimbursed=False).update(
        reimbursed=True,
        reimbursed_at=now,
        updated_at=now,
    )

    total = total_reimbursed()

    logger.info(
        "Reimbursement confirmed",
        extra={
            "reimbursement_id": str(reimbursement.id),
            "amount": str(amount),
            "orders_marked": marked,
        },
    )
    return reimbursement, marked, total
