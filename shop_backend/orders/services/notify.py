# orders/services/notify.py

"""
Order notifications, scheduled after commit.

The notifier itself never raises; scheduling through on_commit keeps a
rolled-back write from announcing anything.
"""

from __future__ import annotations

from decimal import Decimal

from django.db import transaction


def format_amount(order) -> str:
    return f"{order.currency} {Decimal(order.amount):,.2f}"


def customer_on_commit(notifier, order, title: str, body: str, data: dict | None = None) -> None:
    if notifier is None:
        return
    transaction.on_commit(lambda: notifier.notify_customer(order, title, body, data))


def admins_on_commit(notifier, title: str, body: str, data: dict | None = None) -> None:
    if notifier is None:
        return
    transaction.on_commit(lambda: notifier.notify_admins(title, body, data))
