# notifications/services/notifier.py

"""
NOTIFIER

Persists a Notification row, publishes it on the event bus and pushes it to
device tokens. Every method is best-effort: any failure is logged and
swallowed, so a notification can never undo the order write that caused it.

Callers schedule these from transaction.on_commit().
"""

from __future__ import annotations

import logging
from typing import Optional

from django.contrib.auth import get_user_model

from notifications.models import Notification
from notifications.services.events import OrderEvent, OrderEventBus
from notifications.services.push import PushGateway, PushResult

logger = logging.getLogger(__name__)

ADMIN_ORDERS_URL = "/admin/manage-orders"


def _event_for(notification: Notification) -> OrderEvent:
    return OrderEvent(
        title=notification.title,
        body=notification.body,
        order_id=str(notification.order_id) if notification.order_id else None,
        recipient_id=str(notification.recipient_id) if notification.recipient_id else None,
        for_admins=notification.for_admins,
        notification_id=str(notification.id),
        created_at=notification.created_at.isoformat() if notification.created_at else None,
        data=dict(notification.data or {}),
    )


class Notifier:
    def __init__(self, *, gateway: PushGateway, bus: Optional[OrderEventBus]):
        self.gateway = gateway
        self.bus = bus

    # ---------------------------------------------------------
    # internals
    # ---------------------------------------------------------
    def _publish(self, notification: Notification) -> None:
        if self.bus is not None:
            self.bus.publish(_event_for(notification))

    def _push(self, tokens, title, body, data) -> PushResult:
        tokens = [t for t in tokens if t]
        if not tokens:
            return PushResult()
        return self.gateway.send(tokens, title, body, data)

    # ---------------------------------------------------------
    # public API
    # ---------------------------------------------------------
    def notify_customer(self, order, title: str, body: str, data: Optional[dict] = None):
        """
        Tell the order's owner. Registered users get a feed row and a push to
        their fcm_token; guests get a push to the order's guest_fcm_token.
        """
        try:
            payload = {"orderId": str(order.id), "url": f"/order/{order.id}", **(data or {})}
            user = getattr(order, "user", None)

            notification = Notification.objects.create(
                recipient=user,
                for_admins=False,
                title=title,
                body=body,
                order_id=order.id,
                data=payload,
            )
            self._publish(notification)

            token = getattr(user, "fcm_token", None) if user else getattr(order, "guest_fcm_token", None)
            self._push([token], title, body, payload)
            return notification
        except Exception:
            logger.exception(
                "Customer notification failed",
                extra={"order_id": str(getattr(order, "id", ""))},
            )
            return None

    def notify_admins(self, title: str, body: str, data: Optional[dict] = None):
        """Admin feed row + push to every active admin with a device token."""
        try:
            payload = {"url": ADMIN_ORDERS_URL, **(data or {})}

            notification = Notification.objects.create(
                for_admins=True,
                title=title,
                body=body,
                order_id=payload.get("orderId") or None,
                data=payload,
            )
            self._publish(notification)

            User = get_user_model()
            tokens = list(
                User.objects.filter(role=User.ROLE_ADMIN, is_active=True)
                .exclude(fcm_token__isnull=True)
                .exclude(fcm_token="")
                .values_list("fcm_token", flat=True)
            )
            self._push(tokens, title, body, payload)
            return notification
        except Exception:
            logger.exception("Admin notification failed", extra={"title": title})
            return None

    def broadcast(self, title: str, body: str) -> PushResult:
        """
        Push to every user that registered a device. No feed rows.
        """
        User = get_user_model()
        tokens = list(
            User.objects.filter(is_active=True)
            .exclude(fcm_token__isnull=True)
            .exclude(fcm_token="")
            .values_list("fcm_token", flat=True)
        )

        try:
            return self._push(tokens, title, body, {})
        except Exception:
            logger.exception("Broadcast push failed", extra={"title": title})
            return PushResult(failed=len(tokens))
