# notifications/services/events.py

"""
ORDER EVENT BUS (IN-PROCESS PUB/SUB)

One OrderEventBus per process, owned by NotificationsConfig. Producers
(Notifier) publish OrderEvent values; consumers (the SSE stream view) hold a
Subscription with a bounded queue and read from it.

Delivery is best-effort: a subscriber whose queue is full misses the event.
Events are not persisted here; Notification rows are the durable feed.
"""

from __future__ import annotations

import logging
import queue
import threading
from dataclasses import asdict, dataclass, field
from typing import Optional

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OrderEvent:
    title: str
    body: str
    order_id: Optional[str] = None
    recipient_id: Optional[str] = None
    for_admins: bool = False
    notification_id: Optional[str] = None
    created_at: Optional[str] = None
    data: dict = field(default_factory=dict)

    def as_payload(self) -> dict:
        payload = asdict(self)
        return {
            "id": payload["notification_id"],
            "title": payload["title"],
            "body": payload["body"],
            "orderId": payload["order_id"],
            "forAdmins": payload["for_admins"],
            "createdAt": payload["created_at"],
            "data": payload["data"],
        }


class Subscription:
    """
    One consumer's view of the bus.

    Admin subscriptions receive admin-feed events; every subscription receives
    events addressed to its own user id.
    """

    def __init__(self, bus: "OrderEventBus", *, user_id=None, is_admin=False, maxsize=100):
        self._bus = bus
        self.user_id = str(user_id) if user_id is not None else None
        self.is_admin = bool(is_admin)
        self._queue: "queue.Queue[OrderEvent]" = queue.Queue(maxsize=maxsize)

    def accepts(self, event: OrderEvent) -> bool:
        if event.for_admins:
            return self.is_admin
        return self.user_id is not None and event.recipient_id == self.user_id

    def offer(self, event: OrderEvent) -> bool:
        try:
            self._queue.put_nowait(event)
        except queue.Full:
            logger.warning(
                "Event dropped: subscriber queue full",
                extra={"subscriber_user_id": self.user_id},
            )
            return False
        return True

    def get(self, timeout: Optional[float] = None) -> Optional[OrderEvent]:
        """Next event, or None when nothing arrives within timeout."""
        try:
            return self._queue.get(timeout=timeout)
        except queue.Empty:
            return None

    def close(self) -> None:
        self._bus.unsubscribe(self)


class OrderEventBus:
    def __init__(self, *, max_queue: int = 100):
        self._max_queue = max_queue
        self._lock = threading.Lock()
        self._subscribers: set[Subscription] = set()

    def subscribe(self, *, user_id=None, is_admin=False) -> Subscription:
        sub = Subscription(self, user_id=user_id, is_admin=is_admin, maxsize=self._max_queue)
        with self._lock:
            self._subscribers.add(sub)
        return sub

    def unsubscribe(self, sub: Subscription) -> None:
        with self._lock:
            self._subscribers.discard(sub)

    def publish(self, event: OrderEvent) -> int:
        """Fan out to matching subscribers. Returns how many received it."""
        with self._lock:
            targets = [s for s in self._subscribers if s.accepts(event)]

        delivered = 0
        for sub in targets:
            if sub.offer(event):
                delivered += 1
        return delivered

    @property
    def subscriber_count(self) -> int:
        with self._lock:
            return len(self._subscribers)
