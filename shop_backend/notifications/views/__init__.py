from .broadcast import BroadcastView
from .feed import (
    NotificationListView,
    NotificationReadAllView,
    NotificationReadView,
    RegisterTokenView,
)
from .stream import NotificationStreamView

__all__ = [
    "NotificationListView",
    "NotificationReadView",
    "NotificationReadAllView",
    "RegisterTokenView",
    "NotificationStreamView",
    "BroadcastView",
]
