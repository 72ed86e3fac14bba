from .events import OrderEvent, OrderEventBus, Subscription
from .notifier import Notifier
from .push import FcmPushGateway, LoggingPushGateway, PushResult, get_push_gateway

__all__ = [
    "OrderEvent",
    "OrderEventBus",
    "Subscription",
    "Notifier",
    "PushResult",
    "LoggingPushGateway",
    "FcmPushGateway",
    "get_push_gateway",
]
