import logging

from django.apps import AppConfig
from django.core.exceptions import ImproperlyConfigured

logger = logging.getLogger(__name__)


class NotificationsConfig(AppConfig):
    """
    Owns the process-wide order event bus.

    The bus is built once in ready() and handed to every Notifier (and to the
    SSE stream view) through this config; nothing reaches for a module global.
    """

    default_auto_field = "django.db.models.BigAutoField"
    name = "notifications"
    verbose_name = "Notifications"

    event_bus = None

    def ready(self):
        from notifications.services.events import OrderEventBus

        self.event_bus = OrderEventBus()

    def build_notifier(self):
        """
        Fresh Notifier over the configured push gateway (settings.PUSH_GATEWAY)
        and this app's bus.

        A gateway that cannot be built is logged and replaced by the logging
        gateway: order writes never depend on push being configured.
        """
        from notifications.services.notifier import Notifier
        from notifications.services.push import LoggingPushGateway, get_push_gateway

        try:
            gateway = get_push_gateway()
        except (ImportError, ImproperlyConfigured, RuntimeError):
            logger.exception("Push gateway unavailable; falling back to logging gateway")
            gateway = LoggingPushGateway()

        return Notifier(gateway=gateway, bus=self.event_bus)
