# notifications/views/stream.py

"""
SERVER-SENT EVENTS

GET /api/notifications/stream/

Holds a Subscription on the app's OrderEventBus for the life of the response
and writes one `event: notification` frame per event. A comment frame is sent
every NOTIFICATION_STREAM_HEARTBEAT_SECONDS so proxies keep the connection.
"""

import json

from django.apps import apps
from django.conf import settings
from django.http import StreamingHttpResponse
from drf_spectacular.utils import extend_schema
from rest_framework.permissions import IsAuthenticated
from rest_framework.renderers import BaseRenderer, JSONRenderer
from rest_framework.views import APIView

from permissions.roles import CAP_ORDERS_MANAGE, user_has_capability


class EventStreamRenderer(BaseRenderer):
    """Lets DRF content negotiation accept `Accept: text/event-stream`."""

    media_type = "text/event-stream"
    format = "sse"
    charset = "utf-8"

    def render(self, data, accepted_media_type=None, renderer_context=None):
        return json.dumps(data).encode(self.charset)


def event_stream(bus, *, user_id, is_admin, heartbeat: float):
    sub = bus.subscribe(user_id=user_id, is_admin=is_admin)
    try:
        yield "retry: 5000\n\n"
        while True:
            event = sub.get(timeout=heartbeat)
            if event is None:
                yield ": keep-alive\n\n"
                continue
            yield f"event: notification\ndata: {json.dumps(event.as_payload())}\n\n"
    finally:
        sub.close()


class NotificationStreamView(APIView):
    permission_classes = [IsAuthenticated]
    renderer_classes = [JSONRenderer, EventStreamRenderer]

    @extend_schema(responses={200: str}, description="Live notification stream (text/event-stream)")
    def get(self, request):
        bus = apps.get_app_config("notifications").event_bus

        response = StreamingHttpResponse(
            event_stream(
                bus,
                user_id=request.user.id,
                is_admin=user_has_capability(request.user, CAP_ORDERS_MANAGE),
                heartbeat=float(getattr(settings, "NOTIFICATION_STREAM_HEARTBEAT_SECONDS", 15.0)),
            ),
            content_type="text/event-stream",
        )
        response["Cache-Control"] = "no-cache"
        response["X-Accel-Buffering"] = "no"
        return response
