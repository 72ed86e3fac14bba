# notifications/views/broadcast.py

import logging

from django.apps import apps
from drf_spectacular.utils import extend_schema
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from notifications.serializers import BroadcastSerializer
from permissions.roles import IsAdmin

logger = logging.getLogger(__name__)


class BroadcastView(APIView):
    """
    POST /api/notifications/send/  {"title": ..., "message": ...}

    Admin push to every registered device.
    """

    permission_classes = [IsAuthenticated, IsAdmin]
    serializer_class = BroadcastSerializer

    @extend_schema(request=BroadcastSerializer, responses={200: dict})
    def post(self, request):
        serializer = BroadcastSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        notifier = apps.get_app_config("notifications").build_notifier()
        result = notifier.broadcast(
            serializer.validated_data["title"],
            serializer.validated_data["message"],
        )

        logger.info(
            "Broadcast sent",
            extra={"actor_id": str(request.user.id), "sent": result.sent, "failed": result.failed},
        )

        if not result.sent and not result.failed:
            return Response({"success": True, "message": "No users to notify"})

        return Response({"success": True, "sent": result.sent, "failed": result.failed})
