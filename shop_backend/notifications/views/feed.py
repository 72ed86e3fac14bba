# notifications/views/feed.py

import logging

from django.db.models import Q
from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import generics, status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from notifications.models import Notification
from notifications.serializers import NotificationSerializer, RegisterTokenSerializer
from permissions.roles import CAP_ORDERS_MANAGE, user_has_capability

logger = logging.getLogger(__name__)


def visible_notifications(user):
    """Own feed, plus the shared admin feed for order managers."""
    audience = Q(recipient=user)
    if user_has_capability(user, CAP_ORDERS_MANAGE):
        audience |= Q(for_admins=True)
    return Notification.objects.filter(audience)


class NotificationListView(generics.ListAPIView):
    """
    GET /api/notifications/?unread=true
    """

    serializer_class = NotificationSerializer
    permission_classes = [IsAuthenticated]

    def get_queryset(self):
        qs = visible_notifications(self.request.user)
        if (self.request.query_params.get("unread") or "").strip().lower() in ("1", "true", "yes"):
            qs = qs.filter(read=False)
        return qs.order_by("-created_at")


class NotificationReadView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(
        request=None,
        responses={200: NotificationSerializer, 404: OpenApiResponse(description="Not found")},
        description="Mark one notification as read",
    )
    def post(self, request, pk):
        notification = visible_notifications(request.user).filter(pk=pk).first()
        if notification is None:
            return Response(
                {"error": {"code": "not_found", "message": "Notification not found"}},
                status=status.HTTP_404_NOT_FOUND,
            )

        if not notification.read:
            notification.read = True
            notification.save(update_fields=["read"])

        return Response(NotificationSerializer(notification).data)


class NotificationReadAllView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(request=None, responses={200: dict}, description="Mark every visible notification as read")
    def post(self, request):
        updated = visible_notifications(request.user).filter(read=False).update(read=True)
        return Response({"success": True, "updated": updated})


class RegisterTokenView(APIView):
    """
    Register (or clear) the current user's device token for push notifications.
    """

    permission_classes = [IsAuthenticated]
    serializer_class = RegisterTokenSerializer

    @extend_schema(
        request=RegisterTokenSerializer,
        responses={200: dict},
        description="Register a push token; send null to disable notifications",
    )
    def post(self, request):
        serializer = RegisterTokenSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        user = request.user
        user.fcm_token = serializer.validated_data["token"]
        user.save(update_fields=["fcm_token", "updated_at"])

        if user.fcm_token is None:
            logger.info("Push disabled", extra={"user_id": str(user.id)})
            return Response({"success": True, "message": "Notifications disabled"})

        logger.info("Push token registered", extra={"user_id": str(user.id)})
        return Response({"success": True, "message": "Token registered successfully"})
