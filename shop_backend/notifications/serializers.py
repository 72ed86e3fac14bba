# notifications/serializers.py

from rest_framework import serializers

from notifications.models import Notification


class NotificationSerializer(serializers.ModelSerializer):
    orderId = serializers.UUIDField(source="order_id", read_only=True, allow_null=True)
    forAdmins = serializers.BooleanField(source="for_admins", read_only=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)

    class Meta:
        model = Notification
        fields = ["id", "title", "body", "orderId", "forAdmins", "data", "read", "createdAt"]
        read_only_fields = fields


class RegisterTokenSerializer(serializers.Serializer):
    """
    {"token": "<device token>"} registers; {"token": null} disables push.
    """

    token = serializers.CharField(allow_null=True, allow_blank=True, max_length=512)

    def validate_token(self, value):
        if value is None:
            return None
        value = value.strip()
        if not value:
            raise serializers.ValidationError("Token is required")
        return value


class BroadcastSerializer(serializers.Serializer):
    title = serializers.CharField(max_length=255)
    message = serializers.CharField()
