from django.contrib import admin

from notifications.models import Notification


@admin.register(Notification)
class NotificationAdmin(admin.ModelAdmin):
    list_display = ("title", "recipient", "for_admins", "order_id", "read", "created_at")
    list_filter = ("for_admins", "read", "created_at")
    search_fields = ("title", "body", "recipient__email")
    readonly_fields = ("created_at",)
