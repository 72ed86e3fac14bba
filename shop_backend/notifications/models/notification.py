# notifications/models/notification.py

"""
NOTIFICATION FEED

Rows are written by services.notifier.Notifier only.

Audience:
- recipient set       -> that user's feed
- for_admins = True   -> the shared admin feed (one read flag for all admins)
- neither             -> guest order notice (kept for audit; delivered by push)

order_id is a plain UUID, not a FK: the feed outlives deleted pending orders.
"""

import uuid

from django.conf import settings
from django.db import models


class Notification(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    recipient = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name="notifications",
    )
    for_admins = models.BooleanField(default=False)

    title = models.CharField(max_length=255)
    body = models.TextField()
    order_id = models.UUIDField(null=True, blank=True, db_index=True)
    data = models.JSONField(default=dict, blank=True)

    read = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["recipient", "read"], name="notificatio_recipie_4d2b8a_idx"),
            models.Index(fields=["for_admins", "read"], name="notificatio_for_adm_7e1c3f_idx"),
        ]

    def __str__(self):
        return self.title
