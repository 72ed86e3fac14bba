# notifications/urls.py

from django.urls import path

from notifications.views import (
    BroadcastView,
    NotificationListView,
    NotificationReadAllView,
    NotificationReadView,
    NotificationStreamView,
    RegisterTokenView,
)

app_name = "notifications"

urlpatterns = [
    path("", NotificationListView.as_view(), name="list"),
    path("<uuid:pk>/read/", NotificationReadView.as_view(), name="read"),
    path("read-all/", NotificationReadAllView.as_view(), name="read-all"),
    path("register-token/", RegisterTokenView.as_view(), name="register-token"),
    path("stream/", NotificationStreamView.as_view(), name="stream"),
    path("send/", BroadcastView.as_view(), name="send"),
]
