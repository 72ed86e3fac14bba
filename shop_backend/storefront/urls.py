# storefront/urls.py

from django.urls import path

from storefront.views import (
    BannerView,
    DeliveryTimeView,
    SettingsView,
    SpfView,
    WhatsAppView,
)

app_name = "storefront"

urlpatterns = [
    path("", SettingsView.as_view(), name="settings"),
    path("spf/", SpfView.as_view(), name="settings-spf"),
    path("delivery-time/", DeliveryTimeView.as_view(), name="settings-delivery-time"),
    path("whatsapp/", WhatsAppView.as_view(), name="settings-whatsapp"),
    path("banner/", BannerView.as_view(), name="settings-banner"),
]
