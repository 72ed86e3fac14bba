# storefront/views.py

"""
SETTINGS API

Public:
- GET  /api/settings/

Admin (settings.edit):
- PUT  /api/settings/                 bank details + hostels
- PUT  /api/settings/spf/
- PUT  /api/settings/delivery-time/
- PUT  /api/settings/whatsapp/
- PUT  /api/settings/banner/
"""

from django.core.exceptions import ValidationError as DjangoValidationError
from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from permissions.roles import CAP_SETTINGS_EDIT, HasCapability
from storefront.serializers import (
    BankDetailsSerializer,
    BannerSerializer,
    DeliveryTimeSerializer,
    SiteSettingsSerializer,
    SpfSerializer,
    WhatsAppSerializer,
)
from storefront.services import settings_store


def error_response(*, code: str, message: str, http_status: int):
    return Response(
        {"error": {"code": code, "message": message}},
        status=http_status,
    )


class _AdminSettingsView(APIView):
    """Writes require settings.edit; any GET is public."""

    required_capability = CAP_SETTINGS_EDIT

    def get_permissions(self):
        if self.request.method == "GET":
            return [AllowAny()]
        return [IsAuthenticated(), HasCapability()]

    def _apply(self, fn, **kwargs):
        try:
            row = fn(**kwargs)
        except DjangoValidationError as exc:
            return error_response(
                code="validation_error",
                message=" ".join(exc.messages),
                http_status=status.HTTP_400_BAD_REQUEST,
            )
        return Response(SiteSettingsSerializer(row).data, status=status.HTTP_200_OK)


class SettingsView(_AdminSettingsView):
    serializer_class = SiteSettingsSerializer

    @extend_schema(responses={200: SiteSettingsSerializer}, description="Current shop settings")
    def get(self, request):
        return Response(SiteSettingsSerializer(settings_store.get_settings()).data)

    @extend_schema(
        request=BankDetailsSerializer,
        responses={200: SiteSettingsSerializer, 400: OpenApiResponse(description="Invalid input")},
        description="Update bank details and the hostel list",
    )
    def put(self, request):
        s = BankDetailsSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        return self._apply(settings_store.set_bank_details, **s.to_service_kwargs())


class SpfView(_AdminSettingsView):
    serializer_class = SpfSerializer

    @extend_schema(request=SpfSerializer, responses={200: SiteSettingsSerializer})
    def put(self, request):
        s = SpfSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        return self._apply(settings_store.set_spf, spf=s.validated_data["spf"])


class DeliveryTimeView(_AdminSettingsView):
    serializer_class = DeliveryTimeSerializer

    @extend_schema(request=DeliveryTimeSerializer, responses={200: SiteSettingsSerializer})
    def put(self, request):
        s = DeliveryTimeSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        return self._apply(
            settings_store.set_delivery_time,
            next_delivery_time=s.validated_data.get("nextDeliveryTime"),
            enabled=s.validated_data.get("nextDeliveryEnabled"),
        )


class WhatsAppView(_AdminSettingsView):
    serializer_class = WhatsAppSerializer

    @extend_schema(request=WhatsAppSerializer, responses={200: SiteSettingsSerializer})
    def put(self, request):
        s = WhatsAppSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        return self._apply(
            settings_store.set_whatsapp_number,
            number=s.validated_data["whatsappNumber"],
        )


class BannerView(_AdminSettingsView):
    serializer_class = BannerSerializer

    @extend_schema(request=BannerSerializer, responses={200: SiteSettingsSerializer})
    def put(self, request):
        s = BannerSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        data = s.validated_data
        return self._apply(
            settings_store.set_banner,
            title=data["bannerTitle"],
            subtitle=data["bannerSubtitle"],
            discount=data["bannerDiscount"],
            image=data.get("bannerImage"),
            colors=data.get("bannerColors"),
            visible=data.get("bannerVisible"),
        )
