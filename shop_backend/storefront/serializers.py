# storefront/serializers.py

"""
Settings payloads use the storefront's camelCase keys.
"""

from rest_framework import serializers

from storefront.models import SiteSettings


# ---------------- OUTPUT ----------------
class SiteSettingsSerializer(serializers.ModelSerializer):
    bankName = serializers.CharField(source="bank_name")
    bankAccountNumber = serializers.CharField(source="bank_account_number")
    accountHolderName = serializers.CharField(source="account_holder_name")
    spf = serializers.DecimalField(max_digits=12, decimal_places=2, coerce_to_string=False)
    nextDeliveryTime = serializers.DateTimeField(source="next_delivery_time", allow_null=True)
    nextDeliveryEnabled = serializers.BooleanField(source="next_delivery_enabled")
    whatsappNumber = serializers.CharField(source="whatsapp_number", allow_null=True)
    bannerTitle = serializers.CharField(source="banner_title")
    bannerSubtitle = serializers.CharField(source="banner_subtitle")
    bannerDiscount = serializers.CharField(source="banner_discount")
    bannerImage = serializers.CharField(source="banner_image", allow_null=True)
    bannerColors = serializers.JSONField(source="banner_colors")
    bannerVisible = serializers.BooleanField(source="banner_visible")
    updatedAt = serializers.DateTimeField(source="updated_at", allow_null=True)

    class Meta:
        model = SiteSettings
        fields = [
            "id",
            "bankName",
            "bankAccountNumber",
            "accountHolderName",
            "hostels",
            "spf",
            "nextDeliveryTime",
            "nextDeliveryEnabled",
            "whatsappNumber",
            "bannerTitle",
            "bannerSubtitle",
            "bannerDiscount",
            "bannerImage",
            "bannerColors",
            "bannerVisible",
            "updatedAt",
        ]
        read_only_fields = fields


# ---------------- INPUT ----------------
class BankDetailsSerializer(serializers.Serializer):
    bankName = serializers.CharField(required=False, allow_blank=True, max_length=255)
    bankAccountNumber = serializers.CharField(required=False, allow_blank=True, max_length=64)
    accountHolderName = serializers.CharField(required=False, allow_blank=True, max_length=255)
    hostels = serializers.ListField(
        child=serializers.CharField(max_length=255),
        required=False,
    )

    def to_service_kwargs(self) -> dict:
        data = self.validated_data
        mapping = {
            "bankName": "bank_name",
            "bankAccountNumber": "bank_account_number",
            "accountHolderName": "account_holder_name",
            "hostels": "hostels",
        }
        return {mapping[k]: v for k, v in data.items()}


class SpfSerializer(serializers.Serializer):
    spf = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=0)


class DeliveryTimeSerializer(serializers.Serializer):
    nextDeliveryTime = serializers.DateTimeField(required=False)
    nextDeliveryEnabled = serializers.BooleanField(required=False)

    def validate(self, attrs):
        if "nextDeliveryTime" not in attrs and "nextDeliveryEnabled" not in attrs:
            raise serializers.ValidationError("Missing fields")
        return attrs


class WhatsAppSerializer(serializers.Serializer):
    whatsappNumber = serializers.CharField(max_length=32)


class BannerSerializer(serializers.Serializer):
    bannerTitle = serializers.CharField(max_length=255)
    bannerSubtitle = serializers.CharField(max_length=255)
    bannerDiscount = serializers.CharField(max_length=255)
    bannerImage = serializers.CharField(required=False, allow_null=True, allow_blank=True)
    bannerColors = serializers.ListField(child=serializers.CharField(max_length=32), required=False)
    bannerVisible = serializers.BooleanField(required=False)
