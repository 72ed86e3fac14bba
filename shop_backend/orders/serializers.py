# orders/serializers.py

"""
Order API contracts (camelCase, shared with the storefront client).

Input serializers only shape and type-check the payload; business rules
live in orders.services.
"""

from rest_framework import serializers

from orders.models import Order, OrderItem


def _money(**kwargs):
    return serializers.DecimalField(max_digits=12, decimal_places=2, coerce_to_string=False, **kwargs)


# =========================================================
# READ
# =========================================================

class OrderItemSerializer(serializers.ModelSerializer):
    id = serializers.CharField(source="product_ref", read_only=True)
    selectedImg = serializers.JSONField(source="selected_image", read_only=True)
    price = _money(read_only=True)
    dmc = _money(read_only=True)

    class Meta:
        model = OrderItem
        fields = [
            "id",
            "name",
            "description",
            "category",
            "brand",
            "selectedImg",
            "quantity",
            "price",
            "dmc",
        ]
        read_only_fields = fields


class OrderSerializer(serializers.ModelSerializer):
    userId = serializers.UUIDField(source="user_id", read_only=True, allow_null=True)
    customerName = serializers.CharField(source="customer_name", read_only=True)
    guestEmail = serializers.CharField(source="guest_email", read_only=True)
    guestName = serializers.CharField(source="guest_name", read_only=True)

    amount = _money(read_only=True)
    totalDmc = _money(source="total_dmc", read_only=True, allow_null=True)
    spf = _money(read_only=True, allow_null=True)

    createDate = serializers.DateTimeField(source="create_date", read_only=True)
    paymentIntentId = serializers.CharField(source="payment_intent_id", read_only=True)

    paymentClaimed = serializers.BooleanField(source="payment_claimed", read_only=True)
    paymentConfirmed = serializers.BooleanField(source="payment_confirmed", read_only=True)
    paymentConfirmedAt = serializers.DateTimeField(source="payment_confirmed_at", read_only=True)
    paymentStatus = serializers.CharField(source="payment_status", read_only=True)

    deliveryStatus = serializers.CharField(source="delivery_status", read_only=True)
    adminConfirmedAvailability = serializers.BooleanField(
        source="admin_confirmed_availability", read_only=True
    )
    adminConfirmedAvailabilityAt = serializers.DateTimeField(
        source="admin_confirmed_availability_at", read_only=True
    )
    userConfirmedDelivery = serializers.BooleanField(source="user_confirmed_delivery", read_only=True)
    userConfirmedDeliveryAt = serializers.DateTimeField(
        source="user_confirmed_delivery_at", read_only=True
    )

    cancelledAt = serializers.DateTimeField(source="cancelled_at", read_only=True)
    refundAmount = _money(source="refund_amount", read_only=True, allow_null=True)
    reimbursedAt = serializers.DateTimeField(source="reimbursed_at", read_only=True)
    updatedAt = serializers.DateTimeField(source="updated_at", read_only=True)

    products = OrderItemSerializer(source="items", many=True, read_only=True)

    class Meta:
        model = Order
        fields = [
            "id",
            "userId",
            "customerName",
            "guestEmail",
            "guestName",
            "amount",
            "totalDmc",
            "spf",
            "currency",
            "address",
            "createDate",
            "paymentIntentId",
            "paymentClaimed",
            "paymentConfirmed",
            "paymentConfirmedAt",
            "paymentStatus",
            "deliveryStatus",
            "adminConfirmedAvailability",
            "adminConfirmedAvailabilityAt",
            "userConfirmedDelivery",
            "userConfirmedDeliveryAt",
            "cancelled",
            "cancelledAt",
            "refundAmount",
            "reimbursed",
            "reimbursedAt",
            "updatedAt",
            "products",
        ]
        read_only_fields = fields


# =========================================================
# WRITE
# =========================================================

class CheckoutItemSerializer(serializers.Serializer):
    """
    One cart line. name/price/dmc are accepted for compatibility with the
    storefront cart but pricing is always re-read from the catalogue.
    """

    id = serializers.CharField()
    quantity = serializers.IntegerField(min_value=1)
    name = serializers.CharField(required=False, allow_blank=True)
    price = serializers.DecimalField(max_digits=12, decimal_places=2, required=False)
    dmc = serializers.DecimalField(max_digits=12, decimal_places=2, required=False)
    selectedImg = serializers.JSONField(required=False, allow_null=True)


class CheckoutSerializer(serializers.Serializer):
    items = CheckoutItemSerializer(many=True, allow_empty=False)
    guestEmail = serializers.EmailField(required=False, allow_blank=True, allow_null=True)
    guestName = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    address = serializers.JSONField(required=False, allow_null=True)


class CheckoutResponseSerializer(serializers.Serializer):
    orderId = serializers.UUIDField()
    guestToken = serializers.CharField(allow_null=True)


class GuestTokenSerializer(serializers.Serializer):
    guestToken = serializers.CharField(required=False, allow_blank=True, allow_null=True)


class ConfirmFlagSerializer(serializers.Serializer):
    confirmed = serializers.BooleanField(default=True)


class PaymentClaimSerializer(GuestTokenSerializer):
    claimed = serializers.BooleanField(default=True)


class DeliveryConfirmationSerializer(GuestTokenSerializer):
    confirmed = serializers.BooleanField()


class AddressSerializer(GuestTokenSerializer):
    address = serializers.JSONField()


class GuestPushTokenSerializer(serializers.Serializer):
    guestToken = serializers.CharField()
    token = serializers.CharField(allow_null=True, allow_blank=True)


class DeliveryStatusSerializer(serializers.Serializer):
    id = serializers.CharField()
    deliveryStatus = serializers.ChoiceField(choices=[c[0] for c in Order.DELIVERY_STATUS_CHOICES])


class CancelResponseSerializer(serializers.Serializer):
    success = serializers.BooleanField()
    message = serializers.CharField()
    refundAmount = _money()


class ReimbursementConfirmSerializer(serializers.Serializer):
    amount = serializers.DecimalField(max_digits=12, decimal_places=2)
