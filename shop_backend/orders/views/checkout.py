# orders/views/checkout.py

"""
STOREFRONT CHECKOUT

POST /api/orders/checkout/

Signed-in users and guests both check out here. Guests must send a
guestEmail and get back a guestToken, which is the only way to see or act
on their order afterwards.

Security hardening:
- Throttle (public_write) because it's a write endpoint (abuse target)
"""

from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.parsers import JSONParser
from rest_framework.response import Response

from orders.serializers import CheckoutResponseSerializer, CheckoutSerializer
from orders.services import place_order
from orders.views.base import OrderAPIView, PublicWriteThrottle, build_notifier


class CheckoutView(OrderAPIView):
    parser_classes = [JSONParser]
    throttle_classes = [PublicWriteThrottle]

    @extend_schema(
        request=CheckoutSerializer,
        responses={
            201: CheckoutResponseSerializer,
            400: OpenApiResponse(description="Validation error / insufficient stock"),
            404: OpenApiResponse(description="Product not found"),
            429: OpenApiResponse(description="Rate limited"),
        },
        description="Create an order from the cart. Prices are taken from the catalogue.",
        tags=["Orders"],
    )
    def post(self, request):
        s = CheckoutSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        data = s.validated_data

        placed = place_order(
            actor=request.user,
            items=data["items"],
            guest_email=data.get("guestEmail"),
            guest_name=data.get("guestName"),
            address=data.get("address"),
            notifier=build_notifier(),
        )

        return Response(
            {"orderId": str(placed.order.id), "guestToken": placed.guest_token},
            status=status.HTTP_201_CREATED,
        )
