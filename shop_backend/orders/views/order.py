# orders/views/order.py

"""
ORDER READS + CUSTOMER ACTIONS

Authenticated:
- GET    /api/orders/                          staff: every order, users: their own

Owner or guest (guestToken in body or query):
- GET    /api/orders/<id>/
- DELETE /api/orders/<id>/                     pending orders only; stock restored
- PUT    /api/orders/<id>/address/
- PUT    /api/orders/<id>/payment-claim/       {claimed}
- PUT    /api/orders/<id>/delivery-confirmation/   {confirmed}
- POST   /api/orders/<id>/guest-push-token/    {guestToken, token}
"""

from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema
from rest_framework import generics, status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from orders.serializers import (
    AddressSerializer,
    DeliveryConfirmationSerializer,
    GuestPushTokenSerializer,
    OrderSerializer,
    PaymentClaimSerializer,
)
from orders.services.queries import get_order, visible_orders
from orders.views.base import OrderAPIView, PublicPollThrottle, guest_token_from

GUEST_TOKEN_PARAM = OpenApiParameter(
    name="guestToken",
    type=str,
    location=OpenApiParameter.QUERY,
    required=False,
    description="Capability token returned to guests at checkout",
)


class OrderListView(generics.ListAPIView):
    serializer_class = OrderSerializer
    permission_classes = [IsAuthenticated]
    filterset_fields = ["delivery_status", "payment_confirmed", "cancelled", "reimbursed"]

    def get_queryset(self):
        return visible_orders(self.request.user).order_by("-create_date")


class OrderDetailView(OrderAPIView):
    requires_identity = True
    throttle_classes = [PublicPollThrottle]

    @extend_schema(
        parameters=[GUEST_TOKEN_PARAM],
        responses={200: OrderSerializer, 401: OpenApiResponse(description="No identity"),
                   403: OpenApiResponse(description="Not your order"), 404: OpenApiResponse(description="Not found")},
        tags=["Orders"],
    )
    def get(self, request, pk):
        order = get_order(pk, request.user, guest_token_from(request))
        return Response(OrderSerializer(order).data)

    @extend_schema(
        parameters=[GUEST_TOKEN_PARAM],
        request=None,
        responses={204: None, 400: OpenApiResponse(description="Only pending orders can be deleted")},
        tags=["Orders"],
    )
    def delete(self, request, pk):
        self.transitions().delete_pending(pk, request.user, guest_token=guest_token_from(request, request.data))
        return Response(status=status.HTTP_204_NO_CONTENT)


class OrderAddressView(OrderAPIView):
    requires_identity = True

    @extend_schema(request=AddressSerializer, responses={200: OrderSerializer}, tags=["Orders"])
    def put(self, request, pk):
        s = AddressSerializer(data=request.data)
        s.is_valid(raise_exception=True)

        order = self.transitions().update_address(
            pk,
            request.user,
            s.validated_data["address"],
            guest_token=guest_token_from(request, s.validated_data),
        )
        return Response(OrderSerializer(order).data)


class PaymentClaimView(OrderAPIView):
    requires_identity = True

    @extend_schema(request=PaymentClaimSerializer, responses={200: OrderSerializer}, tags=["Orders"])
    def put(self, request, pk):
        s = PaymentClaimSerializer(data=request.data)
        s.is_valid(raise_exception=True)

        order = self.transitions().set_payment_claim(
            pk,
            request.user,
            claimed=s.validated_data["claimed"],
            guest_token=guest_token_from(request, s.validated_data),
        )
        return Response(OrderSerializer(order).data)


class DeliveryConfirmationView(OrderAPIView):
    requires_identity = True

    @extend_schema(request=DeliveryConfirmationSerializer, responses={200: OrderSerializer}, tags=["Orders"])
    def put(self, request, pk):
        s = DeliveryConfirmationSerializer(data=request.data)
        s.is_valid(raise_exception=True)

        order = self.transitions().set_delivery_confirmation(
            pk,
            request.user,
            confirmed=s.validated_data["confirmed"],
            guest_token=guest_token_from(request, s.validated_data),
        )
        return Response(OrderSerializer(order).data)


class GuestPushTokenView(OrderAPIView):
    requires_identity = True

    @extend_schema(request=GuestPushTokenSerializer, responses={200: dict}, tags=["Orders"])
    def post(self, request, pk):
        s = GuestPushTokenSerializer(data=request.data)
        s.is_valid(raise_exception=True)

        self.transitions().attach_guest_push_token(
            pk,
            s.validated_data["guestToken"],
            s.validated_data.get("token"),
        )
        return Response({"success": True})
