# orders/views/manage.py

"""
ADMIN ORDER ACTIONS (orders.manage)

- PUT /api/orders/<id>/confirm-availability/   {confirmed?}
- PUT /api/orders/<id>/confirm-payment/
- PUT /api/orders/<id>/dispatch/
- PUT /api/orders/<id>/deliver/                requires the customer's confirmation
- PUT /api/orders/<id>/cancel/
- PUT /api/orders/delivery-status/             {id, deliveryStatus}
"""

from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework.response import Response

from orders.serializers import (
    CancelResponseSerializer,
    ConfirmFlagSerializer,
    DeliveryStatusSerializer,
    OrderSerializer,
)
from orders.views.base import OrderAPIView
from permissions.roles import CAP_ORDERS_MANAGE

STATE_ERRORS = {
    400: OpenApiResponse(description="Order state does not allow this"),
    401: OpenApiResponse(description="Not signed in"),
    403: OpenApiResponse(description="Missing orders.manage"),
    404: OpenApiResponse(description="Order not found"),
}


class ConfirmAvailabilityView(OrderAPIView):
    required_capability = CAP_ORDERS_MANAGE

    @extend_schema(request=ConfirmFlagSerializer, responses={200: OrderSerializer, **STATE_ERRORS}, tags=["Orders admin"])
    def put(self, request, pk):
        s = ConfirmFlagSerializer(data=request.data)
        s.is_valid(raise_exception=True)

        order = self.transitions().confirm_availability(
            pk, request.user, confirmed=s.validated_data["confirmed"]
        )
        return Response(OrderSerializer(order).data)


class ConfirmPaymentView(OrderAPIView):
    required_capability = CAP_ORDERS_MANAGE

    @extend_schema(request=None, responses={200: OrderSerializer, **STATE_ERRORS}, tags=["Orders admin"])
    def put(self, request, pk):
        order = self.transitions().confirm_payment(pk, request.user)
        return Response(OrderSerializer(order).data)


class DispatchView(OrderAPIView):
    required_capability = CAP_ORDERS_MANAGE

    @extend_schema(request=None, responses={200: OrderSerializer, **STATE_ERRORS}, tags=["Orders admin"])
    def put(self, request, pk):
        order = self.transitions().dispatch(pk, request.user)
        return Response(OrderSerializer(order).data)


class DeliverView(OrderAPIView):
    required_capability = CAP_ORDERS_MANAGE

    @extend_schema(request=None, responses={200: OrderSerializer, **STATE_ERRORS}, tags=["Orders admin"])
    def put(self, request, pk):
        order = self.transitions().deliver(pk, request.user)
        return Response(OrderSerializer(order).data)


class CancelView(OrderAPIView):
    required_capability = CAP_ORDERS_MANAGE

    @extend_schema(request=None, responses={200: CancelResponseSerializer, **STATE_ERRORS}, tags=["Orders admin"])
    def put(self, request, pk):
        order = self.transitions().cancel(pk, request.user)
        return Response(
            CancelResponseSerializer(
                {
                    "success": True,
                    "message": "Order cancelled successfully",
                    "refundAmount": order.refund_amount,
                }
            ).data
        )


class DeliveryStatusView(OrderAPIView):
    """Generic status update; dispatched / delivered / cancelled only."""

    required_capability = CAP_ORDERS_MANAGE

    @extend_schema(request=DeliveryStatusSerializer, responses={200: OrderSerializer, **STATE_ERRORS}, tags=["Orders admin"])
    def put(self, request):
        s = DeliveryStatusSerializer(data=request.data)
        s.is_valid(raise_exception=True)

        order = self.transitions().update_delivery_status(
            s.validated_data["id"],
            request.user,
            s.validated_data["deliveryStatus"],
        )
        return Response(OrderSerializer(order).data)
