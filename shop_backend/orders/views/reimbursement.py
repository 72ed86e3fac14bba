# orders/views/reimbursement.py

from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework.response import Response

from orders.serializers import ReimbursementConfirmSerializer
from orders.services import confirm_reimbursement, total_reimbursed
from orders.views.base import OrderAPIView
from permissions.roles import CAP_REIMBURSEMENT_CONFIRM, CAP_REPORTS_VIEW


class ReimbursementConfirmView(OrderAPIView):
    """
    POST /api/orders/reimbursements/confirm/  {amount}

    Records the payout and settles every paid, unsettled order at once.
    """

    required_capability = CAP_REIMBURSEMENT_CONFIRM

    @extend_schema(
        request=ReimbursementConfirmSerializer,
        responses={200: dict, 400: OpenApiResponse(description="Invalid reimbursement amount")},
        tags=["Reimbursements"],
    )
    def post(self, request):
        s = ReimbursementConfirmSerializer(data=request.data)
        s.is_valid(raise_exception=True)

        _, marked, total = confirm_reimbursement(actor=request.user, amount=s.validated_data["amount"])

        return Response({"success": True, "totalReimbursed": total, "ordersMarked": marked})


class ReimbursementTotalView(OrderAPIView):
    required_capability = CAP_REPORTS_VIEW

    @extend_schema(request=None, responses={200: dict}, tags=["Reimbursements"])
    def get(self, request):
        return Response({"total": total_reimbursed()})
