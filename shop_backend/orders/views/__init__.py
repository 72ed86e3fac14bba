from .checkout import CheckoutView
from .manage import (
    CancelView,
    ConfirmAvailabilityView,
    ConfirmPaymentView,
    DeliverView,
    DeliveryStatusView,
    DispatchView,
)
from .order import (
    DeliveryConfirmationView,
    GuestPushTokenView,
    OrderAddressView,
    OrderDetailView,
    OrderListView,
    PaymentClaimView,
)
from .reimbursement import ReimbursementConfirmView, ReimbursementTotalView
from .reports import (
    LocationsReportView,
    OrderStatusReportView,
    ProductPerformanceReportView,
    RevenueReportView,
    SummaryReportView,
    UserGrowthReportView,
)

__all__ = [
    "CancelView",
    "CheckoutView",
    "ConfirmAvailabilityView",
    "ConfirmPaymentView",
    "DeliverView",
    "DeliveryConfirmationView",
    "DeliveryStatusView",
    "DispatchView",
    "GuestPushTokenView",
    "LocationsReportView",
    "OrderAddressView",
    "OrderDetailView",
    "OrderListView",
    "OrderStatusReportView",
    "PaymentClaimView",
    "ProductPerformanceReportView",
    "ReimbursementConfirmView",
    "ReimbursementTotalView",
    "RevenueReportView",
    "SummaryReportView",
    "UserGrowthReportView",
]
