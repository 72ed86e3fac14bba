# orders/urls.py

from django.urls import path

from orders import views

app_name = "orders"

urlpatterns = [
    path("", views.OrderListView.as_view(), name="list"),
    path("checkout/", views.CheckoutView.as_view(), name="checkout"),
    path("delivery-status/", views.DeliveryStatusView.as_view(), name="delivery-status"),

    # settlement
    path("reimbursements/confirm/", views.ReimbursementConfirmView.as_view(), name="reimbursement-confirm"),
    path("reimbursements/total/", views.ReimbursementTotalView.as_view(), name="reimbursement-total"),

    # dashboards
    path("reports/summary/", views.SummaryReportView.as_view(), name="report-summary"),
    path("reports/revenue/", views.RevenueReportView.as_view(), name="report-revenue"),
    path("reports/order-status/", views.OrderStatusReportView.as_view(), name="report-order-status"),
    path(
        "reports/product-performance/",
        views.ProductPerformanceReportView.as_view(),
        name="report-product-performance",
    ),
    path("reports/user-growth/", views.UserGrowthReportView.as_view(), name="report-user-growth"),
    path("reports/locations/", views.LocationsReportView.as_view(), name="report-locations"),

    # one order
    path("<str:pk>/", views.OrderDetailView.as_view(), name="detail"),
    path("<str:pk>/address/", views.OrderAddressView.as_view(), name="address"),
    path("<str:pk>/payment-claim/", views.PaymentClaimView.as_view(), name="payment-claim"),
    path(
        "<str:pk>/delivery-confirmation/",
        views.DeliveryConfirmationView.as_view(),
        name="delivery-confirmation",
    ),
    path("<str:pk>/guest-push-token/", views.GuestPushTokenView.as_view(), name="guest-push-token"),
    path(
        "<str:pk>/confirm-availability/",
        views.ConfirmAvailabilityView.as_view(),
        name="confirm-availability",
    ),
    path("<str:pk>/confirm-payment/", views.ConfirmPaymentView.as_view(), name="confirm-payment"),
    path("<str:pk>/dispatch/", views.DispatchView.as_view(), name="dispatch"),
    path("<str:pk>/deliver/", views.DeliverView.as_view(), name="deliver"),
    path("<str:pk>/cancel/", views.CancelView.as_view(), name="cancel"),
]
