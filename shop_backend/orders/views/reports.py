# orders/views/reports.py

"""
DASHBOARD REPORTS (reports.view: admin + manager)

GET /api/orders/reports/summary/
GET /api/orders/reports/revenue/?range=7days|30days|3months|year
GET /api/orders/reports/order-status/
GET /api/orders/reports/product-performance/
GET /api/orders/reports/user-growth/
GET /api/orders/reports/locations/

Views only fetch rows and pass snapshots to orders.services.reporting.
"""

from datetime import datetime, time, timedelta

from django.contrib.auth import get_user_model
from django.utils import timezone
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework.response import Response

from orders.models import Order
from orders.services import reporting, total_reimbursed
from orders.views.base import OrderAPIView
from permissions.roles import CAP_REPORTS_VIEW
from products.models import Product
from storefront.services.settings_store import current_spf

RANGE_PARAM = OpenApiParameter(
    name="range",
    type=str,
    location=OpenApiParameter.QUERY,
    required=False,
    enum=list(reporting.TIME_RANGES),
    description="Window for the revenue series (default 7days)",
)


def _window_start(today, days):
    return timezone.make_aware(datetime.combine(today - timedelta(days=days), time.min))


class _ReportView(OrderAPIView):
    required_capability = CAP_REPORTS_VIEW


class SummaryReportView(_ReportView):
    @extend_schema(request=None, responses={200: dict}, tags=["Reports"])
    def get(self, request):
        orders = reporting.snapshot_orders(Order.objects.all())
        User = get_user_model()
        return Response(
            reporting.summarize(
                orders,
                total_reimbursed=total_reimbursed(),
                current_spf=current_spf(),
                product_count=Product.objects.count(),
                user_count=User.objects.count(),
            )
        )


class RevenueReportView(_ReportView):
    @extend_schema(parameters=[RANGE_PARAM], request=None, responses={200: dict}, tags=["Reports"])
    def get(self, request):
        time_range = (request.query_params.get("range") or reporting.TIME_RANGE_7_DAYS).strip()
        today = timezone.localdate()
        # widest window (a year plus the current month) bounds the query
        orders = reporting.snapshot_orders(
            Order.objects.filter(create_date__gte=_window_start(today, 400))
        )
        return Response(reporting.revenue_series(orders, time_range, today))


class OrderStatusReportView(_ReportView):
    @extend_schema(request=None, responses={200: dict}, tags=["Reports"])
    def get(self, request):
        today = timezone.localdate()
        orders = reporting.snapshot_orders(
            Order.objects.filter(create_date__gte=_window_start(today, 31))
        )
        return Response(reporting.order_status_series(orders, today))


class ProductPerformanceReportView(_ReportView):
    @extend_schema(request=None, responses={200: dict}, tags=["Reports"])
    def get(self, request):
        orders = reporting.snapshot_orders(Order.objects.filter(payment_confirmed=True))
        return Response(reporting.product_performance(orders))


class UserGrowthReportView(_ReportView):
    @extend_schema(request=None, responses={200: dict}, tags=["Reports"])
    def get(self, request):
        today = timezone.localdate()
        User = get_user_model()
        users = reporting.snapshot_users(User.objects.filter(created_at__gte=_window_start(today, 31)))
        return Response(reporting.user_growth_series(users, today))


class LocationsReportView(_ReportView):
    @extend_schema(request=None, responses={200: dict}, tags=["Reports"])
    def get(self, request):
        orders = reporting.snapshot_orders(Order.objects.all())
        return Response(reporting.order_locations(orders))
