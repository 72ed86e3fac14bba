# orders/admin.py

from django.contrib import admin

from orders.models import Order, OrderItem, Reimbursement


# ======================================================
# ORDER ADMIN
# ======================================================


class OrderItemInline(admin.TabularInline):
    model = OrderItem
    extra = 0
    can_delete = False
    readonly_fields = (
        "product",
        "product_ref",
        "name",
        "category",
        "brand",
        "quantity",
        "price",
        "dmc",
    )
    exclude = ("description", "selected_image", "position")

    def has_add_permission(self, request, obj=None):
        return False


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    """
    Read-mostly: lifecycle changes go through the API so the
    transition rules and stock restoration always apply.
    """

    list_display = (
        "id",
        "customer_name",
        "amount",
        "delivery_status",
        "payment_claimed",
        "payment_confirmed",
        "cancelled",
        "reimbursed",
        "create_date",
    )
    list_filter = ("delivery_status", "payment_confirmed", "cancelled", "reimbursed")
    search_fields = ("id", "guest_email", "guest_name", "user__email", "payment_intent_id")
    readonly_fields = [f.name for f in Order._meta.fields]
    inlines = [OrderItemInline]

    def has_add_permission(self, request):
        return False


# ======================================================
# REIMBURSEMENT ADMIN
# ======================================================


@admin.register(Reimbursement)
class ReimbursementAdmin(admin.ModelAdmin):
    list_display = ("amount", "confirmed_by", "created_at")
    readonly_fields = ("amount", "confirmed_by", "created_at")

    def has_add_permission(self, request):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
