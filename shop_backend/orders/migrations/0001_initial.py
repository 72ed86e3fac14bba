import uuid
from decimal import Decimal

import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models

import orders.models.order


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
        ("products", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Order",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("guest_email", models.EmailField(blank=True, default="", max_length=254)),
                ("guest_name", models.CharField(blank=True, default="", max_length=255)),
                ("guest_token", models.CharField(blank=True, db_index=True, max_length=64, null=True)),
                ("guest_fcm_token", models.TextField(blank=True, null=True)),
                ("amount", models.DecimalField(decimal_places=2, max_digits=12)),
                ("total_dmc", models.DecimalField(blank=True, decimal_places=2, max_digits=12, null=True)),
                ("spf", models.DecimalField(blank=True, decimal_places=2, max_digits=12, null=True)),
                ("currency", models.CharField(default=orders.models.order.default_currency, max_length=8)),
                ("address", models.JSONField(blank=True, null=True)),
                ("create_date", models.DateTimeField(db_index=True, default=django.utils.timezone.now)),
                ("payment_intent_id", models.CharField(max_length=128, unique=True)),
                ("payment_claimed", models.BooleanField(default=False)),
                ("payment_confirmed", models.BooleanField(default=False)),
                ("payment_confirmed_at", models.DateTimeField(blank=True, null=True)),
                (
                    "delivery_status",
                    models.CharField(
                        choices=[
                            ("pending", "Pending"),
                            ("dispatched", "Dispatched"),
                            ("delivered", "Delivered"),
                            ("cancelled", "Cancelled"),
                        ],
                        default="pending",
                        max_length=16,
                    ),
                ),
                ("admin_confirmed_availability", models.BooleanField(default=False)),
                ("admin_confirmed_availability_at", models.DateTimeField(blank=True, null=True)),
                ("user_confirmed_delivery", models.BooleanField(default=False)),
                ("user_confirmed_delivery_at", models.DateTimeField(blank=True, null=True)),
                ("cancelled", models.BooleanField(default=False)),
                ("cancelled_at", models.DateTimeField(blank=True, null=True)),
                ("refund_amount", models.DecimalField(blank=True, decimal_places=2, max_digits=12, null=True)),
                ("reimbursed", models.BooleanField(default=False)),
                ("reimbursed_at", models.DateTimeField(blank=True, null=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "user",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="orders",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "ordering": ["-create_date"],
                "indexes": [
                    models.Index(fields=["delivery_status"], name="orders_orde_deliver_2b4e1a_idx"),
                    models.Index(fields=["payment_confirmed", "reimbursed"], name="orders_orde_payment_8d3c5f_idx"),
                    models.Index(fields=["user", "create_date"], name="orders_orde_user_id_6a9e02_idx"),
                ],
            },
        ),
        migrations.CreateModel(
            name="OrderItem",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("product_ref", models.CharField(max_length=64)),
                ("name", models.CharField(max_length=255)),
                ("description", models.TextField(blank=True, default="")),
                ("category", models.CharField(blank=True, default="", max_length=255)),
                ("brand", models.CharField(blank=True, default="", max_length=255)),
                ("selected_image", models.JSONField(blank=True, null=True)),
                ("quantity", models.PositiveIntegerField()),
                ("price", models.DecimalField(decimal_places=2, max_digits=12)),
                ("dmc", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=12)),
                ("position", models.PositiveIntegerField(default=0)),
                (
                    "order",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="items",
                        to="orders.order",
                    ),
                ),
                (
                    "product",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="order_items",
                        to="products.product",
                    ),
                ),
            ],
            options={
                "ordering": ["position", "id"],
            },
        ),
        migrations.CreateModel(
            name="Reimbursement",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("amount", models.DecimalField(decimal_places=2, max_digits=12)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                (
                    "confirmed_by",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="reimbursements",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "ordering": ["-created_at"],
            },
        ),
    ]
