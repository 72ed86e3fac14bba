from django.db import migrations, models

import storefront.models.site_settings


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="SiteSettings",
            fields=[
                ("id", models.CharField(default="settings", editable=False, max_length=32, primary_key=True, serialize=False)),
                ("bank_name", models.CharField(blank=True, default="", max_length=255)),
                ("bank_account_number", models.CharField(blank=True, default="", max_length=64)),
                ("account_holder_name", models.CharField(blank=True, default="", max_length=255)),
                ("hostels", models.JSONField(blank=True, default=list)),
                (
                    "spf",
                    models.DecimalField(
                        decimal_places=2,
                        default=storefront.models.site_settings.default_spf,
                        max_digits=12,
                    ),
                ),
                ("next_delivery_time", models.DateTimeField(blank=True, null=True)),
                ("next_delivery_enabled", models.BooleanField(default=False)),
                ("whatsapp_number", models.CharField(blank=True, max_length=32, null=True)),
                ("banner_title", models.CharField(default="Summer Sale!", max_length=255)),
                ("banner_subtitle", models.CharField(default="Enjoy discounts on selected items", max_length=255)),
                ("banner_discount", models.CharField(default="GET 20% OFF", max_length=255)),
                ("banner_image", models.TextField(blank=True, null=True)),
                (
                    "banner_colors",
                    models.JSONField(
                        blank=True,
                        default=storefront.models.site_settings.default_banner_colors,
                    ),
                ),
                ("banner_visible", models.BooleanField(default=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "verbose_name": "site settings",
                "verbose_name_plural": "site settings",
            },
        ),
    ]
