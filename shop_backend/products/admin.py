# products/admin.py
"""
Catalogue admin.

- in_stock is derived (read-only); Product.save() keeps it in sync.
- Images are edited inline, in display order.
"""

from __future__ import annotations

from django.contrib import admin

from products.models import Category, Product, ProductImage


@admin.register(Category)
class CategoryAdmin(admin.ModelAdmin):
    list_display = ("name", "created_at")
    search_fields = ("name",)
    ordering = ("name",)


class ProductImageInline(admin.TabularInline):
    model = ProductImage
    extra = 1
    fields = ("position", "image", "color", "color_code")
    ordering = ("position",)


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    list_display = (
        "name",
        "category",
        "price",
        "discount",
        "dmc",
        "stock",
        "remaining_stock",
        "in_stock",
        "is_visible",
        "created_at",
    )
    list_filter = ("is_visible", "in_stock", "category", "created_at")
    search_fields = ("name", "brand")
    ordering = ("-created_at",)
    readonly_fields = ("in_stock", "created_at", "updated_at")

    inlines = [ProductImageInline]
