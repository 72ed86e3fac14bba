# products/serializers/product.py

"""
PRODUCT SERIALIZER

Purpose:
- Canonical Product serializer for both admin and public catalogue.
- in_stock is always derived from remaining_stock (read-only).
- Images are written as a whole list; order in the payload is display order.
"""

from django.db import transaction
from rest_framework import serializers

from products.models import Category, Product, ProductImage


class ProductImageSerializer(serializers.ModelSerializer):
    class Meta:
        model = ProductImage
        fields = ["image", "color", "color_code"]


class ProductSerializer(serializers.ModelSerializer):
    """
    GUARANTEES:
    - remaining_stock <= stock on every write
    - in_stock never accepted from the client
    - effective_price = max(price - discount, 0)
    """

    category = serializers.PrimaryKeyRelatedField(
        queryset=Category.objects.all(),
        required=False,
        allow_null=True,
    )
    category_name = serializers.CharField(source="category.name", read_only=True, default=None)

    images = ProductImageSerializer(many=True, required=False)
    effective_price = serializers.DecimalField(max_digits=12, decimal_places=2, read_only=True)

    remaining_stock = serializers.IntegerField(min_value=0, required=False)

    class Meta:
        model = Product
        fields = [
            "id",
            "name",
            "description",
            "brand",
            "category",
            "category_name",
            "price",
            "discount",
            "effective_price",
            "dmc",
            "stock",
            "remaining_stock",
            "in_stock",
            "is_visible",
            "images",
            "created_at",
            "updated_at",
        ]
        read_only_fields = [
            "id",
            "category_name",
            "effective_price",
            "in_stock",
            "created_at",
            "updated_at",
        ]

    def validate_name(self, value):
        value = (value or "").strip()
        if not value:
            raise serializers.ValidationError("name is required")
        return value

    def validate_price(self, value):
        if value is None or value < 0:
            raise serializers.ValidationError("Price must be non-negative")
        return value

    def validate_discount(self, value):
        if value is not None and value < 0:
            raise serializers.ValidationError("Discount cannot be negative")
        return value

    def validate_dmc(self, value):
        if value is not None and value < 0:
            raise serializers.ValidationError("DMC cannot be negative")
        return value

    def validate(self, attrs):
        instance = self.instance

        if instance is not None and "stock" not in attrs and "remaining_stock" not in attrs:
            return attrs

        stock = attrs.get("stock", getattr(instance, "stock", 0))
        if "remaining_stock" in attrs:
            remaining = attrs["remaining_stock"]
        elif instance is None:
            # everything received is sellable
            remaining = stock
        else:
            remaining = min(instance.remaining_stock, stock)

        if remaining > stock:
            raise serializers.ValidationError(
                {"remaining_stock": "remaining_stock cannot exceed stock"}
            )

        attrs["remaining_stock"] = remaining
        return attrs

    def _write_images(self, product, images):
        product.images.all().delete()
        ProductImage.objects.bulk_create(
            [
                ProductImage(product=product, position=i, **img)
                for i, img in enumerate(images)
            ]
        )

    @transaction.atomic
    def create(self, validated_data):
        images = validated_data.pop("images", [])
        product = Product.objects.create(**validated_data)
        self._write_images(product, images)
        return product

    @transaction.atomic
    def update(self, instance, validated_data):
        images = validated_data.pop("images", None)
        instance = super().update(instance, validated_data)
        if images is not None:
            self._write_images(instance, images)
        return instance


class RestockSerializer(serializers.Serializer):
    quantity = serializers.IntegerField(min_value=1)
