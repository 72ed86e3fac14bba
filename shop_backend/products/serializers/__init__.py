# products/serializers/__init__.py

from .category import CategorySerializer
from .product import ProductImageSerializer, ProductSerializer, RestockSerializer

__all__ = [
    "CategorySerializer",
    "ProductSerializer",
    "ProductImageSerializer",
    "RestockSerializer",
]
