from .category import Category
from .product import Product, ProductImage

__all__ = [
    "Category",
    "Product",
    "ProductImage",
]
