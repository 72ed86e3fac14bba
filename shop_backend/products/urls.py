# products/urls.py

"""
PRODUCTS URLS

Mounted under /api/products/:
    /api/products/                    (catalogue; admin writes)
    /api/products/<id>/restock/       (admin)
    /api/products/categories/         (public read; admin writes)
"""

from django.urls import include, path
from rest_framework.routers import SimpleRouter

from products.views import CategoryViewSet, ProductViewSet

router = SimpleRouter()

router.register(r"categories", CategoryViewSet, basename="categories")
router.register(r"", ProductViewSet, basename="products")

urlpatterns = [
    path("", include(router.urls)),
]
