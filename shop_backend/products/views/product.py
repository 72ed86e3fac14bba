# products/views/product.py

"""
PRODUCT VIEWSET

Purpose:
- Public catalogue browsing (AllowAny, visible products only)
- Admin product management (CRUD, visibility toggle, restock)

Stock rule alignment:
- in_stock is derived; the catalogue never computes stock itself.
- Restock goes through services.stock_ledger.receive_stock().
"""

import logging

from django.db.models import Q
from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response

from permissions.roles import CAP_CATALOG_EDIT, HasCapability, user_has_capability
from products.models import Product
from products.serializers import ProductSerializer, RestockSerializer
from products.services.stock_ledger import receive_stock

logger = logging.getLogger(__name__)


class ProductViewSet(viewsets.ModelViewSet):
    """
    Product endpoints.

    Public:
    - GET /api/products/?q=<search>&category=<uuid>&in_stock=true
    - GET /api/products/<id>/

    Admin (catalog.edit):
    - POST / PUT / PATCH / DELETE
    - POST /api/products/<id>/restock/ {"quantity": n}
    """

    serializer_class = ProductSerializer
    filterset_fields = ["category", "in_stock", "is_visible"]

    required_capability = CAP_CATALOG_EDIT

    def get_permissions(self):
        if self.action in {"list", "retrieve"}:
            return [AllowAny()]
        return [IsAuthenticated(), HasCapability()]

    def _can_edit(self) -> bool:
        return user_has_capability(self.request.user, CAP_CATALOG_EDIT)

    def get_queryset(self):
        qs = Product.objects.select_related("category").prefetch_related("images")

        # hidden products only exist for catalogue editors
        if not self._can_edit():
            qs = qs.filter(is_visible=True)

        q = (self.request.query_params.get("q") or "").strip()
        if q:
            qs = qs.filter(
                Q(name__icontains=q)
                | Q(brand__icontains=q)
                | Q(description__icontains=q)
                | Q(category__name__icontains=q)
            )

        return qs.order_by("-created_at")

    @extend_schema(
        parameters=[
            OpenApiParameter(
                name="q",
                type=str,
                location=OpenApiParameter.QUERY,
                required=False,
                description="Optional search query (name, brand, description, category).",
            ),
        ],
        description="Catalogue listing. Anonymous callers only see visible products.",
    )
    def list(self, request, *args, **kwargs):
        return super().list(request, *args, **kwargs)

    def perform_create(self, serializer):
        product = serializer.save()
        logger.info(
            "Product created",
            extra={"product_id": str(product.id), "actor_id": str(self.request.user.id)},
        )

    def perform_destroy(self, instance):
        logger.info(
            "Product deleted",
            extra={"product_id": str(instance.id), "actor_id": str(self.request.user.id)},
        )
        instance.delete()

    # -----------------------------
    # Restock (admin)
    # -----------------------------
    @extend_schema(
        request=RestockSerializer,
        responses={
            200: OpenApiResponse(response=ProductSerializer, description="Restocked product"),
            400: OpenApiResponse(description="Invalid quantity"),
        },
        description="Receive a delivery: stock and remaining_stock both grow by quantity.",
    )
    @action(detail=True, methods=["post"], url_path="restock")
    def restock(self, request, pk=None):
        product = self.get_object()

        serializer = RestockSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        product = receive_stock(
            product=product,
            quantity=serializer.validated_data["quantity"],
        )

        return Response(self.get_serializer(product).data, status=status.HTTP_200_OK)
