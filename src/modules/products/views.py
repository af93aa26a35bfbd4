"""Product API views.

Exposes the ``ProductService`` via HTTP using a DRF ViewSet.

- ``list`` / ``retrieve`` are public: they run with no authenticators at
  all, so an ``Authorization`` header on them is ignored.
- ``create`` / ``update`` / ``destroy`` require a bearer token; DRF
  authenticates before the handler runs, so a rejected credential never
  reaches the store.

Every handler funnels its failures through the error translator
(``modules.core.exception_handler``).  DRF's own exceptions (parse
errors, unsupported media type) go through the same translator via the
``EXCEPTION_HANDLER`` setting.
"""

from __future__ import annotations

import functools
import time
from typing import Callable

import structlog
from rest_framework import status
from rest_framework.exceptions import APIException
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet

from modules.core.authentication import BearerTokenAuthentication
from modules.core.exception_handler import to_response
from modules.products.models import Product
from modules.products.repositories.django_repository import ProductDjangoRepository
from modules.products.serializers import ProductSerializer
from modules.products.services import ProductService
from modules.products.validation import parse_create_payload, parse_update_payload

logger = structlog.get_logger(__name__)

PUBLIC_ACTIONS = frozenset({"list", "retrieve"})


def translate_failures(failure_message: str) -> Callable:
    """Report every failure of the wrapped handler through the translator.

    ``failure_message`` is what clients see for unclassified failures.
    """

    def decorator(handler: Callable) -> Callable:
        @functools.wraps(handler)
        def wrapper(self, request: Request, *args, **kwargs) -> Response:
            try:
                return handler(self, request, *args, **kwargs)
            except APIException:
                raise
            except Exception as exc:
                return to_response(exc, failure_message=failure_message)

        return wrapper

    return decorator


class ProductViewSet(GenericViewSet):
    """ViewSet for Product CRUD operations.

    Uses ``ProductService`` with the repository named by
    ``repository_class`` (DIP).  All ORM access goes through the
    service/repository layer.
    """

    queryset = Product.objects.all()  # schema introspection only
    serializer_class = ProductSerializer
    lookup_value_regex = "[^/]+"
    authentication_classes = [BearerTokenAuthentication]
    throttle_classes: list = []
    repository_class = ProductDjangoRepository

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = ProductService(repository=self.repository_class())

    # ------------------------------------------------------------------
    # Authentication gate
    # ------------------------------------------------------------------

    def initialize_request(self, request, *args, **kwargs):
        # authenticators are built before DRF resolves ``self.action``
        request = super().initialize_request(request, *args, **kwargs)
        if self.action in PUBLIC_ACTIONS:
            request.authenticators = ()
        return request

    def get_authenticators(self):
        # action is preset only when drf-spectacular inspects the view
        if getattr(self, "action", None) in PUBLIC_ACTIONS:
            return []
        return super().get_authenticators()

    def get_permissions(self):
        if self.action in PUBLIC_ACTIONS:
            return [AllowAny()]
        return [IsAuthenticated()]

    # ------------------------------------------------------------------
    # List / Retrieve
    # ------------------------------------------------------------------

    @translate_failures("Failed to fetch products.")
    def list(self, request: Request) -> Response:
        """GET /api/products"""
        start = time.monotonic()
        products = self._service.list_products()
        logger.info(
            "product.listed",
            count=len(products),
            duration_ms=round((time.monotonic() - start) * 1000, 2),
        )
        data = ProductSerializer(products, many=True).data
        return Response({"success": True, "count": len(data), "data": data})

    @translate_failures("Failed to fetch product.")
    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/products/{pk}"""
        product = self._service.get_product(pk)
        return Response({"success": True, "data": ProductSerializer(product).data})

    # ------------------------------------------------------------------
    # Create / Update / Destroy
    # ------------------------------------------------------------------

    @translate_failures("Failed to create product.")
    def create(self, request: Request) -> Response:
        """POST /api/products"""
        logger.info("product.create_requested", user=request.user.email)
        dto = parse_create_payload(request.data)
        product = self._service.create_product(dto)
        return Response(
            {
                "success": True,
                "message": "Product created successfully.",
                "data": ProductSerializer(product).data,
            },
            status=status.HTTP_201_CREATED,
        )

    @translate_failures("Failed to update product.")
    def update(self, request: Request, pk: str | None = None) -> Response:
        """PUT /api/products/{pk}"""
        logger.info("product.update_requested", product_id=pk, user=request.user.email)
        product = self._service.get_product(pk)
        dto = parse_update_payload(request.data)
        result = self._service.apply_update(product, dto)
        return Response(
            {
                "success": True,
                "message": "Product updated successfully.",
                "updatedFields": result.updated_fields,
                "data": ProductSerializer(result.product).data,
            }
        )

    @translate_failures("Failed to delete product.")
    def destroy(self, request: Request, pk: str | None = None) -> Response:
        """DELETE /api/products/{pk}"""
        logger.info("product.delete_requested", product_id=pk, user=request.user.email)
        deleted = self._service.delete_product(pk)
        return Response(
            {
                "success": True,
                "message": "Product deleted successfully.",
                "deletedProduct": {
                    "id": deleted.id,
                    "name": deleted.name,
                    "category": deleted.category,
                },
            }
        )
