"""Product API views.

Exposes the ``ProductService`` via HTTP using DRF ViewSets.
Domain exceptions are caught and translated into appropriate
HTTP status codes; the view never swallows generic exceptions.
"""

from __future__ import annotations

from pydantic import ValidationError as PydanticValidationError
from rest_framework import status
from rest_framework.decorators import action
from rest_framework.mixins import ListModelMixin
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet

from modules.core.views import domain_error_response
from modules.products.dtos import CreateProductDTO, UpdateProductDTO
from modules.products.exceptions import (
    InvalidPrice,
    ProductNotFound,
    RestaurantNotFound,
)
from modules.products.repositories.django_repository import ProductDjangoRepository
from modules.products.serializers import ProductSerializer
from modules.products.services import ProductService
from modules.restaurants.repositories.django_repository import (
    RestaurantDjangoRepository,
)

_TRUTHY = {"true", "1", "yes"}


class ProductViewSet(ListModelMixin, GenericViewSet):
    """ViewSet for Product operations.

    Uses ``ProductService`` with Django repositories (DIP).
    Does **not** extend ``ModelViewSet``; all ORM access goes through
    the service/repository layer.

    Listing accepts one catalogue filter at a time, checked in this order:
    ``restaurant``, ``category``, ``name``, ``available=true``.
    """

    serializer_class = ProductSerializer

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = ProductService(
            repository=ProductDjangoRepository(),
            restaurant_repository=RestaurantDjangoRepository(),
        )

    # ------------------------------------------------------------------
    # List / Retrieve
    # ------------------------------------------------------------------

    def get_queryset(self):
        params = self.request.query_params
        if params.get("restaurant"):
            return self._service.list_by_restaurant(params["restaurant"])
        if params.get("category"):
            return self._service.list_by_category(params["category"])
        if params.get("name"):
            return self._service.search_by_name(params["name"])
        if params.get("available", "").lower() in _TRUTHY:
            return self._service.list_available()
        return self._service.list_products()

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/v1/products/{pk}/"""
        product = self._service.get_product(pk)
        if product is None:
            return domain_error_response(ProductNotFound(f"Product {pk} not found."))
        return Response(ProductSerializer(product).data)

    # ------------------------------------------------------------------
    # Create / Update / Destroy
    # ------------------------------------------------------------------

    def create(self, request: Request) -> Response:
        """POST /api/v1/products/"""
        data = request.data

        try:
            dto = CreateProductDTO(
                name=data.get("name", ""),
                price=data.get("price"),
                restaurant_id=data.get("restaurant_id"),
                description=data.get("description", ""),
                category=data.get("category", ""),
                available=data.get("available"),
            )
        except (PydanticValidationError, ValueError) as exc:
            return Response(
                {"detail": str(exc)},
                status=status.HTTP_400_BAD_REQUEST,
            )

        try:
            product = self._service.create_product(dto)
        except (InvalidPrice, RestaurantNotFound) as exc:
            return domain_error_response(exc)

        out = ProductSerializer(product)
        return Response(out.data, status=status.HTTP_201_CREATED)

    def update(self, request: Request, pk: str | None = None) -> Response:
        """PUT/PATCH /api/v1/products/{pk}/"""
        data = request.data

        try:
            dto = UpdateProductDTO(
                name=data.get("name"),
                description=data.get("description"),
                category=data.get("category"),
                price=data.get("price"),
                available=data.get("available"),
            )
        except (PydanticValidationError, ValueError) as exc:
            return Response(
                {"detail": str(exc)},
                status=status.HTTP_400_BAD_REQUEST,
            )

        try:
            product = self._service.update_product(pk, dto)
        except (ProductNotFound, InvalidPrice) as exc:
            return domain_error_response(exc)

        return Response(ProductSerializer(product).data)

    def partial_update(self, request: Request, pk: str | None = None) -> Response:
        """PATCH /api/v1/products/{pk}/"""
        return self.update(request, pk)

    def destroy(self, request: Request, pk: str | None = None) -> Response:
        """DELETE /api/v1/products/{pk}/"""
        try:
            self._service.delete_product(pk)
        except ProductNotFound as exc:
            return domain_error_response(exc)
        return Response(status=status.HTTP_204_NO_CONTENT)

    # ------------------------------------------------------------------
    # Availability
    # ------------------------------------------------------------------

    @action(detail=True, methods=["patch"], url_path="availability")
    def availability(self, request: Request, pk: str | None = None) -> Response:
        """PATCH /api/v1/products/{pk}/availability/

        Accepts ``{"available": true|false}``.
        """
        value = request.data.get("available")
        if not isinstance(value, bool):
            return Response(
                {"detail": "Field 'available' must be a boolean."},
                status=status.HTTP_400_BAD_REQUEST,
            )

        try:
            product = self._service.set_availability(pk, value)
        except ProductNotFound as exc:
            return domain_error_response(exc)
        return Response(ProductSerializer(product).data)

    @action(detail=True, methods=["post"])
    def deactivate(self, request: Request, pk: str | None = None) -> Response:
        """POST /api/v1/products/{pk}/deactivate/"""
        try:
            product = self._service.deactivate_product(pk)
        except ProductNotFound as exc:
            return domain_error_response(exc)
        return Response(ProductSerializer(product).data)
