"""Customer API views.

Exposes the ``CustomerService`` via HTTP using DRF ViewSets.
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
from modules.customers.dtos import CreateCustomerDTO, UpdateCustomerDTO
from modules.customers.exceptions import CustomerAlreadyExists, CustomerNotFound
from modules.customers.repositories.django_repository import CustomerDjangoRepository
from modules.customers.serializers import CustomerSerializer
from modules.customers.services import CustomerService


class CustomerViewSet(ListModelMixin, GenericViewSet):
    """ViewSet for Customer operations.

    Uses ``CustomerService`` with ``CustomerDjangoRepository`` (DIP).
    Does **not** extend ``ModelViewSet``; all ORM access goes through
    the service/repository layer.
    """

    serializer_class = CustomerSerializer

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = CustomerService(repository=CustomerDjangoRepository())

    def get_queryset(self):
        return self._service.list_customers()

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/v1/customers/{pk}/"""
        try:
            customer = self._service.get_customer(pk)
        except CustomerNotFound as exc:
            return domain_error_response(exc)
        return Response(CustomerSerializer(customer).data)

    def create(self, request: Request) -> Response:
        """POST /api/v1/customers/"""
        data = request.data
        try:
            dto = CreateCustomerDTO(
                name=data.get("name", ""),
                email=data.get("email", ""),
                phone=data.get("phone", ""),
            )
        except (PydanticValidationError, ValueError) as exc:
            return Response(
                {"detail": str(exc)},
                status=status.HTTP_400_BAD_REQUEST,
            )

        try:
            customer = self._service.create_customer(dto)
        except CustomerAlreadyExists as exc:
            return domain_error_response(exc)

        out = CustomerSerializer(customer)
        return Response(out.data, status=status.HTTP_201_CREATED)

    def update(self, request: Request, pk: str | None = None) -> Response:
        """PUT/PATCH /api/v1/customers/{pk}/"""
        data = request.data
        try:
            dto = UpdateCustomerDTO(
                name=data.get("name"),
                email=data.get("email"),
                phone=data.get("phone"),
                is_active=data.get("is_active"),
            )
        except (PydanticValidationError, ValueError) as exc:
            return Response(
                {"detail": str(exc)},
                status=status.HTTP_400_BAD_REQUEST,
            )

        try:
            customer = self._service.update_customer(pk, dto)
        except (CustomerNotFound, CustomerAlreadyExists) as exc:
            return domain_error_response(exc)

        return Response(CustomerSerializer(customer).data)

    def partial_update(self, request: Request, pk: str | None = None) -> Response:
        """PATCH /api/v1/customers/{pk}/"""
        return self.update(request, pk)

    @action(detail=True, methods=["post"])
    def deactivate(self, request: Request, pk: str | None = None) -> Response:
        """POST /api/v1/customers/{pk}/deactivate/"""
        try:
            customer = self._service.deactivate_customer(pk)
        except CustomerNotFound as exc:
            return domain_error_response(exc)
        return Response(CustomerSerializer(customer).data)
