"""Order API views.

Exposes the ``OrderService`` via HTTP using DRF ViewSets.
Domain exceptions are caught and translated into appropriate
HTTP status codes; the view never swallows generic exceptions.
"""

from __future__ import annotations

from rest_framework import status
from rest_framework.decorators import action
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet

from modules.core.views import domain_error_response
from modules.customers.repositories.django_repository import CustomerDjangoRepository
from modules.orders.dtos import CreateOrderDTO, CreateOrderItemDTO
from modules.orders.exceptions import (
    EmptyOrder,
    InvalidStatusTransition,
    OrderCustomerNotFound,
    OrderInTerminalState,
    OrderNotFound,
    OrderProductNotFound,
    ProductUnavailable,
)
from modules.orders.repositories.django_repository import OrderDjangoRepository
from modules.orders.serializers import (
    CancelOrderSerializer,
    CreateOrderSerializer,
    OrderListSerializer,
    OrderSerializer,
    UpdateStatusSerializer,
)
from modules.orders.services import OrderService
from modules.products.repositories.django_repository import ProductDjangoRepository


class OrderViewSet(GenericViewSet):
    """ViewSet for Order operations.

    Uses ``OrderService`` with injected repositories (DIP).
    Does **not** extend ``ModelViewSet``; all ORM access goes through
    the service/repository layer.
    """

    serializer_class = OrderSerializer

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = OrderService(
            order_repository=OrderDjangoRepository(),
            product_repository=ProductDjangoRepository(),
            customer_repository=CustomerDjangoRepository(),
        )

    # ------------------------------------------------------------------
    # Create
    # ------------------------------------------------------------------

    def create(self, request: Request) -> Response:
        """POST /api/v1/orders/"""
        create_serializer = CreateOrderSerializer(data=request.data)
        create_serializer.is_valid(raise_exception=True)

        data = create_serializer.validated_data
        dto = CreateOrderDTO(
            customer_id=data["customer_id"],
            items=[
                CreateOrderItemDTO(
                    product_id=item["product_id"],
                    quantity=item["quantity"],
                )
                for item in data["items"]
            ],
        )

        try:
            order = self._service.create_order(dto)
        except (
            EmptyOrder,
            OrderCustomerNotFound,
            OrderProductNotFound,
            ProductUnavailable,
        ) as exc:
            return domain_error_response(exc)

        out = OrderSerializer(order)
        return Response(out.data, status=status.HTTP_201_CREATED)

    # ------------------------------------------------------------------
    # List / Retrieve
    # ------------------------------------------------------------------

    def get_queryset(self):
        customer = self.request.query_params.get("customer")
        if customer:
            return self._service.list_by_customer(customer)
        return self._service.list_orders()

    def list(self, request: Request) -> Response:
        """GET /api/v1/orders/

        ``?customer=<id>`` restricts the listing to one customer.
        Results are paginated.
        """
        queryset = self.get_queryset()
        page = self.paginate_queryset(queryset)
        serializer = OrderListSerializer(page, many=True)
        return self.get_paginated_response(serializer.data)

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/v1/orders/{pk}/"""
        order = self._service.get_order(pk)
        if order is None:
            return domain_error_response(OrderNotFound(f"Order {pk} not found."))
        return Response(OrderSerializer(order).data)

    @action(detail=True, methods=["get"])
    def total(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/v1/orders/{pk}/total/"""
        try:
            total = self._service.compute_total(pk)
        except OrderNotFound as exc:
            return domain_error_response(exc)
        return Response({"id": int(pk), "total_amount": f"{total:.2f}"})

    # ------------------------------------------------------------------
    # Status Update
    # ------------------------------------------------------------------

    def partial_update(self, request: Request, pk: str | None = None) -> Response:
        """PATCH /api/v1/orders/{pk}/

        Updates order status.  Cancellations are **not** allowed via
        this endpoint; use ``POST /orders/{id}/cancel/`` instead.
        """
        status_serializer = UpdateStatusSerializer(data=request.data)
        status_serializer.is_valid(raise_exception=True)

        try:
            order = self._service.update_status(
                order_id=pk,
                new_status=status_serializer.validated_data["status"],
            )
        except (OrderNotFound, OrderInTerminalState, InvalidStatusTransition) as exc:
            return domain_error_response(exc)

        return Response(OrderSerializer(order).data)

    # ------------------------------------------------------------------
    # Cancel (dedicated action)
    # ------------------------------------------------------------------

    @action(detail=True, methods=["post"])
    def cancel(self, request: Request, pk: str | None = None) -> Response:
        """POST /api/v1/orders/{pk}/cancel/"""
        cancel_serializer = CancelOrderSerializer(data=request.data)
        cancel_serializer.is_valid(raise_exception=True)

        try:
            order = self._service.cancel_order(
                order_id=pk,
                reason=cancel_serializer.validated_data["reason"],
            )
        except (OrderNotFound, OrderInTerminalState) as exc:
            return domain_error_response(exc)

        return Response(OrderSerializer(order).data)

    # ------------------------------------------------------------------
    # Destroy
    # ------------------------------------------------------------------

    def destroy(self, request: Request, pk: str | None = None) -> Response:
        """DELETE /api/v1/orders/{pk}/"""
        try:
            self._service.delete_order(pk)
        except OrderNotFound as exc:
            return domain_error_response(exc)
        return Response(status=status.HTTP_204_NO_CONTENT)
