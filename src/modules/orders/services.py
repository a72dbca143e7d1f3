"""Order service layer (Use Cases).

Orchestrates the core business logic for order creation, status
management and cancellation.  All write operations are atomic; the
service defines the unit-of-work boundary.

Business rules enforced:
- An order needs at least one item and an existing customer.
- Every item must reference an existing, available product.
- Each item snapshots the product's current price and name; the order
  total is the exact Decimal sum of ``unit_price * quantity`` and is
  never recomputed afterwards.
- Status changes follow ``constants.VALID_TRANSITIONS``.
- Delivered orders cannot be cancelled; cancelled orders cannot change
  status.
"""

from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING, Any, Dict, Iterable, List, Optional

import structlog
from django.db import transaction

from modules.orders.constants import OrderStatus
from modules.orders.exceptions import (
    EmptyOrder,
    InvalidStatusTransition,
    OrderCustomerNotFound,
    OrderInTerminalState,
    OrderNotFound,
    OrderProductNotFound,
    ProductUnavailable,
)

if TYPE_CHECKING:
    from modules.customers.repositories.interfaces import ICustomerRepository
    from modules.orders.dtos import CreateOrderDTO, CreateOrderItemDTO
    from modules.orders.models import Order
    from modules.orders.repositories.interfaces import IOrderRepository
    from modules.products.models import Product
    from modules.products.repositories.interfaces import IProductRepository

logger = structlog.get_logger(__name__)


def calculate_total(lines: Iterable[Dict[str, Any]]) -> Decimal:
    """Sum ``unit_price * quantity`` over order lines using exact decimals."""
    return sum(
        (line["unit_price"] * line["quantity"] for line in lines),
        Decimal("0.00"),
    )


class OrderService:
    """Application service for Order use-cases.

    Receives repositories via constructor injection (DIP).  Products are
    read straight from the product repository: order creation needs the
    raw price and availability, not the product service's side effects.
    """

    def __init__(
        self,
        order_repository: IOrderRepository,
        product_repository: IProductRepository,
        customer_repository: ICustomerRepository,
    ) -> None:
        self._order_repo = order_repository
        self._product_repo = product_repository
        self._customer_repo = customer_repository

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    @transaction.atomic
    def create_order(self, dto: CreateOrderDTO) -> Order:
        """Create a new order in status ``CRIADO``.

        Steps:
        1. Reject an empty basket, then an unknown customer.  The customer
           is checked before any product, so a basket with both an unknown
           customer and bad products reports the customer.
        2. Lock every referenced product (sorted by PK to avoid
           deadlocks).
        3. Walk the items in request order; the first item whose product
           is missing or unavailable decides the error (existence is
           checked before availability for each item).
        4. Snapshot price and name per item, keeping the request order.
        5. Persist order + items with the computed total.

        Nothing is written until every item has been validated.

        Raises:
            EmptyOrder: the order has no items.
            OrderCustomerNotFound: customer does not exist.
            OrderProductNotFound: a product does not exist.
            ProductUnavailable: a product is not available.
        """
        log = logger.bind(customer_id=dto.customer_id)

        if not dto.items:
            log.warning("order.empty")
            raise EmptyOrder("Order must contain at least one item.")

        if not self._customer_repo.exists(dto.customer_id):
            raise OrderCustomerNotFound(f"Customer {dto.customer_id} not found.")

        products = self._lock_products(dto.items)

        lines = []
        for item in dto.items:
            product = products[item.product_id]
            if product is None:
                raise OrderProductNotFound(f"Product {item.product_id} not found.")
            if not product.available:
                log.warning("order.product_unavailable", product_id=product.id)
                raise ProductUnavailable(f"Product unavailable: {product.name}")
            lines.append(
                {
                    "product_id": product.id,
                    "product_name": product.name,
                    "quantity": item.quantity,
                    "unit_price": product.price,
                }
            )

        total = calculate_total(lines)
        order = self._order_repo.create(
            {
                "customer_id": dto.customer_id,
                "status": OrderStatus.CRIADO,
                "total_amount": total,
                "items": lines,
            }
        )

        log.info("order.created", order_id=order.id, total=str(total))
        return self._order_repo.get_by_id(order.id) or order

    @transaction.atomic
    def update_status(self, order_id: int, new_status: str) -> Order:
        """Move an order forward in its lifecycle.

        Acquires a row-level lock on the order before validating the
        transition.  Cancellation goes through ``cancel_order``.

        Raises:
            OrderNotFound: order does not exist.
            OrderInTerminalState: order is delivered or cancelled.
            InvalidStatusTransition: unknown status, ``CANCELADO``, or not a
                forward step from the current status.
        """
        order = self._get_for_update_or_raise(order_id)
        log = logger.bind(
            order_id=order.id,
            current_status=order.status,
            new_status=new_status,
        )

        if order.is_terminal:
            log.warning("order.terminal_state")
            raise OrderInTerminalState(
                f"Order {order.id} is {order.status} and cannot change status."
            )

        if new_status not in OrderStatus.values:
            raise InvalidStatusTransition(f"Unknown order status {new_status!r}.")

        if new_status == OrderStatus.CANCELADO:
            raise InvalidStatusTransition(
                "Use cancellation to move an order to CANCELADO."
            )

        if not order.can_transition_to(new_status):
            log.warning("order.invalid_transition")
            raise InvalidStatusTransition(
                f"Cannot transition from {order.status} to {new_status}."
            )

        order.status = new_status
        self._order_repo.save(order)
        log.info("order.status_updated")
        return self._order_repo.get_by_id(order.id) or order

    @transaction.atomic
    def cancel_order(self, order_id: int, reason: Optional[str] = "") -> Order:
        """Cancel an order and record the reason.

        Cancelling an already cancelled order overwrites the reason.

        Raises:
            OrderNotFound: order does not exist.
            OrderInTerminalState: order was already delivered.
        """
        order = self._get_for_update_or_raise(order_id)
        log = logger.bind(order_id=order.id, current_status=order.status)

        if not order.can_transition_to(OrderStatus.CANCELADO):
            log.warning("order.cancel_not_allowed")
            raise OrderInTerminalState(
                f"Order {order.id} is {order.status}; delivered orders cannot be canceled."
            )

        order.status = OrderStatus.CANCELADO
        order.cancellation_reason = reason or ""
        self._order_repo.save(order)
        log.info("order.cancelled")
        return self._order_repo.get_by_id(order.id) or order

    @transaction.atomic
    def delete_order(self, order_id: int) -> None:
        """Delete an order and its items.

        Raises:
            OrderNotFound: order does not exist.
        """
        if not self._order_repo.exists(order_id):
            raise OrderNotFound(f"Order {order_id} not found.")
        self._order_repo.delete(order_id)
        logger.info("order.deleted", order_id=order_id)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_order(self, order_id: int) -> Optional[Order]:
        return self._order_repo.get_by_id(order_id)

    def list_orders(self) -> List[Order]:
        return self._order_repo.list()

    def list_by_customer(self, customer_id: int) -> List[Order]:
        return self._order_repo.list_by_customer(customer_id)

    def compute_total(self, order_id: int) -> Decimal:
        """Return the total stored at creation time.

        Raises:
            OrderNotFound: order does not exist.
        """
        order = self._order_repo.get_by_id(order_id)
        if not order:
            raise OrderNotFound(f"Order {order_id} not found.")
        return order.total_amount

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _get_for_update_or_raise(self, order_id: int) -> Order:
        order = self._order_repo.get_for_update(order_id)
        if not order:
            raise OrderNotFound(f"Order {order_id} not found.")
        return order

    def _lock_products(
        self, items: Iterable[CreateOrderItemDTO]
    ) -> Dict[int, Optional[Product]]:
        """Lock the referenced products in ascending PK order.

        Missing ids map to ``None``; the caller decides the error.
        """
        return {
            product_id: self._product_repo.get_for_update(product_id)
            for product_id in sorted({item.product_id for item in items})
        }
