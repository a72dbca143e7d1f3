"""Django ORM implementation of the Order repository.

Satisfies ``IOrderRepository`` using Django's QuerySet API.
All write operations are wrapped in ``transaction.atomic()`` to ensure
the Order aggregate (Order + OrderItems) is persisted atomically.

Concurrency control on status updates uses ``select_for_update()``.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import structlog
from django.core.exceptions import ValidationError
from django.db import transaction

from modules.orders.models import Order, OrderItem
from modules.orders.repositories.interfaces import IOrderRepository

logger = structlog.get_logger(__name__)


class OrderDjangoRepository(IOrderRepository):
    """Concrete Order repository backed by Django ORM."""

    # ------------------------------------------------------------------
    # Create (aggregate root + children)
    # ------------------------------------------------------------------

    @transaction.atomic
    def create(self, data: Dict[str, Any]) -> Order:
        """Create an order with its items atomically.

        Items are written in the order given, so reading them back by
        primary key preserves the basket sequence.
        """
        order = Order(
            customer_id=data["customer_id"],
            status=data["status"],
            total_amount=data["total_amount"],
        )
        order.save()

        items = data["items"]
        for item_data in items:
            OrderItem(
                order=order,
                product_id=item_data["product_id"],
                product_name=item_data["product_name"],
                quantity=item_data["quantity"],
                unit_price=item_data["unit_price"],
            ).save()

        logger.info("order.persisted", order_id=order.id, item_count=len(items))
        return order

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    def get_by_id(self, id: int) -> Optional[Order]:
        """Retrieve an order with its items prefetched.

        Returns ``None`` for non-existent or malformed IDs.
        """
        try:
            return (
                Order.objects.prefetch_related("items")
                .filter(id=id)
                .first()
            )
        except (ValueError, TypeError, ValidationError):
            return None

    def list(self) -> List[Order]:
        return list(Order.objects.prefetch_related("items"))

    def list_by_customer(self, customer_id: int) -> List[Order]:
        try:
            return list(
                Order.objects.prefetch_related("items").filter(
                    customer_id=customer_id
                )
            )
        except (ValueError, TypeError, ValidationError):
            return []

    def exists(self, id: int) -> bool:
        try:
            return Order.objects.filter(id=id).exists()
        except (ValueError, TypeError, ValidationError):
            return False

    def get_for_update(self, id: int) -> Optional[Order]:
        """Retrieve an order with a row-level lock (SELECT FOR UPDATE).

        Returns ``None`` for non-existent or malformed IDs.
        """
        try:
            return Order.objects.select_for_update().filter(id=id).first()
        except (ValueError, TypeError, ValidationError):
            return None

    # ------------------------------------------------------------------
    # Save / Delete (IRepository contract)
    # ------------------------------------------------------------------

    @transaction.atomic
    def save(self, entity: Order) -> Order:
        """Persist (create or update) an order."""
        entity.save()
        logger.info("order.saved", order_id=entity.id, status=entity.status)
        return entity

    @transaction.atomic
    def delete(self, id: int) -> bool:
        """Delete an order and its items by ID."""
        deleted, _ = Order.objects.filter(id=id).delete()
        if deleted:
            logger.info("order.deleted", order_id=id)
        return bool(deleted)
