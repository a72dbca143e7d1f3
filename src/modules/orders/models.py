"""Order and OrderItem models.

Business rules implemented:
- Status follows the state machine in ``constants.VALID_TRANSITIONS``
  (enforced at service layer).
- Customer FK uses PROTECT to preserve order history.
- OrderItem snapshots the product price (``unit_price``) and name at
  creation time; later product edits or deletion never touch them.
- OrderItem subtotal is always ``quantity * unit_price`` (calculated on save).
- ``total_amount`` is the sum of item subtotals, fixed at creation.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any

from django.core.exceptions import ValidationError
from django.core.validators import MinValueValidator
from django.db import models

from modules.core.models import BaseModel
from modules.orders.constants import TERMINAL_STATES, VALID_TRANSITIONS, OrderStatus


class Order(BaseModel):
    """Order aggregate root."""

    customer: models.ForeignKey = models.ForeignKey(
        "customers.Customer",
        on_delete=models.PROTECT,
        related_name="orders",
    )
    status: models.CharField = models.CharField(
        max_length=20,
        choices=OrderStatus.choices,
        default=OrderStatus.CRIADO,
    )
    total_amount: models.DecimalField = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        default=Decimal("0.00"),
    )
    cancellation_reason: models.TextField = models.TextField(  # noqa: DJ01
        null=True,
        blank=True,
        default=None,
    )

    class Meta:
        db_table = "orders"
        ordering = ["-created_at", "-id"]
        indexes = [
            models.Index(fields=["status"], name="orders_status_idx"),
            models.Index(fields=["customer"], name="orders_customer_idx"),
        ]

    # ------------------------------------------------------------------
    # State Machine helpers
    # ------------------------------------------------------------------

    @property
    def is_terminal(self) -> bool:
        """Return ``True`` if the order is delivered or cancelled."""
        return self.status in TERMINAL_STATES

    def can_transition_to(self, new_status: str) -> bool:
        """Check whether *new_status* is allowed from the current status."""
        return new_status in VALID_TRANSITIONS.get(self.status, frozenset())

    # ------------------------------------------------------------------
    # Display
    # ------------------------------------------------------------------

    def __str__(self) -> str:
        return f"Order #{self.pk} ({self.status})"


class OrderItem(BaseModel):
    """Line item linking an Order to a Product.

    ``unit_price`` and ``product_name`` are **snapshots** taken when the
    order is created.  ``product`` becomes NULL if the product is deleted;
    the snapshot keeps the line readable.
    """

    order: models.ForeignKey = models.ForeignKey(
        "orders.Order",
        on_delete=models.CASCADE,
        related_name="items",
    )
    product: models.ForeignKey = models.ForeignKey(
        "products.Product",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="order_items",
    )
    product_name: models.CharField = models.CharField(max_length=255)
    quantity: models.PositiveIntegerField = models.PositiveIntegerField(
        default=1,
        validators=[MinValueValidator(1)],
    )
    unit_price: models.DecimalField = models.DecimalField(
        max_digits=10,
        decimal_places=2,
    )
    subtotal: models.DecimalField = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        editable=False,
    )

    class Meta:
        db_table = "order_items"
        ordering = ["id"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(quantity__gte=1),
                name="order_items_quantity_positive",
            ),
        ]

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    def clean(self) -> None:
        super().clean()
        if self.quantity is not None and self.quantity < 1:
            raise ValidationError({"quantity": "Quantity must be at least 1."})

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def save(self, *args: Any, **kwargs: Any) -> None:
        if self.unit_price is None:
            raise ValidationError({"unit_price": "Unit price snapshot is required."})
        self.subtotal = self.quantity * self.unit_price
        super().save(*args, **kwargs)

    # ------------------------------------------------------------------
    # Display
    # ------------------------------------------------------------------

    def __str__(self) -> str:
        return f"{self.product_name} x{self.quantity} ({self.subtotal})"
