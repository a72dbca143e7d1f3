"""Order DTOs for the Service Layer.

Framework-agnostic data transfer objects using Pydantic v2.
These are the contracts between the API layer (DRF Views) and the
Service layer.  DTOs are immutable (``frozen=True``).

- ``CreateOrderItemDTO``: input for a single order line item.
- ``CreateOrderDTO``: input for order creation (nested items).

An empty ``items`` list is accepted here; the service rejects it with
``EmptyOrder`` so every entry point reports the same error.
"""

from __future__ import annotations

from typing import List

from pydantic import BaseModel, ConfigDict, field_validator


class CreateOrderItemDTO(BaseModel):
    """Immutable DTO for a single order item in a creation request.

    The client sends ``product_id`` and ``quantity``.
    ``unit_price`` is resolved by the Service Layer from the product catalog.
    """

    model_config = ConfigDict(frozen=True)

    product_id: int
    quantity: int

    @field_validator("quantity")
    @classmethod
    def quantity_must_be_positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError("Quantity must be at least 1.")
        return v


class CreateOrderDTO(BaseModel):
    """Immutable DTO for order creation requests."""

    model_config = ConfigDict(frozen=True)

    customer_id: int
    items: List[CreateOrderItemDTO]
