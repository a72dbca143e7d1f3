"""Product DTOs for the Service Layer.

Framework-agnostic data transfer objects using Pydantic v2.
These are the contracts between the API layer (DRF Views) and the
Service layer.  DTOs are immutable (``frozen=True``).

- ``CreateProductDTO``: input for product creation.
- ``UpdateProductDTO``: patch for partial product updates.

Price is deliberately left unchecked here: the service runs it through
``validate_price`` so that a missing or non-positive price surfaces as
``InvalidPrice`` regardless of the entry point.
"""

from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, field_validator


class CreateProductDTO(BaseModel):
    """Immutable DTO for product creation requests.

    ``available`` is ``None`` when the client did not send it; the
    service then defaults it to ``True``.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    price: Decimal | None = None
    restaurant_id: int | None = None
    description: str = ""
    category: str = ""
    available: bool | None = None

    @field_validator("name")
    @classmethod
    def name_must_not_be_blank(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("Name must not be empty.")
        return v.strip()


class UpdateProductDTO(BaseModel):
    """Immutable patch for product updates.

    All fields are optional; ``None`` means "leave unchanged".  The
    restaurant is not part of the patch: it is fixed at creation.
    """

    model_config = ConfigDict(frozen=True)

    name: str | None = None
    description: str | None = None
    category: str | None = None
    price: Decimal | None = None
    available: bool | None = None
