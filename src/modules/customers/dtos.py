"""Customer DTOs for the Service Layer.

Framework-agnostic data transfer objects using Pydantic v2.
DTOs are immutable (``frozen=True``).

- ``CreateCustomerDTO``: input for customer creation.
- ``UpdateCustomerDTO``: input for partial customer updates.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, EmailStr, field_validator


class CreateCustomerDTO(BaseModel):
    """Immutable DTO for customer creation requests."""

    model_config = ConfigDict(frozen=True)

    name: str
    email: EmailStr
    phone: str = ""

    @field_validator("name")
    @classmethod
    def name_must_not_be_blank(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("Name must not be empty.")
        return v.strip()


class UpdateCustomerDTO(BaseModel):
    """Immutable DTO for customer update requests.

    All fields are optional; only supplied fields will be updated.
    """

    model_config = ConfigDict(frozen=True)

    name: str | None = None
    email: EmailStr | None = None
    phone: str | None = None
    is_active: bool | None = None
