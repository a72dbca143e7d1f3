"""Product domain exceptions.

Raised by the Service Layer when business rules are violated.
The API layer (Views) catches these and translates them into
appropriate HTTP responses.
"""

from __future__ import annotations

from modules.core.exceptions import DomainError, NotFound, ReferenceNotFound


class ProductNotFound(NotFound):
    """The requested product does not exist."""


class RestaurantNotFound(ReferenceNotFound):
    """The restaurant a product should belong to is missing or unknown."""


class InvalidPrice(DomainError):
    """Price is absent, zero or negative."""

    code = "INVALID_PRICE"
