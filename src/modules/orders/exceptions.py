"""Order domain exceptions.

Raised by the Service Layer when business rules are violated.
The API layer (Views) catches these and translates them into
appropriate HTTP responses.
"""

from __future__ import annotations

from modules.core.exceptions import Conflict, DomainError, NotFound, ReferenceNotFound


class OrderNotFound(NotFound):
    """The requested order does not exist."""


class EmptyOrder(DomainError):
    """Order creation was attempted with no items."""

    code = "EMPTY_ORDER"


class OrderCustomerNotFound(ReferenceNotFound):
    """The customer referenced by the order does not exist."""


class OrderProductNotFound(ReferenceNotFound):
    """A product referenced by an order item does not exist."""


class ProductUnavailable(Conflict):
    """A product referenced by an order item is not available."""

    code = "PRODUCT_UNAVAILABLE"


class OrderInTerminalState(Conflict):
    """The order is delivered or cancelled and cannot take this change."""

    code = "TERMINAL_STATE"


class InvalidStatusTransition(Conflict):
    """The requested status is not a forward step from the current one."""

    code = "INVALID_TRANSITION"
