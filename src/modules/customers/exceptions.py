"""Customer domain exceptions.

Raised by the Service Layer when business rules are violated.
The API layer (Views) catches these and translates them into
appropriate HTTP responses.
"""

from __future__ import annotations

from modules.core.exceptions import Conflict, NotFound


class CustomerAlreadyExists(Conflict):
    """A customer with the same email already exists."""

    code = "ALREADY_EXISTS"


class CustomerNotFound(NotFound):
    """The requested customer does not exist."""
