"""Domain error taxonomy.

Every business-rule violation raised by a service derives from
``DomainError`` and carries a stable ``code``.  Each bounded context
defines its concrete exceptions in its own ``exceptions.py`` on top of
these kinds; the API layer (Views) maps kinds to HTTP status codes.
"""

from __future__ import annotations


class DomainError(Exception):
    """Base class for business-rule violations."""

    code = "DOMAIN_ERROR"


class NotFound(DomainError):
    """An entity addressed by id does not exist."""

    code = "NOT_FOUND"


class ReferenceNotFound(DomainError):
    """A related entity (restaurant of a product, product of an item) is missing."""

    code = "REFERENCE_NOT_FOUND"


class Conflict(DomainError):
    """The request collides with the current state of an entity."""

    code = "CONFLICT"
