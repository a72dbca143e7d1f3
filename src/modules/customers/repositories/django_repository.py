"""Django ORM implementation of the Customer repository.

Satisfies ``ICustomerRepository`` using Django's QuerySet API.
Error handling follows the Null Object pattern: methods return ``None``
instead of raising HTTP-level exceptions; the Service Layer decides
how to translate a missing entity into an API response.
"""

from __future__ import annotations

from typing import List, Optional

import structlog
from django.core.exceptions import ValidationError
from django.db import transaction

from modules.customers.models import Customer
from modules.customers.repositories.interfaces import ICustomerRepository

logger = structlog.get_logger(__name__)


class CustomerDjangoRepository(ICustomerRepository):
    """Concrete Customer repository backed by Django ORM."""

    def get_by_id(self, id: int) -> Optional[Customer]:
        """Retrieve a customer by primary key.

        Returns ``None`` for non-existent or malformed IDs.
        """
        try:
            return Customer.objects.filter(id=id).first()
        except (ValueError, TypeError, ValidationError):
            return None

    def list(self) -> List[Customer]:
        return list(Customer.objects.all())

    @transaction.atomic
    def save(self, entity: Customer) -> Customer:
        """Persist (create or update) a customer."""
        is_new = entity._state.adding
        entity.save()
        logger.info("customer.saved", customer_id=entity.id, is_new=is_new)
        return entity

    def exists(self, id: int) -> bool:
        try:
            return Customer.objects.filter(id=id).exists()
        except (ValueError, TypeError, ValidationError):
            return False

    @transaction.atomic
    def delete(self, id: int) -> bool:
        """Delete a customer by ID; ``False`` if it did not exist."""
        deleted, _ = Customer.objects.filter(id=id).delete()
        if deleted:
            logger.info("customer.deleted", customer_id=id)
        return bool(deleted)

    def get_by_email(self, email: str) -> Optional[Customer]:
        return Customer.objects.filter(email__iexact=email.strip()).first()
