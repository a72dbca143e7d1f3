"""Customer service layer (Use Cases).

Orchestrates business logic for the Customer aggregate, delegating
persistence to the injected ``ICustomerRepository``.

Business rules enforced here:
- Email must be unique.
- Deactivation keeps the row (orders reference it) and is idempotent.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, List

import structlog
from django.db import transaction

from modules.customers.exceptions import CustomerAlreadyExists, CustomerNotFound
from modules.customers.models import Customer

if TYPE_CHECKING:
    from modules.customers.dtos import CreateCustomerDTO, UpdateCustomerDTO
    from modules.customers.repositories.interfaces import ICustomerRepository

logger = structlog.get_logger(__name__)


class CustomerService:
    """Application service for Customer use-cases.

    Receives an ``ICustomerRepository`` via constructor injection (DIP).
    """

    def __init__(self, repository: ICustomerRepository) -> None:
        self._repo = repository

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    @transaction.atomic
    def create_customer(self, dto: CreateCustomerDTO) -> Customer:
        """Create a new customer after enforcing email uniqueness.

        Raises:
            CustomerAlreadyExists: if the email is already taken.
        """
        if self._repo.get_by_email(dto.email):
            logger.warning("customer.duplicate_email")
            raise CustomerAlreadyExists(f"Email {dto.email} already registered.")

        customer = Customer(name=dto.name, email=dto.email, phone=dto.phone)
        customer = self._repo.save(customer)
        logger.info("customer.created", customer_id=customer.id)
        return customer

    @transaction.atomic
    def update_customer(self, id: int, dto: UpdateCustomerDTO) -> Customer:
        """Update an existing customer with the supplied fields.

        Raises:
            CustomerNotFound: if the customer does not exist.
            CustomerAlreadyExists: if the new email collides.
        """
        customer = self.get_customer(id)
        log = logger.bind(customer_id=id)

        if dto.email is not None and dto.email.lower() != customer.email:
            if self._repo.get_by_email(dto.email):
                log.warning("customer.duplicate_email")
                raise CustomerAlreadyExists(f"Email {dto.email} already registered.")

        for field in ("name", "email", "phone", "is_active"):
            value = getattr(dto, field)
            if value is not None:
                setattr(customer, field, value)

        customer = self._repo.save(customer)
        log.info("customer.updated")
        return customer

    @transaction.atomic
    def deactivate_customer(self, id: int) -> Customer:
        """Mark a customer as inactive. Running it twice is a no-op.

        Raises:
            CustomerNotFound: if the customer does not exist.
        """
        customer = self.get_customer(id)
        customer.is_active = False
        customer = self._repo.save(customer)
        logger.info("customer.deactivated", customer_id=id)
        return customer

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def list_customers(self) -> List[Customer]:
        return self._repo.list()

    def get_customer(self, id: int) -> Customer:
        """Retrieve a single customer by ID.

        Raises:
            CustomerNotFound: if the customer does not exist.
        """
        customer = self._repo.get_by_id(id)
        if not customer:
            raise CustomerNotFound(f"Customer {id} not found.")
        return customer
