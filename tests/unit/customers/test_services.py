"""Unit tests for CustomerService.

Covers:
- create_customer: happy path, duplicate email.
- update_customer: partial update, email collision, not found.
- deactivate_customer: idempotence, not found.
- get_customer / list_customers.
"""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from modules.customers.dtos import CreateCustomerDTO, UpdateCustomerDTO
from modules.customers.exceptions import CustomerAlreadyExists, CustomerNotFound
from modules.customers.models import Customer
from modules.customers.services import CustomerService

pytestmark = pytest.mark.unit


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def mock_repo():
    repo = MagicMock()
    repo.save.side_effect = lambda c: c
    repo.get_by_email.return_value = None
    return repo


@pytest.fixture()
def service(mock_repo):
    return CustomerService(repository=mock_repo)


def _make_customer(**overrides) -> Customer:
    defaults = {
        "id": 1,
        "name": "Ana Souza",
        "email": "ana@example.com",
        "phone": "11987650001",
        "is_active": True,
    }
    defaults.update(overrides)
    return Customer(**defaults)


# ===========================================================================
# create_customer
# ===========================================================================


class TestCreateCustomer:
    def test_success(self, service, mock_repo):
        dto = CreateCustomerDTO(name="Ana Souza", email="ana@example.com")

        customer = service.create_customer(dto)

        assert customer.name == "Ana Souza"
        assert customer.email == "ana@example.com"
        assert customer.is_active is True
        mock_repo.save.assert_called_once()

    def test_duplicate_email_raises(self, service, mock_repo):
        mock_repo.get_by_email.return_value = _make_customer()

        with pytest.raises(CustomerAlreadyExists) as exc_info:
            service.create_customer(
                CreateCustomerDTO(name="Outra Ana", email="ana@example.com")
            )

        assert exc_info.value.code == "ALREADY_EXISTS"
        mock_repo.save.assert_not_called()


# ===========================================================================
# update_customer
# ===========================================================================


class TestUpdateCustomer:
    def test_partial_update(self, service, mock_repo):
        mock_repo.get_by_id.return_value = _make_customer()

        customer = service.update_customer(1, UpdateCustomerDTO(phone="21900000000"))

        assert customer.phone == "21900000000"
        assert customer.name == "Ana Souza"
        mock_repo.get_by_email.assert_not_called()

    def test_same_email_is_not_a_collision(self, service, mock_repo):
        mock_repo.get_by_id.return_value = _make_customer()

        service.update_customer(1, UpdateCustomerDTO(email="ANA@example.com"))

        mock_repo.get_by_email.assert_not_called()

    def test_email_collision_raises(self, service, mock_repo):
        mock_repo.get_by_id.return_value = _make_customer()
        mock_repo.get_by_email.return_value = _make_customer(id=2, email="bruno@example.com")

        with pytest.raises(CustomerAlreadyExists):
            service.update_customer(1, UpdateCustomerDTO(email="bruno@example.com"))

        mock_repo.save.assert_not_called()

    def test_not_found(self, service, mock_repo):
        mock_repo.get_by_id.return_value = None

        with pytest.raises(CustomerNotFound):
            service.update_customer(99, UpdateCustomerDTO(name="X"))


# ===========================================================================
# deactivate_customer / queries
# ===========================================================================


class TestDeactivateCustomer:
    def test_deactivates(self, service, mock_repo):
        mock_repo.get_by_id.return_value = _make_customer()

        assert service.deactivate_customer(1).is_active is False

    def test_idempotent(self, service, mock_repo):
        mock_repo.get_by_id.return_value = _make_customer(is_active=False)

        assert service.deactivate_customer(1).is_active is False

    def test_not_found(self, service, mock_repo):
        mock_repo.get_by_id.return_value = None

        with pytest.raises(CustomerNotFound):
            service.deactivate_customer(99)


class TestCustomerQueries:
    def test_get_customer_not_found(self, service, mock_repo):
        mock_repo.get_by_id.return_value = None

        with pytest.raises(CustomerNotFound) as exc_info:
            service.get_customer(99)

        assert exc_info.value.code == "NOT_FOUND"

    def test_list_customers_delegates(self, service, mock_repo):
        customers = [_make_customer()]
        mock_repo.list.return_value = customers

        assert service.list_customers() == customers
