"""Unit tests for ProductService.

Covers:
- create_product: happy path, price validation, restaurant resolution,
  ``available`` default.
- update_product: partial patch, price re-validation, not found.
- set_availability / deactivate_product: idempotence, not found.
- delete_product: happy path, not found.
- catalogue queries: delegation to repository.
"""

from __future__ import annotations

from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from modules.products.dtos import CreateProductDTO, UpdateProductDTO
from modules.products.exceptions import InvalidPrice, ProductNotFound, RestaurantNotFound
from modules.products.models import Product
from modules.products.services import ProductService
from modules.restaurants.models import Restaurant

pytestmark = pytest.mark.unit


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def mock_repo():
    repo = MagicMock()
    repo.save.side_effect = lambda p: p
    return repo


@pytest.fixture()
def mock_restaurant_repo():
    repo = MagicMock()
    repo.get_by_id.return_value = Restaurant(id=1, name="Cantina da Nonna")
    return repo


@pytest.fixture()
def service(mock_repo, mock_restaurant_repo):
    return ProductService(
        repository=mock_repo,
        restaurant_repository=mock_restaurant_repo,
    )


def _make_product(**overrides) -> Product:
    defaults = {
        "id": 10,
        "name": "Lasanha",
        "description": "Bolonhesa",
        "category": "Massas",
        "price": Decimal("42.90"),
        "available": True,
        "restaurant_id": 1,
    }
    defaults.update(overrides)
    return Product(**defaults)


# ===========================================================================
# create_product
# ===========================================================================


class TestCreateProduct:
    def test_success(self, service, mock_repo):
        dto = CreateProductDTO(
            name="Lasanha",
            price=Decimal("42.90"),
            restaurant_id=1,
            category="Massas",
        )

        product = service.create_product(dto)

        assert product.name == "Lasanha"
        assert product.price == Decimal("42.90")
        assert product.restaurant_id == 1
        assert product.category == "Massas"
        mock_repo.save.assert_called_once()

    def test_available_defaults_to_true(self, service):
        dto = CreateProductDTO(name="Tiramisù", price=Decimal("5.00"), restaurant_id=1)

        product = service.create_product(dto)

        assert product.available is True

    def test_explicit_unavailable_is_kept(self, service):
        dto = CreateProductDTO(
            name="Tiramisù", price=Decimal("5.00"), restaurant_id=1, available=False
        )

        product = service.create_product(dto)

        assert product.available is False

    @pytest.mark.parametrize("price", [None, Decimal("0"), Decimal("-3.00")])
    def test_invalid_price_raises(self, service, mock_repo, price):
        dto = CreateProductDTO(name="Lasanha", price=price, restaurant_id=1)

        with pytest.raises(InvalidPrice):
            service.create_product(dto)

        mock_repo.save.assert_not_called()

    def test_missing_restaurant_id_raises(self, service, mock_repo):
        dto = CreateProductDTO(name="Lasanha", price=Decimal("10.00"))

        with pytest.raises(RestaurantNotFound) as exc_info:
            service.create_product(dto)

        assert exc_info.value.code == "REFERENCE_NOT_FOUND"
        mock_repo.save.assert_not_called()

    def test_unknown_restaurant_raises(self, service, mock_repo, mock_restaurant_repo):
        mock_restaurant_repo.get_by_id.return_value = None
        dto = CreateProductDTO(name="Lasanha", price=Decimal("10.00"), restaurant_id=999)

        with pytest.raises(RestaurantNotFound):
            service.create_product(dto)

        mock_restaurant_repo.get_by_id.assert_called_once_with(999)
        mock_repo.save.assert_not_called()

    def test_price_checked_before_restaurant(self, service, mock_restaurant_repo):
        dto = CreateProductDTO(name="Lasanha", price=Decimal("0"), restaurant_id=999)

        with pytest.raises(InvalidPrice):
            service.create_product(dto)

        mock_restaurant_repo.get_by_id.assert_not_called()


# ===========================================================================
# update_product
# ===========================================================================


class TestUpdateProduct:
    def test_only_present_fields_change(self, service, mock_repo):
        mock_repo.get_by_id.return_value = _make_product()

        product = service.update_product(10, UpdateProductDTO(price=Decimal("45.00")))

        assert product.price == Decimal("45.00")
        assert product.name == "Lasanha"
        assert product.description == "Bolonhesa"
        assert product.category == "Massas"
        assert product.available is True
        mock_repo.save.assert_called_once()

    def test_can_set_available_false(self, service, mock_repo):
        mock_repo.get_by_id.return_value = _make_product()

        product = service.update_product(10, UpdateProductDTO(available=False))

        assert product.available is False

    def test_restaurant_is_never_changed(self, service, mock_repo):
        mock_repo.get_by_id.return_value = _make_product(restaurant_id=1)

        product = service.update_product(10, UpdateProductDTO(name="Lasanha Verde"))

        assert product.restaurant_id == 1

    def test_invalid_price_raises(self, service, mock_repo):
        mock_repo.get_by_id.return_value = _make_product()

        with pytest.raises(InvalidPrice):
            service.update_product(10, UpdateProductDTO(price=Decimal("0")))

        mock_repo.save.assert_not_called()

    def test_not_found(self, service, mock_repo):
        mock_repo.get_by_id.return_value = None

        with pytest.raises(ProductNotFound) as exc_info:
            service.update_product(99, UpdateProductDTO(name="X"))

        assert exc_info.value.code == "NOT_FOUND"


# ===========================================================================
# Availability
# ===========================================================================


class TestAvailability:
    def test_deactivate_sets_available_false(self, service, mock_repo):
        mock_repo.get_by_id.return_value = _make_product()

        product = service.deactivate_product(10)

        assert product.available is False

    def test_deactivate_is_idempotent(self, service, mock_repo):
        mock_repo.get_by_id.return_value = _make_product(available=False)

        product = service.deactivate_product(10)

        assert product.available is False

    def test_set_availability_true(self, service, mock_repo):
        mock_repo.get_by_id.return_value = _make_product(available=False)

        product = service.set_availability(10, True)

        assert product.available is True

    def test_deactivate_not_found(self, service, mock_repo):
        mock_repo.get_by_id.return_value = None

        with pytest.raises(ProductNotFound):
            service.deactivate_product(99)


# ===========================================================================
# delete_product
# ===========================================================================


class TestDeleteProduct:
    def test_success(self, service, mock_repo):
        mock_repo.exists.return_value = True

        service.delete_product(10)

        mock_repo.delete.assert_called_once_with(10)

    def test_not_found(self, service, mock_repo):
        mock_repo.exists.return_value = False

        with pytest.raises(ProductNotFound):
            service.delete_product(99)

        mock_repo.delete.assert_not_called()


# ===========================================================================
# Queries
# ===========================================================================


class TestQueries:
    def test_get_product_returns_none_when_missing(self, service, mock_repo):
        mock_repo.get_by_id.return_value = None

        assert service.get_product(99) is None

    def test_list_products_delegates(self, service, mock_repo):
        products = [_make_product(), _make_product(id=11, name="Pizza")]
        mock_repo.list.return_value = products

        assert service.list_products() == products

    def test_list_by_restaurant_delegates(self, service, mock_repo):
        service.list_by_restaurant(1)
        mock_repo.list_by_restaurant.assert_called_once_with(1)

    def test_list_by_category_delegates(self, service, mock_repo):
        service.list_by_category("massas")
        mock_repo.list_by_category.assert_called_once_with("massas")

    def test_search_by_name_delegates(self, service, mock_repo):
        service.search_by_name("lasa")
        mock_repo.search_by_name.assert_called_once_with("lasa")

    def test_list_available_delegates(self, service, mock_repo):
        service.list_available()
        mock_repo.list_available.assert_called_once_with()
