"""Unit tests for the Product model."""

from __future__ import annotations

from decimal import Decimal

import pytest

from django.core.exceptions import ValidationError
from django.db import IntegrityError, transaction
from django.db.models import ProtectedError

from modules.products.models import Product

pytestmark = pytest.mark.unit


class TestProductModel:
    def test_defaults(self, restaurant):
        product = Product.objects.create(
            name="Lasanha", price=Decimal("42.90"), restaurant=restaurant
        )

        assert product.available is True
        assert product.description == ""
        assert product.category == ""

    def test_str(self, make_product):
        product = make_product(name="Lasanha", price=Decimal("42.90"))

        assert str(product) == "Lasanha (42.90)"

    def test_clean_rejects_zero_price(self, restaurant):
        product = Product(name="Lasanha", price=Decimal("0.00"), restaurant=restaurant)

        with pytest.raises(ValidationError):
            product.full_clean()

    def test_db_rejects_non_positive_price(self, restaurant):
        with pytest.raises(IntegrityError), transaction.atomic():
            Product.objects.create(
                name="Lasanha", price=Decimal("-1.00"), restaurant=restaurant
            )

    def test_restaurant_with_products_cannot_be_deleted(self, make_product, restaurant):
        make_product()

        with pytest.raises(ProtectedError):
            restaurant.delete()
