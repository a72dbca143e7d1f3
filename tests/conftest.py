from decimal import Decimal

import pytest

from django.contrib.auth import get_user_model
from rest_framework.test import APIClient

from modules.customers.models import Customer
from modules.products.models import Product
from modules.restaurants.models import Restaurant


@pytest.fixture(autouse=True)
def _use_db(db):
    """Automatically use the test database for all tests."""


@pytest.fixture()
def api_client():
    """DRF APIClient for testing API endpoints."""
    return APIClient()


@pytest.fixture()
def api_client_with_correlation(api_client):
    """APIClient pre-configured with a known correlation ID header."""
    cid = "test-correlation-id-fixture"
    api_client.defaults["HTTP_X_REQUEST_ID"] = cid
    return api_client, cid


@pytest.fixture()
def auth_client():
    """APIClient with a force-authenticated Django user."""
    client = APIClient()
    user = get_user_model().objects.create_user(
        username="testuser", password="testpass123"
    )
    client.force_authenticate(user=user)
    return client


@pytest.fixture()
def restaurant():
    return Restaurant.objects.create(name="Cantina da Nonna")


@pytest.fixture()
def customer():
    return Customer.objects.create(
        name="Ana Souza", email="ana@example.com", phone="11987650001"
    )


@pytest.fixture()
def make_product(restaurant):
    """Factory for persisted products of the ``restaurant`` fixture."""

    def _make(**overrides) -> Product:
        defaults = {
            "name": "Lasanha",
            "category": "Massas",
            "price": Decimal("10.00"),
            "available": True,
            "restaurant": restaurant,
        }
        defaults.update(overrides)
        return Product.objects.create(**defaults)

    return _make
