"""Integration tests for Order API endpoints.

Covers:
- Order creation with price snapshots and total.
- Validation and reference errors (400, 404, 409).
- Status updates, cancellation and the terminal-state rules.
- Listing, retrieval, total and deletion.
"""

from __future__ import annotations

from decimal import Decimal

import pytest

from modules.customers.models import Customer
from modules.orders.models import Order

pytestmark = pytest.mark.integration

URL = "/api/v1/orders/"


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def products(make_product):
    return (
        make_product(name="A", price=Decimal("10.00")),
        make_product(name="B", price=Decimal("2.50")),
    )


@pytest.fixture()
def created_order(auth_client, customer, products):
    a, b = products
    response = auth_client.post(
        URL,
        {
            "customer_id": customer.id,
            "items": [
                {"product_id": a.id, "quantity": 2},
                {"product_id": b.id, "quantity": 3},
            ],
        },
        format="json",
    )
    assert response.status_code == 201
    return response.json()


def _patch_status(client, order_id, status):
    return client.patch(f"{URL}{order_id}/", {"status": status}, format="json")


# ===========================================================================
# Authentication
# ===========================================================================


class TestOrderAPIAuth:
    def test_unauthenticated_returns_401(self, api_client):
        assert api_client.get(URL).status_code == 401


# ===========================================================================
# Create
# ===========================================================================


class TestOrderCreate:
    def test_create_success(self, created_order, customer):
        assert created_order["status"] == "CRIADO"
        assert created_order["total_amount"] == "27.50"
        assert created_order["customer_id"] == customer.id
        assert created_order["cancellation_reason"] is None
        assert [i["unit_price"] for i in created_order["items"]] == ["10.00", "2.50"]
        assert [i["subtotal"] for i in created_order["items"]] == ["20.00", "7.50"]
        assert [i["product_name"] for i in created_order["items"]] == ["A", "B"]

    def test_price_change_does_not_alter_order(self, auth_client, created_order, products):
        a, _ = products
        auth_client.patch(
            f"/api/v1/products/{a.id}/", {"price": "99.99"}, format="json"
        )

        response = auth_client.get(f"{URL}{created_order['id']}/total/")

        assert response.status_code == 200
        assert response.json()["total_amount"] == "27.50"

    def test_empty_items_returns_400(self, auth_client, customer):
        response = auth_client.post(
            URL, {"customer_id": customer.id, "items": []}, format="json"
        )

        assert response.status_code == 400
        assert response.json()["code"] == "EMPTY_ORDER"

    def test_unavailable_product_returns_409(self, auth_client, customer, make_product):
        product = make_product(name="Esgotado", available=False)

        response = auth_client.post(
            URL,
            {"customer_id": customer.id, "items": [{"product_id": product.id, "quantity": 1}]},
            format="json",
        )

        assert response.status_code == 409
        body = response.json()
        assert body["code"] == "PRODUCT_UNAVAILABLE"
        assert "Esgotado" in body["detail"]
        assert Order.objects.count() == 0

    def test_unknown_product_returns_404(self, auth_client, customer):
        response = auth_client.post(
            URL,
            {"customer_id": customer.id, "items": [{"product_id": 999, "quantity": 1}]},
            format="json",
        )

        assert response.status_code == 404
        assert response.json()["code"] == "REFERENCE_NOT_FOUND"

    def test_unknown_customer_returns_404(self, auth_client, products):
        response = auth_client.post(
            URL,
            {"customer_id": 999, "items": [{"product_id": products[0].id, "quantity": 1}]},
            format="json",
        )

        assert response.status_code == 404
        assert response.json()["code"] == "REFERENCE_NOT_FOUND"

    def test_zero_quantity_returns_400(self, auth_client, customer, products):
        response = auth_client.post(
            URL,
            {"customer_id": customer.id, "items": [{"product_id": products[0].id, "quantity": 0}]},
            format="json",
        )

        assert response.status_code == 400


# ===========================================================================
# Read
# ===========================================================================


class TestOrderRead:
    def test_retrieve(self, auth_client, created_order):
        response = auth_client.get(f"{URL}{created_order['id']}/")

        assert response.status_code == 200
        assert len(response.json()["items"]) == 2

    def test_retrieve_not_found(self, auth_client):
        response = auth_client.get(f"{URL}999/")

        assert response.status_code == 404
        assert response.json()["code"] == "NOT_FOUND"

    def test_total_not_found(self, auth_client):
        assert auth_client.get(f"{URL}999/total/").status_code == 404

    def test_list_filtered_by_customer(self, auth_client, created_order, customer):
        other = Customer.objects.create(name="Bruno", email="bruno@example.com")

        mine = auth_client.get(URL, {"customer": customer.id}).json()
        theirs = auth_client.get(URL, {"customer": other.id}).json()

        assert [o["id"] for o in mine["results"]] == [created_order["id"]]
        assert theirs["count"] == 0


# ===========================================================================
# Status / Cancel
# ===========================================================================


class TestOrderStatus:
    def test_progress_then_cancel_rejected(self, auth_client, created_order):
        order_id = created_order["id"]

        assert _patch_status(auth_client, order_id, "EM_PREPARO").status_code == 200
        response = _patch_status(auth_client, order_id, "ENTREGUE")
        assert response.status_code == 200
        assert response.json()["status"] == "ENTREGUE"

        response = auth_client.post(
            f"{URL}{order_id}/cancel/", {"reason": "late"}, format="json"
        )
        assert response.status_code == 409
        assert response.json()["code"] == "TERMINAL_STATE"

    def test_cancel_then_update_rejected(self, auth_client, created_order):
        order_id = created_order["id"]

        response = auth_client.post(
            f"{URL}{order_id}/cancel/", {"reason": "customer request"}, format="json"
        )
        assert response.status_code == 200
        assert response.json()["status"] == "CANCELADO"

        response = _patch_status(auth_client, order_id, "EM_PREPARO")
        assert response.status_code == 409
        assert response.json()["code"] == "TERMINAL_STATE"

        order = auth_client.get(f"{URL}{order_id}/").json()
        assert order["cancellation_reason"] == "customer request"

    def test_backward_transition_rejected(self, auth_client, created_order):
        order_id = created_order["id"]
        _patch_status(auth_client, order_id, "SAIU_PARA_ENTREGA")

        response = _patch_status(auth_client, order_id, "EM_PREPARO")

        assert response.status_code == 409
        assert response.json()["code"] == "INVALID_TRANSITION"

    def test_cancel_via_status_rejected(self, auth_client, created_order):
        response = _patch_status(auth_client, created_order["id"], "CANCELADO")

        assert response.status_code == 409
        assert response.json()["code"] == "INVALID_TRANSITION"

    def test_unknown_status_returns_400(self, auth_client, created_order):
        response = _patch_status(auth_client, created_order["id"], "PERDIDO")

        assert response.status_code == 400

    def test_cancel_without_reason(self, auth_client, created_order):
        response = auth_client.post(f"{URL}{created_order['id']}/cancel/")

        assert response.status_code == 200
        assert response.json()["cancellation_reason"] == ""

    def test_cancel_not_found(self, auth_client):
        assert auth_client.post(f"{URL}999/cancel/").status_code == 404


# ===========================================================================
# Delete
# ===========================================================================


class TestOrderDelete:
    def test_delete(self, auth_client, created_order):
        response = auth_client.delete(f"{URL}{created_order['id']}/")

        assert response.status_code == 204
        assert auth_client.get(f"{URL}{created_order['id']}/").status_code == 404

    def test_delete_not_found(self, auth_client):
        assert auth_client.delete(f"{URL}999/").status_code == 404
