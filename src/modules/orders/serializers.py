"""Order DRF serializers for API input/output.

Input serializers validate request shape; the service receives Pydantic
DTOs from ``dtos.py``.  Business logic lives in the Service Layer.
"""

from __future__ import annotations

from rest_framework import serializers

from modules.orders.constants import OrderStatus
from modules.orders.models import Order, OrderItem

# ---------------------------------------------------------------------------
# Input Serializers
# ---------------------------------------------------------------------------


class CreateOrderItemSerializer(serializers.Serializer):
    """Validates a single item in an order creation request."""

    product_id = serializers.IntegerField()
    quantity = serializers.IntegerField(min_value=1)


class CreateOrderSerializer(serializers.Serializer):
    """Validates the order creation request payload.

    An empty ``items`` list passes here and is rejected by the service.
    """

    customer_id = serializers.IntegerField()
    items = CreateOrderItemSerializer(many=True, allow_empty=True)


class UpdateStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=OrderStatus.choices)


class CancelOrderSerializer(serializers.Serializer):
    reason = serializers.CharField(required=False, default="", allow_blank=True)


# ---------------------------------------------------------------------------
# Output Serializers (Read)
# ---------------------------------------------------------------------------


class OrderItemSerializer(serializers.ModelSerializer):
    """Read serializer for order items with the price snapshot."""

    class Meta:
        model = OrderItem
        fields = [
            "id",
            "product_id",
            "product_name",
            "quantity",
            "unit_price",
            "subtotal",
        ]
        read_only_fields = fields


class OrderSerializer(serializers.ModelSerializer):
    """Read serializer for orders with nested items."""

    items = OrderItemSerializer(many=True, read_only=True)

    class Meta:
        model = Order
        fields = [
            "id",
            "customer_id",
            "status",
            "total_amount",
            "cancellation_reason",
            "created_at",
            "updated_at",
            "items",
        ]
        read_only_fields = fields


class OrderListSerializer(serializers.ModelSerializer):
    """Lightweight serializer for order list (no nested relations)."""

    class Meta:
        model = Order
        fields = [
            "id",
            "customer_id",
            "status",
            "total_amount",
            "created_at",
        ]
        read_only_fields = fields
