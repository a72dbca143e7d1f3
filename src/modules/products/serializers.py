"""Product DRF serializers for API output.

Input is validated by the Pydantic DTOs in ``dtos.py``; business logic
lives in the Service Layer.
"""

from __future__ import annotations

from rest_framework import serializers

from modules.products.models import Product


class ProductSerializer(serializers.ModelSerializer):
    """Read serializer for the Product resource."""

    restaurant_id = serializers.IntegerField(read_only=True)

    class Meta:
        model = Product
        fields = [
            "id",
            "name",
            "description",
            "category",
            "price",
            "available",
            "restaurant_id",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields
