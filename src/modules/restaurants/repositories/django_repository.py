"""Django ORM implementation of the Restaurant repository."""

from __future__ import annotations

from typing import Optional

from django.core.exceptions import ValidationError

from modules.restaurants.models import Restaurant
from modules.restaurants.repositories.interfaces import IRestaurantRepository


class RestaurantDjangoRepository(IRestaurantRepository):
    """Concrete Restaurant repository backed by Django ORM."""

    def get_by_id(self, id: int) -> Optional[Restaurant]:
        """Return ``None`` for non-existent or malformed IDs."""
        try:
            return Restaurant.objects.filter(id=id).first()
        except (ValueError, TypeError, ValidationError):
            return None
