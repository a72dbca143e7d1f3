"""Restaurant repository interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from modules.restaurants.models import Restaurant


class IRestaurantRepository(ABC):
    """Read-only contract used by the product service."""

    @abstractmethod
    def get_by_id(self, id: int) -> Optional[Restaurant]:
        """Retrieve a restaurant by primary key."""
