"""Product repository interface.

Extends ``IRepository[Product]`` with the catalogue look-ups used by the
product queries and the row lock used by order creation.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, List, Optional

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.products.models import Product


class IProductRepository(IRepository["Product"]):
    """Repository contract for the Product aggregate."""

    @abstractmethod
    def list_by_restaurant(self, restaurant_id: int) -> List[Product]:
        """Products owned by a restaurant."""

    @abstractmethod
    def list_by_category(self, category: str) -> List[Product]:
        """Products whose category matches exactly, ignoring case."""

    @abstractmethod
    def list_available(self) -> List[Product]:
        """Products with ``available=True``."""

    @abstractmethod
    def search_by_name(self, term: str) -> List[Product]:
        """Products whose name contains ``term``, ignoring case."""

    @abstractmethod
    def get_for_update(self, id: int) -> Optional[Product]:
        """Retrieve a product with a row-level lock (SELECT FOR UPDATE).

        Used by the order service so the price and availability it reads
        stay consistent until the order is written.  Returns ``None`` if
        the product does not exist.
        """
