"""Order repository interface.

Extends ``IRepository[Order]`` with methods required by the Order
aggregate: atomic creation with items, customer listing and a locked
read for status changes.

The Service Layer depends exclusively on this contract (DIP).
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Any, Dict, List, Optional

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.orders.models import Order


class IOrderRepository(IRepository["Order"]):
    """Repository contract for the Order aggregate root.

    The Order aggregate includes its OrderItem children.  Mutations
    must be atomic.
    """

    @abstractmethod
    def create(self, data: Dict[str, Any]) -> Order:
        """Create an order with its items atomically.

        ``data`` must include ``customer_id``, ``status``, ``total_amount``
        and ``items`` (list of dicts with ``product_id``, ``product_name``,
        ``quantity``, ``unit_price``).
        """

    @abstractmethod
    def list_by_customer(self, customer_id: int) -> List[Order]:
        """Orders placed by a customer."""

    @abstractmethod
    def get_for_update(self, id: int) -> Optional[Order]:
        """Retrieve an order with a row-level lock (SELECT FOR UPDATE)."""
