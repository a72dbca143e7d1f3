"""Product service layer (Use Cases).

Orchestrates business logic for the Product aggregate, delegating
persistence to the injected ``IProductRepository`` and restaurant
look-ups to ``IRestaurantRepository``.

Business rules enforced here:
- Price must be present and greater than zero on create and on every
  update that carries a price.
- A product must belong to an existing restaurant.
- ``available`` defaults to ``True`` when not supplied.
- Every mutating operation saves exactly once.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, List, Optional

import structlog
from django.db import transaction

from modules.products.exceptions import ProductNotFound, RestaurantNotFound
from modules.products.models import Product
from modules.products.validators import validate_price

if TYPE_CHECKING:
    from modules.products.dtos import CreateProductDTO, UpdateProductDTO
    from modules.products.repositories.interfaces import IProductRepository
    from modules.restaurants.repositories.interfaces import IRestaurantRepository

logger = structlog.get_logger(__name__)

_PATCHABLE_FIELDS = ("name", "description", "category", "price", "available")


class ProductService:
    """Application service for Product use-cases.

    Receives its repositories via constructor injection (DIP).  Holds no
    state besides them, so one instance can be shared across requests.
    """

    def __init__(
        self,
        repository: IProductRepository,
        restaurant_repository: IRestaurantRepository,
    ) -> None:
        self._repo = repository
        self._restaurant_repo = restaurant_repository

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    @transaction.atomic
    def create_product(self, dto: CreateProductDTO) -> Product:
        """Create a product bound to an existing restaurant.

        Raises:
            InvalidPrice: price missing or not greater than zero.
            RestaurantNotFound: no restaurant id given, or it does not exist.
        """
        validate_price(dto.price)

        if dto.restaurant_id is None:
            raise RestaurantNotFound("Product must belong to a valid restaurant.")

        restaurant = self._restaurant_repo.get_by_id(dto.restaurant_id)
        if not restaurant:
            logger.warning("product.restaurant_not_found", restaurant_id=dto.restaurant_id)
            raise RestaurantNotFound(f"Restaurant {dto.restaurant_id} not found.")

        product = Product(
            name=dto.name,
            description=dto.description,
            category=dto.category,
            price=dto.price,
            available=True if dto.available is None else dto.available,
            restaurant=restaurant,
        )
        product = self._repo.save(product)
        logger.info(
            "product.created",
            product_id=product.id,
            restaurant_id=restaurant.id,
        )
        return product

    @transaction.atomic
    def update_product(self, id: int, dto: UpdateProductDTO) -> Product:
        """Apply the fields present in ``dto`` to an existing product.

        Raises:
            ProductNotFound: if the product does not exist.
            InvalidPrice: if the patch carries a non-positive price.
        """
        product = self._get_or_raise(id)

        if dto.price is not None:
            validate_price(dto.price)

        for field in _PATCHABLE_FIELDS:
            value = getattr(dto, field)
            if value is not None:
                setattr(product, field, value)

        product = self._repo.save(product)
        logger.info("product.updated", product_id=id)
        return product

    @transaction.atomic
    def deactivate_product(self, id: int) -> Product:
        """Hide a product from new orders.

        Raises:
            ProductNotFound: if the product does not exist.
        """
        return self.set_availability(id, False)

    @transaction.atomic
    def set_availability(self, id: int, available: bool) -> Product:
        """Set the ``available`` flag; repeating the call changes nothing.

        Raises:
            ProductNotFound: if the product does not exist.
        """
        product = self._get_or_raise(id)
        product.available = available
        product = self._repo.save(product)
        logger.info("product.availability_changed", product_id=id, available=available)
        return product

    @transaction.atomic
    def delete_product(self, id: int) -> None:
        """Delete a product.  Orders keep their snapshotted line items.

        Raises:
            ProductNotFound: if the product does not exist.
        """
        if not self._repo.exists(id):
            raise ProductNotFound(f"Product {id} not found.")
        self._repo.delete(id)
        logger.info("product.deleted", product_id=id)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_product(self, id: int) -> Optional[Product]:
        return self._repo.get_by_id(id)

    def list_products(self) -> List[Product]:
        return self._repo.list()

    def list_by_restaurant(self, restaurant_id: int) -> List[Product]:
        return self._repo.list_by_restaurant(restaurant_id)

    def list_by_category(self, category: str) -> List[Product]:
        return self._repo.list_by_category(category)

    def search_by_name(self, term: str) -> List[Product]:
        return self._repo.search_by_name(term)

    def list_available(self) -> List[Product]:
        return self._repo.list_available()

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _get_or_raise(self, id: int) -> Product:
        product = self._repo.get_by_id(id)
        if not product:
            raise ProductNotFound(f"Product {id} not found.")
        return product
