"""Django ORM implementation of the Product repository.

Satisfies ``IProductRepository`` using Django's QuerySet API.
Error handling follows the Null Object pattern: methods return ``None``
instead of raising HTTP-level exceptions; the Service Layer decides
how to translate a missing entity into an API response.
"""

from __future__ import annotations

from typing import List, Optional

import structlog

from django.core.exceptions import ValidationError
from django.db import transaction

from modules.products.models import Product
from modules.products.repositories.interfaces import IProductRepository

logger = structlog.get_logger(__name__)


class ProductDjangoRepository(IProductRepository):
    """Concrete Product repository backed by Django ORM."""

    def get_by_id(self, id: int) -> Optional[Product]:
        """Retrieve a product by primary key.

        Returns ``None`` for non-existent or malformed IDs.
        """
        try:
            return Product.objects.filter(id=id).first()
        except (ValueError, TypeError, ValidationError):
            return None

    def list(self) -> List[Product]:
        return list(Product.objects.all())

    @transaction.atomic
    def save(self, entity: Product) -> Product:
        """Persist (create or update) a product."""
        entity.save()
        logger.info(
            "product.saved",
            product_id=entity.id,
            available=entity.available,
        )
        return entity

    def exists(self, id: int) -> bool:
        try:
            return Product.objects.filter(id=id).exists()
        except (ValueError, TypeError, ValidationError):
            return False

    @transaction.atomic
    def delete(self, id: int) -> bool:
        """Delete a product by ID.

        Order items pointing at it keep their snapshot and lose the
        reference (``on_delete=SET_NULL``).  Returns ``False`` if no
        product exists with the given ID.
        """
        deleted, _ = Product.objects.filter(id=id).delete()
        if deleted:
            logger.info("product.deleted", product_id=id)
        return bool(deleted)

    # ------------------------------------------------------------------
    # Catalogue queries
    # ------------------------------------------------------------------

    def list_by_restaurant(self, restaurant_id: int) -> List[Product]:
        try:
            return list(Product.objects.filter(restaurant_id=restaurant_id))
        except (ValueError, TypeError, ValidationError):
            return []

    def list_by_category(self, category: str) -> List[Product]:
        return list(Product.objects.filter(category__iexact=category))

    def list_available(self) -> List[Product]:
        return list(Product.objects.filter(available=True))

    def search_by_name(self, term: str) -> List[Product]:
        return list(Product.objects.filter(name__icontains=term))

    def get_for_update(self, id: int) -> Optional[Product]:
        try:
            return Product.objects.select_for_update().filter(id=id).first()
        except (ValueError, TypeError, ValidationError):
            return None
