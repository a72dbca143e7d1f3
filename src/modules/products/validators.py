"""Price validation shared by product creation and updates."""

from __future__ import annotations

from decimal import Decimal
from typing import Optional

from modules.products.exceptions import InvalidPrice

CENT = Decimal("0.01")

# ``Product.price`` is DecimalField(max_digits=10, decimal_places=2).
MAX_PRICE = Decimal("99999999.99")


def validate_price(price: Optional[Decimal]) -> None:
    """Reject a price that cannot be stored as a positive amount.

    The price must be present, greater than zero and representable in
    the ``price`` column exactly: at most two decimal places and no more
    than ``MAX_PRICE``.  A value such as ``0.001`` is rejected instead of
    being rounded to ``0.00`` on save.

    Raises:
        InvalidPrice: if ``price`` is ``None``, ``<= 0``, too large or has
            sub-cent digits.
    """
    if price is None or price <= 0:
        raise InvalidPrice(f"Price must be greater than zero (got {price}).")
    if price > MAX_PRICE:
        raise InvalidPrice(f"Price must not exceed {MAX_PRICE} (got {price}).")
    if price != price.quantize(CENT):
        raise InvalidPrice(f"Price must have at most two decimal places (got {price}).")
