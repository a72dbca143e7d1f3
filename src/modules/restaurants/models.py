"""Restaurant model.

Products belong to a restaurant; the order and product rules only need
to check that a restaurant exists, so the model stays minimal.
"""

from __future__ import annotations

from django.db import models

from modules.core.models import BaseModel


class Restaurant(BaseModel):
    """Owner of a menu of products."""

    name = models.CharField(max_length=255)

    class Meta:
        db_table = "restaurants"
        ordering = ["name"]

    def __str__(self) -> str:
        return self.name
