"""Customer model.

Business rules implemented:
- Email must be unique across active and inactive customers.
- Inactive customers are kept (``is_active=False``) so that orders keep
  pointing at them.
"""

from __future__ import annotations

from django.db import models

from modules.core.models import BaseModel


class Customer(BaseModel):
    """Customer aggregate root.

    ``email`` is normalised to lowercase on save so uniqueness does not
    depend on the casing the client sent.
    """

    name = models.CharField(max_length=255)
    email = models.EmailField(max_length=254, unique=True)
    phone = models.CharField(max_length=20, blank=True, default="")
    is_active = models.BooleanField(default=True)

    class Meta:
        db_table = "customers"
        ordering = ["-created_at", "-id"]
        indexes = [
            models.Index(fields=["is_active"], name="customers_active_idx"),
        ]

    def save(self, *args, **kwargs) -> None:
        if self.email:
            self.email = self.email.strip().lower()
        super().save(*args, **kwargs)

    def __str__(self) -> str:
        return f"{self.name} <{self.email}>"
