# batches/models/batch.py

"""
BATCH (LOT-BASED INVENTORY)

Represents ONE dated lot of a product.

MODEL RULES:
- A batch belongs to exactly one product
- batch_number is unique within its product
- current_stock is never negative (DB constraint)
- current_stock is mutated by inventory transactions, NEVER by the
  stock aggregation engine (read-only w.r.t. quantities)
- A batch is retired by is_active=False or by stock reaching zero;
  it is destroyed only by an explicit cascade delete of its product
"""

import uuid
from decimal import Decimal

from django.core.exceptions import ValidationError
from django.db import models
from django.db.models import F, Q
from django.utils import timezone

from products.models import Product


class Batch(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    product = models.ForeignKey(
        Product,
        on_delete=models.PROTECT,
        related_name="batches",
    )

    batch_number = models.CharField(max_length=128)

    current_stock = models.DecimalField(
        max_digits=14,
        decimal_places=3,
        default=Decimal("0"),
    )

    expiry_date = models.DateField(null=True, blank=True)
    import_date = models.DateField(default=timezone.localdate)

    is_active = models.BooleanField(default=True)

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        # FEFO: earliest expiry first, undated lots last
        ordering = [F("expiry_date").asc(nulls_last=True), "batch_number"]
        indexes = [
            models.Index(fields=["product", "is_active", "expiry_date"]),
            models.Index(fields=["expiry_date"]),
        ]
        constraints = [
            models.UniqueConstraint(
                fields=["product", "batch_number"],
                name="unique_batch_number_per_product",
            ),
            models.CheckConstraint(
                condition=Q(current_stock__gte=0),
                name="chk_batch_current_stock_gte_zero",
            ),
        ]

    def clean(self):
        if not (self.batch_number or "").strip():
            raise ValidationError({"batch_number": "batch_number is required"})

        if self.current_stock is None or Decimal(self.current_stock) < Decimal("0"):
            raise ValidationError({"current_stock": "current_stock cannot be negative"})

    def save(self, *args, **kwargs):
        self.batch_number = (self.batch_number or "").strip()
        self.full_clean()
        super().save(*args, **kwargs)

    @property
    def is_in_stock(self) -> bool:
        return bool(self.is_active) and Decimal(self.current_stock or 0) > 0

    def __str__(self):
        product_name = getattr(self.product, "name", "Product")
        return f"{product_name} | Batch {self.batch_number}"
