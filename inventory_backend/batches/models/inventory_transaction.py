# batches/models/inventory_transaction.py

"""
INVENTORY TRANSACTION

Stock movement record. Keyed to a product and (usually) one of its batches.

These rows are the ONLY thing that changes Batch.current_stock; the
aggregation engine only reads the resulting batch state.
"""

import uuid
from decimal import Decimal

from django.core.exceptions import ValidationError
from django.db import models

from products.models import Product

from .batch import Batch


class InventoryTransaction(models.Model):
    class TransactionType(models.TextChoices):
        IN = "in", "Stock In"
        OUT = "out", "Stock Out"
        ADJUSTMENT = "adjustment", "Adjustment"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    product = models.ForeignKey(
        Product,
        on_delete=models.PROTECT,
        related_name="inventory_transactions",
    )
    batch = models.ForeignKey(
        Batch,
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name="inventory_transactions",
    )

    transaction_type = models.CharField(max_length=16, choices=TransactionType.choices)
    quantity = models.DecimalField(max_digits=14, decimal_places=3)
    reference = models.CharField(max_length=128, blank=True, default="")

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["created_at"]
        indexes = [
            models.Index(fields=["product", "created_at"]),
            models.Index(fields=["batch", "created_at"]),
        ]

    def clean(self):
        if self.quantity is None or Decimal(self.quantity) <= Decimal("0"):
            raise ValidationError({"quantity": "quantity must be greater than zero"})

        if self.batch_id and self.product_id:
            owner_id = (
                Batch.objects.filter(id=self.batch_id)
                .values_list("product_id", flat=True)
                .first()
            )
            if owner_id is not None and owner_id != self.product_id:
                raise ValidationError("Batch does not belong to product")

    def save(self, *args, **kwargs):
        self.full_clean()
        return super().save(*args, **kwargs)

    def __str__(self):
        return f"{self.product_id} | {self.transaction_type} | {self.quantity}"
