# sales/models/delivery_challan.py

"""
DELIVERY CHALLAN (REFERENCE-ONLY)

Delivery document sent with goods. Like sales invoices, any line item
referencing a product blocks that product's deletion.
"""

from __future__ import annotations

import uuid

from django.db import models
from django.utils import timezone

from products.models import Product


class DeliveryChallan(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    challan_no = models.CharField(max_length=64, unique=True)
    consignee = models.CharField(max_length=255, blank=True, default="")
    challan_date = models.DateField(default=timezone.localdate)

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-challan_date", "-created_at"]

    def __str__(self):
        return self.challan_no


class DeliveryChallanItem(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    challan = models.ForeignKey(
        DeliveryChallan,
        on_delete=models.CASCADE,
        related_name="items",
    )

    product = models.ForeignKey(
        Product,
        on_delete=models.PROTECT,
        related_name="delivery_challan_items",
    )

    batch = models.ForeignKey(
        "batches.Batch",
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name="delivery_challan_items",
    )

    quantity = models.DecimalField(max_digits=14, decimal_places=3)

    class Meta:
        indexes = [models.Index(fields=["product"])]

    def __str__(self):
        return f"{self.challan_id} | {self.product_id} | {self.quantity}"
