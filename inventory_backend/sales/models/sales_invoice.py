# sales/models/sales_invoice.py

"""
SALES INVOICE (REFERENCE-ONLY)

Invoice generation is out of scope for this backend. These models exist so
that product deletion can see whether a product has ever been sold.

Rule:
- SalesInvoiceItem.product is PROTECT: a sold product can be deactivated,
  never deleted.
"""

from __future__ import annotations

import uuid

from django.db import models
from django.utils import timezone

from products.models import Product


class SalesInvoice(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    invoice_no = models.CharField(max_length=64, unique=True)
    customer_name = models.CharField(max_length=255, blank=True, default="")
    invoice_date = models.DateField(default=timezone.localdate)

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-invoice_date", "-created_at"]

    def __str__(self):
        return self.invoice_no


class SalesInvoiceItem(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    invoice = models.ForeignKey(
        SalesInvoice,
        on_delete=models.CASCADE,
        related_name="items",
    )

    product = models.ForeignKey(
        Product,
        on_delete=models.PROTECT,
        related_name="sales_invoice_items",
    )

    # Optional traceability to the lot sold from
    batch = models.ForeignKey(
        "batches.Batch",
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name="sales_invoice_items",
    )

    quantity = models.DecimalField(max_digits=14, decimal_places=3)

    class Meta:
        indexes = [models.Index(fields=["product"])]

    def __str__(self):
        return f"{self.invoice_id} | {self.product_id} | {self.quantity}"
