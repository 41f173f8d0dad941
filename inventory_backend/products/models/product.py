# products/models/product.py

import uuid
from decimal import Decimal

from django.core.exceptions import ValidationError
from django.db import models

from products.services.exceptions import InvalidInput
from products.services.packaging import compute_packs


class Product(models.Model):
    """
    Represents a stocked chemical / pharmaceutical product.

    STOCK MODEL (IMPORTANT):
    - Product itself does NOT store stock
    - Stock lives in batches.Batch
    - Stock totals are derived on demand (batches.services.aggregation)

    PACKAGING:
    - total_quantity / per_pack_weight are optional bulk metadata
    - calculated_packs is ALWAYS derived in save(), never user-controlled
    """

    class Category(models.TextChoices):
        API = "api", "API"
        EXCIPIENT = "excipient", "Excipient"
        SOLVENT = "solvent", "Solvent"
        OTHER = "other", "Other"

    class Unit(models.TextChoices):
        KG = "kg", "Kilogram"
        G = "g", "Gram"
        L = "l", "Litre"
        ML = "ml", "Millilitre"
        PCS = "pcs", "Pieces"

    class PackType(models.TextChoices):
        BAG = "Bag", "Bag"
        DRUM = "Drum", "Drum"
        BOX = "Box", "Box"
        BOTTLE = "Bottle", "Bottle"
        CARTON = "Carton", "Carton"
        OTHER = "Other", "Other"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    name = models.CharField(max_length=255, db_index=True)
    code = models.CharField(max_length=64, unique=True)
    hsn_code = models.CharField(max_length=32, blank=True, default="")

    category = models.CharField(
        max_length=16,
        choices=Category.choices,
        default=Category.API,
    )
    unit = models.CharField(max_length=8, choices=Unit.choices, default=Unit.KG)

    packaging_type = models.CharField(max_length=64, blank=True, default="")
    default_supplier = models.CharField(max_length=255, blank=True, default="")
    description = models.TextField(blank=True, default="")

    # Packaging metadata (optional)
    total_quantity = models.DecimalField(
        max_digits=14, decimal_places=3, null=True, blank=True
    )
    per_pack_weight = models.DecimalField(
        max_digits=14, decimal_places=3, null=True, blank=True
    )
    pack_type = models.CharField(
        max_length=16, choices=PackType.choices, null=True, blank=True
    )

    # Derived in save(); never edited directly
    calculated_packs = models.PositiveBigIntegerField(null=True, blank=True, editable=False)

    is_active = models.BooleanField(default=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["is_active", "created_at"]),
            models.Index(fields=["category"]),
        ]

    def __str__(self):
        return f"{self.name} ({self.code})"

    def clean(self):
        if not (self.code or "").strip():
            raise ValidationError({"code": "code is required"})

        for field_name in ("total_quantity", "per_pack_weight"):
            value = getattr(self, field_name)
            if value is not None and Decimal(value) < Decimal("0"):
                raise ValidationError({field_name: f"{field_name} cannot be negative"})

    def refresh_packs(self) -> None:
        """Re-derive calculated_packs from the current packaging inputs."""
        try:
            self.calculated_packs = compute_packs(self.total_quantity, self.per_pack_weight)
        except InvalidInput as exc:
            raise ValidationError(str(exc)) from exc

    def save(self, *args, **kwargs):
        self.code = (self.code or "").strip().upper()
        self.refresh_packs()

        # update_fields callers touching packaging inputs must persist the result too
        update_fields = kwargs.get("update_fields")
        if update_fields is not None:
            touched = {"total_quantity", "per_pack_weight"} & set(update_fields)
            if touched:
                kwargs["update_fields"] = set(update_fields) | {"calculated_packs"}

        self.full_clean()
        super().save(*args, **kwargs)
