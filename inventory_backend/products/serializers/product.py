# products/serializers/product.py

"""
PRODUCT SERIALIZER

Purpose:
- Product CRUD boundary.
- calculated_packs is read-only: Product.save() derives it from
  total_quantity / per_pack_weight on every write.
- Stock is NOT exposed here; it is derived from batches
  (see batches.services.stock).
"""

from decimal import Decimal

from rest_framework import serializers

from products.models import Product


class ProductSerializer(serializers.ModelSerializer):
    class Meta:
        model = Product
        fields = [
            "id",
            "name",
            "code",
            "hsn_code",
            "category",
            "unit",
            "packaging_type",
            "default_supplier",
            "description",
            "total_quantity",
            "per_pack_weight",
            "pack_type",
            "calculated_packs",
            "is_active",
            "created_at",
            "updated_at",
        ]
        read_only_fields = [
            "id",
            "calculated_packs",
            "created_at",
            "updated_at",
        ]

    def validate_code(self, value):
        value = (value or "").strip().upper()
        if not value:
            raise serializers.ValidationError("code is required")

        # The model field validator sees the raw input; codes are stored upper-cased
        clash = Product.objects.filter(code=value)
        if self.instance is not None:
            clash = clash.exclude(pk=self.instance.pk)
        if clash.exists():
            raise serializers.ValidationError("product with this code already exists")
        return value

    def validate_name(self, value):
        value = (value or "").strip()
        if not value:
            raise serializers.ValidationError("name is required")
        return value

    def _validate_non_negative(self, value, field_name):
        if value is not None and value < Decimal("0"):
            raise serializers.ValidationError(f"{field_name} cannot be negative")
        return value

    def validate_total_quantity(self, value):
        return self._validate_non_negative(value, "total_quantity")

    def validate_per_pack_weight(self, value):
        return self._validate_non_negative(value, "per_pack_weight")

