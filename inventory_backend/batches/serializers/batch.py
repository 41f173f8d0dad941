# batches/serializers/batch.py

"""
BATCH SERIALIZER

Boundary rules:
- product is fixed at creation (never re-parented by PATCH)
- current_stock may be set on create (opening stock); afterwards it changes
  only through inventory transactions, so it is read-only on update
"""

from decimal import Decimal

from rest_framework import serializers

from batches.models import Batch


class BatchSerializer(serializers.ModelSerializer):
    product_name = serializers.CharField(source="product.name", read_only=True)

    class Meta:
        model = Batch
        fields = [
            "id",
            "product",
            "product_name",
            "batch_number",
            "current_stock",
            "expiry_date",
            "import_date",
            "is_active",
            "created_at",
        ]
        read_only_fields = ["id", "product_name", "created_at"]

    def validate_current_stock(self, value):
        if value is None or value < Decimal("0"):
            raise serializers.ValidationError("current_stock cannot be negative")
        return value

    def validate(self, attrs):
        if self.instance is not None:
            if "product" in attrs and attrs["product"] != self.instance.product:
                raise serializers.ValidationError({"product": "product cannot be changed"})
            if "current_stock" in attrs and attrs["current_stock"] != self.instance.current_stock:
                raise serializers.ValidationError(
                    {"current_stock": "stock changes must go through inventory transactions"}
                )

        product = attrs.get("product") or getattr(self.instance, "product", None)
        batch_number = (attrs.get("batch_number") or "").strip()
        if product is not None and batch_number:
            clash = Batch.objects.filter(product=product, batch_number=batch_number)
            if self.instance is not None:
                clash = clash.exclude(pk=self.instance.pk)
            if clash.exists():
                raise serializers.ValidationError(
                    {"batch_number": "batch_number already exists for this product"}
                )

        return attrs
