# batches/serializers/stock.py

"""
STOCK VIEW SERIALIZERS (READ-ONLY)

Serialize engine dataclasses (StockSummary, BatchRecord, StockOverviewRow).
Expiry classes are computed by the view with the request's "now" and
passed in via context["now"].
"""

from rest_framework import serializers

from batches.services.expiry import classify_expiry


class StockSummarySerializer(serializers.Serializer):
    product_id = serializers.UUIDField()
    total_current_stock = serializers.DecimalField(max_digits=16, decimal_places=3)
    active_batch_count = serializers.IntegerField()
    expired_batch_count = serializers.IntegerField()
    nearest_expiry_date = serializers.DateField(allow_null=True)
    nearest_expiry_class = serializers.SerializerMethodField()

    def get_nearest_expiry_class(self, obj) -> str:
        return classify_expiry(obj.nearest_expiry_date, self.context["now"]).value


class OrderedBatchSerializer(serializers.Serializer):
    id = serializers.UUIDField()
    batch_number = serializers.CharField()
    current_stock = serializers.DecimalField(max_digits=14, decimal_places=3)
    expiry_date = serializers.DateField(allow_null=True)
    import_date = serializers.DateField(allow_null=True)
    expiry_class = serializers.SerializerMethodField()

    def get_expiry_class(self, obj) -> str:
        return classify_expiry(obj.expiry_date, self.context["now"]).value


class StockOverviewRowSerializer(serializers.Serializer):
    product_id = serializers.UUIDField(source="product.id")
    product_name = serializers.CharField(source="product.name")
    product_code = serializers.CharField(source="product.code")
    unit = serializers.CharField(source="product.unit")
    category = serializers.CharField(source="product.category")
    total_current_stock = serializers.DecimalField(
        source="summary.total_current_stock", max_digits=16, decimal_places=3
    )
    active_batch_count = serializers.IntegerField(source="summary.active_batch_count")
    expired_batch_count = serializers.IntegerField(source="summary.expired_batch_count")
    nearest_expiry_date = serializers.DateField(
        source="summary.nearest_expiry_date", allow_null=True
    )
    nearest_expiry_class = serializers.CharField(source="nearest_expiry_class.value")
    stock_level = serializers.CharField(source="stock_level.value")


class StockDashboardSerializer(serializers.Serializer):
    total_stock = serializers.DecimalField(max_digits=18, decimal_places=3)
    product_count = serializers.IntegerField()
    low_stock_count = serializers.IntegerField()
    near_expiry_count = serializers.IntegerField()
