# products/serializers/deletion.py

"""
DELETION DISPOSITION SERIALIZERS (READ-ONLY)

Render check_deletable() / delete_product() outcomes as structured data so
the client can show specific operator guidance instead of a generic error.
"""

from rest_framework import serializers

from products.services.deletion import Blocked, CascadeRequired


class BatchRefSerializer(serializers.Serializer):
    id = serializers.UUIDField()
    batch_number = serializers.CharField()
    current_stock = serializers.DecimalField(max_digits=14, decimal_places=3)
    expiry_date = serializers.DateField(allow_null=True)
    is_active = serializers.BooleanField()


def disposition_payload(disposition) -> dict:
    payload = {"disposition": disposition.kind}

    if isinstance(disposition, Blocked):
        payload["reason"] = disposition.reason.value
        payload["message"] = disposition.message

    elif isinstance(disposition, CascadeRequired):
        payload["batch_count"] = disposition.batch_count
        payload["batches"] = BatchRefSerializer(disposition.batches, many=True).data
        payload["message"] = disposition.confirmation_message()

    return payload


class PacksQuerySerializer(serializers.Serializer):
    total_quantity = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    per_pack_weight = serializers.CharField(required=False, allow_blank=True, allow_null=True)
