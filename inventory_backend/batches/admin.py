from django.contrib import admin

from batches.models import Batch, BatchDocument, InventoryTransaction


class BatchDocumentInline(admin.TabularInline):
    model = BatchDocument
    extra = 0


@admin.register(Batch)
class BatchAdmin(admin.ModelAdmin):
    list_display = (
        "product",
        "batch_number",
        "current_stock",
        "expiry_date",
        "import_date",
        "is_active",
    )
    list_filter = ("is_active", "expiry_date")
    search_fields = ("batch_number", "product__name", "product__code")
    inlines = [BatchDocumentInline]

    # Batches go away only with their product (confirmed cascade)
    def has_delete_permission(self, request, obj=None):
        return False


@admin.register(InventoryTransaction)
class InventoryTransactionAdmin(admin.ModelAdmin):
    list_display = ("product", "batch", "transaction_type", "quantity", "created_at")
    list_filter = ("transaction_type",)
    search_fields = ("reference", "product__code", "batch__batch_number")
