# products/admin.py
"""
PATH: products/admin.py

Admin rules:
- calculated_packs is derived on save and shown read-only.
- Products are NOT deletable from the admin. Deletion must go through
  products.services.deletion (reference check + confirmed cascade);
  the admin offers "deactivate" instead.
"""

from __future__ import annotations

from django.contrib import admin

from products.models import Product, ProductFile
from products.services.deletion import deactivate_product


class ProductFileInline(admin.TabularInline):
    model = ProductFile
    extra = 0
    fields = ("file_name", "file_url", "uploaded_at")
    readonly_fields = ("uploaded_at",)

    def has_delete_permission(self, request, obj=None):
        return False


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    list_display = (
        "code",
        "name",
        "category",
        "unit",
        "total_quantity",
        "per_pack_weight",
        "calculated_packs",
        "is_active",
        "created_at",
    )
    list_filter = ("category", "unit", "is_active")
    search_fields = ("code", "name", "hsn_code")
    readonly_fields = ("calculated_packs", "created_at", "updated_at")
    inlines = [ProductFileInline]
    actions = ["deactivate_selected"]

    def has_delete_permission(self, request, obj=None):
        return False

    @admin.action(description="Deactivate selected products")
    def deactivate_selected(self, request, queryset):
        for product_id in queryset.values_list("id", flat=True):
            deactivate_product(product_id)
