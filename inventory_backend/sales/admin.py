from django.contrib import admin

from sales.models import DeliveryChallan, DeliveryChallanItem, SalesInvoice, SalesInvoiceItem


class SalesInvoiceItemInline(admin.TabularInline):
    model = SalesInvoiceItem
    extra = 0
    raw_id_fields = ("product", "batch")


@admin.register(SalesInvoice)
class SalesInvoiceAdmin(admin.ModelAdmin):
    list_display = ("invoice_no", "customer_name", "invoice_date")
    search_fields = ("invoice_no", "customer_name")
    inlines = [SalesInvoiceItemInline]


class DeliveryChallanItemInline(admin.TabularInline):
    model = DeliveryChallanItem
    extra = 0
    raw_id_fields = ("product", "batch")


@admin.register(DeliveryChallan)
class DeliveryChallanAdmin(admin.ModelAdmin):
    list_display = ("challan_no", "consignee", "challan_date")
    search_fields = ("challan_no", "consignee")
    inlines = [DeliveryChallanItemInline]
