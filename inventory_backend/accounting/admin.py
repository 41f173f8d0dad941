# accounting/admin.py

from django.contrib import admin

from accounting.models import FinanceExpense


@admin.register(FinanceExpense)
class FinanceExpenseAdmin(admin.ModelAdmin):
    list_display = ("expense_date", "category", "amount", "batch", "vendor")
    list_filter = ("category", "expense_date")
    search_fields = ("vendor", "narration", "batch__batch_number")
    raw_id_fields = ("batch",)
    ordering = ("-expense_date",)
