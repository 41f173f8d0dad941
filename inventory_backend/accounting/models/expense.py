# accounting/models/expense.py

from __future__ import annotations

from django.core.validators import MinValueValidator
from django.db import models
from django.utils import timezone


class FinanceExpense(models.Model):
    """
    Expense entry, optionally tied to the batch it was incurred for
    (import duty, freight, lab testing).

    Rule:
    - Batch-linked expenses live and die with their batch: a confirmed
      product cascade delete removes them before the batch row.
    """

    class Category(models.TextChoices):
        IMPORT_DUTY = "import_duty", "Import Duty"
        FREIGHT = "freight", "Freight"
        TESTING = "testing", "Lab Testing"
        OTHER = "other", "Other"

    expense_date = models.DateField(default=timezone.localdate)

    amount = models.DecimalField(
        max_digits=14,
        decimal_places=2,
        validators=[MinValueValidator(0.01)],
    )

    category = models.CharField(
        max_length=16,
        choices=Category.choices,
        default=Category.OTHER,
    )

    batch = models.ForeignKey(
        "batches.Batch",
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name="finance_expenses",
    )

    vendor = models.CharField(max_length=150, blank=True, default="")
    narration = models.CharField(max_length=255, blank=True, default="")

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-expense_date", "-created_at"]
        verbose_name = "Expense"
        verbose_name_plural = "Expenses"
        indexes = [
            models.Index(fields=["expense_date"]),
            models.Index(fields=["batch"]),
        ]

    def __str__(self):
        return f"Expense #{self.id} - {self.amount} ({self.expense_date})"
