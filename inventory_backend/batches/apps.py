# batches/apps.py

"""
BATCHES APP CONFIG

Batch-level inventory:
- Batches, inventory transactions, batch documents
- Stock aggregation / expiry classification / FEFO ordering services
"""

from django.apps import AppConfig


class BatchesConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "batches"
    verbose_name = "Batches & Stock"
