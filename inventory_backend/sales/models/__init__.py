# sales/models/__init__.py

"""
SALES MODELS PACKAGE EXPORTS

Purpose:
- Central export surface for sales app models.
"""

from .delivery_challan import DeliveryChallan, DeliveryChallanItem
from .sales_invoice import SalesInvoice, SalesInvoiceItem

__all__ = [
    "SalesInvoice",
    "SalesInvoiceItem",
    "DeliveryChallan",
    "DeliveryChallanItem",
]
