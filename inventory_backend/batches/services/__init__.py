from .aggregation import StockSummary, summarize_batches
from .expiry import NEAR_EXPIRY_WINDOW, ExpiryClass, classify_expiry
from .ordering import order_batches_fefo
from .records import BatchRecord

__all__ = [
    "BatchRecord",
    "StockSummary",
    "summarize_batches",
    "ExpiryClass",
    "NEAR_EXPIRY_WINDOW",
    "classify_expiry",
    "order_batches_fefo",
]
