from .batch import BatchSerializer
from .stock import OrderedBatchSerializer, StockOverviewRowSerializer, StockSummarySerializer

__all__ = [
    "BatchSerializer",
    "OrderedBatchSerializer",
    "StockSummarySerializer",
    "StockOverviewRowSerializer",
]
