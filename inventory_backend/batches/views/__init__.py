from .batch import BatchViewSet
from .stock import StockViewSet

__all__ = ["BatchViewSet", "StockViewSet"]
