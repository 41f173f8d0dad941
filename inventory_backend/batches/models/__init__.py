# batches/models/__init__.py

from .batch import Batch as Batch
from .batch_document import BatchDocument as BatchDocument
from .inventory_transaction import InventoryTransaction as InventoryTransaction

__all__ = ["Batch", "BatchDocument", "InventoryTransaction"]
