# batches/services/records.py

"""
BATCH RECORDS (ENGINE INPUT)

Plain, immutable snapshots of batch rows. The aggregation / ordering /
classification engine works on these instead of ORM instances so it stays
store-agnostic and testable without a database.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Any, Optional


@dataclass(frozen=True)
class BatchRecord:
    id: Any
    product_id: Any
    batch_number: str
    current_stock: Decimal
    expiry_date: Optional[date] = None
    import_date: Optional[date] = None
    is_active: bool = True

    @property
    def is_in_stock(self) -> bool:
        return self.is_active and self.current_stock > 0

    @classmethod
    def from_batch(cls, batch) -> "BatchRecord":
        return cls(
            id=batch.id,
            product_id=batch.product_id,
            batch_number=batch.batch_number,
            current_stock=Decimal(batch.current_stock or 0),
            expiry_date=batch.expiry_date,
            import_date=batch.import_date,
            is_active=bool(batch.is_active),
        )


def parse_id(value) -> Optional[uuid.UUID]:
    """Product / batch id as a UUID, or None when the value cannot be one."""
    if isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(str(value))
    except (TypeError, ValueError):
        return None
