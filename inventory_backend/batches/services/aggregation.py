# batches/services/aggregation.py

"""
STOCK AGGREGATOR

Rolls a product's batches into one StockSummary.

RULES:
- total_current_stock: sum of current_stock over ACTIVE batches
  (zero-stock active batches contribute 0)
- active_batch_count: number of ACTIVE batches
- expired_batch_count: batches with expiry_date < now, active or not
  (a batch can be counted as both active and expired)
- nearest_expiry_date: min expiry_date over active batches with stock > 0;
  undated batches are ignored, not treated as "soonest"

Pure read-and-reduce. No filtering of zero-stock products here;
"in stock" listings filter on the result.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Any, Iterable, Optional

from batches.services.expiry import is_expired
from batches.services.records import BatchRecord


@dataclass(frozen=True)
class StockSummary:
    product_id: Any
    total_current_stock: Decimal
    active_batch_count: int
    expired_batch_count: int
    nearest_expiry_date: Optional[date]

    @property
    def is_in_stock(self) -> bool:
        return self.total_current_stock > 0


def summarize_batches(product_id, batches: Iterable[BatchRecord], *, now) -> StockSummary:
    total = Decimal("0")
    active_count = 0
    expired_count = 0
    nearest: Optional[date] = None

    for batch in batches:
        if batch.is_active:
            active_count += 1
            total += batch.current_stock

        if is_expired(batch.expiry_date, now):
            expired_count += 1

        if batch.is_in_stock and batch.expiry_date is not None:
            if nearest is None or batch.expiry_date < nearest:
                nearest = batch.expiry_date

    return StockSummary(
        product_id=product_id,
        total_current_stock=total,
        active_batch_count=active_count,
        expired_batch_count=expired_count,
        nearest_expiry_date=nearest,
    )
