# batches/services/stock.py

"""
STOCK SERVICE (ENGINE FACADE)

Operations exposed to the presentation layer:
- summarize_stock(product_id, now=...)     -> StockSummary | NotFound
- list_ordered_batches(product_id)         -> FEFO list of in-stock batches
- get_batch(batch_id)                      -> BatchRecord | NotFound
- classify_expiry(date, now)               -> ExpiryClass
- compute_packs(total, per_pack)           -> int | None
- list_stock_overview(now=...)             -> in-stock products, by name
- stock_dashboard(rows)                    -> totals for the stock page

Deletion lives in products.services.deletion.

`now` is a required argument everywhere: views pass timezone.localdate(),
tests pass fixed dates.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import List, Optional

from django.conf import settings

from batches.services.aggregation import StockSummary, summarize_batches
from batches.services.expiry import ExpiryClass, classify_expiry
from batches.services.ordering import order_batches_fefo
from batches.services.records import BatchRecord
from batches.services.sources import BatchSource, DjangoBatchSource, ProductRef
from products.services.exceptions import NotFound
from products.services.packaging import compute_packs

__all__ = [
    "StockLevel",
    "StockOverviewRow",
    "StockDashboard",
    "summarize_stock",
    "list_ordered_batches",
    "get_batch",
    "classify_expiry",
    "compute_packs",
    "stock_level",
    "list_stock_overview",
    "stock_dashboard",
]


class StockLevel(str, Enum):
    OUT = "out"
    LOW = "low"
    OK = "ok"


@dataclass(frozen=True)
class StockOverviewRow:
    product: ProductRef
    summary: StockSummary
    nearest_expiry_class: ExpiryClass
    stock_level: StockLevel


@dataclass(frozen=True)
class StockDashboard:
    total_stock: Decimal
    product_count: int
    low_stock_count: int
    near_expiry_count: int


def _source(source: Optional[BatchSource]) -> BatchSource:
    return source if source is not None else DjangoBatchSource()


def _low_stock_threshold(threshold) -> Decimal:
    if threshold is None:
        threshold = getattr(settings, "INVENTORY_LOW_STOCK_THRESHOLD", 500)
    return Decimal(str(threshold))


def summarize_stock(product_id, *, now, source: Optional[BatchSource] = None) -> StockSummary:
    src = _source(source)
    if not src.product_exists(product_id):
        raise NotFound(f"Product {product_id} not found")
    return summarize_batches(product_id, src.list_batches(product_id), now=now)


def list_ordered_batches(product_id, *, source: Optional[BatchSource] = None) -> List[BatchRecord]:
    src = _source(source)
    if not src.product_exists(product_id):
        raise NotFound(f"Product {product_id} not found")

    # The policy is applied here even if the source already ordered its rows
    in_stock = [b for b in src.list_ordered_batches(product_id) if b.is_in_stock]
    return order_batches_fefo(in_stock)


def get_batch(batch_id, *, source: Optional[BatchSource] = None) -> BatchRecord:
    batch = _source(source).get_batch(batch_id)
    if batch is None:
        raise NotFound(f"Batch {batch_id} not found")
    return batch


def stock_level(total, threshold=None) -> StockLevel:
    total = Decimal(total or 0)
    if total <= 0:
        return StockLevel.OUT
    if total < _low_stock_threshold(threshold):
        return StockLevel.LOW
    return StockLevel.OK


def list_stock_overview(
    *,
    now,
    source: Optional[BatchSource] = None,
    low_stock_threshold=None,
) -> List[StockOverviewRow]:
    """
    One row per product with total stock > 0, ordered by product name.

    Batches are read in a single pass; summaries are still computed per
    product by the aggregator.
    """
    src = _source(source)
    batches_by_product = src.list_batches_by_product()
    threshold = _low_stock_threshold(low_stock_threshold)

    rows: List[StockOverviewRow] = []
    for product in src.list_products():
        summary = summarize_batches(
            product.id, batches_by_product.get(product.id, []), now=now
        )
        if not summary.is_in_stock:
            continue

        rows.append(
            StockOverviewRow(
                product=product,
                summary=summary,
                nearest_expiry_class=classify_expiry(summary.nearest_expiry_date, now),
                stock_level=stock_level(summary.total_current_stock, threshold),
            )
        )

    rows.sort(key=lambda r: ((r.product.name or "").lower(), r.product.code or ""))
    return rows


def stock_dashboard(rows: List[StockOverviewRow], *, low_stock_threshold=None) -> StockDashboard:
    threshold = _low_stock_threshold(low_stock_threshold)
    return StockDashboard(
        total_stock=sum((r.summary.total_current_stock for r in rows), Decimal("0")),
        product_count=len(rows),
        low_stock_count=sum(1 for r in rows if r.summary.total_current_stock < threshold),
        near_expiry_count=sum(
            1 for r in rows if r.nearest_expiry_class == ExpiryClass.NEAR_EXPIRY
        ),
    )
