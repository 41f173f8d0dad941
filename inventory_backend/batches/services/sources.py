# batches/services/sources.py

"""
BATCH SOURCE (READ INTERFACE)

What the stock engine needs from storage, and the Django ORM implementation.

Contract:
- product_exists(product_id) -> bool
- list_batches(product_id) -> all batches of the product (any state)
- list_ordered_batches(product_id) -> active, stock > 0, FEFO ordered
- get_batch(batch_id) -> BatchRecord or None
- list_products() -> ProductRef for every product
- list_batches_by_product() -> {product_id: [BatchRecord, ...]}

Ids that are not valid UUIDs behave as missing rows (False / [] / None).

Every call re-reads current state; nothing is cached between calls.
"""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Protocol

from django.db.models import F

from batches.models import Batch
from batches.services.records import BatchRecord, parse_id
from products.models import Product


@dataclass(frozen=True)
class ProductRef:
    id: Any
    name: str
    code: str
    unit: str
    category: str
    is_active: bool = True


class BatchSource(Protocol):
    def product_exists(self, product_id) -> bool: ...

    def list_batches(self, product_id) -> List[BatchRecord]: ...

    def list_ordered_batches(self, product_id) -> List[BatchRecord]: ...

    def get_batch(self, batch_id) -> Optional[BatchRecord]: ...

    def list_products(self) -> List[ProductRef]: ...

    def list_batches_by_product(self) -> Dict[Any, List[BatchRecord]]: ...


class DjangoBatchSource:
    """BatchSource over the Django ORM."""

    def product_exists(self, product_id) -> bool:
        pid = parse_id(product_id)
        return pid is not None and Product.objects.filter(id=pid).exists()

    def list_batches(self, product_id) -> List[BatchRecord]:
        pid = parse_id(product_id)
        if pid is None:
            return []
        qs = Batch.objects.filter(product_id=pid)
        return [BatchRecord.from_batch(b) for b in qs]

    def list_ordered_batches(self, product_id) -> List[BatchRecord]:
        pid = parse_id(product_id)
        if pid is None:
            return []
        qs = Batch.objects.filter(
            product_id=pid,
            is_active=True,
            current_stock__gt=0,
        ).order_by(F("expiry_date").asc(nulls_last=True), "batch_number", "id")
        return [BatchRecord.from_batch(b) for b in qs]

    def get_batch(self, batch_id) -> Optional[BatchRecord]:
        bid = parse_id(batch_id)
        if bid is None:
            return None
        batch = Batch.objects.filter(id=bid).first()
        return BatchRecord.from_batch(batch) if batch else None

    def list_products(self) -> List[ProductRef]:
        qs = Product.objects.only("id", "name", "code", "unit", "category", "is_active")
        return [
            ProductRef(
                id=p.id,
                name=p.name,
                code=p.code,
                unit=p.unit,
                category=p.category,
                is_active=p.is_active,
            )
            for p in qs
        ]

    def list_batches_by_product(self) -> Dict[Any, List[BatchRecord]]:
        grouped: Dict[Any, List[BatchRecord]] = defaultdict(list)
        for batch in Batch.objects.all():
            grouped[batch.product_id].append(BatchRecord.from_batch(batch))
        return dict(grouped)
