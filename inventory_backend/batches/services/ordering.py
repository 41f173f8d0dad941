# batches/services/ordering.py

"""
FEFO ORDERING POLICY

First-expire-first-out: ascending expiry date, undated batches last
("expires never"). Ties are broken by batch number, then id, so the
order is fully reproducible.

Callers filter to active, in-stock batches upstream.
"""

from __future__ import annotations

from datetime import date
from typing import Iterable, List

from batches.services.records import BatchRecord


def fefo_key(batch: BatchRecord):
    undated = batch.expiry_date is None
    return (
        undated,
        batch.expiry_date or date.max,
        batch.batch_number or "",
        str(batch.id),
    )


def order_batches_fefo(batches: Iterable[BatchRecord]) -> List[BatchRecord]:
    return sorted(batches, key=fefo_key)
