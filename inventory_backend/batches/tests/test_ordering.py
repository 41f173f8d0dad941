# batches/tests/test_ordering.py

import uuid
from datetime import date, timedelta
from decimal import Decimal

from django.test import SimpleTestCase

from batches.services.ordering import order_batches_fefo
from batches.services.records import BatchRecord

NOW = date(2026, 3, 1)


def _batch(number, expiry=None):
    return BatchRecord(
        id=uuid.uuid4(),
        product_id=1,
        batch_number=number,
        current_stock=Decimal("10"),
        expiry_date=expiry,
    )


class FefoOrderingTests(SimpleTestCase):
    """
    GUARANTEES:
    - Ascending by expiry date
    - Undated batches strictly last
    - Deterministic ties (batch number) and idempotent
    """

    def setUp(self):
        self.batches = [
            _batch("UNDATED-2"),
            _batch("LATE", NOW + timedelta(days=300)),
            _batch("UNDATED-1"),
            _batch("SOON-B", NOW + timedelta(days=10)),
            _batch("SOON-A", NOW + timedelta(days=10)),
            _batch("EXPIRED", NOW - timedelta(days=5)),
        ]

    def test_order(self):
        ordered = order_batches_fefo(self.batches)

        self.assertEqual(
            [b.batch_number for b in ordered],
            ["EXPIRED", "SOON-A", "SOON-B", "LATE", "UNDATED-1", "UNDATED-2"],
        )

    def test_non_decreasing_with_undated_last(self):
        ordered = order_batches_fefo(self.batches)
        dated = [b.expiry_date for b in ordered if b.expiry_date is not None]

        self.assertEqual(dated, sorted(dated))
        first_undated = next(i for i, b in enumerate(ordered) if b.expiry_date is None)
        self.assertTrue(all(b.expiry_date is None for b in ordered[first_undated:]))

    def test_idempotent(self):
        once = order_batches_fefo(self.batches)
        twice = order_batches_fefo(once)

        self.assertEqual(once, twice)
        self.assertEqual(once, order_batches_fefo(list(reversed(self.batches))))

    def test_input_is_not_mutated(self):
        snapshot = list(self.batches)
        order_batches_fefo(self.batches)
        self.assertEqual(self.batches, snapshot)
