# products/tests/test_deletion_engine.py

import uuid
from contextlib import nullcontext
from decimal import Decimal

from django.db import DatabaseError
from django.test import SimpleTestCase

from batches.services.records import BatchRecord
from products.services.deletion import (
    CASCADE_STEPS,
    DIRECT_STEPS,
    STEP_BATCHES,
    STEP_PRODUCT,
    Blocked,
    BlockReason,
    CascadeRequired,
    DeletionStatus,
    Safe,
    check_deletable,
    delete_product,
)
from products.services.exceptions import NotFound, PartialCascadeFailure

PRODUCT_ID = uuid.uuid4()


def _record(number):
    return BatchRecord(
        id=uuid.uuid4(),
        product_id=PRODUCT_ID,
        batch_number=number,
        current_stock=Decimal("10"),
    )


class FakeReferences:
    """
    Scripted answers: each attribute is a list consumed one call at a time
    (the last answer repeats), so tests can change the world between the
    first check and the in-transaction re-check.
    """

    def __init__(self, *, exists=True, sales=(False,), delivery=(False,), batches=((),)):
        self.exists = exists
        self._sales = list(sales)
        self._delivery = list(delivery)
        self._batches = list(batches)

    @staticmethod
    def _next(answers):
        return answers.pop(0) if len(answers) > 1 else answers[0]

    def product_exists(self, product_id):
        return self.exists

    def has_sales_references(self, product_id):
        return self._next(self._sales)

    def has_delivery_references(self, product_id):
        return self._next(self._delivery)

    def list_batches(self, product_id):
        return list(self._next(self._batches))


class FakeStore:
    def __init__(self, *, fail_on=None, fail_with=DatabaseError, product_rows=1, lock=True):
        self.fail_on = fail_on
        self.fail_with = fail_with
        self.product_rows = product_rows
        self.lock = lock
        self.steps = []
        self.entered = 0

    def atomic(self):
        self.entered += 1
        return nullcontext()

    def lock_product(self, product_id):
        return self.lock

    def delete_step(self, step, product_id):
        if step == self.fail_on:
            raise self.fail_with(f"{step} failed")
        self.steps.append(step)
        return self.product_rows if step == STEP_PRODUCT else 2


class DeletionCheckTests(SimpleTestCase):
    """
    GUARANTEES:
    - Sales references are reported before delivery references
    - Blocking references win over batches
    - Unknown products raise NotFound
    """

    def test_sales_reported_first(self):
        refs = FakeReferences(sales=(True,), delivery=(True,), batches=((_record("B1"),),))

        disposition = check_deletable(PRODUCT_ID, references=refs)

        self.assertIsInstance(disposition, Blocked)
        self.assertEqual(disposition.reason, BlockReason.SALES_INVOICE)
        self.assertIn("Deactivate", disposition.message)

    def test_delivery_blocks(self):
        refs = FakeReferences(delivery=(True,))

        disposition = check_deletable(PRODUCT_ID, references=refs)

        self.assertEqual(disposition.reason, BlockReason.DELIVERY_CHALLAN)

    def test_batches_require_cascade(self):
        batches = (_record("B1"), _record("B2"))
        disposition = check_deletable(PRODUCT_ID, references=FakeReferences(batches=(batches,)))

        self.assertIsInstance(disposition, CascadeRequired)
        self.assertEqual(disposition.batch_count, 2)
        self.assertIn("2 batch(es)", disposition.confirmation_message())

    def test_safe(self):
        self.assertIsInstance(check_deletable(PRODUCT_ID, references=FakeReferences()), Safe)

    def test_unknown_product(self):
        with self.assertRaises(NotFound):
            check_deletable(PRODUCT_ID, references=FakeReferences(exists=False))


class DeletionEngineTests(SimpleTestCase):
    """
    GUARANTEES:
    - Blocked / unconfirmed deletes never open a transaction
    - Cascade steps run dependents-first, in order
    - A failing step surfaces as PartialCascadeFailure naming the step
    - A disposition change between check and delete is honoured
    """

    def test_blocked_never_mutates(self):
        store = FakeStore()

        result = delete_product(
            PRODUCT_ID, confirmed=True, references=FakeReferences(sales=(True,)), store=store
        )

        self.assertEqual(result.status, DeletionStatus.BLOCKED)
        self.assertFalse(result.succeeded)
        self.assertEqual(store.entered, 0)
        self.assertEqual(store.steps, [])

    def test_unconfirmed_cascade_aborts(self):
        store = FakeStore()
        refs = FakeReferences(batches=((_record("B1"),),))

        result = delete_product(PRODUCT_ID, confirmed=False, references=refs, store=store)

        self.assertEqual(result.status, DeletionStatus.ABORTED)
        self.assertIn("1 batch(es)", result.detail)
        self.assertEqual(store.entered, 0)

    def test_confirmed_cascade_runs_steps_in_order(self):
        store = FakeStore()
        refs = FakeReferences(batches=((_record("B1"),),))

        result = delete_product(PRODUCT_ID, confirmed=True, references=refs, store=store)

        self.assertEqual(result.status, DeletionStatus.DELETED)
        self.assertEqual(store.steps, list(CASCADE_STEPS))
        self.assertEqual(result.deleted[STEP_PRODUCT], 1)

    def test_safe_runs_direct_steps_only(self):
        store = FakeStore()

        result = delete_product(PRODUCT_ID, references=FakeReferences(), store=store)

        self.assertTrue(result.succeeded)
        self.assertEqual(store.steps, list(DIRECT_STEPS))

    def test_failing_step_raises_with_step(self):
        store = FakeStore(fail_on=STEP_BATCHES)
        refs = FakeReferences(batches=((_record("B1"),),))

        with self.assertRaises(PartialCascadeFailure) as ctx:
            delete_product(PRODUCT_ID, confirmed=True, references=refs, store=store)

        self.assertEqual(ctx.exception.step, STEP_BATCHES)
        self.assertEqual(ctx.exception.product_id, PRODUCT_ID)
        self.assertNotIn(STEP_PRODUCT, store.steps)

    def test_non_database_error_is_not_wrapped(self):
        store = FakeStore(fail_on=STEP_BATCHES, fail_with=KeyError)
        refs = FakeReferences(batches=((_record("B1"),),))

        with self.assertRaises(KeyError):
            delete_product(PRODUCT_ID, confirmed=True, references=refs, store=store)

    def test_product_row_not_removed_is_a_failure(self):
        store = FakeStore(product_rows=0)

        with self.assertRaises(PartialCascadeFailure) as ctx:
            delete_product(PRODUCT_ID, references=FakeReferences(), store=store)

        self.assertEqual(ctx.exception.step, STEP_PRODUCT)

    def test_sale_recorded_after_check_blocks(self):
        store = FakeStore()
        refs = FakeReferences(sales=(False, True))

        result = delete_product(PRODUCT_ID, references=refs, store=store)

        self.assertEqual(result.status, DeletionStatus.BLOCKED)
        self.assertEqual(store.steps, [])

    def test_batch_added_after_confirmation_aborts(self):
        store = FakeStore()
        b1 = _record("B1")
        refs = FakeReferences(batches=((b1,), (b1, _record("B2"))))

        result = delete_product(PRODUCT_ID, confirmed=True, references=refs, store=store)

        self.assertEqual(result.status, DeletionStatus.ABORTED)
        self.assertEqual(result.disposition.batch_count, 2)
        self.assertEqual(store.steps, [])

    def test_batch_added_to_safe_product_aborts(self):
        store = FakeStore()
        refs = FakeReferences(batches=((), (_record("B1"),)))

        result = delete_product(PRODUCT_ID, confirmed=True, references=refs, store=store)

        self.assertEqual(result.status, DeletionStatus.ABORTED)
        self.assertEqual(store.steps, [])

    def test_product_gone_before_lock(self):
        with self.assertRaises(NotFound):
            delete_product(PRODUCT_ID, references=FakeReferences(), store=FakeStore(lock=False))
