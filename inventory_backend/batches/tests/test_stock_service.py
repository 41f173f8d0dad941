# batches/tests/test_stock_service.py

import uuid
from datetime import date, timedelta
from decimal import Decimal

from django.test import TestCase, override_settings

from batches.models import Batch
from batches.services.expiry import ExpiryClass
from batches.services.stock import (
    StockLevel,
    get_batch,
    list_ordered_batches,
    list_stock_overview,
    stock_dashboard,
    stock_level,
    summarize_stock,
)
from products.models import Product
from products.services.exceptions import NotFound

NOW = date(2026, 3, 1)


class StockServiceTests(TestCase):
    """
    Stock service tests against the ORM-backed batch source.

    GUARANTEES:
    - Summaries are re-derived from current batch rows
    - FEFO listing only returns active, in-stock batches
    - Unknown products / batches raise NotFound
    """

    def setUp(self):
        self.product = Product.objects.create(
            name="Paracetamol API",
            code="PCM-API",
            category=Product.Category.API,
            unit=Product.Unit.KG,
        )

        self.soon = Batch.objects.create(
            product=self.product,
            batch_number="B-SOON",
            current_stock=Decimal("120"),
            expiry_date=NOW + timedelta(days=20),
            import_date=NOW - timedelta(days=60),
        )
        self.late = Batch.objects.create(
            product=self.product,
            batch_number="B-LATE",
            current_stock=Decimal("300"),
            expiry_date=NOW + timedelta(days=400),
            import_date=NOW - timedelta(days=10),
        )
        self.undated = Batch.objects.create(
            product=self.product,
            batch_number="B-UNDATED",
            current_stock=Decimal("80"),
            expiry_date=None,
            import_date=NOW - timedelta(days=5),
        )
        self.empty = Batch.objects.create(
            product=self.product,
            batch_number="B-EMPTY",
            current_stock=Decimal("0"),
            expiry_date=NOW + timedelta(days=1),
            import_date=NOW - timedelta(days=90),
        )
        self.retired = Batch.objects.create(
            product=self.product,
            batch_number="B-RETIRED",
            current_stock=Decimal("50"),
            expiry_date=NOW - timedelta(days=2),
            import_date=NOW - timedelta(days=300),
            is_active=False,
        )

    # ======================================================
    # SUMMARY
    # ======================================================

    def test_summarize_stock(self):
        summary = summarize_stock(self.product.id, now=NOW)

        self.assertEqual(summary.total_current_stock, Decimal("500"))
        self.assertEqual(summary.active_batch_count, 4)
        self.assertEqual(summary.expired_batch_count, 1)
        self.assertEqual(summary.nearest_expiry_date, NOW + timedelta(days=20))

    def test_summary_reflects_current_batch_state(self):
        Batch.objects.filter(id=self.soon.id).update(current_stock=Decimal("0"))

        summary = summarize_stock(self.product.id, now=NOW)

        self.assertEqual(summary.total_current_stock, Decimal("380"))
        self.assertEqual(summary.nearest_expiry_date, NOW + timedelta(days=400))

    def test_summarize_unknown_product(self):
        with self.assertRaises(NotFound):
            summarize_stock(uuid.uuid4(), now=NOW)

    # ======================================================
    # FEFO LIST
    # ======================================================

    def test_list_ordered_batches(self):
        ordered = list_ordered_batches(self.product.id)

        self.assertEqual(
            [b.batch_number for b in ordered],
            ["B-SOON", "B-LATE", "B-UNDATED"],
        )

    def test_list_ordered_batches_is_idempotent(self):
        self.assertEqual(
            list_ordered_batches(self.product.id),
            list_ordered_batches(self.product.id),
        )

    def test_list_ordered_batches_unknown_product(self):
        with self.assertRaises(NotFound):
            list_ordered_batches(uuid.uuid4())

    def test_malformed_ids_are_not_found(self):
        for bad in ("garbage", "-" * 36, 42):
            with self.subTest(value=bad):
                with self.assertRaises(NotFound):
                    summarize_stock(bad, now=NOW)
                with self.assertRaises(NotFound):
                    list_ordered_batches(bad)
                with self.assertRaises(NotFound):
                    get_batch(bad)

    def test_get_batch(self):
        record = get_batch(self.late.id)
        self.assertEqual(record.batch_number, "B-LATE")
        self.assertEqual(record.product_id, self.product.id)

        with self.assertRaises(NotFound):
            get_batch(uuid.uuid4())

    # ======================================================
    # OVERVIEW / DASHBOARD
    # ======================================================

    @override_settings(INVENTORY_LOW_STOCK_THRESHOLD=500)
    def test_overview_lists_only_in_stock_products_by_name(self):
        solvent = Product.objects.create(
            name="Acetone",
            code="ACE-01",
            category=Product.Category.SOLVENT,
            unit=Product.Unit.L,
        )
        Batch.objects.create(
            product=solvent,
            batch_number="S-1",
            current_stock=Decimal("200"),
            expiry_date=NOW + timedelta(days=90),
        )
        # No batches at all: excluded
        Product.objects.create(name="Talc", code="TALC-01")

        rows = list_stock_overview(now=NOW)

        self.assertEqual([r.product.code for r in rows], ["ACE-01", "PCM-API"])

        acetone, paracetamol = rows
        self.assertEqual(acetone.stock_level, StockLevel.LOW)
        self.assertEqual(acetone.nearest_expiry_class, ExpiryClass.NORMAL)
        self.assertEqual(paracetamol.stock_level, StockLevel.OK)
        self.assertEqual(paracetamol.nearest_expiry_class, ExpiryClass.NEAR_EXPIRY)

        dashboard = stock_dashboard(rows)
        self.assertEqual(dashboard.total_stock, Decimal("700"))
        self.assertEqual(dashboard.product_count, 2)
        self.assertEqual(dashboard.low_stock_count, 1)
        self.assertEqual(dashboard.near_expiry_count, 1)

    def test_stock_level(self):
        self.assertEqual(stock_level(0, 500), StockLevel.OUT)
        self.assertEqual(stock_level(Decimal("499.999"), 500), StockLevel.LOW)
        self.assertEqual(stock_level(500, 500), StockLevel.OK)
