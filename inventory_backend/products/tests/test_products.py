# products/tests/test_products.py

from decimal import Decimal

from django.core.exceptions import ValidationError
from django.test import TestCase

from products.models import Product


class ProductModelTests(TestCase):
    """
    Product model tests.

    GUARANTEES:
    - Products can be created safely
    - Product code is normalized and unique
    - calculated_packs always matches the current packaging inputs
    """

    def test_product_creation(self):
        """A valid product should be created successfully."""
        product = Product.objects.create(
            name="Microcrystalline Cellulose",
            code="mcc-102",
            category=Product.Category.EXCIPIENT,
            unit=Product.Unit.KG,
        )

        self.assertEqual(product.name, "Microcrystalline Cellulose")
        self.assertEqual(product.code, "MCC-102")
        self.assertTrue(product.is_active)
        self.assertIsNone(product.calculated_packs)

    def test_code_must_be_unique(self):
        """Code duplication must be rejected."""
        Product.objects.create(name="Ibuprofen API", code="IBU-API")

        with self.assertRaises(ValidationError):
            Product.objects.create(name="Ibuprofen Duplicate", code="ibu-api")

    def test_blank_code_rejected(self):
        with self.assertRaises(ValidationError):
            Product.objects.create(name="No Code", code="   ")

    def test_packs_derived_on_create(self):
        product = Product.objects.create(
            name="Magnesium Stearate",
            code="MGST-01",
            total_quantity=Decimal("1000"),
            per_pack_weight=Decimal("60"),
            pack_type=Product.PackType.BAG,
        )

        product.refresh_from_db()
        self.assertEqual(product.calculated_packs, 17)

    def test_packs_follow_input_changes(self):
        product = Product.objects.create(
            name="Sodium Chloride",
            code="NACL-01",
            total_quantity=Decimal("500"),
            per_pack_weight=Decimal("25"),
        )
        self.assertEqual(product.calculated_packs, 20)

        product.total_quantity = Decimal("510")
        product.save()
        product.refresh_from_db()
        self.assertEqual(product.calculated_packs, 21)

        # Clearing an input unsets the derived value
        product.per_pack_weight = None
        product.save()
        product.refresh_from_db()
        self.assertIsNone(product.calculated_packs)

    def test_update_fields_save_persists_packs(self):
        product = Product.objects.create(
            name="Talc",
            code="TALC-01",
            total_quantity=Decimal("100"),
            per_pack_weight=Decimal("50"),
        )

        product.total_quantity = Decimal("101")
        product.save(update_fields=["total_quantity"])

        product.refresh_from_db()
        self.assertEqual(product.calculated_packs, 3)

    def test_negative_quantity_rejected(self):
        with self.assertRaises(ValidationError):
            Product.objects.create(
                name="Bad Input",
                code="BAD-01",
                total_quantity=Decimal("-1"),
                per_pack_weight=Decimal("10"),
            )

        self.assertFalse(Product.objects.filter(code="BAD-01").exists())

    def test_very_large_pack_count_persists(self):
        product = Product.objects.create(
            name="Bulk Sodium Bicarbonate",
            code="BICARB-BULK",
            total_quantity=Decimal("3000000"),
            per_pack_weight=Decimal("0.001"),
        )

        product.refresh_from_db()
        # Larger than a 32-bit integer column can hold
        self.assertEqual(product.calculated_packs, 3_000_000_000)

    def test_product_string_representation(self):
        """__str__ should be human readable."""
        product = Product.objects.create(name="Cough Syrup Base", code="CSB-100")

        self.assertIn("Cough Syrup Base", str(product))
        self.assertIn("CSB-100", str(product))
