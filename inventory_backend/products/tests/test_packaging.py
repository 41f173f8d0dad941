# products/tests/test_packaging.py

from decimal import Decimal

from django.test import SimpleTestCase

from products.services.exceptions import InvalidInput
from products.services.packaging import compute_packs


class PackagingCalculatorTests(SimpleTestCase):
    """
    GUARANTEES:
    - Partial packs round UP
    - Missing / zero inputs mean "unset" (None), never 0
    - Negative or non-numeric inputs are rejected
    """

    def test_partial_pack_rounds_up(self):
        self.assertEqual(compute_packs(1000, 60), 17)
        self.assertEqual(compute_packs(Decimal("25.5"), Decimal("25")), 2)

    def test_exact_division(self):
        self.assertEqual(compute_packs(500, 25), 20)
        self.assertEqual(compute_packs("0.75", "0.25"), 3)

    def test_zero_or_missing_inputs_are_unset(self):
        self.assertIsNone(compute_packs(0, 60))
        self.assertIsNone(compute_packs(100, 0))
        self.assertIsNone(compute_packs(None, 60))
        self.assertIsNone(compute_packs(100, None))
        self.assertIsNone(compute_packs("", ""))

    def test_negative_input_rejected(self):
        with self.assertRaises(InvalidInput):
            compute_packs(-5, 10)
        with self.assertRaises(InvalidInput):
            compute_packs(10, "-1")

    def test_non_numeric_input_rejected(self):
        for bad in ("abc", "1e", "inf", True):
            with self.subTest(value=bad):
                with self.assertRaises(InvalidInput):
                    compute_packs(bad, 10)
