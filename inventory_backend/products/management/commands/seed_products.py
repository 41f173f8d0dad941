from datetime import timedelta
from decimal import Decimal

from django.core.management.base import BaseCommand
from django.utils import timezone

from batches.models import Batch, InventoryTransaction
from products.models import Product


class Command(BaseCommand):
    help = "Seed demo products and dated stock batches"

    def handle(self, *args, **options):
        self.stdout.write(self.style.WARNING("Seeding products and batches..."))

        today = timezone.localdate()

        # -------------------------------
        # PRODUCTS
        # (code, name, category, unit, total_quantity, per_pack_weight, pack_type)
        # -------------------------------
        products_data = [
            ("PCM-API", "Paracetamol API", Product.Category.API, Product.Unit.KG, "1000", "25", Product.PackType.BAG),
            ("MCC-101", "Microcrystalline Cellulose", Product.Category.EXCIPIENT, Product.Unit.KG, "600", "20", Product.PackType.BAG),
            ("IPA-99", "Isopropyl Alcohol", Product.Category.SOLVENT, Product.Unit.L, "400", "200", Product.PackType.DRUM),
            ("MGST-01", "Magnesium Stearate", Product.Category.EXCIPIENT, Product.Unit.KG, None, None, None),
        ]

        product_objs = []

        for code, name, category, unit, total, per_pack, pack_type in products_data:
            product, _ = Product.objects.get_or_create(
                code=code,
                defaults={
                    "name": name,
                    "category": category,
                    "unit": unit,
                    "total_quantity": Decimal(total) if total else None,
                    "per_pack_weight": Decimal(per_pack) if per_pack else None,
                    "pack_type": pack_type,
                },
            )
            product_objs.append(product)

        # -------------------------------
        # BATCHES (one near expiry, one later, one undated)
        # -------------------------------
        expiry_offsets = [20, 240, None]

        for product in product_objs:
            for i, offset in enumerate(expiry_offsets):
                qty = Decimal(100 * (i + 1))
                batch, created = Batch.objects.get_or_create(
                    product=product,
                    batch_number=f"{product.code}-B{i + 1}",
                    defaults={
                        "current_stock": qty,
                        "expiry_date": today + timedelta(days=offset) if offset else None,
                        "import_date": today - timedelta(days=30),
                    },
                )
                if created:
                    InventoryTransaction.objects.create(
                        product=product,
                        batch=batch,
                        transaction_type=InventoryTransaction.TransactionType.IN,
                        quantity=qty,
                        reference="seed",
                    )

        self.stdout.write(self.style.SUCCESS("Products and batches seeded."))
