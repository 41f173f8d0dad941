# products/models/product_file.py

from django.db import models

from .product import Product


class ProductFile(models.Model):
    """
    File attachment keyed directly to a product (data sheets, photos).

    PROTECT: the product deletion service removes files explicitly
    before the product row.
    """

    product = models.ForeignKey(
        Product,
        on_delete=models.PROTECT,
        related_name="files",
    )

    file_name = models.CharField(max_length=255)
    file_url = models.URLField(max_length=500)

    uploaded_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-uploaded_at"]

    def __str__(self):
        return f"{self.product_id} | {self.file_name}"
