# batches/models/batch_document.py

from django.db import models

from .batch import Batch


class BatchDocument(models.Model):
    """
    Document attached to a batch (certificate of analysis, MSDS, import invoice).
    """

    class DocumentType(models.TextChoices):
        COA = "coa", "Certificate of Analysis"
        MSDS = "msds", "Material Safety Data Sheet"
        INVOICE = "invoice", "Import Invoice"
        OTHER = "other", "Other"

    batch = models.ForeignKey(
        Batch,
        on_delete=models.PROTECT,
        related_name="documents",
    )

    document_type = models.CharField(
        max_length=16,
        choices=DocumentType.choices,
        default=DocumentType.OTHER,
    )
    file_name = models.CharField(max_length=255)
    file_url = models.URLField(max_length=500)

    uploaded_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-uploaded_at"]

    def __str__(self):
        return f"{self.batch_id} | {self.document_type} | {self.file_name}"
