# batches/views/batch.py

from rest_framework import viewsets

from batches.models import Batch
from batches.serializers import BatchSerializer


class BatchViewSet(viewsets.ModelViewSet):
    """
    Batch metadata endpoints.

    - Listed in FEFO order (model default ordering)
    - Filter with ?product=<uuid>&is_active=true
    - No DELETE: batches are only destroyed by a confirmed product cascade
    """

    queryset = Batch.objects.select_related("product").all()
    serializer_class = BatchSerializer
    filterset_fields = ["product", "is_active"]
    http_method_names = ["get", "post", "patch", "head", "options"]
