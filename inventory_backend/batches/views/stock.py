# batches/views/stock.py

"""
STOCK VIEWSET (READ-ONLY)

GET /batches/stock/                          in-stock products + dashboard totals
GET /batches/stock/{product_id}/             one product's StockSummary
GET /batches/stock/{product_id}/batches/     FEFO-ordered in-stock batches

"now" is sampled here, once per request, and handed to the engine.
"""

from django.utils import timezone
from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response

from batches.serializers.stock import (
    OrderedBatchSerializer,
    StockDashboardSerializer,
    StockOverviewRowSerializer,
    StockSummarySerializer,
)
from batches.services.stock import (
    list_ordered_batches,
    list_stock_overview,
    stock_dashboard,
    summarize_stock,
)
from products.services.exceptions import NotFound


class StockViewSet(viewsets.ViewSet):
    lookup_field = "product_id"
    lookup_value_regex = "[0-9a-fA-F-]{32,36}"

    def _now(self):
        return timezone.localdate()

    @extend_schema(responses={200: OpenApiResponse(description="{summary, results}")})
    def list(self, request):
        now = self._now()
        rows = list_stock_overview(now=now)

        return Response(
            {
                "summary": StockDashboardSerializer(stock_dashboard(rows)).data,
                "count": len(rows),
                "results": StockOverviewRowSerializer(rows, many=True).data,
            }
        )

    @extend_schema(responses={200: StockSummarySerializer, 404: OpenApiResponse()})
    def retrieve(self, request, product_id=None):
        now = self._now()
        try:
            summary = summarize_stock(product_id, now=now)
        except NotFound as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_404_NOT_FOUND)

        return Response(StockSummarySerializer(summary, context={"now": now}).data)

    @extend_schema(responses={200: OrderedBatchSerializer(many=True), 404: OpenApiResponse()})
    @action(detail=True, methods=["get"], url_path="batches")
    def batches(self, request, product_id=None):
        now = self._now()
        try:
            ordered = list_ordered_batches(product_id)
        except NotFound as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_404_NOT_FOUND)

        data = OrderedBatchSerializer(ordered, many=True, context={"now": now}).data
        return Response({"count": len(data), "results": data})
