# products/views/product.py

"""
PRODUCT VIEWSET

Purpose:
- Product CRUD (active products listed newest first)
- Packaging calculator preview
- Deletion safety check + guarded delete + deactivate

Delete contract:
- DELETE /products/products/{id}/               -> runs the safety check
- DELETE /products/products/{id}/?confirm=true  -> confirms a batch cascade
  409 when blocked (sold / delivered) or when a cascade needs confirmation;
  both bodies carry the disposition so the client can explain why.
"""

from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response

from products.models import Product
from products.serializers.deletion import PacksQuerySerializer, disposition_payload
from products.serializers.product import ProductSerializer
from products.services.deletion import (
    DeletionStatus,
    check_deletable,
    deactivate_product,
    delete_product,
)
from products.services.exceptions import InvalidInput, NotFound, PartialCascadeFailure
from products.services.packaging import compute_packs

TRUTHY = ("1", "true", "yes")


class ProductViewSet(viewsets.ModelViewSet):
    serializer_class = ProductSerializer
    filterset_fields = ["category", "unit", "pack_type"]

    def get_queryset(self):
        qs = Product.objects.all().order_by("-created_at")

        if self.action == "list":
            include_inactive = (
                self.request.query_params.get("include_inactive") or ""
            ).strip().lower() in TRUTHY
            if not include_inactive:
                qs = qs.filter(is_active=True)

        return qs

    # -----------------------------
    # Packaging calculator (preview)
    # -----------------------------
    @extend_schema(
        parameters=[
            OpenApiParameter(name="total_quantity", type=str, location=OpenApiParameter.QUERY),
            OpenApiParameter(name="per_pack_weight", type=str, location=OpenApiParameter.QUERY),
        ],
        responses={
            200: OpenApiResponse(description="{calculated_packs: int | null}"),
            400: OpenApiResponse(description="Negative or non-numeric input"),
        },
    )
    @action(detail=False, methods=["get"], url_path="packs")
    def packs(self, request):
        """
        GET /products/products/packs/?total_quantity=1000&per_pack_weight=60
        """
        query = PacksQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)

        try:
            packs = compute_packs(
                query.validated_data.get("total_quantity"),
                query.validated_data.get("per_pack_weight"),
            )
        except InvalidInput as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)

        return Response({"calculated_packs": packs})

    # -----------------------------
    # Deletion safety
    # -----------------------------
    @extend_schema(
        responses={200: OpenApiResponse(description="blocked | cascade_required | safe")},
    )
    @action(detail=True, methods=["get"], url_path="deletion-check")
    def deletion_check(self, request, pk=None):
        product = self.get_object()
        try:
            disposition = check_deletable(product.id)
        except NotFound as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_404_NOT_FOUND)

        return Response(disposition_payload(disposition))

    @extend_schema(
        parameters=[
            OpenApiParameter(
                name="confirm",
                type=bool,
                location=OpenApiParameter.QUERY,
                description="Confirm deleting the product's batches and their records.",
            )
        ],
        responses={
            200: OpenApiResponse(description="Deleted; per-step row counts"),
            409: OpenApiResponse(description="Blocked, or cascade needs confirmation"),
        },
    )
    def destroy(self, request, *args, **kwargs):
        product = self.get_object()
        confirmed = (request.query_params.get("confirm") or "").strip().lower() in TRUTHY

        try:
            result = delete_product(product.id, confirmed=confirmed)
        except NotFound as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_404_NOT_FOUND)
        except PartialCascadeFailure as exc:
            return Response(
                {"detail": str(exc), "step": exc.step},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR,
            )

        body = {"status": result.status.value, **disposition_payload(result.disposition)}

        if result.status == DeletionStatus.DELETED:
            body["deleted"] = result.deleted
            return Response(body, status=status.HTTP_200_OK)

        body["detail"] = result.detail
        return Response(body, status=status.HTTP_409_CONFLICT)

    @action(detail=True, methods=["post"], url_path="deactivate")
    def deactivate(self, request, pk=None):
        product = self.get_object()
        product = deactivate_product(product.id)
        return Response(self.get_serializer(product).data)
