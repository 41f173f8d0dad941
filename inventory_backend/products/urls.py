# products/urls.py

"""
PRODUCTS URLS

Registers product routes under /api/products/:
    /products/products/
    /products/products/packs/
    /products/products/{id}/deletion-check/
    /products/products/{id}/deactivate/
"""

from django.urls import include, path
from rest_framework.routers import DefaultRouter

from products.views import ProductViewSet

router = DefaultRouter()
router.register(r"products", ProductViewSet, basename="products")

urlpatterns = [
    path("", include(router.urls)),
]
