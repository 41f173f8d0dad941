# batches/urls.py
from django.urls import include, path
from rest_framework.routers import DefaultRouter

from batches.views import BatchViewSet, StockViewSet

router = DefaultRouter()
router.register(r"batches", BatchViewSet, basename="batches")
router.register(r"stock", StockViewSet, basename="stock")

urlpatterns = [
    path("", include(router.urls)),
]
