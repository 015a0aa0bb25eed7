"""Product catalog API routes."""

from django.urls import path, include
from rest_framework.routers import SimpleRouter
from .views import ProductViewSet, CollectionViewSet

router = SimpleRouter()
router.register(r'collections', CollectionViewSet, basename='collection')
router.register(r'', ProductViewSet, basename='product')

urlpatterns = [
    path('', include(router.urls)),
]
