from django.urls import path, include
from rest_framework.routers import SimpleRouter
from .views import OrderViewSet, checkout

router = SimpleRouter()
router.register(r'', OrderViewSet, basename='order')

urlpatterns = [
    path('checkout/', checkout, name='checkout'),
    path('', include(router.urls)),
]
