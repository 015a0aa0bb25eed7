from django.urls import include, path
from rest_framework.routers import DefaultRouter

from .views import ShippingBlockViewSet, StoreSettingsView, contact, shipping_options, upload_logo

router = DefaultRouter()
router.register(r'shipping-blocks', ShippingBlockViewSet, basename='shipping-block')

urlpatterns = [
    path('settings/', StoreSettingsView.as_view(), name='store_settings'),
    path('settings/logo/', upload_logo, name='store_logo'),
    path('shipping-options/', shipping_options, name='shipping_options'),
    path('contact/', contact, name='contact'),
    path('', include(router.urls)),
]
