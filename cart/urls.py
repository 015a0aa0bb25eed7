from django.urls import path

from .views import add_item, cart_detail, decrement_item, increment_item, remove_item

urlpatterns = [
    path('', cart_detail, name='cart_detail'),
    path('items/', add_item, name='cart_add_item'),
    path('items/<int:index>/', remove_item, name='cart_remove_item'),
    path('items/<int:index>/increment/', increment_item, name='cart_increment_item'),
    path('items/<int:index>/decrement/', decrement_item, name='cart_decrement_item'),
]
