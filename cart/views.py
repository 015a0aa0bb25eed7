"""Cart APIs.

The cart belongs to the browser session, so every endpoint is anonymous.
Lines are addressed by their position in the cart.
"""

from django.http import Http404
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

from .cart import Cart
from .serializers import AddToCartSerializer, CartSerializer


def _cart_response(cart, status_code=status.HTTP_200_OK):
    return Response(CartSerializer(cart).data, status=status_code)


def _line_or_404(cart, index):
    try:
        return cart[index]
    except IndexError:
        raise Http404('No such cart line.')


@api_view(['GET', 'DELETE'])
@permission_classes([AllowAny])
def cart_detail(request):
    """GET the cart; DELETE empties it."""
    cart = Cart(request.session)
    if request.method == 'DELETE':
        cart.clear()
    return _cart_response(cart)


@api_view(['POST'])
@permission_classes([AllowAny])
def add_item(request):
    """Add a product; an existing line with the same color/size is merged."""
    serializer = AddToCartSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    data = serializer.validated_data

    cart = Cart(request.session)
    cart.add(data['product'], quantity=data['quantity'], color=data['color'], size=data['size'])
    return _cart_response(cart, status.HTTP_201_CREATED)


@api_view(['DELETE'])
@permission_classes([AllowAny])
def remove_item(request, index):
    cart = Cart(request.session)
    _line_or_404(cart, index)
    cart.remove(index)
    return _cart_response(cart)


@api_view(['POST'])
@permission_classes([AllowAny])
def increment_item(request, index):
    cart = Cart(request.session)
    _line_or_404(cart, index)
    cart.increment(index)
    return _cart_response(cart)


@api_view(['POST'])
@permission_classes([AllowAny])
def decrement_item(request, index):
    cart = Cart(request.session)
    _line_or_404(cart, index)
    cart.decrement(index)
    return _cart_response(cart)
