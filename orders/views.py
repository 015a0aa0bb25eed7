"""Orders APIs.

- ``checkout``: anonymous order placement from the session cart.
- ``OrderViewSet``: back-office order list/detail, status changes and the
  dashboard summary. Admin only.
"""

from django.conf import settings
from django.db.models import Count
from django_filters.rest_framework import DjangoFilterBackend
from rest_framework import filters, status, viewsets
from rest_framework.decorators import action, api_view, parser_classes, permission_classes
from rest_framework.parsers import FormParser, JSONParser, MultiPartParser
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

from accounts.permissions import IsStoreAdmin
from cart.cart import Cart
from integrations.cloudinary_upload import upload_image
from products.models import Collection, Product
from products.views import StandardResultsSetPagination
from store.provider import get_settings_provider

from .checkout import CheckoutService, CustomerInfo, DeliveryAddress
from .exceptions import CheckoutError, OrderPersistenceFailed, UploadFailed
from .models import Order, OrderStatus
from .notifications import OrderMailer
from .serializers import AdminOrderSerializer, CheckoutSerializer, OrderSerializer, SetStatusSerializer
from . import services


def _upload_payment_proof(file):
    return upload_image(file, folder='payment-proofs')


def _error_status(exc):
    if isinstance(exc, UploadFailed):
        return status.HTTP_502_BAD_GATEWAY
    if isinstance(exc, OrderPersistenceFailed):
        return status.HTTP_500_INTERNAL_SERVER_ERROR
    return status.HTTP_400_BAD_REQUEST


@api_view(['POST'])
@permission_classes([AllowAny])
@parser_classes([MultiPartParser, FormParser, JSONParser])
def checkout(request):
    """Place an order from the session cart.

    Returns the order and, when the store has a WhatsApp number, a
    ``whatsapp_url`` for the client to open.
    """
    serializer = CheckoutSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    data = serializer.validated_data

    if data['address_line'] or data['address_city'] or data['address_state']:
        address = DeliveryAddress(
            line=data['address_line'].strip(),
            city=data['address_city'].strip(),
            state=data['address_state'].strip(),
        )
    else:
        address = DeliveryAddress.parse(data['address'])

    config = get_settings_provider().current()
    service = CheckoutService(
        config,
        uploader=_upload_payment_proof,
        mailer=OrderMailer.from_settings(config),
        atomic_stock=settings.STOCK_DECREMENT_ATOMIC,
    )
    try:
        result = service.place_order(
            Cart(request.session),
            CustomerInfo(name=data['name'], email=data['email'], phone=data['phone']),
            address,
            data['shipping_id'],
            payment_proof=data['payment_proof'],
        )
    except CheckoutError as exc:
        return Response({'code': exc.code, 'detail': exc.message}, status=_error_status(exc))

    return Response(
        {'order': OrderSerializer(result.order).data, 'whatsapp_url': result.whatsapp_url},
        status=status.HTTP_201_CREATED,
    )


class OrderViewSet(viewsets.ReadOnlyModelViewSet):
    """Back-office orders.

    Newest first; filter with ``?status=`` and search by order number or
    customer name/email/phone with ``?search=``.
    """

    queryset = Order.objects.prefetch_related('lines').order_by('-created_at', '-id')
    serializer_class = AdminOrderSerializer
    pagination_class = StandardResultsSetPagination
    permission_classes = [IsStoreAdmin]

    filter_backends = [DjangoFilterBackend, filters.SearchFilter]
    filterset_fields = ['status']
    search_fields = ['order_number', 'customer_name', 'customer_email', 'customer_phone']

    @action(detail=True, methods=['patch', 'post'], url_path='set-status')
    def set_status(self, request, pk=None):
        order = self.get_object()
        serializer = SetStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        config = get_settings_provider().current()
        email_sent = services.set_status(order, serializer.validated_data['status'], OrderMailer.from_settings(config))
        data = self.get_serializer(order).data
        return Response({**data, 'email_sent': email_sent})

    @action(detail=False, methods=['get'])
    def statuses(self, request):
        return Response([value for value, _label in OrderStatus.choices])

    @action(detail=False, methods=['get'])
    def dashboard(self, request):
        """Catalog/order counts and the six most recent orders."""
        by_status = dict(
            Order.objects.order_by().values('status').annotate(n=Count('id')).values_list('status', 'n')
        )
        recent = self.get_queryset()[:6]
        return Response({
            'products': Product.objects.count(),
            'collections': Collection.objects.count(),
            'orders': Order.objects.count(),
            'orders_by_status': by_status,
            'recent_orders': self.get_serializer(recent, many=True).data,
        })
