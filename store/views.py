"""Store configuration APIs.

Public reads (settings, shipping options) for the storefront; writes are
restricted to store admins.
"""

import logging

from django.conf import settings
from rest_framework import status, viewsets
from rest_framework.decorators import api_view, parser_classes, permission_classes
from rest_framework.parsers import FormParser, MultiPartParser
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from accounts.permissions import IsStoreAdmin, IsStoreAdminOrReadOnly
from integrations.cloudinary_upload import UploadError, upload_image
from integrations.emailjs import EmailJSClient, EmailSendError

from .models import ShippingBlock, StoreSettings
from .provider import get_settings_provider
from .serializers import (
    ContactMessageSerializer,
    LogoUploadSerializer,
    ShippingBlockSerializer,
    ShippingOptionSerializer,
    StoreSettingsSerializer,
)
from .shipping import resolve_shipping_options

logger = logging.getLogger(__name__)


class StoreSettingsView(APIView):
    """Read (anyone) or update (admin) the store settings singleton."""

    permission_classes = [IsStoreAdminOrReadOnly]

    def get(self, request):
        return Response(StoreSettingsSerializer(StoreSettings.load()).data)

    def patch(self, request):
        instance = StoreSettings.load()
        serializer = StoreSettingsSerializer(instance, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        serializer.save()
        return Response(serializer.data)


@api_view(['POST'])
@permission_classes([IsStoreAdmin])
@parser_classes([MultiPartParser, FormParser])
def upload_logo(request):
    """Admin-only: upload a new logo image and store its URL."""
    serializer = LogoUploadSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    try:
        url = upload_image(serializer.validated_data['logo'], folder='logos')
    except UploadError:
        return Response({'detail': 'Logo upload failed.'}, status=status.HTTP_502_BAD_GATEWAY)

    instance = StoreSettings.load()
    instance.logo_url = url
    instance.save(update_fields=['logo_url', 'updated_at'])
    return Response(StoreSettingsSerializer(instance).data)


@api_view(['GET'])
@permission_classes([AllowAny])
def shipping_options(request):
    """List selectable shipping options in checkout order."""
    options = resolve_shipping_options(get_settings_provider().current())
    return Response(ShippingOptionSerializer(options, many=True).data)


class ShippingBlockViewSet(viewsets.ModelViewSet):
    """Admin CRUD for configured delivery zones."""

    queryset = ShippingBlock.objects.all()
    serializer_class = ShippingBlockSerializer
    permission_classes = [IsStoreAdmin]

    def perform_create(self, serializer):
        # New zones go to the end of the stored order unless placed explicitly.
        if 'position' not in serializer.validated_data:
            last = ShippingBlock.objects.order_by('-position').values_list('position', flat=True).first()
            serializer.save(position=(last or 0) + 1)
        else:
            serializer.save()


@api_view(['POST'])
@permission_classes([AllowAny])
def contact(request):
    """Forward a contact-form message to the store inbox via EmailJS."""
    serializer = ContactMessageSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    data = serializer.validated_data

    config = get_settings_provider().current()
    params = {
        'from_name': data['name'],
        'from_email': data['email'],
        'reply_to': data['email'],
        'message': data['message'],
        'store_name': config.store_name,
        'to_email': config.contact_email or settings.STORE_ADMIN_EMAIL,
    }
    try:
        EmailJSClient.from_settings().send(settings.EMAILJS_TEMPLATE_CONTACT, params)
    except EmailSendError as exc:
        logger.warning('Contact message from %s not sent: %s', data['email'], exc)
        return Response({'detail': 'Failed to send message.'}, status=status.HTTP_502_BAD_GATEWAY)

    return Response({'detail': 'Message sent.'}, status=status.HTTP_202_ACCEPTED)
