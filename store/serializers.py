"""DRF serializers for store settings, shipping and contact APIs."""

from rest_framework import serializers

from .models import ShippingBlock, StoreSettings
from .shipping import RESERVED_OPTION_IDS


class StoreSettingsSerializer(serializers.ModelSerializer):
    """Store configuration.

    Bank details are public on purpose: shoppers need them to pay by transfer.
    """

    shipping_blocks = serializers.SerializerMethodField()

    class Meta:
        model = StoreSettings
        fields = [
            'store_name', 'tagline', 'logo_url', 'contact_email', 'whatsapp',
            'bank_account_name', 'bank_account_number', 'bank_name',
            'announcement', 'theme', 'allow_pickup', 'allow_address_not_listed',
            'shipping_blocks', 'updated_at',
        ]
        read_only_fields = ['logo_url', 'updated_at']

    def get_shipping_blocks(self, obj):
        return ShippingBlockSerializer(ShippingBlock.objects.all(), many=True).data

    def validate_theme(self, value):
        if value in (None, ''):
            return {}
        if not isinstance(value, dict):
            raise serializers.ValidationError('Theme must be an object of color values.')
        return {str(k): str(v) for k, v in value.items()}


class ShippingBlockSerializer(serializers.ModelSerializer):
    """Configured delivery zone; ``code`` becomes the shipping option id."""

    code = serializers.CharField(max_length=64, required=False, allow_blank=True)
    fee = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=0)

    class Meta:
        model = ShippingBlock
        fields = ['id', 'code', 'title', 'fee', 'description', 'position']

    def validate_code(self, value):
        value = (value or '').strip()
        if value in RESERVED_OPTION_IDS:
            raise serializers.ValidationError(f'"{value}" is reserved for a built-in shipping option.')
        qs = ShippingBlock.objects.filter(code=value)
        if self.instance is not None:
            qs = qs.exclude(pk=self.instance.pk)
        if value and qs.exists():
            raise serializers.ValidationError('A shipping block with this code already exists.')
        return value


class ShippingOptionSerializer(serializers.Serializer):
    id = serializers.CharField()
    title = serializers.CharField()
    fee = serializers.DecimalField(max_digits=10, decimal_places=2)
    description = serializers.CharField(allow_blank=True)


class LogoUploadSerializer(serializers.Serializer):
    logo = serializers.ImageField()


class ContactMessageSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=255)
    email = serializers.EmailField()
    message = serializers.CharField(max_length=5000)
