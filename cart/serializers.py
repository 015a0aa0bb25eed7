"""DRF serializers for cart APIs."""

from rest_framework import serializers

from products.models import Product

from .cart import MAX_LINE_QUANTITY


class CartLineSerializer(serializers.Serializer):
    """Read-only view of a cart line (cost data is never exposed)."""

    product_id = serializers.CharField()
    name = serializers.CharField()
    unit_price = serializers.DecimalField(max_digits=12, decimal_places=2)
    quantity = serializers.IntegerField()
    image_url = serializers.CharField()
    color = serializers.CharField(allow_null=True)
    size = serializers.CharField(allow_null=True)
    line_total = serializers.DecimalField(max_digits=None, decimal_places=2)


class CartSerializer(serializers.Serializer):
    """Whole-cart representation with derived totals."""

    items = serializers.SerializerMethodField()
    count = serializers.IntegerField()
    subtotal = serializers.DecimalField(max_digits=None, decimal_places=2)

    def get_items(self, cart):
        return [{'index': i, **CartLineSerializer(line).data} for i, line in enumerate(cart.lines)]


class AddToCartSerializer(serializers.Serializer):
    """Payload for adding a product to the cart.

    Color/size must be one of the product's options when it defines any.
    """

    product = serializers.PrimaryKeyRelatedField(queryset=Product.objects.all())
    quantity = serializers.IntegerField(min_value=1, max_value=MAX_LINE_QUANTITY, default=1)
    color = serializers.CharField(required=False, allow_blank=True, allow_null=True, default=None)
    size = serializers.CharField(required=False, allow_blank=True, allow_null=True, default=None)

    def validate(self, attrs):
        product = attrs['product']
        for field, options in (('color', product.colors), ('size', product.sizes)):
            value = (attrs.get(field) or '').strip() or None
            if value and options and value not in options:
                raise serializers.ValidationError({field: f'"{value}" is not available for this product.'})
            attrs[field] = value
        return attrs
