"""DRF serializers for orders APIs."""

from rest_framework import serializers

from .models import Order, OrderLine, OrderStatus


class OrderLineSerializer(serializers.ModelSerializer):
    """Line snapshot as the customer saw it."""

    line_total = serializers.DecimalField(max_digits=14, decimal_places=2, read_only=True)

    class Meta:
        model = OrderLine
        fields = ['id', 'product_ref', 'name', 'unit_price', 'quantity', 'color', 'size', 'image_url', 'line_total']


class AdminOrderLineSerializer(OrderLineSerializer):
    class Meta(OrderLineSerializer.Meta):
        fields = OrderLineSerializer.Meta.fields + ['product', 'unit_cost']


class OrderSerializer(serializers.ModelSerializer):
    """Order as returned to the shopper after checkout."""

    lines = OrderLineSerializer(many=True, read_only=True)
    delivery_address = serializers.CharField(read_only=True)

    class Meta:
        model = Order
        fields = [
            'id', 'order_number', 'status', 'lines', 'subtotal',
            'shipping_id', 'shipping_title', 'shipping_fee', 'shipping_description', 'total',
            'customer_name', 'customer_email', 'customer_phone',
            'address_line', 'address_city', 'address_state', 'delivery_address',
            'payment_proof_url', 'created_at',
        ]
        read_only_fields = fields


class AdminOrderSerializer(OrderSerializer):
    """Back-office view of an order, including margin figures."""

    lines = AdminOrderLineSerializer(many=True, read_only=True)
    total_sales = serializers.DecimalField(max_digits=14, decimal_places=2, read_only=True)
    total_cost = serializers.DecimalField(max_digits=14, decimal_places=2, read_only=True)
    gain = serializers.DecimalField(max_digits=14, decimal_places=2, read_only=True)

    class Meta(OrderSerializer.Meta):
        fields = OrderSerializer.Meta.fields + ['total_sales', 'total_cost', 'gain', 'updated_at']
        read_only_fields = fields


class CheckoutSerializer(serializers.Serializer):
    """Checkout form input.

    Fields are accepted blank here; the checkout service reports what is
    missing, in its own order. The address may come as one
    ``"line, city, state"`` string or as separate fields.
    """

    name = serializers.CharField(required=False, allow_blank=True, default='')
    email = serializers.CharField(required=False, allow_blank=True, default='')
    phone = serializers.CharField(required=False, allow_blank=True, default='')
    address = serializers.CharField(required=False, allow_blank=True, default='')
    address_line = serializers.CharField(required=False, allow_blank=True, default='')
    address_city = serializers.CharField(required=False, allow_blank=True, default='')
    address_state = serializers.CharField(required=False, allow_blank=True, default='')
    shipping_id = serializers.CharField(required=False, allow_blank=True, default='')
    # checked as an image by the checkout service, after the other fields
    payment_proof = serializers.FileField(required=False, allow_null=True, allow_empty_file=True, default=None)


class SetStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=OrderStatus.choices)
