"""Django admin configuration for orders."""

from django.contrib import admin
from .models import Order, OrderLine


class OrderLineInline(admin.TabularInline):
    """Inline display of order line snapshots."""

    model = OrderLine
    extra = 0
    # Placed lines are a snapshot and stay read-only.
    readonly_fields = ('product', 'product_ref', 'name', 'unit_price', 'unit_cost', 'quantity', 'color', 'size', 'image_url')
    can_delete = False
    max_num = 0


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    """Admin configuration for customer orders."""

    list_display = ('order_number', 'customer_name', 'total', 'status', 'shipping_title', 'created_at')
    list_filter = ('status', 'shipping_id', 'created_at')
    search_fields = ('order_number', 'customer_name', 'customer_email', 'customer_phone')
    readonly_fields = (
        'order_number', 'subtotal', 'shipping_id', 'shipping_title', 'shipping_fee', 'shipping_description',
        'total', 'payment_proof_url', 'gain_display', 'created_at', 'updated_at',
    )
    inlines = [OrderLineInline]

    def gain_display(self, obj):
        """Sales minus cost over the order's lines."""
        return obj.gain

    gain_display.short_description = 'Gain'
