"""Database models for orders and order lines."""

import random
import time
from decimal import Decimal

from django.db import models

from products.models import Product


class OrderStatus(models.TextChoices):
    """Named order statuses. Admins may move an order to any of them."""

    AWAITING_CONFIRMATION = 'Awaiting Confirmation', 'Awaiting Confirmation'
    PENDING_DELIVERY_FEE = 'Pending Delivery Fee', 'Pending Delivery Fee'
    STOCKPILE = 'Stockpile', 'Stockpile'
    PROCESSING = 'Processing', 'Processing'
    SHIPPED = 'Shipped', 'Shipped'
    OUT_FOR_DELIVERY = 'Out for delivery', 'Out for delivery'
    DELIVERED = 'Delivered', 'Delivered'
    COMPLETED = 'Completed', 'Completed'
    CANCELLED = 'Cancelled', 'Cancelled'


def generate_order_number():
    """Millisecond timestamp plus three random digits; collisions are improbable, not impossible."""
    return f'{int(time.time() * 1000)}{random.randint(0, 999):03d}'


class Order(models.Model):
    """A placed order.

    Money fields and the shipping choice are copied at placement time;
    ``total`` is ``subtotal + shipping_fee`` and is never recomputed.
    """

    order_number = models.CharField(max_length=32, default=generate_order_number, db_index=True)

    subtotal = models.DecimalField(max_digits=12, decimal_places=2)
    shipping_id = models.CharField(max_length=64)
    shipping_title = models.CharField(max_length=255)
    shipping_fee = models.DecimalField(max_digits=10, decimal_places=2, default=0)
    shipping_description = models.CharField(max_length=500, blank=True, default='')
    total = models.DecimalField(max_digits=12, decimal_places=2)

    customer_name = models.CharField(max_length=255)
    customer_email = models.EmailField()
    customer_phone = models.CharField(max_length=32)

    address_line = models.CharField(max_length=255, blank=True, default='')
    address_city = models.CharField(max_length=120, blank=True, default='')
    address_state = models.CharField(max_length=120, blank=True, default='')

    payment_proof_url = models.URLField(max_length=500, null=True, blank=True)
    status = models.CharField(max_length=40, choices=OrderStatus.choices, default=OrderStatus.AWAITING_CONFIRMATION)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-created_at', '-id']
        indexes = [
            models.Index(fields=['status', 'created_at'], name='order_status_created_idx'),
        ]

    def __str__(self):
        return f"Order #{self.order_number} - {self.customer_name}"

    @property
    def delivery_address(self):
        return ', '.join(part for part in (self.address_line, self.address_city, self.address_state) if part)

    @property
    def total_sales(self):
        return sum((line.line_total for line in self.lines.all()), Decimal('0'))

    @property
    def total_cost(self):
        return sum((line.line_cost for line in self.lines.all()), Decimal('0'))

    @property
    def gain(self):
        return self.total_sales - self.total_cost


class OrderLine(models.Model):
    """Snapshot of a cart line at placement; later product edits do not touch it."""

    order = models.ForeignKey(Order, on_delete=models.CASCADE, related_name='lines')
    product = models.ForeignKey(Product, on_delete=models.SET_NULL, null=True, blank=True, related_name='order_lines')
    product_ref = models.CharField(max_length=64)
    name = models.CharField(max_length=255)
    unit_price = models.DecimalField(max_digits=12, decimal_places=2)
    unit_cost = models.DecimalField(max_digits=12, decimal_places=2, default=0)
    image_url = models.URLField(max_length=500, blank=True, default='')
    quantity = models.PositiveIntegerField(default=1)
    color = models.CharField(max_length=100, null=True, blank=True)
    size = models.CharField(max_length=100, null=True, blank=True)

    class Meta:
        verbose_name = "Order Item"
        verbose_name_plural = "Order Items"
        ordering = ['id']

    def __str__(self):
        return f"{self.name} x{self.quantity} (Order #{self.order.order_number})"

    @property
    def line_total(self):
        return self.unit_price * self.quantity

    @property
    def line_cost(self):
        return (self.unit_cost or Decimal('0')) * self.quantity
