"""Database models for the product catalog."""

from django.core.validators import MinValueValidator
from django.db import models


# 1. Collections (named groupings used for browsing)
class Collection(models.Model):
    """Admin-defined tag used to group products on the storefront."""

    name = models.CharField(max_length=255, unique=True)

    class Meta:
        ordering = ['name']

    def __str__(self):
        return self.name


# 2. Products
class Product(models.Model):
    """Sellable product with a single stock counter.

    ``original_cost`` is admin-only and feeds margin reporting on orders.
    ``colors``/``sizes`` are the options a shopper may pick; ``images`` holds
    CDN URLs in display order.
    """

    name = models.CharField(max_length=255)
    price = models.DecimalField(max_digits=12, decimal_places=2, validators=[MinValueValidator(0)])
    original_cost = models.DecimalField(max_digits=12, decimal_places=2, default=0, validators=[MinValueValidator(0)])
    stock = models.PositiveIntegerField(default=0)
    description = models.TextField(blank=True, default='')
    colors = models.JSONField(default=list, blank=True)
    sizes = models.JSONField(default=list, blank=True)
    images = models.JSONField(default=list, blank=True)
    collections = models.ManyToManyField(Collection, related_name='products', blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-created_at', '-id']
        indexes = [
            models.Index(fields=['created_at'], name='product_created_idx'),
        ]

    def __str__(self):
        return self.name

    @property
    def primary_image(self):
        return self.images[0] if self.images else ''

    @property
    def in_stock(self):
        return self.stock > 0
