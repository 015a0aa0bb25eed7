"""Database models for store-wide configuration and shipping zones."""

import random
import string

from django.core.validators import MinValueValidator
from django.db import models


def default_theme():
    return {'button': '#6d28d9', 'bg': '#ffffff', 'text': '#0b1220'}


class StoreSettings(models.Model):
    """Singleton row holding the storefront configuration.

    Always stored with ``pk=1``; use :meth:`load` to read it.
    """

    SINGLETON_PK = 1

    store_name = models.CharField(max_length=255, default='Essyessentials')
    tagline = models.CharField(max_length=255, blank=True, default='')
    logo_url = models.URLField(max_length=500, blank=True, default='')
    contact_email = models.EmailField(blank=True, default='')
    whatsapp = models.CharField(max_length=32, blank=True, default='')

    bank_account_name = models.CharField(max_length=255, blank=True, default='')
    bank_account_number = models.CharField(max_length=64, blank=True, default='')
    bank_name = models.CharField(max_length=255, blank=True, default='')

    announcement = models.TextField(blank=True, default='Welcome to Essyessentials')
    theme = models.JSONField(default=default_theme, blank=True)

    allow_pickup = models.BooleanField(default=True)
    allow_address_not_listed = models.BooleanField(default=True)

    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = "Store Settings"
        verbose_name_plural = "Store Settings"

    def __str__(self):
        return self.store_name

    def save(self, *args, **kwargs):
        self.pk = self.SINGLETON_PK
        super().save(*args, **kwargs)

    @classmethod
    def load(cls):
        obj, _ = cls.objects.get_or_create(pk=cls.SINGLETON_PK)
        return obj


def generate_block_code() -> str:
    return 'sb_' + ''.join(random.choices(string.ascii_lowercase + string.digits, k=6))


class ShippingBlock(models.Model):
    """Admin-configured delivery zone with a flat fee."""

    code = models.CharField(max_length=64, unique=True, blank=True)
    title = models.CharField(max_length=255)
    fee = models.DecimalField(max_digits=10, decimal_places=2, default=0, validators=[MinValueValidator(0)])
    description = models.CharField(max_length=500, blank=True, default='')
    position = models.PositiveIntegerField(default=0)

    class Meta:
        ordering = ['position', 'id']

    def __str__(self):
        return f"{self.title} ({self.fee})"

    def save(self, *args, **kwargs):
        if not self.code:
            self.code = generate_block_code()
        super().save(*args, **kwargs)
