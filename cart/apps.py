"""Cart app configuration."""

from django.apps import AppConfig


class CartConfig(AppConfig):
    """Django app config for the session cart."""

    name = 'cart'
