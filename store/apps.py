"""Store app configuration; owns the store settings provider."""

from django.apps import AppConfig


class StoreAppConfig(AppConfig):
    """Django app config for store-wide settings and shipping."""

    default_auto_field = 'django.db.models.BigAutoField'
    name = 'store'
    verbose_name = 'Store'

    def ready(self):
        from .provider import SettingsProvider

        # Loaded lazily on first use; nothing touches the database here.
        self.settings_provider = SettingsProvider()
