"""Owner of the current :class:`~store.config.StoreConfig`.

The provider loads the configuration from the database, caches it for
``STORE_CONFIG_TTL`` seconds and reloads it whenever a StoreSettings or
ShippingBlock row changes in this process, pushing the new snapshot to its
listeners. Other processes pick up changes once the TTL expires.
"""

import logging
import threading
import time

from django.apps import apps
from django.conf import settings

from .config import load_store_config
from .feeds import SnapshotFeed

logger = logging.getLogger(__name__)


class SettingsProvider:
    def __init__(self, loader=load_store_config, clock=time.monotonic):
        self._loader = loader
        self._clock = clock
        self._lock = threading.Lock()
        self._config = None
        self._loaded_at = 0.0
        self._listeners = []
        self._watches = []

    def current(self):
        ttl = getattr(settings, 'STORE_CONFIG_TTL', 30)
        with self._lock:
            config = self._config
            age = self._clock() - self._loaded_at
        if config is None or ttl <= 0 or age >= ttl:
            return self.refresh()
        return config

    def refresh(self):
        config = self._loader()
        with self._lock:
            self._config = config
            self._loaded_at = self._clock()
            listeners = list(self._listeners)
        self._watch()
        for listener in listeners:
            try:
                listener(config)
            except Exception:
                logger.exception('Store settings listener failed')
        return config

    def subscribe(self, listener):
        """Call ``listener(config)`` on every refresh; returns an unsubscribe callable."""
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe():
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    def stop(self):
        with self._lock:
            watches, self._watches = self._watches, []
        for subscription in watches:
            subscription.unsubscribe()

    def _watch(self):
        from .models import ShippingBlock, StoreSettings

        with self._lock:
            if self._watches:
                return
            self._watches = [
                SnapshotFeed(StoreSettings).subscribe(self._on_change, initial=False),
                SnapshotFeed(ShippingBlock, ordering=('position', 'id')).subscribe(self._on_change, initial=False),
            ]

    def _on_change(self, snapshot):
        self.refresh()


def get_settings_provider() -> SettingsProvider:
    return apps.get_app_config('store').settings_provider
