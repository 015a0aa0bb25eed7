"""Live snapshot feeds over model tables.

A :class:`SnapshotFeed` pushes the full, ordered contents of a table to its
subscribers: once on subscribe, then after every save or delete of a row.
Subscribers either pass a callback or iterate the subscription as an
unbounded stream of snapshots that ends once they unsubscribe.
"""

import itertools
import logging
import queue
import threading

from django.db.models.signals import post_delete, post_save

logger = logging.getLogger(__name__)

_CLOSED = object()
_feed_ids = itertools.count(1)


class Subscription:
    """Handle returned by :meth:`SnapshotFeed.subscribe`."""

    def __init__(self, feed, callback=None):
        self._feed = feed
        self._callback = callback
        self._queue = queue.SimpleQueue()
        self._lock = threading.Lock()
        self._active = True

    @property
    def active(self) -> bool:
        return self._active

    def _deliver(self, snapshot):
        if not self._active:
            return
        if self._callback is None:
            self._queue.put(snapshot)
            return
        try:
            self._callback(snapshot)
        except Exception:
            logger.exception('Snapshot subscriber for %s failed', self._feed.model.__name__)

    def unsubscribe(self):
        """Stop deliveries. Safe to call more than once."""
        with self._lock:
            if not self._active:
                return
            self._active = False
        self._feed._remove(self)
        self._queue.put(_CLOSED)

    def __iter__(self):
        while True:
            item = self._queue.get()
            if item is _CLOSED:
                return
            yield item

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.unsubscribe()


class SnapshotFeed:
    """Ordered, full-table snapshots of ``model`` pushed on every change."""

    def __init__(self, model, ordering=(), serialize=None):
        self.model = model
        self.ordering = tuple(ordering)
        self._serialize = serialize
        self._subscribers = []
        self._lock = threading.Lock()
        self._connected = False
        self._uid = f'snapshot-feed-{next(_feed_ids)}'

    def get_queryset(self):
        qs = self.model._default_manager.all()
        if self.ordering:
            qs = qs.order_by(*self.ordering)
        return qs

    def snapshot(self) -> list:
        rows = list(self.get_queryset())
        if self._serialize is None:
            return rows
        return [self._serialize(row) for row in rows]

    def subscribe(self, callback=None, *, initial=True) -> Subscription:
        """Register a subscriber; ``initial=False`` skips the current snapshot."""
        subscription = Subscription(self, callback)
        with self._lock:
            self._subscribers.append(subscription)
            if not self._connected:
                self._connect()
        if initial:
            subscription._deliver(self.snapshot())
        return subscription

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)

    def _remove(self, subscription):
        with self._lock:
            if subscription in self._subscribers:
                self._subscribers.remove(subscription)
            if not self._subscribers and self._connected:
                self._disconnect()

    def _connect(self):
        post_save.connect(self._changed, sender=self.model, weak=False, dispatch_uid=f'{self._uid}-save')
        post_delete.connect(self._changed, sender=self.model, weak=False, dispatch_uid=f'{self._uid}-delete')
        self._connected = True

    def _disconnect(self):
        post_save.disconnect(sender=self.model, dispatch_uid=f'{self._uid}-save')
        post_delete.disconnect(sender=self.model, dispatch_uid=f'{self._uid}-delete')
        self._connected = False

    def _changed(self, sender, **kwargs):
        with self._lock:
            subscribers = list(self._subscribers)
        if not subscribers:
            return
        snapshot = self.snapshot()
        for subscription in subscribers:
            subscription._deliver(snapshot)
