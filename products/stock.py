"""Stock decrement used after an order is placed.

Two modes:

- read-then-write (default): read the counter, write ``max(0, stock - qty)``.
  Two concurrent orders for the last unit can both succeed; the counter
  never goes below zero.
- atomic: one conditional ``UPDATE ... WHERE stock >= qty``. When the row
  does not have enough stock it is floored at zero instead and
  :class:`InsufficientStock` is raised so the caller can report the shortfall.
"""

import logging

from django.db.models import F

from .models import Product

logger = logging.getLogger(__name__)


class InsufficientStock(Exception):
    """Atomic decrement could not take ``requested`` units."""

    def __init__(self, product_id, requested):
        self.product_id = product_id
        self.requested = requested
        super().__init__(f'Not enough stock for product {product_id} (requested {requested}).')


def decrement_stock(product_id, quantity, *, atomic=False):
    """Take ``quantity`` units off a product's stock.

    Returns the new stock value, or None when the product no longer exists.
    """
    qty = max(0, int(quantity or 0))

    if atomic:
        updated = Product.objects.filter(pk=product_id, stock__gte=qty).update(stock=F('stock') - qty)
        if not updated:
            floored = Product.objects.filter(pk=product_id, stock__lt=qty).update(stock=0)
            if floored:
                raise InsufficientStock(product_id, qty)
            if not Product.objects.filter(pk=product_id).exists():
                return None
            # stock was topped up between the two updates
            return decrement_stock(product_id, qty, atomic=True)
        return Product.objects.filter(pk=product_id).values_list('stock', flat=True).first()

    product = Product.objects.filter(pk=product_id).only('id', 'stock').first()
    if product is None:
        logger.info('Skipping stock update for missing product %s', product_id)
        return None

    current = int(product.stock or 0)
    product.stock = max(0, current - qty)
    product.save(update_fields=['stock'])
    return product.stock
