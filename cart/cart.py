"""Session-backed shopping cart.

The cart lives in the client's own storage (the Django session) as a JSON
string under ``cart``. Every mutation writes the whole cart back.
"""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass
from decimal import Decimal, InvalidOperation

logger = logging.getLogger(__name__)

CART_SESSION_KEY = 'cart'
PLACEHOLDER_IMAGE = 'https://via.placeholder.com/300x300?text=Product'
MAX_LINE_QUANTITY = 999


def clamp_quantity(quantity):
    return min(MAX_LINE_QUANTITY, max(1, int(quantity or 1)))


@dataclass
class CartLine:
    product_id: str
    name: str
    unit_price: Decimal
    quantity: int = 1
    image_url: str = PLACEHOLDER_IMAGE
    unit_cost: Decimal | None = None
    color: str | None = None
    size: str | None = None

    @property
    def key(self):
        return (self.product_id, self.color, self.size)

    @property
    def line_total(self) -> Decimal:
        return self.unit_price * self.quantity

    def to_json(self) -> dict:
        data = asdict(self)
        data['unit_price'] = str(self.unit_price)
        data['unit_cost'] = None if self.unit_cost is None else str(self.unit_cost)
        return data

    @classmethod
    def from_json(cls, data: dict) -> CartLine:
        unit_cost = data.get('unit_cost')
        return cls(
            product_id=str(data['product_id']),
            name=str(data.get('name') or ''),
            unit_price=Decimal(str(data.get('unit_price') or 0)),
            quantity=clamp_quantity(data.get('quantity')),
            image_url=data.get('image_url') or PLACEHOLDER_IMAGE,
            unit_cost=None if unit_cost in (None, '') else Decimal(str(unit_cost)),
            color=data.get('color') or None,
            size=data.get('size') or None,
        )


class Cart:
    """Line items for one shopper, persisted to ``storage`` on every change.

    ``storage`` is any mutable mapping; in requests it is ``request.session``.
    """

    def __init__(self, storage, key=CART_SESSION_KEY):
        self.storage = storage
        self.key = key
        self.lines = self._load()

    def _load(self) -> list[CartLine]:
        raw = self.storage.get(self.key)
        if not raw:
            return []
        try:
            data = json.loads(raw) if isinstance(raw, str) else raw
            return [CartLine.from_json(item) for item in data]
        except (TypeError, ValueError, KeyError, AttributeError, InvalidOperation):
            logger.warning('Discarding unreadable cart in %r', self.key)
            return []

    def save(self):
        self.storage[self.key] = json.dumps([line.to_json() for line in self.lines])

    def __iter__(self):
        return iter(self.lines)

    def __len__(self):
        return len(self.lines)

    def __bool__(self):
        return bool(self.lines)

    def __getitem__(self, index) -> CartLine:
        return self.lines[self._check_index(index)]

    def _check_index(self, index):
        if not 0 <= index < len(self.lines):
            raise IndexError(f'No cart line at index {index}.')
        return index

    def add(self, product, quantity=1, color=None, size=None) -> CartLine:
        """Add ``product``; a line with the same product/color/size is merged.

        Line quantities are capped at :data:`MAX_LINE_QUANTITY`.
        """
        quantity = clamp_quantity(quantity)
        color = color or None
        size = size or None
        key = (str(product.pk), color, size)

        for line in self.lines:
            if line.key == key:
                line.quantity = clamp_quantity(line.quantity + quantity)
                self.save()
                return line

        line = CartLine(
            product_id=str(product.pk),
            name=product.name,
            unit_price=Decimal(str(product.price or 0)),
            quantity=quantity,
            image_url=product.primary_image or PLACEHOLDER_IMAGE,
            unit_cost=Decimal(str(product.original_cost)) if product.original_cost is not None else None,
            color=color,
            size=size,
        )
        self.lines.append(line)
        self.save()
        return line

    def increment(self, index) -> CartLine:
        line = self.lines[self._check_index(index)]
        line.quantity = clamp_quantity(line.quantity + 1)
        self.save()
        return line

    def decrement(self, index) -> CartLine:
        """Take one unit off; a line never drops below 1 (use :meth:`remove`)."""
        line = self.lines[self._check_index(index)]
        line.quantity = max(1, line.quantity - 1)
        self.save()
        return line

    def remove(self, index) -> CartLine:
        line = self.lines.pop(self._check_index(index))
        self.save()
        return line

    def clear(self):
        self.lines = []
        self.save()

    @property
    def count(self) -> int:
        return sum(line.quantity for line in self.lines)

    @property
    def subtotal(self) -> Decimal:
        return sum((line.line_total for line in self.lines), Decimal('0'))
