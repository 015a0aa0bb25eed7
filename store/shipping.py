"""Shipping option resolution.

Turns a :class:`~store.config.StoreConfig` into the ordered list of
fulfillment choices offered at checkout:

    Pickup (if enabled) -> configured zones -> Address not listed (if enabled)
    -> Stockpile (always, last)
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

PICKUP = 'pickup'
ADDRESS_NOT_LISTED = 'address-not-listed'
STOCKPILE = 'stockpile'

RESERVED_OPTION_IDS = frozenset({PICKUP, ADDRESS_NOT_LISTED, STOCKPILE})

# Options that defer payment; no transfer proof is expected for them.
PROOF_EXEMPT_OPTION_IDS = frozenset({ADDRESS_NOT_LISTED, STOCKPILE})


@dataclass(frozen=True)
class ShippingOption:
    id: str
    title: str
    fee: Decimal
    description: str = ''


def resolve_shipping_options(config) -> list[ShippingOption]:
    options = []
    if config.allow_pickup:
        options.append(ShippingOption(PICKUP, 'Pickup', Decimal('0'), 'Pickup from store'))

    for zone in config.shipping_zones:
        options.append(ShippingOption(zone.code, zone.title, Decimal(str(zone.fee or 0)), zone.description))

    if config.allow_address_not_listed:
        options.append(ShippingOption(
            ADDRESS_NOT_LISTED,
            'Address not listed',
            Decimal('0'),
            'Admin will contact you for delivery fee',
        ))

    options.append(ShippingOption(STOCKPILE, 'Stockpile (reserve)', Decimal('0'), 'Reserve items and pay later'))
    return options


def find_shipping_option(options, option_id) -> ShippingOption | None:
    if not option_id:
        return None
    for option in options:
        if option.id == option_id:
            return option
    return None


def requires_payment_proof(option_id: str) -> bool:
    return option_id not in PROOF_EXEMPT_OPTION_IDS
