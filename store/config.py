"""Immutable store configuration snapshots.

Components receive a :class:`StoreConfig` when they are built instead of
reading the settings row themselves; :mod:`store.provider` owns refreshing it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal


@dataclass(frozen=True)
class ShippingZone:
    code: str
    title: str
    fee: Decimal
    description: str = ''


@dataclass(frozen=True)
class BankDetails:
    account_name: str = ''
    account_number: str = ''
    bank_name: str = ''


@dataclass(frozen=True)
class StoreConfig:
    store_name: str = 'Essyessentials'
    tagline: str = ''
    logo_url: str = ''
    contact_email: str = ''
    whatsapp: str = ''
    bank: BankDetails = field(default_factory=BankDetails)
    announcement: str = 'Welcome to Essyessentials'
    theme: dict = field(default_factory=dict)
    allow_pickup: bool = True
    allow_address_not_listed: bool = True
    shipping_zones: tuple[ShippingZone, ...] = ()

    @classmethod
    def from_models(cls, store_settings, blocks) -> StoreConfig:
        zones = tuple(
            ShippingZone(
                code=b.code,
                title=b.title,
                fee=Decimal(str(b.fee or 0)),
                description=b.description or '',
            )
            for b in blocks
        )
        return cls(
            store_name=store_settings.store_name,
            tagline=store_settings.tagline,
            logo_url=store_settings.logo_url,
            contact_email=store_settings.contact_email,
            whatsapp=store_settings.whatsapp,
            bank=BankDetails(
                account_name=store_settings.bank_account_name,
                account_number=store_settings.bank_account_number,
                bank_name=store_settings.bank_name,
            ),
            announcement=store_settings.announcement,
            theme=dict(store_settings.theme or {}),
            allow_pickup=store_settings.allow_pickup,
            allow_address_not_listed=store_settings.allow_address_not_listed,
            shipping_zones=zones,
        )


def load_store_config() -> StoreConfig:
    """Build a fresh snapshot from the database."""
    from .models import ShippingBlock, StoreSettings

    return StoreConfig.from_models(StoreSettings.load(), ShippingBlock.objects.all())
