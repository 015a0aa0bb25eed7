"""Order placement.

:class:`CheckoutService` turns a cart plus customer details into a stored
order. Checks run in a fixed order and stop at the first failure, before
anything is uploaded or written:

    1. cart is not empty
    2. name, email and phone are filled in
    3. a known shipping option is selected
    4. a payment proof image is attached, unless the option defers payment
    5. the totals fit the order record

After the order and its lines are committed, stock updates and the order
emails run as independent post-commit tasks. A failing task is logged and
reported in ``PlacementResult.failed_tasks``; it never undoes the order.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from decimal import Decimal

import phonenumbers
from django import forms
from django.conf import settings
from django.core.exceptions import ValidationError as DjangoValidationError
from django.core.validators import validate_email
from django.db import transaction

from integrations.cloudinary_upload import UploadError
from integrations.whatsapp import build_whatsapp_link
from products.models import Product
from products.stock import decrement_stock
from store.shipping import (
    ADDRESS_NOT_LISTED,
    STOCKPILE,
    find_shipping_option,
    requires_payment_proof,
    resolve_shipping_options,
)

from .exceptions import (
    EmptyCart,
    IncompleteCustomerInfo,
    InvalidPaymentProof,
    MissingPaymentProof,
    NoShippingSelected,
    OrderPersistenceFailed,
    OrderTooLarge,
    UploadFailed,
)
from .models import Order, OrderLine, OrderStatus
from .notifications import order_summary

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CustomerInfo:
    name: str = ''
    email: str = ''
    phone: str = ''


@dataclass(frozen=True)
class DeliveryAddress:
    line: str = ''
    city: str = ''
    state: str = ''

    @classmethod
    def parse(cls, text):
        """Read ``"line, city, state"``; extra commas stay in the street line."""
        parts = [p.strip() for p in (text or '').split(',')]
        parts = [p for p in parts if p]
        if len(parts) <= 1:
            return cls(line=parts[0] if parts else '')
        if len(parts) == 2:
            return cls(line=parts[0], city=parts[1])
        return cls(line=', '.join(parts[:-2]), city=parts[-2], state=parts[-1])


@dataclass
class PlacementResult:
    order: Order
    whatsapp_url: str | None = None
    failed_tasks: list = field(default_factory=list)


def initial_status(shipping_id):
    if shipping_id == STOCKPILE:
        return OrderStatus.STOCKPILE
    if shipping_id == ADDRESS_NOT_LISTED:
        return OrderStatus.PENDING_DELIVERY_FEE
    return OrderStatus.AWAITING_CONFIRMATION


def normalize_phone(phone, region=None):
    """Return ``phone`` in E.164 form when it reads as a possible number.

    Anything else is kept as typed; the store follows up by hand.
    """
    clean = re.sub(r'(?<!^)\+|[^\d+]', '', phone)
    if clean.startswith('00'):
        clean = '+' + clean[2:]
    try:
        parsed = phonenumbers.parse(clean, region or settings.STORE_PHONE_REGION)
    except phonenumbers.NumberParseException:
        return phone
    if not phonenumbers.is_possible_number(parsed):
        return phone
    return phonenumbers.format_number(parsed, phonenumbers.PhoneNumberFormat.E164)


class CheckoutService:
    """Places orders against one :class:`~store.config.StoreConfig` snapshot.

    ``uploader`` takes a file and returns its public URL, raising
    :class:`UploadError` on failure. ``mailer`` is an
    :class:`~orders.notifications.OrderMailer` (or anything with the same
    ``send_order_placed`` method).
    """

    def __init__(self, config, uploader, mailer, atomic_stock=False):
        self.config = config
        self.uploader = uploader
        self.mailer = mailer
        self.atomic_stock = atomic_stock
        self.shipping_options = resolve_shipping_options(config)

    # Validation
    def _check_customer(self, customer):
        name = (customer.name or '').strip()
        email = (customer.email or '').strip()
        phone = (customer.phone or '').strip()
        if not name or not email or not phone:
            raise IncompleteCustomerInfo()
        try:
            validate_email(email)
        except DjangoValidationError:
            raise IncompleteCustomerInfo('Please enter a valid email address.')
        phone = normalize_phone(phone)
        if len(phone) > Order._meta.get_field('customer_phone').max_length:
            raise IncompleteCustomerInfo('Please enter a shorter phone number.')
        return CustomerInfo(name=name, email=email, phone=phone)

    def _check_shipping(self, shipping_id):
        option = find_shipping_option(self.shipping_options, shipping_id)
        if option is None:
            raise NoShippingSelected()
        return option

    def _check_proof(self, payment_proof):
        try:
            forms.ImageField().to_python(payment_proof)
        except DjangoValidationError:
            raise InvalidPaymentProof()

    def _check_amounts(self, subtotal, total):
        for name, amount in (('subtotal', subtotal), ('total', total)):
            field = Order._meta.get_field(name)
            if abs(amount) >= Decimal(10) ** (field.max_digits - field.decimal_places):
                raise OrderTooLarge()

    # Placement
    def place_order(self, cart, customer, address, shipping_id, payment_proof=None) -> PlacementResult:
        if not cart:
            raise EmptyCart()
        customer = self._check_customer(customer)
        option = self._check_shipping(shipping_id)
        proof_required = requires_payment_proof(option.id)
        if proof_required:
            if payment_proof is None:
                raise MissingPaymentProof()
            self._check_proof(payment_proof)
        self._check_amounts(cart.subtotal, cart.subtotal + option.fee)

        proof_url = None
        if proof_required:
            try:
                proof_url = self.uploader(payment_proof)
            except UploadError as exc:
                logger.warning('Payment proof upload failed for %s: %s', customer.email, exc)
                raise UploadFailed() from exc

        order = self._persist(cart, customer, address, option, proof_url)
        failed = self._run_post_commit(order, self._post_commit_tasks(order))
        failed += self._send_order_emails(order)

        whatsapp_url = None
        if self.config.whatsapp:
            whatsapp_url = build_whatsapp_link(self.config.whatsapp, order_summary(order))

        cart.clear()
        logger.info('Order %s placed (%s, total %s)', order.order_number, order.status, order.total)
        return PlacementResult(order=order, whatsapp_url=whatsapp_url, failed_tasks=failed)

    def _persist(self, cart, customer, address, option, proof_url):
        lines = list(cart)
        subtotal = cart.subtotal
        product_ids = [int(line.product_id) for line in lines if str(line.product_id).isdigit()]

        try:
            with transaction.atomic():
                products = Product.objects.in_bulk(product_ids)
                order = Order.objects.create(
                    subtotal=subtotal,
                    shipping_id=option.id,
                    shipping_title=option.title,
                    shipping_fee=option.fee,
                    shipping_description=option.description,
                    total=subtotal + option.fee,
                    customer_name=customer.name,
                    customer_email=customer.email,
                    customer_phone=customer.phone,
                    address_line=address.line,
                    address_city=address.city,
                    address_state=address.state,
                    payment_proof_url=proof_url,
                    status=initial_status(option.id),
                )
                OrderLine.objects.bulk_create([
                    OrderLine(
                        order=order,
                        product=products.get(int(line.product_id)) if str(line.product_id).isdigit() else None,
                        product_ref=str(line.product_id),
                        name=line.name,
                        unit_price=line.unit_price,
                        unit_cost=line.unit_cost or 0,
                        image_url=line.image_url or '',
                        quantity=line.quantity,
                        color=line.color,
                        size=line.size,
                    )
                    for line in lines
                ])
        except Exception as exc:
            logger.exception('Saving order for %s failed', customer.email)
            raise OrderPersistenceFailed() from exc
        return order

    def _post_commit_tasks(self, order):
        tasks = []
        if order.shipping_id != STOCKPILE:
            for line in order.lines.all():
                if line.product_id is None:
                    continue
                tasks.append((
                    f'stock:{line.product_id}',
                    lambda line=line: decrement_stock(line.product_id, line.quantity, atomic=self.atomic_stock),
                ))
        return tasks

    def _run_post_commit(self, order, tasks):
        failed = []
        for name, task in tasks:
            try:
                task()
            except Exception as exc:
                logger.warning('Order %s: post-commit task %s failed: %s', order.order_number, name, exc)
                failed.append(name)
        return failed

    def _send_order_emails(self, order):
        try:
            failed = self.mailer.send_order_placed(order)
        except Exception as exc:
            logger.warning('Order %s: order emails failed: %s', order.order_number, exc)
            failed = ['customer', 'admin']
        return [f'email:{name}' for name in failed]
