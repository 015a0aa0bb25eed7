"""Order emails and the WhatsApp order summary.

All order events share one set of template variables:

    customer_name, customer_email, order_id, order_items, total_amount,
    delivery_address, shipping_method, order_status, store_name, to_email
"""

import logging
from decimal import Decimal

from django.conf import settings

from integrations.emailjs import EmailJSClient, EmailSendError

logger = logging.getLogger(__name__)


def format_money(amount, symbol=None):
    """``₦2,000`` for whole amounts, ``₦2,000.50`` otherwise."""
    if symbol is None:
        symbol = settings.STORE_CURRENCY_SYMBOL
    value = Decimal(str(amount or 0))
    if value == value.to_integral_value():
        return f'{symbol}{value:,.0f}'
    return f'{symbol}{value:,.2f}'


def order_items_text(order):
    return '\n'.join(
        f'{line.name} x{line.quantity} @ {format_money(line.unit_price)}'
        for line in order.lines.all()
    )


def order_email_params(order, *, store_name='', to_email=''):
    return {
        'customer_name': order.customer_name,
        'customer_email': order.customer_email,
        'order_id': order.order_number,
        'order_items': order_items_text(order),
        'total_amount': format_money(order.total),
        'delivery_address': order.delivery_address,
        'shipping_method': order.shipping_title,
        'order_status': order.status,
        'store_name': store_name,
        'to_email': to_email,
    }


def order_summary(order):
    """Plain-text order summary sent to the store over WhatsApp."""
    return (
        f'New Order (#{order.order_number})\n\n'
        f'{order_items_text(order)}\n\n'
        f'Total: {format_money(order.total)}\n'
        f'Name: {order.customer_name}\n'
        f'Phone: {order.customer_phone}\n'
        f'Address: {order.delivery_address}'
    )


class OrderMailer:
    """Sends order emails through EmailJS.

    Each ``send_*`` call makes exactly one request and raises
    :class:`EmailSendError` on failure; callers decide whether that matters.
    """

    def __init__(self, client, *, customer_template, admin_template, admin_email='', store_name=''):
        self.client = client
        self.customer_template = customer_template
        self.admin_template = admin_template
        self.admin_email = admin_email
        self.store_name = store_name

    @classmethod
    def from_settings(cls, config=None):
        store_name = config.store_name if config is not None else ''
        admin_email = settings.STORE_ADMIN_EMAIL or (config.contact_email if config is not None else '')
        return cls(
            EmailJSClient.from_settings(),
            customer_template=settings.EMAILJS_TEMPLATE_CUSTOMER,
            admin_template=settings.EMAILJS_TEMPLATE_ADMIN,
            admin_email=admin_email,
            store_name=store_name,
        )

    def send_customer_order_email(self, order):
        params = order_email_params(order, store_name=self.store_name, to_email=order.customer_email)
        self.client.send(self.customer_template, params)

    def send_admin_order_email(self, order):
        params = order_email_params(order, store_name=self.store_name, to_email=self.admin_email)
        self.client.send(self.admin_template, params)

    def send_order_placed(self, order):
        """Customer then admin email, each attempted independently.

        Returns the names of the emails that failed.
        """
        failed = []
        for name, send in (('customer', self.send_customer_order_email), ('admin', self.send_admin_order_email)):
            try:
                send(order)
            except EmailSendError as exc:
                logger.warning('Order %s: %s email not sent: %s', order.order_number, name, exc)
                failed.append(name)
        return failed

    def send_status_changed(self, order):
        self.send_customer_order_email(order)
