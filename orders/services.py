"""Admin-side order status changes."""

import logging

from integrations.emailjs import EmailSendError

from .models import OrderStatus

logger = logging.getLogger(__name__)


class InvalidStatus(ValueError):
    """Raised for a value that is not one of :class:`OrderStatus`."""


def set_status(order, new_status, mailer=None):
    """Move ``order`` to ``new_status`` and tell the customer.

    Any named status may follow any other. The email is best-effort: a
    failure is logged and the new status stays saved. Returns True when the
    email went out.
    """
    if new_status not in OrderStatus.values:
        raise InvalidStatus(f'Unknown order status: {new_status!r}')

    order.status = new_status
    order.save(update_fields=['status', 'updated_at'])
    logger.info('Order %s status set to %s', order.order_number, new_status)

    if mailer is None:
        return False
    try:
        mailer.send_status_changed(order)
    except EmailSendError as exc:
        logger.warning('Order %s: status email not sent: %s', order.order_number, exc)
        return False
    return True
