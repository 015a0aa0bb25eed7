"""Errors raised by the order placement workflow.

Each error carries a stable ``code`` for API clients and a ``message`` that
can be shown to the shopper as-is.
"""


class CheckoutError(Exception):
    code = 'checkout_error'
    default_message = 'Could not place the order.'

    def __init__(self, message=None):
        self.message = message or self.default_message
        super().__init__(self.message)


class EmptyCart(CheckoutError):
    code = 'empty_cart'
    default_message = 'Your cart is empty.'


class IncompleteCustomerInfo(CheckoutError):
    code = 'incomplete_customer_info'
    default_message = 'Please fill name, email and phone.'


class NoShippingSelected(CheckoutError):
    code = 'no_shipping_selected'
    default_message = 'Please select a shipping option.'


class MissingPaymentProof(CheckoutError):
    code = 'missing_payment_proof'
    default_message = 'Please upload your payment proof.'


class UploadFailed(CheckoutError):
    code = 'upload_failed'
    default_message = 'Payment proof upload failed. Please try again.'


class OrderPersistenceFailed(CheckoutError):
    code = 'order_failed'
    default_message = 'Order failed'


class InvalidPaymentProof(CheckoutError):
    code = 'invalid_payment_proof'
    default_message = 'Payment proof must be an image.'


class OrderTooLarge(CheckoutError):
    code = 'order_too_large'
    default_message = 'This order is too large to place online. Please contact the store.'
