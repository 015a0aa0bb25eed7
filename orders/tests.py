"""Orders app tests."""

import io
from decimal import Decimal
from unittest import mock

from django.contrib.auth import get_user_model
from django.core.files.uploadedfile import SimpleUploadedFile
from django.db import DatabaseError
from django.test import TestCase, override_settings
from PIL import Image
from rest_framework.test import APIClient

from cart.cart import Cart
from integrations.cloudinary_upload import UploadError
from integrations.emailjs import EmailJSClient, EmailSendError
from orders.checkout import CheckoutService, CustomerInfo, DeliveryAddress
from orders.exceptions import (
	EmptyCart,
	IncompleteCustomerInfo,
	InvalidPaymentProof,
	MissingPaymentProof,
	NoShippingSelected,
	OrderPersistenceFailed,
	OrderTooLarge,
	UploadFailed,
)
from orders.models import Order, OrderLine, OrderStatus
from orders.notifications import OrderMailer, format_money, order_email_params
from orders.services import InvalidStatus, set_status
from products.models import Collection, Product
from store.config import ShippingZone, StoreConfig
from store.models import ShippingBlock, StoreSettings


def make_image(name='proof.png'):
	buf = io.BytesIO()
	Image.new('RGB', (2, 2), color='blue').save(buf, format='PNG')
	return SimpleUploadedFile(name, buf.getvalue(), content_type='image/png')


class RecordingMailer(OrderMailer):
	"""OrderMailer that records sends instead of calling EmailJS; fails on request."""

	def __init__(self, fail=()):
		self.sent = []
		self.fail = set(fail)

	def _send(self, kind, order):
		self.sent.append((kind, order.order_number))
		if kind in self.fail:
			raise EmailSendError(f'{kind} down')

	def send_customer_order_email(self, order):
		self._send('customer', order)

	def send_admin_order_email(self, order):
		self._send('admin', order)

	def send_status_changed(self, order):
		self._send('status', order)


class RecordingUploader:
	def __init__(self, url='https://cdn.example.com/proofs/1.png', error=None):
		self.url = url
		self.error = error
		self.calls = 0

	def __call__(self, file):
		self.calls += 1
		if self.error:
			raise self.error
		return self.url


CUSTOMER = CustomerInfo(name='Ada Obi', email='ada@example.com', phone='08031234567')
ADDRESS = DeliveryAddress(line='12 Allen Avenue', city='Ikeja', state='Lagos')
LAGOS = ShippingZone(code='sb_lagos', title='Lagos Mainland', fee=Decimal('1500'), description='2-3 days')


class CheckoutServiceTests(TestCase):
	def setUp(self):
		self.p1 = Product.objects.create(name='Silk Dress', price='1000.00', original_cost='600.00', stock=5)
		self.p2 = Product.objects.create(name='Tote Bag', price='250.00', original_cost='100.00', stock=1)
		self.config = StoreConfig(whatsapp='+234 803 000 0000', shipping_zones=(LAGOS,))
		self.mailer = RecordingMailer()
		self.uploader = RecordingUploader()
		self.storage = {}

	def service(self, **kwargs):
		options = {'config': self.config, 'uploader': self.uploader, 'mailer': self.mailer}
		options.update(kwargs)
		return CheckoutService(**options)

	def cart_with(self, *items):
		cart = Cart(self.storage)
		for product, qty in items:
			cart.add(product, quantity=qty)
		return cart

	def test_pickup_scenario(self):
		cart = self.cart_with((self.p1, 2))
		result = self.service().place_order(cart, CUSTOMER, ADDRESS, 'pickup', payment_proof=make_image())

		order = result.order
		self.assertEqual(order.subtotal, Decimal('2000'))
		self.assertEqual(order.total, Decimal('2000'))
		self.assertEqual(order.status, OrderStatus.AWAITING_CONFIRMATION)
		self.assertEqual(order.payment_proof_url, 'https://cdn.example.com/proofs/1.png')
		self.assertEqual(result.failed_tasks, [])
		self.p1.refresh_from_db()
		self.assertEqual(self.p1.stock, 3)

	def test_stockpile_keeps_stock_and_needs_no_proof(self):
		cart = self.cart_with((self.p1, 2))
		result = self.service().place_order(cart, CUSTOMER, ADDRESS, 'stockpile')

		self.assertEqual(result.order.status, OrderStatus.STOCKPILE)
		self.assertIsNone(result.order.payment_proof_url)
		self.assertEqual(self.uploader.calls, 0)
		self.p1.refresh_from_db()
		self.assertEqual(self.p1.stock, 5)

	def test_address_not_listed_is_pending_delivery_fee(self):
		cart = self.cart_with((self.p1, 1))
		result = self.service().place_order(cart, CUSTOMER, ADDRESS, 'address-not-listed')
		self.assertEqual(result.order.status, OrderStatus.PENDING_DELIVERY_FEE)
		self.assertEqual(result.order.shipping_fee, Decimal('0'))

	def test_zone_fee_added_and_stock_floored_at_zero(self):
		cart = self.cart_with((self.p1, 1), (self.p2, 3))
		result = self.service().place_order(cart, CUSTOMER, ADDRESS, 'sb_lagos', payment_proof=make_image())

		order = result.order
		self.assertEqual(order.subtotal, Decimal('1750'))
		self.assertEqual(order.total, order.subtotal + order.shipping_fee)
		self.assertEqual(order.total, Decimal('3250'))
		self.assertEqual(order.shipping_title, 'Lagos Mainland')
		self.p2.refresh_from_db()
		self.assertEqual(self.p2.stock, 0)

	def test_order_is_a_snapshot(self):
		cart = self.cart_with((self.p1, 2))
		order = self.service().place_order(cart, CUSTOMER, ADDRESS, 'stockpile').order

		product_pk = self.p1.pk
		self.p1.price = Decimal('5000')
		self.p1.name = 'Renamed'
		self.p1.save()
		self.p1.delete()

		order.refresh_from_db()
		line = order.lines.get()
		self.assertEqual(order.total, Decimal('2000'))
		self.assertEqual(line.name, 'Silk Dress')
		self.assertEqual(line.unit_price, Decimal('1000.00'))
		self.assertIsNone(line.product)
		self.assertEqual(line.product_ref, str(product_pk))

	def test_missing_proof_rejected_without_side_effects(self):
		cart = self.cart_with((self.p1, 1))
		with self.assertRaises(MissingPaymentProof):
			self.service().place_order(cart, CUSTOMER, ADDRESS, 'pickup')
		self.assertFalse(Order.objects.exists())
		self.assertEqual(self.uploader.calls, 0)
		self.assertEqual(len(Cart(self.storage)), 1)

	def test_checks_run_in_order(self):
		blank = CustomerInfo()
		with self.assertRaises(EmptyCart):
			self.service().place_order(Cart({}), blank, ADDRESS, '')
		cart = self.cart_with((self.p1, 1))
		with self.assertRaises(IncompleteCustomerInfo):
			self.service().place_order(cart, blank, ADDRESS, '')
		with self.assertRaises(NoShippingSelected):
			self.service().place_order(cart, CUSTOMER, ADDRESS, '')
		with self.assertRaises(NoShippingSelected):
			self.service().place_order(cart, CUSTOMER, ADDRESS, 'moon-base')
		self.assertFalse(Order.objects.exists())

	def test_bad_email_rejected(self):
		cart = self.cart_with((self.p1, 1))
		with self.assertRaises(IncompleteCustomerInfo):
			self.service().place_order(cart, CustomerInfo('Ada', 'not-an-email', '08031234567'), ADDRESS, 'stockpile')

	def test_any_filled_phone_accepted(self):
		order = self.service().place_order(
			self.cart_with((self.p1, 1)), CustomerInfo('Ada', 'ada@example.com', '0803 123 4567'), ADDRESS, 'stockpile',
		).order
		self.assertEqual(order.customer_phone, '+2348031234567')

		order = self.service().place_order(
			self.cart_with((self.p1, 1)), CustomerInfo('Ada', 'ada@example.com', 'ext 12'), ADDRESS, 'stockpile',
		).order
		self.assertEqual(order.customer_phone, 'ext 12')

	def test_proof_must_be_an_image(self):
		cart = self.cart_with((self.p1, 1))
		not_image = SimpleUploadedFile('proof.txt', b'paid', content_type='text/plain')
		with self.assertRaises(InvalidPaymentProof):
			self.service().place_order(cart, CUSTOMER, ADDRESS, 'pickup', payment_proof=not_image)
		self.assertEqual(self.uploader.calls, 0)
		self.assertFalse(Order.objects.exists())

	def test_order_too_large_for_record(self):
		pricey = Product.objects.create(name='Gold Bar', price='100000000.00', stock=999)
		cart = self.cart_with((pricey, 999))
		with self.assertRaises(OrderTooLarge):
			self.service().place_order(cart, CUSTOMER, ADDRESS, 'pickup', payment_proof=make_image())
		self.assertEqual(self.uploader.calls, 0)
		self.assertFalse(Order.objects.exists())
		self.assertEqual(len(Cart(self.storage)), 1)

	def test_unexpected_save_error_is_persistence_failure(self):
		cart = self.cart_with((self.p1, 1))
		with mock.patch.object(OrderLine.objects, 'bulk_create', side_effect=ValueError('bad row')):
			with self.assertRaises(OrderPersistenceFailed):
				self.service().place_order(cart, CUSTOMER, ADDRESS, 'stockpile')
		self.assertFalse(Order.objects.exists())

	def test_disabled_pickup_is_unknown(self):
		config = StoreConfig(allow_pickup=False)
		cart = self.cart_with((self.p1, 1))
		with self.assertRaises(NoShippingSelected):
			self.service(config=config).place_order(cart, CUSTOMER, ADDRESS, 'pickup', payment_proof=make_image())

	def test_upload_failure_saves_nothing(self):
		cart = self.cart_with((self.p1, 1))
		service = self.service(uploader=RecordingUploader(error=UploadError('down')))
		with self.assertRaises(UploadFailed):
			service.place_order(cart, CUSTOMER, ADDRESS, 'pickup', payment_proof=make_image())
		self.assertFalse(Order.objects.exists())
		self.p1.refresh_from_db()
		self.assertEqual(self.p1.stock, 5)

	def test_persistence_failure_leaves_no_partial_order(self):
		cart = self.cart_with((self.p1, 1))
		with mock.patch.object(OrderLine.objects, 'bulk_create', side_effect=DatabaseError('disk full')):
			with self.assertRaises(OrderPersistenceFailed) as ctx:
				self.service().place_order(cart, CUSTOMER, ADDRESS, 'stockpile')
		self.assertEqual(ctx.exception.message, 'Order failed')
		self.assertFalse(Order.objects.exists())
		self.assertEqual(self.mailer.sent, [])
		self.assertEqual(len(Cart(self.storage)), 1)

	def test_email_failure_does_not_undo_order(self):
		cart = self.cart_with((self.p1, 1))
		mailer = RecordingMailer(fail={'customer'})
		result = self.service(mailer=mailer).place_order(cart, CUSTOMER, ADDRESS, 'stockpile')

		self.assertTrue(Order.objects.filter(pk=result.order.pk).exists())
		self.assertEqual(result.failed_tasks, ['email:customer'])
		self.assertEqual([kind for kind, _ in mailer.sent], ['customer', 'admin'])

	def test_naive_stock_can_oversell_but_never_goes_negative(self):
		first = self.service().place_order(self.cart_with((self.p2, 1)), CUSTOMER, ADDRESS, 'sb_lagos', payment_proof=make_image())
		second = self.service().place_order(self.cart_with((self.p2, 1)), CUSTOMER, ADDRESS, 'sb_lagos', payment_proof=make_image())

		self.assertEqual(first.failed_tasks, [])
		self.assertEqual(second.failed_tasks, [])
		self.assertEqual(Order.objects.count(), 2)
		self.p2.refresh_from_db()
		self.assertEqual(self.p2.stock, 0)

	def test_atomic_stock_reports_shortfall_as_failed_task(self):
		service = self.service(atomic_stock=True)
		service.place_order(self.cart_with((self.p2, 1)), CUSTOMER, ADDRESS, 'sb_lagos', payment_proof=make_image())
		second = service.place_order(self.cart_with((self.p2, 1)), CUSTOMER, ADDRESS, 'sb_lagos', payment_proof=make_image())

		self.assertEqual(second.failed_tasks, [f'stock:{self.p2.pk}'])
		self.assertEqual(Order.objects.count(), 2)
		self.p2.refresh_from_db()
		self.assertEqual(self.p2.stock, 0)

	def test_atomic_stock_short_but_not_empty_is_floored(self):
		result = self.service(atomic_stock=True).place_order(
			self.cart_with((self.p1, 7)), CUSTOMER, ADDRESS, 'sb_lagos', payment_proof=make_image(),
		)

		self.assertEqual(result.failed_tasks, [f'stock:{self.p1.pk}'])
		self.assertTrue(Order.objects.filter(pk=result.order.pk).exists())
		self.p1.refresh_from_db()
		self.assertEqual(self.p1.stock, 0)

	def test_whatsapp_link_and_cart_cleared(self):
		cart = self.cart_with((self.p1, 2))
		result = self.service().place_order(cart, CUSTOMER, ADDRESS, 'stockpile')

		self.assertTrue(result.whatsapp_url.startswith('https://wa.me/2348030000000?text='))
		self.assertIn(result.order.order_number, result.whatsapp_url)
		self.assertEqual(len(Cart(self.storage)), 0)

		no_number = self.service(config=StoreConfig()).place_order(
			self.cart_with((self.p1, 1)), CUSTOMER, ADDRESS, 'stockpile',
		)
		self.assertIsNone(no_number.whatsapp_url)

	def test_gain_uses_snapshot_costs(self):
		cart = self.cart_with((self.p1, 2), (self.p2, 1))
		order = self.service().place_order(cart, CUSTOMER, ADDRESS, 'stockpile').order
		self.assertEqual(order.total_sales, Decimal('2250'))
		self.assertEqual(order.total_cost, Decimal('1300'))
		self.assertEqual(order.gain, Decimal('950'))


class DeliveryAddressTests(TestCase):
	def test_parse(self):
		self.assertEqual(DeliveryAddress.parse('12 Allen Ave, Ikeja, Lagos'), DeliveryAddress('12 Allen Ave', 'Ikeja', 'Lagos'))
		self.assertEqual(DeliveryAddress.parse('Flat 2, 12 Allen Ave, Ikeja, Lagos').line, 'Flat 2, 12 Allen Ave')
		self.assertEqual(DeliveryAddress.parse('Ikeja'), DeliveryAddress('Ikeja'))
		self.assertEqual(DeliveryAddress.parse(''), DeliveryAddress())


@override_settings(STORE_CURRENCY_SYMBOL='₦')
class OrderNotificationTests(TestCase):
	def setUp(self):
		self.order = Order.objects.create(
			order_number='1700000000000123', subtotal='2000.00', shipping_id='pickup', shipping_title='Pickup',
			total='2000.00', customer_name='Ada Obi', customer_email='ada@example.com', customer_phone='0803',
			address_line='12 Allen Ave', address_city='Ikeja',
		)
		OrderLine.objects.create(order=self.order, product_ref='1', name='Silk Dress', unit_price='1000.00', quantity=2)

	def test_money(self):
		self.assertEqual(format_money(Decimal('2000')), '₦2,000')
		self.assertEqual(format_money('1234.5'), '₦1,234.50')

	def test_one_schema_for_every_event(self):
		params = order_email_params(self.order, store_name='Essyessentials', to_email='ada@example.com')
		self.assertEqual(set(params), {
			'customer_name', 'customer_email', 'order_id', 'order_items', 'total_amount',
			'delivery_address', 'shipping_method', 'order_status', 'store_name', 'to_email',
		})
		self.assertEqual(params['order_items'], 'Silk Dress x2 @ ₦1,000')
		self.assertEqual(params['delivery_address'], '12 Allen Ave, Ikeja')
		self.assertEqual(params['total_amount'], '₦2,000')

	def test_order_placed_sends_customer_then_admin(self):
		client = mock.Mock()
		mailer = OrderMailer(client, customer_template='tpl_c', admin_template='tpl_a', admin_email='shop@example.com')
		client.send.side_effect = [EmailSendError('down'), None]

		self.assertEqual(mailer.send_order_placed(self.order), ['customer'])
		calls = client.send.call_args_list
		self.assertEqual([c.args[0] for c in calls], ['tpl_c', 'tpl_a'])
		self.assertEqual(calls[0].args[1]['to_email'], 'ada@example.com')
		self.assertEqual(calls[1].args[1]['to_email'], 'shop@example.com')


class OrderStatusTests(TestCase):
	def setUp(self):
		self.order = Order.objects.create(
			subtotal='500.00', shipping_id='stockpile', shipping_title='Stockpile (reserve)', total='500.00',
			customer_name='Ada', customer_email='ada@example.com', customer_phone='0803',
			status=OrderStatus.STOCKPILE,
		)

	def test_any_named_status_can_follow_any_other(self):
		mailer = RecordingMailer()
		for value in (OrderStatus.CANCELLED, OrderStatus.PROCESSING, OrderStatus.AWAITING_CONFIRMATION):
			self.assertTrue(set_status(self.order, value, mailer))
			self.order.refresh_from_db()
			self.assertEqual(self.order.status, value)
		self.assertEqual(len(mailer.sent), 3)

	def test_email_failure_keeps_new_status(self):
		self.assertFalse(set_status(self.order, OrderStatus.SHIPPED, RecordingMailer(fail={'status'})))
		self.order.refresh_from_db()
		self.assertEqual(self.order.status, OrderStatus.SHIPPED)

	def test_unknown_status_rejected(self):
		with self.assertRaises(InvalidStatus):
			set_status(self.order, 'Teleported')
		self.order.refresh_from_db()
		self.assertEqual(self.order.status, OrderStatus.STOCKPILE)

	def test_total_not_recomputed_on_status_change(self):
		set_status(self.order, OrderStatus.DELIVERED)
		self.order.refresh_from_db()
		self.assertEqual(self.order.total, Decimal('500.00'))


@override_settings(
	ALLOWED_HOSTS=['testserver', 'localhost', '127.0.0.1'],
	STORE_CONFIG_TTL=0,
	STOCK_DECREMENT_ATOMIC=False,
)
class CheckoutApiTests(TestCase):
	@classmethod
	def setUpTestData(cls):
		cls.product = Product.objects.create(name='Silk Dress', price='1000.00', original_cost='600.00', stock=5)
		settings_row = StoreSettings.load()
		settings_row.whatsapp = '2348030000000'
		settings_row.save()
		ShippingBlock.objects.create(code='sb_lagos', title='Lagos Mainland', fee='1500.00')

	def setUp(self):
		self.client = APIClient()
		self.client.post('/api/cart/items/', {'product': self.product.id, 'quantity': 2}, format='json')

	def form(self, **overrides):
		data = {
			'name': 'Ada Obi',
			'email': 'ada@example.com',
			'phone': '08031234567',
			'address': '12 Allen Ave, Ikeja, Lagos',
			'shipping_id': 'sb_lagos',
		}
		data.update(overrides)
		return data

	@mock.patch.object(EmailJSClient, 'send')
	@mock.patch('orders.views.upload_image', return_value='https://cdn.example.com/proofs/9.png')
	def test_checkout_with_proof(self, upload, send):
		res = self.client.post('/api/orders/checkout/', self.form(payment_proof=make_image()), format='multipart')
		self.assertEqual(res.status_code, 201, res.data)

		order = res.data['order']
		self.assertEqual(order['subtotal'], '2000.00')
		self.assertEqual(order['total'], '3500.00')
		self.assertEqual(order['status'], 'Awaiting Confirmation')
		self.assertEqual(order['address_state'], 'Lagos')
		self.assertEqual(order['payment_proof_url'], 'https://cdn.example.com/proofs/9.png')
		self.assertNotIn('gain', order)
		self.assertTrue(res.data['whatsapp_url'].startswith('https://wa.me/2348030000000?text='))
		self.assertEqual(send.call_count, 2)

		self.product.refresh_from_db()
		self.assertEqual(self.product.stock, 3)
		self.assertEqual(self.client.get('/api/cart/').data['count'], 0)

	def test_missing_proof_is_400_with_code(self):
		res = self.client.post('/api/orders/checkout/', self.form(), format='multipart')
		self.assertEqual(res.status_code, 400)
		self.assertEqual(res.data['code'], 'missing_payment_proof')
		self.assertFalse(Order.objects.exists())

	def test_empty_cart(self):
		res = APIClient().post('/api/orders/checkout/', self.form(shipping_id='stockpile'), format='json')
		self.assertEqual(res.status_code, 400)
		self.assertEqual(res.data['code'], 'empty_cart')

	def test_non_image_proof_checked_after_cart_and_customer(self):
		not_image = SimpleUploadedFile('proof.txt', b'paid', content_type='text/plain')
		res = APIClient().post('/api/orders/checkout/', self.form(payment_proof=not_image), format='multipart')
		self.assertEqual(res.data['code'], 'empty_cart')

		not_image.seek(0)
		res = self.client.post('/api/orders/checkout/', self.form(name='', payment_proof=not_image), format='multipart')
		self.assertEqual(res.data['code'], 'incomplete_customer_info')

		not_image.seek(0)
		res = self.client.post('/api/orders/checkout/', self.form(payment_proof=not_image), format='multipart')
		self.assertEqual(res.status_code, 400)
		self.assertEqual(res.data['code'], 'invalid_payment_proof')
		self.assertFalse(Order.objects.exists())

	@mock.patch('orders.views.upload_image', side_effect=UploadError('down'))
	def test_upload_failure_is_502(self, upload):
		res = self.client.post('/api/orders/checkout/', self.form(payment_proof=make_image()), format='multipart')
		self.assertEqual(res.status_code, 502)
		self.assertEqual(res.data['code'], 'upload_failed')
		self.assertFalse(Order.objects.exists())

	def test_structured_address_and_stockpile(self):
		res = self.client.post('/api/orders/checkout/', self.form(
			shipping_id='stockpile', address='', address_line='1 Marina', address_city='Lagos Island',
		), format='json')
		self.assertEqual(res.status_code, 201, res.data)
		self.assertEqual(res.data['order']['status'], 'Stockpile')
		self.assertEqual(res.data['order']['delivery_address'], '1 Marina, Lagos Island')
		self.product.refresh_from_db()
		self.assertEqual(self.product.stock, 5)


@override_settings(ALLOWED_HOSTS=['testserver', 'localhost', '127.0.0.1'], STORE_CONFIG_TTL=0)
class AdminOrderApiTests(TestCase):
	@classmethod
	def setUpTestData(cls):
		User = get_user_model()
		cls.admin = User.objects.create_user(username='boss', email='boss@example.com', password='12345678', is_staff=True)
		cls.shopper = User.objects.create_user(username='shopper', email='shopper@example.com', password='12345678')
		Collection.objects.create(name='Dresses')
		Product.objects.create(name='Silk Dress', price='1000.00', stock=1)
		cls.orders = []
		for i, status_value in enumerate([OrderStatus.STOCKPILE] * 3 + [OrderStatus.PROCESSING] * 4):
			order = Order.objects.create(
				order_number=f'100{i}', subtotal='1000.00', shipping_id='stockpile', shipping_title='Stockpile (reserve)',
				total='1000.00', customer_name=f'Customer {i}', customer_email=f'c{i}@example.com',
				customer_phone='0803', status=status_value,
			)
			OrderLine.objects.create(order=order, product_ref='1', name='Silk Dress', unit_price='1000.00', unit_cost='700.00', quantity=1)
			cls.orders.append(order)

	def setUp(self):
		self.client = APIClient()
		self.client.force_authenticate(user=self.admin)

	def test_non_admin_blocked(self):
		self.assertIn(APIClient().get('/api/orders/').status_code, (401, 403))
		client = APIClient()
		client.force_authenticate(user=self.shopper)
		self.assertEqual(client.get('/api/orders/').status_code, 403)
		self.assertEqual(client.patch(f'/api/orders/{self.orders[0].id}/set-status/', {'status': 'Shipped'}, format='json').status_code, 403)

	def test_list_filter_search_and_gain(self):
		res = self.client.get('/api/orders/', {'status': 'Processing'})
		self.assertEqual(res.data['count'], 4)
		res = self.client.get('/api/orders/', {'search': 'c2@example.com'})
		self.assertEqual([o['order_number'] for o in res.data['results']], ['1002'])

		res = self.client.get(f'/api/orders/{self.orders[0].id}/')
		self.assertEqual(res.data['gain'], '300.00')
		self.assertEqual(res.data['lines'][0]['unit_cost'], '700.00')

	@mock.patch.object(EmailJSClient, 'send', side_effect=EmailSendError('down'))
	def test_set_status(self, send):
		res = self.client.patch(f'/api/orders/{self.orders[0].id}/set-status/', {'status': 'Out for delivery'}, format='json')
		self.assertEqual(res.status_code, 200, res.data)
		self.assertEqual(res.data['status'], 'Out for delivery')
		self.assertFalse(res.data['email_sent'])

		res = self.client.patch(f'/api/orders/{self.orders[0].id}/set-status/', {'status': 'Lost'}, format='json')
		self.assertEqual(res.status_code, 400)

	def test_statuses(self):
		res = self.client.get('/api/orders/statuses/')
		self.assertEqual(res.data[:3], ['Awaiting Confirmation', 'Pending Delivery Fee', 'Stockpile'])
		self.assertEqual(len(res.data), 9)

	def test_dashboard(self):
		res = self.client.get('/api/orders/dashboard/')
		self.assertEqual(res.status_code, 200)
		self.assertEqual(res.data['products'], 1)
		self.assertEqual(res.data['collections'], 1)
		self.assertEqual(res.data['orders'], 7)
		self.assertEqual(res.data['orders_by_status'], {'Stockpile': 3, 'Processing': 4})
		self.assertEqual(len(res.data['recent_orders']), 6)
