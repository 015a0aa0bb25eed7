"""Cart app tests."""

import json
from decimal import Decimal

from django.test import SimpleTestCase, TestCase, override_settings
from rest_framework.test import APIClient

from cart.cart import CART_SESSION_KEY, MAX_LINE_QUANTITY, PLACEHOLDER_IMAGE, Cart
from products.models import Product


class FakeProduct:
	def __init__(self, pk, price, name='Item', images=None, original_cost=None):
		self.pk = pk
		self.name = name
		self.price = price
		self.original_cost = original_cost
		self.primary_image = (images or [''])[0]


class CartStoreTests(SimpleTestCase):
	def setUp(self):
		self.storage = {}
		self.cart = Cart(self.storage)
		self.p1 = FakeProduct('p1', '1000')
		self.p2 = FakeProduct('p2', '250.50', images=['https://cdn.example.com/p2.png'])

	def test_same_key_merges_quantities(self):
		for qty in (1, 3, 2):
			self.cart.add(self.p1, quantity=qty, color='Red', size='M')
		self.assertEqual(len(self.cart), 1)
		self.assertEqual(self.cart[0].quantity, 6)

	def test_different_options_make_separate_lines(self):
		self.cart.add(self.p1, color='Red')
		self.cart.add(self.p1, color='Blue')
		self.cart.add(self.p1, color='Red', size='L')
		self.assertEqual(len(self.cart), 3)

	def test_decrement_floors_at_one(self):
		self.cart.add(self.p1, quantity=2)
		self.cart.decrement(0)
		self.cart.decrement(0)
		self.cart.decrement(0)
		self.assertEqual(self.cart[0].quantity, 1)
		self.assertEqual(len(self.cart), 1)

	def test_line_quantity_is_capped(self):
		self.cart.add(self.p1, quantity=10**9)
		self.assertEqual(self.cart[0].quantity, MAX_LINE_QUANTITY)
		self.cart.add(self.p1, quantity=5)
		self.cart.increment(0)
		self.assertEqual(self.cart[0].quantity, MAX_LINE_QUANTITY)

		self.storage[CART_SESSION_KEY] = json.dumps([{'product_id': 'p1', 'unit_price': '10', 'quantity': 10**12}])
		self.assertEqual(Cart(self.storage)[0].quantity, MAX_LINE_QUANTITY)

	def test_subtotal_and_count_follow_every_mutation(self):
		self.cart.add(self.p1, quantity=2)
		self.cart.add(self.p2)
		self.assertEqual(self.cart.subtotal, Decimal('2250.50'))
		self.assertEqual(self.cart.count, 3)

		self.cart.increment(1)
		self.assertEqual(self.cart.subtotal, Decimal('2501.00'))
		self.cart.remove(0)
		self.assertEqual(self.cart.subtotal, Decimal('501.00'))
		self.assertEqual(self.cart.count, 2)
		self.cart.clear()
		self.assertEqual(self.cart.subtotal, Decimal('0'))
		self.assertEqual(self.cart.count, 0)

	def test_every_mutation_is_persisted(self):
		self.cart.add(self.p2, quantity=2, size='S')
		reloaded = Cart(self.storage)
		self.assertEqual(reloaded[0].quantity, 2)
		self.assertEqual(reloaded[0].size, 'S')
		self.assertEqual(reloaded[0].unit_price, Decimal('250.50'))
		self.assertEqual(reloaded[0].image_url, 'https://cdn.example.com/p2.png')

	def test_missing_image_uses_placeholder(self):
		self.cart.add(self.p1)
		self.assertEqual(self.cart[0].image_url, PLACEHOLDER_IMAGE)

	def test_corrupt_storage_rehydrates_empty(self):
		for raw in ('{not json', json.dumps({'a': 1}), json.dumps([{'name': 'no id'}]), json.dumps([1, 2])):
			self.assertEqual(len(Cart({CART_SESSION_KEY: raw})), 0)

	def test_out_of_range_index_raises(self):
		with self.assertRaises(IndexError):
			self.cart.increment(0)
		with self.assertRaises(IndexError):
			self.cart.remove(-1)


@override_settings(ALLOWED_HOSTS=['testserver', 'localhost', '127.0.0.1'])
class CartApiTests(TestCase):
	@classmethod
	def setUpTestData(cls):
		cls.product = Product.objects.create(
			name='Silk Dress', price='1000.00', original_cost='600.00', stock=5,
			colors=['Red', 'Black'], sizes=['M', 'L'],
		)

	def setUp(self):
		self.client = APIClient()

	def test_add_merge_and_totals(self):
		res = self.client.post('/api/cart/items/', {'product': self.product.id, 'quantity': 2, 'color': 'Red'}, format='json')
		self.assertEqual(res.status_code, 201, res.data)
		res = self.client.post('/api/cart/items/', {'product': self.product.id, 'color': 'Red'}, format='json')
		self.assertEqual(len(res.data['items']), 1)
		self.assertEqual(res.data['items'][0]['quantity'], 3)
		self.assertEqual(res.data['count'], 3)
		self.assertEqual(res.data['subtotal'], '3000.00')
		self.assertNotIn('unit_cost', res.data['items'][0])

		res = self.client.get('/api/cart/')
		self.assertEqual(res.data['count'], 3)

	def test_unknown_option_rejected(self):
		res = self.client.post('/api/cart/items/', {'product': self.product.id, 'color': 'Green'}, format='json')
		self.assertEqual(res.status_code, 400)

	def test_oversized_quantity_rejected(self):
		for qty in (MAX_LINE_QUANTITY + 1, 10**12):
			res = self.client.post('/api/cart/items/', {'product': self.product.id, 'quantity': qty}, format='json')
			self.assertEqual(res.status_code, 400)
		self.assertEqual(self.client.get('/api/cart/').data['count'], 0)

	def test_line_operations(self):
		self.client.post('/api/cart/items/', {'product': self.product.id}, format='json')
		res = self.client.post('/api/cart/items/0/increment/')
		self.assertEqual(res.data['items'][0]['quantity'], 2)
		res = self.client.post('/api/cart/items/0/decrement/')
		res = self.client.post('/api/cart/items/0/decrement/')
		self.assertEqual(res.data['items'][0]['quantity'], 1)
		res = self.client.delete('/api/cart/items/0/')
		self.assertEqual(res.data['items'], [])

	def test_missing_line_is_404(self):
		self.assertEqual(self.client.post('/api/cart/items/3/increment/').status_code, 404)

	def test_clear(self):
		self.client.post('/api/cart/items/', {'product': self.product.id}, format='json')
		res = self.client.delete('/api/cart/')
		self.assertEqual(res.data['count'], 0)
