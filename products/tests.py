"""Product catalog tests."""

import io
from unittest import mock

from django.contrib.auth import get_user_model
from django.core.files.uploadedfile import SimpleUploadedFile
from django.test import TestCase, override_settings
from PIL import Image
from rest_framework.test import APIClient

from integrations.cloudinary_upload import UploadError
from products.models import Collection, Product
from products.stock import InsufficientStock, decrement_stock


def make_image(name='photo.png'):
	buf = io.BytesIO()
	Image.new('RGB', (2, 2), color='red').save(buf, format='PNG')
	return SimpleUploadedFile(name, buf.getvalue(), content_type='image/png')


@override_settings(ALLOWED_HOSTS=['testserver', 'localhost', '127.0.0.1'])
class ProductCatalogTests(TestCase):
	@classmethod
	def setUpTestData(cls):
		User = get_user_model()
		cls.admin = User.objects.create_user(
			username='catalog_admin',
			email='admin@example.com',
			password='12345678',
			is_staff=True,
		)
		cls.dresses = Collection.objects.create(name='Dresses')
		cls.bags = Collection.objects.create(name='Bags')
		cls.dress = Product.objects.create(
			name='Silk Dress', price='15000.00', original_cost='9000.00', stock=4,
			description='Evening wear', colors=['Red', 'Black'], sizes=['M'],
		)
		cls.dress.collections.add(cls.dresses)
		cls.bag = Product.objects.create(name='Tote Bag', price='5000.00', stock=0)
		cls.bag.collections.add(cls.bags)

	def test_public_list_hides_cost(self):
		res = APIClient().get('/api/products/')
		self.assertEqual(res.status_code, 200)
		self.assertEqual(res.data['count'], 2)
		for row in res.data['results']:
			self.assertNotIn('original_cost', row)

	def test_admin_sees_cost(self):
		client = APIClient()
		client.force_authenticate(user=self.admin)
		res = client.get(f'/api/products/{self.dress.id}/')
		self.assertEqual(res.status_code, 200)
		self.assertEqual(res.data['original_cost'], '9000.00')

	def test_filter_by_collection_and_search(self):
		client = APIClient()
		res = client.get('/api/products/', {'collection': 'Bags'})
		self.assertEqual([r['name'] for r in res.data['results']], ['Tote Bag'])

		res = client.get('/api/products/', {'q': 'silk'})
		self.assertEqual([r['name'] for r in res.data['results']], ['Silk Dress'])

		res = client.get('/api/products/', {'in_stock': 'true'})
		self.assertEqual([r['name'] for r in res.data['results']], ['Silk Dress'])

	def test_public_cannot_write(self):
		res = APIClient().post('/api/products/', {'name': 'X', 'price': '1.00'}, format='json')
		self.assertIn(res.status_code, (401, 403))

	def test_admin_create_accepts_delimited_options(self):
		client = APIClient()
		client.force_authenticate(user=self.admin)
		res = client.post('/api/products/', {
			'name': 'Scarf',
			'price': '2500.00',
			'original_cost': '1000.00',
			'stock': 7,
			'colors': 'Blue, Green\nWhite',
			'collection_names': ['Dresses'],
		}, format='json')
		self.assertEqual(res.status_code, 201, res.data)
		scarf = Product.objects.get(name='Scarf')
		self.assertEqual(scarf.colors, ['Blue', 'Green', 'White'])
		self.assertEqual(list(scarf.collections.values_list('name', flat=True)), ['Dresses'])

	@mock.patch('products.views.upload_image', return_value='https://cdn.example.com/p/1.png')
	def test_admin_upload_appends_images(self, upload):
		self.dress.images = ['https://cdn.example.com/p/0.png']
		self.dress.save(update_fields=['images'])

		client = APIClient()
		client.force_authenticate(user=self.admin)
		res = client.patch(f'/api/products/{self.dress.id}/', {'image_files': [make_image()]}, format='multipart')
		self.assertEqual(res.status_code, 200, res.data)
		self.dress.refresh_from_db()
		self.assertEqual(self.dress.images, ['https://cdn.example.com/p/0.png', 'https://cdn.example.com/p/1.png'])
		upload.assert_called_once()

	@mock.patch('products.views.upload_image', side_effect=UploadError('down'))
	def test_upload_failure_returns_502_and_saves_nothing(self, upload):
		client = APIClient()
		client.force_authenticate(user=self.admin)
		res = client.post('/api/products/', {
			'name': 'Hat', 'price': '100.00', 'image_files': [make_image()],
		}, format='multipart')
		self.assertEqual(res.status_code, 502)
		self.assertFalse(Product.objects.filter(name='Hat').exists())

	def test_collections_public_list_admin_create(self):
		res = APIClient().get('/api/products/collections/')
		self.assertEqual([c['name'] for c in res.data], ['Bags', 'Dresses'])

		client = APIClient()
		client.force_authenticate(user=self.admin)
		res = client.post('/api/products/collections/', {'name': ' Shoes '}, format='json')
		self.assertEqual(res.status_code, 201)
		self.assertTrue(Collection.objects.filter(name='Shoes').exists())


class StockDecrementTests(TestCase):
	def setUp(self):
		self.product = Product.objects.create(name='Ring', price='10.00', stock=2)

	def test_naive_decrement_floors_at_zero(self):
		self.assertEqual(decrement_stock(self.product.id, 1), 1)
		self.assertEqual(decrement_stock(self.product.id, 5), 0)
		self.product.refresh_from_db()
		self.assertEqual(self.product.stock, 0)

	def test_missing_product_is_skipped(self):
		self.assertIsNone(decrement_stock(999999, 1))
		self.assertIsNone(decrement_stock(999999, 1, atomic=True))

	def test_atomic_decrement_takes_exact_stock(self):
		self.assertEqual(decrement_stock(self.product.id, 2, atomic=True), 0)
		with self.assertRaises(InsufficientStock):
			decrement_stock(self.product.id, 1, atomic=True)
		self.product.refresh_from_db()
		self.assertEqual(self.product.stock, 0)

	def test_atomic_shortfall_floors_stock_at_zero(self):
		with self.assertRaises(InsufficientStock):
			decrement_stock(self.product.id, 3, atomic=True)
		self.product.refresh_from_db()
		self.assertEqual(self.product.stock, 0)
