"""Store app tests."""

import io
from decimal import Decimal
from unittest import mock

from django.contrib.auth import get_user_model
from django.core.files.uploadedfile import SimpleUploadedFile
from django.test import SimpleTestCase, TestCase, override_settings
from PIL import Image
from rest_framework.test import APIClient

from integrations.cloudinary_upload import UploadError
from integrations.emailjs import EmailJSClient, EmailSendError
from store.config import ShippingZone, StoreConfig, load_store_config
from store.feeds import SnapshotFeed
from store.models import ShippingBlock, StoreSettings
from store.provider import SettingsProvider, get_settings_provider
from store.shipping import (
	ADDRESS_NOT_LISTED,
	PICKUP,
	STOCKPILE,
	find_shipping_option,
	requires_payment_proof,
	resolve_shipping_options,
)


def make_image(name='logo.png'):
	buf = io.BytesIO()
	Image.new('RGB', (2, 2), color='green').save(buf, format='PNG')
	return SimpleUploadedFile(name, buf.getvalue(), content_type='image/png')


class ShippingResolverTests(SimpleTestCase):
	zones = (
		ShippingZone('sb_island', 'Lagos Island', Decimal('2500')),
		ShippingZone('sb_mainland', 'Lagos Mainland', Decimal('1500'), 'Next day'),
	)

	def test_full_order(self):
		options = resolve_shipping_options(StoreConfig(shipping_zones=self.zones))
		self.assertEqual([o.id for o in options], [PICKUP, 'sb_island', 'sb_mainland', ADDRESS_NOT_LISTED, STOCKPILE])
		self.assertEqual(options[2].fee, Decimal('1500'))
		self.assertEqual(options[2].description, 'Next day')

	def test_flags_off_keeps_stockpile_last(self):
		config = StoreConfig(allow_pickup=False, allow_address_not_listed=False, shipping_zones=self.zones)
		self.assertEqual([o.id for o in resolve_shipping_options(config)], ['sb_island', 'sb_mainland', STOCKPILE])

	def test_nothing_configured(self):
		config = StoreConfig(allow_pickup=False, allow_address_not_listed=False)
		options = resolve_shipping_options(config)
		self.assertEqual([o.id for o in options], [STOCKPILE])
		self.assertEqual(options[0].fee, Decimal('0'))

	def test_same_settings_same_list(self):
		config = StoreConfig(shipping_zones=self.zones)
		self.assertEqual(resolve_shipping_options(config), resolve_shipping_options(config))

	def test_find_and_proof_rules(self):
		options = resolve_shipping_options(StoreConfig(shipping_zones=self.zones))
		self.assertEqual(find_shipping_option(options, 'sb_island').title, 'Lagos Island')
		self.assertIsNone(find_shipping_option(options, ''))
		self.assertIsNone(find_shipping_option(options, 'nowhere'))
		self.assertTrue(requires_payment_proof(PICKUP))
		self.assertTrue(requires_payment_proof('sb_island'))
		self.assertFalse(requires_payment_proof(STOCKPILE))
		self.assertFalse(requires_payment_proof(ADDRESS_NOT_LISTED))


class StoreModelTests(TestCase):
	def test_settings_singleton(self):
		first = StoreSettings.load()
		StoreSettings(store_name='Other').save()
		self.assertEqual(StoreSettings.objects.count(), 1)
		self.assertEqual(StoreSettings.load().pk, first.pk)
		self.assertEqual(StoreSettings.load().store_name, 'Other')

	def test_block_code_generated(self):
		block = ShippingBlock.objects.create(title='Abuja', fee='4000.00')
		self.assertTrue(block.code.startswith('sb_'))

	def test_config_snapshot_keeps_block_order(self):
		ShippingBlock.objects.create(code='b', title='Second', fee='2', position=2)
		ShippingBlock.objects.create(code='a', title='First', fee='1', position=1)
		config = load_store_config()
		self.assertEqual([z.code for z in config.shipping_zones], ['a', 'b'])
		self.assertEqual(config.store_name, 'Essyessentials')


class SnapshotFeedTests(TestCase):
	def test_callback_gets_initial_and_changes(self):
		feed = SnapshotFeed(ShippingBlock, ordering=('position', 'id'), serialize=lambda b: b.code)
		seen = []
		sub = feed.subscribe(seen.append)
		ShippingBlock.objects.create(code='x', title='X', fee='1')
		ShippingBlock.objects.filter(code='x').first().delete()

		self.assertEqual(seen, [[], ['x'], []])
		sub.unsubscribe()

	def test_unsubscribe_is_idempotent_and_stops_delivery(self):
		feed = SnapshotFeed(ShippingBlock)
		seen = []
		sub = feed.subscribe(seen.append, initial=False)
		sub.unsubscribe()
		sub.unsubscribe()
		ShippingBlock.objects.create(code='y', title='Y', fee='1')

		self.assertEqual(seen, [])
		self.assertFalse(sub.active)
		self.assertEqual(feed.subscriber_count, 0)

	def test_iterating_a_subscription(self):
		feed = SnapshotFeed(ShippingBlock, serialize=lambda b: b.title)
		with feed.subscribe() as sub:
			ShippingBlock.objects.create(code='z', title='Zed', fee='1')
			stream = iter(sub)
			self.assertEqual(next(stream), [])
			self.assertEqual(next(stream), ['Zed'])
		self.assertEqual(list(stream), [])

	def test_failing_callback_does_not_break_others(self):
		feed = SnapshotFeed(ShippingBlock)
		seen = []
		bad = feed.subscribe(mock.Mock(side_effect=RuntimeError('boom')), initial=False)
		good = feed.subscribe(seen.append, initial=False)
		ShippingBlock.objects.create(code='w', title='W', fee='1')
		self.assertEqual(len(seen), 1)
		bad.unsubscribe()
		good.unsubscribe()


class SettingsProviderTests(TestCase):
	def setUp(self):
		self.now = 0.0
		self.provider = SettingsProvider(clock=lambda: self.now)

	def tearDown(self):
		self.provider.stop()

	@override_settings(STORE_CONFIG_TTL=30)
	def test_caches_until_ttl(self):
		loader = mock.Mock(side_effect=[StoreConfig(store_name='A'), StoreConfig(store_name='B')])
		provider = SettingsProvider(loader=loader, clock=lambda: self.now)
		with mock.patch.object(SettingsProvider, '_watch'):
			self.assertEqual(provider.current().store_name, 'A')
			self.now = 10
			self.assertEqual(provider.current().store_name, 'A')
			self.now = 31
			self.assertEqual(provider.current().store_name, 'B')
		self.assertEqual(loader.call_count, 2)

	@override_settings(STORE_CONFIG_TTL=3600)
	def test_changes_are_pushed_to_listeners(self):
		received = []
		self.provider.subscribe(received.append)
		self.assertEqual(self.provider.current().whatsapp, '')

		row = StoreSettings.load()
		row.whatsapp = '2348030000000'
		row.save()
		ShippingBlock.objects.create(code='sb_new', title='New zone', fee='700.00')

		config = self.provider.current()
		self.assertEqual(config.whatsapp, '2348030000000')
		self.assertEqual([z.code for z in config.shipping_zones], ['sb_new'])
		self.assertEqual(received[-1], config)

	def test_unsubscribed_listener_not_called(self):
		received = []
		unsubscribe = self.provider.subscribe(received.append)
		unsubscribe()
		unsubscribe()
		self.provider.refresh()
		self.assertEqual(received, [])

	def test_app_owns_a_provider(self):
		self.assertIsInstance(get_settings_provider(), SettingsProvider)


@override_settings(ALLOWED_HOSTS=['testserver', 'localhost', '127.0.0.1'], STORE_CONFIG_TTL=0)
class StoreApiTests(TestCase):
	@classmethod
	def setUpTestData(cls):
		User = get_user_model()
		cls.admin = User.objects.create_user(username='boss', email='boss@example.com', password='12345678', is_staff=True)

	def setUp(self):
		self.admin_client = APIClient()
		self.admin_client.force_authenticate(user=self.admin)

	def test_public_read_admin_write(self):
		res = APIClient().get('/api/store/settings/')
		self.assertEqual(res.status_code, 200)
		self.assertEqual(res.data['store_name'], 'Essyessentials')

		res = APIClient().patch('/api/store/settings/', {'tagline': 'x'}, format='json')
		self.assertIn(res.status_code, (401, 403))

		res = self.admin_client.patch('/api/store/settings/', {
			'tagline': 'Beauty & more', 'allow_pickup': False, 'theme': {'button': '#000000'},
		}, format='json')
		self.assertEqual(res.status_code, 200, res.data)
		self.assertEqual(StoreSettings.load().tagline, 'Beauty & more')

		res = APIClient().get('/api/store/shipping-options/')
		self.assertEqual([o['id'] for o in res.data], [ADDRESS_NOT_LISTED, STOCKPILE])

	def test_shipping_blocks_crud_and_order(self):
		res = self.admin_client.post('/api/store/shipping-blocks/', {'title': 'Island', 'fee': '2500.00'}, format='json')
		self.assertEqual(res.status_code, 201, res.data)
		self.admin_client.post('/api/store/shipping-blocks/', {'code': 'mainland', 'title': 'Mainland', 'fee': '1500'}, format='json')

		res = APIClient().get('/api/store/shipping-options/')
		ids = [o['id'] for o in res.data]
		self.assertEqual(ids[0], PICKUP)
		self.assertEqual(ids[2], 'mainland')
		self.assertEqual(ids[-2:], [ADDRESS_NOT_LISTED, STOCKPILE])

	def test_shipping_block_validation(self):
		for payload in ({'code': 'stockpile', 'title': 'X', 'fee': '1'}, {'title': 'X', 'fee': '-5'}):
			res = self.admin_client.post('/api/store/shipping-blocks/', payload, format='json')
			self.assertEqual(res.status_code, 400)
		self.assertEqual(APIClient().get('/api/store/shipping-blocks/').status_code // 100, 4)

	@mock.patch('store.views.upload_image', side_effect=UploadError('down'))
	def test_logo_upload_failure(self, upload):
		res = self.admin_client.post('/api/store/settings/logo/', {'logo': make_image('logo.png')}, format='multipart')
		self.assertEqual(res.status_code, 502)
		self.assertEqual(StoreSettings.load().logo_url, '')

	@mock.patch('store.views.upload_image', return_value='https://cdn.example.com/logo.png')
	def test_logo_upload(self, upload):
		res = self.admin_client.post('/api/store/settings/logo/', {'logo': make_image('logo.png')}, format='multipart')
		self.assertEqual(res.status_code, 200, res.data)
		self.assertEqual(res.data['logo_url'], 'https://cdn.example.com/logo.png')

	@override_settings(EMAILJS_TEMPLATE_CONTACT='tpl_contact', STORE_ADMIN_EMAIL='shop@example.com')
	def test_contact(self):
		payload = {'name': 'Ada', 'email': 'ada@example.com', 'message': 'Do you ship to Abuja?'}
		with mock.patch.object(EmailJSClient, 'send') as send:
			res = APIClient().post('/api/store/contact/', payload, format='json')
		self.assertEqual(res.status_code, 202)
		template, params = send.call_args.args
		self.assertEqual(template, 'tpl_contact')
		self.assertEqual(params['to_email'], 'shop@example.com')

		with mock.patch.object(EmailJSClient, 'send', side_effect=EmailSendError('down')):
			res = APIClient().post('/api/store/contact/', payload, format='json')
		self.assertEqual(res.status_code, 502)
