"""Tests for the external service clients."""

from unittest import mock

import requests
from django.test import SimpleTestCase, override_settings

from integrations.cloudinary_upload import UploadError, upload_image
from integrations.emailjs import EmailJSClient, EmailSendError
from integrations.whatsapp import build_whatsapp_link, normalize_number


@override_settings(CLOUDINARY_CLOUD_NAME='demo', CLOUDINARY_UPLOAD_PRESET='unsigned_store')
class UploadImageTests(SimpleTestCase):
	@mock.patch('cloudinary.uploader.unsigned_upload')
	def test_returns_secure_url(self, unsigned_upload):
		unsigned_upload.return_value = {'secure_url': 'https://res.cloudinary.com/demo/image/upload/a.png'}
		self.assertEqual(upload_image(b'img', folder='logos'), 'https://res.cloudinary.com/demo/image/upload/a.png')
		unsigned_upload.assert_called_once_with(b'img', 'unsigned_store', cloud_name='demo', folder='logos')

	@mock.patch('cloudinary.uploader.unsigned_upload', return_value={'url': 'http://x'})
	def test_missing_secure_url_is_failure(self, unsigned_upload):
		with self.assertRaises(UploadError):
			upload_image(b'img')

	@mock.patch('cloudinary.uploader.unsigned_upload', side_effect=Exception('timeout'))
	def test_sdk_error_is_failure(self, unsigned_upload):
		with self.assertRaises(UploadError):
			upload_image(b'img')

	@override_settings(CLOUDINARY_UPLOAD_PRESET='')
	def test_unconfigured(self):
		with self.assertRaises(UploadError):
			upload_image(b'img')


class EmailJSClientTests(SimpleTestCase):
	def client_with(self, response=None, error=None, **kwargs):
		session = mock.Mock()
		if error:
			session.post.side_effect = error
		else:
			session.post.return_value = response
		options = {'service_id': 'svc', 'public_key': 'pub', 'session': session}
		options.update(kwargs)
		return EmailJSClient(**options), session

	def test_payload(self):
		client, session = self.client_with(mock.Mock(status_code=200, text='OK'), private_key='priv')
		client.send('tpl_customer', {'order_id': 17, 'delivery_address': None})

		url = session.post.call_args.args[0]
		payload = session.post.call_args.kwargs['json']
		self.assertEqual(url, 'https://api.emailjs.com/api/v1.0/email/send')
		self.assertEqual(payload['service_id'], 'svc')
		self.assertEqual(payload['template_id'], 'tpl_customer')
		self.assertEqual(payload['user_id'], 'pub')
		self.assertEqual(payload['accessToken'], 'priv')
		self.assertEqual(payload['template_params'], {'order_id': '17', 'delivery_address': ''})
		self.assertEqual(session.post.call_args.kwargs['timeout'], 10.0)

	def test_rejected(self):
		client, _ = self.client_with(mock.Mock(status_code=400, text='The template ID is invalid'))
		with self.assertRaises(EmailSendError):
			client.send('tpl', {})

	def test_transport_error(self):
		client, _ = self.client_with(error=requests.ConnectionError('offline'))
		with self.assertRaises(EmailSendError):
			client.send('tpl', {})

	def test_unconfigured_does_not_call_out(self):
		client, session = self.client_with(service_id='')
		with self.assertRaises(EmailSendError):
			client.send('tpl', {})
		session.post.assert_not_called()


class WhatsAppLinkTests(SimpleTestCase):
	def test_link(self):
		self.assertEqual(normalize_number('+234 (803) 000-0000'), '2348030000000')
		self.assertEqual(
			build_whatsapp_link('+234 803 000 0000', 'New Order (#1)\nTotal: ₦2,000'),
			'https://wa.me/2348030000000?text=New%20Order%20%28%231%29%0ATotal%3A%20%E2%82%A62%2C000',
		)
		self.assertEqual(build_whatsapp_link('2348030000000'), 'https://wa.me/2348030000000')
		self.assertIsNone(build_whatsapp_link(''))
