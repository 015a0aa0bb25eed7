"""Accounts app tests."""

from django.contrib.auth import get_user_model
from django.test import TestCase, override_settings
from rest_framework.test import APIClient


@override_settings(ALLOWED_HOSTS=['testserver', 'localhost', '127.0.0.1'])
class AdminLoginTests(TestCase):
	@classmethod
	def setUpTestData(cls):
		User = get_user_model()
		cls.admin = User.objects.create_user(
			username='store_admin',
			email='Admin@Example.com',
			password='s3cret-pass',
			is_staff=True,
		)
		cls.shopper = User.objects.create_user(
			username='shopper',
			email='shopper@example.com',
			password='s3cret-pass',
		)

	def test_login_form_renders(self):
		res = self.client.get('/api/accounts/login-view/')
		self.assertEqual(res.status_code, 200)
		self.assertContains(res, 'name="email"')

	def test_bad_credentials_show_inline_error(self):
		res = self.client.post('/api/accounts/login-view/', {'email': 'admin@example.com', 'password': 'wrong'})
		self.assertEqual(res.status_code, 401)
		self.assertContains(res, 'Invalid email or password.', status_code=401)
		self.assertNotIn('_auth_user_id', self.client.session)

	def test_non_staff_cannot_use_form(self):
		res = self.client.post('/api/accounts/login-view/', {'email': 'shopper@example.com', 'password': 's3cret-pass'})
		self.assertEqual(res.status_code, 401)

	def test_form_login_is_case_insensitive_and_redirects(self):
		res = self.client.post('/api/accounts/login-view/?next=/api/orders/', {
			'email': 'admin@example.com', 'password': 's3cret-pass',
		})
		self.assertRedirects(res, '/api/orders/', fetch_redirect_response=False)
		self.assertEqual(int(self.client.session['_auth_user_id']), self.admin.pk)

	def test_jwt_login_creates_session(self):
		client = APIClient()
		res = client.post('/api/accounts/login/', {'email': 'admin@example.com', 'password': 's3cret-pass'}, format='json')
		self.assertEqual(res.status_code, 200, res.data)
		self.assertIn('access', res.data)
		self.assertIn('refresh', res.data)

		me = client.get('/api/accounts/me/')
		self.assertEqual(me.status_code, 200)
		self.assertEqual(me.data['username'], 'store_admin')

		bearer = APIClient()
		bearer.credentials(HTTP_AUTHORIZATION=f"Bearer {res.data['access']}")
		self.assertEqual(bearer.get('/api/orders/').status_code, 200)

	def test_jwt_rejects_bad_password_and_non_staff(self):
		client = APIClient()
		res = client.post('/api/accounts/login/', {'email': 'admin@example.com', 'password': 'nope'}, format='json')
		self.assertEqual(res.status_code, 401)
		res = client.post('/api/accounts/login/', {'email': 'shopper@example.com', 'password': 's3cret-pass'}, format='json')
		self.assertEqual(res.status_code, 401)

	def test_logout_and_me_gating(self):
		client = APIClient()
		client.post('/api/accounts/login/', {'email': 'admin@example.com', 'password': 's3cret-pass'}, format='json')
		self.assertEqual(client.post('/api/accounts/logout/').status_code, 204)
		self.assertIn(client.get('/api/accounts/me/').status_code, (401, 403))
