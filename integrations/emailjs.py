"""Minimal client for the EmailJS REST API."""

import logging

import requests
from django.conf import settings

logger = logging.getLogger(__name__)


class EmailSendError(Exception):
    """Raised when EmailJS rejects a message or cannot be reached."""


class EmailJSClient:
    """Send templated emails through ``POST /api/v1.0/email/send``.

    Every call is attempted once; retries are left to the caller.
    """

    def __init__(self, *, service_id, public_key, private_key='', api_url=None, timeout=10.0, session=None):
        self.service_id = service_id
        self.public_key = public_key
        self.private_key = private_key
        self.api_url = api_url or 'https://api.emailjs.com/api/v1.0/email/send'
        self.timeout = timeout
        self.session = session or requests.Session()

    @classmethod
    def from_settings(cls, **overrides):
        options = {
            'service_id': settings.EMAILJS_SERVICE_ID,
            'public_key': settings.EMAILJS_PUBLIC_KEY,
            'private_key': settings.EMAILJS_PRIVATE_KEY,
            'api_url': settings.EMAILJS_API_URL,
            'timeout': settings.EMAILJS_TIMEOUT,
        }
        options.update(overrides)
        return cls(**options)

    def send(self, template_id: str, params: dict) -> None:
        if not self.service_id or not self.public_key or not template_id:
            raise EmailSendError('EmailJS is not configured.')

        payload = {
            'service_id': self.service_id,
            'template_id': template_id,
            'user_id': self.public_key,
            # EmailJS templates only deal in strings.
            'template_params': {k: '' if v is None else str(v) for k, v in params.items()},
        }
        if self.private_key:
            payload['accessToken'] = self.private_key

        try:
            response = self.session.post(self.api_url, json=payload, timeout=self.timeout)
        except requests.RequestException as exc:
            raise EmailSendError(f'EmailJS request failed: {exc}') from exc

        if response.status_code >= 300:
            raise EmailSendError(f'EmailJS responded {response.status_code}: {response.text[:200]}')

        logger.debug('EmailJS accepted template %s', template_id)
