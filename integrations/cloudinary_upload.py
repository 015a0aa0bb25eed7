"""Unsigned image uploads to Cloudinary.

Used for product images, the store logo and checkout payment proofs.
Uploads go through an unsigned upload preset, so no API secret is needed.
"""

import logging

import cloudinary.uploader
from django.conf import settings

logger = logging.getLogger(__name__)


class UploadError(Exception):
    """Raised when the image host does not hand back a usable URL."""


def upload_image(file, *, folder: str | None = None) -> str:
    """Upload ``file`` and return its ``secure_url``.

    ``file`` may be a Django ``UploadedFile`` or any file-like object.
    A response without ``secure_url`` is treated as a failed upload.
    """
    cloud_name = getattr(settings, 'CLOUDINARY_CLOUD_NAME', '')
    preset = getattr(settings, 'CLOUDINARY_UPLOAD_PRESET', '')
    if not cloud_name or not preset:
        raise UploadError('Image uploads are not configured.')

    options = {'cloud_name': cloud_name}
    if folder:
        options['folder'] = folder

    try:
        result = cloudinary.uploader.unsigned_upload(file, preset, **options)
    except Exception as exc:
        logger.warning('Cloudinary upload failed: %s', exc)
        raise UploadError('Image upload failed.') from exc

    url = (result or {}).get('secure_url')
    if not url:
        logger.warning('Cloudinary upload returned no secure_url: %r', result)
        raise UploadError('Image upload failed.')
    return url
