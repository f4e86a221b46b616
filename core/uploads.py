"""
Image fields for posts and gallery items.

An image is either a file uploaded through the admin panel or an external
URL, never both. The form input is resolved into an ``ImageSource`` once,
at the request boundary; models store the resulting path or URL.
"""
import logging
import os
import time
from urllib.parse import unquote

from django.conf import settings
from django.core.files.storage import FileSystemStorage
from django.core.validators import URLValidator
from django.core.exceptions import ValidationError as DjangoValidationError

from .exceptions import ValidationError

logger = logging.getLogger(__name__)


class ImageSource:
    """An image reference, either ``Uploaded`` or ``External``."""

    kind = None

    @property
    def value(self):
        raise NotImplementedError

    def __eq__(self, other):
        return type(self) is type(other) and self.value == other.value

    def __hash__(self):
        return hash((self.kind, self.value))

    def __repr__(self):
        return f"{type(self).__name__}({self.value!r})"


class Uploaded(ImageSource):
    """A file stored under MEDIA_ROOT, referenced by its public path."""

    kind = 'uploaded'

    def __init__(self, path):
        self.path = path

    @property
    def value(self):
        return self.path


class External(ImageSource):
    """An image hosted elsewhere."""

    kind = 'external'

    def __init__(self, url):
        self.url = url

    @property
    def value(self):
        return self.url


def upload_storage():
    media_url = settings.MEDIA_URL.rstrip('/')
    return FileSystemStorage(
        location=os.path.join(settings.MEDIA_ROOT, settings.UPLOAD_SUBDIR),
        base_url=f"{media_url}/{settings.UPLOAD_SUBDIR}/",
    )


def validate_image_upload(upload):
    """Reject files over MAX_UPLOAD_SIZE and anything that is not an image."""
    allowed = settings.ALLOWED_IMAGE_TYPES
    if upload.size > settings.MAX_UPLOAD_SIZE:
        limit_mb = settings.MAX_UPLOAD_SIZE // (1024 * 1024)
        raise ValidationError(
            f"File size too large. Please upload an image smaller than {limit_mb}MB."
        )

    extension = os.path.splitext(upload.name)[1].lower().lstrip('.')
    content_type = (getattr(upload, 'content_type', '') or '').lower()
    subtype = content_type.split('/')[-1]
    if extension not in allowed or not content_type.startswith('image/') or subtype not in allowed:
        raise ValidationError(
            'Invalid file type. Please upload only JPEG, JPG, PNG, or GIF images.'
        )


def store_upload(upload):
    """
    Save an uploaded image and return its public path.

    The stored name is ``<epoch-ms>-<original name>``.
    """
    validate_image_upload(upload)
    storage = upload_storage()
    original = os.path.basename(upload.name).replace(' ', '_')
    name = storage.save(f"{int(time.time() * 1000)}-{original}", upload)
    path = storage.url(name)
    logger.info(f"Stored upload {upload.name} as {path}")
    return Uploaded(path)


def delete_upload(path):
    """Remove a previously stored upload; external URLs are left alone."""
    storage = upload_storage()
    prefix = storage.base_url
    if not path or not path.startswith(prefix):
        return
    # storage.url() percent-encodes the stored name
    name = unquote(path[len(prefix):])
    if storage.exists(name):
        storage.delete(name)


def resolve_image_source(upload=None, image_url=None, required=False):
    """
    Turn the ``image`` file and ``image_url`` form fields into an ImageSource.

    Returns None when neither is given and ``required`` is false.
    """
    image_url = (image_url or '').strip()
    has_upload = upload is not None and upload.size > 0

    if has_upload and image_url:
        raise ValidationError('Please either upload an image file or provide an image URL, not both.')

    if has_upload:
        return store_upload(upload)

    if image_url.startswith('/'):
        return External(image_url)

    if image_url:
        try:
            URLValidator(schemes=['http', 'https'])(image_url)
        except DjangoValidationError:
            raise ValidationError('Please provide a valid image URL.')
        return External(image_url)

    if required:
        raise ValidationError('Please either upload an image file or provide an image URL.')
    return None
