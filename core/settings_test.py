"""
Settings for the pytest suite.

Seeds the variables core.settings requires, then swaps in SQLite, the
in-memory mail backend and a throwaway media root.
"""
import os
import tempfile

os.environ.setdefault('SECRET_KEY', 'test-secret-key')
os.environ.setdefault('DB_NAME', 'test-db')
os.environ.setdefault('SMTP_HOST', 'smtp.example.com')
os.environ.setdefault('SMTP_USER', 'site@example.com')
os.environ.setdefault('SMTP_PASS', 'test-password')
os.environ.setdefault('ADMIN_EMAIL', 'owner@example.com')

from .settings import *  # noqa: E402,F401,F403

DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': ':memory:',
    }
}

EMAIL_BACKEND = 'django.core.mail.backends.locmem.EmailBackend'

PASSWORD_HASHERS = [
    'django.contrib.auth.hashers.MD5PasswordHasher',
]

MEDIA_ROOT = tempfile.mkdtemp(prefix='mobiledoctor-media-')

LOGGING['root']['level'] = 'WARNING'  # noqa: F405
