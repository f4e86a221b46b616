"""
Django settings for the Mobile Doctor website.

For more information on this file, see
https://docs.djangoproject.com/en/5.2/topics/settings/

For the full list of settings and their values, see
https://docs.djangoproject.com/en/5.2/ref/settings/
"""

import os
from pathlib import Path
from django.core.exceptions import ImproperlyConfigured
from dotenv import load_dotenv

# Build paths inside the project like this: BASE_DIR / 'subdir'.
BASE_DIR = Path(__file__).resolve().parent.parent

# Load environment variables from .env file
env_file = os.path.join(BASE_DIR, '.env.development')
if os.path.exists(env_file):
    load_dotenv(env_file)
else:
    load_dotenv()  # Try default .env


def require_env(name):
    """Return an environment variable or abort startup."""
    value = os.getenv(name)
    if not value:
        raise ImproperlyConfigured(
            f"{name} environment variable is not set. "
            f"Please add {name} to your .env file."
        )
    return value


# SECURITY WARNING: keep the secret key used in production secret!
SECRET_KEY = require_env('SECRET_KEY')

# SECURITY WARNING: don't run with debug turned on in production!
DEBUG = os.getenv('DEBUG', 'False') == 'True'

ALLOWED_HOSTS = os.getenv('ALLOWED_HOSTS', 'localhost,127.0.0.1').split(',')


# Application definition

INSTALLED_APPS = [
    'django.contrib.auth',
    'django.contrib.contenttypes',
    'django.contrib.sessions',
    'django.contrib.messages',
    'django.contrib.staticfiles',

    # Third-party apps
    'rest_framework',
    'corsheaders',

    # Local apps
    'accounts',
    'cms',
    'contact',
]

MIDDLEWARE = [
    'django.middleware.security.SecurityMiddleware',
    'corsheaders.middleware.CorsMiddleware',  # CORS before CommonMiddleware
    'django.contrib.sessions.middleware.SessionMiddleware',
    'django.middleware.common.CommonMiddleware',
    'django.middleware.csrf.CsrfViewMiddleware',
    'django.contrib.auth.middleware.AuthenticationMiddleware',
    'django.contrib.messages.middleware.MessageMiddleware',
    'django.middleware.clickjacking.XFrameOptionsMiddleware',
]

ROOT_URLCONF = 'core.urls'

TEMPLATES = [
    {
        'BACKEND': 'django.template.backends.django.DjangoTemplates',
        'DIRS': [BASE_DIR / 'templates'],
        'APP_DIRS': True,
        'OPTIONS': {
            'context_processors': [
                'django.template.context_processors.request',
                'django.contrib.messages.context_processors.messages',
                'core.context_processors.site',
            ],
        },
    },
]

WSGI_APPLICATION = 'core.wsgi.application'

APPEND_SLASH = False


# Database
# https://docs.djangoproject.com/en/5.2/ref/settings/#databases

DATABASES = {
    'default': {
        'ENGINE': os.getenv('DB_ENGINE', 'django.db.backends.postgresql'),
        'NAME': require_env('DB_NAME'),
        'USER': os.getenv('DB_USER', ''),
        'PASSWORD': os.getenv('DB_PASSWORD', ''),
        'HOST': os.getenv('DB_HOST', 'localhost'),
        'PORT': os.getenv('DB_PORT', '5432'),
    }
}

# Default primary key field type
DEFAULT_AUTO_FIELD = 'django.db.models.BigAutoField'


# =============================================================================
# AUTHENTICATION & SESSION SETTINGS
# =============================================================================

AUTH_USER_MODEL = 'accounts.User'

AUTHENTICATION_BACKENDS = (
    'django.contrib.auth.backends.ModelBackend',
)

# Admin panel mount point, e.g. /sunny/login
ADMIN_PATH_PREFIX = os.getenv('ADMIN_PATH_PREFIX', 'sunny').strip('/')

ADMIN_SESSION_AGE = 24 * 60 * 60  # 24 hours

SESSION_ENGINE = 'django.contrib.sessions.backends.db'
SESSION_COOKIE_AGE = ADMIN_SESSION_AGE
SESSION_SAVE_EVERY_REQUEST = True  # sliding expiry
SESSION_COOKIE_HTTPONLY = True
SESSION_COOKIE_SECURE = os.getenv('SESSION_COOKIE_SECURE', 'False') == 'True'


# Internationalization
# https://docs.djangoproject.com/en/5.2/topics/i18n/

LANGUAGE_CODE = 'en-us'

TIME_ZONE = os.getenv('TIME_ZONE', 'Asia/Kolkata')

USE_I18N = True

USE_TZ = True


# Static files (CSS, JavaScript, Images)
# https://docs.djangoproject.com/en/5.2/howto/static-files/

STATIC_URL = 'static/'
STATIC_ROOT = BASE_DIR / os.getenv('STATIC_ROOT', 'staticfiles')
STATICFILES_DIRS = [BASE_DIR / 'static']

MEDIA_URL = '/media/'
MEDIA_ROOT = Path(os.getenv('MEDIA_ROOT', BASE_DIR / 'media'))


# =============================================================================
# REST FRAMEWORK SETTINGS
# =============================================================================

# Admin JSON endpoints set accounts.authentication.AdminSessionAuthentication
# and a gate permission per view; public endpoints need neither.
REST_FRAMEWORK = {
    'DEFAULT_AUTHENTICATION_CLASSES': (),
    'DEFAULT_PERMISSION_CLASSES': (
        'rest_framework.permissions.AllowAny',
    ),
    'DEFAULT_RENDERER_CLASSES': (
        'rest_framework.renderers.JSONRenderer',
    ),
    'DEFAULT_PARSER_CLASSES': (
        'rest_framework.parsers.JSONParser',
        'rest_framework.parsers.FormParser',
        'rest_framework.parsers.MultiPartParser',
    ),
    'UNAUTHENTICATED_USER': None,
    'EXCEPTION_HANDLER': 'core.api.exception_handler',
}


# =============================================================================
# CORS SETTINGS
# =============================================================================

CORS_ALLOW_ALL_ORIGINS = os.getenv('CORS_ALLOW_ALL_ORIGINS', 'True') == 'True'
CORS_URLS_REGEX = r'^/(api/.*|contact(/.*)?)$'


# =============================================================================
# EMAIL SETTINGS (SMTP relay)
# =============================================================================

EMAIL_BACKEND = os.getenv('EMAIL_BACKEND', 'django.core.mail.backends.smtp.EmailBackend')
EMAIL_HOST = require_env('SMTP_HOST')
EMAIL_PORT = int(os.getenv('SMTP_PORT', 587))
EMAIL_HOST_USER = require_env('SMTP_USER')
EMAIL_HOST_PASSWORD = require_env('SMTP_PASS')

# SMTP_SECURE=true means implicit TLS (port 465), otherwise STARTTLS
EMAIL_USE_SSL = os.getenv('SMTP_SECURE', 'false').lower() == 'true'
EMAIL_USE_TLS = not EMAIL_USE_SSL

EMAIL_TIMEOUT = int(os.getenv('EMAIL_TIMEOUT', 60))
DEFAULT_FROM_EMAIL = os.getenv('DEFAULT_FROM_EMAIL', EMAIL_HOST_USER)


# =============================================================================
# BUSINESS & CONTACT FORM SETTINGS
# =============================================================================

BUSINESS_NAME = os.getenv('BUSINESS_NAME', 'Mobile Doctor')
BUSINESS_TAGLINE = os.getenv('BUSINESS_TAGLINE', 'Professional Mobile Repair Services')
BUSINESS_PHONE = os.getenv('BUSINESS_PHONE', '+91 99929 19688')
BUSINESS_ADDRESS = os.getenv(
    'BUSINESS_ADDRESS',
    '81, Ganesh Market, Bhamashah Nagar, Hisar, Haryana 125001'
)
BUSINESS_OWNER = os.getenv('BUSINESS_OWNER', 'Sunny Gujjar')
BUSINESS_HOURS = os.getenv('BUSINESS_HOURS', 'Monday - Saturday: 9:00 AM - 7:00 PM')

# Inquiry notifications go here
CONTACT_EMAIL_TO = os.getenv('ADMIN_EMAIL', EMAIL_HOST_USER)

REPLY_SIGNATURE = os.getenv(
    'REPLY_SIGNATURE',
    f"Best regards,\n{BUSINESS_OWNER}\n{BUSINESS_NAME}\n{BUSINESS_PHONE}\n{BUSINESS_ADDRESS}"
)

# Replies mark every message from the same address within this window
REPLY_MATCH_WINDOW_HOURS = int(os.getenv('REPLY_MATCH_WINDOW_HOURS', 24))


# =============================================================================
# FILE UPLOAD SETTINGS
# =============================================================================

MAX_UPLOAD_SIZE = int(os.getenv('MAX_UPLOAD_SIZE', 5242880))  # 5MB default
FILE_UPLOAD_MAX_MEMORY_SIZE = MAX_UPLOAD_SIZE
UPLOAD_SUBDIR = 'uploads'
ALLOWED_IMAGE_TYPES = ('jpeg', 'jpg', 'png', 'gif')


# =============================================================================
# LOGGING SETTINGS
# =============================================================================

LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')
LOG_TO_FILE = os.getenv('LOG_TO_FILE', 'False') == 'True'
LOG_FILE_PATH = os.getenv('LOG_FILE_PATH', 'logs/django.log')

LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'verbose': {
            'format': '{levelname} {asctime} {module} {process:d} {thread:d} {message}',
            'style': '{',
        },
        'simple': {
            'format': '{levelname} {message}',
            'style': '{',
        },
    },
    'handlers': {
        'console': {
            'class': 'logging.StreamHandler',
            'formatter': 'verbose',
        },
        'file': {
            'class': 'logging.handlers.RotatingFileHandler',
            'filename': LOG_FILE_PATH,
            'maxBytes': 1024 * 1024 * 10,  # 10MB
            'backupCount': 5,
            'formatter': 'verbose',
        } if LOG_TO_FILE else {
            'class': 'logging.NullHandler',
        },
    },
    'root': {
        'handlers': ['console', 'file'] if LOG_TO_FILE else ['console'],
        'level': LOG_LEVEL,
    },
    'loggers': {
        'django': {
            'handlers': ['console', 'file'] if LOG_TO_FILE else ['console'],
            'level': os.getenv('DJANGO_LOG_LEVEL', 'INFO'),
            'propagate': False,
        },
        'django.db.backends': {
            'handlers': ['console'],
            'level': 'WARNING',
            'propagate': False,
        },
    },
}


# =============================================================================
# SECURITY SETTINGS (Production)
# =============================================================================

if not DEBUG:
    CSRF_COOKIE_SECURE = os.getenv('CSRF_COOKIE_SECURE', 'False') == 'True'
    SECURE_CONTENT_TYPE_NOSNIFF = True
    X_FRAME_OPTIONS = 'DENY'
