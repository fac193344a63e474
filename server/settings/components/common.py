"""Django core settings for the upload service."""

from typing import Any, Final

from decouple import Csv

from server.settings.components import config

SECRET_KEY = config(
    'DJANGO_SECRET_KEY',
    default='django-insecure-development-only-key',
)

DEBUG = config('DJANGO_DEBUG', cast=bool, default=False)

ALLOWED_HOSTS = config(
    'DJANGO_ALLOWED_HOSTS',
    cast=Csv(),
    default='localhost,127.0.0.1,[::1]',
)

INSTALLED_APPS: Final = (
    'rest_framework',
    'server.apps.files',
)

MIDDLEWARE: Final = (
    'django.middleware.security.SecurityMiddleware',
    'django.middleware.common.CommonMiddleware',
)

ROOT_URLCONF = 'server.urls'
WSGI_APPLICATION = 'server.wsgi.application'

# Stored assets are plain files, there is no metadata database
DATABASES: Final[dict[str, Any]] = {}

# Routes are served exactly as ``/imagen`` and ``/excel``
APPEND_SLASH = False

USE_TZ = True

REST_FRAMEWORK: Final[dict[str, Any]] = {
    'DEFAULT_AUTHENTICATION_CLASSES': [],
    'DEFAULT_PERMISSION_CLASSES': [
        'rest_framework.permissions.AllowAny',
    ],
    'UNAUTHENTICATED_USER': None,
    'DEFAULT_RENDERER_CLASSES': [
        'rest_framework.renderers.JSONRenderer',
    ],
    'DEFAULT_PARSER_CLASSES': [
        'rest_framework.parsers.MultiPartParser',
    ],
    'EXCEPTION_HANDLER': (
        'server.apps.files.exception_handler.handle_exception'
    ),
}
