"""Test settings.

The test database lives in a file rather than in memory so that several
connections (one per thread) can share it and the booking engine's
transaction serialization can be exercised for real.
"""

from .base import *  # noqa: F401,F403

DEBUG = False

ALLOWED_HOSTS = ['*']

SECRET_KEY = 'test-secret-key'

if DATABASES['default']['ENGINE'] == 'django.db.backends.sqlite3':  # noqa: F405
    DATABASES['default']['TEST'] = {  # noqa: F405
        'NAME': str(BASE_DIR / 'test_db.sqlite3'),  # noqa: F405
    }

PASSWORD_HASHERS = ['django.contrib.auth.hashers.MD5PasswordHasher']

STORAGES = {
    'default': {
        'BACKEND': 'django.core.files.storage.FileSystemStorage',
    },
    'staticfiles': {
        'BACKEND': 'django.contrib.staticfiles.storage.StaticFilesStorage',
    },
}

LOGGING['handlers']['console']['level'] = 'WARNING'  # noqa: F405
