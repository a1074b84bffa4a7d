# config/settings/test.py
from .base import *  # noqa

DEBUG = False
MIND_ENV = "test"

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": ":memory:",
        "ATOMIC_REQUESTS": False,
    }
}

CACHES = {
    "default": {
        "BACKEND": "django.core.cache.backends.dummy.DummyCache",
    }
}

EMAIL_BACKEND = "django.core.mail.backends.locmem.EmailBackend"

JWT_SECRET = "test-secret-with-enough-bytes-for-hs256-signing"
JWT_DISABLED = False
BCRYPT_SALT_ROUNDS = 4
PASSWORD_PEPPER = "test-pepper"

LOGGING["loggers"]["mind_core"]["level"] = "CRITICAL"
