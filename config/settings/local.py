# config/settings/local.py
from .base import *  # noqa

DEBUG = env_bool("DJANGO_DEBUG", True)

# Development
CORS_ALLOW_ALL_ORIGINS = not CORS_ALLOWED_ORIGINS

EMAIL_BACKEND = os.getenv("EMAIL_BACKEND", "django.core.mail.backends.console.EmailBackend")
