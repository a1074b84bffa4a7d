# config/settings/prod.py
from .base import *  # noqa

DEBUG = False
CORS_ALLOW_ALL_ORIGINS = False

SECURE_PROXY_SSL_HEADER = ("HTTP_X_FORWARDED_PROTO", "https")
SESSION_COOKIE_SECURE = True
CSRF_COOKIE_SECURE = True

REST_FRAMEWORK["DEFAULT_THROTTLE_RATES"]["auth"] = os.getenv("AUTH_RATE_LIMIT", "10/15m")
