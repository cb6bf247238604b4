# config/settings/prod.py
from .base import *  # noqa

DEBUG = False

# never fall back to "any origin" in production; PQR_CORS_ORIGINS must be set
CORS_ALLOW_ALL_ORIGINS = False

SIMPLE_JWT["AUTH_COOKIE_SECURE"] = True  # noqa: F405
SECURE_PROXY_SSL_HEADER = ("HTTP_X_FORWARDED_PROTO", "https")
SESSION_COOKIE_SECURE = True
CSRF_COOKIE_SECURE = True
