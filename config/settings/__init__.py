# config/settings/__init__.py
# DJANGO_ENV picks the settings module: local (default), prod or test.
import os

_env = os.getenv("DJANGO_ENV", "local").strip().lower()

if _env == "prod":
    from .prod import *  # noqa
elif _env == "test":
    from .test import *  # noqa
else:
    from .local import *  # noqa
