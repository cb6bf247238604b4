# pqr_core/notifications/apps.py
from django.apps import AppConfig


class NotificationsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "pqr_core.notifications"
    verbose_name = "Notifications"

    def ready(self):
        # registers the appointment event handlers
        from pqr_core.notifications import subscribers  # noqa: F401
