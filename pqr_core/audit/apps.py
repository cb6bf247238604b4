from django.apps import AppConfig


class AuditConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "pqr_core.audit"
    verbose_name = "Audit trail"
