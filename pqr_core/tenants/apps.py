from django.apps import AppConfig


class TenantsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "pqr_core.tenants"
    verbose_name = "Companies"
