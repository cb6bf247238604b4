from django.apps import AppConfig


class IamConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "pqr_core.iam"
    verbose_name = "Access control"

    def ready(self) -> None:
        # registers the OpenAPI auth extension
        from pqr_core.iam import openapi  # noqa: F401
