from django.apps import AppConfig


class AppointmentsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "pqr_core.appointments"
    verbose_name = "Appointments"
