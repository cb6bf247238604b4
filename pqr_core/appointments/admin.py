from django.contrib import admin

from pqr_core.appointments.models import Appointment, AppointmentType


@admin.register(AppointmentType)
class AppointmentTypeAdmin(admin.ModelAdmin):
    list_display = ("code", "name", "estimated_minutes", "requires_documentation", "tenant_id", "status")
    list_filter = ("requires_documentation", "status")
    search_fields = ("code", "name")
    ordering = ("display_order", "name")


@admin.register(Appointment)
class AppointmentAdmin(admin.ModelAdmin):
    list_display = (
        "appointment_number",
        "appointment_date",
        "appointment_time",
        "branch",
        "client",
        "appointment_status",
        "status",
    )
    list_filter = ("appointment_status", "status", "appointment_date")
    search_fields = ("appointment_number", "client__full_name", "client__document_number")
    readonly_fields = ("appointment_number", "cancelled_at", "completed_at", "created_at", "updated_at")
    raw_id_fields = ("client", "branch", "appointment_type", "created_by")
