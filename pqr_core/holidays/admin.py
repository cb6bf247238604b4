from django.contrib import admin

from pqr_core.holidays.models import Holiday


@admin.register(Holiday)
class HolidayAdmin(admin.ModelAdmin):
    list_display = ("date", "name", "holiday_type", "branch", "tenant_id", "status")
    list_filter = ("holiday_type", "status")
    search_fields = ("name",)
    ordering = ("-date",)
