from django.contrib import admin

from pqr_core.system_settings.models import SystemSetting


@admin.register(SystemSetting)
class SystemSettingAdmin(admin.ModelAdmin):
    list_display = ("key", "value_type", "tenant_id", "status", "updated_at")
    list_filter = ("value_type", "status")
    search_fields = ("key", "description")
    ordering = ("key",)
